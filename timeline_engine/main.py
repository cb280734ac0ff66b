"""
Main application entry point.

Creates and configures the FastAPI application.
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST

from timeline_engine import __version__
from timeline_engine.api import timeline_router
from timeline_engine.config import get_settings
from timeline_engine.models import ErrorDetail, ErrorResponse, HealthResponse
from timeline_engine.utils import configure_logging, configure_security, get_request_id

logger = logging.getLogger(__name__)

# Prometheus metrics
REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"]
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint"]
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan handler.

    Handles startup and shutdown events.
    """
    settings = get_settings()

    logger.info(f"Starting {settings.app_name} in {settings.environment} mode")
    logger.info(
        f"Minimum bar width {settings.layout.min_bar_width_pct}%, "
        f"render width {settings.layout.render_width} columns"
    )

    yield

    logger.info("Application shutdown complete")


def create_application() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application
    """
    settings = get_settings()

    configure_logging()

    app = FastAPI(
        title=settings.app_name,
        description="Gantt layout computation for simulation project timelines",
        version=settings.api_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )

    # Configure security (CORS, headers)
    configure_security(app)

    register_exception_handlers(app)
    register_routes(app)

    if settings.metrics_enabled:
        add_metrics_middleware(app)

    return app


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers."""

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Handle validation errors."""
        errors = [
            ErrorDetail(
                field=".".join(str(loc) for loc in error["loc"]),
                message=error["msg"],
                code=error["type"],
            )
            for error in exc.errors()
        ]

        body = ErrorResponse(
            error="validation_error",
            message="Request validation failed",
            details=errors,
            request_id=get_request_id(request),
        )

        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=body.model_dump(mode="json"),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle uncaught exceptions."""
        logger.exception(f"Unhandled exception: {exc}")

        settings = get_settings()

        content = ErrorResponse(
            error="internal_error",
            message="An unexpected error occurred",
            request_id=get_request_id(request),
        ).model_dump(mode="json", exclude={"details"})

        if settings.debug:
            content["detail"] = str(exc)

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=content,
        )


def register_routes(app: FastAPI) -> None:
    """Register API routes."""

    @app.get("/health", response_model=HealthResponse, tags=["system"])
    async def health_check():
        """
        Health check endpoint.

        The engine has no dependencies, so it is healthy whenever it answers.
        """
        settings = get_settings()

        return {
            "status": "healthy",
            "version": __version__,
            "environment": settings.environment,
            "min_bar_width_pct": settings.layout.min_bar_width_pct,
        }

    @app.get("/metrics", tags=["system"])
    async def metrics():
        """
        Prometheus metrics endpoint.
        """
        return Response(
            content=generate_latest(),
            media_type=CONTENT_TYPE_LATEST,
        )

    @app.get("/", tags=["system"])
    async def root():
        """
        Root endpoint with API information.
        """
        settings = get_settings()

        return {
            "name": settings.app_name,
            "version": settings.api_version,
            "documentation": "/docs" if settings.debug else "disabled",
            "endpoints": {
                "health": "/health",
                "metrics": "/metrics",
                "timeline": {
                    "layout": "POST /timeline/layout",
                    "render": "POST /timeline/render",
                },
            },
        }

    app.include_router(timeline_router)


def route_template(request: Request) -> str:
    """Matched route path, so unknown URLs share one metrics label."""
    route = request.scope.get("route")
    return getattr(route, "path", "unmatched")


def add_metrics_middleware(app: FastAPI) -> None:
    """Add Prometheus metrics middleware."""

    @app.middleware("http")
    async def metrics_middleware(request: Request, call_next):
        start_time = time.monotonic()

        response = await call_next(request)

        duration = time.monotonic() - start_time
        endpoint = route_template(request)

        REQUEST_COUNT.labels(
            method=request.method,
            endpoint=endpoint,
            status=response.status_code,
        ).inc()

        REQUEST_LATENCY.labels(
            method=request.method,
            endpoint=endpoint,
        ).observe(duration)

        return response


# Create application instance
app = create_application()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "timeline_engine.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        workers=1 if settings.debug else settings.workers,
    )
