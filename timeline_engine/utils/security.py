"""
Security utilities and middleware.

Provides CORS configuration, request IDs and response timing.
"""

import logging
import time
import uuid
from typing import Callable, Optional

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from timeline_engine.config import get_settings
from timeline_engine.utils.logging import bind_request_context, log_request

logger = logging.getLogger(__name__)

SLOW_REQUEST_MS = 1000


def get_request_id(request: Request) -> Optional[str]:
    """Request id assigned by RequestIDMiddleware, falling back to the header."""
    return getattr(request.state, "request_id", None) or request.headers.get("X-Request-ID")


def configure_cors(app: FastAPI) -> None:
    """
    Configure CORS middleware for the application.

    Allows cross-origin requests from configured origins.
    """
    settings = get_settings()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.security.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=[
            "Accept",
            "Accept-Language",
            "Content-Language",
            "Content-Type",
            "Authorization",
            "X-Request-ID",
        ],
        expose_headers=["X-Request-ID", "X-Response-Time"],
        max_age=600,  # Cache preflight for 10 minutes
    )

    logger.info(
        f"CORS configured for origins: {settings.security.cors_origins_list}"
    )


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Middleware to add security headers to all responses.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable,
    ) -> Response:
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        return response


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware to add request ID to all requests.

    A client supplied X-Request-ID is kept so that the response header, log
    lines and error bodies all carry the same id.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable,
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        bind_request_context(request_id, request.method, request.url.path)

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id

        return response


class RequestTimingMiddleware(BaseHTTPMiddleware):
    """
    Middleware to track request timing.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable,
    ) -> Response:
        start_time = time.monotonic()

        response = await call_next(request)

        duration_ms = (time.monotonic() - start_time) * 1000
        response.headers["X-Response-Time"] = f"{duration_ms:.2f}ms"

        log_request(
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
        )

        if duration_ms > SLOW_REQUEST_MS:
            logger.warning(
                f"Slow request: {request.method} {request.url.path} "
                f"took {duration_ms:.2f}ms"
            )

        return response


def configure_security(app: FastAPI) -> None:
    """
    Configure all security middleware.

    Should be called during app initialization.
    """
    # Add middleware in order (last added = first executed)
    app.add_middleware(RequestTimingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)

    configure_cors(app)

    logger.info("Security middleware configured")
