"""
API routes package.

Re-exports all API routers for convenience.
"""

from timeline_engine.api.routes import router as timeline_router

__all__ = ["timeline_router"]
