"""
Utilities package.

Contains logging and security utilities.
"""

from timeline_engine.utils.logging import (
    configure_logging,
    bind_request_context,
    log_request,
)
from timeline_engine.utils.security import (
    configure_cors,
    configure_security,
    get_request_id,
    SecurityHeadersMiddleware,
    RequestIDMiddleware,
    RequestTimingMiddleware,
)

__all__ = [
    # Logging
    "configure_logging",
    "bind_request_context",
    "log_request",
    # Security
    "configure_cors",
    "configure_security",
    "get_request_id",
    "SecurityHeadersMiddleware",
    "RequestIDMiddleware",
    "RequestTimingMiddleware",
]
