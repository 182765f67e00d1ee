"""Middleware components for request processing.

This module provides middleware for cross-cutting concerns: request
correlation IDs, CORS headers, API token authentication and JSON error
bodies.
"""

from .auth import create_auth_middleware
from .correlation_id import correlation_id_middleware, get_request_id
from .cors import create_cors_middleware
from .errors import error_middleware

__all__ = [
    "correlation_id_middleware",
    "create_auth_middleware",
    "create_cors_middleware",
    "error_middleware",
    "get_request_id",
]
