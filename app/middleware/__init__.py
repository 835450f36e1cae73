"""
Middleware package for security and request processing
"""
from .security import SecurityHeadersMiddleware, request_logging_middleware

__all__ = [
    "SecurityHeadersMiddleware",
    "request_logging_middleware",
]
