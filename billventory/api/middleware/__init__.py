"""API middleware."""

from billventory.api.middleware.error_handler import ErrorHandlerMiddleware
from billventory.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]
