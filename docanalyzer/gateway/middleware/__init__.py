"""
Gateway Middleware Module

Custom middleware for request/response handling, logging, and error handling.
"""
from .request_logging import RequestLoggingMiddleware
from .error_handler import (
    ErrorHandlingMiddleware,
    http_exception_handler,
    validation_exception_handler
)
from .request_id import RequestIDMiddleware

__all__ = [
    "RequestLoggingMiddleware",
    "ErrorHandlingMiddleware",
    "RequestIDMiddleware",
    "http_exception_handler",
    "validation_exception_handler"
]
