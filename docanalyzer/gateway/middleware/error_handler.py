"""
Error Handling Middleware

Centralized error handling and response formatting.
Every error response body carries an "error" key.
"""
import traceback
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from fastapi import HTTPException, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from ...core.config import ENVIRONMENT
from ...core.logging_config import get_logger
from ...api.exceptions import DocumentProcessingError, handle_business_exception

logger = get_logger(__name__)


def _error_body(request: Request, error, status_code: int, **extra) -> dict:
    body = {
        "error": error,
        "status_code": status_code,
        "path": request.url.path,
        "request_id": getattr(request.state, "request_id", None)
    }
    body.update(extra)
    return body


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Render HTTPException raised by routes in the shared error shape."""
    logger.debug(f"HTTP exception for {request.method} {request.url.path}: {exc.status_code} - {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(request, exc.detail, exc.status_code),
        headers=getattr(exc, "headers", None)
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render request validation failures (422) in the shared error shape."""
    logger.warning(f"Validation error for {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=_error_body(
            request,
            "Validation Error",
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=jsonable_encoder(exc.errors())
        )
    )


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """
    Middleware that provides centralized error handling.

    Converts exceptions that escape the routes to standardized JSON error responses:
    - Business exceptions → Appropriate HTTP status codes
    - Unexpected exceptions → 500 with error details (in development)
    """

    async def dispatch(self, request: Request, call_next):
        try:
            response = await call_next(request)
            return response

        except DocumentProcessingError as e:
            http_exception = handle_business_exception(e)
            logger.warning(
                f"Business exception for {request.method} {request.url.path}: {http_exception.detail}"
            )
            return JSONResponse(
                status_code=http_exception.status_code,
                content=_error_body(request, http_exception.detail, http_exception.status_code)
            )

        except Exception as e:
            is_development = ENVIRONMENT != "production"

            error_detail = str(e) if is_development else "Internal server error"
            error_traceback = traceback.format_exc() if is_development else None

            logger.error(f"Unexpected error for {request.method} {request.url.path}: {e}", exc_info=True)

            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=_error_body(
                    request,
                    error_detail,
                    status.HTTP_500_INTERNAL_SERVER_ERROR,
                    traceback=error_traceback
                )
            )
