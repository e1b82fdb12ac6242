"""
Request Logging Middleware

Logs incoming requests and responses with timing information.
"""
import time
from typing import Callable, List, Optional
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from ...core.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_SKIP_PATHS = ["/health", "/docs", "/redoc", "/openapi.json"]


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware that logs HTTP requests and responses.

    Logs method, path, client address, status code and duration.
    Health checks and docs are skipped to reduce noise; progress polling is
    logged at DEBUG only.
    """

    def __init__(self, app, skip_paths: Optional[List[str]] = None, quiet_paths: Optional[List[str]] = None):
        super().__init__(app)
        self.skip_paths = skip_paths or DEFAULT_SKIP_PATHS
        self.quiet_paths = quiet_paths or ["/process/progress", "/api/process/progress"]

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path
        if any(path.startswith(skip) for skip in self.skip_paths):
            return await call_next(request)

        log = logger.debug if any(path.startswith(quiet) for quiet in self.quiet_paths) else logger.info
        request_id = getattr(request.state, "request_id", None)
        request_id_str = f" [{request_id}]" if request_id else ""
        client = request.client.host if request.client else "-"
        method = request.method

        start_time = time.perf_counter()
        log(f"→ {method} {path} from {client}{request_id_str}")

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(f"{method} {path} raised after {duration_ms:.2f}ms{request_id_str}: {e}")
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        status_code = response.status_code
        if status_code >= 500:
            logger.error(f"{method} {path} → {status_code} ({duration_ms:.2f}ms){request_id_str}")
        elif status_code >= 400:
            logger.warning(f"{method} {path} → {status_code} ({duration_ms:.2f}ms){request_id_str}")
        else:
            log(f"{method} {path} → {status_code} ({duration_ms:.2f}ms){request_id_str}")
        return response
