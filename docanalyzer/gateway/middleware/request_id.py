"""
Request ID Middleware

Tags each request with an id for tracing log lines back to a call.
"""
import re
import uuid
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from ...core.logging_config import request_id_var

REQUEST_ID_HEADER = "X-Request-ID"

# Upstream ids are echoed back only when they look sane
_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{1,128}$")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware that adds a request ID to each request.

    The id is taken from an incoming X-Request-ID header when valid, otherwise
    a new uuid4 is generated. It is stored in request.state.request_id, made
    available to log records while the request runs, and returned in the
    X-Request-ID response header.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER, "")
        if not _VALID_REQUEST_ID.match(request_id):
            request_id = str(uuid.uuid4())

        request.state.request_id = request_id
        token = request_id_var.set(request_id)
        try:
            response: Response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
