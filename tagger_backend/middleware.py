"""
Request correlation middleware.

Binds a correlation ID (taken from the incoming ``X-Correlation-ID`` header or
freshly generated) and the request method/path to the logging context for the
duration of the request, and echoes the ID on the response.
"""

from typing import Awaitable, Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from .constants import CORRELATION_ID_HEADER
from .observability import (
    clear_correlation_id,
    clear_request_context,
    set_correlation_id,
    set_request_context,
)


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Attach a correlation ID to every request and response."""

    def __init__(self, app, header_name: str = CORRELATION_ID_HEADER):
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        correlation_id = set_correlation_id(request.headers.get(self.header_name))
        set_request_context(method=request.method, path=request.url.path)
        try:
            response = await call_next(request)
        finally:
            clear_request_context()
            clear_correlation_id()

        response.headers[self.header_name] = correlation_id
        return response
