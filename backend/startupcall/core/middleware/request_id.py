from __future__ import annotations

import time
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from startupcall.core.middleware.audit import bind_request, clear_context, get_logger

_UNLOGGED_PATHS = frozenset({"/health"})


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Bind a request id (incoming or generated), echo it back and log one line per request."""

    def __init__(self, app, header_name: str = "X-Request-ID") -> None:
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(self.header_name) or uuid.uuid4().hex
        bind_request(request_id, method=request.method, path=request.url.path)
        started = time.perf_counter()
        try:
            response = await call_next(request)
            response.headers[self.header_name] = request_id
            if request.url.path not in _UNLOGGED_PATHS:
                get_logger().info(
                    "http.request",
                    status_code=response.status_code,
                    duration_ms=round((time.perf_counter() - started) * 1000, 1),
                )
            return response
        finally:
            clear_context()
