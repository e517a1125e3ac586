"""
Access log for the API.

Each request gets a short id, taken from ``x-request-id`` when the caller
sends one, which is bound to structlog contextvars together with the wallet
and chain being looked up. Provider and service logs emitted while the request
runs therefore carry the same keys. The id is echoed back in the response.
"""

import time
import uuid
from typing import Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = structlog.stdlib.get_logger("http")

REQUEST_ID_HEADER = "x-request-id"
QUIET_PATHS = frozenset({"/healthz"})


def _level_for(status_code: int, path: str) -> Callable[..., None]:
    if status_code >= 500:
        return logger.error
    if status_code >= 400:
        return logger.warning
    if path in QUIET_PATHS:
        return logger.debug
    return logger.info


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """One ``http_request`` line per request, with lookup context bound."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]

        structlog.contextvars.clear_contextvars()
        lookup = {
            key: request.query_params[param]
            for key, param in (("wallet", "address"), ("chain", "chainid"))
            if request.query_params.get(param)
        }
        structlog.contextvars.bind_contextvars(request_id=request_id, **lookup)

        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            _level_for(status_code, request.url.path)(
                "http_request",
                method=request.method,
                path=request.url.path,
                status=status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 1),
                client=request.client.host if request.client else None,
            )
