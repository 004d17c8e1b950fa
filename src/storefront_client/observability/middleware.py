"""
storefront_client.observability.middleware

Request-scoped logging for the dev backend.

Responsibilities:
- Reuse the client's `x-request-id` (or mint one) and echo it on the response.
- Bind request metadata into structlog contextvars for the handler's log lines.
- Emit one access line per request with status and latency.
"""

from __future__ import annotations

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from storefront_client.observability.logging import get_logger

log = get_logger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
        started = time.perf_counter()
        with structlog.contextvars.bound_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        ):
            response: Response = await call_next(request)
            log.info(
                "devserver.request",
                status=response.status_code,
                authenticated="authorization" in request.headers,
                elapsed_ms=round((time.perf_counter() - started) * 1000, 2),
            )

        response.headers["x-request-id"] = request_id
        return response


# --- Module Notes -----------------------------------------------------------
# Client and backend log lines for one call share the same request id.
