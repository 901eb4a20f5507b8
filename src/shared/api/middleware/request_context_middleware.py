"""
Request Context Middleware
Adds a request id and binds caller identity into the logging context
"""
from __future__ import annotations

import time
from uuid import uuid4

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from shared.infrastructure.observability.logger import bind_context, clear_context, get_logger

logger = get_logger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Middleware to add correlation id and caller context to all requests.

    Generates or extracts the X-Request-ID header, stores it on
    ``request.state.request_id`` (echoed in error bodies) and binds it with
    the gateway-supplied X-User-Id / X-User-Role headers to the structlog
    context. Also measures request duration.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid4())
        request.state.request_id = request_id

        bind_context(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            user_id=request.headers.get("X-User-Id"),
            role=request.headers.get("X-User-Role"),
        )

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = int((time.perf_counter() - start_time) * 1000)
            logger.error("request_failed", error=str(e), duration_ms=duration_ms, exc_info=True)
            raise
        else:
            duration_ms = int((time.perf_counter() - start_time) * 1000)
            response.headers["X-Request-ID"] = request_id
            response.headers["X-Response-Time"] = f"{duration_ms}ms"
            logger.info("request_completed", status_code=response.status_code, duration_ms=duration_ms)
            return response
        finally:
            clear_context()
