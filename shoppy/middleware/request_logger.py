# ==============================================================================
# REQUEST LOGGER MIDDLEWARE
# ==============================================================================
# One log line per request with status and timing
# ==============================================================================

from __future__ import annotations

import logging
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggerMiddleware(BaseHTTPMiddleware):
    """
    Logs every request with its status and duration.

    A client-supplied ``X-Request-ID`` is reused so that frontend and
    backend logs line up; otherwise a short id is generated. Both the id
    and the duration are echoed as response headers.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable,
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]
        started = time.perf_counter()
        target = f"{request.method} {request.url.path}"

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.perf_counter() - started) * 1000
            logger.error(f"[{request_id}] {target} - Error ({duration_ms:.2f}ms): {e}")
            raise

        duration_ms = (time.perf_counter() - started) * 1000
        level = logging.INFO if response.status_code < 400 else logging.WARNING
        logger.log(level, f"[{request_id}] {target} - {response.status_code} ({duration_ms:.2f}ms)")

        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Response-Time"] = f"{duration_ms:.2f}ms"
        return response
