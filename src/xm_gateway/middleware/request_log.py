"""Request logging middleware.

One line per request: method, path, acting caller, status and latency, tagged
with a short request ID that handlers echo back in ApiResponse. Requests the
engine rejected (4xx/5xx) are logged at WARNING so refused escrow operations
stand out from routine reads.

    INFO    [POST] /api/v1/trades/match-buy/1 caller=bob → 201 (2ms) req_a1b2c3d4e5f6
    WARNING [POST] /api/v1/trades/1/complete caller=bob → 403 (1ms) req_0f9e8d7c6b5a
"""

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from src.xm_gateway.dependencies import CALLER_HEADER

logger = logging.getLogger("xm.request")


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request.state.request_id = f"req_{uuid.uuid4().hex[:12]}"
        caller = request.headers.get(CALLER_HEADER) or "-"

        start = time.perf_counter()
        response: Response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000

        level = logging.WARNING if response.status_code >= 400 else logging.INFO
        logger.log(
            level,
            "[%s] %s caller=%s → %d (%.0fms) %s",
            request.method,
            request.url.path,
            caller,
            response.status_code,
            elapsed_ms,
            request.state.request_id,
        )
        return response
