"""Access log plus request-id propagation.

Every request gets an id: the caller's X-Request-ID when it looks sane,
otherwise a fresh "req_<12 hex>". The id lands in request.state (error
bodies echo it as requestId), in the X-Request-ID response header, and
in the access log line:

    INFO  [POST] /api/v1/bets → 200 (23ms) req_a1b2c3d4e5f6
    ERROR [POST] /api/v1/bets → 500 (5012ms) req_0f9e8d7c6b5a
"""

import logging
import re
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("wl.request")

REQUEST_ID_HEADER = "X-Request-ID"
_INBOUND_ID = re.compile(r"^[A-Za-z0-9_\-]{8,64}$")


def resolve_request_id(inbound: str | None) -> str:
    if inbound and _INBOUND_ID.match(inbound):
        return inbound
    return f"req_{uuid.uuid4().hex[:12]}"


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = request_id

        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            # The app-level handler renders the body; still write the access line
            self._log(request, 500, start, request_id)
            raise

        response.headers[REQUEST_ID_HEADER] = request_id
        self._log(request, response.status_code, start, request_id)
        return response

    @staticmethod
    def _log(request: Request, status_code: int, start: float, request_id: str) -> None:
        elapsed_ms = (time.perf_counter() - start) * 1000
        level = logging.ERROR if status_code >= 500 else logging.INFO
        logger.log(
            level,
            "[%s] %s → %d (%.0fms) %s",
            request.method,
            request.url.path,
            status_code,
            elapsed_ms,
            request_id,
        )
