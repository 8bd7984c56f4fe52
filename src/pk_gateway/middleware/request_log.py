"""Access log and request correlation for the marketplace API.

Each request gets an id on request.state.request_id, which routers copy into
the ApiResponse envelope and which is echoed back in the X-Request-ID header.
A caller-supplied X-Request-ID is kept when it is a short token of letters,
digits, "_" or "-"; anything else is replaced so log lines stay parseable.

Server errors are logged at WARNING, everything else at INFO:
    INFO [POST] /api/v1/listings/00000000000000000001/buy → 200 (23ms) req_a1b2c3d4e5f6
"""

import logging
import re
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("pk.request")

REQUEST_ID_HEADER = "X-Request-ID"
_CLIENT_ID_RE = re.compile(r"[A-Za-z0-9_-]{1,64}")


def resolve_request_id(supplied: str | None) -> str:
    if supplied and _CLIENT_ID_RE.fullmatch(supplied):
        return supplied
    return f"req_{uuid.uuid4().hex[:12]}"


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = request_id

        start = time.perf_counter()
        response: Response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000

        response.headers[REQUEST_ID_HEADER] = request_id
        logger.log(
            logging.WARNING if response.status_code >= 500 else logging.INFO,
            "[%s] %s → %d (%.0fms) %s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            request_id,
        )
        return response
