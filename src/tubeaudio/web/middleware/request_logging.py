"""Per-request access logging with structlog context."""

import time
import uuid
from collections.abc import Callable

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger(__name__)


class StructuredRequestLoggingMiddleware(BaseHTTPMiddleware):
    """Emits one log line per request and binds a request id for its duration.

    Anything logged while the request is handled (catalog, conversion) carries
    the same ``request_id``. Range requests also record the requested and
    served byte ranges.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = uuid.uuid4().hex[:12]
        structlog.contextvars.bind_contextvars(request_id=request_id)
        started = time.perf_counter()
        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars("request_id")

        fields: dict[str, object] = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": round((time.perf_counter() - started) * 1000, 2),
        }
        if request.client:
            fields["client_host"] = request.client.host
        if requested := request.headers.get("range"):
            fields["range"] = requested
        if served := response.headers.get("content-range"):
            fields["content_range"] = served

        logger.info("request", **fields)
        return response
