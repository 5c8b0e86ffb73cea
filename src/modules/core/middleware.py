import time
import uuid
from contextvars import ContextVar
from typing import Callable

import structlog
from django.http import HttpRequest, HttpResponse

REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_LENGTH = 128

correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")

logger = structlog.get_logger(__name__)


def _incoming_request_id(request: HttpRequest) -> str:
    """Return the caller's request id, or a fresh UUID4 if absent or oversized."""
    cid = request.META.get("HTTP_X_REQUEST_ID", "").strip()
    if not cid or len(cid) > MAX_REQUEST_ID_LENGTH:
        return str(uuid.uuid4())
    return cid


class CorrelationIdMiddleware:
    """Tags every request with a correlation id.

    The id is stored in a ContextVar and bound into structlog's context
    vars, so every log line emitted while serving the request (including
    the product service's ``product.*`` events) carries it.  It is echoed
    back in the ``X-Request-ID`` response header.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        cid = _incoming_request_id(request)
        correlation_id_var.set(cid)

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(correlation_id=cid)

        log = logger.bind(method=request.method, path=request.get_full_path())
        log.info("request_started")
        start = time.monotonic()

        response = self.get_response(request)

        duration_ms = round((time.monotonic() - start) * 1000, 2)
        if response.status_code >= 500:
            log.error(
                "request_finished",
                status_code=response.status_code,
                duration_ms=duration_ms,
            )
        else:
            log.info(
                "request_finished",
                status_code=response.status_code,
                duration_ms=duration_ms,
            )

        response[REQUEST_ID_HEADER] = cid
        return response
