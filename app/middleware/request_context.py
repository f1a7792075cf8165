"""Request context middleware: one ID per request, one summary line each.

WHY A REQUEST ID
------------------
An issue request can log several lines (the issuer check, the insert, the
CredentialIssued event).  When two issuers call at the same time those
lines interleave, and without a shared tag nobody can tell which WARNING
belongs to which request:

  [req-1] INFO     Issued credential_id=0x3f...
  [req-2] WARNING  Access denied: user=mallory action=issue   <- req-2

The ID comes from the client's X-Request-ID header when present (so a
gateway's ID follows the request through) and is generated otherwise.
It is echoed back in the response header either way.

WHY A ContextVar
------------------
Async handlers share one thread, so a thread-local would hand one
request's ID to another.  A ContextVar is copied per task: each request
sees its own value, and _RequestContextFilter can stamp it onto every
LogRecord without any function passing it along explicitly.

THE SUMMARY LINE
------------------
After the response is produced we log method, path, status and elapsed
milliseconds as a single record.  Those same fields are what the JSON
formatter lifts to top-level keys.
"""

from __future__ import annotations

import logging
import time
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)

request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


class _RequestContextFilter(logging.Filter):
    """Attach the current request_id to every LogRecord."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get("-")  # type: ignore[attr-defined]
        return True


# Installed on the root logger once, even across module reloads.
root_logger = logging.getLogger()
if not any(isinstance(f, _RequestContextFilter) for f in root_logger.filters):
    root_logger.addFilter(_RequestContextFilter())


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        req_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request_id_var.set(req_id)

        start = time.monotonic()
        response = await call_next(request)
        duration_ms = round((time.monotonic() - start) * 1000, 1)

        logger.info(
            "%s %s → %d (%.1fms)",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            extra={
                "request_id": req_id,
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )

        response.headers["X-Request-ID"] = req_id
        return response
