"""Prometheus metrics middleware: counts and times every HTTP request.

For each request:
  1. ACTIVE_REQUESTS goes up, and comes back down when the request ends
  2. the handler runs under a monotonic timer
  3. REQUEST_COUNT is incremented by method/endpoint/status and the
     duration lands in the REQUEST_DURATION histogram

WHY A MIDDLEWARE
------------------
Registry-level signals (events published, operations rejected) are
counted inside the service layer, see app/core/metrics.py.  HTTP-level
signals are the same for every route, so they live here once instead of
being repeated in each handler, and a route added later is measured
without anyone remembering to do it.

THE ENDPOINT LABEL
--------------------
The label is the raw URL path.  Credential ids appear in paths such as
/v1/credentials/0x.../verify, so label cardinality grows with the number
of credentials looked up.  Acceptable for a single registry; a large
deployment would label by route template instead.

Scrapes of /metrics itself are not counted, otherwise the scraper would
dominate the request rate.
"""

from __future__ import annotations

import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.core.metrics import ACTIVE_REQUESTS, REQUEST_COUNT, REQUEST_DURATION


class MetricsMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path == "/metrics":
            return await call_next(request)

        ACTIVE_REQUESTS.inc()
        start = time.monotonic()
        status_code = "500"  # unhandled exceptions surface as 500

        try:
            response = await call_next(request)
            status_code = str(response.status_code)
        finally:
            duration = time.monotonic() - start
            ACTIVE_REQUESTS.dec()
            REQUEST_COUNT.labels(
                method=request.method,
                endpoint=request.url.path,
                status_code=status_code,
            ).inc()
            REQUEST_DURATION.labels(
                method=request.method,
                endpoint=request.url.path,
            ).observe(duration)

        return response
