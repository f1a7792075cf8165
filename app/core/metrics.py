"""Application metrics using the Prometheus client library.

All metrics are defined here so there is a single inventory of what the
service measures.  Other modules import a metric and increment or observe
it at the point of action.

Counters only go up.  Prometheus scrapes GET /metrics and derives rates
with rate(); the histogram buckets feed histogram_quantile() for p95/p99.
"""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

from app.models.events import RegistryEvent

# ---------------------------------------------------------------------------
# HTTP metrics (populated by the MetricsMiddleware)
# ---------------------------------------------------------------------------

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests by method, endpoint, and status code",
    ["method", "endpoint", "status_code"],
)

REQUEST_DURATION = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

ACTIVE_REQUESTS = Gauge(
    "http_active_requests",
    "Number of HTTP requests currently being processed",
)

# ---------------------------------------------------------------------------
# Registry metrics
# ---------------------------------------------------------------------------

REGISTRY_EVENTS = Counter(
    "registry_events_total",
    "Registry notifications published, by event name",
    ["event"],  # CredentialIssued|CredentialRevoked|InstitutionAuthorized|...
)

REGISTRY_REJECTIONS = Counter(
    "registry_rejections_total",
    "Registry operations that failed, by operation and error kind",
    ["operation", "reason"],  # reason = PermissionDenied|InvalidArgument|...
)


def count_event(event: RegistryEvent) -> None:
    """EventBus subscriber: one increment per published event."""
    REGISTRY_EVENTS.labels(event=event.name).inc()
