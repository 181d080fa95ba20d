"""Application metrics using the Prometheus client library.

All metrics are defined here so there is a single inventory of what the
service measures.  Other modules import a metric and increment/observe
it at the point of action.

HTTP metrics are filled in by MetricsMiddleware for every request.
Domain counters are incremented by the service layer after a successful
store write, so they count persisted changes rather than attempts.
"""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

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
# Domain metrics
# ---------------------------------------------------------------------------

ORG_UNITS_CREATED = Counter(
    "org_units_created_total",
    "Org units persisted, by position in the tree",
    ["kind"],  # "root" or "child"
)

MEMBERSHIP_OPERATIONS = Counter(
    "membership_operations_total",
    "Membership writes by outcome",
    ["operation"],  # "created", "deleted", "noop_delete"
)
