# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Prometheus metrics — single source of truth for all metric objects.
Imported by services and middleware. Never instantiated in controllers.
"""

from prometheus_client import Counter, Gauge, Histogram

# ── HTTP Metrics (used by middleware) ──
REQUEST_COUNT = Counter(
    "membership_requests_total",
    "Total HTTP requests to the membership service",
    ["method", "endpoint", "status"],
)
REQUEST_LATENCY = Histogram(
    "membership_request_duration_seconds",
    "Request latency in seconds",
    ["method", "endpoint"],
)
HTTP_ERRORS = Counter(
    "membership_http_errors_total",
    "Total HTTP error responses",
    ["method", "endpoint", "status"],
)

# ── Business Metrics (updated by service layer only) ──
MEMBERS_CREATED = Counter(
    "membership_members_created_total",
    "Total members created",
    ["package"],
)
MEMBERS_DELETED = Counter(
    "membership_members_deleted_total",
    "Total members deleted",
)
RENEWALS_TOTAL = Counter(
    "membership_renewals_total",
    "Total membership renewals",
    ["package"],
)
RENEWAL_REVENUE = Counter(
    "membership_renewal_revenue_total",
    "Sum of payment amounts recorded by renewals",
)
DUPLICATE_REJECTIONS = Counter(
    "membership_duplicate_rejections_total",
    "Writes rejected because email or phone was already in use",
)
MEMBERS_TOTAL = Gauge(
    "membership_members",
    "Number of stored member records",
)
