# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Prometheus metrics: single source of truth for all metric objects.
Imported by services and middleware. Never instantiated in controllers.
"""

from prometheus_client import Counter, Gauge, Histogram

# ── HTTP Metrics (used by middleware) ──
REQUEST_COUNT = Counter(
    "contacts_requests_total",
    "Total HTTP requests to the contacts app",
    ["method", "endpoint", "status"],
)
REQUEST_LATENCY = Histogram(
    "contacts_request_duration_seconds",
    "Request latency in seconds",
    ["method", "endpoint"],
)
HTTP_ERRORS = Counter(
    "contacts_http_errors_total",
    "Total HTTP error responses",
    ["method", "endpoint", "status"],
)

# ── Business Metrics (updated by service layer only) ──
CONTACTS_CREATED = Counter(
    "contacts_created_total",
    "Total contacts created",
)
CONTACTS_UPDATED = Counter(
    "contacts_updated_total",
    "Total contacts updated",
)
CONTACTS_DELETED = Counter(
    "contacts_deleted_total",
    "Total contacts deleted",
)
CONTACT_VALIDATION_FAILURES = Counter(
    "contacts_validation_failures_total",
    "Total contact saves rejected by validation",
    ["field"],
)
CONTACTS_STORED = Gauge(
    "contacts_stored",
    "Number of contacts currently stored",
)
ARCHIVE_RUNS = Counter(
    "contacts_archive_runs_total",
    "Archive runs by outcome",
    ["outcome"],
)
ARCHIVE_PROGRESS = Gauge(
    "contacts_archive_progress_ratio",
    "Progress of the current archive run (0-1)",
)
