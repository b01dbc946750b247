# src/libs/lot-common/lot_common/monitoring.py
from prometheus_client import Counter, Histogram

# --------------------------------------------------------------------------------------
# DB metrics (used by lot_common.utils.async_timed)
# --------------------------------------------------------------------------------------
DB_OPERATION_LATENCY_SECONDS = Histogram(
    "db_operation_latency_seconds",
    "Latency of database operations in seconds",
    labelnames=("repository", "method"),
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10),
)

# --------------------------------------------------------------------------------------
# HTTP metrics
# --------------------------------------------------------------------------------------
HTTP_REQUESTS_TOTAL = Counter(
    "http_requests_total",
    "HTTP requests total",
    labelnames=("service", "method", "path", "status"),
)

HTTP_REQUEST_LATENCY_SECONDS = Histogram(
    "http_request_latency_seconds",
    "HTTP request latency in seconds",
    labelnames=("service", "method", "path"),
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10),
)

# --------------------------------------------------------------------------------------
# Autocomplete metrics
# --------------------------------------------------------------------------------------
AUTOCOMPLETE_REQUESTS_TOTAL = Counter(
    "autocomplete_requests_total",
    "Autocomplete requests by entity type and outcome (short_circuit, ok, error).",
    labelnames=("entity", "outcome"),
)

AUTOCOMPLETE_RESULTS_RETURNED = Histogram(
    "autocomplete_results_returned",
    "Number of suggestions returned per successful autocomplete request.",
    labelnames=("entity",),
    buckets=(0, 1, 2, 5, 10),
)


def observe_autocomplete(entity: str, outcome: str, result_count: int = 0) -> None:
    AUTOCOMPLETE_REQUESTS_TOTAL.labels(entity, outcome).inc()
    if outcome == "ok":
        AUTOCOMPLETE_RESULTS_RETURNED.labels(entity).observe(result_count)
