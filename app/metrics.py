"""Prometheus metrics definitions.

Exposes metrics for:
1. HTTP API metrics (requests, latency)
2. Catalog source fetches and refresh runs
3. Venue search (latency, matches)
"""
from prometheus_client import Counter, Histogram, Gauge

# =============================================================================
# HTTP API METRICS
# =============================================================================

HTTP_REQUESTS_TOTAL = Counter(
    "http_requests_total",
    "Total number of HTTP requests",
    ["method", "endpoint", "status_code"],
)

HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "endpoint"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
)

HTTP_REQUESTS_IN_PROGRESS = Gauge(
    "http_requests_in_progress",
    "Number of HTTP requests currently being processed",
    ["method", "endpoint"],
)

# =============================================================================
# CATALOG SOURCE METRICS
# =============================================================================

CATALOG_SOURCE_FETCHES_TOTAL = Counter(
    "catalog_source_fetches_total",
    "Total number of catalog CSV fetches",
    ["status"],  # status: updated, not_modified, http_error, connection_error, parse_error
)

CATALOG_SOURCE_FETCH_DURATION_SECONDS = Histogram(
    "catalog_source_fetch_duration_seconds",
    "Catalog CSV download latency in seconds",
    buckets=(0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
)

# =============================================================================
# CATALOG REFRESH METRICS
# =============================================================================

CATALOG_REFRESH_RUNS_TOTAL = Counter(
    "catalog_refresh_runs_total",
    "Total number of catalog refresh runs",
    ["status"],  # status: replaced, unchanged, error
)

CATALOG_REFRESH_DURATION_SECONDS = Histogram(
    "catalog_refresh_duration_seconds",
    "Catalog refresh duration in seconds",
    buckets=(0.1, 0.5, 1.0, 5.0, 10.0, 30.0, 60.0),
)

CATALOG_LAST_REFRESH_TIMESTAMP = Gauge(
    "catalog_last_refresh_timestamp_seconds",
    "Unix timestamp of the last successful catalog refresh",
)

CATALOG_VENUES_TOTAL = Gauge(
    "catalog_venues_total",
    "Number of venues in the current catalog snapshot",
)

# =============================================================================
# SEARCH METRICS
# =============================================================================

VENUE_SEARCH_DURATION_SECONDS = Histogram(
    "venue_search_duration_seconds",
    "Time spent filtering the catalog for one query",
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0),
)

VENUE_SEARCH_MATCHES = Histogram(
    "venue_search_matches",
    "Number of venues returned per query",
    buckets=(0, 1, 5, 10, 25, 50, 100, 250, 1000),
)
