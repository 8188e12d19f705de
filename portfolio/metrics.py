"""Prometheus metric definitions and helpers for the portfolio site."""

from __future__ import annotations

from typing import Dict

from prometheus_client import Counter, Histogram, Info

HTTP_REQUESTS_TOTAL = Counter(
    "http_requests_total",
    "Total HTTP requests processed by the FastAPI application, partitioned by path.",
    ["path"],
)

FEED_RENDERS_TOTAL = Counter(
    "feed_renders_total",
    "Total number of rendered feed listings partitioned by page.",
    ["page"],
)

FEED_DOCUMENTS_SKIPPED_TOTAL = Counter(
    "feed_documents_skipped_total",
    "Total number of malformed documents left out of a feed, partitioned by missing field.",
    ["field"],
)

FEED_PROJECTION_SECONDS = Histogram(
    "feed_projection_seconds",
    "Histogram of feed projection time in seconds.",
)

APP_INFO = Info("app_info", "Application build and runtime information.")


def record_http_request(path: str) -> None:
    """Record a handled HTTP request for the provided path."""

    HTTP_REQUESTS_TOTAL.labels(path=path).inc()


def record_feed_render(page: str) -> None:
    FEED_RENDERS_TOTAL.labels(page=page).inc()


def record_skipped_document(field: str) -> None:
    """Increment counters for documents dropped from a feed as malformed."""

    FEED_DOCUMENTS_SKIPPED_TOTAL.labels(field=field).inc()


def record_feed_projection(duration_seconds: float) -> None:
    FEED_PROJECTION_SECONDS.observe(duration_seconds)


def publish_app_info(info: Dict[str, str]) -> None:
    """Expose build metadata through the ``app_info`` metric."""

    APP_INFO.info(info)
