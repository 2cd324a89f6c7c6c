"""Prometheus metrics definitions."""

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

http_request_duration = Histogram(
    "http_request_duration_seconds",
    "Duration of HTTP requests in seconds",
    labelnames=["method", "endpoint", "status_code"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

http_requests_total = Counter(
    "http_requests_total",
    "Total number of HTTP requests",
    labelnames=["method", "endpoint", "status_code"],
)

tool_calls_total = Counter(
    "tool_calls_total",
    "Total tool calls by tool and outcome",
    labelnames=["tool", "outcome"],  # outcome: success / rejected / error
)

analyses_started_total = Counter(
    "analyses_started_total",
    "Number of five whys analyses started",
)

analyses_completed_total = Counter(
    "analyses_completed_total",
    "Number of five whys analyses that reached a root cause",
)


def get_metrics() -> tuple[bytes, str]:
    return generate_latest(), CONTENT_TYPE_LATEST
