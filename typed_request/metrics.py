"""
Prometheus Metrics

Counters and histograms for request delivery. The host application is
responsible for exposing the prometheus_client registry.
"""

import logging

from prometheus_client import Counter, Histogram

logger = logging.getLogger("typed_request.metrics")

DELIVERY_COUNT = Counter(
    "typed_request_deliveries_total",
    "Total number of terminal outcomes delivered to listeners",
    ["method", "outcome", "code"],
)

PARSE_LATENCY = Histogram(
    "typed_request_parse_seconds",
    "Time spent decoding response bodies",
    ["method"],
)


def metrics_delivery(method: str, outcome: str, code: int) -> None:
    """
    Record one delivered outcome.

    Args:
        method: HTTP method
        outcome: "success" or "error"
        code: HTTP status code, 0 when no response was received
    """
    try:
        DELIVERY_COUNT.labels(method=method, outcome=outcome, code=str(code)).inc()
    except Exception as e:
        logger.debug("Failed to record metrics: %s", e)


def metrics_parse(method: str, latency: float) -> None:
    """Record time spent in response parsing"""
    try:
        PARSE_LATENCY.labels(method=method).observe(latency)
    except Exception as e:
        logger.debug("Failed to record metrics: %s", e)
