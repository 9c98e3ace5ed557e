"""Prometheus metrics for monitoring recommendations, confidence and companion reactions"""

from prometheus_client import Counter, Histogram, Gauge

# Decision metrics
decision_counter = Counter(
    "smartspend_decision_total",
    "Total purchase decisions made",
    ["recommendation"],  # yes | think_again | no
)

decision_confidence_histogram = Histogram(
    "smartspend_decision_confidence",
    "Confidence of purchase recommendations",
    buckets=[0.1, 0.2, 0.4, 0.6, 0.8, 1.0],
)

# Companion metrics
reaction_counter = Counter(
    "smartspend_reaction_total",
    "Companion reactions emitted",
    ["kind"],  # coaching | praise | warning | celebration
)

queue_depth_gauge = Gauge(
    "smartspend_reaction_queue_depth",
    "Companion events waiting to be narrated",
    ["queue"],  # one series per ReactionQueue
)

reactions_dropped_counter = Counter(
    "smartspend_reactions_dropped_total",
    "Companion events dropped because the queue was full",
)

# Budget store metrics
budget_fetch_failures_counter = Counter(
    "budget_fetch_failures_total",
    "Failed budget store calls",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_decision(recommendation: str, confidence: float) -> None:
    """Record decision metrics for monitoring recommendation mix and certainty"""
    decision_counter.labels(recommendation=recommendation).inc()
    decision_confidence_histogram.observe(confidence)


def record_reaction(kind: str) -> None:
    reaction_counter.labels(kind=kind).inc()
