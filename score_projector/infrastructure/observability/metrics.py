"""Prometheus metrics for monitoring projections, persistence and webhook performance"""

from prometheus_client import Counter, Histogram

# Simulation metrics
simulation_counter = Counter(
    "score_projector_simulation_total",
    "Total score projections run",
    ["scenario"],  # pre-enrollment | progress-tracker
)

score_gain_histogram = Histogram(
    "score_projector_score_gain_points",
    "Projected score change versus starting score",
    buckets=[-50, 0, 25, 50, 75, 100, 150, 200, 300],
)

validation_failure_counter = Counter(
    "score_projector_validation_failures_total",
    "Rejected profile fields",
    ["field"],
)

# Persistence metrics
persistence_failure_counter = Counter(
    "score_projector_persistence_failures_total",
    "Simulations that could not be saved",
)

# Webhook metrics
webhook_latency_histogram = Histogram(
    "webhook_latency_seconds",
    "Results webhook response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

webhook_failure_counter = Counter(
    "webhook_failures_total",
    "Failed webhook deliveries",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_simulation(scenario: str, score_gain: int) -> None:
    """Record simulation metrics for monitoring scenario mix and projected gains"""
    simulation_counter.labels(scenario=scenario).inc()
    score_gain_histogram.observe(score_gain)
