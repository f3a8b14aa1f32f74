"""Prometheus metrics for recharge outcomes, bill payment lifecycle and request latency"""

from prometheus_client import Counter, Histogram

# Recharge metrics
recharge_counter = Counter(
    "recharge_transactions_total",
    "Mobile recharges processed",
    ["operator", "outcome"],  # completed | INSUFFICIENT_BALANCE | NETWORK_ERROR | ...
)

recharge_delay_histogram = Histogram(
    "recharge_simulated_delay_seconds",
    "Simulated operator processing delay",
    buckets=[0.5, 1.0, 1.5, 2.0, 2.5],
)

# Bill payment metrics
billpay_submitted_counter = Counter(
    "billpay_submitted_total",
    "Bill payments accepted in pending state",
    ["provider"],
)

billpay_resolved_counter = Counter(
    "billpay_resolved_total",
    "Bill payments resolved to a terminal state",
    ["provider", "status"],  # completed | failed
)

# Validation
validation_rejection_counter = Counter(
    "validation_rejections_total",
    "Requests rejected by validation",
    ["error_code"],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_recharge(operator_code: str, outcome: str, delay_seconds: float) -> None:
    """Record a recharge outcome along with the simulated delay it incurred"""
    recharge_counter.labels(operator=operator_code, outcome=outcome).inc()
    recharge_delay_histogram.observe(delay_seconds)
