"""Prometheus metrics for herd bookkeeping activity and storage failures"""

from prometheus_client import Counter, Histogram

# Reproduction metrics
cycle_counter = Counter(
    "herdbook_cycles_started_total",
    "Reproductive cycles started",
    ["status"],  # suggested status of the new cycle
)

# Financial metrics
transaction_counter = Counter(
    "herdbook_transactions_total",
    "Transactions created",
    ["kind"],  # purchase | sale
)

installments_generated_counter = Counter(
    "herdbook_installments_generated_total",
    "Installments generated for new transactions",
)

installment_payment_counter = Counter(
    "herdbook_installment_payments_total",
    "Installments settled",
)

# Vaccination metrics
vaccination_counter = Counter(
    "herdbook_vaccinations_total",
    "Vaccination records created",
    ["origin"],  # registered | chained
)

# Storage health
persistence_failure_counter = Counter(
    "herdbook_persistence_failures_total",
    "Aborted multi-record writes",
    ["operation"],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_transaction(kind: str, installment_count: int) -> None:
    """Record a committed transaction and the installments it spawned"""
    transaction_counter.labels(kind=kind).inc()
    installments_generated_counter.inc(installment_count)
