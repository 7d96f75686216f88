"""
Prometheus Metrics for the bank service.

This module defines all metrics exposed at the /metrics endpoint.
Metrics are categorized into:

1. Ledger Metrics - deposits, withdrawals, rejections, last balance
2. HTTP Metrics - request counts and latencies
"""
from prometheus_client import Counter, Gauge, Histogram, Info

from bank_service import __version__

# =============================================================================
# SERVICE INFO
# =============================================================================

SERVICE_INFO = Info(
    "bank_service",
    "Service information"
)
SERVICE_INFO.info({
    "version": __version__,
    "service": "bank-service",
})

# =============================================================================
# LEDGER METRICS
# =============================================================================

# Counter: Accepted transactions by kind
TRANSACTIONS_TOTAL = Counter(
    "bank_transactions_total",
    "Total transactions recorded",
    ["kind"]  # deposit, withdrawal
)

# Histogram: Accepted amounts
TRANSACTION_AMOUNT = Histogram(
    "bank_transaction_amount",
    "Distribution of accepted transaction amounts",
    ["kind"],
    buckets=[1, 10, 50, 100, 500, 1000, 5000, 10000, 100000]
)

# Counter: Rejected deposit/withdrawal requests
REJECTIONS_TOTAL = Counter(
    "bank_rejections_total",
    "Deposit and withdrawal requests rejected",
    ["kind", "reason"]  # reason: invalid_amount, insufficient_funds
)

# Gauge: Most recently computed balance
BALANCE = Gauge(
    "bank_balance",
    "Balance as of the last calculation"
)

# Counter: Bulk clears
TRANSACTIONS_CLEARED = Counter(
    "bank_transactions_cleared_total",
    "Transactions removed by bulk clear"
)

# =============================================================================
# HTTP METRICS (Standard)
# =============================================================================

HTTP_REQUESTS = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"]
)

HTTP_REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint"],
    buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0]
)

# =============================================================================
# HELPER FUNCTIONS
# =============================================================================


def record_transaction(kind: str, amount: float) -> None:
    """Record an accepted deposit or withdrawal."""
    TRANSACTIONS_TOTAL.labels(kind=kind).inc()
    TRANSACTION_AMOUNT.labels(kind=kind).observe(amount)


def record_rejection(kind: str, reason: str) -> None:
    """Record a rejected deposit or withdrawal."""
    REJECTIONS_TOTAL.labels(kind=kind, reason=reason).inc()


def record_balance(balance: float) -> None:
    BALANCE.set(balance)


def record_clear(removed: int) -> None:
    TRANSACTIONS_CLEARED.inc(removed)


def record_http_request(method: str, endpoint: str, status: int, latency_seconds: float) -> None:
    """Record a completed HTTP request."""
    HTTP_REQUESTS.labels(method=method, endpoint=endpoint, status=status).inc()
    HTTP_REQUEST_LATENCY.labels(method=method, endpoint=endpoint).observe(latency_seconds)
