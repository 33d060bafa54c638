"""Prometheus metrics for monitoring quotes, coupon usage and email delivery"""

from prometheus_client import Counter, Histogram

from guarantee_quote.domain.models import DeliveryStatus

# Quote metrics
quote_counter = Counter(
    "guarantee_quote_total",
    "Total guarantee quotes computed",
    ["duration"],  # 12 | 24 | 36 | other
)

coupon_redemption_counter = Counter(
    "coupon_redemption_total",
    "Coupon redemption attempts",
    ["outcome"],  # applied | not_applicable
)

# Email metrics
email_dispatch_counter = Counter(
    "email_dispatch_total",
    "Quote email dispatch outcomes",
    ["outcome"],  # sent | skipped | validation_error | transport_error | timeout
)

email_dispatch_latency_histogram = Histogram(
    "email_dispatch_latency_seconds",
    "Time spent waiting on the mail transport",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_quote(duration_months: int, coupon_supplied: bool, coupon_applied: bool) -> None:
    """Record quote metrics, including the coupon outcome when a code was supplied"""
    label = str(duration_months) if duration_months in (12, 24, 36) else "other"
    quote_counter.labels(duration=label).inc()

    if coupon_supplied:
        outcome = "applied" if coupon_applied else "not_applicable"
        coupon_redemption_counter.labels(outcome=outcome).inc()


def record_dispatch(status: DeliveryStatus) -> None:
    email_dispatch_counter.labels(outcome=status.value).inc()
