"""
Prometheus metrics for checkout monitoring.

Tracks:
- Remote JSON fetches (config and catalog) by outcome
- Catalog entries skipped as invalid
- Override amount rejections
- Charge outcomes and error categories
- Stripe API call duration
"""
from prometheus_client import Counter, Histogram

# Remote source metrics
remote_fetch_total = Counter(
    "remote_fetch_total",
    "Total remote JSON fetches",
    ["resource", "status"],  # resource: config, catalog; status: ok, fetch_error, parse_error
)

remote_fetch_duration_seconds = Histogram(
    "remote_fetch_duration_seconds",
    "Remote JSON fetch duration in seconds",
    ["resource"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

remote_config_fallback_total = Counter(
    "remote_config_fallback_total",
    "Times the empty fallback config was substituted",
)

catalog_invalid_entries_total = Counter(
    "catalog_invalid_entries_total",
    "Catalog entries skipped because they failed validation",
)

# Checkout metrics
checkout_amount_rejections_total = Counter(
    "checkout_amount_rejections_total",
    "Override amounts rejected during checkout",
    ["category"],  # InvalidAmount, OutOfRange
)

# Charge metrics
charge_requests_total = Counter(
    "charge_requests_total",
    "Total charge submissions",
    ["status", "category"],  # status: succeeded, failed, rejected
)

charge_amount_cents = Histogram(
    "charge_amount_cents",
    "Submitted charge amounts in cents",
    buckets=(50, 100, 500, 1000, 5000, 10000, 50000, 100000, 500000, 1000000),
)

stripe_api_duration_seconds = Histogram(
    "stripe_api_duration_seconds",
    "Stripe API call duration in seconds",
    ["operation"],
    buckets=(0.1, 0.25, 0.5, 0.75, 1.0, 2.5, 5.0, 7.5, 10.0),
)


class MetricsCollector:
    """Helper class for collecting metrics."""

    @staticmethod
    def record_remote_fetch(resource: str, status: str, duration_seconds: float) -> None:
        """Record a remote JSON fetch."""
        remote_fetch_total.labels(resource=resource, status=status).inc()
        remote_fetch_duration_seconds.labels(resource=resource).observe(duration_seconds)

    @staticmethod
    def record_config_fallback() -> None:
        """Record substitution of the fallback config."""
        remote_config_fallback_total.inc()

    @staticmethod
    def record_invalid_catalog_entry() -> None:
        """Record a skipped catalog entry."""
        catalog_invalid_entries_total.inc()

    @staticmethod
    def record_amount_rejection(category: str) -> None:
        """Record a rejected override amount."""
        checkout_amount_rejections_total.labels(category=category).inc()

    @staticmethod
    def record_charge(status: str, category: str = "none", amount_cents: int = 0) -> None:
        """Record a charge outcome."""
        charge_requests_total.labels(status=status, category=category).inc()
        if amount_cents > 0:
            charge_amount_cents.observe(amount_cents)

    @staticmethod
    def record_stripe_api_call(operation: str, duration_seconds: float) -> None:
        """Record Stripe API call duration."""
        stripe_api_duration_seconds.labels(operation=operation).observe(duration_seconds)


# Export singleton instance
metrics = MetricsCollector()
