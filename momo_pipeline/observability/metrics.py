"""
Prometheus metrics for the SMS ingestion pipeline

Counts messages by outcome and category, batches, and store writes,
and times each batch.
"""
import os
from typing import Optional

from prometheus_client import CollectorRegistry, Counter, Histogram

# Global registry for metrics
REGISTRY = CollectorRegistry()


# =======================
# PIPELINE METRICS
# =======================

messages_processed_total = Counter(
    name="momo_messages_processed_total",
    documentation="Total number of SMS messages resolved by the pipeline",
    labelnames=["status"],  # status: processed, ignored
    registry=REGISTRY,
)

messages_by_category_total = Counter(
    name="momo_messages_by_category_total",
    documentation="Total number of records built per transaction category",
    labelnames=["category"],
    registry=REGISTRY,
)

batches_processed_total = Counter(
    name="momo_batches_processed_total",
    documentation="Total number of batches processed",
    registry=REGISTRY,
)

batch_duration_seconds = Histogram(
    name="momo_batch_duration_seconds",
    documentation="Time spent building and persisting one batch",
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0],
    registry=REGISTRY,
)

# =======================
# STORE METRICS
# =======================

store_writes_total = Counter(
    name="momo_store_writes_total",
    documentation="Total number of transaction store write attempts",
    labelnames=["status"],  # status: success, failure
    registry=REGISTRY,
)


# =======================
# HELPER FUNCTIONS
# =======================

def start_metrics_server(port: Optional[int] = None) -> None:
    """
    Start HTTP server for Prometheus metrics

    Args:
        port: Port to listen on (defaults to env var METRICS_PORT or 8000)
    """
    # Only needed when the metrics endpoint is enabled
    from prometheus_client import start_http_server

    metrics_port = port or int(os.getenv("METRICS_PORT", "8000"))
    start_http_server(metrics_port, registry=REGISTRY)


class MetricsCollector:
    """
    Single entry point the pipeline uses to record metrics.
    """

    def record_message(self, success: bool, category: str | None = None) -> None:
        """
        Record one resolved message.

        Args:
            success: Whether the message was persisted
            category: Category of the built record, if it was built
        """
        status = "processed" if success else "ignored"
        messages_processed_total.labels(status=status).inc()
        if category is not None:
            messages_by_category_total.labels(category=category).inc()

    def record_store_write(self, success: bool) -> None:
        store_writes_total.labels(status="success" if success else "failure").inc()

    def record_batch(self, duration_seconds: float) -> None:
        batches_processed_total.inc()
        batch_duration_seconds.observe(duration_seconds)
