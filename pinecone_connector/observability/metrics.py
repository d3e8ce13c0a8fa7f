"""Prometheus metrics for vector store operations.

Provides metrics instrumentation for:
- Pinecone request latency and counts per operation
- Records written, deleted and returned
"""

from prometheus_client import Counter, Histogram, generate_latest

VECTORSTORE_OPERATION_DURATION = Histogram(
    "vectorstore_operation_duration_seconds",
    "Vector store operation duration",
    ["operation", "status"],
    buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0],
)

VECTORSTORE_OPERATIONS_TOTAL = Counter(
    "vectorstore_operations_total",
    "Total vector store operations",
    ["operation", "status"],
)

VECTORSTORE_RECORDS_TOTAL = Counter(
    "vectorstore_records_total",
    "Records sent to or returned by the vector store",
    ["operation"],
)


def get_metrics() -> bytes:
    """Generate Prometheus metrics output."""
    return generate_latest()


def track_vectorstore_operation(
    operation: str,
    duration: float,
    records: int = 0,
    success: bool = True,
) -> None:
    """Track a vector store request.

    Args:
        operation: One of ``add``, ``query``, ``delete``.
        duration: Request duration in seconds.
        records: Records upserted, returned or deleted.
        success: Whether the request succeeded.
    """
    status = "success" if success else "error"

    VECTORSTORE_OPERATION_DURATION.labels(operation=operation, status=status).observe(
        duration
    )
    VECTORSTORE_OPERATIONS_TOTAL.labels(operation=operation, status=status).inc()

    if success and records:
        VECTORSTORE_RECORDS_TOTAL.labels(operation=operation).inc(records)
