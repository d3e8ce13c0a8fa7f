"""Observability module for metrics and monitoring."""

from pinecone_connector.observability.metrics import (
    get_metrics,
    track_vectorstore_operation,
)

__all__ = [
    "get_metrics",
    "track_vectorstore_operation",
]
