"""Vector store module."""

from pinecone_connector.vectorstore.filters import (
    FilterCondition,
    FilterOperator,
    MetadataFilter,
    MetadataFilters,
    translate_filters,
)
from pinecone_connector.vectorstore.models import (
    DenseEmbedding,
    HybridEmbedding,
    SearchMode,
    SparseEmbedding,
    StoreConfig,
    VectorEntry,
    VectorMatch,
    VectorStoreQuery,
)
from pinecone_connector.vectorstore.service import PineconeVectorStore, VectorStore

__all__ = [
    "DenseEmbedding",
    "FilterCondition",
    "FilterOperator",
    "HybridEmbedding",
    "MetadataFilter",
    "MetadataFilters",
    "PineconeVectorStore",
    "SearchMode",
    "SparseEmbedding",
    "StoreConfig",
    "VectorEntry",
    "VectorMatch",
    "VectorStore",
    "VectorStoreQuery",
    "translate_filters",
]
