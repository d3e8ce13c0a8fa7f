"""Vector store data models."""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from pinecone_connector.config import DEFAULT_TOP_K, SearchMode
from pinecone_connector.vectorstore.filters import MetadataFilters


class DenseEmbedding(BaseModel):
    """Dense embedding for ``SearchMode.DENSE`` stores."""

    kind: Literal["dense"] = "dense"
    values: list[float] = Field(description="Dense vector")


class SparseEmbedding(BaseModel):
    """Sparse embedding for ``SearchMode.SPARSE`` stores.

    Attributes:
        indices: Positions of the nonzero values.
        values: Nonzero values, aligned with ``indices``.
    """

    kind: Literal["sparse"] = "sparse"
    indices: list[int] = Field(default_factory=list, description="Nonzero positions")
    values: list[float] = Field(default_factory=list, description="Nonzero values")

    def model_post_init(self, __context: object) -> None:
        """Validate indices and values are aligned."""
        if len(self.indices) != len(self.values):
            raise ValueError(
                f"indices ({len(self.indices)}) and values ({len(self.values)}) "
                "must have the same length"
            )

    def to_pinecone(self) -> dict[str, Any]:
        """Return the ``sparse_values`` wire form."""
        return {"indices": list(self.indices), "values": list(self.values)}


class HybridEmbedding(BaseModel):
    """Paired dense and sparse embedding for ``SearchMode.HYBRID`` stores."""

    kind: Literal["hybrid"] = "hybrid"
    dense: list[float] = Field(default_factory=list, description="Dense component")
    sparse: SparseEmbedding = Field(
        default_factory=SparseEmbedding,
        description="Sparse component",
    )


Embedding = Annotated[
    Union[DenseEmbedding, SparseEmbedding, HybridEmbedding],
    Field(discriminator="kind"),
]


class VectorEntry(BaseModel):
    """A record to write to the index.

    Attributes:
        id: Record identifier; assigned by the store when omitted.
        embedding: Embedding matching the store's search mode.
        content: Text stored under the ``content`` metadata key.
        metadata: Additional metadata.
    """

    id: str | None = Field(default=None, description="Record identifier")
    embedding: Embedding
    content: str = Field(default="", description="Record text")
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Metadata payload",
    )


class VectorMatch(BaseModel):
    """A query result.

    Attributes:
        id: Record identifier.
        embedding: Dense values returned by the index, empty if omitted.
        content: Stored text, or a sentinel describing why it is missing.
        metadata: Remaining metadata.
        similarity_score: Score reported by the index.
    """

    id: str = Field(description="Record identifier")
    embedding: list[float] = Field(default_factory=list, description="Dense values")
    content: str = Field(description="Record text")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Metadata")
    similarity_score: float = Field(default=0.0, description="Similarity score")


class VectorStoreQuery(BaseModel):
    """A similarity search request.

    Attributes:
        embedding: Query embedding; required by Pinecone.
        top_k: Maximum matches; the store's default applies when unset or <= 0.
        filters: Metadata filter; the store's filters apply when unset.
    """

    embedding: Embedding | None = None
    top_k: int | None = Field(default=None, description="Maximum matches")
    filters: MetadataFilters | None = Field(default=None, description="Metadata filter")


class StoreConfig(BaseModel):
    """Per-store settings, fixed for the lifetime of the store."""

    model_config = ConfigDict(frozen=True)

    namespace: str | None = Field(default=None, description="Target namespace")
    filters: MetadataFilters = Field(
        default_factory=MetadataFilters,
        description="Default query filter",
    )
    top_k: int | None = Field(default=None, description="Default maximum matches")

    @property
    def effective_top_k(self) -> int:
        """Configured top_k, or DEFAULT_TOP_K when unset."""
        return self.top_k if self.top_k and self.top_k > 0 else DEFAULT_TOP_K


__all__ = [
    "DEFAULT_TOP_K",
    "DenseEmbedding",
    "Embedding",
    "HybridEmbedding",
    "SearchMode",
    "SparseEmbedding",
    "StoreConfig",
    "VectorEntry",
    "VectorMatch",
    "VectorStoreQuery",
]
