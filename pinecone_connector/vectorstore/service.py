"""Vector store interface and Pinecone implementation."""

import asyncio
import time
from abc import ABC, abstractmethod
from collections.abc import Collection, Sequence
from typing import Any

from pinecone import Pinecone

from pinecone_connector.config import PineconeSettings, SearchMode, get_settings
from pinecone_connector.exceptions import (
    AddFailedError,
    ConfigurationError,
    DeleteFailedError,
    MissingEmbeddingError,
    QueryFailedError,
    StoreInitializationError,
)
from pinecone_connector.logging_config import get_logger
from pinecone_connector.observability.metrics import track_vectorstore_operation
from pinecone_connector.vectorstore.codec import (
    DEFAULT_TIMESTAMP_FIELDS,
    IdFactory,
    check_embedding,
    decode_match,
    default_id_factory,
    encode_entry,
    get_field,
)
from pinecone_connector.vectorstore.filters import MetadataFilters, translate_filters
from pinecone_connector.vectorstore.models import (
    DenseEmbedding,
    Embedding,
    SparseEmbedding,
    StoreConfig,
    VectorEntry,
    VectorMatch,
    VectorStoreQuery,
)

logger = get_logger(__name__)


class VectorStore(ABC):
    """Abstract base class for vector stores.

    Defines the interface for writing, searching and deleting vectors.
    """

    @abstractmethod
    async def add(self, entries: Sequence[VectorEntry]) -> None:
        """Insert or update entries.

        Args:
            entries: Entries to write. Missing ids are assigned in place.

        Raises:
            EmbeddingError: If an entry's embedding does not fit the store.
            AddFailedError: If the write fails.
        """
        ...

    @abstractmethod
    async def query(self, query: VectorStoreQuery) -> list[VectorMatch]:
        """Search for similar vectors.

        Args:
            query: Embedding, top_k and filters.

        Returns:
            Matches in the order returned by the backend.

        Raises:
            EmbeddingError: If the embedding is missing or does not fit the store.
            FilterError: If the filter cannot be translated.
            QueryFailedError: If the search fails.
        """
        ...

    @abstractmethod
    async def delete(self, ids: str | Sequence[str]) -> None:
        """Delete records by ID.

        Args:
            ids: One record ID or several.

        Raises:
            DeleteFailedError: If deletion fails.
        """
        ...


class PineconeVectorStore(VectorStore):
    """Pinecone vector store implementation.

    Configuration is fixed at construction. SDK calls are blocking and run
    on a worker thread; the store holds no locks and keeps no mutable state,
    so concurrent calls are as safe as the SDK's index handle.
    """

    def __init__(
        self,
        service_url: str,
        api_key: str | None,
        search_mode: SearchMode = SearchMode.DENSE,
        config: StoreConfig | None = None,
        transport_config: dict[str, Any] | None = None,
        index: Any | None = None,
        id_factory: IdFactory | None = None,
        timestamp_fields: Collection[str] | None = None,
    ) -> None:
        """Initialize Pinecone vector store.

        Args:
            service_url: Index host URL.
            api_key: Pinecone API key.
            search_mode: Embedding shape accepted by add and query.
            config: Namespace, default filters and default top_k.
            transport_config: Extra keyword arguments for ``pinecone.Pinecone``.
            index: Existing index handle (for testing).
            id_factory: Generator for missing entry ids.
            timestamp_fields: Metadata keys holding timestamp pairs.

        Raises:
            StoreInitializationError: If the client or index handle cannot be built.
        """
        self._search_mode = search_mode
        self._config = config or StoreConfig()
        self._id_factory = id_factory or default_id_factory
        self._timestamp_fields = (
            frozenset(timestamp_fields)
            if timestamp_fields is not None
            else DEFAULT_TIMESTAMP_FIELDS
        )
        if index is None:
            index = self._build_index(service_url, api_key, transport_config or {})
        self._index = index

    @classmethod
    def from_settings(
        cls,
        settings: PineconeSettings | None = None,
        **kwargs: Any,
    ) -> "PineconeVectorStore":
        """Build a store from environment-driven settings.

        Args:
            settings: Pinecone configuration. Uses global settings if not provided.
            **kwargs: Passed through to the constructor.

        Raises:
            ConfigurationError: If no host is configured.
        """
        settings = settings or get_settings().pinecone
        if not settings.host:
            raise ConfigurationError(
                "PINECONE_HOST must be set to the index host URL",
                details={"setting": "host"},
            )
        api_key = settings.api_key.get_secret_value() if settings.api_key else None
        return cls(
            service_url=settings.host,
            api_key=api_key,
            search_mode=settings.search_mode,
            config=StoreConfig(namespace=settings.namespace, top_k=settings.top_k),
            timestamp_fields=settings.timestamp_fields,
            **kwargs,
        )

    @staticmethod
    def _build_index(
        service_url: str,
        api_key: str | None,
        transport_config: dict[str, Any],
    ) -> Any:
        """Create the SDK client and index handle."""
        try:
            if not service_url:
                raise ValueError("service URL is empty")
            client = Pinecone(api_key=api_key, **transport_config)
            return client.Index(host=service_url)
        except Exception as e:
            raise StoreInitializationError(
                f"Failed to initialize Pinecone client: {e}",
                details={"host": service_url, "error": str(e)},
            ) from e

    @property
    def search_mode(self) -> SearchMode:
        """Embedding shape this store accepts."""
        return self._search_mode

    @property
    def namespace(self) -> str | None:
        """Target namespace, or None for the default namespace."""
        return self._config.namespace or None

    @property
    def top_k(self) -> int:
        """Maximum matches when a query sets none."""
        return self._config.effective_top_k

    @property
    def filters(self) -> MetadataFilters:
        """Filter applied when a query sets none."""
        return self._config.filters

    def _with_namespace(self, kwargs: dict[str, Any]) -> dict[str, Any]:
        if self.namespace:
            kwargs["namespace"] = self.namespace
        return kwargs

    async def add(self, entries: Sequence[VectorEntry]) -> None:
        """Upsert entries in a single request."""
        if not entries:
            return

        # Validate the whole batch before any id is assigned.
        for entry in entries:
            check_embedding(entry.embedding, self._search_mode)

        vectors = [
            encode_entry(
                entry,
                self._search_mode,
                id_factory=self._id_factory,
                timestamp_fields=self._timestamp_fields,
            )
            for entry in entries
        ]

        kwargs = self._with_namespace({"vectors": vectors})
        start = time.perf_counter()
        try:
            await asyncio.to_thread(self._index.upsert, **kwargs)
        except Exception as e:
            track_vectorstore_operation("add", time.perf_counter() - start, success=False)
            logger.error(
                f"Failed to upsert {len(vectors)} vectors: {e}",
                extra={"namespace": self.namespace, "count": len(vectors)},
            )
            raise AddFailedError(
                f"Failed to add vectors: {e}",
                details={"namespace": self.namespace, "error": str(e)},
            ) from e

        track_vectorstore_operation("add", time.perf_counter() - start, len(vectors))
        logger.debug(
            f"Upserted {len(vectors)} vectors",
            extra={"namespace": self.namespace},
        )

    async def query(self, query: VectorStoreQuery) -> list[VectorMatch]:
        """Search the index and decode matches."""
        if query.embedding is None:
            raise MissingEmbeddingError(
                "Pinecone requires an embedding to search, but none was provided.",
                details={"search_mode": self._search_mode.value},
            )
        check_embedding(query.embedding, self._search_mode)

        top_k = query.top_k if query.top_k and query.top_k > 0 else self.top_k
        filters = query.filters if query.filters is not None else self.filters

        kwargs: dict[str, Any] = {
            **self._embedding_kwargs(query.embedding),
            "top_k": top_k,
            "include_metadata": True,
            "include_values": True,
        }
        pinecone_filter = translate_filters(filters)
        if pinecone_filter:
            kwargs["filter"] = pinecone_filter
        self._with_namespace(kwargs)

        start = time.perf_counter()
        try:
            response = await asyncio.to_thread(self._index.query, **kwargs)
        except Exception as e:
            track_vectorstore_operation("query", time.perf_counter() - start, success=False)
            raise QueryFailedError(
                f"Failed to query vectors: {e}",
                details={"namespace": self.namespace, "error": str(e)},
            ) from e

        matches = get_field(response, "matches") or []
        results = [decode_match(match, self._timestamp_fields) for match in matches]

        track_vectorstore_operation("query", time.perf_counter() - start, len(results))
        logger.debug(
            f"Query returned {len(results)} matches",
            extra={"namespace": self.namespace, "top_k": top_k},
        )
        return results

    @staticmethod
    def _embedding_kwargs(embedding: Embedding) -> dict[str, Any]:
        """Map an already-checked embedding to query arguments."""
        if isinstance(embedding, DenseEmbedding):
            return {"vector": list(embedding.values)}
        if isinstance(embedding, SparseEmbedding):
            return {"sparse_vector": embedding.to_pinecone()}
        return {
            "vector": list(embedding.dense),
            "sparse_vector": embedding.sparse.to_pinecone(),
        }

    async def delete(self, ids: str | Sequence[str]) -> None:
        """Delete records by ID."""
        id_list = [ids] if isinstance(ids, str) else list(ids)
        if not id_list:
            return

        kwargs = self._with_namespace({"ids": id_list})
        start = time.perf_counter()
        try:
            await asyncio.to_thread(self._index.delete, **kwargs)
        except Exception as e:
            track_vectorstore_operation("delete", time.perf_counter() - start, success=False)
            logger.error(
                f"Failed to delete {len(id_list)} vectors: {e}",
                extra={"namespace": self.namespace, "count": len(id_list)},
            )
            raise DeleteFailedError(
                f"Failed to delete vectors: {e}",
                details={"namespace": self.namespace, "error": str(e)},
            ) from e

        track_vectorstore_operation("delete", time.perf_counter() - start, len(id_list))
        logger.debug(
            f"Deleted {len(id_list)} vectors",
            extra={"namespace": self.namespace},
        )
