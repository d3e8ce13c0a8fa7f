"""Pytest configuration and shared fixtures."""

from collections.abc import Callable
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from pinecone_connector.config import SearchMode
from pinecone_connector.vectorstore.models import StoreConfig
from pinecone_connector.vectorstore.service import PineconeVectorStore


@pytest.fixture
def mock_index() -> MagicMock:
    """Create a mock Pinecone index handle.

    Returns:
        MagicMock whose query returns no matches.
    """
    index = MagicMock()
    index.query.return_value = SimpleNamespace(matches=[])
    return index


@pytest.fixture
def make_store(mock_index: MagicMock) -> Callable[..., PineconeVectorStore]:
    """Factory for stores wired to the mock index.

    Returns:
        Callable accepting search_mode and StoreConfig fields.
    """

    def _make(
        search_mode: SearchMode = SearchMode.DENSE,
        **config: object,
    ) -> PineconeVectorStore:
        return PineconeVectorStore(
            service_url="https://test-index.svc.pinecone.io",
            api_key="test-key",
            search_mode=search_mode,
            config=StoreConfig(**config),
            index=mock_index,
            id_factory=lambda: "generated-id",
        )

    return _make
