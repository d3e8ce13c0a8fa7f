"""Tests for connector exceptions."""

from pinecone_connector.exceptions import (
    AddFailedError,
    ConfigurationError,
    ConnectorError,
    DeleteFailedError,
    EmbeddingError,
    EmbeddingModeMismatchError,
    ErrorCode,
    FilterError,
    IncompleteHybridEmbeddingError,
    MissingEmbeddingError,
    QueryFailedError,
    StoreInitializationError,
    UnsupportedConditionError,
    UnsupportedOperatorError,
    VectorStoreError,
)


class TestErrorCode:
    """Tests for error codes."""

    def test_error_code_format(self) -> None:
        """Error codes follow PCN-XXXX format."""
        for code in ErrorCode:
            assert code.value.startswith("PCN-")
            assert len(code.value) == 8  # PCN-XXXX

    def test_error_code_uniqueness(self) -> None:
        """All error codes are unique."""
        codes = [code.value for code in ErrorCode]
        assert len(codes) == len(set(codes))


class TestConnectorError:
    """Tests for base exception."""

    def test_basic_exception(self) -> None:
        """Base exception stores message and code."""
        error = ConnectorError("Something went wrong")
        assert error.message == "Something went wrong"
        assert error.code == ErrorCode.INTERNAL_ERROR
        assert error.details == {}

    def test_to_dict(self) -> None:
        """Exception converts to a serializable dict."""
        error = ConnectorError(
            "Something went wrong",
            details={"namespace": "docs"},
        )

        assert error.to_dict() == {
            "error": {
                "code": "PCN-1000",
                "message": "Something went wrong",
                "details": {"namespace": "docs"},
            }
        }

    def test_str_representation(self) -> None:
        """Exception string is the message."""
        assert str(ConnectorError("Test error")) == "Test error"


class TestGeneralErrors:
    """Tests for configuration and initialization exceptions."""

    def test_configuration_error(self) -> None:
        """ConfigurationError has correct code."""
        error = ConfigurationError("Missing env var")
        assert error.code == ErrorCode.CONFIGURATION_ERROR
        assert isinstance(error, ConnectorError)

    def test_store_initialization_error(self) -> None:
        """StoreInitializationError has correct code."""
        error = StoreInitializationError("Bad host")
        assert error.code == ErrorCode.STORE_INITIALIZATION_ERROR


class TestEmbeddingErrors:
    """Tests for embedding exceptions."""

    def test_codes(self) -> None:
        """Each embedding error carries its own code."""
        assert EmbeddingModeMismatchError("x").code == ErrorCode.EMBEDDING_MODE_MISMATCH
        assert (
            IncompleteHybridEmbeddingError("x").code
            == ErrorCode.INCOMPLETE_HYBRID_EMBEDDING
        )
        assert MissingEmbeddingError("x").code == ErrorCode.MISSING_EMBEDDING

    def test_share_base(self) -> None:
        """Embedding errors can be caught together."""
        for error in (
            EmbeddingModeMismatchError("x"),
            IncompleteHybridEmbeddingError("x"),
            MissingEmbeddingError("x"),
        ):
            assert isinstance(error, EmbeddingError)


class TestFilterErrors:
    """Tests for filter exceptions."""

    def test_unsupported_operator(self) -> None:
        """Operator token is kept for diagnostics."""
        error = UnsupportedOperatorError("contains")
        assert error.code == ErrorCode.UNSUPPORTED_OPERATOR
        assert error.operator == "contains"
        assert "contains" in error.message
        assert isinstance(error, FilterError)

    def test_unsupported_condition(self) -> None:
        """Condition token is kept for diagnostics."""
        error = UnsupportedConditionError("not")
        assert error.code == ErrorCode.UNSUPPORTED_CONDITION
        assert error.details == {"condition": "not"}


class TestTransportErrors:
    """Tests for transport failure exceptions."""

    def test_codes(self) -> None:
        """Each operation has its own code."""
        assert AddFailedError("x").code == ErrorCode.ADD_FAILED
        assert QueryFailedError("x").code == ErrorCode.QUERY_FAILED
        assert DeleteFailedError("x").code == ErrorCode.DELETE_FAILED

    def test_share_base(self) -> None:
        """Transport errors can be caught together."""
        assert isinstance(AddFailedError("x"), VectorStoreError)
        assert isinstance(QueryFailedError("x"), VectorStoreError)
        assert isinstance(DeleteFailedError("x"), VectorStoreError)
