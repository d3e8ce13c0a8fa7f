"""Connector exception hierarchy.

All custom exceptions inherit from ConnectorError.
Each exception has an error code for structured error handling.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for structured error handling."""

    # General errors (1xxx)
    INTERNAL_ERROR = "PCN-1000"
    CONFIGURATION_ERROR = "PCN-1001"

    # Store lifecycle errors (2xxx)
    STORE_INITIALIZATION_ERROR = "PCN-2000"

    # Embedding errors (3xxx)
    EMBEDDING_MODE_MISMATCH = "PCN-3000"
    INCOMPLETE_HYBRID_EMBEDDING = "PCN-3001"
    MISSING_EMBEDDING = "PCN-3002"

    # Filter errors (4xxx)
    UNSUPPORTED_OPERATOR = "PCN-4000"
    UNSUPPORTED_CONDITION = "PCN-4001"

    # Transport errors (5xxx)
    ADD_FAILED = "PCN-5000"
    QUERY_FAILED = "PCN-5001"
    DELETE_FAILED = "PCN-5002"


class ConnectorError(Exception):
    """Base exception for all connector errors.

    Attributes:
        message: Human-readable error message.
        code: Structured error code.
        details: Additional error context.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a serializable dictionary."""
        return {
            "error": {
                "code": self.code.value,
                "message": self.message,
                "details": self.details,
            }
        }


class ConfigurationError(ConnectorError):
    """Configuration or environment error."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.CONFIGURATION_ERROR, details)


class StoreInitializationError(ConnectorError):
    """The Pinecone client or index handle could not be built."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.STORE_INITIALIZATION_ERROR, details)


class EmbeddingError(ConnectorError):
    """Embedding shape is unusable for the configured search mode."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.EMBEDDING_MODE_MISMATCH,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class EmbeddingModeMismatchError(EmbeddingError):
    """Embedding variant does not match the store's search mode."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.EMBEDDING_MODE_MISMATCH, details)


class IncompleteHybridEmbeddingError(EmbeddingError):
    """Hybrid embedding is missing its dense or sparse component."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.INCOMPLETE_HYBRID_EMBEDDING, details)


class MissingEmbeddingError(EmbeddingError):
    """Query was issued without an embedding."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.MISSING_EMBEDDING, details)


class FilterError(ConnectorError):
    """Metadata filter cannot be expressed in Pinecone's filter dialect."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.UNSUPPORTED_OPERATOR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class UnsupportedOperatorError(FilterError):
    """Filter leaf uses an operator Pinecone does not support."""

    def __init__(self, operator: str) -> None:
        super().__init__(
            f"Unsupported filter operator: {operator}",
            ErrorCode.UNSUPPORTED_OPERATOR,
            {"operator": operator},
        )
        self.operator = operator


class UnsupportedConditionError(FilterError):
    """Filter group uses a condition Pinecone does not support."""

    def __init__(self, condition: str) -> None:
        super().__init__(
            f"Unsupported filter condition: {condition}",
            ErrorCode.UNSUPPORTED_CONDITION,
            {"condition": condition},
        )
        self.condition = condition


class VectorStoreError(ConnectorError):
    """Vector store transport call failed."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class AddFailedError(VectorStoreError):
    """Upsert request was rejected or could not be sent."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.ADD_FAILED, details)


class QueryFailedError(VectorStoreError):
    """Query request was rejected or could not be sent."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.QUERY_FAILED, details)


class DeleteFailedError(VectorStoreError):
    """Delete request was rejected or could not be sent."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.DELETE_FAILED, details)
