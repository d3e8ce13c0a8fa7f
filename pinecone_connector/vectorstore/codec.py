"""Conversion between connector records and Pinecone's wire schema.

Write path: ``VectorEntry`` -> upsert vector dict.
Read path: query match (SDK object or mapping) -> ``VectorMatch``.

Pinecone metadata only holds strings, numbers, booleans and lists, so
structured values are stored as JSON text. Timestamps held as an
``[epoch_seconds, fractional_seconds]`` pair are stored as ISO-8601 UTC
strings and restored to the pair on read.
"""

import json
import re
from collections.abc import Callable, Collection, Mapping
from datetime import UTC, datetime, timedelta
from decimal import Decimal
from typing import Any
from uuid import uuid4

from pydantic import BaseModel

from pinecone_connector.config import SearchMode
from pinecone_connector.exceptions import (
    EmbeddingModeMismatchError,
    IncompleteHybridEmbeddingError,
)
from pinecone_connector.vectorstore.models import (
    DenseEmbedding,
    Embedding,
    HybridEmbedding,
    SparseEmbedding,
    VectorEntry,
    VectorMatch,
)

CONTENT_KEY = "content"
DEFAULT_TIMESTAMP_FIELDS: frozenset[str] = frozenset({"created_at", "updated_at"})
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"
_SECONDS_FORMAT = "%Y-%m-%dT%H:%M:%S"
_TIMESTAMP_PATTERN = re.compile(r"(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})(?:\.(\d+))?Z")

NO_METADATA = "No metadata provided"
CONTENT_NOT_FOUND = "Content field not found in metadata"
CONTENT_NOT_STRING = "Content field is not a string: {value}"

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_SCALAR_TYPES = (str, bool, int, float)

IdFactory = Callable[[], str]


def default_id_factory() -> str:
    """Generate a random record identifier."""
    return str(uuid4())


def format_timestamp(value: Any) -> str:
    """Format an ``[epoch_seconds, fractional_seconds]`` pair as ISO-8601 UTC.

    The fraction is written with every digit it carries (at least six), so
    sub-microsecond precision survives a round trip through
    :func:`parse_timestamp`.

    Args:
        value: Two-element sequence, e.g. ``[1758793007, 0.798845]``.

    Returns:
        ISO-8601 string, e.g. ``"2025-09-25T09:36:47.798845Z"``.

    Raises:
        ValueError: If the fraction is outside ``[0, 1)``.
    """
    seconds, fraction = value
    fraction = float(fraction)
    if not 0 <= fraction < 1:
        raise ValueError(f"Fractional seconds must be in [0, 1): {fraction}")

    whole = datetime.fromtimestamp(int(seconds), UTC).strftime(_SECONDS_FORMAT)
    digits = format(Decimal(repr(fraction)), "f").partition(".")[2]
    return f"{whole}.{digits.ljust(6, '0')}Z"


def parse_timestamp(text: str) -> list[int | float]:
    """Parse an ISO-8601 UTC timestamp back into ``[epoch_seconds, fractional_seconds]``.

    Only full ``YYYY-MM-DDTHH:MM:SS[.fff...]Z`` text is accepted.

    Raises:
        ValueError: If the text is not a full UTC timestamp.
    """
    match = _TIMESTAMP_PATTERN.fullmatch(text)
    if match is None:
        raise ValueError(f"Not an ISO-8601 UTC timestamp: {text!r}")

    head, digits = match.groups()
    moment = datetime.strptime(head, _SECONDS_FORMAT).replace(tzinfo=UTC)
    seconds = (moment - _EPOCH) // timedelta(seconds=1)
    return [seconds, float(f"0.{digits}") if digits else 0.0]


def _is_timestamp_pair(value: Any) -> bool:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        return False
    seconds, fraction = value
    return (
        isinstance(seconds, int)
        and not isinstance(seconds, bool)
        and isinstance(fraction, (int, float))
        and not isinstance(fraction, bool)
        and 0 <= fraction < 1
    )


def coerce_value(value: Any) -> Any:
    """Coerce one metadata value to something Pinecone can store."""
    if isinstance(value, _SCALAR_TYPES):
        return value
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC).strftime(TIMESTAMP_FORMAT)
    if isinstance(value, (list, tuple)) and all(
        isinstance(item, _SCALAR_TYPES) for item in value
    ):
        return list(value)
    if isinstance(value, BaseModel):
        return value.model_dump_json()
    return json.dumps(value, default=str, ensure_ascii=False)


def coerce_metadata(
    metadata: Mapping[str, Any],
    timestamp_fields: Collection[str] = DEFAULT_TIMESTAMP_FIELDS,
) -> dict[str, Any]:
    """Coerce a metadata mapping for upsert.

    ``None`` values are dropped since Pinecone rejects nulls.
    """
    coerced: dict[str, Any] = {}
    for key, value in metadata.items():
        if value is None:
            continue
        if key in timestamp_fields and _is_timestamp_pair(value):
            coerced[key] = format_timestamp(value)
        else:
            coerced[key] = coerce_value(value)
    return coerced


def restore_metadata(
    metadata: Mapping[str, Any],
    timestamp_fields: Collection[str] = DEFAULT_TIMESTAMP_FIELDS,
) -> dict[str, Any]:
    """Restore metadata read from Pinecone, minus the content field."""
    restored: dict[str, Any] = {}
    for key, value in metadata.items():
        if key == CONTENT_KEY:
            continue
        if key in timestamp_fields and isinstance(value, str):
            try:
                restored[key] = parse_timestamp(value)
            except ValueError:
                restored[key] = value
        else:
            restored[key] = value
    return restored


def check_embedding(embedding: Embedding, mode: SearchMode) -> None:
    """Check that an embedding has the shape a search mode requires.

    Raises:
        EmbeddingModeMismatchError: If the variant does not match the mode.
        IncompleteHybridEmbeddingError: If a hybrid embedding lacks a component.
    """
    details = {"search_mode": mode.value, "embedding": embedding.kind}

    if mode == SearchMode.HYBRID:
        if isinstance(embedding, HybridEmbedding):
            has_dense = bool(embedding.dense)
            has_sparse = bool(embedding.sparse.indices)
            if has_dense and has_sparse:
                return
            if has_dense:
                provided = "only dense vector provided"
            elif has_sparse:
                provided = "only sparse vector provided"
            else:
                provided = "neither was provided"
            raise IncompleteHybridEmbeddingError(
                f"Hybrid search requires both dense and sparse vectors, but {provided}.",
                details=details,
            )
        if isinstance(embedding, DenseEmbedding):
            raise EmbeddingModeMismatchError(
                "Hybrid search requires both dense and sparse vectors, "
                "but only dense vector provided.",
                details=details,
            )
        raise EmbeddingModeMismatchError(
            "Hybrid search requires both dense and sparse vectors, "
            "but only sparse vector provided.",
            details=details,
        )

    if mode == SearchMode.DENSE:
        if isinstance(embedding, DenseEmbedding):
            return
        raise EmbeddingModeMismatchError(
            f"Dense search requires a dense vector, but a {embedding.kind} "
            "vector was provided.",
            details=details,
        )

    if isinstance(embedding, SparseEmbedding):
        return
    raise EmbeddingModeMismatchError(
        f"Sparse search requires a sparse vector, but a {embedding.kind} "
        "vector was provided.",
        details=details,
    )


def encode_entry(
    entry: VectorEntry,
    mode: SearchMode,
    id_factory: IdFactory = default_id_factory,
    timestamp_fields: Collection[str] = DEFAULT_TIMESTAMP_FIELDS,
) -> dict[str, Any]:
    """Encode an entry as a Pinecone upsert vector.

    Assigns ``entry.id`` from ``id_factory`` when it is missing.

    Args:
        entry: Entry to encode.
        mode: Store search mode.
        id_factory: Identifier generator.
        timestamp_fields: Metadata keys holding timestamp pairs.

    Returns:
        Dict with ``id``, ``metadata`` and ``values`` and/or ``sparse_values``.

    Raises:
        EmbeddingModeMismatchError: If the embedding does not match the mode.
        IncompleteHybridEmbeddingError: If a hybrid embedding lacks a component.
    """
    check_embedding(entry.embedding, mode)

    if not entry.id:
        entry.id = id_factory()

    metadata = coerce_metadata(entry.metadata, timestamp_fields)
    metadata[CONTENT_KEY] = entry.content

    vector: dict[str, Any] = {"id": entry.id}
    embedding = entry.embedding
    if isinstance(embedding, DenseEmbedding):
        vector["values"] = list(embedding.values)
    elif isinstance(embedding, SparseEmbedding):
        vector["sparse_values"] = embedding.to_pinecone()
    else:
        vector["values"] = list(embedding.dense)
        vector["sparse_values"] = embedding.sparse.to_pinecone()
    vector["metadata"] = metadata
    return vector


def get_field(obj: Any, name: str, default: Any = None) -> Any:
    """Read a field from an SDK response object or a plain mapping."""
    if isinstance(obj, Mapping):
        return obj.get(name, default)
    return getattr(obj, name, default)


def _content_of(metadata: Mapping[str, Any]) -> str:
    if CONTENT_KEY not in metadata:
        return CONTENT_NOT_FOUND
    content = metadata[CONTENT_KEY]
    if isinstance(content, str):
        return content
    return CONTENT_NOT_STRING.format(value=json.dumps(content, default=str))


def decode_match(
    match: Any,
    timestamp_fields: Collection[str] = DEFAULT_TIMESTAMP_FIELDS,
) -> VectorMatch:
    """Decode a Pinecone query match.

    Never raises on malformed metadata; missing or non-string content is
    reported through sentinel strings in ``content``.
    """
    metadata = get_field(match, "metadata")
    score = get_field(match, "score")

    if metadata is None:
        content = NO_METADATA
        remaining: dict[str, Any] = {}
    else:
        content = _content_of(metadata)
        remaining = restore_metadata(metadata, timestamp_fields)

    return VectorMatch(
        id=str(get_field(match, "id", "")),
        embedding=list(get_field(match, "values") or []),
        content=content,
        metadata=remaining,
        similarity_score=float(score) if score is not None else 0.0,
    )
