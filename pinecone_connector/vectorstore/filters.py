"""Metadata filter model and translation to Pinecone's filter dialect.

Pinecone uses MongoDB-style filters: ``{field: {"$op": value}}`` leaves
combined with ``{"$and": [...]}`` / ``{"$or": [...]}``.
"""

from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field

from pinecone_connector.exceptions import (
    UnsupportedConditionError,
    UnsupportedOperatorError,
)


class FilterOperator(str, Enum):
    """Comparison operators of the generic filter model."""

    EQUAL = "=="
    NOT_EQUAL = "!="
    GREATER_THAN = ">"
    LESS_THAN = "<"
    GREATER_THAN_OR_EQUAL = ">="
    LESS_THAN_OR_EQUAL = "<="
    IN = "in"
    NOT_IN = "nin"
    EXISTS = "exists"
    # Not expressible in Pinecone's dialect
    CONTAINS = "contains"
    TEXT_MATCH = "text_match"
    IS_EMPTY = "is_empty"


class FilterCondition(str, Enum):
    """Boolean connectives for filter groups."""

    AND = "and"
    OR = "or"
    NOT = "not"


OPERATOR_MAP: dict[FilterOperator, str] = {
    FilterOperator.EQUAL: "$eq",
    FilterOperator.NOT_EQUAL: "$ne",
    FilterOperator.GREATER_THAN: "$gt",
    FilterOperator.LESS_THAN: "$lt",
    FilterOperator.GREATER_THAN_OR_EQUAL: "$gte",
    FilterOperator.LESS_THAN_OR_EQUAL: "$lte",
    FilterOperator.IN: "$in",
    FilterOperator.NOT_IN: "$nin",
    FilterOperator.EXISTS: "$exists",
}

CONDITION_MAP: dict[FilterCondition, str] = {
    FilterCondition.AND: "$and",
    FilterCondition.OR: "$or",
}


class MetadataFilter(BaseModel):
    """A single ``key <operator> value`` comparison.

    Attributes:
        key: Metadata field name.
        operator: Comparison operator.
        value: JSON value to compare against.
    """

    model_config = ConfigDict(extra="forbid")

    key: str = Field(min_length=1, description="Metadata field name")
    operator: FilterOperator = Field(
        default=FilterOperator.EQUAL,
        description="Comparison operator",
    )
    value: Any = Field(default=None, description="Comparison value")


class MetadataFilters(BaseModel):
    """A group of filters joined by one condition.

    An empty group matches everything.

    Attributes:
        condition: How the children are combined.
        filters: Leaves or nested groups, in order.
    """

    model_config = ConfigDict(extra="forbid")

    condition: FilterCondition = Field(
        default=FilterCondition.AND,
        description="Boolean connective",
    )
    filters: list[Union[MetadataFilter, "MetadataFilters"]] = Field(
        default_factory=list,
        description="Child filters",
    )

    def is_empty(self) -> bool:
        """Return True if the group has no children."""
        return not self.filters


MetadataFilters.model_rebuild()


def translate_filters(node: MetadataFilter | MetadataFilters) -> dict[str, Any]:
    """Translate a filter tree into a Pinecone filter object.

    Groups whose children all translate to ``{}`` collapse to ``{}``, and a
    group with a single surviving child is replaced by that child.

    Args:
        node: Filter leaf or group.

    Returns:
        Pinecone filter dict; ``{}`` matches everything.

    Raises:
        UnsupportedOperatorError: If a leaf uses an operator Pinecone lacks.
        UnsupportedConditionError: If a group uses a condition Pinecone lacks.
    """
    if isinstance(node, MetadataFilter):
        return _translate_leaf(node)

    backend_condition = CONDITION_MAP.get(node.condition)
    if backend_condition is None:
        raise UnsupportedConditionError(node.condition.value)

    children = [translate_filters(child) for child in node.filters]
    children = [child for child in children if child]

    if not children:
        return {}
    if len(children) == 1:
        return children[0]
    return {backend_condition: children}


def _translate_leaf(leaf: MetadataFilter) -> dict[str, Any]:
    """Translate one comparison; equality uses the bare ``{key: value}`` form."""
    backend_operator = OPERATOR_MAP.get(leaf.operator)
    if backend_operator is None:
        raise UnsupportedOperatorError(leaf.operator.value)

    if leaf.operator == FilterOperator.EQUAL:
        return {leaf.key: leaf.value}
    return {leaf.key: {backend_operator: leaf.value}}
