"""Declarative filter expressions for list queries.

A filter is a JSON document understood by the Desk API's ``filter`` query
parameter. Comparisons are keyed by field, logical combinators by operator::

    open_tickets = FilterBuilder().eq("status", "open")
    urgent = FilterBuilder().gte("priority", 3)
    FilterBuilder().and_(open_tickets, urgent).build()
    # '{"$and":[{"status":{"$eq":"open"}},{"priority":{"$gte":3}}]}'
"""

import json
from collections.abc import Iterable
from enum import Enum
from typing import Any


class FilterOperator(str, Enum):
    """Operators supported by the filter document."""

    EQ = "$eq"
    NE = "$ne"
    LT = "$lt"
    LTE = "$lte"
    GT = "$gt"
    GTE = "$gte"
    IN = "$in"
    NIN = "$nin"
    AND = "$and"
    OR = "$or"


class FilterBuilder:
    """Fluent builder for filter documents.

    Every method returns the builder itself so calls can be chained. Logical
    combinators keep references to the child builders; children are resolved
    when the parent is built, so a child changed after being combined shows
    up in the parent's next ``build()``.
    """

    def __init__(self) -> None:
        self._filter: dict[str, Any] = {}

    def _compare(self, field: str, operator: FilterOperator, value: Any) -> "FilterBuilder":
        conditions = self._filter.get(field)
        if not isinstance(conditions, dict):
            conditions = {}
            self._filter[field] = conditions
        conditions[operator.value] = value
        return self

    def eq(self, field: str, value: Any) -> "FilterBuilder":
        return self._compare(field, FilterOperator.EQ, value)

    def ne(self, field: str, value: Any) -> "FilterBuilder":
        return self._compare(field, FilterOperator.NE, value)

    def lt(self, field: str, value: Any) -> "FilterBuilder":
        return self._compare(field, FilterOperator.LT, value)

    def lte(self, field: str, value: Any) -> "FilterBuilder":
        return self._compare(field, FilterOperator.LTE, value)

    def gt(self, field: str, value: Any) -> "FilterBuilder":
        return self._compare(field, FilterOperator.GT, value)

    def gte(self, field: str, value: Any) -> "FilterBuilder":
        return self._compare(field, FilterOperator.GTE, value)

    def in_(self, field: str, values: Iterable[Any]) -> "FilterBuilder":
        """Match when ``field`` equals any of ``values`` (order and ``None`` kept)."""
        return self._compare(field, FilterOperator.IN, list(values))

    def nin(self, field: str, values: Iterable[Any]) -> "FilterBuilder":
        """Match when ``field`` equals none of ``values``."""
        return self._compare(field, FilterOperator.NIN, list(values))

    def and_(self, *filters: "FilterBuilder") -> "FilterBuilder":
        self._filter[FilterOperator.AND.value] = list(filters)
        return self

    def or_(self, *filters: "FilterBuilder") -> "FilterBuilder":
        self._filter[FilterOperator.OR.value] = list(filters)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Resolve the expression tree into plain JSON-compatible data.

        Raises:
            ValueError: A builder is nested inside itself.
        """
        return _resolve(self._filter, (self,))

    def build(self) -> str:
        """Serialize the filter to compact JSON. An empty filter is ``{}``."""
        return json.dumps(self.to_dict(), separators=(",", ":"))

    def __str__(self) -> str:
        return self.build()


def _resolve(node: Any, ancestors: tuple["FilterBuilder", ...]) -> Any:
    if isinstance(node, FilterBuilder):
        if node in ancestors:
            raise ValueError("filter cannot contain itself")
        return _resolve(node._filter, (*ancestors, node))
    if isinstance(node, dict):
        return {key: _resolve(value, ancestors) for key, value in node.items()}
    if isinstance(node, list):
        return [_resolve(item, ancestors) for item in node]
    return node
