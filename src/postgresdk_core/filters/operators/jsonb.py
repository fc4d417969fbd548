"""JSONB operators.

Containment operands are JSON-serialized and bound as parameters; key
operators bind the key (or a ``text[]`` of keys).  ``$jsonbPath`` walks a
path with ``->`` and extracts the last segment as text with ``->>``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ...exceptions import InvalidFilterError, UnsupportedOperatorError
from ...operators import FilterOperator
from ...serialization import to_json, to_text
from ...sql import placeholder, quote_literal
from ..strategy import OperatorClause, SqlOperator
from .set import as_list


class JsonbContainsOperator(SqlOperator):
    """``column @> $N``"""

    @property
    def name(self) -> str:
        return FilterOperator.JSONB_CONTAINS

    def apply(self, column: str, value: Any, index: int) -> OperatorClause:
        return OperatorClause(f"{column} @> {placeholder(index)}", [to_json(value)])


class JsonbContainedByOperator(SqlOperator):
    """``column <@ $N``"""

    @property
    def name(self) -> str:
        return FilterOperator.JSONB_CONTAINED_BY

    def apply(self, column: str, value: Any, index: int) -> OperatorClause:
        return OperatorClause(f"{column} <@ {placeholder(index)}", [to_json(value)])


class JsonbHasKeyOperator(SqlOperator):
    """``column ? $N``"""

    @property
    def name(self) -> str:
        return FilterOperator.JSONB_HAS_KEY

    def apply(self, column: str, value: Any, index: int) -> OperatorClause:
        return OperatorClause(f"{column} ? {placeholder(index)}", [value])


class JsonbHasAnyKeysOperator(SqlOperator):
    """``column ?| $N``"""

    @property
    def name(self) -> str:
        return FilterOperator.JSONB_HAS_ANY_KEYS

    def apply(self, column: str, value: Any, index: int) -> OperatorClause | None:
        keys = [str(k) for k in as_list(value, self.name)]
        if not keys:
            return None
        return OperatorClause(f"{column} ?| {placeholder(index)}", [keys])


class JsonbHasAllKeysOperator(SqlOperator):
    """``column ?& $N``"""

    @property
    def name(self) -> str:
        return FilterOperator.JSONB_HAS_ALL_KEYS

    def apply(self, column: str, value: Any, index: int) -> OperatorClause | None:
        keys = [str(k) for k in as_list(value, self.name)]
        if not keys:
            return None
        return OperatorClause(f"{column} ?& {placeholder(index)}", [keys])


# operator -> (SQL operator, numeric comparison)
_PATH_COMPARISONS: dict[str, tuple[str, bool]] = {
    FilterOperator.EQ.value: ("=", False),
    FilterOperator.NE.value: ("!=", False),
    FilterOperator.GT.value: (">", True),
    FilterOperator.GTE.value: (">=", True),
    FilterOperator.LT.value: ("<", True),
    FilterOperator.LTE.value: ("<=", True),
    FilterOperator.LIKE.value: ("LIKE", False),
    FilterOperator.ILIKE.value: ("ILIKE", False),
}


def build_path_accessor(column: str, path: list[Any]) -> str:
    """``"meta"->'user'->>'theme'`` for ``["user", "theme"]``."""
    *parents, last = path
    accessor = column + "".join(f"->{quote_literal(str(p))}" for p in parents)
    return f"{accessor}->>{quote_literal(str(last))}"


class JsonbPathOperator(SqlOperator):
    """
    Compare a nested JSONB value: ``{"path": [...], "operator": "$gt", "value": 5}``.

    Numeric comparisons cast the extracted text to ``numeric`` and bind the
    raw value; the others compare text and bind the value stringified.
    """

    @property
    def name(self) -> str:
        return FilterOperator.JSONB_PATH

    def apply(self, column: str, value: Any, index: int) -> OperatorClause:
        if not isinstance(value, Mapping):
            raise InvalidFilterError(
                "$jsonbPath expects an object with 'path', 'operator' and 'value'"
            )
        path = value.get("path")
        if not isinstance(path, (list, tuple)) or not path:
            raise InvalidFilterError("$jsonbPath requires a non-empty 'path' list")
        if "value" not in value:
            raise InvalidFilterError("$jsonbPath requires a 'value'")

        op = value.get("operator") or FilterOperator.EQ.value
        comparison = _PATH_COMPARISONS.get(str(op))
        if comparison is None:
            raise UnsupportedOperatorError(str(op), list(_PATH_COMPARISONS))
        sql_op, numeric = comparison

        accessor = build_path_accessor(column, list(path))
        operand = value["value"]
        if numeric:
            return OperatorClause(
                f"({accessor})::numeric {sql_op} {placeholder(index)}", [operand]
            )
        return OperatorClause(
            f"{accessor} {sql_op} {placeholder(index)}", [to_text(operand)]
        )
