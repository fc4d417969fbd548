"""Set membership operators: $in, $nin."""

from __future__ import annotations

from typing import Any

from ...exceptions import InvalidFilterError
from ...operators import FilterOperator
from ...sql import placeholder
from ..strategy import OperatorClause, SqlOperator


def as_list(value: Any, operator: str) -> list[Any]:
    """Accept list/tuple/set operands; reject scalars and strings."""
    if isinstance(value, (list, tuple, set, frozenset)):
        return list(value)
    raise InvalidFilterError(
        f"{operator} expects a list, got {type(value).__name__}"
    )


class InOperator(SqlOperator):
    """``column = ANY($N)``; an empty list matches nothing."""

    @property
    def name(self) -> str:
        return FilterOperator.IN

    def apply(self, column: str, value: Any, index: int) -> OperatorClause:
        items = as_list(value, self.name)
        if not items:
            return OperatorClause("FALSE", [])
        return OperatorClause(f"{column} = ANY({placeholder(index)})", [items])


class NotInOperator(SqlOperator):
    """``column != ALL($N)``; an empty list excludes nothing."""

    @property
    def name(self) -> str:
        return FilterOperator.NIN

    def apply(self, column: str, value: Any, index: int) -> OperatorClause | None:
        items = as_list(value, self.name)
        if not items:
            return None
        return OperatorClause(f"{column} != ALL({placeholder(index)})", [items])
