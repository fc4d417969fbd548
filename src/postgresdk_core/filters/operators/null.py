"""Null check operators."""

from __future__ import annotations

from typing import Any

from ...exceptions import InvalidFilterError
from ...operators import FilterOperator
from ..strategy import OperatorClause, SqlOperator


def _require_null(operator: str, value: Any) -> None:
    if value is not None:
        raise InvalidFilterError(f"{operator} only accepts null, got {value!r}")


class IsNullOperator(SqlOperator):
    @property
    def name(self) -> str:
        return FilterOperator.IS

    def apply(self, column: str, value: Any, index: int) -> OperatorClause:
        _require_null(self.name, value)
        return OperatorClause(f"{column} IS NULL", [])


class IsNotNullOperator(SqlOperator):
    @property
    def name(self) -> str:
        return FilterOperator.IS_NOT

    def apply(self, column: str, value: Any, index: int) -> OperatorClause:
        _require_null(self.name, value)
        return OperatorClause(f"{column} IS NOT NULL", [])
