"""Standard comparison operators."""

from __future__ import annotations

from typing import Any, ClassVar

from ...operators import FilterOperator
from ...sql import placeholder
from ..strategy import OperatorClause, SqlOperator


class BinaryOperator(SqlOperator):
    """``column <sql_operator> $N`` binding the operand as-is."""

    sql_operator: ClassVar[str]

    def apply(self, column: str, value: Any, index: int) -> OperatorClause:
        return OperatorClause(
            f"{column} {self.sql_operator} {placeholder(index)}", [value]
        )


class EqualOperator(BinaryOperator):
    sql_operator = "="

    @property
    def name(self) -> str:
        return FilterOperator.EQ


class NotEqualOperator(BinaryOperator):
    sql_operator = "!="

    @property
    def name(self) -> str:
        return FilterOperator.NE


class GreaterThanOperator(BinaryOperator):
    sql_operator = ">"

    @property
    def name(self) -> str:
        return FilterOperator.GT


class GreaterEqualOperator(BinaryOperator):
    sql_operator = ">="

    @property
    def name(self) -> str:
        return FilterOperator.GTE


class LessThanOperator(BinaryOperator):
    sql_operator = "<"

    @property
    def name(self) -> str:
        return FilterOperator.LT


class LessEqualOperator(BinaryOperator):
    sql_operator = "<="

    @property
    def name(self) -> str:
        return FilterOperator.LTE
