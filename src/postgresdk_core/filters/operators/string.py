"""String pattern operators."""

from __future__ import annotations

from ...operators import FilterOperator
from .standard import BinaryOperator


class LikeOperator(BinaryOperator):
    sql_operator = "LIKE"

    @property
    def name(self) -> str:
        return FilterOperator.LIKE


class ILikeOperator(BinaryOperator):
    sql_operator = "ILIKE"

    @property
    def name(self) -> str:
        return FilterOperator.ILIKE
