"""
Operator compilation strategy.

Provides the ``SqlOperator`` interface and a registry.  Each operator of the
filter vocabulary is an isolated strategy class that renders one SQL
fragment for a quoted column, an operand and the current placeholder index.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, NamedTuple

from ..exceptions import UnsupportedOperatorError


class OperatorClause(NamedTuple):
    """SQL fragment emitted by one operator and the parameters it consumes.

    ``len(params)`` is the number of placeholders the fragment references,
    numbered consecutively from the index the operator was applied at.
    """

    sql: str
    params: list[Any]


class SqlOperator(ABC):
    """
    Strategy interface for compiling one filter operator into a
    parameterized SQL fragment.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The operator key this strategy handles (e.g. ``"$eq"``)."""
        ...

    @abstractmethod
    def apply(self, column: str, value: Any, index: int) -> OperatorClause | None:
        """
        Build a SQL fragment.

        Args:
            column: The already-quoted column identifier.
            value: The operand from the filter expression.
            index: Placeholder number for the first parameter consumed.

        Returns:
            The clause, or ``None`` when the operand contributes no
            predicate at all.
        """
        ...


def _key(name: str) -> str:
    # str-mixin enums hash by member name, so registry keys are plain strings
    return name.value if isinstance(name, Enum) else name


class SqlOperatorRegistry:
    """Registry of ``SqlOperator`` instances keyed by operator name."""

    def __init__(self) -> None:
        self._operators: dict[str, SqlOperator] = {}

    def register(self, operator: SqlOperator) -> None:
        self._operators[_key(operator.name)] = operator

    def register_all(self, *operators: SqlOperator) -> None:
        for op in operators:
            self.register(op)

    def unregister(self, name: str) -> None:
        self._operators.pop(_key(name), None)

    def get(self, name: str) -> SqlOperator | None:
        return self._operators.get(_key(name))

    def has(self, name: str) -> bool:
        return _key(name) in self._operators

    @property
    def supported_operators(self) -> set[str]:
        return set(self._operators.keys())

    def apply(
        self,
        name: str,
        column: str,
        value: Any,
        index: int,
    ) -> OperatorClause | None:
        """
        Look up the operator and apply.

        Raises:
            UnsupportedOperatorError: If the operator is not registered.
        """
        op = self.get(name)
        if op is None:
            raise UnsupportedOperatorError(str(name), sorted(self._operators))
        return op.apply(column, value, index)
