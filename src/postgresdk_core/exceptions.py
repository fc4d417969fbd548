"""
Exception hierarchy for the filter compiler and the CRUD operations.

All exceptions inherit from ``PostgreSDKError`` and provide ``to_dict()``
for API-friendly error responses.  They are raised by the pure layers
(compiler, column builder, planner) and converted into result envelopes at
the operation boundary.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any


class PostgreSDKError(Exception):
    """Root exception for the postgresdk core."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class FilterCompileError(PostgreSDKError):
    """A filter expression could not be compiled to SQL."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.message = message
        self.path = path
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "FILTER_COMPILE_ERROR",
            "message": self.message,
            "path": self.path,
        }


class InvalidFilterError(FilterCompileError):
    """The filter tree or an operand has the wrong shape."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "INVALID_FILTER",
            "message": self.message,
            "path": self.path,
        }


class UnsupportedOperatorError(FilterCompileError):
    """
    Unknown operator in an operator object.

    Provides fuzzy-matched suggestions for likely intended operators.
    """

    def __init__(
        self,
        operator: str,
        valid_operators: list[str],
        path: str | None = None,
    ) -> None:
        self.operator = operator
        self.valid_operators = valid_operators
        self.suggestions = get_close_matches(operator, valid_operators, n=3, cutoff=0.6)

        message = f"Unknown operator: '{operator}'."
        if self.suggestions:
            message += f" Did you mean: {', '.join(self.suggestions)}?"
        super().__init__(message, path=path)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "OPERATOR_NOT_FOUND",
            "operator": self.operator,
            "path": self.path,
            "suggestions": self.suggestions,
            "valid_operators": sorted(self.valid_operators),
        }


class FieldNotFoundError(PostgreSDKError):
    """
    A filter, ordering or vector field is not a column of the table.

    Example error message::

        Invalid field 'naem' on 'users'.
        Did you mean one of these?
          • name

        Available fields: email, id, name
    """

    def __init__(
        self,
        invalid_field: str,
        table: str,
        available_fields: list[str],
        cutoff: float = 0.6,
    ) -> None:
        self.invalid_field = invalid_field
        self.table = table
        self.available_fields = available_fields
        self.suggestions = get_close_matches(
            invalid_field, available_fields, n=5, cutoff=cutoff
        )
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        lines = [f"Invalid field '{self.invalid_field}' on '{self.table}'."]
        if self.suggestions:
            lines.append("Did you mean one of these?")
            for s in self.suggestions:
                lines.append(f"  • {s}")

        sorted_fields = sorted(self.available_fields)
        preview = ", ".join(sorted_fields[:15])
        if len(sorted_fields) > 15:
            preview += ", ..."
        lines.append(f"Available fields: {preview}")
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "FIELD_NOT_FOUND",
            "field": self.invalid_field,
            "table": self.table,
            "suggestions": self.suggestions,
            "available_fields": sorted(self.available_fields),
        }


class ProjectionError(PostgreSDKError):
    """The select/exclude projection is invalid."""


class PrimaryKeyError(PostgreSDKError):
    """The primary-key values do not match the table's key columns."""


__all__: list[str] = [
    "FieldNotFoundError",
    "FilterCompileError",
    "InvalidFilterError",
    "PostgreSDKError",
    "PrimaryKeyError",
    "ProjectionError",
    "UnsupportedOperatorError",
]
