"""Low-level SQL text helpers shared by the compiler and statement builders."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, NamedTuple

if TYPE_CHECKING:
    from collections.abc import Sequence


class Statement(NamedTuple):
    """SQL text plus its positional bind parameters."""

    sql: str
    params: list[Any]


def quote_ident(name: str) -> str:
    """Quote an identifier for PostgreSQL (``"a""b"`` for ``a"b``)."""
    return '"' + name.replace('"', '""') + '"'


def quote_literal(value: str) -> str:
    """Render a string as a SQL literal (``'it''s'`` for ``it's``)."""
    return "'" + value.replace("'", "''") + "'"


def placeholder(index: int) -> str:
    return f"${index}"


def pk_predicate(pk_columns: Sequence[str], start_index: int = 1) -> str:
    """``"a" = $1 AND "b" = $2`` over the primary-key columns, in order."""
    return " AND ".join(
        f"{quote_ident(col)} = {placeholder(start_index + i)}"
        for i, col in enumerate(pk_columns)
    )


def where_sql(parts: Sequence[str]) -> str:
    """Join predicate parts with AND; empty when there is nothing to filter."""
    return f"WHERE {' AND '.join(parts)}" if parts else ""
