"""
Statement builders for the point operations.

Pure functions: they take the operation context plus request values and
return a ``Statement(sql, params)``.  Nothing here touches the database.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .columns import build_column_list
from .serialization import prepare_params
from .sql import Statement, pk_predicate, placeholder, quote_ident

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from .context import OperationContext


def returning_columns(ctx: OperationContext) -> str:
    """Projected column list for SELECT / RETURNING."""
    return build_column_list(ctx.select, ctx.exclude, ctx.all_column_names)


def build_insert(ctx: OperationContext, data: Mapping[str, Any]) -> Statement:
    columns = list(data.keys())
    values = prepare_params(list(data.values()))
    placeholders = ", ".join(placeholder(i + 1) for i in range(len(columns)))
    sql = (
        f"INSERT INTO {quote_ident(ctx.table)} "
        f"({', '.join(quote_ident(c) for c in columns)}) "
        f"VALUES ({placeholders}) "
        f"RETURNING {returning_columns(ctx)}"
    )
    return Statement(sql, values)


def build_select_by_pk(ctx: OperationContext, pk_values: Sequence[Any]) -> Statement:
    """SELECT one row by primary key, skipping soft-deleted rows."""
    where = pk_predicate(ctx.pk_columns)
    if ctx.soft_delete_column:
        where = f"{where} AND {quote_ident(ctx.soft_delete_column)} IS NULL"
    sql = (
        f"SELECT {returning_columns(ctx)} FROM {quote_ident(ctx.table)} "
        f"WHERE {where} LIMIT 1"
    )
    return Statement(sql, prepare_params(pk_values))


def build_update(
    ctx: OperationContext, pk_values: Sequence[Any], data: Mapping[str, Any]
) -> Statement:
    """
    UPDATE by primary key.

    Primary-key placeholders come first (``$1..$k``), the SET values follow.
    ``data`` must already be stripped of primary-key columns.
    """
    start = len(ctx.pk_columns) + 1
    assignments = ", ".join(
        f"{quote_ident(col)} = {placeholder(start + i)}" for i, col in enumerate(data)
    )
    sql = (
        f"UPDATE {quote_ident(ctx.table)} SET {assignments} "
        f"WHERE {pk_predicate(ctx.pk_columns)} "
        f"RETURNING {returning_columns(ctx)}"
    )
    return Statement(sql, prepare_params([*pk_values, *data.values()]))


def build_delete(ctx: OperationContext, pk_values: Sequence[Any]) -> Statement:
    """Hard DELETE, or a soft-delete UPDATE when the table has a soft-delete column."""
    where = pk_predicate(ctx.pk_columns)
    if ctx.soft_delete_column:
        sql = (
            f"UPDATE {quote_ident(ctx.table)} "
            f"SET {quote_ident(ctx.soft_delete_column)} = NOW() "
            f"WHERE {where} RETURNING {returning_columns(ctx)}"
        )
    else:
        sql = (
            f"DELETE FROM {quote_ident(ctx.table)} "
            f"WHERE {where} RETURNING {returning_columns(ctx)}"
        )
    return Statement(sql, prepare_params(pk_values))
