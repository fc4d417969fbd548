"""Projection: turn select/exclude into a quoted column list."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .exceptions import ProjectionError
from .sql import quote_ident

if TYPE_CHECKING:
    from collections.abc import Sequence


def build_column_list(
    select: Sequence[str] | None,
    exclude: Sequence[str] | None,
    all_columns: Sequence[str] | None,
    always_include: Sequence[str] = (),
) -> str:
    """
    Build the SQL column list for SELECT / RETURNING.

    Args:
        select: Columns to include (mutually exclusive with ``exclude``).
        exclude: Columns to leave out (mutually exclusive with ``select``).
        all_columns: Every column of the table.  Without it no projection
            is possible and ``*`` is returned.
        always_include: Columns appended to an explicit projection.

    Returns:
        ``*`` or a list like ``"id", "name", "email"``.

    Raises:
        ProjectionError: If both ``select`` and ``exclude`` are given, or
            the projection resolves to no columns.
    """
    if select is not None and exclude is not None:
        raise ProjectionError("Cannot specify both 'select' and 'exclude' parameters")

    if not all_columns:
        return "*"

    if select is not None:
        columns = list(select)
    elif exclude is not None:
        excluded = set(exclude)
        columns = [col for col in all_columns if col not in excluded]
    else:
        return "*"

    final_columns = list(dict.fromkeys([*columns, *always_include]))
    if not final_columns:
        raise ProjectionError("Projection resolves to no columns")
    return ", ".join(quote_ident(col) for col in final_columns)
