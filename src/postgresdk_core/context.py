"""
Per-table operation context.

``OperationContext`` is built once per route registration and shared
read-only by every request against that table.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .ports import DatabaseClient

_default_logger = logging.getLogger("postgresdk.operations")


def _as_tuple(values: Sequence[str] | None) -> tuple[str, ...] | None:
    return tuple(values) if values is not None else None


@dataclass(frozen=True)
class OperationContext:
    """
    Immutable configuration of the CRUD operations for one table.

    Attributes:
        client: Database client executing the statements.
        table: Target table name.
        pk_columns: Primary-key columns, in key order (more than one for a
            composite key).
        soft_delete_column: Timestamp column marking deleted rows; deletes
            set it and reads skip rows where it is set.
        vector_columns: pgvector columns decoded from text on read.
        all_column_names: Every column of the table.  Enables select/exclude
            projection and field validation of filters and ordering.
        select: Columns to return (mutually exclusive with ``exclude``).
        exclude: Columns to omit (mutually exclusive with ``select``).
        logger: Logger for SQL tracing and error diagnostics.
        debug: Include stack traces in error results.
    """

    client: DatabaseClient
    table: str
    pk_columns: tuple[str, ...]
    soft_delete_column: str | None = None
    vector_columns: tuple[str, ...] = ()
    all_column_names: tuple[str, ...] | None = None
    select: tuple[str, ...] | None = None
    exclude: tuple[str, ...] | None = None
    logger: logging.Logger = field(default=_default_logger, compare=False)
    debug: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.pk_columns, str):
            object.__setattr__(self, "pk_columns", (self.pk_columns,))
        else:
            object.__setattr__(self, "pk_columns", tuple(self.pk_columns))
        if not self.pk_columns:
            raise ValueError(
                f"Table {self.table!r} needs at least one primary-key column"
            )
        object.__setattr__(self, "vector_columns", tuple(self.vector_columns))
        object.__setattr__(self, "all_column_names", _as_tuple(self.all_column_names))
        object.__setattr__(self, "select", _as_tuple(self.select))
        object.__setattr__(self, "exclude", _as_tuple(self.exclude))

    @property
    def has_composite_pk(self) -> bool:
        return len(self.pk_columns) > 1

    def with_projection(
        self,
        select: Sequence[str] | None = None,
        exclude: Sequence[str] | None = None,
    ) -> OperationContext:
        """Return a copy with a per-request projection."""
        return replace(self, select=_as_tuple(select), exclude=_as_tuple(exclude))
