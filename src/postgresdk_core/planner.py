"""
List query planner.

``plan_list_query`` combines the compiled filter with the soft-delete
predicate, vector search, ordering and pagination into two statements:
the page query and the COUNT query.  Both share one WHERE builder called
with different placeholder bases.

Placeholder layout of the page query::

    $1                vector query     (vector search only)
    $2 ..             filter values
    $k                max distance     (vector threshold only)
    $k+1, $k+2        LIMIT, OFFSET
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, NamedTuple

from .columns import build_column_list
from .exceptions import FieldNotFoundError
from .filters import CompiledPredicate, compile_where
from .models import VectorMetric
from .serialization import encode_vector
from .sql import Statement, placeholder, quote_ident, where_sql

if TYPE_CHECKING:
    from .context import OperationContext
    from .models import ListParams


DISTANCE_OPERATORS: dict[VectorMetric, str] = {
    VectorMetric.COSINE: "<=>",
    VectorMetric.L2: "<->",
    VectorMetric.INNER: "<#>",
}


def distance_operator(metric: VectorMetric | str | None) -> str:
    """pgvector operator for a metric; cosine when unspecified."""
    if metric is None:
        return DISTANCE_OPERATORS[VectorMetric.COSINE]
    return DISTANCE_OPERATORS[VectorMetric(metric)]


class ListQueryPlan(NamedTuple):
    data: Statement
    count: Statement


def plan_list_query(ctx: OperationContext, params: ListParams) -> ListQueryPlan:
    """
    Build the page and COUNT statements for a list request.

    Raises:
        FilterCompileError: On a malformed filter.
        FieldNotFoundError: On a filter, ordering or vector field that is
            not a column (only when ``ctx.all_column_names`` is known).
        ProjectionError: On an invalid select/exclude projection.
    """
    vector = params.vector
    lead_params: list[Any] = []
    distance: str | None = None
    max_distance: float | None = None

    if vector is not None:
        _check_column(ctx, vector.field)
        distance = (
            f"{quote_ident(vector.field)} {distance_operator(vector.metric)} "
            f"({placeholder(1)})::vector"
        )
        lead_params.append(encode_vector(vector.query))
        max_distance = vector.max_distance

    where = _build_where(
        ctx,
        params.where,
        len(lead_params) + 1,
        distance=distance,
        max_distance=max_distance,
    )

    if max_distance is not None:
        # the threshold references $1, so COUNT keeps the vector parameter
        count_sql, count_params = where.sql, [*lead_params, *where.params]
    else:
        count_where = _build_where(ctx, params.where, 1)
        count_sql, count_params = count_where.sql, count_where.params

    columns = build_column_list(ctx.select, ctx.exclude, ctx.all_column_names)
    if distance is not None:
        columns = f"{columns}, ({distance}) AS _distance"

    limit_index = where.next_param_index
    data_sql = _join(
        f"SELECT {columns} FROM {quote_ident(ctx.table)}",
        where.sql,
        _order_by(ctx, params, distance),
        f"LIMIT {placeholder(limit_index)} OFFSET {placeholder(limit_index + 1)}",
    )
    data_params = [*lead_params, *where.params, params.limit, params.offset]

    count_stmt = Statement(
        _join(f"SELECT COUNT(*) FROM {quote_ident(ctx.table)}", count_sql),
        count_params,
    )
    return ListQueryPlan(Statement(data_sql, data_params), count_stmt)


def _build_where(
    ctx: OperationContext,
    expr: Any,
    start_index: int,
    *,
    distance: str | None = None,
    max_distance: float | None = None,
) -> CompiledPredicate:
    """Full WHERE clause (with keyword) numbered from ``start_index``."""
    parts: list[str] = []
    if ctx.soft_delete_column:
        parts.append(f"{quote_ident(ctx.soft_delete_column)} IS NULL")

    compiled = compile_where(
        expr,
        start_index,
        allowed_fields=ctx.all_column_names or None,
        table=ctx.table,
    )
    params = list(compiled.params)
    index = compiled.next_param_index
    if compiled.sql:
        parts.append(compiled.sql)

    if distance is not None and max_distance is not None:
        parts.append(f"({distance}) < {placeholder(index)}")
        params.append(max_distance)
        index += 1

    return CompiledPredicate(where_sql(parts), params, index)


def _order_by(
    ctx: OperationContext, params: ListParams, distance: str | None
) -> str:
    if distance is not None:
        return f"ORDER BY {distance}"
    clauses = params.order_clauses()
    if not clauses:
        return ""
    for column, _ in clauses:
        _check_column(ctx, column)
    return "ORDER BY " + ", ".join(
        f"{quote_ident(column)} {direction.value.upper()}"
        for column, direction in clauses
    )


def _check_column(ctx: OperationContext, name: str) -> None:
    if ctx.all_column_names and name not in ctx.all_column_names:
        raise FieldNotFoundError(name, ctx.table, list(ctx.all_column_names))


def _join(*fragments: str) -> str:
    return " ".join(f for f in fragments if f)
