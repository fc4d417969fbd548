"""
CRUD operations over one table.

Every operation is a coroutine taking the table's ``OperationContext``
and returning a result envelope.  Errors never escape: caller mistakes
become status 400, missing rows 404 and database failures 500 (logged,
with a stack trace in the envelope when ``ctx.debug`` is set).
"""

from __future__ import annotations

import json
import traceback
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError as PydanticValidationError

from .exceptions import PostgreSDKError, PrimaryKeyError
from .models import ListParams, ListResult, OperationResult, validation_issues
from .planner import plan_list_query
from .serialization import parse_vector_columns
from .statements import build_delete, build_insert, build_select_by_pk, build_update

if TYPE_CHECKING:
    from .context import OperationContext

JSON_INPUT_ERROR = "invalid input syntax for type json"


async def create_record(
    ctx: OperationContext, data: Mapping[str, Any]
) -> OperationResult:
    """INSERT one row; 201 with the stored row."""
    try:
        if not data:
            return OperationResult(status=400, error="No fields provided")

        stmt = build_insert(ctx, data)
        ctx.logger.debug(
            "INSERT %s SQL: %s params: %s", ctx.table, stmt.sql, stmt.params
        )
        rows = await ctx.client.query(stmt.sql, stmt.params)
        parsed = _decode_rows(ctx, rows)
        return OperationResult(
            status=201 if parsed else 500, data=parsed[0] if parsed else None
        )
    except PostgreSDKError as exc:
        return _rejected(ctx, "INSERT", exc)
    except Exception as exc:
        return OperationResult(
            **_failure(ctx, "INSERT", exc, {"Input data": data})
        )


async def get_by_pk(ctx: OperationContext, pk_values: Any) -> OperationResult:
    """SELECT one row by primary key; 404 when absent or soft-deleted."""
    try:
        values = _pk_values(ctx, pk_values)
        stmt = build_select_by_pk(ctx, values)
        ctx.logger.debug("GET %s SQL: %s params: %s", ctx.table, stmt.sql, stmt.params)
        rows = await ctx.client.query(stmt.sql, stmt.params)
        parsed = _decode_rows(ctx, rows)
        if not parsed:
            ctx.logger.debug("GET %s: no row for %s", ctx.table, values)
            return OperationResult(status=404)
        return OperationResult(status=200, data=parsed[0])
    except PostgreSDKError as exc:
        return _rejected(ctx, "GET", exc)
    except Exception as exc:
        return OperationResult(**_failure(ctx, "GET", exc, {"Primary key": pk_values}))


async def list_records(
    ctx: OperationContext, params: ListParams | Mapping[str, Any] | None = None
) -> ListResult:
    """
    One page of rows plus the total count of matching rows.

    ``params`` may be a ``ListParams`` or its wire-shaped mapping (camelCase
    keys).  The COUNT query and the page query run sequentially.
    """
    try:
        list_params = _list_params(params)
    except PydanticValidationError as exc:
        ctx.logger.debug("LIST %s: invalid parameters: %s", ctx.table, exc)
        return ListResult(
            status=400, error="Invalid list parameters", issues=validation_issues(exc)
        )

    try:
        plan = plan_list_query(ctx, list_params)

        ctx.logger.debug(
            "LIST %s COUNT SQL: %s params: %s",
            ctx.table,
            plan.count.sql,
            plan.count.params,
        )
        count_rows = await ctx.client.query(plan.count.sql, plan.count.params)
        total = int(count_rows[0]["count"]) if count_rows else 0

        ctx.logger.debug(
            "LIST %s SQL: %s params: %s", ctx.table, plan.data.sql, plan.data.params
        )
        rows = await ctx.client.query(plan.data.sql, plan.data.params)
        parsed = _decode_rows(ctx, rows)

        has_more = list_params.offset + list_params.limit < total
        ctx.logger.debug(
            "LIST %s result: %d rows, %d total, hasMore=%s",
            ctx.table,
            len(parsed),
            total,
            has_more,
        )
        return ListResult(
            status=200,
            data=parsed,
            total=total,
            limit=list_params.limit,
            offset=list_params.offset,
            has_more=has_more,
            needs_includes=bool(list_params.include),
            include_spec=list_params.include,
        )
    except PostgreSDKError as exc:
        rejected = _rejected(ctx, "LIST", exc)
        return ListResult(status=rejected.status, error=rejected.error)
    except Exception as exc:
        return ListResult(
            **_failure(ctx, "LIST", exc, {"WHERE clause": list_params.where})
        )


async def update_record(
    ctx: OperationContext, pk_values: Any, update_data: Mapping[str, Any]
) -> OperationResult:
    """UPDATE one row by primary key; primary-key columns in the data are ignored."""
    filtered: dict[str, Any] = {}
    try:
        values = _pk_values(ctx, pk_values)
        filtered = {k: v for k, v in update_data.items() if k not in ctx.pk_columns}
        if not filtered:
            return OperationResult(status=400, error="No updatable fields provided")

        stmt = build_update(ctx, values, filtered)
        ctx.logger.debug(
            "UPDATE %s SQL: %s params: %s", ctx.table, stmt.sql, stmt.params
        )
        rows = await ctx.client.query(stmt.sql, stmt.params)
        parsed = _decode_rows(ctx, rows)
        if not parsed:
            return OperationResult(status=404)
        return OperationResult(status=200, data=parsed[0])
    except PostgreSDKError as exc:
        return _rejected(ctx, "UPDATE", exc)
    except Exception as exc:
        return OperationResult(
            **_failure(
                ctx,
                "UPDATE",
                exc,
                {"Input data": update_data, "Filtered data": filtered},
            )
        )


async def delete_record(ctx: OperationContext, pk_values: Any) -> OperationResult:
    """DELETE one row by primary key, or mark it deleted on soft-delete tables."""
    try:
        values = _pk_values(ctx, pk_values)
        stmt = build_delete(ctx, values)
        ctx.logger.debug(
            "DELETE %s SQL: %s params: %s", ctx.table, stmt.sql, stmt.params
        )
        rows = await ctx.client.query(stmt.sql, stmt.params)
        parsed = _decode_rows(ctx, rows)
        if not parsed:
            return OperationResult(status=404)
        return OperationResult(status=200, data=parsed[0])
    except PostgreSDKError as exc:
        return _rejected(ctx, "DELETE", exc)
    except Exception as exc:
        return OperationResult(
            **_failure(ctx, "DELETE", exc, {"Primary key": pk_values})
        )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _pk_values(ctx: OperationContext, pk_values: Any) -> list[Any]:
    if isinstance(pk_values, Sequence) and not isinstance(pk_values, (str, bytes)):
        values = list(pk_values)
    else:
        values = [pk_values]
    if len(values) != len(ctx.pk_columns):
        raise PrimaryKeyError(
            f"Expected {len(ctx.pk_columns)} primary key value(s) "
            f"for {', '.join(ctx.pk_columns)}, got {len(values)}"
        )
    return values


def _list_params(params: ListParams | Mapping[str, Any] | None) -> ListParams:
    if params is None:
        return ListParams()
    if isinstance(params, ListParams):
        return params
    if isinstance(params, Mapping):
        params = dict(params)
    return ListParams.model_validate(params)


def _decode_rows(
    ctx: OperationContext, rows: Sequence[Mapping[str, Any]]
) -> list[dict[str, Any]]:
    return parse_vector_columns(rows, ctx.vector_columns, log=ctx.logger)


def _rejected(ctx: OperationContext, op: str, exc: PostgreSDKError) -> OperationResult:
    ctx.logger.warning("%s %s rejected: %s", op, ctx.table, exc)
    return OperationResult(status=400, error=str(exc))


def _failure(
    ctx: OperationContext,
    op: str,
    exc: Exception,
    diagnostics: Mapping[str, Any],
) -> dict[str, Any]:
    """Log a database error and build the 500 envelope fields."""
    message = str(exc)
    if JSON_INPUT_ERROR in message:
        ctx.logger.error("%s %s - Invalid JSON input detected!", op, ctx.table)
        for label, value in diagnostics.items():
            ctx.logger.error("%s: %s", label, _dump(value))
        ctx.logger.error("PostgreSQL error: %s", message)
    else:
        ctx.logger.exception("%s %s error", op, ctx.table)

    failure: dict[str, Any] = {"status": 500, "error": message or "Internal error"}
    if ctx.debug:
        failure["stack"] = traceback.format_exc()
    return failure


def _dump(value: Any) -> str:
    try:
        return json.dumps(value, indent=2, default=str)
    except (TypeError, ValueError):
        return repr(value)
