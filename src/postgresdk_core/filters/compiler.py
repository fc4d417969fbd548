"""
Compile a filter expression (nested mapping) into a parameterized WHERE fragment.

Uses the strategy pattern: each operator is an isolated class in
``operators/``, registered in a ``SqlOperatorRegistry``.  ``compile_where``
walks the tree and delegates operator objects to the registry.

Placeholders are positional (``$1``, ``$2``, ...).  Compilation is pure: the
running parameter index is threaded through recursive calls and returned as
``next_param_index`` so that a caller can continue numbering after the
fragment.  Values only ever reach the SQL text through bind parameters;
field names are quoted identifiers.

Expression shape
----------------
``{"status": "active", "age": {"$gte": 18}, "$or": [{...}, {...}]}``

- a literal is an equality (``None`` means ``IS NULL``)
- a mapping is an operator object
- ``$or`` / ``$and`` hold lists of child expressions
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, NamedTuple

from ..exceptions import FieldNotFoundError, FilterCompileError, InvalidFilterError
from ..operators import FilterOperator
from ..sql import placeholder, quote_ident
from .operators import DEFAULT_REGISTRY

if TYPE_CHECKING:
    from collections.abc import Collection

    from .strategy import SqlOperatorRegistry

logger = logging.getLogger("postgresdk.filters")

_OR = FilterOperator.OR.value
_AND = FilterOperator.AND.value


class CompiledPredicate(NamedTuple):
    """SQL fragment, its bind parameters and the next free placeholder index."""

    sql: str
    params: list[Any]
    next_param_index: int


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def compile_where(
    expr: Any,
    start_param_index: int = 1,
    *,
    registry: SqlOperatorRegistry | None = None,
    allowed_fields: Collection[str] | None = None,
    table: str = "",
) -> CompiledPredicate:
    """
    Compile a filter expression into a WHERE fragment (without ``WHERE``).

    Args:
        expr: The filter expression.  Anything other than a mapping
            compiles to an empty fragment.
        start_param_index: Number of the first placeholder to emit.
        registry: Optional custom operator registry.  Falls back to
            ``DEFAULT_REGISTRY``.
        allowed_fields: When given, every field key at any depth must be
            one of these.
        table: Table name used in ``FieldNotFoundError`` messages.

    Returns:
        ``CompiledPredicate(sql, params, next_param_index)``.  ``sql`` is
        empty when the expression contributes no predicate.

    Raises:
        FilterCompileError: On malformed expressions or unknown operators.
        FieldNotFoundError: On a field outside ``allowed_fields``.
    """
    compiler = _Compiler(registry or DEFAULT_REGISTRY, allowed_fields, table)
    result = compiler.compile_node(expr, start_param_index, path="")
    logger.debug(
        "Compiled filter: %s params=%s next=%d",
        result.sql,
        result.params,
        result.next_param_index,
    )
    return result


# ---------------------------------------------------------------------------
# Internal compilation
# ---------------------------------------------------------------------------


class _Compiler:
    def __init__(
        self,
        registry: SqlOperatorRegistry,
        allowed_fields: Collection[str] | None,
        table: str,
    ) -> None:
        self._registry = registry
        self._allowed = set(allowed_fields) if allowed_fields is not None else None
        self._table = table

    def compile_node(self, expr: Any, index: int, path: str) -> CompiledPredicate:
        if not isinstance(expr, Mapping):
            return CompiledPredicate("", [], index)

        parts: list[str] = []
        params: list[Any] = []

        for key, value in expr.items():
            if key in (_OR, _AND):
                continue
            index = self._compile_field(key, value, index, path, parts, params)

        or_children = self._logical_children(expr, _OR, path)
        if or_children is not None:
            if not or_children:
                # an empty disjunction matches nothing
                parts.append("FALSE")
            else:
                sub, sub_params, index = self._compile_children(
                    or_children, index, f"{path}{_OR}"
                )
                if sub:
                    parts.append(f"({' OR '.join(sub)})")
                    params.extend(sub_params)

        and_children = self._logical_children(expr, _AND, path)
        if and_children:
            sub, sub_params, index = self._compile_children(
                and_children, index, f"{path}{_AND}"
            )
            if sub:
                parts.append(f"({' AND '.join(sub)})")
                params.extend(sub_params)

        return CompiledPredicate(" AND ".join(parts), params, index)

    def _compile_children(
        self, children: list[Any], index: int, path: str
    ) -> tuple[list[str], list[Any], int]:
        fragments: list[str] = []
        params: list[Any] = []
        for i, child in enumerate(children):
            child_path = f"{path}[{i}]"
            if not isinstance(child, Mapping):
                raise InvalidFilterError(
                    f"Expected a filter object, got {type(child).__name__}",
                    path=child_path,
                )
            result = self.compile_node(child, index, f"{child_path}.")
            if result.sql:
                fragments.append(result.sql)
                params.extend(result.params)
                index = result.next_param_index
        return fragments, params, index

    def _logical_children(
        self, expr: Mapping[str, Any], key: str, path: str
    ) -> list[Any] | None:
        value = expr.get(key)
        if value is None:
            return None
        if not isinstance(value, (list, tuple)):
            raise InvalidFilterError(
                f"{key} expects a list of filter objects", path=f"{path}{key}"
            )
        return list(value)

    def _compile_field(
        self,
        key: str,
        value: Any,
        index: int,
        path: str,
        parts: list[str],
        params: list[Any],
    ) -> int:
        if not isinstance(key, str) or not key:
            raise InvalidFilterError(f"Invalid field name {key!r}", path=path or None)
        if self._allowed is not None and key not in self._allowed:
            raise FieldNotFoundError(key, self._table, sorted(self._allowed))

        column = quote_ident(key)

        if value is None:
            parts.append(f"{column} IS NULL")
            return index

        if not isinstance(value, Mapping):
            parts.append(f"{column} = {placeholder(index)}")
            params.append(value)
            return index + 1

        for op, operand in value.items():
            op_path = f"{path}{key}.{op}"
            try:
                clause = self._registry.apply(op, column, operand, index)
            except FilterCompileError as exc:
                if exc.path is None:
                    exc.path = op_path
                raise
            if clause is None:
                continue
            parts.append(clause.sql)
            params.extend(clause.params)
            index += len(clause.params)
        return index
