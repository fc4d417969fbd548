"""
Request parameters and result envelopes.

``ListParams`` / ``VectorSearch`` validate the request-scoped list
parameters (wire spelling ``orderBy`` / ``maxDistance`` or the Python
spelling).  ``OperationResult`` / ``ListResult`` are what the operations
return; ``to_dict()`` produces the wire shape.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

MAX_LIMIT = 1000
DEFAULT_LIMIT = 50


class VectorMetric(str, Enum):
    """pgvector distance metrics."""

    COSINE = "cosine"
    L2 = "l2"
    INNER = "inner"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class VectorSearch(BaseModel):
    """Nearest-neighbour search over one embedding column."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    field: str = Field(..., min_length=1)
    query: list[float] = Field(..., min_length=1)
    metric: VectorMetric = VectorMetric.COSINE
    max_distance: float | None = Field(default=None, alias="maxDistance")


class ListParams(BaseModel):
    """
    Parameters of a list request.

    Attributes:
        where: Filter expression (see ``compile_where``).
        limit: Page size, 1..1000.
        offset: Rows to skip.
        order_by: Column name or ordered list of column names.
        order: ``asc``/``desc`` for every column, or a list parallel to
            ``order_by``.  Missing entries default to ``asc``.
        vector: Optional nearest-neighbour search.  Ordering is then always
            by ascending distance.
        include: Relationship include spec, passed through untouched.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    where: dict[str, Any] | None = None
    limit: int = Field(default=DEFAULT_LIMIT, gt=0, le=MAX_LIMIT)
    offset: int = Field(default=0, ge=0)
    order_by: str | list[str] | None = Field(default=None, alias="orderBy")
    order: SortDirection | list[SortDirection] | None = None
    vector: VectorSearch | None = None
    include: Any = None

    @field_validator("order", mode="before")
    @classmethod
    def _lowercase_order(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.lower()
        if isinstance(value, (list, tuple)):
            return [v.lower() if isinstance(v, str) else v for v in value]
        return value

    def order_clauses(self) -> list[tuple[str, SortDirection]]:
        """Pair every ``order_by`` column with its direction."""
        if not self.order_by:
            return []
        columns = [self.order_by] if isinstance(self.order_by, str) else self.order_by
        if isinstance(self.order, list):
            directions = self.order
        else:
            directions = [self.order or SortDirection.ASC] * len(columns)
        return [
            (col, directions[i] if i < len(directions) else SortDirection.ASC)
            for i, col in enumerate(columns)
        ]


def validation_issues(exc: PydanticValidationError) -> list[dict[str, Any]]:
    """Flatten a pydantic error into ``[{"path": [...], "message": ...}]``."""
    return [
        {
            "path": list(error.get("loc", ())),
            "message": error.get("msg", "validation error"),
            "code": error.get("type"),
        }
        for error in exc.errors()
    ]


# ---------------------------------------------------------------------------
# Result envelopes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class OperationResult:
    """Result of a point operation (create / get / update / delete)."""

    status: int
    data: dict[str, Any] | None = None
    error: str | None = None
    issues: list[dict[str, Any]] | None = None
    stack: str | None = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"status": self.status}
        if self.error is None or self.data is not None:
            payload["data"] = self.data
        if self.error is not None:
            payload["error"] = self.error
        if self.issues is not None:
            payload["issues"] = self.issues
        if self.stack is not None:
            payload["stack"] = self.stack
        return payload


@dataclass(frozen=True)
class ListResult:
    """Result of a list operation: one page plus pagination metadata."""

    status: int
    data: list[dict[str, Any]] | None = None
    total: int | None = None
    limit: int | None = None
    offset: int | None = None
    has_more: bool | None = None
    needs_includes: bool = False
    include_spec: Any = None
    error: str | None = None
    issues: list[dict[str, Any]] | None = None
    stack: str | None = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def to_dict(self) -> dict[str, Any]:
        if self.error is not None:
            payload: dict[str, Any] = {"error": self.error, "status": self.status}
            if self.issues is not None:
                payload["issues"] = self.issues
            if self.stack is not None:
                payload["stack"] = self.stack
            return payload
        return {
            "data": self.data,
            "total": self.total,
            "limit": self.limit,
            "offset": self.offset,
            "hasMore": self.has_more,
            "needsIncludes": self.needs_includes,
            "includeSpec": self.include_spec,
            "status": self.status,
        }
