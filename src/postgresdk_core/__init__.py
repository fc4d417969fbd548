"""postgresdk-core: runtime core of the generated PostgreSQL CRUD routes.

Filter-expression compiler, list/paginate/vector-search engine and the
point CRUD operations.  Database drivers live in ``postgresdk_core.adapters``.
"""

from __future__ import annotations

from .columns import build_column_list
from .context import OperationContext
from .exceptions import (
    FieldNotFoundError,
    FilterCompileError,
    InvalidFilterError,
    PostgreSDKError,
    PrimaryKeyError,
    ProjectionError,
    UnsupportedOperatorError,
)
from .filters import (
    DEFAULT_REGISTRY,
    CompiledPredicate,
    OperatorClause,
    SqlOperator,
    SqlOperatorRegistry,
    build_default_registry,
    compile_where,
)
from .models import (
    ListParams,
    ListResult,
    OperationResult,
    SortDirection,
    VectorMetric,
    VectorSearch,
)
from .operations import (
    create_record,
    delete_record,
    get_by_pk,
    list_records,
    update_record,
)
from .operators import FilterOperator
from .planner import ListQueryPlan, distance_operator, plan_list_query
from .ports import DatabaseClient

__all__: list[str] = [
    # Operations
    "create_record",
    "get_by_pk",
    "list_records",
    "update_record",
    "delete_record",
    # Context / ports
    "OperationContext",
    "DatabaseClient",
    # Parameters and results
    "ListParams",
    "VectorSearch",
    "VectorMetric",
    "SortDirection",
    "OperationResult",
    "ListResult",
    # Compiler
    "compile_where",
    "CompiledPredicate",
    "FilterOperator",
    "DEFAULT_REGISTRY",
    "build_default_registry",
    "OperatorClause",
    "SqlOperator",
    "SqlOperatorRegistry",
    # Planning
    "build_column_list",
    "plan_list_query",
    "ListQueryPlan",
    "distance_operator",
    # Exceptions
    "PostgreSDKError",
    "FilterCompileError",
    "InvalidFilterError",
    "UnsupportedOperatorError",
    "FieldNotFoundError",
    "ProjectionError",
    "PrimaryKeyError",
]
