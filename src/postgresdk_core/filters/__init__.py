"""
Filter-expression-to-SQL compilation.

Public API:
    - ``compile_where(expr, start_param_index)``: compile a filter mapping
      to a ``CompiledPredicate(sql, params, next_param_index)``
    - ``DEFAULT_REGISTRY``: the default operator registry
    - ``SqlOperator`` / ``SqlOperatorRegistry`` / ``OperatorClause``:
      extension points for custom operators
"""

from .compiler import CompiledPredicate, compile_where
from .operators import DEFAULT_REGISTRY, build_default_registry
from .strategy import OperatorClause, SqlOperator, SqlOperatorRegistry

__all__ = [
    "compile_where",
    "CompiledPredicate",
    "DEFAULT_REGISTRY",
    "build_default_registry",
    "OperatorClause",
    "SqlOperator",
    "SqlOperatorRegistry",
]
