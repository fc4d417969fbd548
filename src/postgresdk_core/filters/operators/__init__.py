"""
Built-in operator implementations and default registry.

Usage::

    from postgresdk_core.filters.operators import DEFAULT_REGISTRY

    clause = DEFAULT_REGISTRY.apply("$gt", '"age"', 65, 1)
"""

from __future__ import annotations

from ..strategy import SqlOperatorRegistry
from .jsonb import (
    JsonbContainedByOperator,
    JsonbContainsOperator,
    JsonbHasAllKeysOperator,
    JsonbHasAnyKeysOperator,
    JsonbHasKeyOperator,
    JsonbPathOperator,
)
from .null import IsNotNullOperator, IsNullOperator
from .set import InOperator, NotInOperator
from .standard import (
    EqualOperator,
    GreaterEqualOperator,
    GreaterThanOperator,
    LessEqualOperator,
    LessThanOperator,
    NotEqualOperator,
)
from .string import ILikeOperator, LikeOperator


def build_default_registry() -> SqlOperatorRegistry:
    """Create a registry with all built-in operators."""
    registry = SqlOperatorRegistry()
    registry.register_all(
        # Standard comparison
        EqualOperator(),
        NotEqualOperator(),
        GreaterThanOperator(),
        GreaterEqualOperator(),
        LessThanOperator(),
        LessEqualOperator(),
        # Set
        InOperator(),
        NotInOperator(),
        # String
        LikeOperator(),
        ILikeOperator(),
        # Null
        IsNullOperator(),
        IsNotNullOperator(),
        # JSONB
        JsonbContainsOperator(),
        JsonbContainedByOperator(),
        JsonbHasKeyOperator(),
        JsonbHasAnyKeysOperator(),
        JsonbHasAllKeysOperator(),
        JsonbPathOperator(),
    )
    return registry


DEFAULT_REGISTRY: SqlOperatorRegistry = build_default_registry()

__all__ = [
    "DEFAULT_REGISTRY",
    "build_default_registry",
    "SqlOperatorRegistry",
]
