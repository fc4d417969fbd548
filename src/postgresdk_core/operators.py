from enum import Enum


class FilterOperator(str, Enum):
    """Operator vocabulary of filter expressions."""

    # Standard comparison
    EQ = "$eq"
    NE = "$ne"
    GT = "$gt"
    GTE = "$gte"
    LT = "$lt"
    LTE = "$lte"

    # Set membership
    IN = "$in"
    NIN = "$nin"

    # String matching
    LIKE = "$like"
    ILIKE = "$ilike"

    # Null checks
    IS = "$is"
    IS_NOT = "$isNot"

    # JSONB operations
    JSONB_CONTAINS = "$jsonbContains"
    JSONB_CONTAINED_BY = "$jsonbContainedBy"
    JSONB_HAS_KEY = "$jsonbHasKey"
    JSONB_HAS_ANY_KEYS = "$jsonbHasAnyKeys"
    JSONB_HAS_ALL_KEYS = "$jsonbHasAllKeys"
    JSONB_PATH = "$jsonbPath"

    # Logical operators
    AND = "$and"
    OR = "$or"

    def __str__(self) -> str:
        return self.value


LOGICAL_OPERATORS = frozenset({FilterOperator.AND.value, FilterOperator.OR.value})
