"""Field selection services."""

from .field_selector import (
    FieldExpressionError,
    FieldRange,
    FieldRangeOrderError,
    FieldSelection,
    FieldSelector,
)

__all__ = [
    "FieldExpressionError",
    "FieldRange",
    "FieldRangeOrderError",
    "FieldSelection",
    "FieldSelector",
]
