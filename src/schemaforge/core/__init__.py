"""Rule tree, value model and errors shared across SchemaForge."""

from schemaforge.core.errors import (
    DataError,
    LexerError,
    ParseError,
    SchemaFileError,
    SchemaForgeError,
    ValidationError,
)
from schemaforge.core.types import (
    Constraint,
    FieldRule,
    FieldType,
    RangeConstraint,
    RegexConstraint,
)
from schemaforge.core.values import ValueKind, from_native, kind_of, values_equal

__all__ = [
    # Errors
    "DataError",
    "LexerError",
    "ParseError",
    "SchemaFileError",
    "SchemaForgeError",
    "ValidationError",
    # Rule tree
    "Constraint",
    "FieldRule",
    "FieldType",
    "RangeConstraint",
    "RegexConstraint",
    # Values
    "ValueKind",
    "from_native",
    "kind_of",
    "values_equal",
]
