"""SchemaForge: schema validation driven by a compact field DSL.

Usage:
    import schemaforge

    rules = schemaforge.parse_rules('(role:string enum("admin","user")=user)')
    record = {}
    schemaforge.validate_object(record, rules)  # record == {"role": "user"}
"""

from schemaforge.core.errors import (
    DataError,
    LexerError,
    ParseError,
    SchemaFileError,
    SchemaForgeError,
    ValidationError,
)
from schemaforge.core.types import FieldRule, FieldType, RangeConstraint, RegexConstraint
from schemaforge.dsl.parser import parse_rules
from schemaforge.validation.types import LengthUnit, ValidationOptions, ValidationResult
from schemaforge.validation.validator import check_object, validate_field, validate_object

__version__ = "0.1.0"

__all__ = [
    "DataError",
    "FieldRule",
    "FieldType",
    "LengthUnit",
    "LexerError",
    "ParseError",
    "RangeConstraint",
    "RegexConstraint",
    "SchemaFileError",
    "SchemaForgeError",
    "ValidationError",
    "ValidationOptions",
    "ValidationResult",
    "check_object",
    "parse_rules",
    "validate_field",
    "validate_object",
]
