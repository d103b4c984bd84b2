"""SchemaForge validation.

Usage:
    from schemaforge.dsl import parse_rules
    from schemaforge.validation import validate_object

    rules = parse_rules("(age:int[0,150]=30)")
    record = {}
    validate_object(record, rules)  # record == {"age": 30}
"""

from schemaforge.core.errors import ValidationError
from schemaforge.validation.formats import FORMAT_PATTERNS, is_valid_uri, validate_type
from schemaforge.validation.types import LengthUnit, ValidationOptions, ValidationResult
from schemaforge.validation.validator import check_object, validate_field, validate_object

__all__ = [
    "FORMAT_PATTERNS",
    "LengthUnit",
    "ValidationError",
    "ValidationOptions",
    "ValidationResult",
    "check_object",
    "is_valid_uri",
    "validate_field",
    "validate_object",
    "validate_type",
]
