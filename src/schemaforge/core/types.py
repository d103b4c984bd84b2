"""Rule tree types shared by the DSL parser and the validator.

A parsed schema is an ordered list of FieldRule nodes. Nodes are frozen and
hold their sequences as tuples, so a rule tree can be shared between
validations (and threads) once the parser has built it.
"""

import re
from dataclasses import dataclass, field as dataclass_field
from enum import Enum
from functools import cached_property
from typing import Any


class FieldType(Enum):
    """Terminal types a field can declare."""

    STRING = "string"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    OBJECT = "object"
    ARRAY = "array"

    # Semantic string types (validated against a built-in format)
    EMAIL = "email"
    URI = "uri"
    UUID = "uuid"
    IP = "ip"
    MAC = "mac"
    DATE = "date"
    DATETIME = "datetime"
    TIME = "time"
    COLOR = "color"
    HOSTNAME = "hostname"
    SLUG = "slug"
    HEX = "hex"
    BASE64 = "base64"
    PASSWORD = "password"
    TOKEN = "token"

    # Integer-backed semantic type
    TIMESTAMP = "timestamp"

    @classmethod
    def from_name(cls, name: str) -> "FieldType | None":
        """Resolve a DSL type keyword, or None if it is not a type."""
        try:
            return cls(name)
        except ValueError:
            return None

    @property
    def is_string_family(self) -> bool:
        """True for types whose values are strings."""
        return self not in _NON_STRING_TYPES


_NON_STRING_TYPES = frozenset({
    FieldType.INT,
    FieldType.FLOAT,
    FieldType.BOOL,
    FieldType.OBJECT,
    FieldType.ARRAY,
    FieldType.TIMESTAMP,
})


@dataclass(frozen=True)
class RangeConstraint:
    """Numeric range, or string length range.

    Bounds are values coerced from the declared field type: ints or floats
    for numeric fields, digit strings for string fields.
    """

    min: Any
    max: Any
    min_inclusive: bool = True
    max_inclusive: bool = True

    def describe(self) -> str:
        left = "[" if self.min_inclusive else "("
        right = "]" if self.max_inclusive else ")"
        return f"{left}{self.min}, {self.max}{right}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": "range",
            "min": self.min,
            "max": self.max,
            "minInclusive": self.min_inclusive,
            "maxInclusive": self.max_inclusive,
        }


@dataclass(frozen=True)
class RegexConstraint:
    """Pattern a string value must contain a match for."""

    pattern: str

    @cached_property
    def compiled(self) -> re.Pattern:
        """The compiled pattern; raises re.error for invalid patterns."""
        return re.compile(self.pattern)

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "regex", "pattern": self.pattern}


Constraint = RangeConstraint | RegexConstraint


@dataclass(frozen=True)
class FieldRule:
    """One node of the rule tree.

    Attributes:
        field: Declared name; empty for the element rule of an array
        field_type: Primary type (first member of a union)
        required: False when the declaration carried a '?' marker
        default: Value inserted into objects that lack the field
        enum_values: Admissible values, always strings
        union_types: All allowed types when two or more were declared
        constraints: Ranges and patterns, applied in order
        rule: Element rule of an ``array<...>`` declaration
        children: Field rules of an ``object(...)`` declaration
        is_array: True iff field_type is ARRAY
    """

    field: str
    field_type: FieldType
    required: bool = True
    default: Any = None
    enum_values: tuple[str, ...] | None = None
    union_types: tuple[FieldType, ...] | None = None
    constraints: tuple[Constraint, ...] | None = None
    rule: "FieldRule | None" = None
    children: tuple["FieldRule", ...] | None = None
    is_array: bool = dataclass_field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "is_array", self.field_type == FieldType.ARRAY)
        if self.children is not None and self.field_type != FieldType.OBJECT:
            raise ValueError(f"Field '{self.field}' has children but is not an object")
        if self.rule is not None and self.field_type != FieldType.ARRAY:
            raise ValueError(f"Field '{self.field}' has an element rule but is not an array")
        if self.union_types is not None:
            if len(self.union_types) < 2 or self.union_types[0] != self.field_type:
                raise ValueError(f"Field '{self.field}' has an invalid union")

    @property
    def is_nameless(self) -> bool:
        return self.field == ""

    def to_dict(self) -> dict[str, Any]:
        """Describe the rule as JSON-friendly data."""
        result: dict[str, Any] = {
            "field": self.field,
            "type": self.field_type.value,
            "required": self.required,
        }
        if self.union_types:
            result["union"] = [t.value for t in self.union_types]
        if self.default is not None:
            result["default"] = self.default
        if self.enum_values is not None:
            result["enum"] = list(self.enum_values)
        if self.constraints:
            result["constraints"] = [c.to_dict() for c in self.constraints]
        if self.rule is not None:
            result["items"] = self.rule.to_dict()
        if self.children is not None:
            result["children"] = [child.to_dict() for child in self.children]
        return result
