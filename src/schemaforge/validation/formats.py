"""Built-in formats for semantic field types.

Each semantic string type validates against a fixed pattern, matched over
the whole value with Python's ``re`` module. ``uri`` is checked with
pydantic's URL parser instead of a pattern.
"""

import re
from typing import Any

from pydantic import AnyUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from schemaforge.core.types import FieldType
from schemaforge.core.values import ValueKind, kind_of


# =============================================================================
# Format Patterns
# =============================================================================

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

UUID_PATTERN = re.compile(
    r"^[0-9a-fA-F]{8}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{12}$"
)

# IPv4 dotted quad, octets 0-255
IP_PATTERN = re.compile(
    r"^((25[0-5]|2[0-4]\d|[01]?\d\d?)\.){3}(25[0-5]|2[0-4]\d|[01]?\d\d?)$"
)

MAC_PATTERN = re.compile(r"^([0-9A-Fa-f]{2}[:-]){5}([0-9A-Fa-f]{2})$")

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

DATETIME_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z?$")

TIME_PATTERN = re.compile(r"^\d{2}:\d{2}:\d{2}$")

COLOR_PATTERN = re.compile(r"^#([0-9a-fA-F]{6}|[0-9a-fA-F]{3})$")

# RFC 1123 labels, 1-253 chars overall, alphabetic TLD
HOSTNAME_PATTERN = re.compile(
    r"^(?=.{1,253}$)(?:[a-zA-Z0-9_](?:[a-zA-Z0-9_-]{0,61}[a-zA-Z0-9])?\.)+[a-zA-Z]{2,63}$"
)

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")

HEX_PATTERN = re.compile(r"^[0-9a-fA-F]+$")

BASE64_PATTERN = re.compile(r"^[A-Za-z0-9+/]+={0,2}$")

FORMAT_PATTERNS: dict[FieldType, re.Pattern] = {
    FieldType.EMAIL: EMAIL_PATTERN,
    FieldType.UUID: UUID_PATTERN,
    FieldType.IP: IP_PATTERN,
    FieldType.MAC: MAC_PATTERN,
    FieldType.DATE: DATE_PATTERN,
    FieldType.DATETIME: DATETIME_PATTERN,
    FieldType.TIME: TIME_PATTERN,
    FieldType.COLOR: COLOR_PATTERN,
    FieldType.HOSTNAME: HOSTNAME_PATTERN,
    FieldType.SLUG: SLUG_PATTERN,
    FieldType.HEX: HEX_PATTERN,
    FieldType.BASE64: BASE64_PATTERN,
}

_URL_ADAPTER = TypeAdapter(AnyUrl)

# Types that accept exactly one value kind
_KIND_TYPES: dict[FieldType, ValueKind] = {
    FieldType.STRING: ValueKind.STRING,
    FieldType.INT: ValueKind.INT,
    FieldType.FLOAT: ValueKind.FLOAT,
    FieldType.BOOL: ValueKind.BOOL,
    FieldType.OBJECT: ValueKind.OBJECT,
    FieldType.ARRAY: ValueKind.ARRAY,
    FieldType.TIMESTAMP: ValueKind.INT,
    FieldType.PASSWORD: ValueKind.STRING,
    FieldType.TOKEN: ValueKind.STRING,
}


def is_valid_uri(value: str) -> bool:
    """True if pydantic's URL parser accepts the value."""
    try:
        _URL_ADAPTER.validate_python(value)
    except PydanticValidationError:
        return False
    return True


def validate_type(value: Any, field_type: FieldType) -> str | None:
    """Check a value against a field type. Returns error message or None."""
    kind = kind_of(value)

    expected = _KIND_TYPES.get(field_type)
    if expected is not None:
        if kind == expected:
            return None
        if field_type in (FieldType.TIMESTAMP, FieldType.PASSWORD, FieldType.TOKEN):
            return f"Not {expected.value} for {field_type.value}"
        return f"Not {expected.value}"

    if kind != ValueKind.STRING:
        return f"Not string for {field_type.value}"

    if field_type == FieldType.URI:
        if not is_valid_uri(value):
            return f"{value} is not a valid URI"
        return None

    if not FORMAT_PATTERNS[field_type].fullmatch(value):
        return f"Invalid {field_type.value}: {value}"
    return None
