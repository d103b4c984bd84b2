"""The value model validated by SchemaForge.

Decoded data is represented with plain Python objects:

- str -> STRING
- int -> INT, signed 64-bit (``bool`` is excluded even though it subclasses ``int``)
- float -> FLOAT
- bool -> BOOL
- dict[str, Value] -> OBJECT
- list[Value] -> ARRAY

Anything else (``None``, tuples, dates, ...) is outside the model.
"""

from datetime import date, datetime, time
from enum import Enum
from typing import Any

from schemaforge.core.errors import DataError

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class ValueKind(Enum):
    """Kinds of values in a decoded value tree."""

    STRING = "string"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    OBJECT = "object"
    ARRAY = "array"


def kind_of(value: Any) -> ValueKind | None:
    """Classify a value, or return None if it is not part of the model."""
    # bool first: isinstance(True, int) holds
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, int):
        return ValueKind.INT
    if isinstance(value, float):
        return ValueKind.FLOAT
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, dict):
        return ValueKind.OBJECT
    if isinstance(value, list):
        return ValueKind.ARRAY
    return None


def values_equal(left: Any, right: Any) -> bool:
    """Structural equality that never mixes kinds.

    Python would consider ``1 == 1.0`` and ``True == 1``; the value model
    does not.
    """
    kind = kind_of(left)
    if kind is None or kind != kind_of(right):
        return False

    if kind == ValueKind.OBJECT:
        if left.keys() != right.keys():
            return False
        return all(values_equal(left[key], right[key]) for key in left)

    if kind == ValueKind.ARRAY:
        if len(left) != len(right):
            return False
        return all(values_equal(a, b) for a, b in zip(left, right))

    return left == right


def from_native(data: Any, path: str = "$") -> Any:
    """Normalize decoder output into the value model.

    JSON output already conforms. YAML adds timestamps, which become ISO
    strings. ``None`` and other foreign objects raise DataError.

    Args:
        data: Output of ``json.load`` or ``yaml.safe_load``
        path: Location used in error messages

    Returns:
        A value tree made of str, int, float, bool, dict and list
    """
    if isinstance(data, (datetime, date, time)):
        return data.isoformat()

    kind = kind_of(data)
    if kind is None:
        if data is None:
            raise DataError(f"Unsupported null value at {path}")
        raise DataError(f"Unsupported value {data!r} at {path}")

    if kind == ValueKind.INT and not INT64_MIN <= data <= INT64_MAX:
        raise DataError(f"Integer at {path} out of 64-bit range")

    if kind == ValueKind.OBJECT:
        result = {}
        for key, item in data.items():
            if not isinstance(key, str):
                raise DataError(f"Object key {key!r} at {path} is not a string")
            result[key] = from_native(item, f"{path}.{key}")
        return result

    if kind == ValueKind.ARRAY:
        return [from_native(item, f"{path}[{i}]") for i, item in enumerate(data)]

    return data
