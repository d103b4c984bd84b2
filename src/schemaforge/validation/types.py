"""Types for the SchemaForge validator."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class LengthUnit(Enum):
    """How string length is measured for range constraints.

    CHARS: Unicode code points (``len(s)``)
    BYTES: UTF-8 encoded bytes
    """

    CHARS = "chars"
    BYTES = "bytes"


@dataclass(frozen=True)
class ValidationOptions:
    """Knobs for a validation run."""

    length_unit: LengthUnit = LengthUnit.CHARS

    def string_length(self, value: str) -> int:
        if self.length_unit == LengthUnit.BYTES:
            return len(value.encode("utf-8"))
        return len(value)


DEFAULT_OPTIONS = ValidationOptions()


@dataclass
class ValidationResult:
    """Result of validating a value without raising.

    Attributes:
        valid: True if the value satisfied every rule
        error: The first error message, or None when valid
    """

    valid: bool
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"valid": self.valid}
        if self.error is not None:
            result["error"] = self.error
        return result
