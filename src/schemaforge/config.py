"""Runtime configuration for the SchemaForge CLI and loaders."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from schemaforge.validation.types import LengthUnit, ValidationOptions

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class SchemaForgeConfig:
    """Settings resolved from the environment.

    Attributes:
        log_level: Name of the logging level the CLI configures
        length_unit: How string range constraints measure length
        schema_dir: Directory scanned for ``*.sf`` schema files
    """

    log_level: str = "WARNING"
    length_unit: LengthUnit = LengthUnit.CHARS
    schema_dir: Path = field(default_factory=lambda: Path("schemas"))

    @classmethod
    def from_env(cls) -> SchemaForgeConfig:
        """Create config from environment variables.

        - SCHEMAFORGE_LOG_LEVEL: DEBUG, INFO, WARNING (default), ERROR, CRITICAL
        - SCHEMAFORGE_LENGTH_UNIT: chars (default) or bytes
        - SCHEMAFORGE_SCHEMA_DIR: schema directory (default: ./schemas)

        Raises:
            ValueError: For unsupported values
        """
        log_level = os.environ.get("SCHEMAFORGE_LOG_LEVEL", "WARNING").upper()
        if log_level not in _LOG_LEVELS:
            raise ValueError(f"Unsupported SCHEMAFORGE_LOG_LEVEL: {log_level}")

        unit = os.environ.get("SCHEMAFORGE_LENGTH_UNIT", LengthUnit.CHARS.value).lower()
        try:
            length_unit = LengthUnit(unit)
        except ValueError:
            raise ValueError(f"Unsupported SCHEMAFORGE_LENGTH_UNIT: {unit}") from None

        schema_dir = Path(os.environ.get("SCHEMAFORGE_SCHEMA_DIR", "schemas"))

        return cls(log_level=log_level, length_unit=length_unit, schema_dir=schema_dir)

    @property
    def logging_level(self) -> int:
        return getattr(logging, self.log_level)

    def validation_options(self) -> ValidationOptions:
        return ValidationOptions(length_unit=self.length_unit)
