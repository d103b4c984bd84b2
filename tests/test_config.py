"""Tests for environment-driven configuration."""

import logging
from pathlib import Path

import pytest

from schemaforge.config import SchemaForgeConfig
from schemaforge.validation.types import LengthUnit


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("SCHEMAFORGE_LOG_LEVEL", "SCHEMAFORGE_LENGTH_UNIT", "SCHEMAFORGE_SCHEMA_DIR"):
        monkeypatch.delenv(name, raising=False)


class TestFromEnv:
    def test_defaults(self):
        config = SchemaForgeConfig.from_env()

        assert config.log_level == "WARNING"
        assert config.logging_level == logging.WARNING
        assert config.length_unit == LengthUnit.CHARS
        assert config.schema_dir == Path("schemas")

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("SCHEMAFORGE_LOG_LEVEL", "debug")
        monkeypatch.setenv("SCHEMAFORGE_LENGTH_UNIT", "BYTES")
        monkeypatch.setenv("SCHEMAFORGE_SCHEMA_DIR", "/etc/schemas")

        config = SchemaForgeConfig.from_env()

        assert config.logging_level == logging.DEBUG
        assert config.length_unit == LengthUnit.BYTES
        assert config.schema_dir == Path("/etc/schemas")

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("SCHEMAFORGE_LOG_LEVEL", "LOUD")
        with pytest.raises(ValueError, match="SCHEMAFORGE_LOG_LEVEL"):
            SchemaForgeConfig.from_env()

    def test_invalid_length_unit(self, monkeypatch):
        monkeypatch.setenv("SCHEMAFORGE_LENGTH_UNIT", "graphemes")
        with pytest.raises(ValueError, match="SCHEMAFORGE_LENGTH_UNIT"):
            SchemaForgeConfig.from_env()


class TestValidationOptions:
    def test_carries_length_unit(self):
        config = SchemaForgeConfig(length_unit=LengthUnit.BYTES)
        options = config.validation_options()

        assert options.length_unit == LengthUnit.BYTES
        assert options.string_length("é") == 2
