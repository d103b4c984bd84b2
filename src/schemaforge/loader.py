"""Load schema files and data files from disk."""

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from schemaforge.core.errors import DataError, SchemaFileError, SchemaForgeError
from schemaforge.core.types import FieldRule
from schemaforge.core.values import from_native
from schemaforge.dsl.parser import parse_rules

logger = logging.getLogger(__name__)

SCHEMA_SUFFIX = ".sf"

DATA_SUFFIXES = (".json", ".yaml", ".yml")


def load_schema_file(path: Path) -> list[FieldRule]:
    """Read and parse one schema file.

    Raises:
        SchemaFileError: If the file cannot be read or does not parse
    """
    try:
        source = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SchemaFileError(path, f"cannot read schema: {e.strerror}") from e
    except UnicodeDecodeError as e:
        raise SchemaFileError(path, f"cannot decode schema: {e.reason} at byte {e.start}") from e

    try:
        rules = parse_rules(source)
    except SchemaForgeError as e:
        raise SchemaFileError(path, str(e)) from e

    logger.debug("Loaded schema %s (%d fields)", path, len(rules))
    return rules


class SchemaLoader:
    """Loads every ``*.sf`` schema in a directory, keyed by file stem.

    Usage:
        loader = SchemaLoader(Path("schemas"))
        loader.load_all()
        rules = loader.get("user")
    """

    def __init__(self, schema_path: Path):
        self.schema_path = schema_path
        self._schemas: dict[str, list[FieldRule]] = {}

    def load_all(self) -> None:
        """Load all schema files in the directory."""
        if not self.schema_path.is_dir():
            raise SchemaFileError(self.schema_path, "schema directory not found")

        self._schemas.clear()
        for path in sorted(self.schema_path.iterdir()):
            if path.suffix != SCHEMA_SUFFIX:
                if path.is_file():
                    logger.warning("Skipping non-schema file %s", path)
                continue
            self._schemas[path.stem] = load_schema_file(path)

    def get(self, name: str) -> list[FieldRule] | None:
        return self._schemas.get(name)

    def list_schemas(self) -> list[str]:
        return list(self._schemas.keys())


def load_data_file(path: Path) -> Any:
    """Decode a JSON or YAML data file into the value model.

    Raises:
        DataError: For unknown suffixes, decode errors, or values outside the model
    """
    suffix = path.suffix.lower()
    if suffix not in DATA_SUFFIXES:
        raise DataError(f"{path}: unsupported data file type '{suffix}'")

    try:
        with path.open(encoding="utf-8") as f:
            if suffix == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except OSError as e:
        raise DataError(f"{path}: cannot read data: {e.strerror}") from e
    except UnicodeDecodeError as e:
        raise DataError(f"{path}: cannot decode data: {e.reason} at byte {e.start}") from e
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise DataError(f"{path}: cannot decode data: {e}") from e

    try:
        return from_native(data)
    except DataError as e:
        raise DataError(f"{path}: {e}") from e


def dump_data_file(path: Path, value: Any) -> None:
    """Write a value back in the format implied by the file suffix."""
    with path.open("w", encoding="utf-8") as f:
        if path.suffix.lower() == ".json":
            json.dump(value, f, indent=2, ensure_ascii=False)
            f.write("\n")
        else:
            yaml.safe_dump(value, f, sort_keys=False, allow_unicode=True)
