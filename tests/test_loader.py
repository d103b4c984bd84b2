"""Tests for schema and data file loading."""

import json

import pytest

from schemaforge.core.errors import DataError, SchemaFileError
from schemaforge.core.types import FieldType
from schemaforge.loader import SchemaLoader, dump_data_file, load_data_file, load_schema_file


@pytest.fixture
def schema_dir(tmp_path):
    directory = tmp_path / "schemas"
    directory.mkdir()
    (directory / "user.sf").write_text(
        '(name:string[1,50], role:string enum("admin","user")=user)'
    )
    (directory / "point.sf").write_text("(x:float, y:float)")
    (directory / "README.txt").write_text("not a schema")
    return directory


class TestLoadSchemaFile:
    def test_parses_file(self, schema_dir):
        rules = load_schema_file(schema_dir / "user.sf")

        assert [r.field for r in rules] == ["name", "role"]
        assert rules[1].default == "user"

    def test_parse_error_names_file(self, tmp_path):
        path = tmp_path / "bad.sf"
        path.write_text("(age:integer)")

        with pytest.raises(SchemaFileError, match="bad.sf: Unknown type integer") as exc_info:
            load_schema_file(path)
        assert exc_info.value.path == path

    def test_missing_file(self, tmp_path):
        with pytest.raises(SchemaFileError, match="cannot read schema"):
            load_schema_file(tmp_path / "missing.sf")

    def test_not_utf8(self, tmp_path):
        path = tmp_path / "latin1.sf"
        path.write_bytes(b"(caf\xe9:string)")

        with pytest.raises(SchemaFileError, match="latin1.sf: cannot decode schema"):
            load_schema_file(path)


class TestSchemaLoader:
    def test_load_all(self, schema_dir):
        loader = SchemaLoader(schema_dir)
        loader.load_all()

        assert loader.list_schemas() == ["point", "user"]
        assert loader.get("point")[0].field_type == FieldType.FLOAT
        assert loader.get("missing") is None

    def test_skips_other_files_with_warning(self, schema_dir, caplog):
        loader = SchemaLoader(schema_dir)
        with caplog.at_level("WARNING", logger="schemaforge.loader"):
            loader.load_all()

        assert "Skipping non-schema file" in caplog.text

    def test_missing_directory(self, tmp_path):
        loader = SchemaLoader(tmp_path / "nope")
        with pytest.raises(SchemaFileError, match="schema directory not found"):
            loader.load_all()

    def test_bad_schema_aborts(self, schema_dir):
        (schema_dir / "broken.sf").write_text("(a:int,)")
        with pytest.raises(SchemaFileError, match="broken.sf"):
            SchemaLoader(schema_dir).load_all()


class TestDataFiles:
    def test_json(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text(json.dumps({"a": 1, "b": [1.5, "x"]}))

        assert load_data_file(path) == {"a": 1, "b": [1.5, "x"]}

    def test_yaml_dates_normalized(self, tmp_path):
        path = tmp_path / "data.yaml"
        path.write_text("born: 1990-05-17\nname: Ada\n")

        assert load_data_file(path) == {"born": "1990-05-17", "name": "Ada"}

    def test_yaml_null_rejected(self, tmp_path):
        path = tmp_path / "data.yml"
        path.write_text("name: ~\n")

        with pytest.raises(DataError, match=r"Unsupported null value at \$\.name"):
            load_data_file(path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text("{not json")

        with pytest.raises(DataError, match="cannot decode data"):
            load_data_file(path)

    def test_json_not_utf8(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_bytes(b"\xff\xfe{}")

        with pytest.raises(DataError, match="data.json: cannot decode data"):
            load_data_file(path)

    def test_yaml_not_utf8(self, tmp_path):
        path = tmp_path / "data.yaml"
        path.write_bytes(b"name: caf\xe9\n")

        with pytest.raises(DataError, match="data.yaml: cannot decode data"):
            load_data_file(path)

    def test_int_outside_64_bit_rejected(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text('{"age": ' + "9" * 400 + "}")

        with pytest.raises(DataError, match=r"Integer at \$\.age out of 64-bit range"):
            load_data_file(path)

    def test_yaml_dates_written_back_as_strings(self, tmp_path):
        path = tmp_path / "data.yaml"
        path.write_text("born: 1990-05-17\n")

        dump_data_file(path, load_data_file(path))

        assert path.read_text() == "born: '1990-05-17'\n"

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / "data.toml"
        path.write_text("a = 1")

        with pytest.raises(DataError, match="unsupported data file type '.toml'"):
            load_data_file(path)

    def test_dump_round_trip(self, tmp_path):
        for name in ("out.json", "out.yaml"):
            path = tmp_path / name
            dump_data_file(path, {"age": 30, "tags": ["a"]})
            assert load_data_file(path) == {"age": 30, "tags": ["a"]}
