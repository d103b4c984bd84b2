"""End-to-end scenarios: DSL source in, validated (and defaulted) record out."""

import pytest

import schemaforge
from schemaforge import ValidationError, parse_rules, validate_object


class TestScenarios:
    def test_happy_path_fills_default(self):
        record = {}
        validate_object(record, parse_rules("(age:int[0,150]=30)"))
        assert record == {"age": 30}

    def test_exclusive_range(self):
        rules = parse_rules("(score:float(0,100))")

        with pytest.raises(ValidationError, match="score value"):
            validate_object({"score": 0.0}, rules)
        validate_object({"score": 0.0001}, rules)

    def test_union(self):
        rules = parse_rules("(id:int|float)")

        validate_object({"id": 1}, rules)
        validate_object({"id": 1.5}, rules)
        with pytest.raises(ValidationError):
            validate_object({"id": "x"}, rules)

    def test_enum_default(self):
        rules = parse_rules('(role:string enum("admin","user")=user)')

        record = {}
        validate_object(record, rules)
        assert record == {"role": "user"}

        with pytest.raises(ValidationError, match="role value"):
            validate_object({"role": "other"}, rules)

    def test_nested_object_and_array(self):
        rules = parse_rules("(p:object(tags:array<string[1,10]>))")

        validate_object({"p": {"tags": ["ok"]}}, rules)
        with pytest.raises(ValidationError, match=r"tags\[1\] length 16"):
            validate_object({"p": {"tags": ["ok", "bad_tag_too_long"]}}, rules)

    def test_regex(self):
        rules = parse_rules('(u:string regex("^[a-z]+$"))')

        validate_object({"u": "abc"}, rules)
        with pytest.raises(ValidationError):
            validate_object({"u": "Ab"}, rules)


class TestPublicApi:
    def test_errors_share_a_base(self):
        for error in (
            schemaforge.LexerError,
            schemaforge.ParseError,
            schemaforge.ValidationError,
            schemaforge.DataError,
            schemaforge.SchemaFileError,
        ):
            assert issubclass(error, schemaforge.SchemaForgeError)

    def test_parse_error_is_catchable_as_base(self):
        with pytest.raises(schemaforge.SchemaForgeError):
            parse_rules("(age:integer)")

    def test_check_object(self):
        rules = parse_rules("(age:int[0,150]=30)")
        assert schemaforge.check_object({}, rules).valid
        assert not schemaforge.check_object({"age": -1}, rules).valid

    def test_shared_rules_across_threads(self):
        from concurrent.futures import ThreadPoolExecutor

        rules = parse_rules('(tag:string regex("^t[0-9]+$")=t0, n:int[0,100])')
        records = [{"n": i} for i in range(200)]

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda r: schemaforge.check_object(r, rules), records))

        assert sum(r.valid for r in results) == 101
        assert all(r["tag"] == "t0" for r in records)
