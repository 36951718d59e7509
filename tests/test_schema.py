"""
Test Suite for Schema Loading

Tests the JSON schema loader and the schema model.
"""

import json

import pytest

from rowgen.exceptions import SchemaError
from rowgen.schema import (
    ChoiceGen,
    DateGen,
    Field,
    GaussF32Gen,
    GaussGen,
    GeneratorKind,
    IntegerGen,
    NoGen,
    Schema,
    StringGen,
    check_fixed_width_layout,
    load_schema_from_file,
    parse_field,
    parse_json,
    parse_schema,
)


@pytest.fixture
def document():
    return {
        "table_name": "customers",
        "delimiter": "|",
        "fields": [
            {"name": "id", "data_type": "int", "generator": "integer", "min": 0, "max": 100},
            {"name": "score", "data_type": "float", "generator": "gauss_f32", "mean": 10, "std_dev": 2},
            {"name": "age", "data_type": "int", "generator": "gauss", "mean": 40.5, "std_dev": 12},
            {"name": "code", "data_type": "char", "generator": "choice", "choices": ["A", "BB"], "length": 2},
            {"name": "name", "data_type": "char", "generator": "string", "length": 8},
            {"name": "joined", "data_type": "date", "generator": "date"},
        ],
    }


class TestParseSchema:
    """Test whole-document parsing"""

    def test_parse_document(self, document):
        schema = parse_schema(document)

        assert schema.table_name == "customers"
        assert schema.delimiter == "|"
        assert schema.field_names == ("id", "score", "age", "code", "name", "joined")
        assert schema.fields[0].generator == IntegerGen(min=0, max=100)
        assert schema.fields[1].generator == GaussF32Gen(mean=10, std_dev=2)
        assert schema.fields[2].generator == GaussGen(mean=40.5, std_dev=12)
        assert schema.fields[4].generator == StringGen(length=8)
        assert schema.fields[5].generator == DateGen()

    def test_choice_field(self, document):
        choice = parse_schema(document).fields[3].generator

        assert isinstance(choice, ChoiceGen)
        assert choice.choices == ("A", "BB")
        assert choice.choice_length == 2
        assert choice.length == 2

    def test_parse_json_text(self, document):
        schema = parse_json(json.dumps(document))
        assert str(schema) == "customers"
        assert len(schema.fields) == 6

    def test_default_delimiter(self, document):
        del document["delimiter"]
        assert parse_schema(document).delimiter == ","

    def test_missing_table_name(self, document):
        del document["table_name"]
        with pytest.raises(SchemaError, match="Table name must be specified!"):
            parse_schema(document)

    def test_fields_not_a_list(self, document):
        document["fields"] = {"name": "id"}
        with pytest.raises(SchemaError, match="Fields must be an array."):
            parse_schema(document)

    def test_field_not_an_object(self, document):
        document["fields"].append("oops")
        with pytest.raises(SchemaError, match="Each field must be an object"):
            parse_schema(document)

    def test_invalid_json(self):
        with pytest.raises(SchemaError, match="Invalid JSON"):
            parse_json("{not json")

    def test_root_not_an_object(self):
        with pytest.raises(SchemaError):
            parse_json("[]")


class TestParseField:
    """Test individual field parsing"""

    def test_unknown_generator(self):
        field = parse_field({"name": "x", "data_type": "blob", "generator": "uuid"})

        assert field.generator == NoGen()
        assert field.generator.kind == GeneratorKind.NONE

    def test_fixed_width_settings(self):
        field = parse_field({
            "name": "id", "data_type": "int", "generator": "integer",
            "min": 0, "max": 10, "width": 6, "padding": "0",
        })

        assert field.length == 6
        assert field.padding == "0"

    @pytest.mark.parametrize("missing", ["name", "data_type", "generator"])
    def test_required_keys(self, missing):
        obj = {"name": "x", "data_type": "int", "generator": "date"}
        del obj[missing]
        with pytest.raises(SchemaError):
            parse_field(obj)

    def test_integer_bounds(self):
        with pytest.raises(SchemaError, match="Min must be less than max"):
            parse_field({"name": "x", "data_type": "int", "generator": "integer", "min": 5, "max": 5})

    def test_integer_missing_max(self):
        with pytest.raises(SchemaError, match="Max is required"):
            parse_field({"name": "x", "data_type": "int", "generator": "integer", "min": 5})

    def test_gauss_negative_std_dev(self):
        with pytest.raises(SchemaError):
            parse_field({"name": "x", "data_type": "int", "generator": "gauss", "mean": 0, "std_dev": -1})

    def test_string_requires_length(self):
        with pytest.raises(SchemaError, match="Length is required"):
            parse_field({"name": "x", "data_type": "char", "generator": "string"})

    def test_choice_requires_choices(self):
        with pytest.raises(SchemaError, match="must have choices"):
            parse_field({"name": "x", "data_type": "char", "generator": "choice"})

    def test_choice_weights_length(self):
        with pytest.raises(SchemaError, match="Weights"):
            parse_field({
                "name": "x", "data_type": "char", "generator": "choice",
                "choices": ["A", "B"], "weights": [1],
            })

    def test_multi_character_padding(self):
        with pytest.raises(SchemaError, match="single character"):
            parse_field({"name": "x", "data_type": "date", "generator": "date", "width": 10, "padding": "ab"})


class TestLoadFromFile:
    """Test loading schema files"""

    def test_load(self, tmp_path, document):
        path = tmp_path / "schema.json"
        path.write_text(json.dumps(document), encoding="utf-8")

        schema = load_schema_from_file(path)
        assert schema.table_name == "customers"

    def test_missing_file(self, tmp_path):
        with pytest.raises(SchemaError, match="not found"):
            load_schema_from_file(tmp_path / "missing.json")


class TestFixedWidthLayout:
    """Test layout checks on fixed-width schemas"""

    @pytest.fixture
    def fixed_document(self):
        return {
            "table_name": "ledger",
            "delimiter": "fixed",
            "fields": [
                {"name": "id", "data_type": "int", "generator": "integer",
                 "min": 0, "max": 100, "width": 5, "padding": "0"},
                {"name": "code", "data_type": "char", "generator": "choice",
                 "choices": ["AB", "C"], "length": 2, "width": 4, "padding": " "},
            ],
        }

    def test_consistent_layout(self, fixed_document, caplog):
        schema = parse_schema(fixed_document)

        assert check_fixed_width_layout(schema) == []
        assert "wider" not in caplog.text

    def test_header_wider_than_field(self, fixed_document, caplog):
        fixed_document["fields"][0]["name"] = "identifier"
        parse_schema(fixed_document)

        assert "Header name 'identifier' is wider than its field (5)" in caplog.text

    def test_choice_wider_than_field(self, fixed_document, caplog):
        fixed_document["fields"][1]["length"] = 3
        parse_schema(fixed_document)

        assert "Field 'code' can produce 6 characters but its width is 4" in caplog.text

    def test_string_and_missing_width(self):
        schema = Schema("t", "fixed", (
            Field("name", "char", StringGen(length=8), length=4, padding=" "),
            Field("joined", "date", DateGen()),
        ))
        problems = check_fixed_width_layout(schema)

        assert len(problems) == 2
        assert "produces 8 characters" in problems[0]
        assert "'joined' has no width" in problems[1]

    def test_delimited_schema_not_checked(self, document, caplog):
        parse_schema(document)
        assert "width" not in caplog.text


class TestSchemaModel:
    """Test the immutable schema model"""

    def test_fields_stored_as_tuple(self):
        schema = Schema("t", ",", [Field("a", "int", DateGen())])
        assert isinstance(schema.fields, tuple)

    def test_field_names(self):
        schema = Schema("t", "fixed", (Field("a", "date", DateGen()), Field("b", "date", DateGen())))

        assert schema.field_names == ("a", "b")
        assert schema.is_fixed_width

    def test_frozen(self):
        schema = Schema("t", ",")
        with pytest.raises(AttributeError):
            schema.table_name = "other"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
