"""
Schema Loader Module

Turns a JSON schema description into a Schema object:
- Table name and delimiter policy
- Ordered field list with generator parameters
- Fixed-width layout (width, padding) per field

Unrecognized generator kinds fall back to the NoGen placeholder.
"""

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Union

from ..exceptions import SchemaError
from .model import (
    ChoiceGen,
    DateGen,
    Field,
    FieldGenerator,
    GaussF32Gen,
    GaussGen,
    GeneratorKind,
    IntegerGen,
    NoGen,
    Schema,
    StringGen,
)

logger = logging.getLogger(__name__)

DEFAULT_DELIMITER = ","


def load_schema_from_file(filepath: Union[str, Path]) -> Schema:
    """
    Load a schema from a JSON file

    Args:
        filepath: Path to the schema file

    Returns:
        Schema object
    """
    filepath = Path(filepath)

    if not filepath.exists():
        raise SchemaError(f"Schema file not found: {filepath}")

    with open(filepath, 'r', encoding='utf-8') as f:
        raw_json = f.read()

    schema = parse_json(raw_json)
    logger.info(f"Schema '{schema.table_name}' loaded from {filepath} ({len(schema.fields)} fields)")
    return schema


def parse_json(raw_json: str) -> Schema:
    """Parse a JSON document into a Schema"""
    try:
        document = json.loads(raw_json)
    except json.JSONDecodeError as e:
        raise SchemaError(f"Invalid JSON: {e}") from e

    if not isinstance(document, dict):
        raise SchemaError("Root JSON value must be an object.")

    return parse_schema(document)


def parse_schema(document: Dict[str, Any]) -> Schema:
    """Build a Schema from an already-decoded mapping"""
    table_name = document.get("table_name")
    if table_name is None:
        raise SchemaError("Table name must be specified!")
    if not isinstance(table_name, str):
        raise SchemaError("Table name must be a string!")

    delimiter = document.get("delimiter", DEFAULT_DELIMITER)
    if not isinstance(delimiter, str):
        raise SchemaError("Delimiter must be a string!")

    fields = document.get("fields")
    if fields is None:
        raise SchemaError("Fields must be provided!")
    if not isinstance(fields, list):
        raise SchemaError("Fields must be an array.")

    schema = Schema(
        table_name=table_name,
        delimiter=delimiter,
        fields=tuple(_parse_fields(fields)),
    )
    if schema.is_fixed_width:
        check_fixed_width_layout(schema)
    return schema


def check_fixed_width_layout(schema: Schema) -> List[str]:
    """
    Report fixed-width fields whose layout cannot line up

    Row generation still enforces the layout and fails on the first bad
    value; this only surfaces the problems when the schema is loaded.

    Args:
        schema: Fixed-width schema

    Returns:
        One warning message per problem found (each is also logged)
    """
    problems = []
    for field in schema.fields:
        if field.length is None:
            problems.append(f"Field '{field.name}' has no width; every row will fail")
            continue

        if len(field.name) > field.length:
            problems.append(
                f"Header name '{field.name}' is wider than its field ({field.length}); "
                f"the header will not line up with the rows"
            )

        generator = field.generator
        if isinstance(generator, ChoiceGen) and generator.max_width > field.length:
            problems.append(
                f"Field '{field.name}' can produce {generator.max_width} characters "
                f"but its width is {field.length}"
            )
        elif isinstance(generator, StringGen) and generator.length > field.length:
            problems.append(
                f"Field '{field.name}' produces {generator.length} characters "
                f"but its width is {field.length}"
            )

    for problem in problems:
        logger.warning(problem)
    return problems


def _parse_fields(fields: List[Any]) -> List[Field]:
    parsed = []
    for obj in fields:
        if not isinstance(obj, dict):
            raise SchemaError("Each field must be an object")
        parsed.append(parse_field(obj))
    return parsed


def parse_field(obj: Dict[str, Any]) -> Field:
    """
    Parse one field description

    Args:
        obj: Field mapping with name, data_type, generator and parameters

    Returns:
        Field object
    """
    name = _require(obj, "name", str, "Field name is required.", "Field name must be a string!")
    data_type = _require(obj, "data_type", str, "Data type is required.", "Data type must be a string!")
    generator_type = _require(obj, "generator", str, "Generator is required.", "Generator must be a string!")

    parser = _GENERATOR_PARSERS.get(generator_type)
    if parser is None:
        logger.warning(f"Unknown generator '{generator_type}' for field '{name}', using placeholder")
        generator: FieldGenerator = NoGen()
    else:
        generator = parser(obj)

    width = obj.get("width")
    if width is not None and (not _is_int(width) or width < 0):
        raise SchemaError(f"Width of field '{name}' must be a positive integer!")

    padding = obj.get("padding")
    if padding is not None and (not isinstance(padding, str) or len(padding) != 1):
        raise SchemaError(f"Padding of field '{name}' must be a single character!")

    return Field(
        name=name,
        data_type=data_type,
        generator=generator,
        length=width,
        padding=padding,
    )


def _require(obj: Dict[str, Any], key: str, kind: type, missing: str, wrong_type: str):
    if key not in obj:
        raise SchemaError(missing)
    value = obj[key]
    if not isinstance(value, kind):
        raise SchemaError(wrong_type)
    return value


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _parse_integer(obj: Dict[str, Any]) -> FieldGenerator:
    if "min" not in obj:
        raise SchemaError("Min is required for an integer field.")
    if "max" not in obj:
        raise SchemaError("Max is required for an integer field.")
    min_value, max_value = obj["min"], obj["max"]
    if not _is_int(min_value):
        raise SchemaError("Min must be an integer!")
    if not _is_int(max_value):
        raise SchemaError("Max must be an integer!")
    if min_value >= max_value:
        raise SchemaError("Min must be less than max for an integer field.")
    return IntegerGen(min=min_value, max=max_value)


def _parse_normal(obj: Dict[str, Any]):
    if "mean" not in obj:
        raise SchemaError("Mean is required for a gauss distribution field.")
    if "std_dev" not in obj:
        raise SchemaError("Std deviation is required for a gauss distribution field.")
    mean, std_dev = obj["mean"], obj["std_dev"]
    if not _is_number(mean):
        raise SchemaError("Mean must be a number!")
    if not _is_number(std_dev) or std_dev < 0:
        raise SchemaError("Std deviation must be a non-negative number!")
    return mean, std_dev


def _parse_gauss(obj: Dict[str, Any]) -> FieldGenerator:
    mean, std_dev = _parse_normal(obj)
    return GaussGen(mean=mean, std_dev=std_dev)


def _parse_gauss_f32(obj: Dict[str, Any]) -> FieldGenerator:
    mean, std_dev = _parse_normal(obj)
    return GaussF32Gen(mean=mean, std_dev=std_dev)


def _parse_string(obj: Dict[str, Any]) -> FieldGenerator:
    if "length" not in obj:
        raise SchemaError("Length is required for a string field.")
    length = obj["length"]
    if not _is_int(length) or length < 0:
        raise SchemaError("Length must be a positive integer!")
    return StringGen(length=length)


def _parse_date(obj: Dict[str, Any]) -> FieldGenerator:
    return DateGen()


def _parse_choice(obj: Dict[str, Any]) -> FieldGenerator:
    if "choices" not in obj:
        raise SchemaError("A Choice field must have choices!")
    choices = obj["choices"]
    if not isinstance(choices, list):
        raise SchemaError("Choices field must be an array!")
    if not choices:
        raise SchemaError("Choices must not be empty!")
    if not all(isinstance(c, str) for c in choices):
        raise SchemaError("All choices must be strings.")

    length = obj.get("length", 1)
    if not _is_int(length) or length < 0:
        raise SchemaError("Length must be a positive integer!")

    weights = obj.get("weights")
    if weights is not None:
        if not isinstance(weights, list) or len(weights) != len(choices):
            raise SchemaError("Weights must be an array with one entry per choice!")
        if not all(_is_number(w) and w >= 0 for w in weights) or sum(weights) <= 0:
            raise SchemaError("Weights must be non-negative numbers with a positive sum!")

    return ChoiceGen.from_choices(choices, length=length, weights=weights)


_GENERATOR_PARSERS: Dict[str, Callable[[Dict[str, Any]], FieldGenerator]] = {
    GeneratorKind.INTEGER.value: _parse_integer,
    GeneratorKind.GAUSS.value: _parse_gauss,
    GeneratorKind.GAUSS_F32.value: _parse_gauss_f32,
    GeneratorKind.STRING.value: _parse_string,
    GeneratorKind.DATE.value: _parse_date,
    GeneratorKind.CHOICE.value: _parse_choice,
}
