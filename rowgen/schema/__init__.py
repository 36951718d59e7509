"""
Schema Module

Field and schema model plus the JSON schema loader.
"""

from .model import (
    FIXED_WIDTH,
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
from .loader import check_fixed_width_layout, load_schema_from_file, parse_field, parse_json, parse_schema

__all__ = [
    # Model
    "FIXED_WIDTH",
    "GeneratorKind",
    "FieldGenerator",
    "NoGen",
    "IntegerGen",
    "GaussGen",
    "GaussF32Gen",
    "DateGen",
    "StringGen",
    "ChoiceGen",
    "Field",
    "Schema",

    # Loader
    "load_schema_from_file",
    "parse_json",
    "parse_schema",
    "parse_field",
    "check_fixed_width_layout",
]
