"""
Row Generator

Combines the field model with the primitive generators to render one
formatted row, enforcing the schema's delimiter policy:
- Delimited: values joined with the literal delimiter
- Fixed-width: every value padded on the left to the field's exact length
"""

import numpy as np

from ..exceptions import FieldGenerationError
from ..schema.model import (
    NO_VALUE,
    ChoiceGen,
    DateGen,
    Field,
    FieldGenerator,
    GaussF32Gen,
    GaussGen,
    IntegerGen,
    NoGen,
    Schema,
    StringGen,
)
from . import primitives

ROW_TERMINATOR = "\n"
DEFAULT_HEADER_PADDING = " "


def generate_value(generator: FieldGenerator, rng: np.random.Generator) -> str:
    """
    Render one value for a generator variant

    Args:
        generator: Field generator variant
        rng: Random source

    Returns:
        The value as text
    """
    if isinstance(generator, IntegerGen):
        return str(primitives.integer(rng, generator.min, generator.max))
    elif isinstance(generator, GaussGen):
        return str(primitives.gauss(rng, generator.mean, generator.std_dev))
    elif isinstance(generator, GaussF32Gen):
        return str(primitives.gauss_f32(rng, generator.mean, generator.std_dev))
    elif isinstance(generator, StringGen):
        return primitives.string(rng, generator.length)
    elif isinstance(generator, DateGen):
        return str(primitives.date(rng))
    elif isinstance(generator, ChoiceGen):
        return primitives.choice(rng, generator.choices, generator.length, generator.weights)
    elif isinstance(generator, NoGen):
        return NO_VALUE
    raise TypeError(f"Unsupported field generator: {generator!r}")


def _render_field(field: Field, rng: np.random.Generator) -> str:
    if isinstance(field.generator, ChoiceGen) and not field.generator.choices:
        raise FieldGenerationError(field.name, "choice set is empty")
    return generate_value(field.generator, rng)


def _fit_fixed_width(field: Field, value: str) -> str:
    """Pad a value to the field's exact width; never truncates"""
    if field.length is None:
        raise FieldGenerationError(field.name, "a length is required when the delimiter is 'fixed'")

    if len(value) > field.length:
        raise FieldGenerationError(
            field.name,
            f"value '{value}' is {len(value)} characters, wider than the field length {field.length}"
        )

    if field.padding:
        return value.rjust(field.length, field.padding)

    if len(value) != field.length:
        raise FieldGenerationError(
            field.name,
            f"value '{value}' is {len(value)} characters but the field length is "
            f"{field.length} and no padding character is configured"
        )
    return value


def generate_row(schema: Schema, rng: np.random.Generator) -> str:
    """
    Generate one formatted row, without a line terminator

    Args:
        schema: Table schema
        rng: Random source

    Returns:
        The joined (delimited) or concatenated (fixed-width) row

    Raises:
        FieldGenerationError: If a field cannot satisfy the layout rules
    """
    values = [_render_field(field, rng) for field in schema.fields]

    if schema.is_fixed_width:
        return "".join(
            _fit_fixed_width(field, value) for field, value in zip(schema.fields, values)
        )

    return schema.delimiter.join(values)


def generate_rows(schema: Schema, rng: np.random.Generator, count: int) -> str:
    """
    Generate `count` rows, each followed by a newline

    The batch is all-or-nothing: a failing row raises and nothing is returned.
    """
    rows = [generate_row(schema, rng) for _ in range(count)]
    return "".join(row + ROW_TERMINATOR for row in rows)


def generate_header(schema: Schema) -> str:
    """Field names laid out with the schema's delimiter policy"""
    if schema.is_fixed_width:
        names = []
        for field in schema.fields:
            if field.length is None:
                names.append(field.name)
            else:
                names.append(field.name.rjust(field.length, field.padding or DEFAULT_HEADER_PADDING))
        return "".join(names) + ROW_TERMINATOR

    return schema.delimiter.join(schema.field_names) + ROW_TERMINATOR
