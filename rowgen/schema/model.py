"""
Field and Schema Model

Declarative description of a table: an ordered list of fields, each tagged
with a generator variant and its parameters, plus a delimiter policy.

Schemas are frozen and shared read-only by every generation worker.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

FIXED_WIDTH = "fixed"
NO_VALUE = "None"


class GeneratorKind(Enum):
    """Tag of each field generator variant"""
    NONE = "none"
    INTEGER = "integer"
    GAUSS = "gauss"
    GAUSS_F32 = "gauss_f32"
    DATE = "date"
    STRING = "string"
    CHOICE = "choice"


@dataclass(frozen=True)
class NoGen:
    """Placeholder for unrecognized generator kinds"""
    kind = GeneratorKind.NONE


@dataclass(frozen=True)
class IntegerGen:
    """Uniform integer over [min, max)"""
    min: int
    max: int
    kind = GeneratorKind.INTEGER


@dataclass(frozen=True)
class GaussGen:
    """Integer-valued normal distribution"""
    mean: float
    std_dev: float
    kind = GeneratorKind.GAUSS


@dataclass(frozen=True)
class GaussF32Gen:
    """Float-valued normal distribution"""
    mean: float
    std_dev: float
    kind = GeneratorKind.GAUSS_F32


@dataclass(frozen=True)
class DateGen:
    """Synthesized calendar date"""
    kind = GeneratorKind.DATE


@dataclass(frozen=True)
class StringGen:
    """Fixed-length uppercase string"""
    length: int
    kind = GeneratorKind.STRING


@dataclass(frozen=True)
class ChoiceGen:
    """
    `length` picks from `choices`, concatenated

    choice_length is the widest element's text width.
    """
    choices: Tuple[str, ...]
    choice_length: int
    length: int = 1
    weights: Optional[Tuple[float, ...]] = None
    kind = GeneratorKind.CHOICE

    @classmethod
    def from_choices(cls, choices, length: int = 1, weights=None) -> 'ChoiceGen':
        """Build a ChoiceGen, deriving choice_length from the elements"""
        values = tuple(str(c) for c in choices)
        choice_length = max((len(v) for v in values), default=0)
        return cls(
            choices=values,
            choice_length=choice_length,
            length=length,
            weights=tuple(weights) if weights is not None else None,
        )

    @property
    def max_width(self) -> int:
        """Upper bound on a generated value's width"""
        return self.length * self.choice_length


FieldGenerator = Union[NoGen, IntegerGen, GaussGen, GaussF32Gen, DateGen, StringGen, ChoiceGen]


@dataclass(frozen=True)
class Field:
    """A single column of the table"""
    name: str
    data_type: str
    generator: FieldGenerator
    length: Optional[int] = None
    padding: Optional[str] = None


@dataclass(frozen=True)
class Schema:
    """Complete description of one generated table"""
    table_name: str
    delimiter: str
    fields: Tuple[Field, ...] = ()

    def __post_init__(self):
        # Accept any iterable of fields but store a tuple
        object.__setattr__(self, "fields", tuple(self.fields))

    @property
    def is_fixed_width(self) -> bool:
        return self.delimiter == FIXED_WIDTH

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    def __str__(self) -> str:
        return self.table_name
