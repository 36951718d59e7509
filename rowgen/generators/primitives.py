"""
Primitive Value Generators

Stateless functions producing one random value each:
- Uniform integers
- Gaussian integers and 32-bit floats
- Fixed-length uppercase strings
- Calendar dates (simplified day-count table, no leap years)
- Choice from a set, optionally weighted

Every function takes the caller's numpy Generator; nothing here keeps state.
"""

import string as _string
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

UPPERCASE_CHARS = _string.ascii_uppercase

YEAR_MIN = 1900
YEAR_MAX = 2016  # exclusive

_LONG_MONTHS = {1, 3, 5, 7, 8, 10, 12}


@dataclass(frozen=True)
class Date:
    """A synthesized calendar date"""
    year: int
    month: int
    day: int

    def __str__(self) -> str:
        return f"{self.month}/{self.day}/{self.year}"


def days_in_month(month: int) -> int:
    """Day count for a month; February is always 28"""
    if month in _LONG_MONTHS:
        return 31
    if month == 2:
        return 28
    return 30


def integer(rng: np.random.Generator, min_value: int, max_value: int) -> int:
    """
    Uniform integer in [min_value, max_value)

    Callers must ensure min_value < max_value.
    """
    return int(rng.integers(min_value, max_value))


def gauss(rng: np.random.Generator, mean: float, std_dev: float) -> int:
    """Normal draw truncated toward zero; negative values are not clamped"""
    return int(rng.normal(mean, std_dev))


def gauss_f32(rng: np.random.Generator, mean: float, std_dev: float) -> np.float32:
    """
    Normal draw at 32-bit float precision

    Kept as np.float32 so str() gives the shortest single-precision text
    ("14.081839"), not the widened double ("14.081838607788086").
    """
    return np.float32(rng.normal(mean, std_dev))


def string(rng: np.random.Generator, length: int) -> str:
    """`length` uniform picks from the uppercase alphabet"""
    indices = rng.integers(0, len(UPPERCASE_CHARS), size=length)
    return "".join(UPPERCASE_CHARS[i] for i in indices)


def date(rng: np.random.Generator) -> Date:
    """Random date; the day is always valid for the drawn month"""
    year = int(rng.integers(YEAR_MIN, YEAR_MAX))
    month = int(rng.integers(1, 13))
    day = int(rng.integers(1, days_in_month(month) + 1))
    return Date(year=year, month=month, day=day)


def choice(
    rng: np.random.Generator,
    choices: Sequence,
    length: int = 1,
    weights: Optional[Sequence[float]] = None
) -> str:
    """
    Concatenate `length` independent picks from `choices`

    Args:
        rng: Random source
        choices: Non-empty set of candidate values
        length: Number of picks
        weights: Optional pick probabilities, one per choice

    Returns:
        The picks converted to text and joined
    """
    if len(choices) == 0:
        raise ValueError("choices must not be empty")

    probabilities = None
    if weights is not None:
        probabilities = np.asarray(weights, dtype=float)
        probabilities = probabilities / probabilities.sum()

    indices = rng.choice(len(choices), size=length, p=probabilities)
    return "".join(str(choices[i]) for i in indices)
