"""
Data Generators Module

Provides the value and row generators:
- primitives: One random value per call (integer, gauss, string, date, choice)
- row: Formatted rows and batches built from a Schema
"""

from . import primitives
from .primitives import Date, days_in_month
from .row import generate_header, generate_row, generate_rows, generate_value

__all__ = [
    "primitives",
    "Date",
    "days_in_month",

    # Row generation
    "generate_value",
    "generate_row",
    "generate_rows",
    "generate_header",
]
