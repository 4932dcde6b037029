"""
Cell value typing - single source of truth for how loosely-typed CSV cells are read.

Rows arrive as mappings from column name to a scalar that may be a string,
a number, a boolean, None, or missing altogether. Every analysis and
transformation classifies a cell through ValueKind instead of relying on
implicit truthiness, so the rules for "empty", "null" and "numeric" live here.
"""
import math
import re
from enum import Enum
from typing import Any, Mapping, Optional, Union

from csvlens.core.exceptions import InvalidInputError


class ValueKind(Enum):
    """Tag for a cell value."""
    ABSENT = "absent"
    NULL = "null"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"


class _Absent:
    """Marker for a column that is missing from a row."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT = _Absent()

# Literal strings that null analysis counts as missing
NULL_TOKENS = ("null", "NULL")

# Plain decimal or scientific literal, e.g. "12", "-3.5", ".5", "1e6"
NUMERIC_PATTERN = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")

Number = Union[int, float]


def get_cell(row: Mapping[str, Any], column: str) -> Any:
    """Return the value stored under column, or ABSENT when the row lacks it."""
    return row.get(column, ABSENT)


def classify(value: Any) -> ValueKind:
    """
    Tag a cell value.

    Raises:
        InvalidInputError: If the value is not a scalar cell value
    """
    if value is ABSENT:
        return ValueKind.ABSENT
    if value is None:
        return ValueKind.NULL
    # bool is a subclass of int, so it must be checked first
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    raise InvalidInputError(f"Unsupported cell value of type {type(value).__name__}: {value!r}")


def is_blank(value: Any) -> bool:
    """True for absent, null and empty-string cells."""
    kind = classify(value)
    if kind in (ValueKind.ABSENT, ValueKind.NULL):
        return True
    return kind == ValueKind.STRING and value == ""


def is_null_like(value: Any) -> bool:
    """True for blank cells and the literal strings 'null' / 'NULL'."""
    if is_blank(value):
        return True
    return classify(value) == ValueKind.STRING and value in NULL_TOKENS


def is_falsy(value: Any) -> bool:
    """
    True for cells a spreadsheet user would consider "nothing there":
    blank cells, numeric zero (or NaN) and boolean false.
    """
    kind = classify(value)
    if kind == ValueKind.NUMBER:
        return value == 0 or (isinstance(value, float) and math.isnan(value))
    if kind == ValueKind.BOOLEAN:
        return not value
    return is_blank(value)


def is_non_empty_string(value: Any) -> bool:
    return classify(value) == ValueKind.STRING and value != ""


def to_display_string(value: Any) -> str:
    """
    Render a non-missing cell the way it appears in a CSV file.

    Booleans render as 'true'/'false' and integral floats drop the trailing '.0'
    so that 3 and 3.0 read the same.
    """
    kind = classify(value)
    if kind == ValueKind.STRING:
        return value
    if kind == ValueKind.BOOLEAN:
        return "true" if value else "false"
    if kind == ValueKind.NUMBER:
        if isinstance(value, float):
            if math.isnan(value):
                return "NaN"
            if math.isinf(value):
                return "Infinity" if value > 0 else "-Infinity"
            if value.is_integer():
                return str(int(value))
        return str(value)
    if kind == ValueKind.NULL:
        return "null"
    return ""


def parse_number(value: Any) -> Optional[Number]:
    """
    Read a cell as a finite number.

    Returns:
        The number, or None if the cell is not numeric-coercible
    """
    kind = classify(value)
    if kind == ValueKind.NUMBER:
        if isinstance(value, float) and not math.isfinite(value):
            return None
        return value
    if kind != ValueKind.STRING:
        return None

    value_str = value.strip()
    if not NUMERIC_PATTERN.match(value_str):
        return None

    try:
        number = float(value_str)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number
