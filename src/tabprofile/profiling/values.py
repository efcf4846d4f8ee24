"""Cell value predicates and coercion to tagged cell values.

Raw cells arrive untyped from the ingestion side (numbers, booleans, strings,
date-like strings or nothing at all). Each column is coerced once, according
to its inferred type, into ``CellValue`` instances; downstream stages only
look at the tags. A value that does not fit its column's type is kept as a
text cell so numeric and boolean aggregates skip it.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Any

from tabprofile.types import MISSING, CellValue, ColumnType, ValueKind

# Formats tried after ISO 8601
DATE_FORMATS = (
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%y",
    "%Y/%m/%d",
    "%Y/%m/%d %H:%M:%S",
    "%b %d, %Y",
    "%B %d, %Y",
    "%b %d %Y",
    "%B %d %Y",
    "%d %b %Y",
    "%d %B %Y",
    "%a, %d %b %Y %H:%M:%S GMT",
    "%a %b %d %Y",
)

BOOLEAN_LITERALS = {"true": True, "false": False}

# Wide enough to quantize any finite float
_FIXED_POINT = Context(prec=400, rounding=ROUND_HALF_UP)


def is_missing(value: Any) -> bool:
    """Return True for None, empty strings and float NaN."""
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, float):
        return math.isnan(value)
    return False


def round_fixed(value: float, places: int) -> float:
    """Round to ``places`` decimals, sending exact ties away from zero.

    Works on the exact binary value of ``value``, so 0.03125 becomes 0.0313
    while 1.005 (stored as 1.00499...) becomes 1.0.
    """
    exponent = Decimal(10) ** -places
    return float(Decimal(value).quantize(exponent, context=_FIXED_POINT))


def to_number(value: Any) -> float | None:
    """Coerce a value to a finite float, or None when it is not numeric.

    Booleans are not numbers. Strings are stripped before parsing; digit
    group separators (``1_000``) are rejected.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text or "_" in text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def is_boolean_literal(value: Any) -> bool:
    if isinstance(value, bool):
        return True
    return isinstance(value, str) and value.strip().lower() in BOOLEAN_LITERALS


def to_boolean(value: Any) -> bool:
    """Coerce a non-missing value to bool.

    ``"true"``/``"false"`` strings are read literally; anything else uses
    Python truthiness.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        literal = BOOLEAN_LITERALS.get(value.strip().lower())
        if literal is not None:
            return literal
    return bool(value)


def parse_date(value: Any) -> datetime | None:
    """Parse a calendar date or timestamp, returning None when it is not one."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def coerce_cell(value: Any, column_type: ColumnType) -> CellValue:
    """Tag a raw value according to the type of the column holding it."""
    if is_missing(value):
        return MISSING

    if column_type is ColumnType.NUMERIC:
        number = to_number(value)
        if number is not None:
            return CellValue(ValueKind.NUMBER, number)
    elif column_type is ColumnType.BOOLEAN:
        return CellValue(ValueKind.BOOLEAN, to_boolean(value))

    return CellValue(ValueKind.TEXT, str(value))


def coerce_column(
    values: Iterable[Any], column_type: ColumnType
) -> tuple[CellValue, ...]:
    return tuple(coerce_cell(value, column_type) for value in values)


def cells_of_kind(cells: Iterable[CellValue], kind: ValueKind) -> list[Any]:
    """Return the payloads of the cells carrying ``kind``."""
    return [cell.value for cell in cells if cell.kind is kind]
