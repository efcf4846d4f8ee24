"""Core types shared by the profiling stages and the result models."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeAlias

Record: TypeAlias = Mapping[str, Any]
Dataset: TypeAlias = Sequence[Record]


class ColumnType(str, Enum):
    """Semantic type inferred for a column."""

    NUMERIC = "numeric"
    BOOLEAN = "boolean"
    DATE = "date"
    TEXT = "text"
    EMPTY = "empty"


class ValueKind(str, Enum):
    """Tag of a coerced cell value."""

    NUMBER = "number"
    BOOLEAN = "boolean"
    TEXT = "text"
    MISSING = "missing"


@dataclass(frozen=True)
class CellValue:
    """A single cell after coercion to its column's type.

    ``value`` is a float for numbers, a bool for booleans, a str for text
    and None for missing cells.
    """

    kind: ValueKind
    value: float | bool | str | None = None

    @property
    def is_missing(self) -> bool:
        return self.kind is ValueKind.MISSING


MISSING = CellValue(ValueKind.MISSING)
