"""Profile Pydantic Models

Immutable models for the result of profiling a dataset. A ProfileResult is
produced once per dataset version and handed to the persistence layer as is.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tabprofile.types import ColumnType

_FROZEN = ConfigDict(frozen=True, extra="forbid")


class NumericSummary(BaseModel):
    """Descriptive statistics of a numeric column."""

    model_config = _FROZEN

    count: int = Field(ge=1, description="Number of usable numeric values")
    mean: float
    median: float
    std_dev: float = Field(ge=0, description="Population standard deviation")
    min: float
    max: float
    q1: float = Field(description="Value at position floor(n * 0.25) of the sorted values")
    q3: float = Field(description="Value at position floor(n * 0.75) of the sorted values")
    range: float = Field(ge=0)


class ValueCount(BaseModel):
    """A distinct text value and how often it occurs."""

    model_config = _FROZEN

    value: str
    count: int = Field(ge=1)


class TextSummary(BaseModel):
    """Frequency statistics of a text column."""

    model_config = _FROZEN

    count: int = Field(ge=1)
    unique_count: int = Field(ge=1)
    most_common: list[ValueCount] = Field(
        max_length=5,
        description="Most frequent values, count descending, ties in first-seen order",
    )
    avg_length: float = Field(ge=0)


class BooleanSummary(BaseModel):
    """True/false counts of a boolean column."""

    model_config = _FROZEN

    count: int = Field(ge=1)
    true_count: int = Field(ge=0)
    false_count: int = Field(ge=0)
    true_percentage: float = Field(ge=0, le=100)


ColumnSummary = NumericSummary | TextSummary | BooleanSummary


class ProfileResult(BaseModel):
    """Everything computed for one dataset version."""

    column_types: dict[str, ColumnType] = Field(
        description="Inferred type per column, in column order"
    )
    summary_stats: dict[str, ColumnSummary] = Field(
        default_factory=dict,
        description="Summary per profiled column; date and empty columns have none",
    )
    missing_values: dict[str, int] = Field(
        default_factory=dict, description="Missing cells per column"
    )
    correlation_matrix: dict[str, dict[str, float]] = Field(
        default_factory=dict,
        description="Pearson coefficients; only numeric column entries are meaningful",
    )

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        json_schema_extra={
            "example": {
                "column_types": {"age": "numeric", "city": "text"},
                "summary_stats": {
                    "age": {
                        "count": 3,
                        "mean": 30.0,
                        "median": 30.0,
                        "std_dev": 8.165,
                        "min": 20.0,
                        "max": 40.0,
                        "q1": 20.0,
                        "q3": 40.0,
                        "range": 20.0,
                    },
                    "city": {
                        "count": 3,
                        "unique_count": 2,
                        "most_common": [
                            {"value": "Paris", "count": 2},
                            {"value": "Oslo", "count": 1},
                        ],
                        "avg_length": 4.67,
                    },
                },
                "missing_values": {"age": 0, "city": 0},
                "correlation_matrix": {
                    "age": {"age": 1.0, "city": 0.0},
                    "city": {"age": 0.0, "city": 0.0},
                },
            }
        },
    )

    @field_validator("missing_values")
    @classmethod
    def non_negative_missing_counts(cls, v) -> dict[str, int]:
        """Validate that missing counts are not negative."""
        negative = [column for column, count in v.items() if count < 0]
        if negative:
            msg = f"Negative missing value counts for columns: {negative}"
            raise ValueError(msg)
        return v

    @property
    def columns(self) -> list[str]:
        return list(self.column_types)

    def columns_of_type(self, column_type: ColumnType) -> list[str]:
        return [col for col, typ in self.column_types.items() if typ is column_type]

    @property
    def numeric_columns(self) -> list[str]:
        return self.columns_of_type(ColumnType.NUMERIC)

    @property
    def text_columns(self) -> list[str]:
        return self.columns_of_type(ColumnType.TEXT)

    def correlation(self, column_a: str, column_b: str) -> float:
        """Return the stored coefficient of a column pair, 0.0 when absent."""
        return self.correlation_matrix.get(column_a, {}).get(column_b, 0.0)


__all__ = [
    "BooleanSummary",
    "ColumnSummary",
    "NumericSummary",
    "ProfileResult",
    "TextSummary",
    "ValueCount",
]
