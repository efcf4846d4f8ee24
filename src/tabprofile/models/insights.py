"""Insight Pydantic Models

Derived, non-persisted view over a ProfileResult. Insights are recomputed on
demand and never cached across dataset changes.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CorrelationPair(BaseModel):
    """A pair of numeric columns and their correlation."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    pair: str = Field(description="Display label, 'a ↔ b'")
    value: float = Field(ge=-1.0, le=1.0)


class DataOverview(BaseModel):
    """Shape and completeness of a dataset."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    total_records: int = Field(ge=0)
    total_columns: int = Field(ge=0)
    numeric_columns: int = Field(ge=0)
    text_columns: int = Field(ge=0)
    missing_data_percentage: float = Field(ge=0, le=100)


class Insights(BaseModel):
    """Quality score, findings and recommendations for a dataset."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    data_quality_score: int = Field(ge=0, le=100)
    key_findings: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    top_correlations: list[CorrelationPair] = Field(default_factory=list, max_length=5)
    data_overview: DataOverview


__all__ = ["CorrelationPair", "DataOverview", "Insights"]
