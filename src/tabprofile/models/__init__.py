"""Result models for tabprofile."""

from tabprofile.models.insights import CorrelationPair, DataOverview, Insights
from tabprofile.models.profile import (
    BooleanSummary,
    ColumnSummary,
    NumericSummary,
    ProfileResult,
    TextSummary,
    ValueCount,
)

__all__ = [
    "BooleanSummary",
    "ColumnSummary",
    "CorrelationPair",
    "DataOverview",
    "Insights",
    "NumericSummary",
    "ProfileResult",
    "TextSummary",
    "ValueCount",
]
