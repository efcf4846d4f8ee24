"""Derive quality score, findings and recommendations from a profile.

The rules here are fixed business rules: thresholds and wording do not
depend on the shape of the data. The quality score blends completeness with
a column-type diversity score and is a heuristic, not a validated metric.
"""

from __future__ import annotations

import logging
import math
from itertools import combinations
from typing import TYPE_CHECKING

from tabprofile.models.insights import CorrelationPair, DataOverview, Insights
from tabprofile.profiling.values import round_fixed

if TYPE_CHECKING:
    from tabprofile.models.profile import ProfileResult
    from tabprofile.types import Dataset

logger = logging.getLogger(__name__)

# Correlations
TOP_CORRELATION_THRESHOLD = 0.3
TOP_CORRELATION_LIMIT = 5
STRONG_CORRELATION = 0.7
MODERATE_CORRELATION = 0.3

# Findings and recommendations
INCOMPLETE_DATA_PERCENTAGE = 10
IMPUTATION_MISSING_PERCENTAGE = 5
LARGE_DATASET_RECORDS = 1000
SAMPLING_DATASET_RECORDS = 10000


def pair_label(column_a: str, column_b: str) -> str:
    return f"{column_a} ↔ {column_b}"


def correlation_strength(value: float) -> str:
    """Label a coefficient as Strong, Moderate or Weak."""
    if abs(value) > STRONG_CORRELATION:
        return "Strong"
    if abs(value) > MODERATE_CORRELATION:
        return "Moderate"
    return "Weak"


def top_correlation_pairs(
    profile: ProfileResult,
    threshold: float = TOP_CORRELATION_THRESHOLD,
    limit: int | None = TOP_CORRELATION_LIMIT,
) -> list[tuple[str, str, float]]:
    """Return distinct numeric column pairs with ``|r| > threshold``.

    Pairs are sorted by ``|r|`` descending; equal magnitudes keep column
    order.
    """
    pairs = [
        (col_a, col_b, profile.correlation(col_a, col_b))
        for col_a, col_b in combinations(profile.numeric_columns, 2)
    ]
    pairs = [pair for pair in pairs if abs(pair[2]) > threshold]
    pairs.sort(key=lambda pair: abs(pair[2]), reverse=True)
    return pairs if limit is None else pairs[:limit]


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def synthesize_insights(profile: ProfileResult, dataset: Dataset) -> Insights:
    """Build the insights view of a profiled dataset.

    Args:
    ----
        profile: ProfileResult of the dataset
        dataset: The profiled records, used for the row count

    Returns:
    -------
        Insights with quality score, findings, recommendations, strongest
        correlations and an overview

    """
    total_records = len(dataset)
    total_columns = len(profile.column_types)
    numeric_columns = len(profile.numeric_columns)
    text_columns = len(profile.text_columns)

    total_missing = sum(profile.missing_values.values())
    total_cells = total_records * total_columns
    missing_percentage = total_missing / total_cells * 100 if total_cells > 0 else 0.0

    completeness_score = max(0.0, 100 - missing_percentage)
    if total_columns > 0:
        diversity_score = min(
            100.0,
            numeric_columns / total_columns * 100 + text_columns / total_columns * 50,
        )
    else:
        diversity_score = 0.0
    quality_score = _round_half_up((completeness_score + diversity_score) / 2)

    correlations = [
        CorrelationPair(pair=pair_label(col_a, col_b), value=value)
        for col_a, col_b, value in top_correlation_pairs(profile)
    ]

    key_findings: list[str] = []
    complete = 100 - missing_percentage
    if missing_percentage > INCOMPLETE_DATA_PERCENTAGE:
        key_findings.append(f"Data completeness: {complete:.1f}% of data is complete")
    else:
        key_findings.append(f"Excellent data quality: {complete:.1f}% data completeness")
    if numeric_columns > 0:
        key_findings.append(
            f"{numeric_columns} numeric columns available for statistical analysis"
        )
    if correlations:
        strongest = correlations[0]
        key_findings.append(
            f"Strongest correlation: {strongest.pair} ({strongest.value:.3f})"
        )
    if total_records > LARGE_DATASET_RECORDS:
        key_findings.append(f"Large dataset with {total_records:,} records")

    recommendations: list[str] = []
    if missing_percentage > IMPUTATION_MISSING_PERCENTAGE:
        recommendations.append("Consider data imputation strategies for missing values")
    if numeric_columns >= 2:
        recommendations.append(
            "Perform correlation analysis to identify relationships between variables"
        )
    if text_columns > 0:
        recommendations.append(
            "Consider text analysis or categorization for text columns"
        )
    if total_records > SAMPLING_DATASET_RECORDS:
        recommendations.append("Consider sampling techniques for large-scale analysis")

    logger.debug(
        f"Insights: score={quality_score} missing={missing_percentage:.2f}% "
        f"correlations={len(correlations)}"
    )
    return Insights(
        data_quality_score=quality_score,
        key_findings=key_findings,
        recommendations=recommendations,
        top_correlations=correlations,
        data_overview=DataOverview(
            total_records=total_records,
            total_columns=total_columns,
            numeric_columns=numeric_columns,
            text_columns=text_columns,
            missing_data_percentage=round_fixed(missing_percentage, 2),
        ),
    )
