"""Per-column statistics conditioned on the inferred column type."""

from __future__ import annotations

import logging
import math
from collections import Counter
from collections.abc import Mapping, Sequence

from tabprofile.models.profile import (
    BooleanSummary,
    ColumnSummary,
    NumericSummary,
    TextSummary,
    ValueCount,
)
from tabprofile.profiling.type_inference import column_values
from tabprofile.profiling.values import cells_of_kind, coerce_column, round_fixed
from tabprofile.types import CellValue, ColumnType, Dataset, ValueKind

logger = logging.getLogger(__name__)

MOST_COMMON_LIMIT = 5


def summarize_numeric(numbers: Sequence[float]) -> NumericSummary | None:
    """Compute descriptive statistics over the usable values of a column.

    Quartiles are positional picks from the ascending sort
    (``sorted[floor(n * 0.25)]`` and ``sorted[floor(n * 0.75)]``) without
    interpolation. The standard deviation is the population one.

    Args:
    ----
        numbers: Numeric values of the column, missing values excluded

    Returns:
    -------
        NumericSummary, or None when there are no values

    """
    if not numbers:
        return None

    n = len(numbers)
    ordered = sorted(numbers)
    mean = sum(numbers) / n
    variance = sum((value - mean) ** 2 for value in numbers) / n

    if n % 2 == 0:
        median = (ordered[n // 2 - 1] + ordered[n // 2]) / 2
    else:
        median = ordered[n // 2]

    return NumericSummary(
        count=n,
        mean=round_fixed(mean, 4),
        median=round_fixed(median, 4),
        std_dev=round_fixed(math.sqrt(variance), 4),
        min=round_fixed(ordered[0], 4),
        max=round_fixed(ordered[-1], 4),
        q1=round_fixed(ordered[math.floor(n * 0.25)], 4),
        q3=round_fixed(ordered[math.floor(n * 0.75)], 4),
        range=round_fixed(ordered[-1] - ordered[0], 4),
    )


def summarize_text(texts: Sequence[str]) -> TextSummary | None:
    """Compute frequency statistics of a text column.

    Ranking is by count descending; equal counts keep the order in which
    the values were first seen.
    """
    if not texts:
        return None

    counts = Counter(texts)
    return TextSummary(
        count=len(texts),
        unique_count=len(counts),
        most_common=[
            ValueCount(value=value, count=count)
            for value, count in counts.most_common(MOST_COMMON_LIMIT)
        ],
        avg_length=round_fixed(sum(len(text) for text in texts) / len(texts), 2),
    )


def summarize_boolean(flags: Sequence[bool]) -> BooleanSummary | None:
    if not flags:
        return None

    true_count = sum(1 for flag in flags if flag)
    return BooleanSummary(
        count=len(flags),
        true_count=true_count,
        false_count=len(flags) - true_count,
        true_percentage=round_fixed(true_count / len(flags) * 100, 2),
    )


def summarize_cells(
    cells: Sequence[CellValue], column_type: ColumnType
) -> ColumnSummary | None:
    """Summarize coerced cells; date and empty columns are not summarized."""
    if column_type is ColumnType.NUMERIC:
        return summarize_numeric(cells_of_kind(cells, ValueKind.NUMBER))
    if column_type is ColumnType.TEXT:
        return summarize_text(cells_of_kind(cells, ValueKind.TEXT))
    if column_type is ColumnType.BOOLEAN:
        return summarize_boolean(cells_of_kind(cells, ValueKind.BOOLEAN))
    return None


def profile_columns(
    dataset: Dataset, column_types: Mapping[str, ColumnType]
) -> tuple[dict[str, ColumnSummary], dict[str, int]]:
    """Compute summary statistics and missing-value counts for every column.

    Columns are profiled independently. A column without any usable value of
    its inferred type gets no summary entry; it never fails the others.

    Args:
    ----
        dataset: Records to profile
        column_types: Inferred type per column

    Returns:
    -------
        Tuple of (summary_stats, missing_values)

    """
    summary_stats: dict[str, ColumnSummary] = {}
    missing_values: dict[str, int] = {}

    for column, column_type in column_types.items():
        cells = coerce_column(column_values(dataset, column), column_type)
        missing_values[column] = sum(1 for cell in cells if cell.is_missing)

        summary = summarize_cells(cells, column_type)
        if summary is not None:
            summary_stats[column] = summary
        elif column_type in (ColumnType.NUMERIC, ColumnType.TEXT, ColumnType.BOOLEAN):
            logger.warning(
                f"Column {column}: no usable {column_type.value} values, skipping summary"
            )

    return summary_stats, missing_values
