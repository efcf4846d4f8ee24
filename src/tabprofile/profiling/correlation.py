"""Pairwise Pearson correlation between numeric columns."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from itertools import product

from tabprofile.profiling.type_inference import column_values, dataset_columns
from tabprofile.profiling.values import coerce_column, round_fixed
from tabprofile.types import CellValue, ColumnType, Dataset, ValueKind

logger = logging.getLogger(__name__)

# Entry kept for pairs involving a non-numeric column
NEUTRAL_CORRELATION = 0.0


def pearson_correlation(xs: Sequence[float], ys: Sequence[float]) -> float:
    """Pearson coefficient of two equally long samples.

    Returns 0.0 when there are no pairs or when either side has no variance.
    """
    n = min(len(xs), len(ys))
    if n == 0:
        return 0.0

    sum_x = sum(xs[:n])
    sum_y = sum(ys[:n])
    sum_xy = sum(x * y for x, y in zip(xs, ys))
    sum_x2 = sum(x * x for x in xs[:n])
    sum_y2 = sum(y * y for y in ys[:n])

    numerator = n * sum_xy - sum_x * sum_y
    spread = (n * sum_x2 - sum_x * sum_x) * (n * sum_y2 - sum_y * sum_y)
    if spread <= 0:
        return 0.0
    # Clamp float noise so perfectly linear columns stay within [-1, 1]
    return max(-1.0, min(1.0, numerator / math.sqrt(spread)))


def paired_values(
    cells_a: Sequence[CellValue], cells_b: Sequence[CellValue]
) -> tuple[list[float], list[float]]:
    """Keep the rows where both cells hold a number."""
    xs: list[float] = []
    ys: list[float] = []
    for a, b in zip(cells_a, cells_b):
        if a.kind is ValueKind.NUMBER and b.kind is ValueKind.NUMBER:
            xs.append(a.value)
            ys.append(b.value)
    return xs, ys


def compute_correlation_matrix(
    dataset: Dataset,
    numeric_columns: Sequence[str],
    columns: Sequence[str] | None = None,
) -> dict[str, dict[str, float]]:
    """Build the square correlation matrix of a dataset.

    Every column gets a row and a column; only entries between numeric
    columns are computed, the rest keep ``NEUTRAL_CORRELATION``. Each pair
    uses the rows where both sides coerce to a number, so pairs may rest on
    different row counts. Self-pairs are exactly 1.

    Args:
    ----
        dataset: Records to correlate
        numeric_columns: Columns inferred as numeric
        columns: All columns of the dataset (defaults to the first record's keys)

    Returns:
    -------
        Mapping column -> column -> coefficient rounded to 4 decimals

    """
    if columns is None:
        columns = dataset_columns(dataset)

    matrix = {row: dict.fromkeys(columns, NEUTRAL_CORRELATION) for row in columns}
    if len(numeric_columns) < 2:
        logger.debug(
            f"Only {len(numeric_columns)} numeric columns, correlation matrix is trivial"
        )

    cells = {
        column: coerce_column(column_values(dataset, column), ColumnType.NUMERIC)
        for column in numeric_columns
    }
    for col_a, col_b in product(numeric_columns, repeat=2):
        if col_a == col_b:
            matrix[col_a][col_b] = 1.0
            continue
        xs, ys = paired_values(cells[col_a], cells[col_b])
        matrix[col_a][col_b] = round_fixed(pearson_correlation(xs, ys), 4)

    return matrix
