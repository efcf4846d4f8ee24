"""Infer a semantic type for every column of a dataset.

The first non-missing value of a column decides its type. The rest of the
column is not checked; values that turn out not to match are skipped by the
aggregates later on.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from tabprofile.errors import EmptyDatasetError
from tabprofile.profiling.values import (
    is_boolean_literal,
    is_missing,
    parse_date,
    to_number,
)
from tabprofile.types import ColumnType, Dataset

logger = logging.getLogger(__name__)


def dataset_columns(dataset: Dataset) -> list[str]:
    """Return the column names of a dataset, taken from its first record.

    Raises:
        EmptyDatasetError: If the dataset has no records

    """
    if not dataset:
        msg = "No data provided for analysis"
        raise EmptyDatasetError(msg)
    return list(dataset[0].keys())


def column_values(dataset: Dataset, column: str) -> list[Any]:
    """Return a column's raw values; records lacking the key yield None."""
    return [record.get(column) for record in dataset]


def infer_column_type(values: Iterable[Any]) -> ColumnType:
    """Classify a column from its first non-missing value."""
    first = next((value for value in values if not is_missing(value)), None)
    if first is None:
        return ColumnType.EMPTY
    if to_number(first) is not None:
        return ColumnType.NUMERIC
    if is_boolean_literal(first):
        return ColumnType.BOOLEAN
    if parse_date(first) is not None:
        return ColumnType.DATE
    return ColumnType.TEXT


def infer_types(dataset: Dataset) -> dict[str, ColumnType]:
    """Infer the type of every column, in column order."""
    column_types = {
        column: infer_column_type(column_values(dataset, column))
        for column in dataset_columns(dataset)
    }
    logger.debug(f"Inferred column types: {column_types}")
    return column_types
