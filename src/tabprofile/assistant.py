"""Canned data queries for the conversational assistant.

The assistant never computes anything new: every query is a read-only
projection of a dataset context and its precomputed profile, shaped for
display in a chat reply.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from tabprofile.insights.synthesizer import (
    correlation_strength,
    pair_label,
    top_correlation_pairs,
)
from tabprofile.models.profile import NumericSummary, ProfileResult
from tabprofile.profiling.type_inference import dataset_columns, infer_types
from tabprofile.profiling.values import round_fixed
from tabprofile.types import ColumnType, Dataset

logger = logging.getLogger(__name__)

CONTEXT_SAMPLE_ROWS = 10
SAMPLE_QUERY_ROWS = 5
QUERY_CORRELATION_THRESHOLD = 0.1
QUERY_CORRELATION_LIMIT = 10

NO_ANALYSIS_MESSAGE = "No analysis available for this dataset"
UNSUPPORTED_QUERY_MESSAGE = "Unable to process this query type"


class QueryType(str, Enum):
    """Closed set of queries the assistant can run."""

    STATISTICS = "statistics"
    CORRELATION = "correlation"
    MISSING_VALUES = "missing_values"
    SAMPLE_DATA = "sample_data"
    COUNT = "count"


class DatasetContext(BaseModel):
    """What the assistant knows about one dataset."""

    model_config = ConfigDict(frozen=True)

    dataset_id: int | str
    file_name: str
    columns: list[str]
    column_types: dict[str, ColumnType]
    sample_data: list[dict[str, Any]] = Field(
        default_factory=list, description="First rows of the dataset"
    )
    total_records: int = Field(ge=0)
    profile: ProfileResult | None = Field(
        default=None, description="Precomputed profile, None when analysis never ran"
    )


class QueryResult(BaseModel):
    """Display-ready answer to a canned query."""

    model_config = ConfigDict(frozen=True)

    type: str
    data: Any = None
    message: str


def build_dataset_context(
    dataset_id: int | str,
    file_name: str,
    dataset: Dataset,
    profile: ProfileResult | None = None,
    sample_rows: int = CONTEXT_SAMPLE_ROWS,
) -> DatasetContext:
    """Assemble the assistant context of a dataset.

    Column types come from the profile when there is one, otherwise they are
    inferred from the records. An empty dataset yields a context without
    columns.
    """
    if not dataset:
        columns: list[str] = []
        column_types: dict[str, ColumnType] = {}
    elif profile is not None:
        columns = dataset_columns(dataset)
        column_types = dict(profile.column_types)
    else:
        columns = dataset_columns(dataset)
        column_types = infer_types(dataset)

    return DatasetContext(
        dataset_id=dataset_id,
        file_name=file_name,
        columns=columns,
        column_types=column_types,
        sample_data=[dict(record) for record in dataset[:sample_rows]],
        total_records=len(dataset),
        profile=profile,
    )


def _count_of_type(context: DatasetContext, column_type: ColumnType) -> int:
    return sum(1 for typ in context.column_types.values() if typ is column_type)


def _statistics(profile: ProfileResult) -> QueryResult:
    stats = [
        {
            "column": column,
            "mean": summary.mean,
            "median": summary.median,
            "min": summary.min,
            "max": summary.max,
            "std_dev": summary.std_dev,
        }
        for column, summary in profile.summary_stats.items()
        if isinstance(summary, NumericSummary)
    ]
    return QueryResult(
        type=QueryType.STATISTICS.value,
        data=stats,
        message=f"Statistical summary for {len(stats)} numeric columns",
    )


def _correlation(profile: ProfileResult) -> QueryResult:
    pairs = top_correlation_pairs(
        profile, threshold=QUERY_CORRELATION_THRESHOLD, limit=QUERY_CORRELATION_LIMIT
    )
    data = [
        {
            "pair": pair_label(col_a, col_b),
            "correlation": value,
            "strength": correlation_strength(value),
        }
        for col_a, col_b, value in pairs
    ]
    return QueryResult(
        type=QueryType.CORRELATION.value,
        data=data,
        message=f"Top {len(data)} correlations found",
    )


def _missing_values(profile: ProfileResult, total_records: int) -> QueryResult:
    data = [
        {
            "column": column,
            "missing_count": count,
            "percentage": (
                round_fixed(count / total_records * 100, 2) if total_records else 0.0
            ),
        }
        for column, count in profile.missing_values.items()
        if count > 0
    ]
    return QueryResult(
        type=QueryType.MISSING_VALUES.value,
        data=data,
        message=f"{len(data)} columns have missing values",
    )


def _sample_data(context: DatasetContext) -> QueryResult:
    return QueryResult(
        type=QueryType.SAMPLE_DATA.value,
        data=context.sample_data[:SAMPLE_QUERY_ROWS],
        message=f"Sample of first {SAMPLE_QUERY_ROWS} records",
    )


def _count(context: DatasetContext) -> QueryResult:
    return QueryResult(
        type=QueryType.COUNT.value,
        data={
            "total_records": context.total_records,
            "total_columns": len(context.columns),
            "numeric_columns": _count_of_type(context, ColumnType.NUMERIC),
            "text_columns": _count_of_type(context, ColumnType.TEXT),
        },
        message="Dataset overview",
    )


def _error(message: str) -> QueryResult:
    return QueryResult(type="error", message=message)


def execute_query(query_type: QueryType | str, context: DatasetContext) -> QueryResult:
    """Run a canned query against a dataset context.

    Args:
    ----
        query_type: One of the QueryType values
        context: Dataset context, with its profile for profile-backed queries

    Returns:
    -------
        QueryResult; ``type`` is "error" for unknown query types and for
        profile-backed queries on a dataset that was never analyzed

    """
    try:
        query = QueryType(query_type)
    except ValueError:
        logger.warning(f"Unsupported query type: {query_type!r}")
        return _error(UNSUPPORTED_QUERY_MESSAGE)

    if query is QueryType.SAMPLE_DATA:
        return _sample_data(context)
    if query is QueryType.COUNT:
        return _count(context)

    profile = context.profile
    if profile is None:
        return _error(NO_ANALYSIS_MESSAGE)
    if query is QueryType.STATISTICS:
        return _statistics(profile)
    if query is QueryType.CORRELATION:
        return _correlation(profile)
    return _missing_values(profile, context.total_records)


# Checked in order; the first matching keyword decides the query
QUERY_KEYWORDS: list[tuple[QueryType, tuple[str, ...], tuple[str, ...]]] = [
    (QueryType.STATISTICS, ("average", "mean"), ("average",)),
    (QueryType.CORRELATION, ("correlation",), ("correlation",)),
    (QueryType.MISSING_VALUES, ("missing", "null"), ("missing",)),
    (QueryType.SAMPLE_DATA, ("sample", "show me"), ("sample",)),
    (QueryType.COUNT, ("count", "how many"), ("count",)),
]


def detect_query_type(message: str, response: str = "") -> QueryType | None:
    """Route a chat message (and optionally the reply to it) to a canned query.

    Returns None when no data query is needed.
    """
    lower_message = message.lower()
    lower_response = response.lower()
    for query, message_keywords, response_keywords in QUERY_KEYWORDS:
        if any(keyword in lower_message for keyword in message_keywords) or any(
            keyword in lower_response for keyword in response_keywords
        ):
            return query
    return None


def suggest_questions(column_types: dict[str, ColumnType]) -> list[str]:
    """Return the six starter questions for a dataset."""
    numeric = [col for col, typ in column_types.items() if typ is ColumnType.NUMERIC]
    text = [col for col, typ in column_types.items() if typ is ColumnType.TEXT]
    numeric_label = numeric[0] if numeric else "the numeric columns"
    text_label = text[0] if text else "the text columns"
    return [
        f"What is the average value of {numeric_label}?",
        f"What are the most common values in {text_label}?",
        "How many records are in this dataset?",
        "What columns have missing values?",
        "What is the correlation between numeric variables?",
        "Show me a sample of the data",
    ]

