"""Profiling engine for tabular datasets."""

from tabprofile.assistant import (
    DatasetContext,
    QueryResult,
    QueryType,
    build_dataset_context,
    detect_query_type,
    execute_query,
    suggest_questions,
)
from tabprofile.cache import TTLCache
from tabprofile.errors import EmptyDatasetError, ProfileValidationError, TabprofileError
from tabprofile.insights import correlation_strength, synthesize_insights
from tabprofile.models import (
    BooleanSummary,
    CorrelationPair,
    DataOverview,
    Insights,
    NumericSummary,
    ProfileResult,
    TextSummary,
    ValueCount,
)
from tabprofile.persistence import (
    YamlProfileStore,
    load_profile_from_yaml,
    profile_from_payload,
    profile_to_payload,
    save_profile_to_yaml,
    validate_profile_payload,
)
from tabprofile.profiling import (
    DatasetPage,
    ProfileService,
    compute_correlation_matrix,
    infer_types,
    profile_columns,
    profile_dataset,
)
from tabprofile.types import CellValue, ColumnType, ValueKind

__version__ = "0.1.0"

__all__ = [
    "BooleanSummary",
    "CellValue",
    "ColumnType",
    "CorrelationPair",
    "DataOverview",
    "DatasetContext",
    "DatasetPage",
    "EmptyDatasetError",
    "Insights",
    "NumericSummary",
    "ProfileResult",
    "ProfileService",
    "ProfileValidationError",
    "QueryResult",
    "QueryType",
    "TTLCache",
    "TabprofileError",
    "TextSummary",
    "ValueCount",
    "ValueKind",
    "YamlProfileStore",
    "build_dataset_context",
    "compute_correlation_matrix",
    "correlation_strength",
    "detect_query_type",
    "execute_query",
    "infer_types",
    "load_profile_from_yaml",
    "profile_columns",
    "profile_dataset",
    "profile_from_payload",
    "profile_to_payload",
    "save_profile_to_yaml",
    "suggest_questions",
    "synthesize_insights",
    "validate_profile_payload",
]
