"""Profiling stages for tabular datasets.

Type inference, per-column statistics and the correlation matrix, plus the
``profile_dataset`` entry point that chains them.
"""

from tabprofile.profiling.column_profiler import (
    profile_columns,
    summarize_boolean,
    summarize_numeric,
    summarize_text,
)
from tabprofile.profiling.correlation import (
    compute_correlation_matrix,
    pearson_correlation,
)
from tabprofile.profiling.profiler import (
    DatasetPage,
    ProfileService,
    paginate,
    profile_dataset,
    sample_records,
)
from tabprofile.profiling.type_inference import (
    dataset_columns,
    infer_column_type,
    infer_types,
)

__all__ = [
    "DatasetPage",
    "ProfileService",
    "compute_correlation_matrix",
    "dataset_columns",
    "infer_column_type",
    "infer_types",
    "paginate",
    "pearson_correlation",
    "profile_columns",
    "profile_dataset",
    "sample_records",
    "summarize_boolean",
    "summarize_numeric",
    "summarize_text",
]
