"""Profile a dataset end to end and serve profiles, pages and samples.

``profile_dataset`` is the pure engine entry point: type inference, column
statistics and the correlation matrix in one pass. ``ProfileService`` wraps
it for applications, caching results in an injected ``TTLCache`` and
persisting profiles through an optional ``ProfileStore``.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from tabprofile.cache import (
    SAMPLE_TTL_SECONDS,
    TTLCache,
    analysis_key,
    dataset_key,
    dataset_keys_pattern,
    sample_key,
)
from tabprofile.models.profile import ProfileResult
from tabprofile.profiling.column_profiler import profile_columns
from tabprofile.profiling.correlation import compute_correlation_matrix
from tabprofile.profiling.type_inference import dataset_columns, infer_types
from tabprofile.types import ColumnType, Dataset, Record

if TYPE_CHECKING:
    from tabprofile.config import Settings
    from tabprofile.persistence import ProfileStore

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 1000
DEFAULT_SAMPLE_SIZE = 1000


def profile_dataset(dataset: Dataset) -> ProfileResult:
    """Profile a fully materialized dataset.

    Args:
    ----
        dataset: Records sharing the column set of the first record

    Returns:
    -------
        ProfileResult with column types, summaries, missing counts and
        correlation matrix

    Raises:
    ------
        EmptyDatasetError: If the dataset has no records

    """
    columns = dataset_columns(dataset)
    column_types = infer_types(dataset)
    summary_stats, missing_values = profile_columns(dataset, column_types)
    numeric_columns = [
        column for column in columns if column_types[column] is ColumnType.NUMERIC
    ]
    correlation_matrix = compute_correlation_matrix(
        dataset, numeric_columns, columns=columns
    )

    logger.info(
        f"Profiled {len(dataset)} records: {len(columns)} columns, "
        f"{len(numeric_columns)} numeric, {len(summary_stats)} summarized"
    )
    return ProfileResult(
        column_types=column_types,
        summary_stats=summary_stats,
        missing_values=missing_values,
        correlation_matrix=correlation_matrix,
    )


@dataclass(frozen=True)
class DatasetPage:
    """One page of a dataset's records."""

    data: list[Record]
    total_rows: int
    has_more: bool


def paginate(dataset: Dataset, page: int, page_size: int) -> DatasetPage:
    """Slice out a 1-based page of records."""
    if page < 1 or page_size < 1:
        msg = f"page and page_size must be positive, got page={page} page_size={page_size}"
        raise ValueError(msg)
    start = (page - 1) * page_size
    end = start + page_size
    return DatasetPage(
        data=list(dataset[start:end]),
        total_rows=len(dataset),
        has_more=end < len(dataset),
    )


def sample_records(
    dataset: Dataset, sample_size: int, rng: random.Random | None = None
) -> list[Record]:
    """Draw records without replacement, keeping their original order.

    The whole dataset is returned when it is not larger than ``sample_size``.
    """
    if len(dataset) <= sample_size:
        return list(dataset)
    rng = rng or random.Random()
    chosen = sorted(rng.sample(range(len(dataset)), sample_size))
    return [dataset[index] for index in chosen]


@dataclass
class ProfileService:
    """Profiles datasets on behalf of an application.

    Profiles are looked up in the cache, then in the store, and only computed
    when neither has them. A dataset that changes must be invalidated; its
    profile is then recomputed wholesale on the next request.
    """

    cache: TTLCache = field(default_factory=TTLCache)
    store: ProfileStore | None = None
    rng: random.Random = field(default_factory=random.Random)
    sample_ttl: float = SAMPLE_TTL_SECONDS
    page_size: int = DEFAULT_PAGE_SIZE
    sample_size: int = DEFAULT_SAMPLE_SIZE

    @classmethod
    def from_settings(cls, settings: Settings) -> ProfileService:
        from tabprofile.persistence import YamlProfileStore

        store = YamlProfileStore(settings.profile_dir) if settings.profile_dir else None
        return cls(
            cache=TTLCache(
                default_ttl=settings.cache_ttl_seconds,
                max_entries=settings.cache_max_entries,
            ),
            store=store,
            sample_ttl=settings.sample_cache_ttl_seconds,
            page_size=settings.page_size,
            sample_size=settings.sample_size,
        )

    def get_profile(self, dataset_id: int | str, dataset: Dataset) -> ProfileResult:
        key = analysis_key(dataset_id)
        profile = self.cache.get(key)
        if profile is not None:
            return profile

        if self.store is not None:
            profile = self.store.load(dataset_id)

        if profile is None:
            profile = profile_dataset(dataset)
            if self.store is not None:
                self.store.save(dataset_id, profile)

        self.cache.set(key, profile)
        return profile

    def refresh_profile(
        self, dataset_id: int | str, dataset: Dataset
    ) -> ProfileResult:
        """Recompute the profile of a changed dataset, replacing the stored one."""
        self.invalidate(dataset_id)
        profile = profile_dataset(dataset)
        if self.store is not None:
            self.store.save(dataset_id, profile)
        self.cache.set(analysis_key(dataset_id), profile)
        return profile

    def get_page(
        self,
        dataset_id: int | str,
        dataset: Dataset,
        page: int = 1,
        page_size: int | None = None,
    ) -> DatasetPage:
        """Return a page of records; ``page_size`` defaults to the service's."""
        if page_size is None:
            page_size = self.page_size
        key = dataset_key(dataset_id, page, page_size)
        cached = self.cache.get(key)
        if cached is not None:
            return cached
        result = paginate(dataset, page, page_size)
        self.cache.set(key, result)
        return result

    def get_sample(
        self, dataset_id: int | str, dataset: Dataset, sample_size: int | None = None
    ) -> list[Record]:
        if sample_size is None:
            sample_size = self.sample_size
        key = sample_key(dataset_id, sample_size)
        cached = self.cache.get(key)
        if cached is not None:
            return cached
        result = sample_records(dataset, sample_size, self.rng)
        self.cache.set(key, result, ttl=self.sample_ttl)
        return result

    def invalidate(self, dataset_id: int | str) -> None:
        """Forget everything cached for a dataset."""
        self.cache.delete(analysis_key(dataset_id))
        dropped = self.cache.delete_matching(dataset_keys_pattern(dataset_id))
        logger.debug(f"Invalidated dataset {dataset_id} ({dropped} cached pages/samples)")

    def delete(self, dataset_id: int | str) -> bool:
        """Invalidate a dataset and remove its persisted profile.

        Returns:
            True if a persisted profile was removed

        """
        self.invalidate(dataset_id)
        if self.store is None:
            return False
        return self.store.delete(dataset_id)


__all__ = [
    "DatasetPage",
    "ProfileService",
    "paginate",
    "profile_dataset",
    "sample_records",
]
