"""
In-memory TTL cache for dataset pages, samples and profiles.

The cache is an explicit collaborator: create one and hand it to the
services that use it. Entries expire individually; once ``max_entries`` is
reached the least recently used entry is evicted.
"""

from __future__ import annotations

import logging
import re
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 5 * 60
SAMPLE_TTL_SECONDS = 10 * 60
DEFAULT_MAX_ENTRIES = 256


@dataclass
class CacheEntry:
    value: Any
    stored_at: float
    ttl: float


class TTLCache:
    """
    LRU cache whose entries expire after a per-entry time to live.

    Not thread-safe.
    """

    def __init__(
        self,
        default_ttl: float = DEFAULT_TTL_SECONDS,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize the cache.

        Args:
            default_ttl: Time to live in seconds for entries stored without one
            max_entries: Maximum number of entries kept
            clock: Source of the current time in seconds
        """
        if max_entries < 1:
            msg = f"max_entries must be at least 1, got {max_entries}"
            raise ValueError(msg)
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self.default_ttl = default_ttl
        self.max_entries = max_entries
        self._clock = clock
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def _is_expired(self, entry: CacheEntry) -> bool:
        return self._clock() - entry.stored_at > entry.ttl

    def _live_entry(self, key: str) -> CacheEntry | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._is_expired(entry):
            del self._entries[key]
            logger.debug(f"cache_status=expired key={key}")
            return None
        return entry

    def get(self, key: str) -> Any | None:
        """
        Retrieve a value.

        Returns:
            The cached value, or None if absent or expired
        """
        entry = self._live_entry(key)
        if entry is None:
            self.misses += 1
            return None
        self._entries.move_to_end(key)
        self.hits += 1
        logger.debug(f"cache_status=hit key={key}")
        return entry.value

    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        self._entries[key] = CacheEntry(
            value=value,
            stored_at=self._clock(),
            ttl=self.default_ttl if ttl is None else ttl,
        )
        self._entries.move_to_end(key)
        while len(self._entries) > self.max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug(f"cache_status=evicted key={evicted}")

    def has(self, key: str) -> bool:
        return self._live_entry(key) is not None

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def delete_matching(self, pattern: re.Pattern[str]) -> int:
        """Delete every key fully matching ``pattern`` and return how many went."""
        doomed = [key for key in self._entries if pattern.fullmatch(key)]
        for key in doomed:
            del self._entries[key]
        return len(doomed)

    def clear(self) -> None:
        self._entries.clear()


def dataset_key(dataset_id: int | str, page: int, page_size: int) -> str:
    return f"dataset_{dataset_id}_page_{page}_size_{page_size}"


def sample_key(dataset_id: int | str, sample_size: int) -> str:
    return f"dataset_{dataset_id}_sample_{sample_size}"


def analysis_key(dataset_id: int | str) -> str:
    return f"analysis_{dataset_id}"


def dataset_keys_pattern(dataset_id: int | str) -> re.Pattern[str]:
    """Match the page and sample keys of one dataset, and nothing else.

    Ids may contain underscores, so a plain "dataset_a_" prefix would also
    match the keys of dataset "a_b".
    """
    return re.compile(
        rf"dataset_{re.escape(str(dataset_id))}_(?:page_\d+_size_\d+|sample_\d+)"
    )
