"""In-memory cache store for computed solar results."""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from datetime import date
from threading import Lock
from typing import Callable

from solarclock.contracts import SolarResult


@dataclass(frozen=True)
class ResultCacheKey:
    """Stable cache key for one day's events at one coordinate.

    Events depend only on the UTC calendar day of the requested instant, so
    every instant within a day shares one entry.
    """

    day: date
    lat: float
    lon: float


class ResultStore:
    """Thread-safe in-memory cache with LRU-style eviction."""

    def __init__(self, max_entries: int = 256) -> None:
        """Initialize store with maximum retained entries."""
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")

        self._max_entries = max_entries
        self._lock = Lock()
        self._entries: OrderedDict[ResultCacheKey, SolarResult] = OrderedDict()
        self.build_count = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get_or_build(
        self,
        key: ResultCacheKey,
        builder: Callable[[], SolarResult],
    ) -> tuple[SolarResult, bool]:
        """Return cached result for key, building once on miss."""
        with self._lock:
            existing = self._entries.get(key)
            if existing is not None:
                self._entries.move_to_end(key)
                return existing, False

            result = builder()
            self._entries[key] = result
            self._entries.move_to_end(key)
            self.build_count += 1

            while len(self._entries) > self._max_entries:
                self._entries.popitem(last=False)

            return result, True
