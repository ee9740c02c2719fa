"""In-memory result cache owned by a single picker session."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable

from ..models import Category, ResultSet
from ..utils import normalize_query


@dataclass(slots=True)
class CacheEntry:
    results: ResultSet
    stored_at: float


class ResultCache:
    """Map ``(category, query)`` pairs to result sets.

    The blank query is the trending slot for its category and lives apart from
    the search entries. Writes replace an entry wholesale. When ``max_age`` is
    set, entries older than that many seconds read as absent.
    """

    def __init__(
        self,
        *,
        max_age: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._max_age = max_age
        self._clock = clock
        self._trending: dict[Category, CacheEntry] = {}
        self._search: dict[tuple[Category, str], CacheEntry] = {}

    def get(self, category: Category, query: str | None) -> ResultSet | None:
        key = normalize_query(query)
        if not key:
            return self._read(self._trending.get(category))
        return self._read(self._search.get((category, key)))

    def put(self, category: Category, query: str | None, results: ResultSet) -> None:
        key = normalize_query(query)
        if not key:
            self.put_trending(category, results)
            return
        self._search[(category, key)] = self._entry(results)

    def has_trending(self, category: Category) -> bool:
        return self._read(self._trending.get(category)) is not None

    def get_trending(self, category: Category) -> ResultSet:
        return self._read(self._trending.get(category)) or ()

    def put_trending(self, category: Category, results: ResultSet) -> None:
        self._trending[category] = self._entry(results)

    def clear(self) -> None:
        self._trending.clear()
        self._search.clear()

    def __len__(self) -> int:
        return len(self._trending) + len(self._search)

    def _entry(self, results: ResultSet) -> CacheEntry:
        return CacheEntry(results=tuple(results), stored_at=self._clock())

    def _read(self, entry: CacheEntry | None) -> ResultSet | None:
        if entry is None:
            return None
        if self._max_age is not None and self._clock() - entry.stored_at > self._max_age:
            return None
        return entry.results
