"""A picker instance wiring input, caching, fetching and selection together."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

from ..config import PickerOptions
from ..models import Category, ResultItem, ResultSet
from ..utils import normalize_query
from .cache import ResultCache
from .debounce import QueryDebouncer
from .orchestrator import FetchCapability, FetchOrchestrator
from .selection import SelectionState

logger = logging.getLogger(__name__)

PLACEHOLDERS: dict[Category, str] = {
    "gifs": "Search GIFs...",
    "stickers": "Search stickers...",
}
EMPTY_MESSAGES: dict[Category, str] = {
    "gifs": "No GIFs found",
    "stickers": "No stickers found",
}


class PickerSession:
    """State for one open picker.

    The session owns its cache, so cached results live exactly as long as the
    picker does. Use it as an async context manager, or call :meth:`aclose`,
    so pending debounce timers and fetches are torn down with it.
    """

    def __init__(
        self,
        fetcher: FetchCapability,
        options: PickerOptions | None = None,
        *,
        on_select: Callable[[ResultItem], None] | None = None,
        on_change: Callable[[Category, ResultSet], None] | None = None,
    ) -> None:
        self._options = options or PickerOptions()
        self._cache = ResultCache(max_age=self._options.cache_stale_seconds)
        self._orchestrator = FetchOrchestrator(
            self._cache,
            fetcher,
            limit=self._options.limit,
            category=self._options.category,
            on_change=on_change,
        )
        self._debouncer = QueryDebouncer(
            self._options.debounce_interval, self._on_settled
        )
        self._selection = SelectionState(on_select)
        self._query = ""
        self._settled_query = ""
        self._closed = False

    @property
    def options(self) -> PickerOptions:
        return self._options

    @property
    def cache(self) -> ResultCache:
        return self._cache

    @property
    def orchestrator(self) -> FetchOrchestrator:
        return self._orchestrator

    @property
    def category(self) -> Category:
        return self._orchestrator.active_category

    @property
    def query(self) -> str:
        """The raw text currently in the search box."""

        return self._query

    @property
    def settled_query(self) -> str:
        """The last debounced query the results were resolved for."""

        return self._settled_query

    @property
    def results(self) -> ResultSet:
        return self._orchestrator.visible_results

    @property
    def is_loading(self) -> bool:
        return self._orchestrator.is_loading

    @property
    def selection(self) -> ResultItem | None:
        return self._selection.current

    @property
    def placeholder(self) -> str:
        return self._options.placeholder or PLACEHOLDERS[self.category]

    @property
    def empty_message(self) -> str:
        return EMPTY_MESSAGES[self.category]

    @property
    def selected_label(self) -> str | None:
        return self._selection.label

    def start(self) -> asyncio.Task[None] | None:
        """Load the initial (trending) results for the default category."""

        self._ensure_open()
        return self._orchestrator.resolve(self.category, self._settled_query)

    def set_query(self, raw: str) -> None:
        """Record a keystroke; results follow once typing pauses."""

        self._ensure_open()
        self._query = raw
        self._debouncer.push(raw)

    def submit(self) -> bool:
        """Resolve the pending query right away instead of waiting."""

        self._ensure_open()
        return self._debouncer.flush()

    def set_category(self, category: Category) -> asyncio.Task[None] | None:
        self._ensure_open()
        return self._orchestrator.switch_category(category, self._settled_query)

    def refresh(self) -> asyncio.Task[None] | None:
        """Refetch the visible results, replacing the cached copy."""

        self._ensure_open()
        return self._orchestrator.resolve(
            self.category, self._settled_query, force=True
        )

    def select(self, item: ResultItem) -> None:
        self._selection.select(item)

    def clear_selection(self) -> None:
        self._selection.clear()

    def is_selected(self, item: ResultItem) -> bool:
        return self._selection.is_selected(item)

    async def aclose(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._debouncer.close()
        await self._orchestrator.aclose()

    async def __aenter__(self) -> "PickerSession":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def _on_settled(self, value: str) -> None:
        self._settled_query = normalize_query(value)
        logger.debug("Query settled on %r for %s", self._settled_query, self.category)
        self._orchestrator.resolve(self.category, self._settled_query)

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("Picker session is closed")
