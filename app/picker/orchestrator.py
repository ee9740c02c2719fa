"""Decide between cached results and fresh fetches for each category lane."""

from __future__ import annotations

import asyncio
import logging
from contextlib import suppress
from dataclasses import dataclass
from typing import Callable, Literal, Protocol

from ..models import CATEGORIES, PRIMARY_CATEGORY, Category, ResultSet
from ..services.exceptions import TransportFailure
from ..utils import normalize_query
from .cache import ResultCache

logger = logging.getLogger(__name__)

LaneState = Literal["idle", "pending", "resolved", "failed"]


class FetchCapability(Protocol):
    """Anything able to load a trending (blank query) or search result set."""

    async def fetch(self, category: Category, query: str, limit: int) -> ResultSet:
        ...


@dataclass(slots=True)
class Lane:
    """Request and visibility state for one category."""

    category: Category
    state: LaneState = "idle"
    latest_token: int = 0
    pending_key: str | None = None
    task: asyncio.Task[None] | None = None
    visible: ResultSet = ()
    visible_key: str | None = None
    last_error: Exception | None = None

    @property
    def in_flight(self) -> bool:
        return self.state == "pending" and self.task is not None and not self.task.done()


class FetchOrchestrator:
    """Serve results from the cache or fetch them, letting the newest request win.

    Each category has its own lane with a monotonically increasing request
    token. A fetch only commits to the cache and the visible list while its
    token is still the lane's latest; anything older is dropped when it
    completes, whatever order the responses arrive in. Fetch failures are
    logged and leave the last good results on screen.
    """

    def __init__(
        self,
        cache: ResultCache,
        fetcher: FetchCapability,
        *,
        limit: int = 20,
        category: Category = PRIMARY_CATEGORY,
        on_change: Callable[[Category, ResultSet], None] | None = None,
    ) -> None:
        self._cache = cache
        self._fetcher = fetcher
        self._limit = limit
        self._active: Category = category
        self._on_change = on_change
        self._lanes: dict[Category, Lane] = {name: Lane(name) for name in CATEGORIES}
        self._tasks: set[asyncio.Task[None]] = set()
        self._closed = False

    @property
    def active_category(self) -> Category:
        return self._active

    @property
    def visible_results(self) -> ResultSet:
        return self._lanes[self._active].visible

    @property
    def is_loading(self) -> bool:
        return self._lanes[self._active].state == "pending"

    def lane(self, category: Category) -> Lane:
        return self._lanes[category]

    def resolve(
        self, category: Category, query: str | None, *, force: bool = False
    ) -> asyncio.Task[None] | None:
        """Show results for ``(category, query)``, fetching them on a cache miss.

        Returns the fetch task when a network request is (still) in flight
        for this key, or ``None`` when the cache answered synchronously.
        """

        if self._closed:
            raise RuntimeError("Cannot resolve queries after the picker was closed")
        lane = self._lanes[category]
        key = normalize_query(query)

        if not force:
            if lane.in_flight and lane.pending_key == key:
                return lane.task
            cached = self._cache.get(category, key)
            if cached is not None:
                if lane.in_flight:
                    # The cached answer is newer than whatever is still loading.
                    lane.latest_token += 1
                    lane.task = None
                lane.state = "resolved"
                lane.pending_key = None
                self._commit(lane, key, cached)
                return None

        lane.latest_token += 1
        token = lane.latest_token
        lane.state = "pending"
        lane.pending_key = key
        task = asyncio.get_running_loop().create_task(self._run_fetch(lane, token, key))
        lane.task = task
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def switch_category(
        self, category: Category, query: str | None
    ) -> asyncio.Task[None] | None:
        """Make ``category`` the visible lane and resolve the current query on it."""

        self._active = category
        task = self.resolve(category, query)
        if task is not None:
            # Show whatever the lane last displayed while its fetch completes.
            self._notify(self._lanes[category])
        return task

    async def aclose(self) -> None:
        """Cancel outstanding fetches; no result commits after teardown."""

        self._closed = True
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        for task in tasks:
            with suppress(asyncio.CancelledError):
                await task
        self._tasks.clear()

    async def _run_fetch(self, lane: Lane, token: int, key: str) -> None:
        try:
            results = await self._fetcher.fetch(lane.category, key, self._limit)
        except Exception as exc:
            if token != lane.latest_token:
                logger.debug(
                    "Dropping superseded %s failure for %r (token %s < %s)",
                    lane.category,
                    key,
                    token,
                    lane.latest_token,
                )
                return
            lane.state = "failed"
            lane.pending_key = None
            lane.last_error = exc
            if isinstance(exc, TransportFailure):
                logger.warning("Keeping previous %s results: %s", lane.category, exc)
            else:
                logger.exception(
                    "Unexpected error fetching %s results for %r", lane.category, key
                )
            self._notify(lane)
            return

        if token != lane.latest_token or self._closed:
            logger.debug(
                "Dropping superseded %s results for %r (token %s < %s)",
                lane.category,
                key,
                token,
                lane.latest_token,
            )
            return

        self._cache.put(lane.category, key, results)
        lane.state = "resolved"
        lane.pending_key = None
        lane.last_error = None
        self._commit(lane, key, results)

    def _commit(self, lane: Lane, key: str, results: ResultSet) -> None:
        lane.visible = results
        lane.visible_key = key
        self._notify(lane)

    def _notify(self, lane: Lane) -> None:
        if self._on_change is not None and lane.category == self._active:
            self._on_change(lane.category, lane.visible)
