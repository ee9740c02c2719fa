"""Coalesce rapid query edits into settled search events."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

logger = logging.getLogger(__name__)


class QueryDebouncer:
    """Emit the latest raw query once input has been quiet for ``interval``.

    Every :meth:`push` restarts the quiet period, so a burst of edits spaced
    closer than the interval settles exactly once with the final value. The
    debouncer must run on the event loop that drives the picker; :meth:`close`
    cancels any pending settlement and ignores later pushes.
    """

    def __init__(self, interval: float, on_settle: Callable[[str], None]) -> None:
        if interval < 0:
            raise ValueError("Debounce interval must not be negative")
        self._interval = interval
        self._on_settle = on_settle
        self._handle: asyncio.TimerHandle | None = None
        self._latest: str | None = None
        self._closed = False

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def pending(self) -> bool:
        """Return whether a settlement is scheduled but has not fired yet."""

        return self._handle is not None

    @property
    def closed(self) -> bool:
        return self._closed

    def push(self, value: str) -> None:
        """Record a raw query change and restart the quiet period."""

        if self._closed:
            logger.debug("Ignoring query change after debouncer teardown")
            return
        self._latest = value
        self._cancel_timer()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self._interval, self._settle)

    def flush(self) -> bool:
        """Settle a pending value immediately, e.g. when the user hits enter."""

        if self._handle is None:
            return False
        self._cancel_timer()
        self._settle()
        return True

    def close(self) -> None:
        self._closed = True
        self._cancel_timer()

    def __enter__(self) -> "QueryDebouncer":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _cancel_timer(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _settle(self) -> None:
        self._handle = None
        if self._closed or self._latest is None:
            return
        self._on_settle(self._latest)
