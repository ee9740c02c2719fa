"""Track the item the user picked."""

from __future__ import annotations

from typing import Callable

from ..models import ResultItem


class SelectionState:
    """Hold at most one selected item and report explicit selections."""

    def __init__(self, on_select: Callable[[ResultItem], None] | None = None) -> None:
        self._on_select = on_select
        self._current: ResultItem | None = None

    @property
    def current(self) -> ResultItem | None:
        return self._current

    def select(self, item: ResultItem) -> None:
        self._current = item
        if self._on_select is not None:
            self._on_select(item)

    def clear(self) -> None:
        self._current = None

    def is_selected(self, item: ResultItem) -> bool:
        return self._current is not None and self._current.id == item.id

    @property
    def label(self) -> str | None:
        """Return the caption shown next to the selected item's preview."""

        if self._current is None:
            return None
        if self._current.title:
            return self._current.title
        return "Selected Sticker" if self._current.is_sticker else "Selected GIF"
