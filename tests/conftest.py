"""Pytest configuration and test helpers."""

from __future__ import annotations

import asyncio
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

import pytest


# Ensure the application package is importable when running tests without an
# editable install. This mirrors the expected runtime layout where ``app`` sits
# at the project root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.models import ResultItem, ResultSet  # noqa: E402


def giphy_item(item_id: str, title: str = "", kind: str = "gif") -> dict[str, Any]:
    """Return a provider-shaped item payload."""

    def variant(size: int) -> dict[str, str]:
        return {
            "url": f"https://media.example.com/{item_id}/{size}.gif",
            "width": str(size),
            "height": str(size),
        }

    return {
        "id": item_id,
        "title": title,
        "type": kind,
        "images": {
            "fixed_height": variant(200),
            "original": variant(480),
            "fixed_width_small": variant(100),
        },
    }


@dataclass
class PendingFetch:
    category: str
    query: str
    limit: int
    future: asyncio.Future[ResultSet]

    def succeed(self, results: ResultSet) -> None:
        self.future.set_result(results)

    def fail(self, exc: Exception) -> None:
        self.future.set_exception(exc)


class FakeFetcher:
    """Fetch capability recording calls.

    With ``responses`` it answers immediately from the mapping; otherwise each
    call parks on a future the test settles, in whatever order it likes.
    """

    def __init__(self, responses: dict[tuple[str, str], Any] | None = None) -> None:
        self.calls: list[tuple[str, str, int]] = []
        self.pending: list[PendingFetch] = []
        self._responses = responses

    async def fetch(self, category: str, query: str, limit: int) -> ResultSet:
        self.calls.append((category, query, limit))
        if self._responses is not None:
            response = self._responses.get((category, query), ())
            if isinstance(response, Exception):
                raise response
            return tuple(response)[:limit]
        future: asyncio.Future[ResultSet] = asyncio.get_running_loop().create_future()
        self.pending.append(PendingFetch(category, query, limit, future))
        return await future

    async def wait_for_calls(self, count: int) -> None:
        for _ in range(100):
            if len(self.calls) >= count:
                return
            await asyncio.sleep(0)
        raise AssertionError(f"expected {count} fetches, saw {len(self.calls)}")


@pytest.fixture
def anyio_backend() -> str:
    """Force AnyIO tests to run on asyncio without requiring trio."""

    return "asyncio"


@pytest.fixture
def make_item() -> Callable[..., ResultItem]:
    def factory(item_id: str, title: str = "", kind: str = "gif") -> ResultItem:
        return ResultItem.model_validate(giphy_item(item_id, title, kind))

    return factory


@pytest.fixture
def make_results(make_item: Callable[..., ResultItem]) -> Callable[[str, int], ResultSet]:
    def factory(prefix: str, count: int = 3) -> ResultSet:
        return tuple(make_item(f"{prefix}-{index}", f"{prefix} {index}") for index in range(count))

    return factory


@pytest.fixture
def giphy_payload_item() -> Callable[..., dict[str, Any]]:
    return giphy_item


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def answering_fetcher() -> Callable[..., FakeFetcher]:
    """Return a factory for fetchers that respond immediately from a mapping."""

    return FakeFetcher
