"""Result cache behaviour tests."""

from __future__ import annotations

from app.picker.cache import ResultCache


def test_blank_queries_share_the_trending_slot(make_results) -> None:
    cache = ResultCache()
    trending = make_results("trend")

    cache.put("gifs", "", trending)

    assert cache.get("gifs", "") == trending
    assert cache.get("gifs", "   ") == trending
    assert cache.get("gifs", "\t") == trending
    assert cache.get("gifs", None) == trending
    assert cache.has_trending("gifs") is True
    assert cache.get_trending("gifs") == trending


def test_search_keys_are_trimmed(make_results) -> None:
    cache = ResultCache()
    cats = make_results("cat")

    cache.put("gifs", "  cat ", cats)

    assert cache.get("gifs", "cat") == cats
    assert cache.has_trending("gifs") is False
    assert cache.get_trending("gifs") == ()


def test_categories_are_independent(make_results) -> None:
    cache = ResultCache()
    cache.put("gifs", "cat", make_results("cat"))
    cache.put_trending("gifs", make_results("trend"))

    assert cache.get("stickers", "cat") is None
    assert cache.has_trending("stickers") is False


def test_put_replaces_entries_wholesale(make_results) -> None:
    cache = ResultCache()
    cache.put("gifs", "cat", make_results("old", 5))
    replacement = make_results("new", 2)

    cache.put("gifs", "cat", replacement)

    assert cache.get("gifs", "cat") == replacement
    assert len(cache) == 1


def test_stale_entries_read_as_missing(make_results) -> None:
    now = [100.0]
    cache = ResultCache(max_age=60, clock=lambda: now[0])
    cache.put_trending("gifs", make_results("trend"))
    cache.put("gifs", "cat", make_results("cat"))

    now[0] += 59
    assert cache.has_trending("gifs") is True
    assert cache.get("gifs", "cat") is not None

    now[0] += 2
    assert cache.has_trending("gifs") is False
    assert cache.get("gifs", "cat") is None


def test_clear_drops_everything(make_results) -> None:
    cache = ResultCache()
    cache.put_trending("stickers", make_results("trend"))
    cache.put("stickers", "dog", make_results("dog"))

    cache.clear()

    assert len(cache) == 0
    assert cache.get("stickers", "dog") is None
