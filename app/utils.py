"""Utility helpers for the picker service."""

from __future__ import annotations

import re
from typing import Any


DIMENSION_RE = re.compile(r"\d+")


def normalize_query(value: str | None) -> str:
    """Return the cache key form of a raw query; blank input means trending."""

    if not value:
        return ""
    return value.strip()


def coerce_dimension(value: Any) -> int:
    """Parse a pixel dimension that may arrive as an int, float or string."""

    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(value, 0)
    if isinstance(value, float):
        return max(int(value), 0)
    if not value:
        return 0
    match = DIMENSION_RE.search(str(value))
    if not match:
        return 0
    return int(match.group(0))
