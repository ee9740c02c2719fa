"""Domain-specific exceptions."""

from __future__ import annotations


class PickerError(Exception):
    pass


class TransportFailure(PickerError):
    """Raised when a result fetch could not be completed over the network."""

    def __init__(self, category: str, query: str, reason: str) -> None:
        self.category = category
        self.query = query
        self.reason = reason
        target = f"search {query!r}" if query else "trending"
        super().__init__(f"Fetching {category} {target} failed: {reason}")
