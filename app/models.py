"""Pydantic models describing picker result payloads."""

from __future__ import annotations

import logging
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from .utils import coerce_dimension

logger = logging.getLogger(__name__)

Category = Literal["gifs", "stickers"]

PRIMARY_CATEGORY: Category = "gifs"
ALTERNATE_CATEGORY: Category = "stickers"
CATEGORIES: tuple[Category, ...] = (PRIMARY_CATEGORY, ALTERNATE_CATEGORY)


def normalize_category(value: object) -> Category:
    """Map wire values onto a category, treating anything unknown as GIFs."""

    if isinstance(value, str) and value.strip().lower() == ALTERNATE_CATEGORY:
        return ALTERNATE_CATEGORY
    return PRIMARY_CATEGORY


class ImageVariant(BaseModel):
    """A single rendition of an item at a fixed size."""

    model_config = ConfigDict(frozen=True)

    url: str
    width: int = 0
    height: int = 0

    @field_validator("width", "height", mode="before")
    @classmethod
    def _parse_dimension(cls, value: Any) -> int:
        # Giphy reports dimensions as strings and occasionally leaves them blank.
        return coerce_dimension(value)


class ResultImages(BaseModel):
    """The image variants the picker renders for an item."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    thumbnail: ImageVariant = Field(
        validation_alias=AliasChoices("thumbnail", "fixed_height")
    )
    full: ImageVariant = Field(validation_alias=AliasChoices("full", "original"))
    small: ImageVariant = Field(
        validation_alias=AliasChoices("small", "fixed_width_small")
    )


class ResultItem(BaseModel):
    """Represents a single GIF or sticker returned by the provider."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str = ""
    type: str = "gif"
    images: ResultImages

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> str:
        if value is None:
            raise ValueError("Result items require an id")
        text = str(value).strip()
        if not text:
            raise ValueError("Result items require an id")
        return text

    @field_validator("title", mode="before")
    @classmethod
    def _default_title(cls, value: Any) -> str:
        return str(value or "").strip()

    @property
    def is_sticker(self) -> bool:
        return self.type == "sticker"


ResultSet = tuple[ResultItem, ...]


def parse_result_set(payload: object) -> ResultSet:
    """Extract result items from a provider payload.

    Payloads without a ``data`` list are treated as an empty result set and
    entries that do not look like items are skipped, so a malformed response
    never surfaces as an error.
    """

    if not isinstance(payload, dict):
        logger.debug("Ignoring non-object result payload: %r", type(payload))
        return ()
    raw_items = payload.get("data")
    if not isinstance(raw_items, list):
        logger.debug("Result payload is missing a data array")
        return ()

    items: list[ResultItem] = []
    for entry in raw_items:
        if not isinstance(entry, dict):
            continue
        try:
            items.append(ResultItem.model_validate(entry))
        except ValidationError as exc:
            logger.debug("Skipping malformed result item %r: %s", entry.get("id"), exc)
    return tuple(items)
