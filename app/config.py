"""Application configuration models."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Literal

from pydantic import BaseModel, Field, HttpUrl, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models import CATEGORIES, PRIMARY_CATEGORY, Category


class Settings(BaseSettings):
    """Settings loaded from environment variables or a .env file."""

    app_name: str = Field(default="GIF Picker", alias="APP_NAME")
    server_host: str = Field(default="0.0.0.0", alias="HOST")
    server_port: int = Field(default=3000, alias="PORT")

    giphy_api_key: str | None = Field(default=None, alias="GIPHY_API_KEY")
    giphy_api_url: HttpUrl = Field(
        default="https://api.giphy.com/v1", alias="GIPHY_API_URL"
    )
    giphy_rating: str = Field(default="g", alias="GIPHY_RATING")

    picker_api_url: HttpUrl = Field(
        default="http://localhost:3000", alias="PICKER_API_URL"
    )
    default_category: Category = Field(
        default=PRIMARY_CATEGORY, alias="PICKER_DEFAULT_CATEGORY"
    )
    result_limit: int = Field(default=20, alias="PICKER_LIMIT", ge=1, le=50)
    debounce_interval_ms: int = Field(
        default=300, alias="PICKER_DEBOUNCE_MS", ge=0, le=5_000
    )
    cache_stale_seconds: float | None = Field(
        default=None, alias="PICKER_CACHE_TTL", gt=0
    )

    environment: Literal["development", "production"] = Field(
        default="development", alias="ENVIRONMENT"
    )

    @field_validator("default_category", mode="before")
    @classmethod
    def _parse_default_category(cls, value: object) -> str:
        """Normalise category selections from environment values."""

        if value is None:
            return PRIMARY_CATEGORY
        cleaned = str(value).strip().lower()
        if not cleaned:
            return PRIMARY_CATEGORY
        if cleaned not in CATEGORIES:
            raise ValueError("Unknown picker category configured")
        return cleaned

    @field_validator("cache_stale_seconds", mode="before")
    @classmethod
    def _blank_ttl_disables_staleness(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


class PickerOptions(BaseModel):
    """Per-picker overrides layered on top of the global settings."""

    category: Category = PRIMARY_CATEGORY
    limit: int = Field(default=20, ge=1, le=50)
    debounce_interval_ms: int = Field(default=300, ge=0, le=5_000)
    cache_stale_seconds: float | None = Field(default=None, gt=0)
    placeholder: str | None = None

    @property
    def debounce_interval(self) -> float:
        """Return the debounce interval in seconds."""

        return self.debounce_interval_ms / 1000

    @classmethod
    def from_settings(cls, settings: Settings, **overrides: Any) -> "PickerOptions":
        """Build options from global settings, applying explicit overrides."""

        payload: dict[str, Any] = {
            "category": settings.default_category,
            "limit": settings.result_limit,
            "debounce_interval_ms": settings.debounce_interval_ms,
            "cache_stale_seconds": settings.cache_stale_seconds,
        }
        payload.update(
            {key: value for key, value in overrides.items() if value is not None}
        )
        return cls.model_validate(payload)


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""

    return Settings()  # type: ignore[call-arg]


settings = get_settings()
