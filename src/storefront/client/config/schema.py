"""Pydantic models describing the client runtime configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing_extensions import Self


class ConfigurationError(ValueError):
    """Raised when configuration values violate schema expectations."""


class ClientSettings(BaseModel):
    """Runtime settings for the reference-data client.

    The defaults mirror the runtime configuration shipped with the storefront:
    an ``/api/v1`` base path, an optional bearer token and the English, Khmer
    and Chinese display languages.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    api_base_url: str = "http://localhost:8000/api/v1"
    api_token: str | None = None
    timeout_seconds: float = Field(default=10.0, gt=0)
    default_language: str = "en"
    supported_languages: tuple[str, ...] = ("en", "km", "zh")
    preference_path: Path | None = None
    language_storage_key: str = "preferred-language"
    translations_endpoint: str = "/translations"
    languages_endpoint: str = "/languages"

    @field_validator("api_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith(("http://", "https://")):
            raise ConfigurationError("api_base_url must be an absolute http(s) URL")
        return value.rstrip("/")

    @field_validator("api_token", mode="before")
    @classmethod
    def _blank_token(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("default_language")
    @classmethod
    def _normalise_default(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("supported_languages", mode="before")
    @classmethod
    def _split_languages(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.split(",")
        if isinstance(value, (list, tuple)):
            return tuple(str(code).strip().lower() for code in value if str(code).strip())
        return value

    @model_validator(mode="after")
    def _validate_languages(self) -> Self:
        if not self.supported_languages:
            raise ConfigurationError("At least one supported language is required")
        if self.default_language not in self.supported_languages:
            raise ConfigurationError(
                f"Default language {self.default_language!r} is not among the supported languages"
            )
        return self


__all__ = ["ClientSettings", "ConfigurationError"]
