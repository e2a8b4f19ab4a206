"""Configuration loader combining an optional YAML file with environment overrides."""

from __future__ import annotations

import os
from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .schema import ClientSettings, ConfigurationError

ENV_PREFIX = "STOREFRONT_"
CONFIG_PATH_ENV = f"{ENV_PREFIX}CONFIG"

_ENV_FIELDS: Mapping[str, str] = {
    "API_BASE_URL": "api_base_url",
    "API_TOKEN": "api_token",
    "TIMEOUT_SECONDS": "timeout_seconds",
    "DEFAULT_LANGUAGE": "default_language",
    "SUPPORTED_LANGUAGES": "supported_languages",
    "PREFERENCE_PATH": "preference_path",
}


def _load_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration file must define a mapping at the top level")
    return data


def _environment_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for suffix, field_name in _ENV_FIELDS.items():
        value = environ.get(f"{ENV_PREFIX}{suffix}")
        if value is not None and value.strip():
            overrides[field_name] = value.strip()
    return overrides


def load_settings(
    path: str | os.PathLike[str] | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> ClientSettings:
    """Build validated settings from ``path`` and ``STOREFRONT_*`` variables.

    Environment values take precedence over the file so that deployments can
    swap the API token or base URL without editing the bundled configuration.
    """

    env = os.environ if environ is None else environ
    raw: dict[str, Any] = {}

    if path is not None:
        config_file = Path(path)
        if not config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_file}")
        raw.update(_load_yaml(config_file))

    raw.update(_environment_overrides(env))

    try:
        return ClientSettings.model_validate(raw)
    except ValidationError as error:
        raise ConfigurationError(f"Configuration validation failed: {error}") from error


@lru_cache(maxsize=1)
def get_settings() -> ClientSettings:
    """Load and cache settings for the running process."""

    return load_settings(os.environ.get(CONFIG_PATH_ENV))


__all__ = [
    "CONFIG_PATH_ENV",
    "ENV_PREFIX",
    "get_settings",
    "load_settings",
]
