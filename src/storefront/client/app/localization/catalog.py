"""Bundled translation tables and dotted-path lookups."""

from __future__ import annotations

import json
from collections.abc import Mapping
from copy import deepcopy
from functools import cache
from importlib import resources
from typing import Any

BASE_LOCALE = "en"
_TRANSLATIONS_PACKAGE = "storefront.translations"


@cache
def available_locales() -> tuple[str, ...]:
    """Return the locales with a bundled translation table."""

    try:
        root = resources.files(_TRANSLATIONS_PACKAGE)
    except ModuleNotFoundError:  # pragma: no cover - defensive fallback
        return (BASE_LOCALE,)

    locales = sorted(
        entry.name.removesuffix(".json")
        for entry in root.iterdir()
        if entry.name.endswith(".json")
    )
    return tuple(locales) or (BASE_LOCALE,)


@cache
def _read_table(locale: str) -> dict[str, Any]:
    """Load the raw bundled table for the requested locale."""

    try:
        resource = resources.files(_TRANSLATIONS_PACKAGE).joinpath(f"{locale}.json")
    except ModuleNotFoundError:  # pragma: no cover - defensive fallback
        return {}

    if not resource.is_file():
        return {}

    with resource.open("r", encoding="utf-8") as handle:
        payload = json.load(handle)

    if not isinstance(payload, dict):  # pragma: no cover - defensive guard
        return {}
    return payload


def normalise_locale(locale: str | None) -> str:
    """Normalise a requested locale to a bundled table key."""

    if not locale:
        return BASE_LOCALE

    normalized = locale.strip().lower().replace("_", "-").split("-")[0]
    return normalized if normalized in available_locales() else BASE_LOCALE


def load_fallback_translations(locale: str | None) -> dict[str, Any]:
    """Return a private copy of the bundled table, base locale for unknown codes."""

    return deepcopy(_read_table(normalise_locale(locale)))


def is_translation_table(payload: Any) -> bool:
    """Return ``True`` for a non-empty, possibly nested, key-to-string mapping."""

    if not isinstance(payload, Mapping) or not payload:
        return False
    for key, value in payload.items():
        if not isinstance(key, str):
            return False
        if isinstance(value, Mapping):
            if not is_translation_table(value):
                return False
        elif not isinstance(value, str):
            return False
    return True


def lookup(table: Mapping[str, Any], key: str, default: str) -> str:
    """Resolve ``key`` against ``table`` following dotted path segments.

    Flat keys stored verbatim (``"footer.tagline": "..."``) win over nested
    paths. Any missing segment, non-mapping intermediate or non-string leaf
    resolves to ``default``.
    """

    flat = table.get(key)
    if isinstance(flat, str):
        return flat

    cursor: Any = table
    for segment in key.split("."):
        if not isinstance(cursor, Mapping) or segment not in cursor:
            return default
        cursor = cursor[segment]
    return cursor if isinstance(cursor, str) else default


__all__ = [
    "BASE_LOCALE",
    "available_locales",
    "is_translation_table",
    "load_fallback_translations",
    "lookup",
    "normalise_locale",
]
