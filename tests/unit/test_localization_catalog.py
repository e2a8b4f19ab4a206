"""Tests for the bundled translation tables and dotted lookups."""

from __future__ import annotations

import json
from pathlib import Path

from storefront.client.app.localization import (
    available_locales,
    load_fallback_translations,
    lookup,
    normalise_locale,
)
from storefront.client.app.localization.catalog import is_translation_table

TRANSLATIONS_ROOT = Path(__file__).resolve().parents[2] / "src" / "storefront" / "translations"


def _read_table(locale: str) -> dict:
    return json.loads(TRANSLATIONS_ROOT.joinpath(f"{locale}.json").read_text(encoding="utf-8"))


def test_available_locales_match_bundled_files() -> None:
    assert available_locales() == ("en", "km", "zh")


def test_load_fallback_translations_reads_bundled_table() -> None:
    assert load_fallback_translations("km") == _read_table("km")


def test_unknown_locale_falls_back_to_base_table() -> None:
    assert load_fallback_translations("fr") == _read_table("en")
    assert normalise_locale("fr") == "en"
    assert normalise_locale(None) == "en"


def test_normalise_locale_strips_region() -> None:
    assert normalise_locale("zh-CN") == "zh"
    assert normalise_locale("km_KH") == "km"


def test_fallback_tables_are_private_copies() -> None:
    table = load_fallback_translations("en")
    table["footer"]["tagline"] = "changed"

    assert load_fallback_translations("en")["footer"]["tagline"] != "changed"


def test_dotted_lookup_resolves_nested_values() -> None:
    table = {"footer": {"tagline": "X"}}

    assert lookup(table, "footer.tagline", "d") == "X"
    assert lookup(table, "footer.missing", "d") == "d"


def test_dotted_lookup_over_non_mapping_intermediate_returns_default() -> None:
    table = {"a": "leaf", "n": {"b": 5}}

    assert lookup(table, "a.b.c", "d") == "d"
    assert lookup(table, "n.b", "d") == "d"
    assert lookup(table, "n", "d") == "d"


def test_flat_keys_are_resolved_verbatim() -> None:
    assert lookup({"footer.tagline": "Flat"}, "footer.tagline", "d") == "Flat"


def test_translation_table_shape_check() -> None:
    assert is_translation_table({"a": "b", "nested": {"c": "d"}})
    assert not is_translation_table({})
    assert not is_translation_table({"a": None})
    assert not is_translation_table(["a"])
