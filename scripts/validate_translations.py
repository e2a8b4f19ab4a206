#!/usr/bin/env python3
"""Validate the bundled translation tables against the base locale."""

from __future__ import annotations

import argparse
import json
import re
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
TRANSLATIONS_DIR = REPO_ROOT / "src" / "storefront" / "translations"
LANGUAGES_PATH = REPO_ROOT / "src" / "storefront" / "fallback" / "languages.json"
BASE_LOCALE = "en"

PLACEHOLDER_PATTERN = re.compile(r"{{\s*([a-zA-Z0-9_.-]+)\s*}}")


class ValidationError(Exception):
    """Raised when validation detects unrecoverable issues."""


def _flatten_messages(tree: dict, prefix: str = "") -> tuple[dict[str, str], list[str]]:
    items: dict[str, str] = {}
    invalid: list[str] = []
    for key, value in tree.items():
        path = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict):
            nested, nested_invalid = _flatten_messages(value, path)
            items.update(nested)
            invalid.extend(nested_invalid)
        elif isinstance(value, str):
            items[path] = value
        else:
            invalid.append(path)
    return items, invalid


def _load_tables() -> tuple[dict[str, dict[str, str]], list[str]]:
    if not TRANSLATIONS_DIR.is_dir():
        raise ValidationError(f"Missing translations directory: {TRANSLATIONS_DIR}")

    tables: dict[str, dict[str, str]] = {}
    issues: list[str] = []
    for path in sorted(TRANSLATIONS_DIR.glob("*.json")):
        with path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
        if not isinstance(payload, dict):
            raise ValidationError(f"Unexpected payload format in {path}")

        messages, invalid = _flatten_messages(payload)
        for key in invalid:
            issues.append(f"Locale '{path.stem}' has a non-string value at {key}")
        tables[path.stem] = messages

    if BASE_LOCALE not in tables:
        raise ValidationError(f"Base locale table {BASE_LOCALE}.json not found")
    return tables, issues


def _missing_keys(tables: dict[str, dict[str, str]]) -> list[str]:
    expected = set(tables[BASE_LOCALE])
    issues: list[str] = []
    for locale, messages in sorted(tables.items()):
        missing = expected - set(messages)
        if missing:
            issues.append(
                f"Locale '{locale}' missing {len(missing)} keys: {', '.join(sorted(missing))}"
            )
    return issues


def _extra_keys(tables: dict[str, dict[str, str]]) -> list[str]:
    expected = set(tables[BASE_LOCALE])
    issues: list[str] = []
    for locale, messages in sorted(tables.items()):
        extra = set(messages) - expected
        if extra:
            issues.append(f"Locale '{locale}' defines unknown keys: {', '.join(sorted(extra))}")
    return issues


def _placeholder_inconsistencies(tables: dict[str, dict[str, str]]) -> list[str]:
    issues: list[str] = []
    for key, base_message in sorted(tables[BASE_LOCALE].items()):
        expected = set(PLACEHOLDER_PATTERN.findall(base_message))
        for locale, messages in sorted(tables.items()):
            if key not in messages:
                continue
            found = set(PLACEHOLDER_PATTERN.findall(messages[key]))
            if found != expected:
                issues.append(
                    f"{locale}:{key} placeholders {sorted(found)} differ from {sorted(expected)}"
                )
    return issues


def _language_coverage(tables: dict[str, dict[str, str]]) -> list[str]:
    if not LANGUAGES_PATH.exists():
        return [f"Bundled language list missing: {LANGUAGES_PATH}"]
    languages = json.loads(LANGUAGES_PATH.read_text(encoding="utf-8"))
    codes = {str(entry.get("code", "")).lower() for entry in languages if isinstance(entry, dict)}
    return [f"Language '{code}' has no bundled table" for code in sorted(codes - set(tables))]


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--fail-on-extra", action="store_true", help="Exit with an error if a locale defines unknown keys")
    args = parser.parse_args(argv)

    try:
        tables, issues = _load_tables()
    except ValidationError as error:
        print(f"[error] {error}")
        return 1

    issues.extend(_missing_keys(tables))
    issues.extend(_placeholder_inconsistencies(tables))
    issues.extend(_language_coverage(tables))
    extra = _extra_keys(tables)

    for issue in issues:
        print(f"[invalid] {issue}")
    for issue in extra:
        print(f"[extra] {issue}")

    if issues or (extra and args.fail_on_extra):
        return 1

    print(f"[ok] {len(tables)} locale(s), {len(tables[BASE_LOCALE])} keys")
    return 0


if __name__ == "__main__":
    sys.exit(main())
