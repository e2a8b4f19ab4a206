"""Command-line validation for client settings files."""

from __future__ import annotations

import argparse
from typing import Sequence

from storefront.client.app.localization import available_locales

from .schema import ClientSettings, ConfigurationError
from .settings import load_settings


def validate_settings(settings: ClientSettings) -> list[str]:
    """Return human-readable issues that schema validation cannot detect."""

    issues: list[str] = []
    bundled = set(available_locales())
    for code in settings.supported_languages:
        if code not in bundled:
            issues.append(f"supported_languages: no bundled translation table for {code!r}")
    for name in ("translations_endpoint", "languages_endpoint"):
        endpoint = getattr(settings, name)
        if not endpoint.startswith(("/", "http://", "https://")):
            issues.append(f"{name}: expected an absolute path or URL, got {endpoint!r}")
    return issues


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Validate storefront client settings files.")
    parser.add_argument("paths", nargs="+", help="YAML settings files to validate")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for running validations from the command line."""

    parser = _build_argument_parser()
    args = parser.parse_args(argv)

    exit_code = 0

    for path in args.paths:
        try:
            settings = load_settings(path, environ={})
        except (FileNotFoundError, ConfigurationError) as error:
            print(f"[{path}] failed to load settings: {error}")
            exit_code = 1
            continue

        issues = validate_settings(settings)
        if issues:
            exit_code = 1
            print(f"[{path}] {len(issues)} issue(s) detected:")
            for issue in issues:
                print(f"  - {issue}")
        else:
            print(f"[{path}] OK")

    return exit_code


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
