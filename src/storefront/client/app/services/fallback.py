"""Bundled catalog datasets served when the remote source is unavailable."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from functools import cache
from importlib import resources
from typing import Any

from storefront.client.app.models import Language

from .resources import LANGUAGES, CatalogData, ResourceSpec, coerce_payload

logger = logging.getLogger(__name__)

_FALLBACK_PACKAGE = "storefront.fallback"


@cache
def _read_fallback_payload(package: str, key: str) -> Any:
    """Load the raw bundled payload for ``key``; ``None`` when absent."""

    try:
        resource = resources.files(package).joinpath(f"{key}.json")
    except ModuleNotFoundError:  # pragma: no cover - defensive fallback
        return None

    if not resource.is_file():
        return None

    try:
        with resource.open("r", encoding="utf-8") as handle:
            return json.load(handle)
    except (OSError, ValueError) as error:
        logger.warning("Bundled dataset %s/%s.json is unreadable: %s", package, key, error)
        return None


class FallbackDataset:
    """Read-only view over the datasets shipped with the package.

    ``overrides`` replaces individual bundled payloads, which keeps tests and
    white-label deployments independent from the packaged JSON.
    """

    def __init__(
        self,
        *,
        package: str = _FALLBACK_PACKAGE,
        overrides: Mapping[str, Any] | None = None,
    ) -> None:
        self._package = package
        self._overrides = dict(overrides or {})
        self._resolved: dict[str, CatalogData] = {}

    def raw(self, key: str) -> Any:
        if key in self._overrides:
            return self._overrides[key]
        return _read_fallback_payload(self._package, key)

    def load(self, spec: ResourceSpec) -> CatalogData:
        """Return the bundled value for ``spec``, coerced like a remote payload."""

        if spec.key not in self._resolved:
            self._resolved[spec.key] = coerce_payload(spec, self.raw(spec.key))
        return self._resolved[spec.key]

    def languages(self) -> list[Language]:
        return list(self.load(LANGUAGES))  # type: ignore[arg-type]


__all__ = ["FallbackDataset"]
