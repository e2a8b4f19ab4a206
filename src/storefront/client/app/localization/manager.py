"""Active display language, its translation table and change notifications.

The manager moves between two states. ``Idle(lang)`` means the table for
``lang`` is in effect. ``Loading(lang)`` means a fetch for ``lang`` is
outstanding while the previous table stays in effect. Every table fetch is
tagged with the generation counter at the time it was issued; a result is only
applied when no later :meth:`LocalizationManager.set_language` call happened in
the meantime, so a slow response for an old selection never replaces the table
of a newer one.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping, Sequence
from contextlib import suppress
from dataclasses import dataclass
from typing import Any

from storefront.client.app.models import Language
from storefront.client.app.services.fallback import FallbackDataset
from storefront.client.app.services.resources import LANGUAGES, active_only, coerce_payload
from storefront.client.app.services.transport import RemoteSource, RemoteSourceError

from .catalog import is_translation_table, load_fallback_translations, lookup
from .preferences import InMemoryPreferenceStore, PreferenceStore

logger = logging.getLogger(__name__)

LanguageListener = Callable[[str], None]

_LANGUAGE_NAMES: Mapping[str, str] = {
    "en": "English",
    "km": "ខ្មែរ",
    "zh": "中文",
}

DEFAULT_LANGUAGES: tuple[Language, ...] = tuple(
    Language(code=code, name=name, is_default=code == "en")
    for code, name in _LANGUAGE_NAMES.items()
)


class UnsupportedLanguageError(ValueError):
    """Raised when a caller selects a language outside the supported list."""


@dataclass(frozen=True)
class LocalizationState:
    """Read-only snapshot of the manager for rendering and serialisation."""

    current_language: str
    translations: Mapping[str, Any]
    languages: tuple[Language, ...]
    loading: bool

    def as_dict(self) -> dict[str, Any]:
        return {
            "currentLanguage": self.current_language,
            "languages": [language.as_dict() for language in self.languages],
            "translations": dict(self.translations),
            "loading": self.loading,
        }


class LocalizationManager:
    """Own the language selection and keep its translation table current."""

    def __init__(
        self,
        source: RemoteSource,
        *,
        fallback: FallbackDataset | None = None,
        preferences: PreferenceStore | None = None,
        default_language: str = "en",
        supported_languages: Sequence[str] = ("en", "km", "zh"),
        translations_endpoint: str = "/translations",
        languages_endpoint: str = "/languages",
    ) -> None:
        self._source = source
        self._fallback = fallback or FallbackDataset()
        self._preferences = preferences or InMemoryPreferenceStore()
        self._default_language = default_language
        self._translations_endpoint = translations_endpoint
        self._languages_endpoint = languages_endpoint
        self._languages: tuple[Language, ...] = tuple(
            Language(code=code, name=_LANGUAGE_NAMES.get(code, code.upper()))
            for code in supported_languages
        )
        self._listeners: list[LanguageListener] = []
        self._generation = 0
        self._pending: asyncio.Task[None] | None = None

        stored = self._preferences.load()
        self._preference_restored = stored is not None and stored in self.supported_codes
        self._current = stored if self._preference_restored else default_language
        self._translations: dict[str, Any] = load_fallback_translations(self._current)

    @property
    def current_language(self) -> str:
        return self._current

    @property
    def translations(self) -> Mapping[str, Any]:
        return self._translations

    @property
    def languages(self) -> tuple[Language, ...]:
        return self._languages

    @property
    def supported_codes(self) -> tuple[str, ...]:
        return tuple(language.code for language in self._languages)

    @property
    def loading(self) -> bool:
        return self._pending is not None and not self._pending.done()

    def state(self) -> LocalizationState:
        return LocalizationState(
            current_language=self._current,
            translations=self._translations,
            languages=self._languages,
            loading=self.loading,
        )

    def t(self, key: str, default: str | None = None) -> str:
        """Translate ``key`` with a dotted-path lookup; never raises."""

        fallback_value = str(key) if default is None else default
        if not isinstance(key, str) or not key:
            return fallback_value
        return lookup(self._translations, key, fallback_value)

    def subscribe(self, listener: LanguageListener) -> Callable[[], None]:
        """Register ``listener`` for language changes and return an unsubscriber."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            with suppress(ValueError):
                self._listeners.remove(listener)

        return unsubscribe

    async def start(self) -> None:
        """Load the supported languages once, then the table for the current language."""

        await self.load_languages()
        self._schedule_table_fetch(self._current, self._generation)
        await self.wait_until_idle()

    async def load_languages(self) -> tuple[Language, ...]:
        """Fetch the supported-language list; bundled or default list on failure."""

        try:
            payload = await self._source.get(self._languages_endpoint)
        except RemoteSourceError as exc:
            logger.warning("Language list unavailable, using bundled list: %s", exc)
            languages = self._fallback.languages()
        else:
            languages = list(coerce_payload(LANGUAGES, payload))  # type: ignore[arg-type]
            if not languages:
                logger.warning("Language list response was empty, using bundled list")
                languages = self._fallback.languages()

        languages = active_only(languages) or list(DEFAULT_LANGUAGES)
        self._languages = tuple(languages)

        flagged = next((language.code for language in languages if language.is_default), None)
        selected = self._current
        if selected not in self.supported_codes:
            if self._default_language in self.supported_codes:
                selected = self._default_language
            else:
                selected = flagged or self._languages[0].code
            logger.info("Language %s is no longer offered; using %s", self._current, selected)
        if not self._preference_restored and flagged is not None:
            selected = flagged

        if selected != self._current:
            self._current = selected
            self._generation += 1
            self._translations = load_fallback_translations(selected)
        return self._languages

    def set_language(self, code: str) -> "asyncio.Task[None] | None":
        """Select ``code``, persist it, notify listeners and fetch its table.

        Returns the fetch task, or ``None`` when ``code`` is already active.
        Must be called from a running event loop.
        """

        normalized = code.strip().lower()
        if normalized == self._current:
            return None
        if normalized not in self.supported_codes:
            raise UnsupportedLanguageError(f"Unsupported language: {code!r}")

        self._preferences.save(normalized)
        self._preference_restored = True
        self._current = normalized
        self._generation += 1
        self._notify(normalized)
        return self._schedule_table_fetch(normalized, self._generation)

    async def wait_until_idle(self) -> None:
        """Wait until no table fetch is outstanding for the latest selection."""

        while self._pending is not None and not self._pending.done():
            await asyncio.shield(self._pending)

    def _notify(self, code: str) -> None:
        for listener in list(self._listeners):
            try:
                listener(code)
            except Exception:
                logger.exception("Language listener %r failed", listener)

    def _schedule_table_fetch(self, code: str, generation: int) -> "asyncio.Task[None]":
        task = asyncio.get_running_loop().create_task(self._load_table(code, generation))
        self._pending = task
        return task

    async def _load_table(self, code: str, generation: int) -> None:
        try:
            table = await self._fetch_table(code)
        except Exception:
            logger.exception("Loading translations for %s failed, using bundled table", code)
            table = load_fallback_translations(code)
        if generation != self._generation:
            logger.debug("Discarding translations for %s; superseded by %s", code, self._current)
            return
        self._translations = table

    async def _fetch_table(self, code: str) -> dict[str, Any]:
        try:
            payload = await self._source.get(self._translations_endpoint, params={"lang": code})
        except RemoteSourceError as exc:
            logger.warning("Translations for %s unavailable, using bundled table: %s", code, exc)
            return load_fallback_translations(code)

        if not is_translation_table(payload):
            logger.warning("Malformed translations for %s, using bundled table", code)
            return load_fallback_translations(code)
        return dict(payload)


__all__ = [
    "DEFAULT_LANGUAGES",
    "LanguageListener",
    "LocalizationManager",
    "LocalizationState",
    "UnsupportedLanguageError",
]
