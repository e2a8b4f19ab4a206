"""Composition root wiring transport, caches and localization for one session."""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Coroutine
from typing import Any, TypeVar

from storefront.client.config.schema import ClientSettings

from .localization import LocalizationManager, PreferenceStore, build_preference_store
from .services import CacheStore, CatalogClient, FallbackDataset, RemoteSource

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CatalogSession:
    """Owns the process-wide cache store and localization manager."""

    def __init__(
        self,
        settings: ClientSettings,
        *,
        source: RemoteSource | None = None,
        store: CacheStore | None = None,
        fallback: FallbackDataset | None = None,
        preferences: PreferenceStore | None = None,
    ) -> None:
        self.settings = settings
        self.source = source or RemoteSource(settings)
        self.store = store or CacheStore()
        self.fallback = fallback or FallbackDataset()
        self.catalog = CatalogClient(self.store, self.source, self.fallback)
        self.localization = LocalizationManager(
            self.source,
            fallback=self.fallback,
            preferences=preferences or build_preference_store(settings),
            default_language=settings.default_language,
            supported_languages=settings.supported_languages,
            translations_endpoint=settings.translations_endpoint,
            languages_endpoint=settings.languages_endpoint,
        )

    async def start(self, *prefetch: str) -> None:
        """Resolve the language state and optionally warm catalog resources."""

        await self.localization.start()
        if prefetch:
            await self.catalog.prefetch(*prefetch)
        logger.info(
            "Session started with language %s (%d languages available)",
            self.localization.current_language,
            len(self.localization.languages),
        )

    async def aclose(self) -> None:
        await self.source.aclose()


class SessionRunner:
    """Drive a :class:`CatalogSession` from synchronous callers.

    The session lives on a private event loop thread; callers submit
    coroutines and block on the result, so every cache mutation happens on a
    single loop regardless of how many request threads the web server uses.
    """

    def __init__(self, session: CatalogSession, *, timeout: float | None = None) -> None:
        self.session = session
        self._timeout = timeout
        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(
            target=self._loop.run_forever,
            name="storefront-session",
            daemon=True,
        )
        self._thread.start()

    @property
    def running(self) -> bool:
        return self._thread.is_alive() and not self._loop.is_closed()

    def run(self, coroutine: Coroutine[Any, Any, T]) -> T:
        future = asyncio.run_coroutine_threadsafe(coroutine, self._loop)
        return future.result(self._timeout)

    def close(self) -> None:
        if not self.running:
            return
        self.run(self.session.aclose())
        self._loop.call_soon_threadsafe(self._loop.stop)
        self._thread.join()
        self._loop.close()


__all__ = ["CatalogSession", "SessionRunner"]
