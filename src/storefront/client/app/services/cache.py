"""Session-wide read-through cache for catalog resources.

Every resource key owns exactly one :class:`CacheEntry` for the lifetime of a
:class:`CacheStore`. Consumers never talk to the entry directly; they hold a
:class:`ResourceBinding`, and all bindings for the same key share the entry's
in-flight task so that concurrent readers trigger a single request.

Once an entry holds data without an error it is *settled* and is never
fetched again unless a consumer explicitly calls :meth:`ResourceBinding.refetch`.
A failed request settles the entry with the bundled fallback dataset, so the
remote source is attempted at most once per resource per session.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from .fallback import FallbackDataset
from .resources import (
    RESOURCES,
    CatalogData,
    ResourceSpec,
    UnknownResourceError,
    coerce_payload,
    dump_data,
    find_by_slug,
)
from .transport import RemoteSource, RemoteSourceError

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    """Mutable cache slot for one resource key."""

    key: str
    data: CatalogData | None = None
    loading: bool = False
    error: Exception | None = None
    inflight: "asyncio.Task[CatalogData] | None" = field(default=None, repr=False)

    @property
    def settled(self) -> bool:
        return self.data is not None and self.error is None


class CacheStore:
    """Explicit registry of cache entries, one per resource key."""

    def __init__(self) -> None:
        self._entries: dict[str, CacheEntry] = {}

    def entry(self, key: str) -> CacheEntry:
        """Return the entry for ``key``, creating it lazily."""

        existing = self._entries.get(key)
        if existing is None:
            existing = self._entries[key] = CacheEntry(key=key)
        return existing

    def keys(self) -> list[str]:
        return sorted(self._entries)

    def invalidate(self, key: str) -> None:
        """Forget the value for ``key`` so the next access fetches again.

        An in-flight request keeps running; its result still lands in the
        entry it was started for.
        """

        entry = self._entries.get(key)
        if entry is not None and entry.inflight is None:
            del self._entries[key]

    def reset(self) -> None:
        """Drop every idle entry, typically between tests."""

        for key in [key for key, entry in self._entries.items() if entry.inflight is None]:
            del self._entries[key]


@dataclass(frozen=True)
class ResourceView:
    """Consumer-facing snapshot that never requires a null check."""

    key: str
    data: CatalogData
    loading: bool
    error: Exception | None
    refetch: Callable[[], Awaitable[CatalogData]] = field(repr=False, compare=False)

    def as_dict(self) -> dict[str, Any]:
        return {
            "resource": self.key,
            "data": dump_data(self.data),
            "loading": self.loading,
            "error": str(self.error) if self.error is not None else None,
        }


class ResourceBinding:
    """Per-consumer accessor coordinating with the shared :class:`CacheStore`."""

    def __init__(
        self,
        store: CacheStore,
        spec: ResourceSpec,
        source: RemoteSource,
        fallback: FallbackDataset,
    ) -> None:
        self._store = store
        self._spec = spec
        self._source = source
        self._fallback = fallback

    @property
    def key(self) -> str:
        return self._spec.key

    @property
    def entry(self) -> CacheEntry:
        return self._store.entry(self._spec.key)

    async def access(self) -> CatalogData:
        """Return the resolved value, joining or starting a request if needed."""

        entry = self.entry
        if entry.settled:
            return entry.data  # type: ignore[return-value]
        return await self._join(entry)

    async def refetch(self) -> CatalogData:
        """Repeat the fetch protocol even when the entry is already settled."""

        return await self._join(self.entry, force=True)

    def view(self) -> ResourceView:
        entry = self.entry
        data = entry.data if entry.data is not None else self._spec.empty()
        return ResourceView(
            key=self._spec.key,
            data=data,
            loading=entry.loading,
            error=entry.error,
            refetch=self.refetch,
        )

    async def _join(self, entry: CacheEntry, *, force: bool = False) -> CatalogData:
        if entry.inflight is None:
            if entry.settled and not force:
                return entry.data  # type: ignore[return-value]
            entry.loading = True
            entry.error = None
            entry.inflight = asyncio.get_running_loop().create_task(self._load(entry))
        # Shield so that a cancelled consumer does not cancel the shared request.
        return await asyncio.shield(entry.inflight)

    async def _load(self, entry: CacheEntry) -> CatalogData:
        try:
            try:
                payload = await self._source.get(self._spec.endpoint)
            except RemoteSourceError as exc:
                entry.error = exc
                logger.warning("Remote fetch for %s failed: %s", entry.key, exc)
                data = self._fallback.load(self._spec)
                logger.info("Serving bundled fallback for %s", entry.key)
            else:
                data = coerce_payload(self._spec, payload)

            entry.data = data
            entry.error = None
            return data
        finally:
            entry.loading = False
            entry.inflight = None


class CatalogClient:
    """Hands out bindings for every registered resource over one shared store."""

    def __init__(
        self,
        store: CacheStore,
        source: RemoteSource,
        fallback: FallbackDataset,
        *,
        resources: Mapping[str, ResourceSpec] = RESOURCES,
    ) -> None:
        self.store = store
        self._source = source
        self._fallback = fallback
        self._resources = resources

    @property
    def resource_keys(self) -> list[str]:
        return sorted(self._resources)

    def binding(self, key: str) -> ResourceBinding:
        try:
            spec = self._resources[key]
        except KeyError as exc:
            raise UnknownResourceError(key) from exc
        return ResourceBinding(self.store, spec, self._source, self._fallback)

    async def access(self, key: str) -> CatalogData:
        return await self.binding(key).access()

    async def prefetch(self, *keys: str) -> dict[str, CatalogData]:
        """Warm several resources concurrently."""

        selected: Iterable[str] = keys or self.resource_keys
        bindings = [self.binding(key) for key in selected]
        results = await asyncio.gather(*(binding.access() for binding in bindings))
        return {binding.key: result for binding, result in zip(bindings, results)}

    async def find_by_slug(self, key: str, slug: str) -> Any | None:
        """Resolve one course or product for a detail page."""

        data = await self.access(key)
        if not isinstance(data, list):
            return None
        return find_by_slug(data, slug)


__all__ = [
    "CacheEntry",
    "CacheStore",
    "CatalogClient",
    "ResourceBinding",
    "ResourceView",
]
