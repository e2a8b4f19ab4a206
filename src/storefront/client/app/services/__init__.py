"""Service-layer helpers for fetching and caching catalog resources."""

from .cache import CacheEntry, CacheStore, CatalogClient, ResourceBinding, ResourceView
from .fallback import FallbackDataset
from .resources import RESOURCES, ResourceSpec, UnknownResourceError, coerce_payload
from .transport import RemoteSource, RemoteSourceError

__all__ = [
    "CacheEntry",
    "CacheStore",
    "CatalogClient",
    "FallbackDataset",
    "RESOURCES",
    "RemoteSource",
    "RemoteSourceError",
    "ResourceBinding",
    "ResourceSpec",
    "ResourceView",
    "UnknownResourceError",
    "coerce_payload",
]
