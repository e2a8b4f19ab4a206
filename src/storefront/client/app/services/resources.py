"""Registry of catalog resources and the coercion applied at the network boundary."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from pydantic import ValidationError

from storefront.client.app.models import (
    CatalogModel,
    Category,
    ContactInfo,
    Course,
    DeliveryMode,
    HeroSlide,
    Language,
    NewsItem,
    Partner,
    Product,
)

logger = logging.getLogger(__name__)

CatalogData = Union[list[CatalogModel], CatalogModel]


class UnknownResourceError(KeyError):
    """Raised when a caller asks for a resource key that is not registered."""


class ResourceShape(str, Enum):
    SEQUENCE = "sequence"
    OBJECT = "object"


@dataclass(frozen=True)
class ResourceSpec:
    """Describes how one catalog dataset is fetched and validated."""

    key: str
    endpoint: str
    shape: ResourceShape
    model: type[CatalogModel]
    envelope: str | None = None

    def empty(self) -> CatalogData:
        """Return the empty container consumers receive before data arrives."""

        if self.shape is ResourceShape.SEQUENCE:
            return []
        return self.model()


def _spec(
    key: str,
    endpoint: str,
    model: type[CatalogModel],
    *,
    shape: ResourceShape = ResourceShape.SEQUENCE,
    envelope: str | None = None,
) -> ResourceSpec:
    return ResourceSpec(key=key, endpoint=endpoint, shape=shape, model=model, envelope=envelope)


RESOURCES: Mapping[str, ResourceSpec] = {
    spec.key: spec
    for spec in (
        _spec("contact", "/contact", ContactInfo, shape=ResourceShape.OBJECT),
        _spec("partners", "/partners", Partner, envelope="partners"),
        _spec("categories_products", "/categories/products", Category, envelope="categories"),
        _spec("categories_courses", "/categories/courses", Category, envelope="categories"),
        _spec("courses", "/courses", Course, envelope="courses"),
        _spec("products", "/products", Product, envelope="products"),
        _spec("hero_slides", "/hero-slides", HeroSlide, envelope="slides"),
        _spec("delivery_modes", "/delivery-modes", DeliveryMode, envelope="modes"),
        _spec("news", "/news", NewsItem, envelope="news"),
        _spec("languages", "/languages", Language, envelope="languages"),
    )
}

LANGUAGES = RESOURCES["languages"]


def get_resource(key: str) -> ResourceSpec:
    """Return the registered resource for ``key``."""

    try:
        return RESOURCES[key]
    except KeyError as exc:
        raise UnknownResourceError(key) from exc


def _unwrap_sequence(payload: Any, envelope: str | None) -> Sequence[Any]:
    if isinstance(payload, list):
        return payload
    if isinstance(payload, Mapping):
        for name in ("data", envelope):
            if name and isinstance(payload.get(name), list):
                return payload[name]
    return []


def _unwrap_object(payload: Any) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        return {}
    inner = payload.get("data")
    if len(payload) == 1 and isinstance(inner, Mapping):
        return inner
    return payload


def _validate_items(spec: ResourceSpec, items: Iterable[Any]) -> list[CatalogModel]:
    validated: list[CatalogModel] = []
    for index, item in enumerate(items):
        if not isinstance(item, Mapping):
            logger.warning("Dropping non-object entry %d from %s", index, spec.key)
            continue
        try:
            validated.append(spec.model.model_validate(item))
        except ValidationError as error:
            logger.warning(
                "Dropping invalid entry %d from %s: %s",
                index,
                spec.key,
                error.errors()[0]["msg"],
            )
    return validated


def coerce_payload(spec: ResourceSpec, payload: Any) -> CatalogData:
    """Convert a decoded response into the resource's tagged result type.

    Shape mismatches never fail: a sequence resource receiving ``null`` or an
    object without a recognised envelope resolves to ``[]`` and an object
    resource receiving anything but a mapping resolves to an empty model.
    """

    if spec.shape is ResourceShape.SEQUENCE:
        return _validate_items(spec, _unwrap_sequence(payload, spec.envelope))

    try:
        return spec.model.model_validate(_unwrap_object(payload))
    except ValidationError as error:
        logger.warning("Discarding invalid %s payload: %s", spec.key, error.errors()[0]["msg"])
        return spec.model()


def dump_data(data: CatalogData) -> Any:
    """Return the JSON-compatible form of a resolved resource."""

    if isinstance(data, list):
        return [item.as_dict() for item in data]
    return data.as_dict()


def active_only(items: Iterable[Any]) -> list[Any]:
    """Filter out entries flagged ``is_active: false``."""

    return [item for item in items if getattr(item, "is_active", True)]


def find_by_slug(items: Iterable[Any], slug: str) -> Any | None:
    """Return the first entry whose ``slug`` matches, as detail pages expect."""

    target = slug.strip().lower()
    for item in items:
        if str(getattr(item, "slug", "")).lower() == target:
            return item
    return None


__all__ = [
    "CatalogData",
    "LANGUAGES",
    "RESOURCES",
    "ResourceShape",
    "ResourceSpec",
    "UnknownResourceError",
    "active_only",
    "coerce_payload",
    "dump_data",
    "find_by_slug",
    "get_resource",
]
