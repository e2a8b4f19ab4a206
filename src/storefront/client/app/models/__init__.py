"""Pydantic models describing the catalog resources published by the remote API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

__all__ = [
    "CatalogModel",
    "ContactInfo",
    "Partner",
    "Category",
    "Course",
    "Product",
    "HeroSlide",
    "DeliveryMode",
    "NewsItem",
    "Language",
]


class CatalogModel(BaseModel):
    """Base class that freezes instances and keeps columns the API adds later."""

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    def as_dict(self) -> dict[str, Any]:
        """Return the JSON-compatible payload, extra columns included."""

        return self.model_dump(mode="json")


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class ContactInfo(CatalogModel):
    """Contact details rendered in the footer and on the contact page."""

    email_primary: str | None = None
    phone_primary: str | None = None
    address_line1: str | None = None
    city: str | None = None
    country: str | None = None
    facebook_link: str | None = None


class Partner(CatalogModel):
    """Partner logo shown in the marquee."""

    id: int | str | None = None
    name: str = ""
    image_url: str | None = None
    link_url: str | None = None


class Category(CatalogModel):
    """Course or product category."""

    id: int | str | None = None
    slug: str = ""
    name: str = ""
    is_active: bool = True


class Course(CatalogModel):
    id: int | str | None = None
    slug: str = ""
    name: str = ""
    description: str | None = None
    category_slug: str | None = None
    level: str | None = None
    mode: str | None = None
    price: float | None = None
    final_price: float | None = None

    @field_validator("price", "final_price", mode="before")
    @classmethod
    def _coerce_blank_prices(cls, value: Any) -> Any:
        return _blank_to_none(value)


class Product(CatalogModel):
    id: int | str | None = None
    slug: str = ""
    name: str = ""
    title: str | None = None
    price: float | None = None
    image_url: str | None = None
    category_slug: str | None = None

    @field_validator("price", mode="before")
    @classmethod
    def _coerce_blank_price(cls, value: Any) -> Any:
        return _blank_to_none(value)


class HeroSlide(CatalogModel):
    id: int | str | None = None
    title: str = ""
    subtitle: str | None = None
    image_url: str | None = None
    order: int = 0


class DeliveryMode(CatalogModel):
    id: int | str | None = None
    title: str = ""
    description: str | None = None
    mode: str | None = None
    image_url: str | None = None
    link_url: str | None = None
    course_slug: str | None = None


class NewsItem(CatalogModel):
    id: int | str | None = None
    title: str = ""
    excerpt: str | None = None
    date: str | None = None
    image_url: str | None = None


class Language(CatalogModel):
    """Display language offered by the language picker."""

    code: str
    name: str = ""
    is_active: bool = True
    is_default: bool = False

    @field_validator("code", mode="before")
    @classmethod
    def _normalise_code(cls, value: Any) -> Any:
        if isinstance(value, str):
            normalised = value.strip().lower()
            if not normalised:
                raise ValueError("Language codes must not be blank")
            return normalised
        return value
