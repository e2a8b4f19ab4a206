"""Tests for resource registration and payload coercion."""

from __future__ import annotations

import pytest

from storefront.client.app.models import ContactInfo, Course, Partner
from storefront.client.app.services.resources import (
    RESOURCES,
    UnknownResourceError,
    active_only,
    coerce_payload,
    dump_data,
    find_by_slug,
    get_resource,
)


@pytest.mark.parametrize("payload", [None, "oops", 42, {"unexpected": True}])
def test_sequence_resource_coerces_non_lists_to_empty(payload) -> None:
    assert coerce_payload(get_resource("partners"), payload) == []


def test_sequence_resource_unwraps_known_envelopes() -> None:
    spec = get_resource("partners")

    from_data = coerce_payload(spec, {"data": [{"id": 1, "name": "RUPP"}]})
    from_named = coerce_payload(spec, {"partners": [{"id": 2, "name": "ITC"}]})

    assert from_data == [Partner(id=1, name="RUPP")]
    assert from_named == [Partner(id=2, name="ITC")]


def test_invalid_items_are_dropped_without_failing() -> None:
    spec = get_resource("courses")
    payload = [
        {"id": 1, "slug": "python", "name": "Python", "price": "180"},
        "not-an-object",
        {"id": 2, "slug": "broken", "price": "free"},
    ]

    result = coerce_payload(spec, payload)

    assert len(result) == 1
    assert isinstance(result[0], Course)
    assert result[0].price == 180.0


def test_extra_columns_survive_round_trip_to_json() -> None:
    result = coerce_payload(get_resource("products"), [{"id": 7, "slug": "kit", "stock": 3}])

    assert dump_data(result)[0]["stock"] == 3


def test_object_resource_coerces_to_empty_model() -> None:
    spec = get_resource("contact")

    assert coerce_payload(spec, None) == ContactInfo()
    assert coerce_payload(spec, ["a", "b"]) == ContactInfo()


def test_object_resource_unwraps_data_envelope() -> None:
    spec = get_resource("contact")

    result = coerce_payload(spec, {"data": {"city": "Phnom Penh"}})

    assert isinstance(result, ContactInfo)
    assert result.city == "Phnom Penh"


def test_blank_prices_become_none() -> None:
    result = coerce_payload(get_resource("courses"), [{"slug": "a", "price": "", "final_price": " "}])

    assert result[0].price is None
    assert result[0].final_price is None


def test_unknown_resource_raises() -> None:
    with pytest.raises(UnknownResourceError):
        get_resource("weather")


def test_every_resource_has_an_empty_value() -> None:
    for spec in RESOURCES.values():
        empty = spec.empty()
        assert empty == [] or isinstance(empty, spec.model)


def test_helpers_filter_and_find() -> None:
    categories = coerce_payload(
        get_resource("categories_courses"),
        [
            {"slug": "it", "name": "IT"},
            {"slug": "design", "name": "Design", "is_active": False},
        ],
    )

    assert [category.slug for category in active_only(categories)] == ["it"]
    assert find_by_slug(categories, "DESIGN").name == "Design"
    assert find_by_slug(categories, "missing") is None
