from __future__ import annotations

from datetime import timedelta

import pytest

from listingreview.config import ReviewConfig
from listingreview.domain.combine import CombinedInfoBuilder, has_type_mismatch
from listingreview.domain.model import CategoryFlags, ListingKind, Source
from tests.support.reviews import NOW, fixed_clock, make_listing, make_place

TRUSTED = 0.8
REGULAR = 0.3


@pytest.fixture
def builder() -> CombinedInfoBuilder:
    return CombinedInfoBuilder(ReviewConfig(), clock=fixed_clock)


def test_trusted_recent_submitter_wins(builder: CombinedInfoBuilder) -> None:
    record = builder.build(make_listing(), TRUSTED, make_place())

    assert record.name == "Green Leaf Cafe"
    assert record.source_of("name") is Source.USER
    assert record.phone == "+1 555 0100"
    assert record.source_of("phone") is Source.USER
    assert (record.lat, record.lng) == (52.52, 13.405)
    assert record.source_of("latlng") is Source.USER


def test_untrusted_submitter_loses_to_third_party(builder: CombinedInfoBuilder) -> None:
    record = builder.build(make_listing(), REGULAR, make_place())

    assert record.name == "Green Leaf Café"
    assert record.source_of("name") is Source.THIRDPARTY
    assert record.address == "12 Market St"
    assert record.website == "https://greenleaf.example/menu"
    assert (record.lat, record.lng) == (52.5201, 13.4049)
    assert record.source_of("latlng") is Source.THIRDPARTY


def test_stale_trusted_submitter_loses_to_third_party(builder: CombinedInfoBuilder) -> None:
    record = builder.build(make_listing(updated_days_ago=200), 0.95, make_place())

    assert record.source_of("name") is Source.THIRDPARTY


def test_recency_falls_back_to_creation_time(builder: CombinedInfoBuilder) -> None:
    listing = make_listing(updated_days_ago=None, created_at=NOW - timedelta(days=5))

    assert builder.prefers_user(listing, TRUSTED)
    assert not builder.prefers_user(make_listing(updated_days_ago=None), TRUSTED)


def test_missing_value_falls_back_to_other_source(builder: CombinedInfoBuilder) -> None:
    listing = make_listing(phone="   ", website=None)

    record = builder.build(listing, TRUSTED, make_place())

    assert record.phone == "+1 555 0199"
    assert record.source_of("phone") is Source.THIRDPARTY
    assert record.source_of("website") is Source.THIRDPARTY


def test_neither_source_present_gives_empty_value_and_provenance(
    builder: CombinedInfoBuilder,
) -> None:
    record = builder.build(make_listing(phone=None), REGULAR, make_place(phone=""))

    assert record.phone == ""
    assert record.sources["phone"] is Source.NONE


def test_without_third_party_data_submitter_values_are_kept(
    builder: CombinedInfoBuilder,
) -> None:
    record = builder.build(make_listing(), REGULAR, None)

    assert record.name == "Green Leaf Cafe"
    assert record.source_of("name") is Source.USER
    assert record.categories == []
    assert record.sources["categories"] is Source.NONE
    assert record.hours == []
    assert record.sources["hours"] is Source.NONE


@pytest.mark.parametrize(
    ("lat", "lng"),
    [(0.0, 0.0), (52.52, None), (None, 13.4)],
)
def test_incomplete_or_zero_coordinates_count_as_absent(
    builder: CombinedInfoBuilder, lat: float | None, lng: float | None
) -> None:
    record = builder.build(make_listing(lat=lat, lng=lng), TRUSTED, make_place())

    assert (record.lat, record.lng) == (52.5201, 13.4049)
    assert record.source_of("latlng") is Source.THIRDPARTY


def test_coordinates_are_never_mixed(builder: CombinedInfoBuilder) -> None:
    record = builder.build(make_listing(lng=None), TRUSTED, make_place(lat=None))

    assert record.lat is None
    assert record.lng is None
    assert record.sources["latlng"] is Source.NONE


def test_stored_hours_document_decodes_to_lines(builder: CombinedInfoBuilder) -> None:
    listing = make_listing(hours_text='{"openhours":["Mon-08:00-20:00"],"note":""}')

    trusted = builder.build(listing, TRUSTED, make_place())
    regular = builder.build(listing, REGULAR, make_place())

    assert trusted.hours == ["Mon-08:00-20:00"]
    assert trusted.source_of("hours") is Source.USER
    assert regular.hours == ["Monday: 11:00 AM – 9:00 PM", "Tuesday: Closed"]
    assert regular.source_of("hours") is Source.THIRDPARTY


def test_submitter_only_and_third_party_only_fields(builder: CombinedInfoBuilder) -> None:
    record = builder.build(make_listing(), TRUSTED, make_place())

    assert record.categories == ["restaurant", "food", "point_of_interest"]
    assert record.source_of("categories") is Source.THIRDPARTY
    assert record.description == "Plant-based brunch spot"
    assert record.source_of("description") is Source.USER
    assert record.category_path == "europe|germany|berlin"
    assert record.source_of("path") is Source.USER
    assert record.flags == CategoryFlags(entry_type=1, vegan=1, veg_only=1)


def test_every_filled_field_has_provenance(builder: CombinedInfoBuilder) -> None:
    record = builder.build(make_listing(), REGULAR, make_place())

    filled = {
        "name": record.name,
        "address": record.address,
        "phone": record.phone,
        "website": record.website,
        "hours": record.hours,
        "latlng": record.lat,
        "categories": record.categories,
        "description": record.description,
        "path": record.category_path,
    }
    for key, value in filled.items():
        assert bool(value) == (record.sources[key] is not Source.NONE), key


def test_classification_labels(builder: CombinedInfoBuilder) -> None:
    restaurant = builder.build(make_listing(), REGULAR, make_place())
    store = builder.build(
        make_listing(flags=CategoryFlags(entry_type=2, category=3)),
        REGULAR,
        make_place(categories=["bakery", "store"]),
    )

    assert restaurant.listing_kind is ListingKind.RESTAURANT
    assert restaurant.vegan_status == "Vegan"
    assert restaurant.category_label == ""
    assert not restaurant.type_mismatch
    assert store.listing_kind is ListingKind.STORE
    assert store.vegan_status == "Store"
    assert store.category_label == "Bakery"
    assert not store.type_mismatch


def test_type_mismatch_flags_unrelated_place_categories(builder: CombinedInfoBuilder) -> None:
    record = builder.build(make_listing(), REGULAR, make_place(categories=["lodging", "spa"]))

    assert record.type_mismatch


@pytest.mark.parametrize(
    ("kind", "label", "place_types", "expected"),
    [
        (ListingKind.RESTAURANT, "", [], False),
        (ListingKind.RESTAURANT, "", ["meal_takeaway"], False),
        (ListingKind.STORE, "B&B", ["lodging"], False),
        (ListingKind.STORE, "Juice Bar", ["gym"], True),
        (ListingKind.STORE, "", ["Grocery_Or_Supermarket"], False),
    ],
)
def test_has_type_mismatch(
    kind: ListingKind, label: str, place_types: list[str], expected: bool
) -> None:
    assert has_type_mismatch(kind, label, place_types) is expected
