"""Per-field merge of submitter and third-party listing data.

Responsibilities of this stage:
- pick each mergeable value from the submitter or the third-party place data
- tag every picked value with its provenance (``user``/``thirdparty``/``""``)
- derive display labels and a coarse type-mismatch hint

Out of scope for this stage:
- editor drafts and AI suggestions (applied by the approval assembler)
- persistence
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Final

from listingreview.config import ReviewConfig
from listingreview.domain.clock import as_utc, utcnow
from listingreview.domain.hours import parse_stored_hours
from listingreview.domain.model import CategoryFlags, CombinedRecord, ListingKind, Source

if TYPE_CHECKING:
    from collections.abc import Sequence

    from listingreview.domain.clock import Clock
    from listingreview.domain.model import ListingRecord, ThirdPartyPlaceData

log = getLogger(__name__)

STORE_ENTRY_TYPE: Final[int] = 2

CATEGORY_LABELS: Final[dict[int, str]] = {
    1: "Health Store",
    2: "Veg Store",
    3: "Bakery",
    4: "B&B",
    5: "Delivery",
    6: "Catering",
    7: "Organization",
    8: "Farmer's Market",
    10: "Food Truck",
    11: "Market Vendor",
    12: "Ice Cream",
    13: "Juice Bar",
    14: "Professional",
    15: "Coffee & Tea",
    16: "Spa",
    99: "Other",
}

# third-party category fragments that are consistent with a classification
EXPECTED_PLACE_TYPES: Final[dict[str, tuple[str, ...]]] = {
    "Restaurant": ("restaurant", "food", "meal_takeaway", "cafe"),
    "Store": (
        "establishment",
        "store",
        "supermarket",
        "food",
        "cafe",
        "grocery_or_supermarket",
    ),
    "Bakery": ("bakery", "food", "cafe", "establishment", "store"),
    "Juice Bar": ("restaurant", "food"),
    "Coffee & Tea": ("cafe", "food", "bakery", "store", "restaurant"),
    "Food Truck": ("restaurant", "food", "meal_takeaway"),
}

type Coordinates = tuple[float, float]


def listing_kind(flags: CategoryFlags) -> ListingKind:
    return ListingKind.STORE if flags.entry_type == STORE_ENTRY_TYPE else ListingKind.RESTAURANT


def vegan_status(flags: CategoryFlags) -> str:
    if flags.entry_type == STORE_ENTRY_TYPE:
        return "Store"
    if flags.veg_only == 1 and flags.vegan == 1:
        return "Vegan"
    if flags.veg_only == 1:
        return "Vegetarian"
    return "Vegan Options"


def category_label(flags: CategoryFlags) -> str:
    if flags.entry_type != STORE_ENTRY_TYPE or flags.category == 0:
        return ""
    return CATEGORY_LABELS.get(flags.category, "")


def has_type_mismatch(kind: ListingKind, label: str, place_types: Sequence[str]) -> bool:
    """Return ``True`` when no third-party category fits the classification.

    Unknown classifications and missing third-party categories never count as
    a mismatch.
    """

    if not place_types:
        return False
    expected = EXPECTED_PLACE_TYPES.get(label or kind.value)
    if expected is None:
        return False
    for place_type in place_types:
        lowered = place_type.lower()
        if any(fragment in lowered for fragment in expected):
            return False
    return True


def _text(value: str | None) -> str:
    return value.strip() if value else ""


def _coordinates(lat: float | None, lng: float | None) -> Coordinates | None:
    if lat is None or lng is None:
        return None
    if lat == 0 and lng == 0:
        return None
    return lat, lng


def _pick[T](
    prefer_user: bool,
    user_value: T | None,
    place_value: T | None,
) -> tuple[T | None, Source]:
    ordered = (
        ((user_value, Source.USER), (place_value, Source.THIRDPARTY))
        if prefer_user
        else ((place_value, Source.THIRDPARTY), (user_value, Source.USER))
    )
    for value, source in ordered:
        if value:
            return value, source
    return None, Source.NONE


class CombinedInfoBuilder:
    """Build the reviewable ``CombinedRecord`` for one listing."""

    def __init__(self, config: ReviewConfig | None = None, clock: Clock = utcnow) -> None:
        self.config = config or ReviewConfig()
        self.clock = clock

    def prefers_user(self, listing: ListingRecord, trust: float) -> bool:
        """Submitter data wins only for trusted submitters with recent updates."""

        if trust < self.config.trusted_threshold:
            return False
        age = as_utc(self.clock()) - as_utc(listing.last_touched_at)
        return age <= self.config.recency_window

    def build(
        self,
        listing: ListingRecord,
        trust: float,
        place: ThirdPartyPlaceData | None,
    ) -> CombinedRecord:
        prefer_user = self.prefers_user(listing, trust)
        record = CombinedRecord(flags=listing.flags)

        def merge_text(key: str, user_value: str | None, place_value: str | None) -> str:
            value, source = _pick(prefer_user, _text(user_value), _text(place_value))
            record.sources[key] = source
            return value or ""

        record.name = merge_text("name", listing.name, place.name if place else None)
        record.address = merge_text("address", listing.address, place.address if place else None)
        record.phone = merge_text("phone", listing.phone, place.phone if place else None)
        record.website = merge_text("website", listing.website, place.website if place else None)

        place_hours = [line for line in place.weekday_hours if line.strip()] if place else []
        hours, record.sources["hours"] = _pick(
            prefer_user, parse_stored_hours(listing.hours_text), place_hours
        )
        record.hours = list(hours or [])

        coords, record.sources["latlng"] = _pick(
            prefer_user,
            _coordinates(listing.lat, listing.lng),
            _coordinates(place.lat, place.lng) if place else None,
        )
        if coords is not None:
            record.lat, record.lng = coords

        if place is not None and place.categories:
            record.categories = list(place.categories)
            record.sources["categories"] = Source.THIRDPARTY
        else:
            record.sources["categories"] = Source.NONE

        record.description = _text(listing.description)
        record.sources["description"] = Source.USER if record.description else Source.NONE
        record.category_path = _text(listing.category_path)
        record.sources["path"] = Source.USER if record.category_path else Source.NONE

        record.listing_kind = listing_kind(listing.flags)
        record.vegan_status = vegan_status(listing.flags)
        record.category_label = category_label(listing.flags)
        record.type_mismatch = has_type_mismatch(
            record.listing_kind, record.category_label, record.categories
        )

        log.debug(
            "Combined listing %s (prefer_user=%s, sources=%s)",
            listing.id,
            prefer_user,
            {key: str(source) for key, source in record.sources.items()},
        )
        return record


__all__ = [
    "CATEGORY_LABELS",
    "CombinedInfoBuilder",
    "category_label",
    "has_type_mismatch",
    "listing_kind",
    "vegan_status",
]
