"""Field-level diff between a stored listing and its approval payload."""

from __future__ import annotations

from typing import TYPE_CHECKING

from listingreview.domain.model import Replacements

if TYPE_CHECKING:
    from listingreview.domain.model import ApprovalPayload, ListingRecord


def _normalized(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


def _text_differs(stored: str | None, candidate: str | None) -> bool:
    return _normalized(stored) != _normalized(candidate)


def build_replacements(listing: ListingRecord, payload: ApprovalPayload) -> Replacements:
    """Record ``{old, new}`` for every payload override that changes the listing.

    Text compares after trimming with blank treated as absent; coordinates
    compare exactly. Fields the payload leaves as ``None`` are never recorded.
    """

    replacements = Replacements()
    stored_text = {
        "name": listing.name,
        "address": listing.address,
        "phone": listing.phone,
        "website": listing.website,
        "description": listing.description,
        "path": listing.category_path,
        "open_hours": listing.hours_text,
        "open_hours_note": listing.hours_note,
    }
    stored_coordinates = {"lat": listing.lat, "lng": listing.lng}

    for key, new in payload.overrides().items():
        if key in stored_coordinates:
            old_coordinate = stored_coordinates[key]
            if old_coordinate is None or old_coordinate != new:
                replacements.record(key, old_coordinate, new)
            continue
        old_text = stored_text[key]
        if _text_differs(old_text, str(new)):
            replacements.record(key, old_text, new)

    return replacements


__all__ = ["build_replacements"]
