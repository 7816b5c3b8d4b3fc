"""Resolve the final field values written when a listing is approved.

Precedence per field, highest first:

1. editor draft value (only for keys the editor touched)
2. AI suggestion (name, description, closed days as the hours note)
3. combined submitter/third-party value
4. the stored value, in which case the field is left out of the payload

Opening hours are always transcoded from day lines; raw hours text is never
written as-is.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from logging import getLogger
from typing import TYPE_CHECKING

from listingreview.domain.combine import CombinedInfoBuilder
from listingreview.domain.hours import transcode_opening_hours
from listingreview.domain.model import (
    AISuggestions,
    ApprovalFields,
    ApprovalPayload,
    CombinedRecord,
    Source,
)
from listingreview.domain.suggestions import suggestions_from_history

from .replacements import build_replacements

if TYPE_CHECKING:
    from listingreview.domain.model import (
        Draft,
        ListingRecord,
        SubmitterRecord,
        ThirdPartyPlaceData,
        ValidationHistoryEntry,
    )

log = getLogger(__name__)

_DRAFT_TEXT_FIELDS = ("name", "address", "phone", "description")


@dataclass(slots=True, kw_only=True)
class MergeInput:
    """Every source that contributes to a listing's final state."""

    listing: ListingRecord
    submitter: SubmitterRecord
    trust: float
    place: ThirdPartyPlaceData | None = None
    latest_history: ValidationHistoryEntry | None = None
    draft: Draft | None = None


@dataclass(slots=True, kw_only=True)
class MergeResult:
    """Display view (``combined``) plus the resolved write values (``fields``)."""

    combined: CombinedRecord
    fields: ApprovalFields
    suggestions: AISuggestions
    draft_applied: bool


def _as_float(value: object) -> float | None:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    return float(value)


def apply_draft(combined: CombinedRecord, draft: Draft | None) -> CombinedRecord:
    """Return a copy of ``combined`` with editor draft values laid over it.

    Values of the wrong shape are ignored. Coordinates are only taken when the
    draft carries both ``lat`` and ``lng`` as numbers.
    """

    overlaid = replace(combined, sources=dict(combined.sources), hours=list(combined.hours))
    if draft is None or not draft.fields:
        return overlaid

    for key in _DRAFT_TEXT_FIELDS:
        draft_field = draft.fields.get(key)
        if draft_field is None:
            continue
        if not isinstance(draft_field.value, str):
            log.debug("Ignoring non-text draft value for %s on listing %s", key, draft.listing_id)
            continue
        setattr(overlaid, key, draft_field.value.strip())
        overlaid.sources[key] = Source.EDITOR

    path = draft.fields.get("path")
    if path is not None and isinstance(path.value, str):
        overlaid.category_path = path.value.strip()
        overlaid.sources["path"] = Source.EDITOR

    lat = draft.fields.get("lat")
    lng = draft.fields.get("lng")
    lat_value = _as_float(lat.value) if lat is not None else None
    lng_value = _as_float(lng.value) if lng is not None else None
    if lat_value is not None and lng_value is not None:
        overlaid.lat, overlaid.lng = lat_value, lng_value
        overlaid.sources["latlng"] = Source.EDITOR
    elif lat is not None or lng is not None:
        log.debug("Ignoring incomplete draft coordinates on listing %s", draft.listing_id)

    hours = draft.fields.get("open_hours")
    if hours is not None and isinstance(hours.value, list | tuple):
        overlaid.hours = [line for line in hours.value if isinstance(line, str)]
        overlaid.sources["hours"] = Source.EDITOR

    return overlaid


def _draft_hours_note(draft: Draft | None) -> str | None:
    if draft is None:
        return None
    note = draft.fields.get("hours_note")
    if note is None or not isinstance(note.value, str) or not note.value.strip():
        return None
    return note.value.strip()


def resolve_fields(
    listing: ListingRecord,
    combined: CombinedRecord,
    suggestions: AISuggestions,
    draft: Draft | None,
) -> ApprovalFields:
    """Lay AI suggestions over the draft-applied combined record."""

    fields = ApprovalFields(
        name=combined.name,
        address=combined.address,
        phone=combined.phone,
        website=combined.website,
        description=combined.description,
        lat=combined.lat,
        lng=combined.lng,
        path=combined.category_path,
        hours=list(combined.hours),
        sources=dict(combined.sources),
    )

    stored_note = (listing.hours_note or "").strip()
    if stored_note:
        fields.hours_note = stored_note
        fields.sources["hours_note"] = Source.USER

    draft_note = _draft_hours_note(draft)
    if draft_note is not None:
        fields.hours_note = draft_note
        fields.sources["hours_note"] = Source.EDITOR

    if suggestions.name_suggestion and fields.sources.get("name") != Source.EDITOR:
        fields.name = suggestions.name_suggestion
        fields.sources["name"] = Source.AI
    if suggestions.description_suggestion and fields.sources.get("description") != Source.EDITOR:
        fields.description = suggestions.description_suggestion
        fields.sources["description"] = Source.AI
    if suggestions.closed_days_suggestion and fields.sources.get("hours_note") != Source.EDITOR:
        fields.hours_note = suggestions.closed_days_suggestion
        fields.sources["hours_note"] = Source.AI

    return fields


class ApprovalAssembler:
    """Merge listing, third-party, AI and draft inputs for review and approval."""

    def __init__(self, builder: CombinedInfoBuilder | None = None) -> None:
        self.builder = builder or CombinedInfoBuilder()

    def assemble(self, merge_input: MergeInput) -> MergeResult:
        listing = merge_input.listing
        place = merge_input.place
        history = merge_input.latest_history
        if place is None and history is not None:
            place = history.cached_place_data

        base = self.builder.build(listing, merge_input.trust, place)
        combined = apply_draft(base, merge_input.draft)
        suggestions = suggestions_from_history(history)
        fields = resolve_fields(listing, combined, suggestions, merge_input.draft)

        return MergeResult(
            combined=combined,
            fields=fields,
            suggestions=suggestions,
            draft_applied=merge_input.draft is not None and bool(merge_input.draft.fields),
        )


def _changed_text(stored: str | None, candidate: str) -> str | None:
    value = candidate.strip()
    if not value:
        return None
    if stored is not None and stored.strip() == value:
        return None
    return value


def _changed_float(stored: float | None, candidate: float | None) -> float | None:
    if candidate is None:
        return None
    if stored is not None and stored == candidate:
        return None
    return candidate


def build_approval_payload(
    result: MergeResult,
    listing: ListingRecord,
    admin_id: int,
    notes: str,
) -> ApprovalPayload:
    """Turn resolved fields into a write request holding only changed values.

    Raises ``HoursSerializationError`` if the transcoded hours cannot be
    serialized; the field diff is attached as ``replacements``.
    """

    fields = result.fields
    payload = ApprovalPayload(
        listing_id=listing.id,
        admin_id=admin_id,
        notes=notes,
        name=_changed_text(listing.name, fields.name),
        address=_changed_text(listing.address, fields.address),
        phone=_changed_text(listing.phone, fields.phone),
        website=_changed_text(listing.website, fields.website),
        description=_changed_text(listing.description, fields.description),
        path=_changed_text(listing.category_path, fields.path),
        lat=_changed_float(listing.lat, fields.lat),
        lng=_changed_float(listing.lng, fields.lng),
        open_hours=_changed_text(listing.hours_text, transcode_opening_hours(fields.hours)),
        open_hours_note=_changed_text(listing.hours_note, fields.hours_note),
    )
    payload.replacements = build_replacements(listing, payload)
    log.debug(
        "Approval payload for listing %s overrides %s",
        listing.id,
        sorted(payload.overrides()),
    )
    return payload


__all__ = [
    "ApprovalAssembler",
    "MergeInput",
    "MergeResult",
    "apply_draft",
    "build_approval_payload",
    "resolve_fields",
]
