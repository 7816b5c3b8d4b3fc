"""Process-lifetime editor drafts, one per listing.

A draft is replaced wholesale on every save and is removed once the listing is
approved or rejected. Nothing here is persisted.
"""

from __future__ import annotations

import math
import re
import threading
from collections.abc import Callable, Mapping
from logging import getLogger
from typing import TYPE_CHECKING, Final

from listingreview.domain.clock import utcnow
from listingreview.domain.model import Draft

if TYPE_CHECKING:
    from datetime import datetime

    from listingreview.domain.clock import Clock
    from listingreview.domain.model import DraftField

log = getLogger(__name__)

_PATH_PATTERN = re.compile(r"^[a-zA-Z0-9_|\-]+$")
_PHONE_PATTERN = re.compile(r"^[0-9+\-() ]+$")

MAX_HOURS_ENTRIES: Final[int] = 20
MAX_HOURS_ENTRY_LENGTH: Final[int] = 200


class DraftOverlayStore:
    """Thread-safe map of listing id to the current editor draft.

    One coarse lock guards every operation; write volume is low and no
    operation does more than a dictionary access under it.
    """

    def __init__(self, clock: Clock = utcnow) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._drafts: dict[int, Draft] = {}

    def save(self, listing_id: int, editor_id: int, fields: Mapping[str, DraftField]) -> Draft:
        draft = Draft(
            listing_id=listing_id,
            editor_id=editor_id,
            fields=dict(fields),
            updated_at=self._clock(),
        )
        with self._lock:
            self._drafts[listing_id] = draft
        log.debug(
            "Saved draft for listing %s by editor %s (%d fields)",
            listing_id,
            editor_id,
            len(draft.fields),
        )
        return draft

    def get(self, listing_id: int) -> Draft | None:
        with self._lock:
            return self._drafts.get(listing_id)

    def delete(self, listing_id: int) -> None:
        with self._lock:
            removed = self._drafts.pop(listing_id, None)
        if removed is not None:
            log.debug("Deleted draft for listing %s", listing_id)

    def editor_info(self, listing_id: int) -> tuple[int, datetime] | None:
        """Return ``(editor_id, updated_at)`` of the current draft, if any."""

        with self._lock:
            draft = self._drafts.get(listing_id)
        if draft is None:
            return None
        return draft.editor_id, draft.updated_at

    def __len__(self) -> int:
        with self._lock:
            return len(self._drafts)


# ---------------------------------------------------------------------------
# field validation


def _check_name(value: object) -> str | None:
    if not isinstance(value, str):
        return "invalid type for name"
    length = len(value.strip())
    if length < 2:
        return "name must be at least 2 characters"
    if length > 200:
        return "name must be less than 200 characters"
    return None


def _check_address(value: object) -> str | None:
    if not isinstance(value, str):
        return "invalid type for address"
    length = len(value.strip())
    if length < 5:
        return "address must be at least 5 characters"
    if length > 500:
        return "address must be less than 500 characters"
    return None


def _check_phone(value: object) -> str | None:
    if not isinstance(value, str):
        return "invalid type for phone"
    phone = value.strip()
    if not phone:
        return None
    if len(phone) > 50:
        return "phone must be less than 50 characters"
    if not _PHONE_PATTERN.match(phone):
        return "phone contains invalid characters"
    return None


def _check_coordinate(value: object, *, label: str, bound: int) -> str | None:
    if not isinstance(value, int | float) or isinstance(value, bool):
        return f"invalid type for {label}"
    if not math.isfinite(value) or not -bound <= value <= bound:
        return f"{label} must be between -{bound} and {bound}"
    return None


def _check_lat(value: object) -> str | None:
    return _check_coordinate(value, label="latitude", bound=90)


def _check_lng(value: object) -> str | None:
    return _check_coordinate(value, label="longitude", bound=180)


def _check_path(value: object) -> str | None:
    if not isinstance(value, str):
        return "invalid type for path"
    path = value.strip()
    if not path:
        return "path cannot be empty"
    if len(path) > 255:
        return "path must be less than 255 characters"
    if not _PATH_PATTERN.match(path):
        return "path can only contain letters, numbers, hyphens, underscores, and pipes"
    return None


def _check_description(value: object) -> str | None:
    if not isinstance(value, str):
        return "invalid type for description"
    if len(value) > 5000:
        return "description must be less than 5000 characters"
    return None


def _check_hours_note(value: object) -> str | None:
    if not isinstance(value, str):
        return "invalid type for hours_note"
    if len(value) > 500:
        return "hours note must be less than 500 characters"
    return None


def _check_open_hours(value: object) -> str | None:
    if not isinstance(value, list | tuple):
        return "invalid type for open_hours"
    if not all(isinstance(line, str) for line in value):
        return "invalid type in open_hours array"
    if len(value) > MAX_HOURS_ENTRIES:
        return f"too many open hours entries (max {MAX_HOURS_ENTRIES})"
    if any(len(line) > MAX_HOURS_ENTRY_LENGTH for line in value):
        return f"individual hours entry too long (max {MAX_HOURS_ENTRY_LENGTH} chars)"
    return None


_CHECKS: Final[dict[str, Callable[[object], str | None]]] = {
    "name": _check_name,
    "address": _check_address,
    "phone": _check_phone,
    "lat": _check_lat,
    "lng": _check_lng,
    "path": _check_path,
    "description": _check_description,
    "hours_note": _check_hours_note,
    "open_hours": _check_open_hours,
}

DRAFT_FIELD_KEYS: Final[frozenset[str]] = frozenset(_CHECKS)


def validate_draft_fields(fields: Mapping[str, DraftField]) -> dict[str, str]:
    """Return ``{field: message}`` for every draft value outside its limits.

    Keys outside ``DRAFT_FIELD_KEYS`` are never applied and are not checked.
    """

    errors: dict[str, str] = {}
    for key, draft_field in fields.items():
        check = _CHECKS.get(key)
        if check is None:
            continue
        message = check(draft_field.value)
        if message is not None:
            errors[key] = message
    return errors


__all__ = ["DRAFT_FIELD_KEYS", "DraftOverlayStore", "validate_draft_fields"]
