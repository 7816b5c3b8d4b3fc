"""Opening-hours normalization.

Third-party places data reports hours as one line per weekday, e.g.
``"Monday: 7:30 AM – 10:00 PM"``. Listings store them as a compact document
``{"openhours":["Mon-07:30-22:00",...],"note":""}``. Lines that cannot be read
unambiguously are dropped rather than guessed at.
"""

from __future__ import annotations

import re
from logging import getLogger
from typing import TYPE_CHECKING, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from listingreview.domain.errors import HoursSerializationError

if TYPE_CHECKING:
    from collections.abc import Iterable

log = getLogger(__name__)

DAY_ABBREVIATIONS: Final[dict[str, str]] = {
    "monday": "Mon",
    "tuesday": "Tue",
    "wednesday": "Wed",
    "thursday": "Thu",
    "friday": "Fri",
    "saturday": "Sat",
    "sunday": "Sun",
}
_SHORT_DAYS: Final[frozenset[str]] = frozenset(DAY_ABBREVIATIONS.values())

# regular space, NBSP, thin space, narrow NBSP (all common in places data)
_GAP = r"[ \u00a0\u2009\u202f\s]*"
_TIME_TOKEN = re.compile(rf"(\d{{1,2}}):(\d{{2}}){_GAP}(AM|PM)", re.IGNORECASE)
_NORMALIZED_LINE = re.compile(r"^([A-Za-z]{3})-(\d{2}):(\d{2})-(\d{2}):(\d{2})$")


class OpeningHoursDocument(BaseModel):
    model_config = ConfigDict(extra="ignore")

    openhours: list[str] = Field(default_factory=list)
    note: str = ""


def to_24_hour(hour: int | str, minute: str, period: str) -> str:
    """Convert one 12-hour clock reading to ``HH:MM``.

    ``(12, "00", "AM") -> "00:00"``, ``(12, "00", "PM") -> "12:00"``,
    ``(7, "30", "PM") -> "19:30"``.
    """

    value = int(hour)
    marker = period.strip().upper()
    if marker == "PM" and value != 12:
        value += 12
    elif marker == "AM" and value == 12:
        value = 0
    return f"{value:02d}:{int(minute):02d}"


def transcode_line(line: str) -> str | None:
    """Normalize one weekday line, or return ``None`` if it must be dropped."""

    text = line.strip()
    if not text:
        return None

    normalized = _passthrough_normalized(text)
    if normalized is not None:
        return normalized

    day_name, sep, hours_text = text.partition(":")
    if not sep:
        return None
    day = DAY_ABBREVIATIONS.get(day_name.strip().lower())
    if day is None:
        return None

    lowered = hours_text.lower()
    if "closed" in lowered:
        return None
    if "24 hours" in lowered or "open 24" in lowered:
        return f"{day}-00:00-24:00"

    tokens = _TIME_TOKEN.findall(hours_text)
    if len(tokens) != 2:
        return None
    if not all(_is_clock_reading(h, m) for h, m, _ in tokens):
        return None
    (open_h, open_m, open_p), (close_h, close_m, close_p) = tokens
    return f"{day}-{to_24_hour(open_h, open_m, open_p)}-{to_24_hour(close_h, close_m, close_p)}"


def transcode_opening_hours(lines: Iterable[str]) -> str:
    """Transcode weekday lines into the stored hours document.

    Returns ``""`` when no line survives; raises ``HoursSerializationError``
    only if the document itself cannot be serialized.
    """

    entries: list[str] = []
    for line in lines:
        entry = transcode_line(line)
        if entry is None:
            log.debug("Dropping opening-hours line %r", line)
            continue
        entries.append(entry)

    if not entries:
        return ""
    try:
        return OpeningHoursDocument(openhours=entries).model_dump_json()
    except ValueError as exc:
        raise HoursSerializationError(f"failed to serialize opening hours: {exc}") from exc


def parse_stored_hours(text: str | None) -> list[str]:
    """Return the day lines held in a listing's stored hours text.

    A stored hours document yields its entries; any other non-blank text is a
    single free-form line.
    """

    if text is None or not text.strip():
        return []
    stripped = text.strip()
    try:
        document = OpeningHoursDocument.model_validate_json(stripped)
    except ValidationError:
        return [stripped]
    return list(document.openhours) or [stripped]


def _is_clock_reading(hour: str, minute: str) -> bool:
    return 1 <= int(hour) <= 12 and int(minute) < 60


def _passthrough_normalized(text: str) -> str | None:
    match = _NORMALIZED_LINE.match(text)
    if match is None:
        return None
    day = match.group(1).capitalize()
    if day not in _SHORT_DAYS:
        return None
    open_h, open_m, close_h, close_m = (int(g) for g in match.groups()[1:])
    if open_h > 23 or open_m > 59 or close_m > 59:
        return None
    if close_h > 24 or (close_h == 24 and close_m != 0):
        return None
    return f"{day}-{open_h:02d}:{open_m:02d}-{close_h:02d}:{close_m:02d}"
