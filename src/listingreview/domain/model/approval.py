"""Approval payloads and the audit diff of replaced field values."""

# pyright: reportUnknownVariableType=false

from __future__ import annotations

import json
from dataclasses import dataclass, field

from listingreview.domain.errors import AuditSerializationError
from listingreview.domain.model.enums import Source


@dataclass(slots=True, kw_only=True)
class ApprovalFields:
    """Resolved field values after the draft, AI and combined layers."""

    name: str = ""
    address: str = ""
    phone: str = ""
    website: str = ""
    description: str = ""
    lat: float | None = None
    lng: float | None = None
    path: str = ""
    hours: list[str] = field(default_factory=list)
    hours_note: str = ""
    sources: dict[str, Source] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class FieldChange:
    old: str | float | None
    new: str | float | None


@dataclass(slots=True)
class Replacements:
    """Per-field ``{old, new}`` record of what an approval overwrote."""

    changes: dict[str, FieldChange] = field(default_factory=dict)

    def record(self, key: str, old: str | float | None, new: str | float | None) -> None:
        self.changes[key] = FieldChange(old=old, new=new)

    def has_replacements(self) -> bool:
        return bool(self.changes)

    def to_dict(self) -> dict[str, dict[str, str | float | None]]:
        return {
            key: {"old": change.old, "new": change.new} for key, change in self.changes.items()
        }

    def to_json(self) -> str:
        try:
            return json.dumps(self.to_dict(), allow_nan=False, ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            raise AuditSerializationError(f"failed to serialize field replacements: {exc}") from exc


@dataclass(slots=True, kw_only=True)
class ApprovalPayload:
    """Write request for an approval; ``None`` fields are left untouched."""

    listing_id: int
    admin_id: int
    notes: str
    name: str | None = None
    address: str | None = None
    phone: str | None = None
    website: str | None = None
    description: str | None = None
    path: str | None = None
    lat: float | None = None
    lng: float | None = None
    open_hours: str | None = None
    open_hours_note: str | None = None
    replacements: Replacements = field(default_factory=Replacements)

    def overrides(self) -> dict[str, str | float]:
        values = {
            "name": self.name,
            "address": self.address,
            "phone": self.phone,
            "website": self.website,
            "description": self.description,
            "path": self.path,
            "lat": self.lat,
            "lng": self.lng,
            "open_hours": self.open_hours,
            "open_hours_note": self.open_hours_note,
        }
        return {key: value for key, value in values.items() if value is not None}
