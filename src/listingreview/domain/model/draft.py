"""Editor draft overlay records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime


@dataclass(frozen=True, slots=True)
class DraftField:
    """One edited value and the provenance of the value it overrides."""

    value: object
    original_source: str = ""


@dataclass(frozen=True, slots=True)
class Draft:
    listing_id: int
    editor_id: int
    fields: dict[str, DraftField]
    updated_at: datetime

    def __contains__(self, key: object) -> bool:
        return key in self.fields
