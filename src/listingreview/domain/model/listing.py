"""Input records supplied by repository collaborators."""

# pyright: reportUnknownVariableType=false

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from listingreview.domain.model.enums import ListingStatus

if TYPE_CHECKING:
    from datetime import datetime


@dataclass(slots=True, kw_only=True)
class CategoryFlags:
    """Submitter classification of a listing.

    ``entry_type`` 1=restaurant, 2=store; ``vegan``/``veg_only`` are 0/1 flags;
    ``category`` is a store category id (0 = none).
    """

    entry_type: int = 1
    vegan: int = 0
    veg_only: int = 0
    category: int = 0


@dataclass(slots=True, kw_only=True)
class ListingRecord:
    id: int
    name: str
    address: str = ""
    phone: str | None = None
    website: str | None = None
    lat: float | None = None
    lng: float | None = None
    hours_text: str | None = None
    hours_note: str | None = None
    description: str | None = None
    flags: CategoryFlags = field(default_factory=CategoryFlags)
    category_path: str | None = None
    created_at: datetime
    updated_at: datetime | None = None
    status: ListingStatus = ListingStatus.PENDING
    submitter_id: int | None = None

    @property
    def last_touched_at(self) -> datetime:
        return self.updated_at or self.created_at


@dataclass(slots=True, kw_only=True)
class SubmitterRecord:
    username: str
    trusted: bool = False
    is_owner: bool = False
    ambassador_level: int = 0
    id: int | None = None
    ambassador_region: str | None = None
    contributions: int = 0
    approved_listing_count: int = 0


@dataclass(slots=True, kw_only=True)
class ThirdPartyPlaceData:
    """Place details as cached from the third-party places service."""

    name: str = ""
    address: str = ""
    phone: str = ""
    website: str = ""
    lat: float | None = None
    lng: float | None = None
    weekday_hours: list[str] = field(default_factory=list)
    categories: list[str] = field(default_factory=list)
    place_id: str | None = None


@dataclass(slots=True, kw_only=True)
class ValidationHistoryEntry:
    id: int
    listing_id: int
    status: str
    score: int
    processed_at: datetime
    notes: str = ""
    score_breakdown: dict[str, int] = field(default_factory=dict)
    raw_ai_output: str | None = None
    cached_place_data: ThirdPartyPlaceData | None = None
