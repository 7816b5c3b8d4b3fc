"""Derived records: trust assessments, AI suggestions and the combined view."""

# pyright: reportUnknownVariableType=false

from __future__ import annotations

from dataclasses import dataclass, field

from listingreview.domain.model.enums import Authority, ListingKind, Source
from listingreview.domain.model.listing import CategoryFlags


@dataclass(frozen=True, slots=True)
class TrustAssessment:
    trust: float
    authority: Authority
    reason: str


@dataclass(frozen=True, slots=True)
class PathValidationNote:
    """Display-only verdict on the listing's category path."""

    is_valid: bool | None = None
    issue: str | None = None
    confidence: str | None = None


@dataclass(frozen=True, slots=True)
class AISuggestions:
    name_suggestion: str | None = None
    description_suggestion: str | None = None
    closed_days_suggestion: str | None = None
    path_validation: PathValidationNote | None = None

    def is_empty(self) -> bool:
        return (
            self.name_suggestion is None
            and self.description_suggestion is None
            and self.closed_days_suggestion is None
            and self.path_validation is None
        )


@dataclass(slots=True, kw_only=True)
class CombinedRecord:
    """Merged view of submitter and third-party data.

    ``sources`` maps a field key to its provenance. Coordinates share the
    ``latlng`` key because they are always taken from a single source.
    """

    name: str = ""
    address: str = ""
    phone: str = ""
    website: str = ""
    hours: list[str] = field(default_factory=list)
    lat: float | None = None
    lng: float | None = None
    categories: list[str] = field(default_factory=list)
    description: str = ""
    category_path: str = ""
    flags: CategoryFlags = field(default_factory=CategoryFlags)
    listing_kind: ListingKind = ListingKind.RESTAURANT
    vegan_status: str = ""
    category_label: str = ""
    type_mismatch: bool = False
    sources: dict[str, Source] = field(default_factory=dict)

    def source_of(self, key: str) -> Source:
        return self.sources.get(key, Source.NONE)
