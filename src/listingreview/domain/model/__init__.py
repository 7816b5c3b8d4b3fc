"""Public domain model surface."""

from __future__ import annotations

from listingreview.domain.model.approval import (
    ApprovalFields,
    ApprovalPayload,
    FieldChange,
    Replacements,
)
from listingreview.domain.model.audit import AuditLogEntry
from listingreview.domain.model.combined import (
    AISuggestions,
    CombinedRecord,
    PathValidationNote,
    TrustAssessment,
)
from listingreview.domain.model.draft import Draft, DraftField
from listingreview.domain.model.enums import (
    Authority,
    ListingKind,
    ListingStatus,
    Source,
    ValidationStatus,
)
from listingreview.domain.model.listing import (
    CategoryFlags,
    ListingRecord,
    SubmitterRecord,
    ThirdPartyPlaceData,
    ValidationHistoryEntry,
)

__all__ = [  # noqa: RUF022
    # inputs
    "CategoryFlags",
    "ListingRecord",
    "SubmitterRecord",
    "ThirdPartyPlaceData",
    "ValidationHistoryEntry",
    # derived
    "AISuggestions",
    "CombinedRecord",
    "PathValidationNote",
    "TrustAssessment",
    # drafts
    "Draft",
    "DraftField",
    # approval
    "ApprovalFields",
    "ApprovalPayload",
    "FieldChange",
    "Replacements",
    # audit
    "AuditLogEntry",
    # enums
    "Authority",
    "ListingKind",
    "ListingStatus",
    "Source",
    "ValidationStatus",
]
