"""Ports for reading listings and recording review decisions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from listingreview.domain.model import AuditLogEntry

if TYPE_CHECKING:
    from collections.abc import Sequence

    from listingreview.domain.model import (
        ApprovalPayload,
        ListingRecord,
        ListingStatus,
        SubmitterRecord,
        ThirdPartyPlaceData,
        ValidationHistoryEntry,
    )


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for an append-only store."""

    def add(self, entity: TEntity) -> None: ...


@runtime_checkable
class ListingRepository(Protocol):
    """Persistence contract for listings under review."""

    def get_with_submitter(self, listing_id: int) -> tuple[ListingRecord, SubmitterRecord] | None:
        """Return the listing and the user who submitted it, if the listing exists."""
        ...

    def place_data_for(self, listing_id: int) -> ThirdPartyPlaceData | None: ...

    def apply_approval(self, payload: ApprovalPayload) -> None:
        """Write the payload's non-``None`` fields and mark the listing approved."""
        ...

    def update_status(self, listing_id: int, status: ListingStatus) -> None: ...


@runtime_checkable
class ValidationHistoryRepository(Protocol):
    """Read access to automated validation runs for a listing."""

    def history_for(self, listing_id: int) -> Sequence[ValidationHistoryEntry]: ...


@runtime_checkable
class AuditLogRepository(Repository[AuditLogEntry], Protocol):
    """Repository contract for approval and rejection audit entries."""
