"""Audit records for approval/rejection decisions."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

from listingreview.domain.model.enums import ListingStatus


@dataclass(slots=True, kw_only=True)
class AuditLogEntry:
    listing_id: int
    status: ListingStatus
    history_id: int | None = None
    admin_id: int | None = None
    reason: str | None = None
    data_replacements: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(tz=UTC))

    @classmethod
    def for_approval(
        cls,
        *,
        listing_id: int,
        history_id: int | None,
        admin_id: int,
        notes: str,
        data_replacements: str | None,
    ) -> AuditLogEntry:
        return cls(
            listing_id=listing_id,
            status=ListingStatus.APPROVED,
            history_id=history_id,
            admin_id=admin_id,
            reason=notes,
            data_replacements=data_replacements,
        )

    @classmethod
    def for_rejection(
        cls,
        *,
        listing_id: int,
        history_id: int | None,
        admin_id: int,
        reason: str,
    ) -> AuditLogEntry:
        """Rejections carry only the human-entered reason, never a field diff."""
        return cls(
            listing_id=listing_id,
            status=ListingStatus.REJECTED,
            history_id=history_id,
            admin_id=admin_id,
            reason=reason,
        )
