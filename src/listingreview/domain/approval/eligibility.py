"""Blocking precondition for approval: a passing, recent validation run."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from listingreview.domain.clock import as_utc
from listingreview.domain.errors import (
    MissingValidationHistoryError,
    ValidationScoreError,
    ValidationStatusError,
)
from listingreview.domain.model import ValidationStatus

if TYPE_CHECKING:
    from collections.abc import Iterable

    from listingreview.domain.model import ValidationHistoryEntry
    from listingreview.domain.ports import ValidationHistoryRepository

log = getLogger(__name__)


def select_latest_entry(
    entries: Iterable[ValidationHistoryEntry],
) -> ValidationHistoryEntry | None:
    """Return the entry with the latest ``processed_at``.

    Entries sharing a timestamp keep the first one encountered; the order
    among equal timestamps is whatever the repository returned.
    """

    latest: ValidationHistoryEntry | None = None
    for entry in entries:
        if latest is None or as_utc(entry.processed_at) > as_utc(latest.processed_at):
            latest = entry
    return latest


def ensure_eligible(entry: ValidationHistoryEntry, threshold: int) -> None:
    """Raise unless ``entry`` is an approved run scoring at least ``threshold``.

    Status is checked before score, so a non-approved run is refused whatever
    its score.
    """

    if entry.status != ValidationStatus.APPROVED:
        raise ValidationStatusError(entry.status)
    if entry.score < threshold:
        raise ValidationScoreError(entry.score, threshold)


class ApprovalEligibilityGate:
    def __init__(self, history: ValidationHistoryRepository) -> None:
        self.history = history

    def check(self, listing_id: int, threshold: int) -> ValidationHistoryEntry:
        """Return the latest history entry, or raise ``ApprovalEligibilityError``."""

        latest = select_latest_entry(self.history.history_for(listing_id))
        if latest is None:
            raise MissingValidationHistoryError(listing_id)
        ensure_eligible(latest, threshold)
        log.debug(
            "Listing %s eligible for approval (history=%s, score=%s, threshold=%s)",
            listing_id,
            latest.id,
            latest.score,
            threshold,
        )
        return latest


__all__ = ["ApprovalEligibilityGate", "ensure_eligible", "select_latest_entry"]
