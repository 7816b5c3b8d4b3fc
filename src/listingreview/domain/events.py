"""Review decision events and the sink they are published to."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol, runtime_checkable


@dataclass(frozen=True, slots=True, kw_only=True)
class ListingApproved:
    listing_id: int
    admin_id: int
    history_id: int
    replaced_fields: tuple[str, ...] = ()
    occurred_at: datetime = field(default_factory=lambda: datetime.now(tz=UTC))


@dataclass(frozen=True, slots=True, kw_only=True)
class ListingRejected:
    listing_id: int
    admin_id: int
    reason: str
    occurred_at: datetime = field(default_factory=lambda: datetime.now(tz=UTC))


type ReviewEvent = ListingApproved | ListingRejected


@runtime_checkable
class EventSink(Protocol):
    """Receiver for decision events (counters, notifications, ...)."""

    def append(self, event: ReviewEvent) -> None: ...


__all__ = ["EventSink", "ListingApproved", "ListingRejected", "ReviewEvent"]
