"""Domain port definitions for adapters."""

from __future__ import annotations

from .persistence import (
    AuditLogRepository,
    ListingRepository,
    Repository,
    ValidationHistoryRepository,
)
from .unit_of_work import (
    RepositoryCollection,
    ReviewRepositories,
    ReviewUnitOfWork,
    UnitOfWork,
)

__all__ = [
    "AuditLogRepository",
    "ListingRepository",
    "Repository",
    "RepositoryCollection",
    "ReviewRepositories",
    "ReviewUnitOfWork",
    "UnitOfWork",
    "ValidationHistoryRepository",
]
