"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import IntEnum, StrEnum


class ListingStatus(IntEnum):
    PENDING = 0
    APPROVED = 1
    REJECTED = -1


class Source(StrEnum):
    """Provenance of a resolved field value."""

    USER = "user"
    THIRDPARTY = "thirdparty"
    EDITOR = "editor"
    AI = "ai"
    NONE = ""


class ValidationStatus(StrEnum):
    APPROVED = "approved"
    REJECTED = "rejected"
    MANUAL_REVIEW = "manual_review"


class Authority(StrEnum):
    OWNER = "owner"
    HIGH_AMBASSADOR = "high_ambassador"
    AMBASSADOR = "ambassador"
    TRUSTED = "trusted"
    REGULAR = "regular"


class ListingKind(StrEnum):
    RESTAURANT = "Restaurant"
    STORE = "Store"
