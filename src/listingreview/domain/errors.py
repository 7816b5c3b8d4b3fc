"""Domain error hierarchy."""

from __future__ import annotations


class ListingReviewError(Exception):
    """Base class for failures surfaced to callers of the review pipeline."""


class ListingNotFoundError(ListingReviewError):
    def __init__(self, listing_id: int) -> None:
        super().__init__(f"listing {listing_id} not found")
        self.listing_id = listing_id


class ApprovalEligibilityError(ListingReviewError):
    """The listing has not passed validation well enough to be approved."""


class MissingValidationHistoryError(ApprovalEligibilityError):
    def __init__(self, listing_id: int) -> None:
        super().__init__(f"no validation history for listing {listing_id}")
        self.listing_id = listing_id


class ValidationStatusError(ApprovalEligibilityError):
    def __init__(self, status: str) -> None:
        super().__init__(f"latest validation status is '{status}' (not 'approved')")
        self.status = status


class ValidationScoreError(ApprovalEligibilityError):
    def __init__(self, score: int, threshold: int) -> None:
        super().__init__(f"latest validation score {score} is below threshold {threshold}")
        self.score = score
        self.threshold = threshold


class HoursSerializationError(ListingReviewError):
    """Normalized opening hours could not be serialized."""


class AuditSerializationError(ListingReviewError):
    """Field replacements could not be serialized for the audit log."""


class RejectionReasonRequiredError(ListingReviewError):
    def __init__(self) -> None:
        super().__init__("Rejection reason is required")


class DraftValidationError(ListingReviewError):
    def __init__(self, errors: dict[str, str]) -> None:
        details = ", ".join(f"{key}: {message}" for key, message in sorted(errors.items()))
        super().__init__(f"Validation failed ({details})")
        self.errors = errors


class ListingAlreadyDecidedError(ListingReviewError):
    def __init__(self, listing_id: int, status: str) -> None:
        super().__init__(f"listing {listing_id} is already {status}")
        self.listing_id = listing_id
        self.status = status
