"""Application orchestration for listing review decisions."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from listingreview.config import (
    ReviewConfig,
    configure_logging,
    get_review_config,
    get_trust_config,
)
from listingreview.domain.approval import (
    ApprovalAssembler,
    ApprovalEligibilityGate,
    MergeInput,
    build_approval_payload,
    select_latest_entry,
)
from listingreview.domain.clock import utcnow
from listingreview.domain.combine import CombinedInfoBuilder
from listingreview.domain.drafts import DraftOverlayStore, validate_draft_fields
from listingreview.domain.errors import (
    DraftValidationError,
    ListingAlreadyDecidedError,
    ListingNotFoundError,
    ListingReviewError,
    RejectionReasonRequiredError,
)
from listingreview.domain.events import ListingApproved, ListingRejected
from listingreview.domain.hours import transcode_opening_hours
from listingreview.domain.model import AuditLogEntry, ListingStatus
from listingreview.domain.ports.unit_of_work import ReviewUnitOfWork
from listingreview.domain.trust import TrustAssessor

if TYPE_CHECKING:
    from listingreview.domain.clock import Clock
    from listingreview.domain.events import EventSink, ReviewEvent
    from listingreview.domain.model import (
        AISuggestions,
        CombinedRecord,
        Draft,
        DraftField,
        ListingRecord,
        SubmitterRecord,
        TrustAssessment,
        ValidationHistoryEntry,
    )
    from listingreview.domain.ports import ListingRepository

UnitOfWorkFactory = Callable[[], ReviewUnitOfWork]


log = getLogger(__name__)


class ActionStatus(StrEnum):
    APPROVED = "approved"
    REJECTED = "rejected"
    SAVED = "saved"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class ActionResult:
    """Outcome of a reviewer action, ready to show to the reviewer."""

    status: ActionStatus
    message: str

    @property
    def ok(self) -> bool:
        return self.status != ActionStatus.ERROR


@dataclass(slots=True, kw_only=True)
class ReviewView:
    listing: ListingRecord
    submitter: SubmitterRecord
    trust: TrustAssessment
    combined: CombinedRecord
    suggestions: AISuggestions
    draft: Draft | None
    latest_history: ValidationHistoryEntry | None
    hours_preview: str


def _load_listing(
    listings: ListingRepository, listing_id: int
) -> tuple[ListingRecord, SubmitterRecord]:
    found = listings.get_with_submitter(listing_id)
    if found is None:
        raise ListingNotFoundError(listing_id)
    return found


def _ensure_pending(listing: ListingRecord) -> None:
    if listing.status != ListingStatus.PENDING:
        raise ListingAlreadyDecidedError(listing.id, listing.status.name.lower())


class ReviewService:
    """Review, draft, approve and reject listings.

    Collaborators are passed in explicitly; nothing is looked up globally.
    """

    def __init__(
        self,
        *,
        unit_of_work_factory: UnitOfWorkFactory,
        drafts: DraftOverlayStore | None = None,
        assessor: TrustAssessor | None = None,
        config: ReviewConfig | None = None,
        events: EventSink | None = None,
        clock: Clock = utcnow,
    ) -> None:
        self.unit_of_work_factory = unit_of_work_factory
        self.config = config or ReviewConfig()
        self.clock = clock
        self.drafts = drafts or DraftOverlayStore(clock=clock)
        self.assessor = assessor or TrustAssessor()
        self.assembler = ApprovalAssembler(CombinedInfoBuilder(self.config, clock))
        self.events = events

    def review(self, listing_id: int) -> ReviewView:
        """Build everything a reviewer sees for one listing.

        Raises ``ListingNotFoundError`` for unknown listings.
        """

        with self.unit_of_work_factory() as uow:
            repos = uow.repositories
            listing, submitter = _load_listing(repos.listings, listing_id)
            latest = select_latest_entry(repos.history.history_for(listing_id))
            place = repos.listings.place_data_for(listing_id)

        assessment = self.assessor.assess(submitter, listing.category_path)
        draft = self.drafts.get(listing_id)
        result = self.assembler.assemble(
            MergeInput(
                listing=listing,
                submitter=submitter,
                trust=assessment.trust,
                place=place,
                latest_history=latest,
                draft=draft,
            )
        )
        return ReviewView(
            listing=listing,
            submitter=submitter,
            trust=assessment,
            combined=result.combined,
            suggestions=result.suggestions,
            draft=draft,
            latest_history=latest,
            hours_preview=transcode_opening_hours(result.fields.hours),
        )

    def save_draft(
        self,
        listing_id: int,
        editor_id: int,
        fields: Mapping[str, DraftField],
    ) -> ActionResult:
        errors = validate_draft_fields(fields)
        if errors:
            exc = DraftValidationError(errors)
            log.info("Rejected draft for listing %s: %s", listing_id, exc)
            return ActionResult(ActionStatus.ERROR, str(exc))
        self.drafts.save(listing_id, editor_id, fields)
        return ActionResult(ActionStatus.SAVED, "Draft saved")

    def approve(self, listing_id: int, admin_id: int, notes: str = "") -> ActionResult:
        """Approve a pending listing with its resolved field values.

        Nothing is written unless the eligibility gate passes and the audit
        diff serializes. The draft is discarded only after the commit.
        """

        try:
            with self.unit_of_work_factory() as uow:
                repos = uow.repositories
                listing, submitter = _load_listing(repos.listings, listing_id)
                _ensure_pending(listing)
                latest = ApprovalEligibilityGate(repos.history).check(
                    listing_id, self.config.approval_threshold
                )
                assessment = self.assessor.assess(submitter, listing.category_path)
                result = self.assembler.assemble(
                    MergeInput(
                        listing=listing,
                        submitter=submitter,
                        trust=assessment.trust,
                        place=repos.listings.place_data_for(listing_id),
                        latest_history=latest,
                        draft=self.drafts.get(listing_id),
                    )
                )
                payload = build_approval_payload(
                    result, listing, admin_id, _approval_notes(admin_id, notes)
                )
                replacements = payload.replacements
                data_replacements = (
                    replacements.to_json() if replacements.has_replacements() else None
                )

                repos.listings.apply_approval(payload)
                repos.audit_log.add(
                    AuditLogEntry.for_approval(
                        listing_id=listing_id,
                        history_id=latest.id,
                        admin_id=admin_id,
                        notes=payload.notes,
                        data_replacements=data_replacements,
                    )
                )
                uow.commit()
        except ListingReviewError as exc:
            log.warning("Approval of listing %s failed: %s", listing_id, exc)
            return ActionResult(ActionStatus.ERROR, str(exc))

        self.drafts.delete(listing_id)
        self._publish(
            ListingApproved(
                listing_id=listing_id,
                admin_id=admin_id,
                history_id=latest.id,
                replaced_fields=tuple(replacements.changes),
                occurred_at=self.clock(),
            )
        )
        log.info(
            "Listing %s approved by admin %s (%d fields replaced)",
            listing_id,
            admin_id,
            len(replacements.changes),
        )
        return ActionResult(ActionStatus.APPROVED, f"Listing {listing_id} approved")

    def reject(self, listing_id: int, admin_id: int, reason: str) -> ActionResult:
        """Reject a pending listing; a non-blank reason is required."""

        try:
            if not reason.strip():
                raise RejectionReasonRequiredError
            audit_reason = f"Manually rejected by admin_{admin_id}: {reason.strip()}"
            with self.unit_of_work_factory() as uow:
                repos = uow.repositories
                listing, _ = _load_listing(repos.listings, listing_id)
                _ensure_pending(listing)
                latest = select_latest_entry(repos.history.history_for(listing_id))

                repos.listings.update_status(listing_id, ListingStatus.REJECTED)
                repos.audit_log.add(
                    AuditLogEntry.for_rejection(
                        listing_id=listing_id,
                        history_id=latest.id if latest is not None else None,
                        admin_id=admin_id,
                        reason=audit_reason,
                    )
                )
                uow.commit()
        except ListingReviewError as exc:
            log.warning("Rejection of listing %s failed: %s", listing_id, exc)
            return ActionResult(ActionStatus.ERROR, str(exc))

        self.drafts.delete(listing_id)
        self._publish(
            ListingRejected(
                listing_id=listing_id,
                admin_id=admin_id,
                reason=reason.strip(),
                occurred_at=self.clock(),
            )
        )
        log.info("Listing %s rejected by admin %s", listing_id, admin_id)
        return ActionResult(ActionStatus.REJECTED, f"Listing {listing_id} rejected")

    def _publish(self, event: ReviewEvent) -> None:
        if self.events is not None:
            self.events.append(event)


def build_review_service(
    unit_of_work_factory: UnitOfWorkFactory,
    *,
    drafts: DraftOverlayStore | None = None,
    events: EventSink | None = None,
    load_env: bool = True,
) -> ReviewService:
    """Wire a ``ReviewService`` from environment configuration.

    Reads a local ``.env`` first when ``load_env`` is set, then configures
    logging. Raises ``ConfigurationError`` for invalid settings.
    """

    if load_env:
        load_dotenv()
    configure_logging()
    config = get_review_config()
    log.info(
        "Review service configured: approval_threshold=%s, recency_window=%s, "
        "trusted_threshold=%s",
        config.approval_threshold,
        config.recency_window,
        config.trusted_threshold,
    )
    return ReviewService(
        unit_of_work_factory=unit_of_work_factory,
        drafts=drafts,
        assessor=TrustAssessor(get_trust_config()),
        config=config,
        events=events,
    )


def _approval_notes(admin_id: int, notes: str) -> str:
    base = f"Manually approved by admin_{admin_id}"
    extra = notes.strip()
    return f"{base}: {extra}" if extra else base


__all__ = [
    "ActionResult",
    "ActionStatus",
    "ReviewService",
    "ReviewView",
    "UnitOfWorkFactory",
    "build_review_service",
]
