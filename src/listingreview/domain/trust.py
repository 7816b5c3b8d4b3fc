"""Submitter trust scoring.

The assessment weights how much a submitter's self-reported data is believed
when it disagrees with third-party data. It is pure and deterministic: the same
submitter and category path always produce the same result.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from listingreview.config import TrustConfig
from listingreview.domain.model import Authority, TrustAssessment

if TYPE_CHECKING:
    from listingreview.domain.model import SubmitterRecord

log = getLogger(__name__)


def normalize_region(value: str) -> str:
    """Lowercase a region or path segment and collapse spaces to underscores."""

    return "_".join(value.strip().lower().split())


def region_matches(region: str | None, category_path: str | None) -> bool:
    if not region or not region.strip() or not category_path:
        return False
    wanted = normalize_region(region)
    segments = [normalize_region(segment) for segment in category_path.split("|")]
    return wanted in segments or wanted in "|".join(segments)


class TrustAssessor:
    def __init__(self, config: TrustConfig | None = None) -> None:
        self.config = config or TrustConfig()

    def assess(self, submitter: SubmitterRecord, category_path: str | None) -> TrustAssessment:
        cfg = self.config
        if submitter.is_owner:
            return TrustAssessment(
                trust=cfg.owner_trust,
                authority=Authority.OWNER,
                reason="listing owner submitted the listing",
            )

        base = cfg.trusted_trust if submitter.trusted else cfg.regular_trust
        authority = Authority.TRUSTED if submitter.trusted else Authority.REGULAR
        why: list[str] = ["trusted member" if submitter.trusted else "regular"]

        if submitter.ambassador_level > 0:
            matched = region_matches(submitter.ambassador_region, category_path)
            high = submitter.ambassador_level >= cfg.high_ambassador_level
            if matched and high:
                base = max(base, cfg.high_ambassador_trust)
                authority = Authority.HIGH_AMBASSADOR
            elif matched:
                base = max(base, cfg.regional_ambassador_trust)
                authority = Authority.AMBASSADOR
            else:
                base = max(base, cfg.ambassador_trust)
                authority = Authority.AMBASSADOR
            why = [f"ambassador level {submitter.ambassador_level}"]
            if matched:
                why.append("region match")

        trust = self._apply_boosts(base, submitter, why)
        assessment = TrustAssessment(
            trust=trust,
            authority=authority,
            reason=f"{', '.join(why)}, trust={trust:.2f}",
        )
        log.debug("Assessed submitter %s: %s", submitter.username, assessment.reason)
        return assessment

    def _apply_boosts(self, base: float, submitter: SubmitterRecord, why: list[str]) -> float:
        cfg = self.config
        trust = base

        passed = [t for t in cfg.contribution_boost_thresholds if submitter.contributions > t]
        trust += cfg.contribution_boost_step * len(passed)
        if passed:
            why.append(f">{max(passed)} contrib")

        approved = submitter.approved_listing_count
        reached = [t for t in cfg.approved_listing_boost_thresholds if approved >= t]
        trust += cfg.approved_listing_boost_step * len(reached)
        if reached:
            why.append(f">={max(reached)} approved")

        return round(min(1.0, max(0.0, trust)), 4)
