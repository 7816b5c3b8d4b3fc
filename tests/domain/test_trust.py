from __future__ import annotations

import pytest

from listingreview.config import TrustConfig
from listingreview.domain.model import Authority
from listingreview.domain.trust import TrustAssessor, normalize_region, region_matches
from tests.support.reviews import make_submitter

BERLIN = "europe|germany|berlin"


def test_owner_gets_full_trust() -> None:
    assessment = TrustAssessor().assess(make_submitter(is_owner=True), BERLIN)

    assert assessment.trust == 1.0
    assert assessment.authority is Authority.OWNER


def test_regular_submitter_without_signals_gets_low_default() -> None:
    assessment = TrustAssessor().assess(make_submitter(), None)

    assert assessment.trust == pytest.approx(0.3)
    assert assessment.authority is Authority.REGULAR
    assert assessment.reason == "regular, trust=0.30"


def test_trusted_submitter_baseline() -> None:
    assessment = TrustAssessor().assess(make_submitter(trusted=True), BERLIN)

    assert assessment.trust == pytest.approx(0.8)
    assert assessment.authority is Authority.TRUSTED


def test_high_level_ambassador_in_matching_region() -> None:
    submitter = make_submitter(ambassador_level=3, ambassador_region="Berlin")

    assessment = TrustAssessor().assess(submitter, BERLIN)

    assert assessment.trust == pytest.approx(0.9)
    assert assessment.authority is Authority.HIGH_AMBASSADOR
    assert "region match" in assessment.reason


def test_ambassador_region_match_treats_spaces_as_underscores() -> None:
    submitter = make_submitter(ambassador_level=1, ambassador_region="New York")

    assessment = TrustAssessor().assess(submitter, "north_america|usa|New_York")

    assert assessment.trust == pytest.approx(0.85)
    assert assessment.authority is Authority.AMBASSADOR


def test_ambassador_outside_region() -> None:
    submitter = make_submitter(ambassador_level=2, ambassador_region="Lisbon")

    assessment = TrustAssessor().assess(submitter, BERLIN)

    assert assessment.trust == pytest.approx(0.6)
    assert assessment.authority is Authority.AMBASSADOR
    assert "region match" not in assessment.reason


def test_ambassador_never_lowers_trusted_baseline() -> None:
    submitter = make_submitter(trusted=True, ambassador_level=1, ambassador_region="Lisbon")

    assessment = TrustAssessor().assess(submitter, BERLIN)

    assert assessment.trust == pytest.approx(0.8)


def test_contribution_boost() -> None:
    assessment = TrustAssessor().assess(make_submitter(trusted=True, contributions=1500), BERLIN)

    assert assessment.trust == pytest.approx(0.9)
    assert ">1000 contrib" in assessment.reason
    assert assessment.reason.endswith("trust=0.90")


def test_approved_listing_boost_for_regular_submitter() -> None:
    assessment = TrustAssessor().assess(make_submitter(approved_listing_count=5), None)

    assert assessment.trust == pytest.approx(0.4)
    assert ">=5 approved" in assessment.reason


def test_boosts_are_clamped_to_one() -> None:
    submitter = make_submitter(trusted=True, contributions=6000, approved_listing_count=12)

    assessment = TrustAssessor().assess(submitter, BERLIN)

    assert assessment.trust == 1.0


def test_custom_config_changes_baselines() -> None:
    assessor = TrustAssessor(TrustConfig(regular_trust=0.2))

    assert assessor.assess(make_submitter(), None).trust == pytest.approx(0.2)


def test_assessment_is_deterministic() -> None:
    submitter = make_submitter(ambassador_level=3, ambassador_region="berlin", contributions=2000)
    assessor = TrustAssessor()

    assert assessor.assess(submitter, BERLIN) == assessor.assess(submitter, BERLIN)


def test_region_helpers() -> None:
    assert normalize_region("  New   York ") == "new_york"
    assert region_matches("germany", BERLIN)
    assert not region_matches("", BERLIN)
    assert not region_matches("berlin", None)
