from __future__ import annotations

from datetime import timedelta

import pytest

from listingreview.domain.approval import (
    ApprovalEligibilityGate,
    ensure_eligible,
    select_latest_entry,
)
from listingreview.domain.errors import (
    ApprovalEligibilityError,
    MissingValidationHistoryError,
    ValidationScoreError,
    ValidationStatusError,
)
from tests.support.reviews import NOW, FakeValidationHistoryRepository, make_history


def test_select_latest_entry_picks_latest_timestamp() -> None:
    older = make_history(1, processed_at=NOW - timedelta(days=2))
    newer = make_history(2, processed_at=NOW - timedelta(days=1))

    assert select_latest_entry([newer, older]) is newer
    assert select_latest_entry([older, newer]) is newer


def test_select_latest_entry_keeps_first_on_tie() -> None:
    first = make_history(1, processed_at=NOW)
    second = make_history(2, processed_at=NOW)

    assert select_latest_entry([first, second]) is first


def test_select_latest_entry_of_nothing() -> None:
    assert select_latest_entry([]) is None


@pytest.mark.parametrize("status", ["manual_review", "rejected"])
def test_non_approved_status_fails_regardless_of_score(status: str) -> None:
    with pytest.raises(ValidationStatusError, match=status):
        ensure_eligible(make_history(status=status, score=100), threshold=75)


def test_score_below_threshold_fails_naming_both_numbers() -> None:
    with pytest.raises(ValidationScoreError) as exc:
        ensure_eligible(make_history(score=74), threshold=75)

    assert "74" in str(exc.value)
    assert "75" in str(exc.value)


def test_score_at_threshold_passes() -> None:
    ensure_eligible(make_history(score=75), threshold=75)


def test_gate_requires_history() -> None:
    gate = ApprovalEligibilityGate(FakeValidationHistoryRepository())

    with pytest.raises(MissingValidationHistoryError, match="no validation history"):
        gate.check(1, threshold=75)


def test_gate_uses_latest_entry_only() -> None:
    history = FakeValidationHistoryRepository(
        [
            make_history(1, status="approved", score=95, processed_at=NOW - timedelta(days=3)),
            make_history(2, status="manual_review", score=60, processed_at=NOW),
            make_history(3, listing_id=2, status="approved", score=99, processed_at=NOW),
        ]
    )
    gate = ApprovalEligibilityGate(history)

    with pytest.raises(ApprovalEligibilityError, match="'manual_review'"):
        gate.check(1, threshold=75)
    assert gate.check(2, threshold=75).id == 3
