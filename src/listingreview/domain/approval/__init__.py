"""Approval stage: merge precedence, eligibility gate and audit diff."""

from __future__ import annotations

from .assembler import (
    ApprovalAssembler,
    MergeInput,
    MergeResult,
    apply_draft,
    build_approval_payload,
    resolve_fields,
)
from .eligibility import ApprovalEligibilityGate, ensure_eligible, select_latest_entry
from .replacements import build_replacements

__all__ = [
    "ApprovalAssembler",
    "ApprovalEligibilityGate",
    "MergeInput",
    "MergeResult",
    "apply_draft",
    "build_approval_payload",
    "build_replacements",
    "ensure_eligible",
    "resolve_fields",
    "select_latest_entry",
]
