"""Review and approval policy configuration."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Final

from .env import float_env, int_env
from .errors import ConfigurationError

DEFAULT_APPROVAL_THRESHOLD: Final[int] = 75
DEFAULT_RECENCY_DAYS: Final[int] = 90
DEFAULT_TRUSTED_THRESHOLD: Final[float] = 0.8


@dataclass(frozen=True, slots=True)
class ReviewConfig:
    """Policy knobs shared by the combination and approval stages."""

    approval_threshold: int = DEFAULT_APPROVAL_THRESHOLD
    recency_window: timedelta = timedelta(days=DEFAULT_RECENCY_DAYS)
    trusted_threshold: float = DEFAULT_TRUSTED_THRESHOLD


def get_review_config() -> ReviewConfig:
    threshold = int_env("APPROVAL_THRESHOLD", DEFAULT_APPROVAL_THRESHOLD)
    recency_days = int_env("USER_DATA_RECENCY_DAYS", DEFAULT_RECENCY_DAYS)
    trusted_threshold = float_env("TRUSTED_THRESHOLD", DEFAULT_TRUSTED_THRESHOLD)

    if not 0 <= threshold <= 100:
        raise ConfigurationError(f"APPROVAL_THRESHOLD must be within 0-100, got {threshold}")
    if recency_days < 0:
        raise ConfigurationError(
            f"USER_DATA_RECENCY_DAYS must be non-negative, got {recency_days}"
        )
    if not 0.0 <= trusted_threshold <= 1.0:
        raise ConfigurationError(
            f"TRUSTED_THRESHOLD must be within 0-1, got {trusted_threshold}"
        )

    return ReviewConfig(
        approval_threshold=threshold,
        recency_window=timedelta(days=recency_days),
        trusted_threshold=trusted_threshold,
    )
