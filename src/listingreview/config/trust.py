"""Trust scoring constants.

These are tuning values, not environment knobs; change them deliberately.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TrustConfig:
    regular_trust: float = 0.3
    trusted_trust: float = 0.8
    owner_trust: float = 1.0

    ambassador_trust: float = 0.6
    regional_ambassador_trust: float = 0.85
    high_ambassador_trust: float = 0.9
    high_ambassador_level: int = 3

    contribution_boost_thresholds: tuple[int, ...] = (1000, 5000)
    contribution_boost_step: float = 0.1

    approved_listing_boost_thresholds: tuple[int, ...] = (2, 5, 10)
    approved_listing_boost_step: float = 0.05


def get_trust_config() -> TrustConfig:
    return TrustConfig()
