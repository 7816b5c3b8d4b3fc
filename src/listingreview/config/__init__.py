"""Application configuration helpers."""

from __future__ import annotations

from .env import float_env, int_env
from .errors import ConfigurationError
from .logging import configure_logging
from .review import ReviewConfig, get_review_config
from .trust import TrustConfig, get_trust_config

__all__ = [
    "ConfigurationError",
    "ReviewConfig",
    "TrustConfig",
    "configure_logging",
    "float_env",
    "get_review_config",
    "get_trust_config",
    "int_env",
]
