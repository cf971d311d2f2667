"""Batching limits and their environment-variable configuration."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Final

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

# Telegram Bot API hard limit for message text (UTF-16 code units).
DEFAULT_MAX_TEXT_LENGTH: Final = 4096
DEFAULT_MAX_RECIPIENTS_PER_MESSAGE: Final = 100

OVERFLOW_SPLIT: Final = "split"
OVERFLOW_ERROR: Final = "error"
OVERFLOW_POLICIES: Final = frozenset({OVERFLOW_SPLIT, OVERFLOW_ERROR})


@dataclass(frozen=True)
class Limits:
    """Per-message caps applied while batching recipients."""

    max_recipients_per_message: int = DEFAULT_MAX_RECIPIENTS_PER_MESSAGE
    max_text_length: int = DEFAULT_MAX_TEXT_LENGTH
    overflow_policy: str = OVERFLOW_SPLIT

    def __post_init__(self) -> None:
        _require_positive_int("max_recipients_per_message", self.max_recipients_per_message)
        _require_positive_int("max_text_length", self.max_text_length)
        if self.overflow_policy not in OVERFLOW_POLICIES:
            raise ConfigurationError(
                f"overflow_policy must be one of {sorted(OVERFLOW_POLICIES)}, got {self.overflow_policy!r}"
            )

    @property
    def split_allowed(self) -> bool:
        return self.overflow_policy == OVERFLOW_SPLIT

    @classmethod
    def from_env(cls) -> Limits:
        """Build limits from GHOST_* environment variables (unset means default)."""
        return cls(
            max_recipients_per_message=_env_int(
                "GHOST_MAX_PER_MESSAGE", DEFAULT_MAX_RECIPIENTS_PER_MESSAGE
            ),
            max_text_length=_env_int("GHOST_MAX_TEXT_LENGTH", DEFAULT_MAX_TEXT_LENGTH),
            overflow_policy=(os.getenv("GHOST_OVERFLOW_POLICY") or OVERFLOW_SPLIT).strip().lower(),
        )


def _require_positive_int(name: str, value: object) -> None:
    # bool is an int subclass; True is not a meaningful limit.
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    if value < 1:
        raise ConfigurationError(f"{name} must be >= 1, got {value}")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None
