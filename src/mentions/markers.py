"""Invisible marker characters used as the anchor text of mentions."""

from __future__ import annotations

import logging
from typing import Final, Iterable

from utils.tg_text import utf16_len

from .errors import InvalidTemplateError

logger = logging.getLogger(__name__)

ZERO_WIDTH_SPACE: Final = "\u200b"

DEFAULT_MARKERS: Final[tuple[str, ...]] = (
    ZERO_WIDTH_SPACE,
    "\u2063",  # invisible separator
    "\u2060",  # word joiner
    "\u200c",  # zero width non-joiner
    "\u200d",  # zero width joiner
)


def select_marker(candidates: Iterable[str], *avoid_in: str | None) -> str:
    """Pick the first candidate that occurs in none of ``avoid_in``.

    Candidates that are not exactly one UTF-16 code unit are skipped. If every
    usable candidate collides, the first usable one is returned anyway and the
    caller's collision check reports it. With no usable candidates at all the
    zero-width space is used.
    """
    usable = [c for c in candidates if isinstance(c, str) and utf16_len(c) == 1]
    if not usable:
        return ZERO_WIDTH_SPACE

    texts = [t for t in avoid_in if t]
    for candidate in usable:
        if not any(candidate in t for t in texts):
            return candidate

    logger.warning(
        "All %d marker candidates occur in the template text; falling back to U+%04X",
        len(usable),
        ord(usable[0]),
    )
    return usable[0]


def ensure_marker_usable(marker: str, *texts: str) -> None:
    """Raise InvalidTemplateError unless marker is one code unit absent from texts."""
    if not isinstance(marker, str) or utf16_len(marker) != 1:
        raise InvalidTemplateError(
            f"Marker must be exactly one UTF-16 code unit, got {marker!r}"
        )
    for text in texts:
        if text and marker in text:
            raise InvalidTemplateError(
                f"Template must not already contain the marker character (U+{ord(marker):04X})"
            )
