"""Find the UTF-16 code-unit index at which markers go into a message."""

from __future__ import annotations

from typing import Callable

from utils.tg_text import utf16_boundary, utf16_len

from .templates import ANCHOR_BEFORE, FALLBACK_START, AnchorRules, Punctuation


def resolve_anchor(message: str, rules: AnchorRules) -> int:
    """Return the insertion index (0 <= index <= utf16_len(message)).

    Resolution order, first match wins:
    1. numeric anchor_position: right after that index, clamped to the message;
    2. anchor_characters: the last one in the message;
    3. punctuation: the last matching character;
    4. fallback_position: start or end of the message.
    """
    total = utf16_len(message)

    position = rules.anchor_position
    if isinstance(position, int) and not isinstance(position, bool):
        return utf16_boundary(message, min(max(position + 1, 0), total))

    before = position == ANCHOR_BEFORE

    found: tuple[int, int] | None = None
    if rules.anchor_characters:
        found = _rscan(message, rules.anchor_characters.__contains__)
    elif rules.punctuation:
        found = _rscan(message, _as_predicate(rules.punctuation))

    if found is not None:
        start, end = found
        return start if before else end

    return 0 if rules.fallback_position == FALLBACK_START else total


def _as_predicate(punctuation: Punctuation) -> Callable[[str], bool]:
    if isinstance(punctuation, str):
        return frozenset(punctuation).__contains__
    assert punctuation is not None
    return punctuation


def _rscan(message: str, matches: Callable[[str], bool]) -> tuple[int, int] | None:
    """Scan from the end; return (start, end) code units of the last match."""
    end = utf16_len(message)
    for ch in reversed(message):
        start = end - (2 if ord(ch) > 0xFFFF else 1)
        if matches(ch):
            return start, end
        end = start
    return None
