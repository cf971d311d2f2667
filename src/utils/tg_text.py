"""Small helpers for building Telegram messages with entities.

We prefer entities over Markdown/HTML parse modes to avoid escaping issues.
Telegram measures entity offsets and lengths in UTF-16 code units, while
Python strings index code points, so anything that computes offsets goes
through the helpers below.
"""

from __future__ import annotations

from dataclasses import dataclass

from telegram import MessageEntity


def utf16_len(text: str) -> int:
    """Length in UTF-16 code units (Telegram entity offsets use this)."""
    return len(text.encode("utf-16-le")) // 2


def utf16_index(text: str, units: int) -> int:
    """Map a UTF-16 code-unit offset to a Python string index.

    Offsets that fall inside a surrogate pair are moved forward to the end of
    that character. Offsets past the end map to len(text).
    """
    if units <= 0:
        return 0

    consumed = 0
    for index, ch in enumerate(text):
        if consumed >= units:
            return index
        consumed += 2 if ord(ch) > 0xFFFF else 1
    return len(text)


def utf16_boundary(text: str, units: int) -> int:
    """Clamp a code-unit offset into [0, utf16_len(text)] on a character boundary."""
    return utf16_len(text[: utf16_index(text, units)])


def utf16_split(text: str, units: int) -> tuple[str, str]:
    """Split text at a code-unit offset (see utf16_index for rounding)."""
    index = utf16_index(text, units)
    return text[:index], text[index:]


@dataclass(frozen=True)
class Segment:
    text: str
    code: bool = False


def render(segments: list[Segment]) -> tuple[str, list[MessageEntity] | None]:
    """Render segments into text + entities list (or None)."""
    parts: list[str] = []
    entities: list[MessageEntity] = []
    offset = 0

    for seg in segments:
        parts.append(seg.text)
        seg_len = utf16_len(seg.text)
        if seg.code and seg_len:
            entities.append(MessageEntity(type="code", offset=offset, length=seg_len))
        offset += seg_len

    return "".join(parts), (entities or None)
