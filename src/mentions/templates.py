"""Message templates: fixed prefix/suffix, or a free-form message with an anchor."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Final, Union

from .errors import InvalidTemplateError
from .markers import DEFAULT_MARKERS

ANCHOR_BEFORE: Final = "before"
ANCHOR_AFTER: Final = "after"

FALLBACK_START: Final = "start"
FALLBACK_END: Final = "end"

# Sentence terminators used when no explicit anchor characters are given.
DEFAULT_PUNCTUATION: Final = ".!?…"

Punctuation = Union[str, Callable[[str], bool], None]


@dataclass(frozen=True)
class AnchorRules:
    """Where to insert the marker run into a free-form message.

    anchor_position is either a code-unit index (markers go right after it)
    or ANCHOR_BEFORE / ANCHOR_AFTER, which place the run relative to the last
    anchor character found in the message.
    """

    anchor_characters: frozenset[str] = frozenset()
    anchor_position: int | str = ANCHOR_AFTER
    fallback_position: str = FALLBACK_END
    punctuation: Punctuation = None

    def __post_init__(self) -> None:
        # A plain string counts as a set of characters.
        chars = frozenset(self.anchor_characters)
        if any(not isinstance(c, str) or len(c) != 1 for c in chars):
            raise InvalidTemplateError("anchor_characters must be single characters")
        object.__setattr__(self, "anchor_characters", chars)

        position = self.anchor_position
        if isinstance(position, bool) or not isinstance(position, (int, str)):
            raise InvalidTemplateError(f"anchor_position must be an int or a side, got {position!r}")
        if isinstance(position, str) and position not in (ANCHOR_BEFORE, ANCHOR_AFTER):
            raise InvalidTemplateError(
                f"anchor_position must be {ANCHOR_BEFORE!r} or {ANCHOR_AFTER!r}, got {position!r}"
            )

        if self.fallback_position not in (FALLBACK_START, FALLBACK_END):
            raise InvalidTemplateError(
                f"fallback_position must be {FALLBACK_START!r} or {FALLBACK_END!r}, "
                f"got {self.fallback_position!r}"
            )

        if self.punctuation is not None and not (
            isinstance(self.punctuation, str) or callable(self.punctuation)
        ):
            raise InvalidTemplateError("punctuation must be a string of characters or a predicate")


@dataclass(frozen=True)
class FixedAffixTemplate:
    """prefix + marker run + suffix."""

    prefix: str = ""
    suffix: str = ""
    marker_character: str | None = None
    marker_candidates: tuple[str, ...] = DEFAULT_MARKERS


@dataclass(frozen=True)
class AnchoredTemplate:
    """A full message body with the marker run spliced in at an anchor."""

    message: str
    rules: AnchorRules = field(default_factory=lambda: AnchorRules(punctuation=DEFAULT_PUNCTUATION))
    insert_on_own_line: bool = False
    trailing_line_break: bool = False
    marker_character: str | None = None
    marker_candidates: tuple[str, ...] = DEFAULT_MARKERS


Template = Union[FixedAffixTemplate, AnchoredTemplate]


def template_from_fields(
    *,
    prefix: str | None = None,
    suffix: str | None = None,
    message: str | None = None,
    marker_character: str | None = None,
    marker_candidates: tuple[str, ...] | list[str] | None = None,
    anchor_characters: Any = None,
    anchor_position: int | str | None = None,
    fallback_position: str | None = None,
    punctuation: Punctuation = None,
    insert_on_own_line: bool = False,
    trailing_line_break: bool = False,
) -> Template:
    """Build a template from loose fields, inferring the mode.

    A non-empty message without prefix/suffix gives an AnchoredTemplate;
    anything else gives a FixedAffixTemplate. Mixing the two kinds of fields
    raises InvalidTemplateError. Unset placement options get their defaults
    (after the last sentence terminator, else the end); pass punctuation=""
    to go straight to the fallback.
    """
    candidates = tuple(marker_candidates) if marker_candidates is not None else DEFAULT_MARKERS

    if message and (prefix is not None or suffix is not None):
        raise InvalidTemplateError("Template cannot set both message and prefix/suffix")

    if message:
        rules = AnchorRules(
            anchor_characters=frozenset(anchor_characters or ()),
            anchor_position=ANCHOR_AFTER if anchor_position is None else anchor_position,
            fallback_position=FALLBACK_END if fallback_position is None else fallback_position,
            punctuation=DEFAULT_PUNCTUATION if punctuation is None else punctuation,
        )
        return AnchoredTemplate(
            message=message,
            rules=rules,
            insert_on_own_line=insert_on_own_line,
            trailing_line_break=trailing_line_break,
            marker_character=marker_character,
            marker_candidates=candidates,
        )

    anchored_only = {
        "anchor_characters": anchor_characters,
        "anchor_position": anchor_position,
        "fallback_position": fallback_position,
        "punctuation": punctuation,
        "insert_on_own_line": insert_on_own_line or None,
        "trailing_line_break": trailing_line_break or None,
    }
    given = sorted(name for name, value in anchored_only.items() if value is not None)
    if given:
        raise InvalidTemplateError(f"Anchor placement options require a message: {', '.join(given)}")

    return FixedAffixTemplate(
        prefix=prefix or "",
        suffix=suffix or "",
        marker_character=marker_character,
        marker_candidates=candidates,
    )
