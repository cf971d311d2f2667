from __future__ import annotations

import pytest

from mentions import AnchorRules, InvalidTemplateError, resolve_anchor
from mentions.templates import DEFAULT_PUNCTUATION


def test_numeric_position_inserts_after_index() -> None:
    assert resolve_anchor("hello", AnchorRules(anchor_position=0)) == 1
    assert resolve_anchor("hello", AnchorRules(anchor_position=2)) == 3


def test_numeric_position_is_clamped() -> None:
    assert resolve_anchor("hello", AnchorRules(anchor_position=100)) == 5
    assert resolve_anchor("hello", AnchorRules(anchor_position=-5)) == 0
    assert resolve_anchor("hello", AnchorRules(anchor_position=-1)) == 0


def test_numeric_position_never_splits_surrogate_pair() -> None:
    # "a" + ghost emoji (2 code units) + "b"; index 1 + 1 = 2 is mid-pair.
    assert resolve_anchor("a\U0001F47Bb", AnchorRules(anchor_position=1)) == 3


def test_anchor_characters_use_last_occurrence() -> None:
    message = "One. Two! Three"
    assert resolve_anchor(message, AnchorRules(anchor_characters=frozenset(".!"))) == 9
    assert (
        resolve_anchor(message, AnchorRules(anchor_characters=frozenset(".!"), anchor_position="before"))
        == 8
    )


def test_anchor_characters_accept_plain_string() -> None:
    assert resolve_anchor("a,b,c", AnchorRules(anchor_characters=",")) == 4


def test_anchor_character_index_counts_utf16() -> None:
    message = "\U0001F47B hi!"
    assert resolve_anchor(message, AnchorRules(anchor_characters=frozenset("!"))) == 6


def test_punctuation_used_when_no_anchor_characters() -> None:
    message = "Done… then more"
    assert resolve_anchor(message, AnchorRules(punctuation=DEFAULT_PUNCTUATION)) == 5
    assert resolve_anchor(message, AnchorRules(punctuation=lambda ch: ch == "t")) == 7


def test_anchor_characters_take_precedence_over_punctuation() -> None:
    rules = AnchorRules(anchor_characters=frozenset(":"), punctuation=".")
    assert resolve_anchor("cc: you.", rules) == 3


def test_fallback_when_no_anchor_found() -> None:
    assert resolve_anchor("no anchor", AnchorRules(anchor_characters=frozenset("!"))) == 9
    assert (
        resolve_anchor("no anchor", AnchorRules(anchor_characters=frozenset("!"), fallback_position="start"))
        == 0
    )
    assert resolve_anchor("", AnchorRules()) == 0


def test_resolution_is_idempotent() -> None:
    rules = AnchorRules(anchor_characters=frozenset("!?"))
    message = "Really? Yes!"
    assert resolve_anchor(message, rules) == resolve_anchor(message, rules)


def test_invalid_rules_are_rejected() -> None:
    with pytest.raises(InvalidTemplateError):
        AnchorRules(anchor_position="middle")
    with pytest.raises(InvalidTemplateError):
        AnchorRules(fallback_position="nowhere")
    with pytest.raises(InvalidTemplateError):
        AnchorRules(anchor_characters=frozenset({"ab"}))
    with pytest.raises(InvalidTemplateError):
        AnchorRules(anchor_position=True)
