from __future__ import annotations

import pytest

from mentions import (
    AnchoredTemplate,
    ConfigurationError,
    FixedAffixTemplate,
    InvalidTemplateError,
    Limits,
    build_payloads,
    template_from_fields,
)
from mentions.templates import DEFAULT_PUNCTUATION


def test_limits_defaults() -> None:
    limits = Limits()
    assert limits.max_recipients_per_message == 100
    assert limits.max_text_length == 4096
    assert limits.overflow_policy == "split"
    assert limits.split_allowed is True


@pytest.mark.parametrize(
    "kwargs",
    [
        {"max_recipients_per_message": 0},
        {"max_text_length": -1},
        {"max_text_length": 1.5},
        {"max_recipients_per_message": True},
        {"overflow_policy": "truncate"},
    ],
)
def test_limits_reject_invalid_values(kwargs: dict) -> None:
    with pytest.raises(ConfigurationError):
        Limits(**kwargs)


def test_limits_from_env(monkeypatch: pytest.MonkeyPatch, clean_ghost_env: None) -> None:
    assert Limits.from_env() == Limits()

    monkeypatch.setenv("GHOST_MAX_PER_MESSAGE", "5")
    monkeypatch.setenv("GHOST_MAX_TEXT_LENGTH", "200")
    monkeypatch.setenv("GHOST_OVERFLOW_POLICY", "ERROR")
    assert Limits.from_env() == Limits(
        max_recipients_per_message=5, max_text_length=200, overflow_policy="error"
    )


def test_limits_from_env_rejects_garbage(monkeypatch: pytest.MonkeyPatch, clean_ghost_env: None) -> None:
    monkeypatch.setenv("GHOST_MAX_PER_MESSAGE", "lots")
    with pytest.raises(ConfigurationError):
        Limits.from_env()


def test_configuration_errors_are_value_errors() -> None:
    with pytest.raises(ValueError):
        Limits(overflow_policy="nope")


def test_template_from_fields_infers_mode() -> None:
    fixed = template_from_fields(prefix="hi ")
    assert fixed == FixedAffixTemplate(prefix="hi ", suffix="")

    anchored = template_from_fields(message="Hello.", anchor_characters="!", anchor_position="before")
    assert isinstance(anchored, AnchoredTemplate)
    assert anchored.rules.anchor_characters == frozenset("!")
    assert anchored.rules.anchor_position == "before"
    assert anchored.rules.punctuation == DEFAULT_PUNCTUATION


def test_anchor_options_require_message() -> None:
    with pytest.raises(InvalidTemplateError):
        template_from_fields(prefix="x", insert_on_own_line=True)


def test_anchored_template_default_rules_use_punctuation() -> None:
    assert AnchoredTemplate(message="x").rules.punctuation == DEFAULT_PUNCTUATION


@pytest.mark.parametrize(
    "fields",
    [
        {"prefix": "hi ", "anchor_position": 3},
        {"prefix": "hi ", "anchor_position": "before"},
        {"prefix": "hi", "fallback_position": "nowhere"},
        {"prefix": "hi", "fallback_position": "start"},
        {"suffix": "!", "punctuation": ".!"},
        {"punctuation": lambda ch: ch == "."},
    ],
)
def test_anchor_only_fields_rejected_without_message(fields: dict) -> None:
    with pytest.raises(InvalidTemplateError):
        template_from_fields(**fields)


def test_anchor_only_fields_rejected_by_build_payloads() -> None:
    with pytest.raises(InvalidTemplateError):
        build_payloads(1, [1], {"prefix": "hi ", "anchor_position": 3})


def test_invalid_placement_values_fail_fast_with_message() -> None:
    with pytest.raises(InvalidTemplateError):
        template_from_fields(message="Hello.", fallback_position="nowhere")
    with pytest.raises(InvalidTemplateError):
        template_from_fields(message="Hello.", anchor_position="middle")


def test_empty_message_counts_as_absent() -> None:
    assert template_from_fields(message="") == FixedAffixTemplate()
    assert template_from_fields(message="", prefix="x") == FixedAffixTemplate(prefix="x")
    (p,) = build_payloads(1, [9], {"message": "", "prefix": "x"})
    assert p.text.startswith("x")
    assert [m.offset for m in p.mentions] == [1]


def test_empty_punctuation_disables_default() -> None:
    anchored = template_from_fields(message="One. Two", punctuation="")
    assert isinstance(anchored, AnchoredTemplate)
    (p,) = build_payloads(1, [1], anchored)
    assert [m.offset for m in p.mentions] == [len("One. Two")]
