from __future__ import annotations

from utils.tg_text import Segment, render, utf16_boundary, utf16_index, utf16_len, utf16_split


def test_utf16_len_counts_surrogate_pairs() -> None:
    assert utf16_len("") == 0
    assert utf16_len("abc") == 3
    assert utf16_len("\U0001F47B") == 2
    assert utf16_len("a\U0001F47Bb") == 4


def test_utf16_index_maps_code_units_to_str_index() -> None:
    text = "a\U0001F47Bb"
    assert utf16_index(text, 0) == 0
    assert utf16_index(text, 1) == 1
    # Inside the surrogate pair: moved forward past the emoji.
    assert utf16_index(text, 2) == 2
    assert utf16_index(text, 3) == 2
    assert utf16_index(text, 4) == 3
    assert utf16_index(text, 99) == 3


def test_utf16_boundary_and_split() -> None:
    text = "a\U0001F47Bb"
    assert utf16_boundary(text, 2) == 3
    assert utf16_split(text, 3) == ("a\U0001F47B", "b")
    assert utf16_split(text, 0) == ("", text)


def test_render_offsets_are_utf16() -> None:
    text, entities = render([Segment("\U0001F47B "), Segment("code", code=True)])
    assert text == "\U0001F47B code"
    assert entities is not None
    assert entities[0].offset == 3
    assert entities[0].length == 4


def test_render_without_code_returns_none_entities() -> None:
    text, entities = render([Segment("plain")])
    assert text == "plain"
    assert entities is None
