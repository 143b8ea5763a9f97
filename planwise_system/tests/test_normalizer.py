from __future__ import annotations

import pytest

from planwise.api.types import ListSuggestions, TextSuggestions, UnrecognizedSuggestions, decode_suggestions
from planwise.core.errors import MalformedSuggestions
from planwise.flow.normalizer import normalize, split_numbered


def test_numbered_text_becomes_three_entries() -> None:
    result = normalize("1. Buy a webcam\n2. Plan videos\n3. Upload weekly")

    assert result == ["Buy a webcam", "Plan videos", "Upload weekly"]


def test_whitespace_around_markers_is_ignored() -> None:
    text = "  \n1.   Pick a niche  \n\n2.  Record intro\n 10. Publish\n"

    assert normalize(text) == ["Pick a niche", "Record intro", "Publish"]


def test_text_without_markers_is_one_suggestion() -> None:
    assert normalize("Looks solid, ship it.") == ["Looks solid, ship it."]


def test_blank_text_gives_empty_list() -> None:
    assert normalize("") == []
    assert normalize("   \n  ") == []


def test_list_passes_through_untouched() -> None:
    items = ["  keep spacing ", "1. not re-split"]

    assert normalize(items) == items


def test_normalizing_twice_is_a_no_op() -> None:
    once = normalize("1. a\n2. b")

    assert normalize(once) == once
    assert normalize(normalize(["x", "y"])) == ["x", "y"]


@pytest.mark.parametrize("raw", [None, 42, {"text": "1. a"}, ["ok", 3]])
def test_unrecognized_shapes_raise(raw) -> None:
    with pytest.raises(MalformedSuggestions):
        normalize(raw)


def test_decode_tags_each_shape() -> None:
    assert decode_suggestions("1. a") == TextSuggestions("1. a")
    assert decode_suggestions(["a"]) == ListSuggestions(("a",))
    assert isinstance(decode_suggestions({"a": 1}), UnrecognizedSuggestions)


def test_normalize_accepts_decoded_payloads() -> None:
    assert normalize(TextSuggestions("1. a\n2. b")) == ["a", "b"]
    assert normalize(ListSuggestions(("a", "b"))) == ["a", "b"]
    with pytest.raises(MalformedSuggestions, match="dict"):
        normalize(UnrecognizedSuggestions({}))


def test_split_numbered_keeps_order() -> None:
    assert split_numbered("3. c\n1. a\n2. b") == ["c", "a", "b"]


def test_only_ascii_digits_start_a_marker() -> None:
    text = "1. Post on day ٣. then rest\n2. Review"

    assert normalize(text) == ["Post on day ٣. then rest", "Review"]


def test_non_breaking_space_after_marker_still_splits() -> None:
    assert normalize("1.\u00a0a\n2.\u00a0b") == ["a", "b"]


def test_tuple_of_strings_is_a_sequence() -> None:
    assert decode_suggestions(("a", "b")) == ListSuggestions(("a", "b"))
    assert normalize(("a", " b ")) == ["a", " b "]
