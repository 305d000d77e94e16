"""Tests for text spans and atomic edit application."""

from __future__ import annotations

import pytest

from scribe.engine.errors import TextChangeError
from scribe.engine.text import (
    TextChange,
    TextSpan,
    apply_text_changes,
    line_prefix,
    offset_of,
)
from scribe.engine.workspace import Workspace


class TestTextSpan:
    def test_from_bounds(self):
        span = TextSpan.from_bounds(10, 15)
        assert span.start == 10
        assert span.length == 5
        assert span.end == 15

    def test_empty_span(self):
        assert TextSpan(7).is_empty
        assert not TextSpan(7, 1).is_empty

    def test_negative_length_rejected(self):
        with pytest.raises(ValueError):
            TextSpan(3, -1)

    def test_contains_is_half_open(self):
        span = TextSpan(2, 3)
        assert span.contains(2)
        assert span.contains(4)
        assert not span.contains(5)


class TestApplyTextChanges:
    def test_changes_apply_regardless_of_order(self):
        text = "alpha beta gamma"
        changes = [
            TextChange(TextSpan(11, 5), "GAMMA"),
            TextChange(TextSpan(0, 5), "ALPHA"),
        ]
        assert apply_text_changes(text, changes) == "ALPHA beta GAMMA"

    def test_insertion_at_end(self):
        assert apply_text_changes("abc", [TextChange(TextSpan(3), "d")]) == "abcd"

    def test_overlapping_changes_rejected(self):
        with pytest.raises(TextChangeError):
            apply_text_changes(
                "abcdef",
                [TextChange(TextSpan(0, 3), "x"), TextChange(TextSpan(2, 2), "y")],
            )

    def test_two_insertions_at_one_offset_rejected(self):
        with pytest.raises(TextChangeError):
            apply_text_changes(
                "abc",
                [TextChange(TextSpan(1), "x"), TextChange(TextSpan(1), "y")],
            )

    def test_out_of_range_rejected(self):
        with pytest.raises(TextChangeError):
            apply_text_changes("abc", [TextChange(TextSpan(2, 5), "x")])

    def test_rejected_batch_leaves_buffer_untouched(self):
        buffer = Workspace("ws").open_buffer("hello world")
        with pytest.raises(TextChangeError):
            buffer.apply_changes([
                TextChange(TextSpan(0, 5), "howdy"),
                TextChange(TextSpan(3, 4), "overlap"),
            ])
        assert buffer.text == "hello world"


def test_offset_of_uses_one_based_lines():
    text = "first\nsecond\nthird"
    assert offset_of(text, 1, 0) == 0
    assert offset_of(text, 2, 3) == 9
    assert text[offset_of(text, 3, 0):] == "third"


def test_line_prefix():
    text = "class A:\n    x = 1\n"
    assert line_prefix(text, 13) == "    "
    assert line_prefix(text, 0) == ""
