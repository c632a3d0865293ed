from __future__ import annotations

import pytest

from textedit_engine.buffer import apply_edits_to_text, apply_text_edit
from textedit_engine.errors import (
    EditValidationError,
    InvalidStartLineError,
    OverlappingEditsError,
)
from textedit_engine.protocol import TextEdit


def replace(
    start: tuple[int, int], end: tuple[int, int], text: str
) -> TextEdit:
    return TextEdit.replace(start, end, text)


def test_single_line_replacement() -> None:
    result = apply_text_edit(["abc", "def"], replace((0, 1), (0, 2), "X"))

    assert result == ("aXc", "def")


def test_deleting_line_break_joins_lines() -> None:
    result = apply_text_edit(["abc", "def"], replace((0, 3), (1, 0), ""))

    assert result == ("abcdef",)


def test_multiline_text_replaces_line_content() -> None:
    result = apply_text_edit(["one", "two", "three"], replace((1, 0), (1, 3), "a\nb"))

    assert result == ("one", "a", "b", "three")


def test_multiline_text_within_one_line_splits_it() -> None:
    result = apply_text_edit(["hello world"], replace((0, 5), (0, 6), "\n"))

    assert result == ("hello", "world")


def test_multiline_text_across_lines_keeps_prefix_and_suffix() -> None:
    result = apply_text_edit(
        ["one", "two", "three"], replace((0, 1), (2, 2), "X\nY\nZ")
    )

    assert result == ("oX", "Y", "Zree")


def test_multiline_replacement_reaching_last_line_adds_no_empty_line() -> None:
    result = apply_text_edit(["keep", "old", "tail"], replace((1, 0), (2, 4), "a\nb"))

    assert result == ("keep", "a", "b")


def test_insertion_at_start_of_line() -> None:
    result = apply_text_edit(["abc"], TextEdit.insert((0, 0), "x"))

    assert result == ("xabc",)


def test_deleting_all_content_of_a_line_removes_the_line() -> None:
    result = apply_text_edit(["a", "b", "c"], TextEdit.delete((1, 0), (1, 1)))

    assert result == ("a", "c")


def test_partial_delete_keeps_remaining_text() -> None:
    result = apply_text_edit(["abcdef"], TextEdit.delete((0, 1), (0, 4)))

    assert result == ("aef",)


def test_end_line_past_eof_is_clamped() -> None:
    result = apply_text_edit(["a", "b"], TextEdit.delete((1, 0), (10, 5)))

    assert result == ("a",)


def test_columns_past_line_end_are_clamped() -> None:
    result = apply_text_edit(["abc", "def"], TextEdit.insert((0, 99), "!"))

    assert result == ("abc!", "def")


def test_replacement_line_breaks_are_normalized() -> None:
    result = apply_text_edit(["ab"], TextEdit.insert((0, 1), "x\r\ny\rz"))

    assert result == ("ax", "y", "zb")


def test_start_line_outside_document_is_rejected() -> None:
    with pytest.raises(InvalidStartLineError) as excinfo:
        apply_text_edit(["only"], TextEdit.insert((1, 0), "x"))

    assert excinfo.value.line == 1
    assert excinfo.value.line_count == 1
    assert isinstance(excinfo.value, EditValidationError)


def test_input_lines_are_not_mutated() -> None:
    lines = ["abc", "def"]

    apply_text_edit(lines, replace((0, 0), (1, 3), "zzz"))

    assert lines == ["abc", "def"]


def test_batch_applies_bottom_up_against_one_snapshot() -> None:
    text = "alpha\nbeta\ngamma\n"
    edits = [
        TextEdit.insert((0, 0), "first\n"),
        replace((1, 0), (1, 4), "BETA"),
        TextEdit.insert((2, 5), "!"),
    ]

    assert apply_edits_to_text(text, edits) == "first\nalpha\nBETA\ngamma!\n"


def test_batch_with_touching_edits_is_rejected() -> None:
    edits = [replace((0, 0), (0, 2), "x"), replace((0, 2), (0, 3), "y")]

    with pytest.raises(OverlappingEditsError) as excinfo:
        apply_edits_to_text("abcdef", edits)

    assert (excinfo.value.first, excinfo.value.second) == (0, 1)


def test_empty_batch_returns_text_unchanged() -> None:
    assert apply_edits_to_text("a\r\nb", []) == "a\r\nb"
