from __future__ import annotations

import pytest

from textedit_engine.buffer import (
    ensure_no_overlaps,
    find_overlap,
    ranges_overlap,
    sort_descending,
)
from textedit_engine.errors import OverlappingEditsError
from textedit_engine.protocol import Range, TextEdit


@pytest.mark.parametrize(
    ("first", "second", "expected"),
    [
        (Range.of(0, 0, 0, 1), Range.of(0, 2, 0, 3), False),
        (Range.of(0, 0, 0, 1), Range.of(0, 1, 0, 2), True),
        (Range.of(0, 3, 0, 3), Range.of(0, 3, 0, 3), True),
        (Range.of(0, 0, 0, 5), Range.of(1, 0, 1, 1), False),
        (Range.of(0, 2, 2, 0), Range.of(1, 0, 1, 1), True),
        (Range.of(0, 5, 1, 0), Range.of(1, 3, 2, 0), False),
        (Range.of(0, 5, 1, 4), Range.of(1, 3, 2, 0), True),
    ],
)
def test_ranges_overlap(first: Range, second: Range, expected: bool) -> None:
    assert ranges_overlap(first, second) is expected
    assert ranges_overlap(second, first) is expected


def test_find_overlap_reports_first_pair_in_input_order() -> None:
    edits = [
        TextEdit.replace((0, 0), (0, 2), "a"),
        TextEdit.replace((3, 0), (3, 1), "b"),
        TextEdit.replace((0, 1), (0, 4), "c"),
    ]

    assert find_overlap(edits) == (0, 2)


def test_find_overlap_returns_none_for_disjoint_edits() -> None:
    edits = [
        TextEdit.insert((0, 0), "a"),
        TextEdit.insert((0, 1), "b"),
        TextEdit.insert((2, 0), "c"),
    ]

    assert find_overlap(edits) is None


def test_ensure_no_overlaps_raises_with_both_indices() -> None:
    edits = [TextEdit.insert((1, 1), "a"), TextEdit.insert((1, 1), "b")]

    with pytest.raises(OverlappingEditsError) as excinfo:
        ensure_no_overlaps(edits)

    assert excinfo.value.first == 0
    assert excinfo.value.second == 1
    assert "edit 0 and 1" in str(excinfo.value)


def test_sort_descending_orders_by_line_then_character() -> None:
    edits = [
        TextEdit.insert((0, 4), "a"),
        TextEdit.insert((2, 0), "b"),
        TextEdit.insert((0, 9), "c"),
        TextEdit.insert((1, 1), "d"),
    ]

    ordered = sort_descending(edits)

    assert [edit.new_text for edit in ordered] == ["b", "d", "c", "a"]
    assert [edit.new_text for edit in edits] == ["a", "b", "c", "d"]
