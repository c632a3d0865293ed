"""Overlap detection and ordering for edit batches."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from textedit_engine.errors import OverlappingEditsError
from textedit_engine.protocol import Range, TextEdit


def ranges_overlap(first: Range, second: Range) -> bool:
    """True unless one range ends strictly before the other begins.

    Ranges that touch at a single point count as overlapping, so two
    insertions at the same position conflict.
    """

    if first.start.line > second.end.line or second.start.line > first.end.line:
        return False
    if first.start.line == second.end.line and first.start.character > second.end.character:
        return False
    if second.start.line == first.end.line and second.start.character > first.end.character:
        return False
    return True


def find_overlap(edits: Sequence[TextEdit]) -> Optional[Tuple[int, int]]:
    """Return the first overlapping ``(i, j)`` pair in input order, if any."""

    for i, first in enumerate(edits):
        for j in range(i + 1, len(edits)):
            if ranges_overlap(first.range, edits[j].range):
                return i, j
    return None


def ensure_no_overlaps(edits: Sequence[TextEdit]) -> None:
    pair = find_overlap(edits)
    if pair is not None:
        raise OverlappingEditsError(*pair)


def sort_descending(edits: Sequence[TextEdit]) -> List[TextEdit]:
    """Bottom-most edit first, so earlier positions stay valid while folding."""

    return sorted(
        edits,
        key=lambda edit: (edit.range.start.line, edit.range.start.character),
        reverse=True,
    )


__all__ = ["ranges_overlap", "find_overlap", "ensure_no_overlaps", "sort_descending"]
