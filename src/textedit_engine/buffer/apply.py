"""Pure line-level edit application.

Nothing here touches the filesystem: ``apply_text_edit`` maps one line tuple
to another, ``apply_edits`` folds a validated batch over a snapshot.
"""

from __future__ import annotations

import re
from typing import Sequence, Tuple

from textedit_engine.errors import InvalidStartLineError
from textedit_engine.protocol import TextEdit

from .document import DocumentSnapshot
from .ranges import ensure_no_overlaps, sort_descending

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def _replacement(prefix: str, suffix: str, new_text: str) -> Tuple[str, ...]:
    if not new_text:
        joined = prefix + suffix
        # deleting a whole line's content removes the line itself
        return (joined,) if joined else ()

    new_lines = _LINE_BREAK.split(new_text)
    if len(new_lines) == 1:
        return (prefix + new_lines[0] + suffix,)
    return (prefix + new_lines[0], *new_lines[1:-1], new_lines[-1] + suffix)


def apply_text_edit(lines: Sequence[str], edit: TextEdit) -> Tuple[str, ...]:
    """Return ``lines`` with ``edit`` applied.

    The start line must exist. The end line and both columns are clamped to
    the document, so ranges reaching past EOF or past a line's end are
    accepted. The replacement text is split on its own line breaks and never
    carries line endings into the result.
    """

    start = edit.range.start
    end = edit.range.end
    line_count = len(lines)
    if start.line < 0 or start.line >= line_count:
        raise InvalidStartLineError(start.line, line_count)
    end_line = end.line if 0 <= end.line < line_count else line_count - 1

    start_text = lines[start.line]
    end_text = lines[end_line]
    prefix = start_text[: min(start.character, len(start_text))]
    suffix = end_text[min(end.character, len(end_text)) :]

    return (
        *lines[: start.line],
        *_replacement(prefix, suffix, edit.new_text),
        *lines[end_line + 1 :],
    )


def apply_edits(
    snapshot: DocumentSnapshot, edits: Sequence[TextEdit]
) -> DocumentSnapshot:
    """Validate ``edits`` against each other and fold them over ``snapshot``.

    Overlap is checked on the whole batch before anything is applied, then
    edits run bottom-up.
    """

    ensure_no_overlaps(edits)
    lines: Tuple[str, ...] = snapshot.lines
    for edit in sort_descending(edits):
        lines = apply_text_edit(lines, edit)
    return snapshot.replace(lines)


def apply_edits_to_text(text: str, edits: Sequence[TextEdit]) -> str:
    return apply_edits(DocumentSnapshot.from_text(text), edits).render()


__all__ = ["apply_text_edit", "apply_edits", "apply_edits_to_text"]
