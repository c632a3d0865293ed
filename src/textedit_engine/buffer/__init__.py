"""Line buffers, overlap checks and the pure edit applier."""

from .apply import apply_edits, apply_edits_to_text, apply_text_edit
from .document import CRLF, LF, DocumentSnapshot, detect_line_ending
from .ranges import ensure_no_overlaps, find_overlap, ranges_overlap, sort_descending

__all__ = [
    "DocumentSnapshot",
    "detect_line_ending",
    "LF",
    "CRLF",
    "apply_text_edit",
    "apply_edits",
    "apply_edits_to_text",
    "ranges_overlap",
    "find_overlap",
    "ensure_no_overlaps",
    "sort_descending",
]
