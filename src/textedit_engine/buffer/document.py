"""Whole-file snapshot used while applying one edit batch."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

LF = "\n"
CRLF = "\r\n"


def detect_line_ending(text: str) -> str:
    """Any CRLF anywhere makes the whole file CRLF; otherwise LF."""

    return CRLF if CRLF in text else LF


@dataclass(frozen=True, slots=True)
class DocumentSnapshot:
    """Line-ending-free lines plus the two file-level flags needed to rebuild
    the original byte layout.

    Mixed-ending files are split on the detected ending only, so a stray LF in
    a CRLF file stays inside its line and is written back untouched.
    """

    lines: tuple[str, ...] = ("",)
    line_ending: str = LF
    ends_with_newline: bool = False

    @classmethod
    def from_text(cls, text: str) -> "DocumentSnapshot":
        ending = detect_line_ending(text)
        return cls(
            lines=tuple(text.split(ending)),
            line_ending=ending,
            ends_with_newline=bool(text) and text.endswith(ending),
        )

    @classmethod
    def from_bytes(cls, raw: bytes, *, encoding: str = "utf-8") -> "DocumentSnapshot":
        return cls.from_text(raw.decode(encoding, errors="surrogateescape"))

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def replace(self, lines: Iterable[str]) -> "DocumentSnapshot":
        """Return a snapshot with new lines and the same file-level flags."""

        return DocumentSnapshot(
            lines=tuple(lines),
            line_ending=self.line_ending,
            ends_with_newline=self.ends_with_newline,
        )

    def render(self) -> str:
        content = self.line_ending.join(self.lines)
        if self.ends_with_newline and not content.endswith(self.line_ending):
            content += self.line_ending
        return content

    def to_bytes(self, *, encoding: str = "utf-8") -> bytes:
        return self.render().encode(encoding, errors="surrogateescape")


__all__ = ["LF", "CRLF", "detect_line_ending", "DocumentSnapshot"]
