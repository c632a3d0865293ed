"""Render LSP snippet syntax down to the plain text it inserts.

Tabstops and variables expand to nothing, placeholders to their (rendered)
default, choices to their first option.
"""

from __future__ import annotations

import re

from textedit_engine.errors import InvalidEditError

_TEXT_ESCAPES = frozenset("$}\\")
_CHOICE_ESCAPES = frozenset("$}\\,|")
_NAME = re.compile(r"[0-9]+|[A-Za-z_][A-Za-z0-9_]*")


class _SnippetReader:
    def __init__(self, source: str) -> None:
        self.source = source
        self.pos = 0

    def _peek(self) -> str:
        return self.source[self.pos] if self.pos < len(self.source) else ""

    def _fail(self, message: str, offset: int) -> InvalidEditError:
        return InvalidEditError(f"{message} at offset {offset} in snippet {self.source!r}")

    def render(self, *, nested: bool = False) -> str:
        out: list[str] = []
        while self.pos < len(self.source):
            char = self.source[self.pos]
            if char == "\\" and self.source[self.pos + 1 : self.pos + 2] in _TEXT_ESCAPES:
                out.append(self.source[self.pos + 1])
                self.pos += 2
                continue
            if char == "}" and nested:
                return "".join(out)
            if char == "$":
                out.append(self._dollar())
                continue
            out.append(char)
            self.pos += 1
        if nested:
            raise self._fail("unterminated placeholder", len(self.source))
        return "".join(out)

    def _dollar(self) -> str:
        start = self.pos
        self.pos += 1
        match = _NAME.match(self.source, self.pos)
        if match:
            self.pos = match.end()
            return ""
        if self._peek() != "{":
            return "$"

        self.pos += 1
        match = _NAME.match(self.source, self.pos)
        if match is None:
            raise self._fail("invalid snippet construct", start)
        self.pos = match.end()
        is_tabstop = match.group().isdigit()

        marker = self._peek()
        if marker == "}":
            self.pos += 1
            return ""
        if marker == ":":
            self.pos += 1
            text = self.render(nested=True)
            self.pos += 1
            return text
        if marker == "|" and is_tabstop:
            self.pos += 1
            return self._choice(start)
        if marker == "/" and not is_tabstop:
            self._skip_transform(start)
            return ""
        raise self._fail("invalid snippet construct", start)

    def _choice(self, start: int) -> str:
        options: list[str] = []
        current: list[str] = []
        while self.pos < len(self.source):
            char = self.source[self.pos]
            if char == "\\" and self.source[self.pos + 1 : self.pos + 2] in _CHOICE_ESCAPES:
                current.append(self.source[self.pos + 1])
                self.pos += 2
                continue
            if char == ",":
                options.append("".join(current))
                current = []
                self.pos += 1
                continue
            if char == "|" and self.source[self.pos + 1 : self.pos + 2] == "}":
                options.append("".join(current))
                self.pos += 2
                return options[0]
            current.append(char)
            self.pos += 1
        raise self._fail("unterminated choice", start)

    def _skip_transform(self, start: int) -> None:
        # the format part may hold its own ${...} references
        depth = 0
        while self.pos < len(self.source):
            char = self.source[self.pos]
            if char == "\\":
                self.pos += 2
                continue
            if char == "$" and self.source[self.pos + 1 : self.pos + 2] == "{":
                depth += 1
                self.pos += 2
                continue
            self.pos += 1
            if char == "}":
                if depth == 0:
                    return
                depth -= 1
        raise self._fail("unterminated variable transform", start)


def render_snippet(value: str) -> str:
    """Return the text a client would insert for ``value`` with no user input."""

    return _SnippetReader(value).render()


__all__ = ["render_snippet"]
