from __future__ import annotations

import pytest

from textedit_engine.buffer import CRLF, LF, DocumentSnapshot, detect_line_ending


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("a\nb\n", LF),
        ("a\r\nb\r\n", CRLF),
        ("a\nb\r\nc", CRLF),
        ("no newline", LF),
        ("", LF),
    ],
)
def test_detect_line_ending(text: str, expected: str) -> None:
    assert detect_line_ending(text) == expected


def test_from_text_strips_endings_and_records_trailing_newline() -> None:
    snapshot = DocumentSnapshot.from_text("a\r\nb\r\n")

    assert snapshot.lines == ("a", "b", "")
    assert snapshot.line_ending == CRLF
    assert snapshot.ends_with_newline is True
    assert snapshot.render() == "a\r\nb\r\n"


def test_mixed_endings_split_on_detected_style_only() -> None:
    snapshot = DocumentSnapshot.from_text("a\r\nb\nc")

    assert snapshot.lines == ("a", "b\nc")
    assert snapshot.render() == "a\r\nb\nc"


def test_empty_text_is_one_empty_line() -> None:
    snapshot = DocumentSnapshot.from_text("")

    assert snapshot.lines == ("",)
    assert snapshot.ends_with_newline is False
    assert snapshot.render() == ""


def test_render_appends_single_missing_line_ending() -> None:
    snapshot = DocumentSnapshot.from_text("one\ntwo\n").replace(["one", "two"])

    assert snapshot.render() == "one\ntwo\n"


def test_render_adds_no_ending_when_original_had_none() -> None:
    snapshot = DocumentSnapshot.from_text("one\ntwo").replace(["x", "y"])

    assert snapshot.render() == "x\ny"


def test_render_of_no_lines_keeps_trailing_newline() -> None:
    snapshot = DocumentSnapshot.from_text("gone\n").replace([])

    assert snapshot.render() == "\n"


def test_bytes_round_trip_preserves_undecodable_content() -> None:
    raw = b"caf\xe9\r\n\xff\xfe end\r\n"

    snapshot = DocumentSnapshot.from_bytes(raw)

    assert snapshot.line_ending == CRLF
    assert snapshot.to_bytes() == raw
