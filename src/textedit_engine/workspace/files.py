"""Apply a batch of text edits to one file on disk."""

from __future__ import annotations

from typing import Optional, Sequence

from textedit_engine.buffer import CRLF, DocumentSnapshot, apply_edits
from textedit_engine.errors import FileOperationError, TextEncodingError
from textedit_engine.protocol import TextEdit, uri_to_path
from textedit_engine.runtime import telemetry
from textedit_engine.runtime.settings import EngineSettings, resolve_settings

from .fs import FileSystem, LocalFileSystem


def _line_ending_name(snapshot: DocumentSnapshot) -> str:
    return "crlf" if snapshot.line_ending == CRLF else "lf"


def apply_text_edits(
    uri: str,
    edits: Sequence[TextEdit],
    *,
    fs: Optional[FileSystem] = None,
    settings: Optional[EngineSettings] = None,
) -> DocumentSnapshot:
    """Read ``uri``, apply ``edits`` against that one snapshot, write it back.

    The batch is all-or-nothing for this file: a validation error (overlap,
    bad start line, text the configured encoding cannot represent) is raised
    before the write and leaves the file untouched. Read and write failures
    surface as ``FileOperationError``. Returns the snapshot that was written.
    """

    filesystem = fs if fs is not None else LocalFileSystem()
    config = resolve_settings(settings)
    path = uri_to_path(uri)

    with telemetry.span(
        "workspace::apply_text_edits", path=path, edit_count=len(edits)
    ) as handle:
        try:
            raw = filesystem.read_file(path)
        except OSError as exc:
            raise FileOperationError("read", path, exc) from exc

        try:
            snapshot = DocumentSnapshot.from_bytes(raw, encoding=config.encoding)
        except UnicodeDecodeError as exc:
            raise TextEncodingError(
                path, config.encoding, exc, action="decoded"
            ) from exc
        handle.describe_snapshot(
            line_ending=_line_ending_name(snapshot), line_count=snapshot.line_count
        )

        updated = apply_edits(snapshot, edits)
        try:
            data = updated.to_bytes(encoding=config.encoding)
        except UnicodeEncodeError as exc:
            raise TextEncodingError(path, config.encoding, exc) from exc

        try:
            filesystem.write_file(path, data, mode=config.file_mode)
        except OSError as exc:
            raise FileOperationError("write", path, exc) from exc
    return updated


__all__ = ["apply_text_edits"]
