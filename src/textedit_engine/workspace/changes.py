"""Dispatch document changes and whole workspace edits."""

from __future__ import annotations

import errno
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from textedit_engine.errors import (
    DirectoryNotEmptyError,
    EditEngineError,
    FileOperationError,
    InvalidEditError,
    TargetExistsError,
    WorkspaceEditError,
)
from textedit_engine.protocol import (
    CreateFile,
    DeleteFile,
    DocumentChange,
    RenameFile,
    TextDocumentEdit,
    TextEdit,
    WorkspaceEdit,
    uri_to_path,
)
from textedit_engine.runtime import telemetry
from textedit_engine.runtime.settings import EngineSettings, resolve_settings

from .files import apply_text_edits
from .fs import FileSystem, LocalFileSystem

ChangeHandler = Callable[[DocumentChange, FileSystem, EngineSettings], None]

_NOT_EMPTY_ERRNOS = frozenset({errno.ENOTEMPTY, errno.EEXIST})


@dataclass(slots=True)
class WorkspaceEditResult:
    """Summaries of the operations a workspace edit completed, in order."""

    applied: List[str] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.applied)


def _exists(fs: FileSystem, path: str, *, phase: str) -> bool:
    try:
        return fs.exists(path)
    except OSError as exc:
        raise FileOperationError(phase, path, exc) from exc


def _create_file(change: CreateFile, fs: FileSystem, settings: EngineSettings) -> None:
    path = uri_to_path(change.uri)
    options = change.options
    if not options.overwrite and _exists(fs, path, phase="create"):
        if options.ignore_if_exists:
            telemetry.record_event(
                "workspace.create_skipped", level="debug", data={"path": path}
            )
            return
        if not settings.create_overwrites:
            raise TargetExistsError(path, operation="create")
    try:
        fs.write_file(path, b"", mode=settings.file_mode)
    except OSError as exc:
        raise FileOperationError("create", path, exc) from exc


def _delete_file(change: DeleteFile, fs: FileSystem, settings: EngineSettings) -> None:
    del settings
    path = uri_to_path(change.uri)
    options = change.options
    if options.ignore_if_not_exists and not _exists(fs, path, phase="delete"):
        return
    try:
        if options.recursive:
            fs.remove_tree(path)
        else:
            fs.remove(path)
    except OSError as exc:
        if not options.recursive and exc.errno in _NOT_EMPTY_ERRNOS:
            raise DirectoryNotEmptyError(path) from exc
        raise FileOperationError("delete", path, exc) from exc


def _rename_file(change: RenameFile, fs: FileSystem, settings: EngineSettings) -> None:
    del settings
    old_path = uri_to_path(change.old_uri)
    new_path = uri_to_path(change.new_uri)
    options = change.options
    if not options.overwrite and _exists(fs, new_path, phase="rename"):
        if options.ignore_if_exists:
            return
        raise TargetExistsError(new_path, operation="rename")
    try:
        fs.rename(old_path, new_path)
    except OSError as exc:
        raise FileOperationError("rename", old_path, exc) from exc


def _normalize_edits(change: TextDocumentEdit) -> List[TextEdit]:
    edits: List[TextEdit] = []
    for index, edit in enumerate(change.edits):
        try:
            edits.append(edit.as_text_edit())
        except InvalidEditError as exc:
            raise InvalidEditError(
                f"invalid edit {index}: {exc}", edit_index=index
            ) from exc
    return edits


def _edit_document(
    change: TextDocumentEdit, fs: FileSystem, settings: EngineSettings
) -> None:
    apply_text_edits(
        change.text_document.uri, _normalize_edits(change), fs=fs, settings=settings
    )


_CHANGE_HANDLERS: Dict[type, ChangeHandler] = {
    CreateFile: _create_file,  # type: ignore[dict-item]
    DeleteFile: _delete_file,  # type: ignore[dict-item]
    RenameFile: _rename_file,  # type: ignore[dict-item]
    TextDocumentEdit: _edit_document,  # type: ignore[dict-item]
}


def apply_document_change(
    change: DocumentChange,
    *,
    fs: Optional[FileSystem] = None,
    settings: Optional[EngineSettings] = None,
) -> None:
    """Apply one create/delete/rename/text-edit change.

    Policy refusals raise ``PreconditionError`` subclasses; filesystem
    failures raise ``FileOperationError`` naming the phase.
    """

    handler = _CHANGE_HANDLERS.get(type(change))
    if handler is None:
        raise TypeError(f"Unsupported document change type {type(change).__name__}")
    telemetry.record_event(
        "workspace.document_change", level="debug", data=change.to_dict()
    )
    handler(
        change,
        fs if fs is not None else LocalFileSystem(),
        resolve_settings(settings),
    )


def _plan_steps(
    edit: WorkspaceEdit, fs: FileSystem, settings: EngineSettings
) -> List[Tuple[str, Callable[[], object]]]:
    steps: List[Tuple[str, Callable[[], object]]] = []
    for uri, edits in edit.changes.items():
        steps.append(
            (
                f"edit {uri} ({len(edits)} edits)",
                lambda uri=uri, edits=edits: apply_text_edits(
                    uri, edits, fs=fs, settings=settings
                ),
            )
        )
    for change in edit.document_changes:
        steps.append(
            (
                change.summary,
                lambda change=change: apply_document_change(
                    change, fs=fs, settings=settings
                ),
            )
        )
    return steps


def apply_workspace_edit(
    edit: WorkspaceEdit,
    *,
    fs: Optional[FileSystem] = None,
    settings: Optional[EngineSettings] = None,
) -> WorkspaceEditResult:
    """Apply ``changes`` groups first, then ``document_changes`` in order.

    The first failure stops the sequence and raises ``WorkspaceEditError``.
    Steps that already completed stay applied; there is no rollback across
    files.
    """

    filesystem = fs if fs is not None else LocalFileSystem()
    config = resolve_settings(settings)
    result = WorkspaceEditResult()
    steps = _plan_steps(edit, filesystem, config)

    with telemetry.span(
        "workspace::apply_workspace_edit",
        edit_count=len(steps),
        extra={
            "changes": len(edit.changes),
            "document_changes": len(edit.document_changes),
        },
    ):
        for step, (label, run) in enumerate(steps):
            try:
                run()
            except EditEngineError as exc:
                telemetry.record_event(
                    "workspace.edit_failed",
                    level="error",
                    data={
                        "step": step,
                        "operation": label,
                        "completed": result.count,
                        "reason": str(exc),
                    },
                )
                raise WorkspaceEditError(
                    f"failed to apply {label}: {exc}",
                    step=step,
                    completed=result.applied,
                    error=exc,
                ) from exc
            result.applied.append(label)
    return result


__all__ = ["WorkspaceEditResult", "apply_document_change", "apply_workspace_edit"]
