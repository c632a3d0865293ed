"""Filesystem-facing orchestration: per-file edit batches and workspace edits."""

from .changes import WorkspaceEditResult, apply_document_change, apply_workspace_edit
from .files import apply_text_edits
from .fs import FileSystem, LocalFileSystem

__all__ = [
    "FileSystem",
    "LocalFileSystem",
    "apply_text_edits",
    "apply_document_change",
    "apply_workspace_edit",
    "WorkspaceEditResult",
]
