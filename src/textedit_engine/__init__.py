"""Apply LSP-style text edits and workspace edits to files on disk."""

from .buffer import DocumentSnapshot, apply_edits_to_text, apply_text_edit
from .errors import (
    DirectoryNotEmptyError,
    EditEngineError,
    EditValidationError,
    FileOperationError,
    OverlappingEditsError,
    PreconditionError,
    TargetExistsError,
    TextEncodingError,
    WorkspaceEditError,
)
from .protocol import Position, Range, TextEdit, WorkspaceEdit
from .workspace import (
    apply_document_change,
    apply_text_edits,
    apply_workspace_edit,
)

__all__ = [
    "Position",
    "Range",
    "TextEdit",
    "WorkspaceEdit",
    "DocumentSnapshot",
    "apply_text_edit",
    "apply_edits_to_text",
    "apply_text_edits",
    "apply_document_change",
    "apply_workspace_edit",
    "EditEngineError",
    "EditValidationError",
    "OverlappingEditsError",
    "PreconditionError",
    "TargetExistsError",
    "TextEncodingError",
    "DirectoryNotEmptyError",
    "FileOperationError",
    "WorkspaceEditError",
]

__version__ = "0.1.0"
