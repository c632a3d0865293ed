"""LSP edit structures and their wire encoding."""

from .models import (
    AnnotatedTextEdit,
    ChangeAnnotation,
    CreateFile,
    CreateFileOptions,
    DeleteFile,
    DeleteFileOptions,
    DocumentChange,
    EditLike,
    OptionalVersionedTextDocumentIdentifier,
    Position,
    Range,
    RenameFile,
    RenameFileOptions,
    SnippetTextEdit,
    TextDocumentEdit,
    TextEdit,
    WorkspaceEdit,
    decode_document_change,
    decode_edit,
)
from .snippets import render_snippet
from .uris import path_to_uri, uri_to_path

__all__ = [
    "Position",
    "Range",
    "TextEdit",
    "AnnotatedTextEdit",
    "SnippetTextEdit",
    "EditLike",
    "decode_edit",
    "CreateFileOptions",
    "RenameFileOptions",
    "DeleteFileOptions",
    "CreateFile",
    "RenameFile",
    "DeleteFile",
    "OptionalVersionedTextDocumentIdentifier",
    "TextDocumentEdit",
    "DocumentChange",
    "decode_document_change",
    "ChangeAnnotation",
    "WorkspaceEdit",
    "render_snippet",
    "uri_to_path",
    "path_to_uri",
]
