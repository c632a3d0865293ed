"""Frozen dataclasses mirroring the LSP text-edit and workspace-edit structures.

Every type decodes from the camelCase wire mapping with ``from_dict`` and
encodes back with ``to_dict``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, ClassVar, Iterable, Mapping, Optional, Sequence, Union

from textedit_engine.errors import InvalidPositionError, ProtocolDecodeError

from .snippets import render_snippet

CREATE = "create"
RENAME = "rename"
DELETE = "delete"
RESOURCE_OPERATION_KINDS = frozenset({CREATE, RENAME, DELETE})


def _expect_mapping(data: Any, path: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ProtocolDecodeError(
            f"expected an object, got {type(data).__name__}", path=path
        )
    return data


def _require(data: Mapping[str, Any], key: str, path: str) -> Any:
    try:
        return data[key]
    except KeyError as exc:
        raise ProtocolDecodeError(f"missing field '{key}'", path=path) from exc


def _expect_int(value: Any, path: str) -> int:
    # bool is an int subclass but never a valid coordinate
    if isinstance(value, bool) or not isinstance(value, int):
        raise ProtocolDecodeError(
            f"expected an integer, got {type(value).__name__}", path=path
        )
    return value


def _expect_str(value: Any, path: str) -> str:
    if not isinstance(value, str):
        raise ProtocolDecodeError(
            f"expected a string, got {type(value).__name__}", path=path
        )
    return value


def _optional_bool(data: Mapping[str, Any], key: str, path: str) -> bool:
    value = data.get(key, False)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ProtocolDecodeError(
            f"expected a boolean, got {type(value).__name__}", path=f"{path}.{key}"
        )
    return value


def _optional_str(data: Mapping[str, Any], key: str, path: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    return _expect_str(value, f"{path}.{key}")


def _expect_list(value: Any, path: str) -> Sequence[Any]:
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise ProtocolDecodeError(
            f"expected an array, got {type(value).__name__}", path=path
        )
    return value


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """Zero-based (line, character) coordinate; ordering follows the document."""

    line: int
    character: int

    def __post_init__(self) -> None:
        if self.line < 0 or self.character < 0:
            raise InvalidPositionError(self.line, self.character)

    @classmethod
    def from_dict(cls, data: Any, *, path: str = "position") -> "Position":
        mapping = _expect_mapping(data, path)
        return cls(
            line=_expect_int(_require(mapping, "line", path), f"{path}.line"),
            character=_expect_int(
                _require(mapping, "character", path), f"{path}.character"
            ),
        )

    def to_dict(self) -> dict[str, int]:
        return {"line": self.line, "character": self.character}


@dataclass(frozen=True, slots=True)
class Range:
    start: Position
    end: Position

    @classmethod
    def from_dict(cls, data: Any, *, path: str = "range") -> "Range":
        mapping = _expect_mapping(data, path)
        return cls(
            start=Position.from_dict(
                _require(mapping, "start", path), path=f"{path}.start"
            ),
            end=Position.from_dict(_require(mapping, "end", path), path=f"{path}.end"),
        )

    @classmethod
    def of(cls, start_line: int, start_char: int, end_line: int, end_char: int) -> "Range":
        return cls(Position(start_line, start_char), Position(end_line, end_char))

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    def to_dict(self) -> dict[str, Any]:
        return {"start": self.start.to_dict(), "end": self.end.to_dict()}


@dataclass(frozen=True, slots=True)
class TextEdit:
    """Replace the text spanned by ``range`` with ``new_text``."""

    range: Range
    new_text: str

    @classmethod
    def from_dict(cls, data: Any, *, path: str = "edit") -> "TextEdit":
        mapping = _expect_mapping(data, path)
        return cls(
            range=Range.from_dict(_require(mapping, "range", path), path=f"{path}.range"),
            new_text=_expect_str(_require(mapping, "newText", path), f"{path}.newText"),
        )

    @classmethod
    def replace(
        cls, start: tuple[int, int], end: tuple[int, int], new_text: str
    ) -> "TextEdit":
        return cls(Range(Position(*start), Position(*end)), new_text)

    @classmethod
    def insert(cls, at: tuple[int, int], new_text: str) -> "TextEdit":
        return cls.replace(at, at, new_text)

    @classmethod
    def delete(cls, start: tuple[int, int], end: tuple[int, int]) -> "TextEdit":
        return cls.replace(start, end, "")

    def as_text_edit(self) -> "TextEdit":
        return self

    def to_dict(self) -> dict[str, Any]:
        return {"range": self.range.to_dict(), "newText": self.new_text}


@dataclass(frozen=True, slots=True)
class AnnotatedTextEdit:
    range: Range
    new_text: str
    annotation_id: str

    @classmethod
    def from_dict(cls, data: Any, *, path: str = "edit") -> "AnnotatedTextEdit":
        mapping = _expect_mapping(data, path)
        base = TextEdit.from_dict(mapping, path=path)
        return cls(
            range=base.range,
            new_text=base.new_text,
            annotation_id=_expect_str(
                _require(mapping, "annotationId", path), f"{path}.annotationId"
            ),
        )

    def as_text_edit(self) -> TextEdit:
        return TextEdit(self.range, self.new_text)

    def to_dict(self) -> dict[str, Any]:
        return {
            "range": self.range.to_dict(),
            "newText": self.new_text,
            "annotationId": self.annotation_id,
        }


@dataclass(frozen=True, slots=True)
class SnippetTextEdit:
    """Edit whose replacement is snippet syntax rather than plain text."""

    range: Range
    snippet: str
    annotation_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any, *, path: str = "edit") -> "SnippetTextEdit":
        mapping = _expect_mapping(data, path)
        snippet = _expect_mapping(_require(mapping, "snippet", path), f"{path}.snippet")
        kind = snippet.get("kind")
        if kind != "snippet":
            raise ProtocolDecodeError(
                f"unsupported string value kind {kind!r}", path=f"{path}.snippet.kind"
            )
        return cls(
            range=Range.from_dict(_require(mapping, "range", path), path=f"{path}.range"),
            snippet=_expect_str(
                _require(snippet, "value", f"{path}.snippet"), f"{path}.snippet.value"
            ),
            annotation_id=_optional_str(mapping, "annotationId", path),
        )

    def as_text_edit(self) -> TextEdit:
        return TextEdit(self.range, render_snippet(self.snippet))

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "range": self.range.to_dict(),
            "snippet": {"kind": "snippet", "value": self.snippet},
        }
        if self.annotation_id is not None:
            payload["annotationId"] = self.annotation_id
        return payload


EditLike = Union[TextEdit, AnnotatedTextEdit, SnippetTextEdit]


def decode_edit(data: Any, *, path: str = "edit") -> EditLike:
    """Pick the edit flavour from the fields present on the wire."""

    mapping = _expect_mapping(data, path)
    if "snippet" in mapping:
        return SnippetTextEdit.from_dict(mapping, path=path)
    if mapping.get("annotationId") is not None:
        return AnnotatedTextEdit.from_dict(mapping, path=path)
    return TextEdit.from_dict(mapping, path=path)


@dataclass(frozen=True, slots=True)
class CreateFileOptions:
    overwrite: bool = False
    ignore_if_exists: bool = False

    @classmethod
    def from_dict(cls, data: Any, *, path: str = "options") -> "CreateFileOptions":
        if data is None:
            return cls()
        mapping = _expect_mapping(data, path)
        return cls(
            overwrite=_optional_bool(mapping, "overwrite", path),
            ignore_if_exists=_optional_bool(mapping, "ignoreIfExists", path),
        )

    def to_dict(self) -> dict[str, bool]:
        return {"overwrite": self.overwrite, "ignoreIfExists": self.ignore_if_exists}


@dataclass(frozen=True, slots=True)
class RenameFileOptions:
    overwrite: bool = False
    ignore_if_exists: bool = False

    @classmethod
    def from_dict(cls, data: Any, *, path: str = "options") -> "RenameFileOptions":
        if data is None:
            return cls()
        mapping = _expect_mapping(data, path)
        return cls(
            overwrite=_optional_bool(mapping, "overwrite", path),
            ignore_if_exists=_optional_bool(mapping, "ignoreIfExists", path),
        )

    def to_dict(self) -> dict[str, bool]:
        return {"overwrite": self.overwrite, "ignoreIfExists": self.ignore_if_exists}


@dataclass(frozen=True, slots=True)
class DeleteFileOptions:
    recursive: bool = False
    ignore_if_not_exists: bool = False

    @classmethod
    def from_dict(cls, data: Any, *, path: str = "options") -> "DeleteFileOptions":
        if data is None:
            return cls()
        mapping = _expect_mapping(data, path)
        return cls(
            recursive=_optional_bool(mapping, "recursive", path),
            ignore_if_not_exists=_optional_bool(mapping, "ignoreIfNotExists", path),
        )

    def to_dict(self) -> dict[str, bool]:
        return {
            "recursive": self.recursive,
            "ignoreIfNotExists": self.ignore_if_not_exists,
        }


@dataclass(frozen=True, slots=True)
class CreateFile:
    kind: ClassVar[str] = CREATE

    uri: str
    options: CreateFileOptions = field(default_factory=CreateFileOptions)
    annotation_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any, *, path: str = "change") -> "CreateFile":
        mapping = _expect_mapping(data, path)
        return cls(
            uri=_expect_str(_require(mapping, "uri", path), f"{path}.uri"),
            options=CreateFileOptions.from_dict(
                mapping.get("options"), path=f"{path}.options"
            ),
            annotation_id=_optional_str(mapping, "annotationId", path),
        )

    @property
    def summary(self) -> str:
        return f"create {self.uri}"

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "kind": self.kind,
            "uri": self.uri,
            "options": self.options.to_dict(),
        }
        if self.annotation_id is not None:
            payload["annotationId"] = self.annotation_id
        return payload


@dataclass(frozen=True, slots=True)
class RenameFile:
    kind: ClassVar[str] = RENAME

    old_uri: str
    new_uri: str
    options: RenameFileOptions = field(default_factory=RenameFileOptions)
    annotation_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any, *, path: str = "change") -> "RenameFile":
        mapping = _expect_mapping(data, path)
        return cls(
            old_uri=_expect_str(_require(mapping, "oldUri", path), f"{path}.oldUri"),
            new_uri=_expect_str(_require(mapping, "newUri", path), f"{path}.newUri"),
            options=RenameFileOptions.from_dict(
                mapping.get("options"), path=f"{path}.options"
            ),
            annotation_id=_optional_str(mapping, "annotationId", path),
        )

    @property
    def summary(self) -> str:
        return f"rename {self.old_uri} -> {self.new_uri}"

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "kind": self.kind,
            "oldUri": self.old_uri,
            "newUri": self.new_uri,
            "options": self.options.to_dict(),
        }
        if self.annotation_id is not None:
            payload["annotationId"] = self.annotation_id
        return payload


@dataclass(frozen=True, slots=True)
class DeleteFile:
    kind: ClassVar[str] = DELETE

    uri: str
    options: DeleteFileOptions = field(default_factory=DeleteFileOptions)
    annotation_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any, *, path: str = "change") -> "DeleteFile":
        mapping = _expect_mapping(data, path)
        return cls(
            uri=_expect_str(_require(mapping, "uri", path), f"{path}.uri"),
            options=DeleteFileOptions.from_dict(
                mapping.get("options"), path=f"{path}.options"
            ),
            annotation_id=_optional_str(mapping, "annotationId", path),
        )

    @property
    def summary(self) -> str:
        return f"delete {self.uri}"

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "kind": self.kind,
            "uri": self.uri,
            "options": self.options.to_dict(),
        }
        if self.annotation_id is not None:
            payload["annotationId"] = self.annotation_id
        return payload


@dataclass(frozen=True, slots=True)
class OptionalVersionedTextDocumentIdentifier:
    """Document reference; ``version`` is carried but never checked."""

    uri: str
    version: Optional[int] = None

    @classmethod
    def from_dict(
        cls, data: Any, *, path: str = "textDocument"
    ) -> "OptionalVersionedTextDocumentIdentifier":
        mapping = _expect_mapping(data, path)
        version = mapping.get("version")
        return cls(
            uri=_expect_str(_require(mapping, "uri", path), f"{path}.uri"),
            version=None if version is None else _expect_int(version, f"{path}.version"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"uri": self.uri, "version": self.version}


@dataclass(frozen=True, slots=True)
class TextDocumentEdit:
    text_document: OptionalVersionedTextDocumentIdentifier
    edits: tuple[EditLike, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "edits", tuple(self.edits))

    @classmethod
    def from_dict(cls, data: Any, *, path: str = "change") -> "TextDocumentEdit":
        mapping = _expect_mapping(data, path)
        raw_edits = _expect_list(_require(mapping, "edits", path), f"{path}.edits")
        return cls(
            text_document=OptionalVersionedTextDocumentIdentifier.from_dict(
                _require(mapping, "textDocument", path), path=f"{path}.textDocument"
            ),
            edits=tuple(
                decode_edit(item, path=f"{path}.edits[{index}]")
                for index, item in enumerate(raw_edits)
            ),
        )

    @property
    def summary(self) -> str:
        return f"edit {self.text_document.uri} ({len(self.edits)} edits)"

    def to_dict(self) -> dict[str, Any]:
        return {
            "textDocument": self.text_document.to_dict(),
            "edits": [edit.to_dict() for edit in self.edits],
        }


DocumentChange = Union[CreateFile, RenameFile, DeleteFile, TextDocumentEdit]

_RESOURCE_OPERATIONS = MappingProxyType(
    {CREATE: CreateFile, RENAME: RenameFile, DELETE: DeleteFile}
)


def decode_document_change(data: Any, *, path: str = "change") -> DocumentChange:
    mapping = _expect_mapping(data, path)
    kind = mapping.get("kind")
    if kind is not None:
        if not isinstance(kind, str) or kind not in RESOURCE_OPERATION_KINDS:
            expected = ", ".join(sorted(RESOURCE_OPERATION_KINDS))
            raise ProtocolDecodeError(
                f"unknown resource operation kind {kind!r}, expected one of {expected}",
                path=f"{path}.kind",
            )
        return _RESOURCE_OPERATIONS[kind].from_dict(mapping, path=path)
    if "textDocument" in mapping:
        return TextDocumentEdit.from_dict(mapping, path=path)
    raise ProtocolDecodeError(
        "expected a resource operation or a text document edit", path=path
    )


@dataclass(frozen=True, slots=True)
class ChangeAnnotation:
    label: str
    needs_confirmation: bool = False
    description: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any, *, path: str = "annotation") -> "ChangeAnnotation":
        mapping = _expect_mapping(data, path)
        return cls(
            label=_expect_str(_require(mapping, "label", path), f"{path}.label"),
            needs_confirmation=_optional_bool(mapping, "needsConfirmation", path),
            description=_optional_str(mapping, "description", path),
        )

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "label": self.label,
            "needsConfirmation": self.needs_confirmation,
        }
        if self.description is not None:
            payload["description"] = self.description
        return payload


def _freeze_changes(
    changes: Mapping[str, Iterable[TextEdit]],
) -> Mapping[str, tuple[TextEdit, ...]]:
    return MappingProxyType({uri: tuple(edits) for uri, edits in changes.items()})


@dataclass(frozen=True, slots=True)
class WorkspaceEdit:
    """Text edits keyed by document plus ordered document changes."""

    changes: Mapping[str, tuple[TextEdit, ...]] = field(default_factory=dict)
    document_changes: tuple[DocumentChange, ...] = ()
    change_annotations: Mapping[str, ChangeAnnotation] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "changes", _freeze_changes(self.changes))
        object.__setattr__(self, "document_changes", tuple(self.document_changes))
        object.__setattr__(
            self, "change_annotations", MappingProxyType(dict(self.change_annotations))
        )

    @classmethod
    def from_dict(cls, data: Any, *, path: str = "workspaceEdit") -> "WorkspaceEdit":
        mapping = _expect_mapping(data, path)

        changes: dict[str, tuple[TextEdit, ...]] = {}
        raw_changes = mapping.get("changes")
        if raw_changes is not None:
            for uri, raw_edits in _expect_mapping(raw_changes, f"{path}.changes").items():
                edits_path = f"{path}.changes[{uri!r}]"
                changes[uri] = tuple(
                    TextEdit.from_dict(item, path=f"{edits_path}[{index}]")
                    for index, item in enumerate(_expect_list(raw_edits, edits_path))
                )

        document_changes: list[DocumentChange] = []
        raw_document_changes = mapping.get("documentChanges")
        if raw_document_changes is not None:
            items_path = f"{path}.documentChanges"
            for index, item in enumerate(_expect_list(raw_document_changes, items_path)):
                document_changes.append(
                    decode_document_change(item, path=f"{items_path}[{index}]")
                )

        annotations: dict[str, ChangeAnnotation] = {}
        raw_annotations = mapping.get("changeAnnotations")
        if raw_annotations is not None:
            annotations_path = f"{path}.changeAnnotations"
            for key, item in _expect_mapping(raw_annotations, annotations_path).items():
                annotations[key] = ChangeAnnotation.from_dict(
                    item, path=f"{annotations_path}[{key!r}]"
                )

        return cls(
            changes=changes,
            document_changes=tuple(document_changes),
            change_annotations=annotations,
        )

    @property
    def is_empty(self) -> bool:
        return not self.changes and not self.document_changes

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        if self.changes:
            payload["changes"] = {
                uri: [edit.to_dict() for edit in edits]
                for uri, edits in self.changes.items()
            }
        if self.document_changes:
            payload["documentChanges"] = [
                change.to_dict() for change in self.document_changes
            ]
        if self.change_annotations:
            payload["changeAnnotations"] = {
                key: annotation.to_dict()
                for key, annotation in self.change_annotations.items()
            }
        return payload


__all__ = [
    "CREATE",
    "RENAME",
    "DELETE",
    "RESOURCE_OPERATION_KINDS",
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
]
