"""Exception hierarchy shared by the applier, orchestrator and dispatcher."""

from __future__ import annotations

from typing import Optional, Sequence


class EditEngineError(RuntimeError):
    """Base class for every error raised by the engine."""


class EditValidationError(EditEngineError):
    """Raised before any mutation when an edit batch cannot be applied."""

    def __init__(self, message: str, *, edit_index: int | None = None) -> None:
        super().__init__(message)
        self.edit_index = edit_index


class InvalidPositionError(EditValidationError):
    """Raised for positions with negative coordinates."""

    def __init__(self, line: int, character: int) -> None:
        super().__init__(f"invalid position: line={line}, character={character}")
        self.line = line
        self.character = character


class InvalidStartLineError(EditValidationError):
    """Raised when an edit starts outside the document's lines."""

    def __init__(self, line: int, line_count: int) -> None:
        super().__init__(
            f"invalid start line: {line} (document has {line_count} lines)"
        )
        self.line = line
        self.line_count = line_count


class OverlappingEditsError(EditValidationError):
    """Raised when two edits in one batch touch or intersect."""

    def __init__(self, first: int, second: int) -> None:
        super().__init__(
            f"overlapping edits detected between edit {first} and {second}",
            edit_index=first,
        )
        self.first = first
        self.second = second


class InvalidEditError(EditValidationError):
    """Raised when an edit cannot be normalized to a plain text edit."""


class ProtocolDecodeError(EditValidationError):
    """Raised when a wire mapping does not describe a protocol structure."""

    def __init__(self, message: str, *, path: str = "") -> None:
        super().__init__(f"{path}: {message}" if path else message)
        self.path = path


class TextEncodingError(EditValidationError):
    """Raised when file content cannot pass through the configured encoding."""

    def __init__(
        self, path: str, encoding: str, error: UnicodeError, *, action: str = "encoded"
    ) -> None:
        super().__init__(f"text for {path} cannot be {action} as {encoding}: {error}")
        self.path = path
        self.encoding = encoding
        self.unicode_error = error


class PreconditionError(EditEngineError):
    """Raised when a file operation is refused by its overwrite/delete policy."""

    def __init__(self, message: str, *, path: str) -> None:
        super().__init__(message)
        self.path = path


class TargetExistsError(PreconditionError):
    def __init__(self, path: str, *, operation: str) -> None:
        super().__init__(
            f"{operation} target already exists and overwrite is not allowed: {path}",
            path=path,
        )
        self.operation = operation


class DirectoryNotEmptyError(PreconditionError):
    def __init__(self, path: str) -> None:
        super().__init__(
            f"directory is not empty and recursive delete was not requested: {path}",
            path=path,
        )


class FileOperationError(EditEngineError):
    """Wraps an ``OSError`` with the phase that failed.

    The original error stays reachable through ``os_error`` and ``__cause__``.
    """

    def __init__(self, phase: str, path: str, error: OSError) -> None:
        super().__init__(f"failed to {phase} file {path}: {error}")
        self.phase = phase
        self.path = path
        self.os_error = error


class WorkspaceEditError(EditEngineError):
    """Raised when one step of a workspace edit fails.

    Steps completed before the failure are listed in ``completed`` and are not
    rolled back.
    """

    def __init__(
        self,
        message: str,
        *,
        step: int,
        completed: Sequence[str] = (),
        error: Optional[EditEngineError] = None,
    ) -> None:
        super().__init__(message)
        self.step = step
        self.completed = tuple(completed)
        self.error = error


__all__ = [
    "EditEngineError",
    "EditValidationError",
    "InvalidPositionError",
    "InvalidStartLineError",
    "OverlappingEditsError",
    "InvalidEditError",
    "ProtocolDecodeError",
    "TextEncodingError",
    "PreconditionError",
    "TargetExistsError",
    "DirectoryNotEmptyError",
    "FileOperationError",
    "WorkspaceEditError",
]
