"""Filesystem boundary consumed by the orchestrator and dispatcher."""

from __future__ import annotations

import os
import shutil
from typing import Protocol


class FileSystem(Protocol):
    """Synchronous primitives the engine needs; errors surface as ``OSError``."""

    def read_file(self, path: str) -> bytes:
        ...

    def write_file(self, path: str, data: bytes, *, mode: int) -> None:
        """Replace the whole file, creating it with ``mode`` if missing."""
        ...

    def exists(self, path: str) -> bool:
        """False only when ``path`` is absent; other stat failures raise."""
        ...

    def remove(self, path: str) -> None:
        """Remove a file or an empty directory."""
        ...

    def remove_tree(self, path: str) -> None:
        """Remove ``path`` and everything under it; a missing path is fine."""
        ...

    def rename(self, source: str, destination: str) -> None:
        ...


class LocalFileSystem:
    """``FileSystem`` backed by ``os`` and ``shutil``."""

    def read_file(self, path: str) -> bytes:
        with open(path, "rb") as handle:
            return handle.read()

    def write_file(self, path: str, data: bytes, *, mode: int) -> None:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)

    def exists(self, path: str) -> bool:
        try:
            os.stat(path)
        except (FileNotFoundError, NotADirectoryError):
            return False
        return True

    def remove(self, path: str) -> None:
        if os.path.isdir(path) and not os.path.islink(path):
            os.rmdir(path)
        else:
            os.unlink(path)

    def remove_tree(self, path: str) -> None:
        if os.path.isdir(path) and not os.path.islink(path):
            shutil.rmtree(path)
        elif os.path.lexists(path):
            os.unlink(path)

    def rename(self, source: str, destination: str) -> None:
        os.rename(source, destination)


__all__ = ["FileSystem", "LocalFileSystem"]
