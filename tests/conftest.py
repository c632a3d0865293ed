from __future__ import annotations

from typing import List, Tuple

import pytest

from textedit_engine.workspace import LocalFileSystem


class RecordingFileSystem(LocalFileSystem):
    """Local filesystem that remembers every mutating call."""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, ...]] = []

    def write_file(self, path: str, data: bytes, *, mode: int) -> None:
        self.calls.append(("write", path))
        super().write_file(path, data, mode=mode)

    def remove(self, path: str) -> None:
        self.calls.append(("remove", path))
        super().remove(path)

    def remove_tree(self, path: str) -> None:
        self.calls.append(("remove_tree", path))
        super().remove_tree(path)

    def rename(self, source: str, destination: str) -> None:
        self.calls.append(("rename", source, destination))
        super().rename(source, destination)

    @property
    def writes(self) -> List[str]:
        return [call[1] for call in self.calls if call[0] == "write"]


@pytest.fixture
def recording_fs() -> RecordingFileSystem:
    return RecordingFileSystem()
