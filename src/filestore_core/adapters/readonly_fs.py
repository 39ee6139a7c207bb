"""
Read-Only File Store.

Wraps any FSPort so that calling code can look at a tree but never change
it. Reads go straight through to the wrapped store; write, remove and move
are refused before the wrapped store is touched.

    archive = ReadOnlyFS(disk("/mnt/archive"))
    archive.read_text("index.txt")      # fine
    archive.remove("index.txt")         # raises ReadOnlyError
"""

import os
from typing import List

from ..domain.errors import ReadOnlyError
from ..domain.filters import FileFilter
from ..domain.models import FileInfo
from ..ports.fs_port import FSPort, ReaderFile, WriterFile


class ReadOnlyFS(FSPort):
    """
    Read-only view over another file store.

    SAFETY GUARANTEES:
    - No write operations
    - No remove operations
    - No move/rename operations
    - change_directory() stays read-only
    """

    def __init__(self, inner: FSPort):
        self._inner = inner

    @property
    def inner(self) -> FSPort:
        return self._inner

    def working_directory(self) -> str:
        return self._inner.working_directory()

    def stat(self, path: str) -> FileInfo:
        return self._inner.stat(path)

    def exists(self, path: str) -> bool:
        return self._inner.exists(path)

    def read(self, path: str) -> ReaderFile:
        return self._inner.read(path)

    def list(self, path: str, *filters: FileFilter) -> List[FileInfo]:
        return self._inner.list(path, *filters)

    def change_directory(self, path: str) -> "ReadOnlyFS":
        return ReadOnlyFS(self._inner.change_directory(path))

    # =========================================================================
    # SAFETY: Mutating operations are refused.
    # =========================================================================

    def _forbidden(self, operation: str, path):
        raise ReadOnlyError(
            f"Operation '{operation}' is forbidden on read-only store "
            f"{self.working_directory()!r}: {path}",
            path=os.fspath(path),
            operation=operation,
        )

    def write(self, path: str) -> WriterFile:
        self._forbidden("write", path)

    def remove(self, path: str) -> None:
        self._forbidden("remove", path)

    def move(self, from_path: str, to_path: str) -> None:
        self._forbidden("move", from_path)

    def __repr__(self) -> str:
        return f"ReadOnlyFS({self._inner!r})"
