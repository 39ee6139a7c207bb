"""
Disk Filesystem Adapter.

A file store whose operations interact with the local file system. All
operations are rooted in the base path the store was created with:

    files = disk("./data")

    # Open ./data/input.txt for reading
    with files.read("input.txt") as f:
        data = f.read()

    # ./data/reports/2024/summary.txt, creating reports/2024/ as needed
    with files.write("reports/2024/summary.txt") as f:
        f.write(b"...")
"""

import logging
import os
import shutil
import stat
from typing import BinaryIO, List, Optional, Union

from ..config import DiskConfig
from ..domain.errors import (
    ConflictError,
    IsADirectoryFSError,
    NotADirectoryFSError,
    NotFoundError,
    StorageError,
    translate_os_error,
)
from ..domain.filters import FileFilter, matches_all
from ..domain.models import FileInfo
from ..domain.paths import clean_path, join_path
from ..ports.fs_port import FSPort, ReaderFile, WriterFile

logger = logging.getLogger(__name__)

PathArg = Union[str, "os.PathLike[str]"]


class _DiskHandle:
    """Shared seek/close plumbing for files opened by DiskFS."""

    def __init__(self, file: BinaryIO, path: str):
        self._file = file
        self._path = path

    def _require_open(self, operation: str):
        if self._file.closed:
            raise StorageError(
                f"disk fs error: {operation}: {self._path}: file has been closed",
                path=self._path,
                operation=operation,
            )

    def _failed(self, exc: OSError, operation: str):
        return translate_os_error(exc, operation, self._path)

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        self._require_open("seek")
        try:
            return self._file.seek(offset, whence)
        except OSError as exc:
            raise self._failed(exc, "seek") from exc

    def tell(self) -> int:
        self._require_open("tell")
        return self._file.tell()

    def close(self) -> None:
        if self._file.closed:
            return
        try:
            self._file.close()
        except OSError as exc:
            raise self._failed(exc, "close") from exc

    @property
    def closed(self) -> bool:
        return self._file.closed

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"<{type(self).__name__} {self._path!r} ({state})>"


class DiskReaderFile(_DiskHandle, ReaderFile):
    """A file on disk opened for reading."""

    def read(self, size: int = -1) -> bytes:
        self._require_open("read")
        try:
            return self._file.read(size)
        except OSError as exc:
            raise self._failed(exc, "read") from exc

    def read_at(self, size: int, offset: int) -> bytes:
        self._require_open("read at")
        try:
            position = self._file.tell()
            self._file.seek(offset)
            try:
                return self._file.read(size)
            finally:
                self._file.seek(position)
        except OSError as exc:
            raise self._failed(exc, "read at") from exc


class DiskWriterFile(_DiskHandle, WriterFile):
    """A file on disk opened for writing."""

    def write(self, data: bytes) -> int:
        self._require_open("write")
        try:
            return self._file.write(data)
        except OSError as exc:
            raise self._failed(exc, "write") from exc

    def write_at(self, data: bytes, offset: int) -> int:
        self._require_open("write at")
        try:
            position = self._file.tell()
            self._file.seek(offset)
            try:
                return self._file.write(data)
            finally:
                self._file.seek(position)
        except OSError as exc:
            raise self._failed(exc, "write at") from exc

    def flush(self) -> None:
        self._require_open("flush")
        try:
            self._file.flush()
        except OSError as exc:
            raise self._failed(exc, "flush") from exc


class DiskFS(FSPort):
    """
    File store backed by the local disk.

    The base path may be relative or absolute and does not need to exist;
    it only has to by the time you read from it. Instances never change:
    change_directory() returns a new DiskFS with the same config.
    """

    def __init__(self, base_path: PathArg, config: Optional[DiskConfig] = None):
        self._base_path = os.fspath(base_path)
        self._config = config or DiskConfig()

    @property
    def base_path(self) -> str:
        return self._base_path

    @property
    def config(self) -> DiskConfig:
        return self._config

    def _resolve(self, path: PathArg) -> str:
        """Join a caller-supplied path onto this store's base path."""
        return join_path(self._base_path, os.fspath(path))

    def working_directory(self) -> str:
        return clean_path(self._base_path)

    def change_directory(self, path: PathArg) -> "DiskFS":
        return type(self)(self._resolve(path), self._config)

    def stat(self, path: PathArg) -> FileInfo:
        """Get file/directory metadata (symlinks are followed)."""
        full_path = self._resolve(path)
        try:
            stat_info = os.stat(full_path)
        except (FileNotFoundError, NotADirectoryError, ValueError) as exc:
            # ValueError: an embedded null byte, so nothing can be there
            raise NotFoundError(
                f"disk fs error: stat: {path}: no such file or directory",
                path=os.fspath(path),
                operation="stat",
            ) from exc
        except OSError as exc:
            raise translate_os_error(exc, "stat", os.fspath(path)) from exc

        return FileInfo.from_stat(_base_name(full_path), stat_info)

    def exists(self, path: PathArg) -> bool:
        return os.path.exists(self._resolve(path))

    def read(self, path: PathArg) -> DiskReaderFile:
        full_path = self._resolve(path)
        try:
            file = open(full_path, "rb")
        except (FileNotFoundError, NotADirectoryError, ValueError) as exc:
            raise NotFoundError(
                f"disk fs error: read: {path}: no such file or directory",
                path=os.fspath(path),
                operation="read",
            ) from exc
        except IsADirectoryError as exc:
            raise _reading_directory(path) from exc
        except OSError as exc:
            if os.path.isdir(full_path):
                raise _reading_directory(path) from exc
            raise translate_os_error(exc, "read", os.fspath(path)) from exc

        # Make sure it's not a directory on platforms that let you open one.
        if stat.S_ISDIR(os.fstat(file.fileno()).st_mode):
            file.close()
            raise _reading_directory(path)

        return DiskReaderFile(file, full_path)

    def write(self, path: PathArg) -> DiskWriterFile:
        """
        Open a file for writing, lazily creating its parent directories.

        Should the file already exist, its entire contents are replaced so it
        only contains what you write this time.
        """
        full_path = self._resolve(path)
        created = self._make_parents(full_path, "write", os.fspath(path))

        try:
            file = open(full_path, "wb")
        except (OSError, ValueError) as exc:
            self._remove_created(created)
            raise translate_os_error(exc, "write", os.fspath(path)) from exc

        logger.debug("Opened %s for writing", full_path)
        return DiskWriterFile(file, full_path)

    def list(self, path: PathArg, *filters: FileFilter) -> List[FileInfo]:
        """
        The equivalent of "ls": every file and directory directly in path.

        Entries are described by lstat(), so a symlink is listed as itself.
        """
        full_path = self._resolve(path)
        try:
            with os.scandir(full_path) as it:
                entries = [entry for entry in it]
        except (FileNotFoundError, ValueError):
            return []
        except NotADirectoryError as exc:
            if not os.path.exists(full_path):
                return []
            raise NotADirectoryFSError(
                f"disk fs error: list: {path}: not a directory",
                path=os.fspath(path),
                operation="list",
            ) from exc
        except OSError as exc:
            raise translate_os_error(exc, "list", os.fspath(path)) from exc

        results = []
        for entry in entries:
            try:
                stat_info = entry.stat(follow_symlinks=False)
            except FileNotFoundError:
                # Removed since the directory was enumerated
                continue
            except OSError as exc:
                raise translate_os_error(exc, "list", os.fspath(path)) from exc

            info = FileInfo.from_stat(entry.name, stat_info)
            if matches_all(info, filters):
                results.append(info)

        if self._config.list_sorted:
            results.sort(key=lambda info: info.name)
        return results

    def remove(self, path: PathArg) -> None:
        """Delete a file, or a directory and all of its children."""
        full_path = self._resolve(path)
        try:
            if os.path.isdir(full_path) and not os.path.islink(full_path):
                shutil.rmtree(full_path)
            else:
                os.remove(full_path)
        except (FileNotFoundError, NotADirectoryError, ValueError) as exc:
            if os.path.lexists(full_path):
                raise translate_os_error(exc, "remove", os.fspath(path)) from exc
            # Nothing there (any more); removing it is a no-op.
            return
        except OSError as exc:
            raise translate_os_error(exc, "remove", os.fspath(path)) from exc

        logger.debug("Removed %s", full_path)

    def move(self, from_path: PathArg, to_path: PathArg) -> None:
        """
        Move the entry at from_path to to_path.

        Files overwrite files. A directory is never replaced or merged, and a
        file never replaces a directory. When the move fails, both sides are
        left as they were.
        """
        source = self._resolve(from_path)
        target = self._resolve(to_path)
        from_path = os.fspath(from_path)
        to_path = os.fspath(to_path)

        # Ensure the original entry exists in the first place.
        try:
            source_stat = os.lstat(source)
        except (FileNotFoundError, NotADirectoryError, ValueError) as exc:
            raise NotFoundError(
                f"disk fs error: move: {from_path}: no such file or directory",
                path=from_path,
                operation="move",
            ) from exc
        except OSError as exc:
            raise translate_os_error(exc, "move", from_path) from exc

        if os.path.abspath(source) == os.path.abspath(target):
            return

        source_is_dir = stat.S_ISDIR(source_stat.st_mode)
        try:
            target_stat = os.lstat(target)
        except (FileNotFoundError, NotADirectoryError):
            target_stat = None
        except (OSError, ValueError) as exc:
            raise translate_os_error(exc, "move", to_path) from exc

        if target_stat is not None:
            target_is_dir = stat.S_ISDIR(target_stat.st_mode)
            if source_is_dir or target_is_dir:
                raise ConflictError(
                    f"disk fs error: move: {from_path} -> {to_path}: "
                    f"cannot replace {_kind(target_is_dir)} with {_kind(source_is_dir)}",
                    path=to_path,
                    operation="move",
                )

        if source_is_dir and _is_within(target, source):
            raise StorageError(
                f"disk fs error: move: {from_path} -> {to_path}: "
                f"cannot move a directory inside itself",
                path=to_path,
                operation="move",
            )

        created = self._make_parents(target, "move", to_path)
        try:
            os.replace(source, target)
        except OSError as exc:
            self._remove_created(created)
            raise translate_os_error(exc, "move", to_path) from exc

        logger.debug("Moved %s to %s", source, target)

    def _make_parents(self, full_path: str, operation: str, path: str) -> List[str]:
        """
        Create the missing parent directories of full_path.

        Returns the directories that were created, deepest first.
        """
        missing = []
        parent = os.path.dirname(full_path)
        while parent and not os.path.exists(parent):
            missing.append(parent)
            next_parent = os.path.dirname(parent)
            if next_parent == parent:
                break
            parent = next_parent

        created = []
        for directory in reversed(missing):
            try:
                os.mkdir(directory, self._config.dir_mode)
            except FileExistsError:
                if os.path.isdir(directory):
                    continue
                self._remove_created(created)
                raise StorageError(
                    f"disk fs error: {operation}: {path}: mkdir: {directory} is a file",
                    path=path,
                    operation=operation,
                ) from None
            except (OSError, ValueError) as exc:
                self._remove_created(created)
                raise StorageError(
                    f"disk fs error: {operation}: {path}: mkdir: {getattr(exc, 'strerror', None) or exc}",
                    path=path,
                    operation=operation,
                ) from exc
            created.insert(0, directory)

        if created:
            logger.debug("Created directories for %s: %s", path, list(reversed(created)))
        return created

    def _remove_created(self, created: List[str]) -> None:
        """Undo _make_parents() after a failed operation."""
        if not created:
            return
        logger.warning("Rolling back directories created for failed operation: %s", created)
        for directory in created:
            try:
                os.rmdir(directory)
            except FileNotFoundError:
                continue
            except OSError:
                logger.warning("Could not remove directory %s during rollback", directory)

    def __eq__(self, other) -> bool:
        if not isinstance(other, DiskFS):
            return NotImplemented
        return (self.working_directory(), self._config) == (
            other.working_directory(), other._config)

    def __hash__(self) -> int:
        return hash((self.working_directory(), self._config))

    def __repr__(self) -> str:
        return f"DiskFS({self.working_directory()!r})"


def disk(base_path: PathArg, config: Optional[DiskConfig] = None) -> DiskFS:
    """Create a file store rooted in the given directory on the local disk."""
    return DiskFS(base_path, config)


def _base_name(full_path: str) -> str:
    return os.path.basename(full_path) or full_path


def _kind(is_dir: bool) -> str:
    return "directory" if is_dir else "file"


def _is_within(path: str, directory: str) -> bool:
    """Check if path is directory itself or somewhere underneath it."""
    path = os.path.abspath(path)
    directory = os.path.abspath(directory)
    return path == directory or path.startswith(directory.rstrip(os.sep) + os.sep)


def _reading_directory(path: PathArg) -> IsADirectoryFSError:
    return IsADirectoryFSError(
        f"disk fs error: read: {path}: trying to read directory like a file",
        path=os.fspath(path),
        operation="read",
    )
