"""
Filesystem port interface.

Defines the contract for a root-scoped file store. Every path argument is
relative to the store's working directory, so the same calling code works
against any backend that implements FSPort.
"""

from abc import ABC, abstractmethod
from typing import List

from ..domain.models import FileInfo
from ..domain.filters import FileFilter


class ReaderFile(ABC):
    """
    An open file you can read from.

    Must be closed once you are done with it; use it as a context manager:

        with fs.read("input.txt") as f:
            data = f.read()
    """

    @abstractmethod
    def read(self, size: int = -1) -> bytes:
        """Read up to size bytes from the current offset (all remaining if negative)."""
        pass

    @abstractmethod
    def read_at(self, size: int, offset: int) -> bytes:
        """Read up to size bytes starting at offset without moving the current offset."""
        pass

    @abstractmethod
    def seek(self, offset: int, whence: int = 0) -> int:
        """Move the current offset w/o reading any data. Returns the new offset."""
        pass

    @abstractmethod
    def tell(self) -> int:
        """Current offset."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Release the handle. Safe to call more than once."""
        pass

    @property
    @abstractmethod
    def closed(self) -> bool:
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


class WriterFile(ABC):
    """
    An open file you can write to.

    Data is only guaranteed to reach storage once the handle is closed, so
    always close it, preferably as a context manager:

        with fs.write("output.txt") as f:
            f.write(b"hello")
    """

    @abstractmethod
    def write(self, data: bytes) -> int:
        """Write data at the current offset. Returns the number of bytes written."""
        pass

    @abstractmethod
    def write_at(self, data: bytes, offset: int) -> int:
        """Write data starting at offset without moving the current offset."""
        pass

    @abstractmethod
    def seek(self, offset: int, whence: int = 0) -> int:
        """Move the current offset w/o writing any data. Returns the new offset."""
        pass

    @abstractmethod
    def tell(self) -> int:
        """Current offset."""
        pass

    @abstractmethod
    def flush(self) -> None:
        """Push buffered data down to storage."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Flush and release the handle. Safe to call more than once."""
        pass

    @property
    @abstractmethod
    def closed(self) -> bool:
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


class FSPort(ABC):
    """
    Abstract interface for a root-scoped file store.

    Implementations are immutable: change_directory() hands back a new
    instance rather than changing this one.
    """

    @abstractmethod
    def working_directory(self) -> str:
        """The normalized root path every other operation is relative to."""
        pass

    @abstractmethod
    def stat(self, path: str) -> FileInfo:
        """
        Get file/directory metadata w/o opening it for reading/writing.

        Raises:
            NotFoundError: Nothing exists at path
        """
        pass

    @abstractmethod
    def read(self, path: str) -> ReaderFile:
        """
        Open a file for reading.

        Raises:
            NotFoundError: Nothing exists at path
            IsADirectoryFSError: path is a directory
        """
        pass

    @abstractmethod
    def write(self, path: str) -> WriterFile:
        """
        Open a file for writing, replacing any existing contents.

        Missing parent directories are created first.

        Raises:
            StorageError: The directories or the file could not be created
        """
        pass

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Check if a file/directory exists. Never raises."""
        pass

    @abstractmethod
    def list(self, path: str, *filters: FileFilter) -> List[FileInfo]:
        """
        List the direct children of a directory, like "ls".

        Args:
            path: Directory to list
            filters: Entries must satisfy every filter to be included

        Returns:
            Matching entries; empty when the directory does not exist

        Raises:
            NotADirectoryFSError: path is a file
        """
        pass

    @abstractmethod
    def change_directory(self, path: str) -> "FSPort":
        """
        New store rooted at path (relative to this one's root).

        The directory does not need to exist; errors only show up once you
        perform some other operation on the new store.
        """
        pass

    @abstractmethod
    def remove(self, path: str) -> None:
        """
        Delete a file, or a directory and everything under it.

        Removing something that does not exist is a quiet no-op.
        """
        pass

    @abstractmethod
    def move(self, from_path: str, to_path: str) -> None:
        """
        Move/rename an entry within this store.

        A file may overwrite an existing file. Anything else already at
        to_path is a conflict. Missing parent directories of to_path are
        created.

        Raises:
            NotFoundError: Nothing exists at from_path
            ConflictError: to_path holds an incompatible entry
        """
        pass

    # -------------------------------------------------------------------------
    # Helpers built on the operations above
    # -------------------------------------------------------------------------

    def read_bytes(self, path: str) -> bytes:
        """Read a whole file."""
        with self.read(path) as f:
            return f.read()

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        """Read a whole file as text."""
        return self.read_bytes(path).decode(encoding)

    def write_bytes(self, path: str, data: bytes) -> int:
        """Replace a file's contents with data."""
        with self.write(path) as f:
            return f.write(data)

    def write_text(self, path: str, text: str, encoding: str = "utf-8") -> int:
        """Replace a file's contents with text."""
        return self.write_bytes(path, text.encode(encoding))

    def is_dir(self, path: str) -> bool:
        """Check if path is an existing directory."""
        try:
            return self.stat(path).is_dir
        except FileNotFoundError:
            return False

    def is_file(self, path: str) -> bool:
        """Check if path is an existing file."""
        try:
            return self.stat(path).is_file
        except FileNotFoundError:
            return False
