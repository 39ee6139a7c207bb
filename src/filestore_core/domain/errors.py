"""
Error kinds raised by filestore operations.

Every error is an OSError, and each kind also derives from the matching
built-in exception, so callers can catch either FSError or the usual
FileNotFoundError/NotADirectoryError/etc.
"""

from typing import Optional


class FSError(OSError):
    """Base class for all filestore errors."""

    def __init__(self, message: str, path: Optional[str] = None,
                 operation: Optional[str] = None):
        super().__init__(message)
        self.path = path
        self.operation = operation


class NotFoundError(FSError, FileNotFoundError):
    """The resolved path has no entry."""


class NotADirectoryFSError(FSError, NotADirectoryError):
    """The resolved path exists but is not a directory."""


class IsADirectoryFSError(FSError, IsADirectoryError):
    """The resolved path is a directory where a file was expected."""


class ConflictError(FSError, FileExistsError):
    """A move destination exists and its kind is incompatible with the source."""


class StorageError(FSError):
    """The storage layer failed (permissions, disk full, released handle)."""


class ReadOnlyError(FSError, PermissionError):
    """A mutating operation was attempted on a read-only view."""


def translate_os_error(exc: Exception, operation: str, path: str) -> FSError:
    """
    Map a storage-layer OSError onto the matching FSError kind.

    Anything else, such as the ValueError os functions raise for a path with
    an embedded null byte, becomes a StorageError.
    """
    message = f"disk fs error: {operation}: {path}: {getattr(exc, 'strerror', None) or exc}"

    if isinstance(exc, FSError):
        return exc
    if isinstance(exc, FileNotFoundError):
        return NotFoundError(message, path=path, operation=operation)
    if isinstance(exc, NotADirectoryError):
        return NotADirectoryFSError(message, path=path, operation=operation)
    if isinstance(exc, IsADirectoryError):
        return IsADirectoryFSError(message, path=path, operation=operation)
    return StorageError(message, path=path, operation=operation)
