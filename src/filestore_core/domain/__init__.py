"""
Domain layer for filestore.

Contains the metadata model, error kinds, file filters and path helpers.
None of it touches storage.
"""

from .models import FileInfo
from .errors import (
    FSError,
    NotFoundError,
    NotADirectoryFSError,
    IsADirectoryFSError,
    ConflictError,
    StorageError,
    ReadOnlyError,
)
from .filters import (
    FileFilter,
    with_ext,
    with_exts,
    with_pattern,
    with_everything,
    matches_all,
)
from .paths import change_extension, clean_path, join_path

__all__ = [
    # Models
    "FileInfo",
    # Errors
    "FSError",
    "NotFoundError",
    "NotADirectoryFSError",
    "IsADirectoryFSError",
    "ConflictError",
    "StorageError",
    "ReadOnlyError",
    # Filters
    "FileFilter",
    "with_ext",
    "with_exts",
    "with_pattern",
    "with_everything",
    "matches_all",
    # Paths
    "change_extension",
    "clean_path",
    "join_path",
]
