"""
filestore - storage-agnostic file store.

Code manipulates a file tree through the FSPort interface (stat, read,
write, exists, list, remove, move, change_directory) rather than touching
the local disk directly, so the backing storage can be swapped out.

    from filestore_core import disk, with_ext

    conf = disk("./conf")
    for info in conf.list(".", with_ext("json")):
        print(info.name, info.size)
"""

__version__ = "0.1.0"

from .config import DiskConfig
from .domain import (
    FileInfo,
    FSError,
    NotFoundError,
    NotADirectoryFSError,
    IsADirectoryFSError,
    ConflictError,
    StorageError,
    ReadOnlyError,
    FileFilter,
    with_ext,
    with_exts,
    with_pattern,
    with_everything,
    change_extension,
)
from .ports import FSPort, ReaderFile, WriterFile


# Lazy imports so the interface can be used without loading the adapters
def __getattr__(name):
    if name in ("DiskFS", "disk"):
        from .adapters import disk_fs
        return getattr(disk_fs, name)
    elif name == "ReadOnlyFS":
        from .adapters.readonly_fs import ReadOnlyFS
        return ReadOnlyFS
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "__version__",
    "DiskConfig",
    "FileInfo",
    "FSError",
    "NotFoundError",
    "NotADirectoryFSError",
    "IsADirectoryFSError",
    "ConflictError",
    "StorageError",
    "ReadOnlyError",
    "FileFilter",
    "with_ext",
    "with_exts",
    "with_pattern",
    "with_everything",
    "change_extension",
    "FSPort",
    "ReaderFile",
    "WriterFile",
    "DiskFS",
    "disk",
    "ReadOnlyFS",
]
