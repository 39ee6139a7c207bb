"""
Adapters for filestore.

Implementations of the port interfaces.
"""

from .disk_fs import DiskFS, DiskReaderFile, DiskWriterFile, disk
from .readonly_fs import ReadOnlyFS

__all__ = ["DiskFS", "DiskReaderFile", "DiskWriterFile", "disk", "ReadOnlyFS"]
