"""
Domain models for filestore.

These are pure data classes with no filesystem dependencies.
"""

import os
import stat
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class FileInfo:
    """Point-in-time metadata for a file or directory."""
    name: str                    # Base name only, no parent path
    size: int                    # Size in bytes
    is_dir: bool
    mod_time: datetime           # Last modified time
    mode: int = 0                # Raw st_mode bits

    @property
    def is_file(self) -> bool:
        return not self.is_dir

    @property
    def permissions(self) -> int:
        """Permission bits only (e.g. 0o644)."""
        return stat.S_IMODE(self.mode)

    @property
    def ext(self) -> str:
        """Extension (lowercase, no dot)."""
        _, dot, ext = self.name.rpartition(".")
        return ext.lower() if dot else ""

    @classmethod
    def from_stat(cls, name: str, stat_info: os.stat_result) -> "FileInfo":
        """Build a FileInfo from an os.stat()/lstat() result."""
        return cls(
            name=name,
            size=stat_info.st_size,
            is_dir=stat.S_ISDIR(stat_info.st_mode),
            mod_time=datetime.fromtimestamp(stat_info.st_mtime),
            mode=stat_info.st_mode,
        )
