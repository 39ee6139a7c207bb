"""
Configuration for the disk-backed file store.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_DIR_MODE = "FILESTORE_DIR_MODE"
ENV_LIST_SORTED = "FILESTORE_LIST_SORTED"

_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class DiskConfig:
    """Options for DiskFS."""
    dir_mode: int = 0o755        # Mode for directories created by write/move
    list_sorted: bool = True     # Sort list() results by name

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "DiskConfig":
        """
        Build a config from environment variables, falling back to defaults.

        FILESTORE_DIR_MODE is an octal string such as "750".
        FILESTORE_LIST_SORTED accepts "0", "false", "no" or "off" to disable sorting.
        """
        environ = os.environ if environ is None else environ
        defaults = cls()

        dir_mode = defaults.dir_mode
        raw_mode = environ.get(ENV_DIR_MODE, "").strip()
        if raw_mode:
            try:
                dir_mode = int(raw_mode, 8)
            except ValueError:
                raise ValueError(
                    f"{ENV_DIR_MODE} must be an octal mode like '755', got {raw_mode!r}"
                ) from None
            if not 0 <= dir_mode <= 0o7777:
                raise ValueError(f"{ENV_DIR_MODE} is out of range: {raw_mode!r}")

        list_sorted = defaults.list_sorted
        raw_sorted = environ.get(ENV_LIST_SORTED, "").strip().lower()
        if raw_sorted:
            list_sorted = raw_sorted not in _FALSE_VALUES

        return cls(dir_mode=dir_mode, list_sorted=list_sorted)
