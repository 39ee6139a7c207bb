"""
Ports (interfaces) for filestore.

These define the contracts that adapters must implement.
This enables dependency injection and testing with mocks.
"""

from .fs_port import FSPort, ReaderFile, WriterFile

__all__ = ["FSPort", "ReaderFile", "WriterFile"]
