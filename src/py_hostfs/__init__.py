"""POSIX-shaped filesystem attributes and directory iteration on a restricted host.

Re-exports public symbols so callers can write::

    from py_hostfs import FileSystemAdapter, MemoryHost, Session

    fs = FileSystemAdapter(MemoryHost(), Session())
    fs.make_directory("docs")
    for name, is_dir in fs.iterate_directory(""):
        print(name, is_dir)
"""

from py_hostfs.adapter import DirectoryIterator, FileSystemAdapter
from py_hostfs.attributes import (
    ATTRIBUTE_NAMES,
    DirectoryEntry,
    FileAttributes,
    FileMode,
    SymlinkAttributes,
)
from py_hostfs.config import AdapterConfig, load_config
from py_hostfs.errors import ConfigError, ErrorKind, FsError, UnsupportedOperationError
from py_hostfs.host import LocalHost, MemoryHost, Session
from py_hostfs.logging import LogEntry, Logger, LogLevel

__all__ = [
    "ATTRIBUTE_NAMES",
    "AdapterConfig",
    "ConfigError",
    "DirectoryEntry",
    "DirectoryIterator",
    "ErrorKind",
    "FileAttributes",
    "FileMode",
    "FileSystemAdapter",
    "FsError",
    "LocalHost",
    "LogEntry",
    "LogLevel",
    "Logger",
    "MemoryHost",
    "Session",
    "SymlinkAttributes",
    "UnsupportedOperationError",
    "load_config",
]
