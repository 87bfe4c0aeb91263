"""Attribute records — the POSIX-shaped view of a host path.

A POSIX ``stat`` call returns device, inode, mode, link count, owner,
three timestamps, size and permission bits.  The host this package
adapts knows only a handful of those: whether the path is a directory,
its size, whether it is read-only, and (sometimes) when it was last
modified.  Everything else is filled in by a fixed policy:

- ``dev``, ``ino``, ``nlink``, ``uid``, ``gid``, ``rdev`` are always 0.
  The host has no devices, inodes, hard links or users.
- ``access`` and ``change`` equal ``modification``.  The host tracks no
  separate access or status-change time, and a file must have been
  accessed and changed at least as recently as it was modified.
- ``permissions`` is one of two triads, read-only or read-write.

Field names follow LuaFileSystem's ``lfs.attributes`` keys so callers
written against that interface find every key they expect.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from enum import StrEnum
from typing import Any, NamedTuple


class FileMode(StrEnum):
    """The kind of object a host path names."""

    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class FileAttributes:
    """Snapshot of a path's attributes at query time.

    Not kept in sync with the host — query again for fresh values.
    """

    mode: FileMode
    size: int
    permissions: str
    modification: int = 0
    access: int = 0
    change: int = 0
    dev: int = 0
    ino: int = 0
    nlink: int = 0
    uid: int = 0
    gid: int = 0
    rdev: int = 0

    @classmethod
    def from_host(
        cls,
        *,
        is_dir: bool,
        size: int,
        permissions: str,
        modification: int,
    ) -> FileAttributes:
        """Build a record from the values the host can actually supply."""
        return cls(
            mode=FileMode.DIRECTORY if is_dir else FileMode.FILE,
            size=size,
            permissions=permissions,
            modification=modification,
            access=modification,
            change=modification,
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the attributes as a plain ``{name: value}`` mapping."""
        return asdict(self)


SymlinkAttributes = FileAttributes
"""The host has no symbolic links, so link attributes are file attributes."""

ATTRIBUTE_NAMES: tuple[str, ...] = tuple(f.name for f in fields(FileAttributes))


class DirectoryEntry(NamedTuple):
    """One step of a directory iteration."""

    name: str
    is_dir: bool
