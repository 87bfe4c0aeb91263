"""In-memory host filesystem — a sandboxed host you can hold in one object.

Models the kind of restricted filesystem the adapter is written for:

- **Paths are root-relative.**  ``"a/b"``, ``"/a/b"`` and ``"a//b/"``
  all name the same node.  ``..`` walks up and stops at the root.

- **Nodes** are files (bytes) or directories (a ``dict`` of named
  children).  There are no inodes, links, owners or permission bits;
  the only protection is a *read-only* flag, which covers the whole
  subtree below a flagged node (think of a ROM mount).

- **Timestamps** are whole seconds from an injectable clock.  A node
  records when it was created and when its data was last written.

- **Deletes are recursive** and deleting a missing path does nothing.
  ``make_dir`` creates missing parents and accepts an existing directory.

Refused mutations raise ``OSError`` subclasses (``PermissionError``,
``FileExistsError``, ...); ``open`` answers ``None`` instead of raising.
"""

from __future__ import annotations

import base64
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from py_hostfs.attributes import FileMode

if TYPE_CHECKING:
    from collections.abc import Callable

_OPEN_MODES = frozenset({"r", "w", "a"})


def _wall_clock() -> int:
    """Return the current time in whole seconds since the epoch."""
    return int(time.time())


def _split_path(path: str) -> list[str]:
    """Split a host path into its normalized components.

    Examples::

        "a/b/c.txt"   → ["a", "b", "c.txt"]
        "/a//b/"      → ["a", "b"]
        "a/../b"      → ["b"]
        ""            → []

    """
    parts: list[str] = []
    for part in path.split("/"):
        if part in {"", "."}:
            continue
        if part == "..":
            if parts:
                parts.pop()
            continue
        parts.append(part)
    return parts


@dataclass
class _Node:
    """A file or directory in the tree.

    For files, ``data`` holds the raw bytes.
    For directories, ``children`` maps names to child nodes.
    """

    kind: FileMode
    data: bytes = b""
    children: dict[str, _Node] = field(default_factory=dict)  # pyright: ignore[reportUnknownVariableType]
    read_only: bool = False
    created: int = 0
    modified: int = 0

    @property
    def is_dir(self) -> bool:
        """Return True for directory nodes."""
        return self.kind is FileMode.DIRECTORY

    @property
    def size(self) -> int:
        """Return the size of the file data in bytes (0 for directories)."""
        return 0 if self.is_dir else len(self.data)

    def to_dict(self) -> dict[str, Any]:
        """Serialize this node and its subtree."""
        node: dict[str, Any] = {
            "kind": self.kind.value,
            "read_only": self.read_only,
            "created": self.created,
            "modified": self.modified,
        }
        if self.is_dir:
            node["children"] = {name: child.to_dict() for name, child in self.children.items()}
        else:
            node["data"] = base64.b64encode(self.data).decode("ascii")
        return node

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> _Node:
        """Rebuild a node and its subtree from ``to_dict()`` output."""
        return cls(
            kind=FileMode(data["kind"]),
            data=base64.b64decode(data.get("data", "")),
            children={
                name: cls.from_dict(child) for name, child in data.get("children", {}).items()
            },
            read_only=data.get("read_only", False),
            created=data.get("created", 0),
            modified=data.get("modified", 0),
        )


class MemoryFile:
    """An open handle on a ``MemoryHost`` file.

    Writes go straight to the node and bump its modification time, so
    there is nothing to flush on close.  Reading handles get a snapshot
    of the data taken at open time.
    """

    def __init__(self, host: MemoryHost, node: _Node, mode: str, text: str = "") -> None:
        """Attach a handle to *node* (use ``MemoryHost.open`` instead).

        *text* is the decoded file content served to a reading handle.
        """
        self._host = host
        self._node = node
        self._mode = mode
        self._buffer = text
        self._offset = 0
        self._closed = False

    @property
    def closed(self) -> bool:
        """Return True once ``close()`` has been called."""
        return self._closed

    def _check_open(self, *, writing: bool) -> None:
        if self._closed:
            msg = "I/O operation on closed file"
            raise ValueError(msg)
        if writing == (self._mode == "r"):
            msg = f"File not open for {'writing' if writing else 'reading'}"
            raise OSError(msg)

    def write(self, text: str) -> None:
        """Append *text* to the file."""
        self._check_open(writing=True)
        self._node.data += text.encode()
        self._node.modified = self._host.now()

    def write_line(self, text: str) -> None:
        """Append *text* followed by a newline."""
        self.write(text + "\n")

    def read_all(self) -> str:
        """Return everything from the current position to the end."""
        self._check_open(writing=False)
        rest = self._buffer[self._offset :]
        self._offset = len(self._buffer)
        return rest

    def read_line(self) -> str | None:
        """Return the next line without its newline, or None at EOF."""
        self._check_open(writing=False)
        if self._offset >= len(self._buffer):
            return None
        end = self._buffer.find("\n", self._offset)
        if end == -1:
            end = len(self._buffer)
        line = self._buffer[self._offset : end]
        self._offset = end + 1
        return line

    def close(self) -> None:
        """Release the handle.  Closing twice is harmless."""
        self._closed = True


class MemoryHost:
    """An in-memory sandboxed filesystem implementing ``HostFilesystem``.

    The tree starts with an empty, writable root directory.
    """

    def __init__(self, *, clock: Callable[[], int] | None = None) -> None:
        """Create a host with an empty root.

        Args:
            clock: Returns the current time in whole seconds.  Defaults
                to the wall clock.

        """
        self._clock = clock or _wall_clock
        now = self._clock()
        self._root = _Node(kind=FileMode.DIRECTORY, created=now, modified=now)

    def now(self) -> int:
        """Return the host's current time."""
        return self._clock()

    def _resolve(self, path: str) -> _Node | None:
        """Walk *path* from the root and return its node, or None."""
        current = self._root
        for part in _split_path(path):
            if not current.is_dir:
                return None
            child = current.children.get(part)
            if child is None:
                return None
            current = child
        return current

    def _protected(self, path: str) -> bool:
        """Return True if any existing node on the way to *path* is read-only."""
        current = self._root
        if current.read_only:
            return True
        for part in _split_path(path):
            if not current.is_dir:
                return False
            child = current.children.get(part)
            if child is None:
                return False
            if child.read_only:
                return True
            current = child
        return False

    # -- Queries ---------------------------------------------------------

    def exists(self, path: str) -> bool:
        """Return True if *path* names a file or directory."""
        return self._resolve(path) is not None

    def is_dir(self, path: str) -> bool:
        """Return True if *path* names a directory."""
        node = self._resolve(path)
        return node is not None and node.is_dir

    def is_read_only(self, path: str) -> bool:
        """Return True if *path* (or the subtree holding it) is read-only."""
        return self._protected(path)

    def get_size(self, path: str) -> int:
        """Return the file size in bytes (0 for directories and missing paths)."""
        node = self._resolve(path)
        return 0 if node is None else node.size

    def list(self, path: str) -> list[str]:
        """Return the sorted entry names of a directory.

        Raises:
            FileNotFoundError: If the path does not exist.
            NotADirectoryError: If the path is not a directory.

        """
        node = self._resolve(path)
        if node is None:
            msg = f"No such directory: {path}"
            raise FileNotFoundError(msg)
        if not node.is_dir:
            msg = f"Not a directory: {path}"
            raise NotADirectoryError(msg)
        return sorted(node.children)

    def combine(self, path: str, name: str) -> str:
        """Join *path* and *name* into a normalized host path."""
        return "/".join(_split_path(path) + _split_path(name))

    def attributes(self, path: str) -> dict[str, Any]:
        """Return the host's attribute mapping for *path*.

        Raises:
            FileNotFoundError: If the path does not exist.

        """
        node = self._resolve(path)
        if node is None:
            msg = f"No such file: {path}"
            raise FileNotFoundError(msg)
        return {
            "size": node.size,
            "isDir": node.is_dir,
            "isReadOnly": self._protected(path),
            "created": node.created,
            "modified": node.modified,
            "modification": node.modified,
        }

    # -- Mutations -------------------------------------------------------

    def make_dir(self, path: str) -> None:
        """Create a directory, including any missing parents.

        Raises:
            PermissionError: If the target lies in a read-only subtree.
            FileExistsError: If a file is in the way.

        """
        if self._protected(path):
            msg = f"Access denied: {path}"
            raise PermissionError(msg)

        current = self._root
        for part in _split_path(path):
            child = current.children.get(part)
            if child is None:
                now = self._clock()
                child = _Node(kind=FileMode.DIRECTORY, created=now, modified=now)
                current.children[part] = child
            elif not child.is_dir:
                msg = f"File exists: {path}"
                raise FileExistsError(msg)
            current = child

    def delete(self, path: str) -> None:
        """Delete a file or a whole directory tree.

        Deleting a path that does not exist is a no-op.

        Raises:
            PermissionError: If the path is the root or read-only.

        """
        parts = _split_path(path)
        if not parts:
            msg = "Access denied: cannot delete root"
            raise PermissionError(msg)
        if self._protected(path):
            msg = f"Access denied: {path}"
            raise PermissionError(msg)

        parent = self._resolve("/".join(parts[:-1]))
        if parent is None or not parent.is_dir:
            return
        parent.children.pop(parts[-1], None)

    def open(self, path: str, mode: str) -> MemoryFile | None:
        """Open a file.

        ``"r"`` needs an existing file holding UTF-8 text.  ``"w"``
        truncates and ``"a"`` appends; both create the file if its parent
        directory exists.

        Returns:
            A handle, or None if the file cannot be opened in that mode.

        """
        if mode not in _OPEN_MODES:
            return None

        node = self._resolve(path)
        if mode == "r":
            if node is None or node.is_dir:
                return None
            try:
                text = node.data.decode()
            except UnicodeDecodeError:
                return None
            return MemoryFile(self, node, mode, text)

        if self._protected(path):
            return None
        if node is None:
            parts = _split_path(path)
            parent = self._resolve("/".join(parts[:-1]))
            if not parts or parent is None or not parent.is_dir:
                return None
            now = self._clock()
            node = _Node(kind=FileMode.FILE, created=now, modified=now)
            parent.children[parts[-1]] = node
        elif node.is_dir:
            return None
        elif mode == "w":
            node.data = b""
            node.modified = self._clock()
        return MemoryFile(self, node, mode)

    # -- Setup helpers ---------------------------------------------------

    def write_file(self, path: str, data: bytes = b"") -> None:
        """Create or replace a file, creating missing parents.

        Intended for seeding a host; it ignores read-only flags.

        Raises:
            IsADirectoryError: If *path* is a directory.
            FileExistsError: If a file is in the way of a parent.

        """
        parts = _split_path(path)
        if not parts:
            msg = "Is a directory: root"
            raise IsADirectoryError(msg)
        current = self._root
        for part in parts[:-1]:
            child = current.children.get(part)
            if child is None:
                now = self._clock()
                child = _Node(kind=FileMode.DIRECTORY, created=now, modified=now)
                current.children[part] = child
            elif not child.is_dir:
                msg = f"File exists: {part}"
                raise FileExistsError(msg)
            current = child

        existing = current.children.get(parts[-1])
        now = self._clock()
        if existing is None:
            current.children[parts[-1]] = _Node(
                kind=FileMode.FILE, data=data, created=now, modified=now
            )
        elif existing.is_dir:
            msg = f"Is a directory: {path}"
            raise IsADirectoryError(msg)
        else:
            existing.data = data
            existing.modified = now

    def read_file(self, path: str) -> bytes:
        """Return the raw contents of a file.

        Raises:
            FileNotFoundError: If the path does not exist.
            IsADirectoryError: If the path is a directory.

        """
        node = self._resolve(path)
        if node is None:
            msg = f"No such file: {path}"
            raise FileNotFoundError(msg)
        if node.is_dir:
            msg = f"Is a directory: {path}"
            raise IsADirectoryError(msg)
        return node.data

    def mark_read_only(self, path: str, *, read_only: bool = True) -> None:
        """Flag (or unflag) a node, and so its whole subtree, as read-only.

        Raises:
            FileNotFoundError: If the path does not exist.

        """
        node = self._resolve(path)
        if node is None:
            msg = f"No such file: {path}"
            raise FileNotFoundError(msg)
        node.read_only = read_only

    # -- Snapshots -------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Serialize the whole tree to a dictionary.

        File data is base64-encoded so binary content survives JSON.
        """
        return {"root": self._root.to_dict()}

    @classmethod
    def from_dict(
        cls, data: dict[str, Any], *, clock: Callable[[], int] | None = None
    ) -> MemoryHost:
        """Rebuild a host from the output of ``to_dict()``."""
        host = cls(clock=clock)
        host._root = _Node.from_dict(data["root"])
        return host
