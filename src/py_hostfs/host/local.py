"""Local host — the host protocols over a real directory.

Every host path is interpreted relative to a *root* directory on disk,
the same way a sandboxed runtime maps its virtual drive onto a folder.
Paths are resolved and checked before use: anything that would land
outside the root (``..`` chains, absolute symlinks) is refused with
``PermissionError``, and ``exists`` simply answers ``False`` for it.
"""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import IO, Any


class LocalFile:
    """A text handle on a ``LocalHost`` file."""

    def __init__(self, stream: IO[str]) -> None:
        """Wrap an open text stream (use ``LocalHost.open`` instead)."""
        self._stream = stream

    @property
    def closed(self) -> bool:
        """Return True once ``close()`` has been called."""
        return self._stream.closed

    def write(self, text: str) -> None:
        """Write *text* to the file."""
        self._stream.write(text)

    def write_line(self, text: str) -> None:
        """Write *text* followed by a newline."""
        self._stream.write(text + "\n")

    def read_all(self) -> str:
        """Return everything from the current position to the end."""
        return self._stream.read()

    def read_line(self) -> str | None:
        """Return the next line without its newline, or None at EOF."""
        line = self._stream.readline()
        if not line:
            return None
        return line.removesuffix("\n")

    def close(self) -> None:
        """Flush and release the handle."""
        self._stream.close()


class LocalHost:
    """A ``HostFilesystem`` confined to one directory on disk."""

    def __init__(self, root: Path) -> None:
        """Create a host rooted at *root*.

        Raises:
            NotADirectoryError: If *root* is not an existing directory.

        """
        resolved = Path(root).resolve()
        if not resolved.is_dir():
            msg = f"Not a directory: {resolved}"
            raise NotADirectoryError(msg)
        self._root = resolved

    @property
    def root(self) -> Path:
        """Return the directory this host is confined to."""
        return self._root

    def _real(self, path: str) -> Path:
        """Map a host path to a real path under the root.

        Raises:
            PermissionError: If the path escapes the root.

        """
        resolved = (self._root / path.lstrip("/")).resolve()
        if resolved != self._root and not resolved.is_relative_to(self._root):
            msg = f"Path {path!r} is outside the host root"
            raise PermissionError(msg)
        return resolved

    # -- Queries ---------------------------------------------------------

    def exists(self, path: str) -> bool:
        """Return True if *path* names a file or directory."""
        try:
            return self._real(path).exists()
        except PermissionError:
            return False

    def is_dir(self, path: str) -> bool:
        """Return True if *path* names a directory."""
        try:
            return self._real(path).is_dir()
        except PermissionError:
            return False

    def is_read_only(self, path: str) -> bool:
        """Return True if *path* cannot be written.

        A missing path is read-only when its nearest existing parent is.
        """
        try:
            real = self._real(path)
        except PermissionError:
            return True
        while not real.exists():
            real = real.parent
        return not os.access(real, os.W_OK)

    def get_size(self, path: str) -> int:
        """Return the file size in bytes (0 for directories and missing paths)."""
        try:
            real = self._real(path)
        except PermissionError:
            return 0
        if not real.is_file():
            return 0
        return real.stat().st_size

    def list(self, path: str) -> list[str]:
        """Return the sorted entry names of a directory.

        Raises:
            NotADirectoryError: If the path is not a directory.

        """
        real = self._real(path)
        if not real.is_dir():
            msg = f"Not a directory: {path}"
            raise NotADirectoryError(msg)
        return sorted(entry.name for entry in real.iterdir())

    def combine(self, path: str, name: str) -> str:
        """Join *path* and *name* into a host path."""
        parts = [p for p in f"{path}/{name}".split("/") if p not in {"", "."}]
        return "/".join(parts)

    def attributes(self, path: str) -> dict[str, Any]:
        """Return the host's attribute mapping for *path*.

        Raises:
            FileNotFoundError: If the path does not exist.

        """
        real = self._real(path)
        st = real.stat()
        return {
            "size": st.st_size if real.is_file() else 0,
            "isDir": real.is_dir(),
            "isReadOnly": not os.access(real, os.W_OK),
            "created": int(st.st_ctime),
            "modified": int(st.st_mtime),
            "modification": int(st.st_mtime),
        }

    # -- Mutations -------------------------------------------------------

    def make_dir(self, path: str) -> None:
        """Create a directory, including any missing parents.

        Raises:
            FileExistsError: If a file is in the way.
            PermissionError: If the path escapes the root or is not writable.

        """
        self._real(path).mkdir(parents=True, exist_ok=True)

    def delete(self, path: str) -> None:
        """Delete a file or a whole directory tree.

        Deleting a path that does not exist is a no-op.  A symbolic link
        is removed itself; its target is left alone, wherever it points.

        Raises:
            PermissionError: If the path is the root or escapes it.

        """
        link = self._root / path.lstrip("/")
        if link.is_symlink():
            if not link.parent.resolve().is_relative_to(self._root):
                msg = f"Path {path!r} is outside the host root"
                raise PermissionError(msg)
            link.unlink()
            return

        real = self._real(path)
        if real == self._root:
            msg = "Access denied: cannot delete root"
            raise PermissionError(msg)
        if real.is_dir():
            shutil.rmtree(real)
        elif real.exists():
            real.unlink()

    def open(self, path: str, mode: str) -> LocalFile | None:
        """Open a file with mode ``"r"``, ``"w"`` or ``"a"``.

        Returns:
            A handle, or None if the file cannot be opened.

        """
        if mode not in {"r", "w", "a"}:
            return None
        try:
            real = self._real(path)
            stream = real.open(mode, encoding="utf-8")
        except OSError:
            return None
        return LocalFile(stream)
