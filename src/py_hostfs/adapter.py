"""The filesystem adapter — a POSIX-shaped API over a restricted host.

Code written against LuaFileSystem-style calls (``attributes``, ``dir``,
``mkdir``, ``rmdir``, ``touch``, ``chdir`` ...) expects a rich model of
the filesystem: inodes, owners, three timestamps, permission bits,
locks and links.  The hosts this package targets offer far less.  The
adapter bridges the gap:

- **Attribute queries** build a full ``FileAttributes`` record from
  the five things the host knows (existence, directory-ness, size,
  read-only flag, optional modification time) and fill every other
  field with a documented default.  See ``attributes.py``.

- **Directory iteration** snapshots the host listing once and walks
  it.  Entries created or removed after the call are not seen.

- **Mutations** (``make_directory``, ``remove_directory``, ``touch``)
  forward to host primitives.  A host refusal becomes an ``FsError``
  with kind ``IO_ERROR``.

- **Unsupported operations** (locks, links, ``set_mode``) exist so the
  interface is complete, but always raise ``UnsupportedOperationError``.

The working directory is owned by the injected session, not by this
module, so independent adapters never share state.
"""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import TYPE_CHECKING, Any, overload

from py_hostfs.attributes import DirectoryEntry, FileAttributes, FileMode
from py_hostfs.config import AdapterConfig
from py_hostfs.errors import ErrorKind, FsError, UnsupportedOperationError
from py_hostfs.host.port import SupportsAttributes
from py_hostfs.logging import Logger, LogLevel

if TYPE_CHECKING:
    from collections.abc import Callable

    from py_hostfs.host.port import HostFilesystem, HostSession

_SOURCE = "hostfs"

# Fields with no host counterpart are answered without asking the host.
_CONSTANT_FIELDS = frozenset({"dev", "ino", "nlink", "uid", "gid", "rdev"})
_TIME_FIELDS = frozenset({"access", "modification", "change"})


class DirectoryIterator:
    """Forward-only cursor over a snapshot of a directory listing.

    Supports the iterator protocol::

        for name, is_dir in adapter.iterate_directory("docs"):
            ...

    and LuaFileSystem's explicit style: ``next()`` returns ``None`` once
    the snapshot is exhausted, ``close()`` abandons the rest.
    """

    def __init__(self, host: HostFilesystem, path: str, names: list[str]) -> None:
        """Create a cursor over *names* (use ``iterate_directory`` instead)."""
        self._host = host
        self._path = path
        self._names = names
        self._index = 0

    @property
    def path(self) -> str:
        """Return the directory being iterated."""
        return self._path

    def __iter__(self) -> DirectoryIterator:
        """Return self."""
        return self

    def __next__(self) -> DirectoryEntry:
        """Return the next entry, checking its kind with the host."""
        if self._index >= len(self._names):
            raise StopIteration
        name = self._names[self._index]
        self._index += 1
        return DirectoryEntry(name, self._host.is_dir(self._host.combine(self._path, name)))

    def next(self) -> DirectoryEntry | None:
        """Return the next entry, or None after the last one."""
        return next(self, None)

    def close(self) -> None:
        """Drop the remaining entries.  Later steps yield nothing."""
        self._index = len(self._names)


class FileSystemAdapter:
    """POSIX-shaped filesystem operations on top of a host filesystem.

    Every fallible operation raises ``FsError``; the unsupported group
    raises ``UnsupportedOperationError`` instead.
    """

    def __init__(
        self,
        host: HostFilesystem,
        session: HostSession,
        *,
        config: AdapterConfig | None = None,
        logger: Logger | None = None,
    ) -> None:
        """Bind the adapter to a host and its session.

        Args:
            host: The host filesystem primitives.
            session: Owner of the current working directory.
            config: Adapter settings (defaults if omitted).
            logger: Audit log for mutations and failures, if wanted.

        """
        self._host = host
        self._session = session
        self._config = config or AdapterConfig()
        self._logger = logger

    @property
    def host(self) -> HostFilesystem:
        """Return the host this adapter forwards to."""
        return self._host

    @property
    def config(self) -> AdapterConfig:
        """Return the adapter settings."""
        return self._config

    def _log(self, level: LogLevel, message: str, path: str | None = None) -> None:
        if self._logger is not None:
            self._logger.log(level, message, source=_SOURCE, path=path)

    def _fail(self, kind: ErrorKind, message: str, path: str) -> FsError:
        """Log a recoverable failure and return the error to raise."""
        self._log(LogLevel.WARNING, f"{kind}: {message}", path)
        return FsError(kind, message, self._config.error_code)

    # -- Attribute helpers -------------------------------------------------

    def _mode(self, path: str) -> FileMode:
        return FileMode.DIRECTORY if self._host.is_dir(path) else FileMode.FILE

    def _permissions(self, path: str) -> str:
        if self._host.is_read_only(path):
            return self._config.read_only_permissions
        return self._config.read_write_permissions

    def _modification(self, path: str) -> int:
        """Return the host's modification time in seconds, or 0.

        Hosts without an attribute query, or whose mapping carries none
        of the configured keys, report 0 (the epoch).
        """
        if not isinstance(self._host, SupportsAttributes):
            return 0
        host_attributes = self._host.attributes(path)
        for key in self._config.timestamp_keys:
            value = host_attributes.get(key)
            if value is not None:
                return int(value) // self._config.timestamp_divisor
        return 0

    def _field(self, path: str, name: str) -> Any:
        """Compute one attribute, asking the host only what it needs."""
        getters: dict[str, Callable[[str], Any]] = {
            "mode": self._mode,
            "size": self._host.get_size,
            "permissions": self._permissions,
        }
        if name in _CONSTANT_FIELDS:
            return 0
        if name in _TIME_FIELDS:
            return self._modification(path)
        getter = getters.get(name)
        return None if getter is None else getter(path)

    # -- Attribute queries -------------------------------------------------

    @overload
    def attributes(self, path: str, selector: None = None) -> FileAttributes: ...

    @overload
    def attributes(self, path: str, selector: str) -> Any: ...

    @overload
    def attributes(
        self, path: str, selector: MutableMapping[str, Any]
    ) -> MutableMapping[str, Any]: ...

    def attributes(
        self,
        path: str,
        selector: str | MutableMapping[str, Any] | None = None,
    ) -> FileAttributes | MutableMapping[str, Any] | Any:
        """Return the attributes of *path*.

        Args:
            path: Host path to query.
            selector: ``None`` for a new record; an attribute name to get
                just that value (``None`` for an unknown name); or a
                mutable mapping to fill in and return.

        Raises:
            FsError: ``NOT_FOUND`` if the path does not exist.

        """
        if not self._host.exists(path):
            raise self._fail(ErrorKind.NOT_FOUND, "File does not exist", path)

        if isinstance(selector, str):
            return self._field(path, selector)

        record = FileAttributes.from_host(
            is_dir=self._host.is_dir(path),
            size=self._host.get_size(path),
            permissions=self._permissions(path),
            modification=self._modification(path),
        )
        if isinstance(selector, MutableMapping):
            selector.update(record.to_dict())
            return selector
        return record

    def symlink_attributes(
        self,
        path: str,
        selector: str | MutableMapping[str, Any] | None = None,
    ) -> FileAttributes | MutableMapping[str, Any] | Any:
        """Return the attributes of *path* itself.

        The host has no symbolic links, so this is ``attributes``.
        """
        return self.attributes(path, selector)

    # -- Working directory -------------------------------------------------

    def change_directory(self, path: str) -> None:
        """Make *path* the session's working directory.

        Raises:
            FsError: ``NOT_A_DIRECTORY`` if *path* is missing or not a
                directory.  The working directory is left unchanged.

        """
        if not self._host.is_dir(path):
            raise self._fail(ErrorKind.NOT_A_DIRECTORY, "Not a directory", path)
        self._session.set_dir(path)
        self._log(LogLevel.INFO, "chdir", path)

    def current_directory(self) -> str:
        """Return the session's working directory."""
        return self._session.dir()

    # -- Directory iteration -----------------------------------------------

    def iterate_directory(self, path: str) -> DirectoryIterator:
        """Return a cursor over the entries of directory *path*.

        The listing is taken now; later changes to the directory are
        not reflected.

        Raises:
            FsError: ``NOT_A_DIRECTORY`` if *path* is not a directory.

        """
        if not self._host.is_dir(path):
            raise self._fail(ErrorKind.NOT_A_DIRECTORY, "Not a directory", path)
        return DirectoryIterator(self._host, path, list(self._host.list(path)))

    # -- Mutations ---------------------------------------------------------

    def make_directory(self, path: str) -> None:
        """Create directory *path*.

        Raises:
            FsError: ``IO_ERROR`` carrying the host's message if the host
                refuses.

        """
        try:
            self._host.make_dir(path)
        except OSError as e:
            raise self._fail(ErrorKind.IO_ERROR, str(e), path) from e
        self._log(LogLevel.INFO, "mkdir", path)

    def remove_directory(self, path: str) -> None:
        """Remove *path* through the host's generic delete.

        Unlike POSIX ``rmdir`` this does not check that *path* is an empty
        directory: non-empty directories and plain files are removed too.

        Raises:
            FsError: ``IO_ERROR`` carrying the host's message if the host
                refuses.

        """
        try:
            self._host.delete(path)
        except OSError as e:
            raise self._fail(ErrorKind.IO_ERROR, str(e), path) from e
        self._log(LogLevel.INFO, "rmdir", path)

    def touch(self, path: str, atime: int | None = None, mtime: int | None = None) -> None:  # noqa: ARG002
        """Bump the modification time of *path* to now.

        The host can only update a file's modification time by writing to
        it, so an empty line is appended.  A missing file is created.
        Directories are left alone: the host has no way to touch one.
        *atime* and *mtime* are accepted but have no effect.

        Raises:
            FsError: ``READ_ONLY`` if the path is read-only, ``IO_ERROR``
                if the file cannot be opened.

        """
        if self._host.is_read_only(path):
            raise self._fail(ErrorKind.READ_ONLY, "Path is read-only", path)

        if self._host.is_dir(path):
            return

        try:
            handle = self._host.open(path, "a")
        except OSError as e:
            raise self._fail(ErrorKind.IO_ERROR, "Failed to open file", path) from e
        if handle is None:
            raise self._fail(ErrorKind.IO_ERROR, "Failed to open file", path)

        try:
            handle.write_line("")
        except OSError as e:
            raise self._fail(ErrorKind.IO_ERROR, str(e), path) from e
        finally:
            handle.close()
        self._log(LogLevel.INFO, "touch", path)

    # -- Unsupported -------------------------------------------------------

    def _unsupported(self, operation: str) -> UnsupportedOperationError:
        self._log(LogLevel.ERROR, f"{operation}: not implemented")
        return UnsupportedOperationError(operation)

    def lock_directory(self, *args: object, **kwargs: object) -> None:  # noqa: ARG002
        """Create a lock file in a directory (no host support)."""
        raise self._unsupported("lock_directory")

    def lock(self, *args: object, **kwargs: object) -> None:  # noqa: ARG002
        """Lock a region of an open file (no host support)."""
        raise self._unsupported("lock")

    def unlock(self, *args: object, **kwargs: object) -> None:  # noqa: ARG002
        """Unlock a region of an open file (no host support)."""
        raise self._unsupported("unlock")

    def link(self, *args: object, **kwargs: object) -> None:  # noqa: ARG002
        """Create a hard or symbolic link (no host support)."""
        raise self._unsupported("link")

    def set_mode(self, *args: object, **kwargs: object) -> None:  # noqa: ARG002
        """Switch a file between binary and text mode (no host support)."""
        raise self._unsupported("set_mode")

    # LuaFileSystem names, for callers ported from ``lfs``.
    symlinkattributes = symlink_attributes
    chdir = change_directory
    currentdir = current_directory
    dir = iterate_directory
    lock_dir = lock_directory
    mkdir = make_directory
    rmdir = remove_directory
    setmode = set_mode
