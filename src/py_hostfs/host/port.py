"""Host capability protocols — everything the adapter asks of a host.

The adapter never touches a real disk itself.  It talks to a *host*: a
sandboxed filesystem API supplied by the surrounding runtime.  These
protocols pin down exactly which primitives that host must offer, so any
object with the right methods can be plugged in (structural typing, no
base class required).

Paths are host paths: plain strings, interpreted by the host.  The
adapter only ever builds new paths through ``combine``.

Bindings
--------
- ``MemoryHost`` — in-memory tree, used by the tests.
- ``LocalHost`` — a directory on the real disk, confined under a root.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping


@runtime_checkable
class HostFile(Protocol):
    """An open host file handle."""

    @abstractmethod
    def write(self, text: str) -> None:
        """Write *text* at the end of the handle's output."""
        ...

    @abstractmethod
    def write_line(self, text: str) -> None:
        """Write *text* followed by a newline."""
        ...

    @abstractmethod
    def close(self) -> None:
        """Flush and release the handle."""
        ...


@runtime_checkable
class HostFilesystem(Protocol):
    """The restricted filesystem primitives a host provides.

    Query methods never raise for a missing path; they answer ``False``
    or ``0``.  ``make_dir`` and ``delete`` raise ``OSError`` when the
    host refuses the operation.
    """

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Return True if *path* names a file or directory."""
        ...

    @abstractmethod
    def is_dir(self, path: str) -> bool:
        """Return True if *path* names a directory."""
        ...

    @abstractmethod
    def is_read_only(self, path: str) -> bool:
        """Return True if *path* cannot be written."""
        ...

    @abstractmethod
    def get_size(self, path: str) -> int:
        """Return the size of *path* in bytes."""
        ...

    @abstractmethod
    def list(self, path: str) -> list[str]:
        """Return the entry names of directory *path*, in host order.

        Raises:
            OSError: If *path* is not a directory.

        """
        ...

    @abstractmethod
    def combine(self, path: str, name: str) -> str:
        """Join a directory path and an entry name into a host path."""
        ...

    @abstractmethod
    def make_dir(self, path: str) -> None:
        """Create directory *path*.

        Raises:
            OSError: If the host refuses.

        """
        ...

    @abstractmethod
    def delete(self, path: str) -> None:
        """Delete *path*, whatever it is.

        Raises:
            OSError: If the host refuses.

        """
        ...

    @abstractmethod
    def open(self, path: str, mode: str) -> HostFile | None:
        """Open *path* with mode ``"r"``, ``"w"`` or ``"a"``.

        Returns:
            A handle, or None if the file cannot be opened.

        """
        ...


@runtime_checkable
class SupportsAttributes(Protocol):
    """Optional extended-attributes query.

    Not every host has one.  Those that do return a mapping carrying a
    timestamp under ``modification``, ``modified`` or ``created``.
    """

    @abstractmethod
    def attributes(self, path: str) -> Mapping[str, Any]:
        """Return the host's own attribute mapping for *path*."""
        ...


@runtime_checkable
class HostSession(Protocol):
    """The session layer that owns the current working directory."""

    @abstractmethod
    def dir(self) -> str:
        """Return the current working directory."""
        ...

    @abstractmethod
    def set_dir(self, path: str) -> None:
        """Change the current working directory."""
        ...


__all__ = ["HostFile", "HostFilesystem", "HostSession", "SupportsAttributes"]
