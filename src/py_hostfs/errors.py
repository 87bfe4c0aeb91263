"""Error taxonomy for the filesystem adapter.

Two families of failure exist:

- ``FsError`` — a *recoverable* failure: the path is missing, is not a
  directory, is read-only, or the host refused a mutation.  Callers are
  expected to catch it.  It carries a kind, the message and a numeric
  code.  The host exposes no errno values, so the code is a fixed
  placeholder taken from the adapter configuration.

- ``UnsupportedOperationError`` — raised by operations the host cannot
  provide at all (locking, links, binary/text mode).  It derives from
  ``NotImplementedError`` rather than ``FsError`` so that a generic
  ``except FsError`` handler does not hide it.
"""

from enum import StrEnum

DEFAULT_ERROR_CODE = 42
"""Placeholder diagnostic code reported alongside every ``FsError``."""


class ErrorKind(StrEnum):
    """The category of an adapter failure."""

    NOT_FOUND = "not_found"
    NOT_A_DIRECTORY = "not_a_directory"
    READ_ONLY = "read_only"
    IO_ERROR = "io_error"
    NOT_IMPLEMENTED = "not_implemented"


class FsError(Exception):
    """Raise when a filesystem operation fails in a recoverable way.

    Attributes:
        kind: The category of the failure.
        message: Human-readable description (the host's own message when
            a host primitive raised).
        code: Placeholder diagnostic code.

    """

    def __init__(self, kind: ErrorKind, message: str, code: int = DEFAULT_ERROR_CODE) -> None:
        """Create an error of the given kind."""
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.code = code

    def __repr__(self) -> str:
        """Return a readable representation."""
        return f"FsError(kind={self.kind!s}, message={self.message!r}, code={self.code})"


class UnsupportedOperationError(NotImplementedError):
    """Raise when the host has no capability backing an operation."""

    kind = ErrorKind.NOT_IMPLEMENTED

    def __init__(self, operation: str) -> None:
        """Create an error naming the unsupported operation."""
        super().__init__(f"{operation}: not implemented")
        self.operation = operation


class ConfigError(RuntimeError):
    """Raise when an adapter configuration file cannot be loaded."""
