"""Audit log for adapter activity.

Every mutation the adapter forwards to the host (mkdir, rmdir, touch,
chdir) and every failure it reports is recorded here, so a caller can
see afterwards what was asked of the host and what the host refused.

- **LogLevel** — severity levels ordered for filtering (DEBUG < ERROR).
- **LogEntry** — a single structured record (level, message, source, path).
- **Logger** — an append-only buffer with filtering and clearing.

The buffer lives in memory.  Hosts of this kind usually have no
writable system log, and a caller that wants one can drain ``entries``
into whatever sink it has.
"""

from dataclasses import dataclass
from enum import IntEnum


class LogLevel(IntEnum):
    """Severity levels for log entries.

    Using IntEnum means levels compare with ``<`` / ``>`` naturally,
    which makes minimum-level filtering trivial.
    """

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass(frozen=True)
class LogEntry:
    """A single structured log record.

    Attributes:
        level: The severity of this event.
        message: A human-readable description of what happened.
        source: The component that generated the event (e.g. "hostfs").
        path: The host path the event concerns, if any.

    """

    level: LogLevel
    message: str
    source: str
    path: str | None = None

    def __str__(self) -> str:
        """Format as ``[LEVEL] source: message (path)``."""
        text = f"[{self.level.name}] {self.source}: {self.message}"
        if self.path is not None:
            text += f" ({self.path})"
        return text


class Logger:
    """Append-only log buffer with filtering."""

    def __init__(self) -> None:
        """Create an empty logger."""
        self._entries: list[LogEntry] = []

    @property
    def entries(self) -> list[LogEntry]:
        """Return all log entries in chronological order."""
        return list(self._entries)

    def log(
        self,
        level: LogLevel,
        message: str,
        *,
        source: str,
        path: str | None = None,
    ) -> None:
        """Append a new entry to the log.

        Args:
            level: Severity of the event.
            message: Human-readable event description.
            source: Component that generated the event.
            path: Host path associated with the event.

        """
        self._entries.append(LogEntry(level=level, message=message, source=source, path=path))

    def filter(
        self,
        *,
        min_level: LogLevel | None = None,
        source: str | None = None,
    ) -> list[LogEntry]:
        """Return entries matching the given criteria.

        Args:
            min_level: If set, only return entries at or above this level.
            source: If set, only return entries from this source.

        Returns:
            A filtered list of log entries.

        """
        result = self._entries
        if min_level is not None:
            result = [e for e in result if e.level >= min_level]
        if source is not None:
            result = [e for e in result if e.source == source]
        return result if result is not self._entries else list(result)

    def clear(self) -> None:
        """Remove all log entries."""
        self._entries.clear()
