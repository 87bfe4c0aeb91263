"""Adapter configuration — the knobs a host binding may need to turn.

Most hosts work with the defaults.  The usual reasons to change them:

- The host reports timestamps in milliseconds rather than seconds
  (set ``timestamp_divisor`` to 1000).
- The host's attribute query uses a different key for the modification
  time (extend ``timestamp_keys``).

A configuration can be built in code or loaded from a JSON file::

    {"error_code": 5, "timestamp_divisor": 1000}

Keys missing from the file keep their defaults.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from py_hostfs.errors import DEFAULT_ERROR_CODE, ConfigError

if TYPE_CHECKING:
    from pathlib import Path

READ_ONLY_PERMISSIONS = "r-xr-xr-x"
READ_WRITE_PERMISSIONS = "rwxrwxrwx"
TIMESTAMP_KEYS = ("modification", "modified", "created")


@dataclass(frozen=True)
class AdapterConfig:
    """Settings consumed by ``FileSystemAdapter``.

    Attributes:
        error_code: Diagnostic code attached to every ``FsError``.
        read_only_permissions: Permission string for read-only paths.
        read_write_permissions: Permission string for writable paths.
        timestamp_keys: Keys tried, in order, in the host's attribute
            mapping when looking up the modification time.
        timestamp_divisor: Host timestamps are divided by this to get
            whole seconds since the epoch.

    """

    error_code: int = DEFAULT_ERROR_CODE
    read_only_permissions: str = READ_ONLY_PERMISSIONS
    read_write_permissions: str = READ_WRITE_PERMISSIONS
    timestamp_keys: tuple[str, ...] = TIMESTAMP_KEYS
    timestamp_divisor: int = 1

    def __post_init__(self) -> None:
        """Reject settings the adapter cannot work with."""
        if self.timestamp_divisor <= 0:
            msg = f"timestamp_divisor must be positive, got {self.timestamp_divisor}"
            raise ConfigError(msg)


def load_config(path: Path) -> AdapterConfig:
    """Load an adapter configuration from a JSON file.

    Args:
        path: Path to the JSON file.

    Returns:
        The configuration, with defaults for any missing key.

    Raises:
        ConfigError: If the file cannot be read, is not a JSON object, or
            holds a value of the wrong type.

    """
    try:
        data = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        msg = f"Cannot load adapter config: {e}"
        raise ConfigError(msg) from e

    if not isinstance(data, dict):
        msg = f"Adapter config must be a JSON object: {path}"
        raise ConfigError(msg)

    error_code = _typed(data, "error_code", int, DEFAULT_ERROR_CODE)
    timestamp_divisor = _typed(data, "timestamp_divisor", int, 1)
    read_only = _typed(data, "read_only_permissions", str, READ_ONLY_PERMISSIONS)
    read_write = _typed(data, "read_write_permissions", str, READ_WRITE_PERMISSIONS)

    keys: Any = data.get("timestamp_keys", list(TIMESTAMP_KEYS))
    if not isinstance(keys, list) or not all(isinstance(k, str) for k in keys):
        msg = f"Adapter config 'timestamp_keys' must be a list of strings, got {keys!r}"
        raise ConfigError(msg)

    return AdapterConfig(
        error_code=error_code,
        read_only_permissions=read_only,
        read_write_permissions=read_write,
        timestamp_keys=tuple(keys),  # pyright: ignore[reportUnknownArgumentType]
        timestamp_divisor=timestamp_divisor,
    )


def _typed(data: dict[str, Any], key: str, kind: type, default: object) -> Any:
    """Return ``data[key]`` (or *default*), checking it has type *kind*.

    Raises:
        ConfigError: If the value has the wrong type.

    """
    value = data.get(key, default)
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        msg = f"Adapter config {key!r} must be {kind.__name__}, got {value!r}"
        raise ConfigError(msg)
    return value
