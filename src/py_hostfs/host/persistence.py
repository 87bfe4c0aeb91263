"""Host snapshots — save and load a ``MemoryHost`` to/from disk.

An in-memory host vanishes with the process.  Snapshots let a test
fixture or a long-running session keep its tree:

    - ``dump_host(host, path)`` — write the whole tree to a JSON file.
    - ``load_host(path)`` — rebuild a host from such a file.

File data is base64-encoded so binary content survives JSON.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from py_hostfs.host.memory import MemoryHost

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


def dump_host(host: MemoryHost, path: Path) -> None:
    """Save a memory host to a JSON file.

    Args:
        host: The host to save.
        path: The file path to write to.

    """
    path.write_text(json.dumps(host.to_dict(), indent=2))


def load_host(path: Path, *, clock: Callable[[], int] | None = None) -> MemoryHost:
    """Load a memory host from a JSON file.

    Args:
        path: The file path to read from.
        clock: Clock for the rebuilt host (wall clock if omitted).

    Returns:
        A reconstructed MemoryHost instance.

    Raises:
        FileNotFoundError: If the path does not exist.

    """
    data = json.loads(path.read_text())
    return MemoryHost.from_dict(data, clock=clock)
