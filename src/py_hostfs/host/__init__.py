"""Host subsystem — capability protocols and the bindings that implement them.

Re-exports public symbols so callers can write::

    from py_hostfs.host import MemoryHost, Session
"""

from py_hostfs.host.local import LocalFile, LocalHost
from py_hostfs.host.memory import MemoryFile, MemoryHost
from py_hostfs.host.persistence import dump_host, load_host
from py_hostfs.host.port import HostFile, HostFilesystem, HostSession, SupportsAttributes
from py_hostfs.host.session import Session

__all__ = [
    "HostFile",
    "HostFilesystem",
    "HostSession",
    "LocalFile",
    "LocalHost",
    "MemoryFile",
    "MemoryHost",
    "Session",
    "SupportsAttributes",
    "dump_host",
    "load_host",
]
