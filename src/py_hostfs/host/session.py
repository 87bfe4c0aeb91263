"""Session state — the current working directory.

On the hosts this package targets, the working directory belongs to the
shell session, not to the filesystem: the filesystem API only knows
root-relative paths and the shell keeps track of "where you are".
``Session`` is the in-process stand-in for that shell.  It is injected
into the adapter rather than kept in a module global, so every adapter
(and every test) can have its own.
"""


class Session:
    """Hold the current working directory for one adapter."""

    def __init__(self, initial: str = "") -> None:
        """Create a session.

        Args:
            initial: Starting directory.  ``""`` is the host root.

        """
        self._dir = initial

    def dir(self) -> str:
        """Return the current working directory."""
        return self._dir

    def set_dir(self, path: str) -> None:
        """Change the current working directory (no validation)."""
        self._dir = path

    def __repr__(self) -> str:
        """Return a readable representation."""
        return f"Session(dir={self._dir!r})"
