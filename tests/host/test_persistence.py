"""Tests for memory-host snapshots.

A memory host can be written to JSON and read back, so a tree built in
one process (or one test fixture) can be reused in another.
"""

import json
from pathlib import Path

from py_hostfs.adapter import FileSystemAdapter
from py_hostfs.host.memory import MemoryHost
from py_hostfs.host.persistence import dump_host, load_host
from py_hostfs.host.session import Session


def _clock() -> int:
    return 500


class TestSnapshots:
    """Verify that host state survives save/load cycles."""

    def test_empty_host(self, tmp_path: Path) -> None:
        """An empty host reloads empty."""
        path = tmp_path / "host.json"
        dump_host(MemoryHost(), path)
        assert load_host(path).list("") == []

    def test_tree_and_data(self, tmp_path: Path) -> None:
        """Directories, file data and timestamps come back."""
        host = MemoryHost(clock=_clock)
        host.write_file("docs/readme.md", b"# docs")
        host.make_dir("empty")
        path = tmp_path / "host.json"
        dump_host(host, path)

        loaded = load_host(path)
        assert loaded.list("") == ["docs", "empty"]
        assert loaded.read_file("docs/readme.md") == b"# docs"
        assert loaded.attributes("docs/readme.md")["modified"] == 500

    def test_binary_data(self, tmp_path: Path) -> None:
        """Bytes that are not valid text survive the JSON file."""
        host = MemoryHost()
        host.write_file("blob.bin", bytes(range(256)))
        path = tmp_path / "host.json"
        dump_host(host, path)
        assert load_host(path).read_file("blob.bin") == bytes(range(256))

    def test_read_only_flags(self, tmp_path: Path) -> None:
        """Read-only subtrees stay read-only."""
        host = MemoryHost()
        host.write_file("rom/boot.lua", b"")
        host.mark_read_only("rom")
        path = tmp_path / "host.json"
        dump_host(host, path)
        assert load_host(path).is_read_only("rom/boot.lua")

    def test_file_is_json(self, tmp_path: Path) -> None:
        """The snapshot is plain JSON with a root node."""
        path = tmp_path / "host.json"
        dump_host(MemoryHost(), path)
        data = json.loads(path.read_text())
        assert data["root"]["kind"] == "directory"

    def test_loaded_host_serves_adapter(self, tmp_path: Path) -> None:
        """An adapter works on a reloaded host."""
        host = MemoryHost(clock=_clock)
        host.write_file("notes.txt", b"hi")
        path = tmp_path / "host.json"
        dump_host(host, path)
        fs = FileSystemAdapter(load_host(path, clock=_clock), Session())
        assert fs.attributes("notes.txt", "size") == 2
        assert fs.attributes("notes.txt", "modification") == 500
