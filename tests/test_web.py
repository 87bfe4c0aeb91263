"""Tests for the HTTP inspection API.

The web extra exposes an adapter's read-only queries as JSON.  Tests use
``pytest.importorskip`` so they are skipped gracefully when Flask is not
installed.
"""

from __future__ import annotations

from typing import Any

import pytest

flask = pytest.importorskip("flask")

from py_hostfs.adapter import FileSystemAdapter  # noqa: E402
from py_hostfs.host.memory import MemoryHost  # noqa: E402
from py_hostfs.host.session import Session  # noqa: E402
from py_hostfs.web.app import create_app  # noqa: E402

HTTP_OK = 200
HTTP_BAD_REQUEST = 400
HTTP_NOT_FOUND = 404


def _adapter() -> FileSystemAdapter:
    """Create an adapter over a small memory host."""
    host = MemoryHost(clock=lambda: 42)
    host.write_file("notes.txt", b"hello")
    host.make_dir("docs")
    return FileSystemAdapter(host, Session("docs"))


def _create_client() -> Any:
    """Create a test client from a fresh app."""
    app = create_app(_adapter())
    app.config["TESTING"] = True
    return app.test_client()


class TestAppCreation:
    """Verify the app factory."""

    def test_create_app_returns_flask(self) -> None:
        """create_app should return a Flask application."""
        assert isinstance(create_app(_adapter()), flask.Flask)


class TestAttributesEndpoint:
    """Verify GET /api/attributes."""

    def test_file(self) -> None:
        """A file's record comes back as JSON."""
        response = _create_client().get("/api/attributes?path=notes.txt")
        assert response.status_code == HTTP_OK
        data = response.get_json()
        assert data["mode"] == "file"
        assert data["size"] == 5
        assert data["modification"] == 42

    def test_missing_path(self) -> None:
        """A missing path maps to 404 with the error kind."""
        response = _create_client().get("/api/attributes?path=nope")
        assert response.status_code == HTTP_NOT_FOUND
        data = response.get_json()
        assert data["kind"] == "not_found"
        assert data["error"] == "File does not exist"

    def test_missing_parameter(self) -> None:
        """The path parameter is required."""
        response = _create_client().get("/api/attributes")
        assert response.status_code == HTTP_BAD_REQUEST


class TestDirEndpoint:
    """Verify GET /api/dir."""

    def test_root_listing(self) -> None:
        """The root is listed when no path is given."""
        response = _create_client().get("/api/dir")
        assert response.status_code == HTTP_OK
        data = response.get_json()
        assert data["entries"] == [
            {"name": "docs", "is_dir": True},
            {"name": "notes.txt", "is_dir": False},
        ]

    def test_not_a_directory(self) -> None:
        """Listing a file is a 400."""
        response = _create_client().get("/api/dir?path=notes.txt")
        assert response.status_code == HTTP_BAD_REQUEST
        assert response.get_json()["kind"] == "not_a_directory"


class TestCwdEndpoint:
    """Verify GET /api/cwd."""

    def test_cwd(self) -> None:
        """The session's directory is reported."""
        response = _create_client().get("/api/cwd")
        assert response.get_json() == {"cwd": "docs"}
