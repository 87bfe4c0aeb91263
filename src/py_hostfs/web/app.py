"""Flask application factory for the inspection API.

The ``create_app`` function wraps an existing adapter and returns a
Flask app whose endpoints only *read*: nothing here creates, removes
or touches a path.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from flask import Flask, Response, jsonify, request

from py_hostfs.errors import ErrorKind, FsError

if TYPE_CHECKING:
    from py_hostfs.adapter import FileSystemAdapter

_HTTP_BAD_REQUEST = 400
_HTTP_NOT_FOUND = 404


def _error(e: FsError) -> tuple[Response, int]:
    """Map an adapter failure to a JSON error response."""
    status = _HTTP_NOT_FOUND if e.kind is ErrorKind.NOT_FOUND else _HTTP_BAD_REQUEST
    return jsonify({"error": e.message, "kind": str(e.kind), "code": e.code}), status


def create_app(adapter: FileSystemAdapter) -> Flask:
    """Create a Flask application serving *adapter*'s queries.

    Args:
        adapter: The adapter to expose.

    Returns:
        A configured Flask application ready to serve.

    """
    app = Flask(__name__)

    @app.route("/api/attributes")
    def attributes() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Return the attribute record of ``?path=``.

        Returns:
            JSON object of attribute names to values.

        """
        path = request.args.get("path")
        if path is None:
            return jsonify({"error": "Missing 'path' parameter"}), _HTTP_BAD_REQUEST
        try:
            record = adapter.attributes(path)
        except FsError as e:
            return _error(e)
        return jsonify(record.to_dict())

    @app.route("/api/dir")
    def directory() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Return the entries of directory ``?path=`` (root if omitted).

        Returns:
            JSON with ``path`` and an ``entries`` list of
            ``{"name", "is_dir"}`` objects.

        """
        path = request.args.get("path", "")
        try:
            entries = [entry._asdict() for entry in adapter.iterate_directory(path)]
        except FsError as e:
            return _error(e)
        return jsonify({"path": path, "entries": entries})

    @app.route("/api/cwd")
    def cwd() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return the session's working directory.

        Returns:
            JSON with a ``cwd`` field.

        """
        return jsonify({"cwd": adapter.current_directory()})

    return app
