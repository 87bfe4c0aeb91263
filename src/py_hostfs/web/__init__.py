"""Browser-facing inspection API for a filesystem adapter.

This package provides a Flask application that exposes an adapter's
read-only queries over HTTP.  It is an **optional** extra — install with::

    pip install py-hostfs[web]

The ``create_app`` factory in ``app.py`` serves three endpoints:

- ``GET /api/attributes?path=...`` — the attribute record of a path.
- ``GET /api/dir?path=...`` — the entries of a directory.
- ``GET /api/cwd`` — the session's working directory.
"""
