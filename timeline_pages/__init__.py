"""Export outline documents as filterable timeline pages.

This package exposes the ``timeline`` CLI along with the library entry points
used to render an outline into a single timeline HTML page and to filter an
exported page by category.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.
- ``export_to_string`` / ``export_to_file`` / ``publish``: export entry points.

Examples
--------
>>> from timeline_pages import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main
from .exporter import export_to_file, export_to_string, publish

__all__ = ["app", "export_to_file", "export_to_string", "main", "publish"]
