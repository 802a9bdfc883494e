"""Compile static HTML sites assembled from reusable component fragments.

This package exposes the CLI entry points used by ``components build`` and
``components prettify`` to expand ``<app-NAME/>`` references into fragment
markup and re-indent the result.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from component_pages import main
>>> main(["build", "--source-dir", "site"])  # doctest: +SKIP
>>> from component_pages import app
>>> callable(app)
True
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
