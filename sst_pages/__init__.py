"""Utilities for checking and building the SST documentation site.

This package exposes the CLI entry points used by ``uv run pages`` to
validate ``site/_config.yml`` and the content collections, render them to
static HTML, and refresh the GitHub counters shown on the site.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from sst_pages import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
