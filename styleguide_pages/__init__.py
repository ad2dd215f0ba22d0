"""Build static styleguide sites from documentation comments in source files.

This package discovers ``/*doc ... */`` comments in stylesheets and scripts,
groups the documented components into category pages, renders them through
markdown and Jinja partials, and copies assets and dependencies next to the
generated HTML.

Exports
-------
- ``DocBuilder``: Runs one complete build for a ``BuildConfig``.
- ``load_build_config``: Reads ``styleguide_config.yml`` into a ``BuildConfig``.
- ``app``: Cyclopts application behind the ``styleguide`` command.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from pathlib import Path
>>> from styleguide_pages import DocBuilder, load_build_config
>>> DocBuilder(load_build_config(Path("styleguide_config.yml"))).build()  # doctest: +SKIP
True
"""

from __future__ import annotations

from .builder import DocBuilder
from .cli import app, main
from .config import BuildConfig, load_build_config
from .diagnostics import Diagnostics

__all__ = ["BuildConfig", "Diagnostics", "DocBuilder", "app", "load_build_config", "main"]
