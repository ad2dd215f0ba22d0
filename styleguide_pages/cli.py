"""Cyclopts CLI entrypoint for building styleguides from documented sources.

The ``styleguide`` console script builds the site described by
``styleguide_config.yml`` (or the file passed with ``--config``) and can
scaffold a starter configuration with ``styleguide init``. Arguments after the
known options are forwarded to plugins, so ``styleguide build --skip-foo``
disables the plugin named ``foo``.

Examples
--------
Build the styleguide in the current directory:

>>> from styleguide_pages.cli import main
>>> main()  # doctest: +SKIP

Build from an explicit configuration file:

>>> from styleguide_pages.cli import app
>>> app(["build", "--config", "docs/styleguide_config.yml"])  # doctest: +SKIP
"""

from __future__ import annotations

import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from ._constants import CONFIG_FILENAME
from .builder import DocBuilder
from .config import load_build_config
from .diagnostics import Diagnostics, Level
from .errors import StyleguideError
from .scaffold import setup_dir

DEFAULT_CONFIG = Path(CONFIG_FILENAME)

app = App(name="styleguide", config=cyclopts.config.Env("STYLEGUIDE_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _report(diagnostics: Diagnostics) -> None:
    """Print collected diagnostics; warnings and errors go to stderr."""
    for item in diagnostics.messages:
        stream = sys.stderr if item.level in {Level.WARNING, Level.ERROR} else sys.stdout
        print(item, file=stream)


@app.default
@app.command(help="Build the styleguide described by the configuration file.")
def build(
    *extra_args: typ.Annotated[str, Parameter(allow_leading_hyphen=True)],
    config: typ.Annotated[
        Path, Parameter(help="Path to styleguide config", env_var="STYLEGUIDE_CONFIG")
    ] = DEFAULT_CONFIG,
) -> None:
    """Build the styleguide for ``config``.

    Parameters
    ----------
    *extra_args : str
        Additional arguments forwarded untouched to plugins.
    config : Path, optional
        Path to the YAML configuration (overridable via
        ``STYLEGUIDE_CONFIG``). Relative paths inside it resolve against its
        directory.

    Returns
    -------
    None
        Writes the styleguide and prints each generated page.

    Raises
    ------
    SystemExit
        With status 1 when the configuration cannot be loaded, is invalid, or
        the build fails.
    """
    diagnostics = Diagnostics()
    try:
        build_config = load_build_config(config, extra_args)
        diagnostics.exit_on_warnings = build_config.exit_on_warnings
        builder = DocBuilder(build_config, diagnostics)
        succeeded = builder.build()
    except (OSError, StyleguideError) as exc:
        _report(diagnostics)
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if builder.result is not None:
        for path in builder.result.pages:
            print(f"wrote {_format_path(path)}")
    _report(diagnostics)
    if not succeeded:
        raise SystemExit(1)


@app.command(help="Create a starter styleguide_config.yml and documentation assets.")
def init(
    *,
    directory: typ.Annotated[
        Path, Parameter(help="Directory to scaffold into")
    ] = Path(),
) -> None:
    """Scaffold a new styleguide project inside ``directory``."""
    diagnostics = Diagnostics()
    setup_dir(directory.resolve(), diagnostics)
    _report(diagnostics)


def main() -> None:
    """Invoke the Cyclopts application that powers the `styleguide` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
