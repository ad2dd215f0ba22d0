"""Check that a :class:`BuildConfig` names usable directories.

Validation never raises. It returns human-readable messages and the caller
decides whether to abort. Every check runs on every pass.

Examples
--------
>>> from pathlib import Path
>>> from styleguide_pages.config import BuildConfig
>>> validate(BuildConfig(destination=Path("out"), documentation_assets=Path("a")))
['No source directory specified in the config file']
"""

from __future__ import annotations

import typing as typ

from .config import real_dir

if typ.TYPE_CHECKING:
    from .config import BuildConfig


def validate(config: BuildConfig) -> list[str]:
    """Return the validation errors for ``config``; empty means valid."""
    errors: list[str] = []
    errors.extend(_source_errors(config))
    if config.destination is None:
        errors.append("No destination directory specified in the config")
    if config.documentation_assets is None:
        errors.append("No documentation assets directory specified")
    return errors


def _source_errors(config: BuildConfig) -> list[str]:
    errors: list[str] = []
    if not config.source:
        errors.append("No source directory specified in the config file")
    errors.extend(
        f"Can not read source directory ({directory or ''}), does it exist?"
        for directory in config.source
        if real_dir(directory) is None
    )
    return errors


__all__ = ["validate"]
