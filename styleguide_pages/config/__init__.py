"""Load and resolve styleguide build configuration.

This subpackage parses ``styleguide_config.yml``, applies defaults, resolves
every relative path against the configuration file's directory, and produces
the frozen :class:`BuildConfig` consumed by the builder. The primary entry
point is :func:`load_build_config`; :func:`build_config` does the same for an
in-memory mapping.

Examples
--------
>>> from pathlib import Path
>>> from styleguide_pages.config import build_config
>>> config = build_config({"source": "src"}, base_path=Path("/tmp/site"))
>>> config.source
(PosixPath('/tmp/site/src'),)
"""

from .helpers import load_object, real_dir
from .loader import (
    LOAD_FAILURE_MESSAGE,
    build_config,
    load_build_config,
)
from .models import BuildConfig, ResolvedDirs

__all__ = [
    "LOAD_FAILURE_MESSAGE",
    "BuildConfig",
    "ResolvedDirs",
    "build_config",
    "load_build_config",
    "load_object",
    "real_dir",
]
