"""Load styleguide configuration YAML into a :class:`BuildConfig`."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from styleguide_pages._constants import DEFAULT_NAV_LEVEL, NAV_LEVELS
from styleguide_pages.errors import ConfigError

from .helpers import (
    _as_tuple,
    _resolve_path,
    _resolve_paths,
    _resolve_source_paths,
    load_object,
)
from .models import BuildConfig

LOAD_FAILURE_MESSAGE = (
    "Could not load config file, check the syntax or try 'styleguide init' "
    "to get started"
)


def load_build_config(
    path: Path, extra_args: cabc.Sequence[str] = ()
) -> BuildConfig:
    """Load the YAML configuration describing a styleguide build.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``styleguide_config.yml``). Relative paths inside the file are
        resolved against its directory.
    extra_args : Sequence[str], optional
        Unparsed command-line arguments forwarded to plugins.

    Returns
    -------
    BuildConfig
        Resolved configuration with defaults applied.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    ConfigError
        If the YAML cannot be parsed or its top level is not a mapping.

    Examples
    --------
    >>> from pathlib import Path
    >>> config = load_build_config(Path("styleguide_config.yml"))  # doctest: +SKIP
    >>> config.nav_level  # doctest: +SKIP
    'page'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        with path.open("r", encoding="utf-8") as handle:
            loaded = loader.load(handle)
    except YAMLError as exc:
        raise ConfigError(LOAD_FAILURE_MESSAGE) from exc
    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        raise ConfigError(LOAD_FAILURE_MESSAGE)

    return build_config(
        dict(loaded), base_path=path.resolve().parent, extra_args=extra_args
    )


def build_config(
    options: cabc.Mapping[str, typ.Any],
    *,
    base_path: Path | None = None,
    extra_args: cabc.Sequence[str] = (),
) -> BuildConfig:
    """Merge ``options`` with defaults and resolve paths against ``base_path``.

    ``base_path`` may also be supplied inside ``options``; the keyword wins.
    When neither is given the current directory is used once, here, and the
    resulting absolute paths are used from then on.
    """
    raw = dict(options)
    base = Path(base_path or raw.get("base_path") or Path.cwd()).resolve()

    nav_level = raw.get("nav_level") or DEFAULT_NAV_LEVEL
    if nav_level not in NAV_LEVELS:
        msg = f"nav_level must be one of {', '.join(NAV_LEVELS)}; got '{nav_level}'."
        raise ConfigError(msg)

    renderer = None
    if raw.get("custom_markdown"):
        renderer = load_object(
            str(raw["custom_markdown"]), base_path=base, default_attr="Renderer"
        )
        if not isinstance(renderer, type):
            msg = f"custom_markdown '{raw['custom_markdown']}' is not a class."
            raise ConfigError(msg)

    index = raw.get("index")
    return BuildConfig(
        source=_resolve_source_paths(raw.get("source"), base),
        destination=_resolve_path(raw.get("destination"), base),
        documentation_assets=_resolve_path(raw.get("documentation_assets"), base),
        base_path=base,
        dependencies=_resolve_paths(raw.get("dependencies"), base),
        index=str(index) if index else None,
        nav_level=nav_level,
        custom_extensions=tuple(
            _normalize_extension(ext) for ext in _as_tuple(raw.get("custom_extensions"))
        ),
        ignore_paths=tuple(str(item) for item in _as_tuple(raw.get("ignore_paths"))),
        code_example_templates=_resolve_path(raw.get("code_example_templates"), base),
        code_example_renderers=_resolve_path(raw.get("code_example_renderers"), base),
        renderer=renderer,
        plugins=tuple(str(item) for item in _as_tuple(raw.get("plugins"))),
        exit_on_warnings=bool(raw.get("exit_on_warnings", False)),
        raw=raw,
        extra_args=tuple(extra_args),
    )


def _normalize_extension(value: object) -> str:
    text = str(value).strip()
    return text if text.startswith(".") else f".{text}"


__all__ = ["LOAD_FAILURE_MESSAGE", "build_config", "load_build_config"]
