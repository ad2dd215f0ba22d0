"""Utility helpers shared by the styleguide configuration loader."""

from __future__ import annotations

import importlib
import importlib.util
import typing as typ
from pathlib import Path

from styleguide_pages.errors import ConfigError


def _as_tuple(value: object) -> tuple[typ.Any, ...]:
    """Wrap scalars in a tuple; ``None`` and blank YAML values become empty."""
    match value:
        case None | "":
            return ()
        case list() | tuple():
            return tuple(item for item in value if item is not None)
        case _:
            return (value,)


def _resolve_path(value: object, base_path: Path) -> Path | None:
    """Return ``value`` as an absolute path joined onto ``base_path``."""
    if value is None or value == "":
        return None
    path = Path(str(value)).expanduser()
    if not path.is_absolute():
        path = base_path / path
    return path


def _resolve_paths(value: object, base_path: Path) -> tuple[Path, ...]:
    resolved = (_resolve_path(item, base_path) for item in _as_tuple(value))
    return tuple(path for path in resolved if path is not None)


def _resolve_source_paths(value: object, base_path: Path) -> tuple[Path | None, ...]:
    """Resolve a source list, keeping blank entries as ``None`` for validation."""
    match value:
        case list() | tuple():
            return tuple(_resolve_path(item, base_path) for item in value)
        case _:
            return _resolve_paths(value, base_path)


def real_dir(path: Path | str | None) -> Path | None:
    """Return the canonical path of an existing directory, or ``None``."""
    if path is None:
        return None
    candidate = Path(path)
    if not candidate.is_dir():
        return None
    return candidate.resolve()


def load_object(
    reference: str, *, base_path: Path, default_attr: str | None = None
) -> typ.Any:  # noqa: ANN401 - arbitrary user object
    """Import the object named by ``reference``.

    Parameters
    ----------
    reference : str
        Either ``package.module:attr`` or ``path/to/file.py:attr``. Relative
        file paths are resolved against ``base_path``. The ``:attr`` suffix may
        be omitted when ``default_attr`` is given.
    base_path : Path
        Directory used to resolve relative file references.
    default_attr : str, optional
        Attribute looked up when ``reference`` has no ``:attr`` suffix.

    Returns
    -------
    Any
        The imported attribute.

    Raises
    ------
    ConfigError
        If the module cannot be imported or lacks the attribute.
    """
    target, sep, attr = reference.rpartition(":")
    if not sep:
        target, attr = reference, ""
    attr = attr or (default_attr or "")
    if not attr:
        msg = f"Reference '{reference}' must name an attribute as 'module:attr'."
        raise ConfigError(msg)

    try:
        if target.endswith(".py"):
            module = _load_module_from_file(_resolve_path(target, base_path))
        else:
            module = importlib.import_module(target)
    except (ImportError, OSError, SyntaxError) as exc:
        msg = f"Could not import '{target}': {exc}"
        raise ConfigError(msg) from exc

    try:
        return getattr(module, attr)
    except AttributeError as exc:
        msg = f"'{target}' has no attribute '{attr}'."
        raise ConfigError(msg) from exc


def _load_module_from_file(path: Path | None) -> typ.Any:  # noqa: ANN401
    """Execute a Python file as an anonymous module and return it."""
    if path is None or not path.is_file():
        msg = f"No such file: {path}"
        raise ImportError(msg)
    spec = importlib.util.spec_from_file_location(f"_styleguide_ext_{path.stem}", path)
    if spec is None or spec.loader is None:  # pragma: no cover - importlib guard
        msg = f"Cannot load {path}"
        raise ImportError(msg)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


__all__ = [
    "_as_tuple",
    "_load_module_from_file",
    "_resolve_path",
    "_resolve_paths",
    "_resolve_source_paths",
    "load_object",
    "real_dir",
]
