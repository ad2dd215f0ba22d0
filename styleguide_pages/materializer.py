"""Write generated pages and copy static trees into the destination.

Page writes and asset copies propagate filesystem errors: a destination that
cannot be written aborts the build. Dependency copies are best effort; each
failure becomes a warning and the remaining dependencies are still copied.
"""

from __future__ import annotations

import shutil
import typing as typ

from ._constants import RESERVED_ASSET_PREFIX
from .config import real_dir

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from .diagnostics import Diagnostics


def write_page(output_dir: Path, file_name: str, content: str) -> Path:
    """Write ``content`` to ``output_dir/file_name``, replacing any existing file."""
    path = output_dir / file_name
    with path.open("w", encoding="utf-8") as handle:
        handle.write(content)
    return path


def _remove(path: Path) -> None:
    """Delete a file, symlink, or directory tree at ``path`` if present."""
    if path.is_symlink() or path.is_file():
        path.unlink()
    elif path.is_dir():
        shutil.rmtree(path)


def _copy_entry(source: Path, target: Path) -> None:
    _remove(target)
    if source.is_dir():
        shutil.copytree(source, target)
    else:
        shutil.copy2(source, target)


def copy_assets(assets_dir: Path | None, output_dir: Path) -> list[Path]:
    """Copy every public entry of ``assets_dir`` into ``output_dir``.

    Entries whose names start with an underscore (header, footer, and other
    partials) are skipped. A same-named entry already in ``output_dir`` is
    removed before copying so stale files never linger.

    Returns
    -------
    list[Path]
        Destination paths of the copied entries.
    """
    if assets_dir is None:
        return []
    copied: list[Path] = []
    for entry in sorted(assets_dir.iterdir()):
        if entry.name in {".", ".."} or entry.name.startswith(RESERVED_ASSET_PREFIX):
            continue
        target = output_dir / entry.name
        _copy_entry(entry, target)
        copied.append(target)
    return copied


def copy_dependencies(
    dependencies: cabc.Iterable[Path],
    output_dir: Path,
    diagnostics: Diagnostics,
) -> list[Path]:
    """Copy each dependency directory into ``output_dir`` under its base name.

    Parameters
    ----------
    dependencies : Iterable[Path]
        Configured dependency directories.
    output_dir : Path
        Destination directory.
    diagnostics : Diagnostics
        Sink receiving a warning for every missing dependency or failed copy.
        Paths that exist but are not directories are skipped silently.

    Returns
    -------
    list[Path]
        Destination paths of the dependencies that were copied.
    """
    copied: list[Path] = []
    for dependency in dependencies:
        if dependency.exists() and not dependency.is_dir():
            continue
        source = real_dir(dependency)
        if source is None:
            diagnostics.warning(f"Could not copy dependency: {dependency}")
            continue
        target = output_dir / source.name
        try:
            _copy_entry(source, target)
        except OSError:
            diagnostics.warning(f"Could not copy dependency: {dependency}")
            continue
        copied.append(target)
    return copied


__all__ = ["copy_assets", "copy_dependencies", "write_page"]
