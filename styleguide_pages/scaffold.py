"""Create a starter configuration and documentation assets.

``styleguide init`` copies the files under ``styleguide_pages/scaffold`` into
the target directory: a commented ``styleguide_config.yml``, header and footer
partials, a stylesheet, and the default code example templates. An existing
configuration file is never overwritten.
"""

from __future__ import annotations

import shutil
import typing as typ
from pathlib import Path

from ._constants import CONFIG_FILENAME

if typ.TYPE_CHECKING:
    from .diagnostics import Diagnostics

SCAFFOLD_DIR = Path(__file__).parent / "scaffold"


def setup_dir(target: Path, diagnostics: Diagnostics) -> list[Path]:
    """Copy the scaffold into ``target`` unless it already holds a config file.

    Returns
    -------
    list[Path]
        Files and directories created, relative to ``target``; empty when the
        configuration already existed.
    """
    if (target / CONFIG_FILENAME).exists():
        diagnostics.warning(
            f"Cowardly refusing to overwrite existing {CONFIG_FILENAME}"
        )
        return []

    created: list[Path] = []
    for source in sorted(SCAFFOLD_DIR.rglob("*")):
        relative = source.relative_to(SCAFFOLD_DIR)
        destination = target / relative
        if source.is_dir():
            if not destination.exists():
                destination.mkdir(parents=True)
                created.append(relative)
            continue
        if destination.exists():
            continue
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(source, destination)
        created.append(relative)
    for path in created:
        diagnostics.info(f"Created: {path}")
    return created


__all__ = ["SCAFFOLD_DIR", "setup_dir"]
