"""Load user plugins and fan parser events out to them.

Plugins are listed under ``plugins:`` in the configuration as
``package.module:attr`` or ``path/to/plugin.py:attr`` references (``attr``
defaults to ``Plugin``). A class is instantiated with the raw configuration
mapping and the extra command-line arguments; any other object is used as-is.
Both hooks are optional:

- ``block(block, source_file)`` runs for every parsed documentation block.
- ``finalize(pages)`` runs once with the complete page map.

A plugin whose ``name`` (default: lower-cased class name) appears as
``--skip-<name>`` in the extra arguments is loaded but never called.
"""

from __future__ import annotations

import typing as typ

from .config.helpers import load_object

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from .config import BuildConfig
    from .generator.models import ContentBlock, PageMap


class Plugins:
    """The set of plugins active for one build."""

    def __init__(
        self,
        references: cabc.Iterable[str],
        config: cabc.Mapping[str, typ.Any],
        extra_args: cabc.Sequence[str] = (),
        *,
        base_path: Path,
    ) -> None:
        self.extra_args = tuple(extra_args)
        self.loaded: list[typ.Any] = []
        for reference in references:
            target = load_object(
                str(reference), base_path=base_path, default_attr="Plugin"
            )
            if isinstance(target, type):
                target = target(config, self.extra_args)
            self.loaded.append(target)

    @classmethod
    def from_config(cls, config: BuildConfig) -> Plugins:
        return cls(
            config.plugins, config.raw, config.extra_args, base_path=config.base_path
        )

    @staticmethod
    def plugin_name(plugin: object) -> str:
        name = getattr(plugin, "name", None)
        if isinstance(name, str) and name:
            return name
        return type(plugin).__name__.lower()

    @property
    def active(self) -> list[typ.Any]:
        """Plugins not disabled with ``--skip-<name>``."""
        return [
            plugin
            for plugin in self.loaded
            if f"--skip-{self.plugin_name(plugin)}" not in self.extra_args
        ]

    def block(self, block: ContentBlock, source_file: Path) -> None:
        for plugin in self.active:
            hook = getattr(plugin, "block", None)
            if callable(hook):
                hook(block, source_file)

    def finalize(self, pages: PageMap) -> None:
        for plugin in self.active:
            hook = getattr(plugin, "finalize", None)
            if callable(hook):
                hook(pages)


__all__ = ["Plugins"]
