"""Typed dataclasses describing a resolved styleguide build configuration."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from styleguide_pages._constants import DEFAULT_NAV_LEVEL

from .helpers import real_dir

if typ.TYPE_CHECKING:
    from styleguide_pages.generator.renderer import MarkdownRenderer


@dc.dataclass(frozen=True, slots=True)
class BuildConfig:
    """Options for a single styleguide build.

    Every path is absolute, already joined onto ``base_path``; whether it
    exists is decided later by the validator and :class:`ResolvedDirs`.

    Attributes
    ----------
    source : tuple[Path or None, ...]
        Directories scanned for documentation comments. Always a tuple, even
        when the configuration names a single directory. Blank list entries
        are kept as ``None`` so validation can report them.
    destination : Path or None
        Output directory; created on demand by the build.
    documentation_assets : Path or None
        Directory holding header/footer partials and static assets.
    base_path : Path
        Directory relative paths were resolved against (the config file's
        directory when loaded from YAML).
    dependencies : tuple[Path, ...]
        Externally built directories copied into the destination.
    index : str or None
        Category whose page is written as ``index.html``.
    nav_level : str
        One of ``page``, ``section`` or ``all``.
    custom_extensions : tuple[str, ...]
        Extra file extensions scanned for documentation comments.
    ignore_paths : tuple[str, ...]
        Glob patterns excluded from scanning.
    code_example_templates : Path or None
        Directory with custom code example templates.
    code_example_renderers : Path or None
        Directory with Python modules registering code example renderers.
    renderer : type[MarkdownRenderer] or None
        Markdown renderer class selected by ``custom_markdown``; ``None`` uses
        the built-in renderer.
    plugins : tuple[str, ...]
        Plugin object references (``module:attr`` or ``file.py:attr``).
    exit_on_warnings : bool
        Treat the first warning as a fatal error.
    raw : dict[str, Any]
        The configuration mapping exactly as loaded, exposed to templates.
    extra_args : tuple[str, ...]
        Unparsed CLI arguments forwarded to plugins.
    """

    source: tuple[Path | None, ...] = ()
    destination: Path | None = None
    documentation_assets: Path | None = None
    base_path: Path = dc.field(default_factory=Path.cwd)
    dependencies: tuple[Path, ...] = ()
    index: str | None = None
    nav_level: str = DEFAULT_NAV_LEVEL
    custom_extensions: tuple[str, ...] = ()
    ignore_paths: tuple[str, ...] = ()
    code_example_templates: Path | None = None
    code_example_renderers: Path | None = None
    renderer: type[MarkdownRenderer] | None = None
    plugins: tuple[str, ...] = ()
    exit_on_warnings: bool = False
    raw: dict[str, typ.Any] = dc.field(default_factory=dict)
    extra_args: tuple[str, ...] = ()


@dc.dataclass(frozen=True, slots=True)
class ResolvedDirs:
    """Existing directories backing a :class:`BuildConfig`.

    The destination usually does not exist before the first build, so the
    builder resolves these once for validation and again after creating it.
    """

    output_dir: Path | None
    doc_assets_dir: Path | None
    input_dirs: tuple[Path, ...]

    @classmethod
    def from_config(cls, config: BuildConfig) -> ResolvedDirs:
        """Resolve every configured directory that exists on disk."""
        inputs = tuple(
            resolved for resolved in map(real_dir, config.source) if resolved
        )
        return cls(
            output_dir=real_dir(config.destination),
            doc_assets_dir=real_dir(config.documentation_assets),
            input_dirs=inputs,
        )


__all__ = ["BuildConfig", "ResolvedDirs"]
