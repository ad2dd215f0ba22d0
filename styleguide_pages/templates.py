"""Locate and compile the templates that wrap generated pages.

Header and footer partials live in the documentation assets directory. Both
are optional: a missing partial is reported as a warning and pages render
without it. A partial that exists but does not compile aborts the build
immediately, before any page is written, since it would break every page.

Examples
--------
>>> from styleguide_pages.diagnostics import Diagnostics
>>> sink = Diagnostics()
>>> partials = load_header_footer(None, sink)
>>> partials.header is None and len(sink.warnings) == 2
True
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from ._constants import FOOTER_CANDIDATES, HEADER_CANDIDATES
from .config import real_dir
from .generator.code_examples import CodeExampleRegistry
from .generator.templating import compile_template, template_environment

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from jinja2 import Environment, Template

    from .config import BuildConfig
    from .diagnostics import Diagnostics

MISSING_HEADER_WARNING = (
    "No _header.html found in documentation assets. Without this your "
    "css/header will not be included on the generated pages."
)
MISSING_FOOTER_WARNING = (
    "No _footer.html found in documentation assets. This might be okay to ignore..."
)


@dc.dataclass(frozen=True, slots=True)
class HeaderFooter:
    """Compiled page partials; either may be absent."""

    header: Template | None = None
    footer: Template | None = None


def load_header_footer(
    assets_dir: Path | None,
    diagnostics: Diagnostics,
    *,
    env: Environment | None = None,
) -> HeaderFooter:
    """Compile the header and footer partials found in ``assets_dir``.

    Parameters
    ----------
    assets_dir : Path or None
        Resolved documentation assets directory; ``None`` when it does not
        exist, in which case both partials are reported missing.
    diagnostics : Diagnostics
        Sink receiving the missing-partial warnings.
    env : Environment, optional
        Environment to compile with; defaults to :func:`template_environment`.

    Returns
    -------
    HeaderFooter
        The compiled partials.

    Raises
    ------
    TemplateCompileError
        If a partial exists but is not a valid template.
    """
    env = env or template_environment()
    header = _load_partial(assets_dir, HEADER_CANDIDATES, env)
    if header is None:
        diagnostics.warning(MISSING_HEADER_WARNING)
    footer = _load_partial(assets_dir, FOOTER_CANDIDATES, env)
    if footer is None:
        diagnostics.warning(MISSING_FOOTER_WARNING)
    return HeaderFooter(header=header, footer=footer)


def _load_partial(
    assets_dir: Path | None, candidates: cabc.Sequence[str], env: Environment
) -> Template | None:
    if assets_dir is None:
        return None
    for name in candidates:
        path = assets_dir / name
        if path.is_file():
            source = path.read_text(encoding="utf-8")
            return compile_template(source, name=name, env=env)
    return None


def load_code_examples(
    config: BuildConfig, *, pygments_style: str = "monokai"
) -> CodeExampleRegistry:
    """Build the code example registry, applying any configured overrides."""
    registry = CodeExampleRegistry(
        custom_templates=real_dir(config.code_example_templates),
        pygments_style=pygments_style,
    )
    renderers_dir = real_dir(config.code_example_renderers)
    if renderers_dir is not None:
        registry.load_renderers(renderers_dir)
    registry.compile_templates()
    return registry


__all__ = [
    "MISSING_FOOTER_WARNING",
    "MISSING_HEADER_WARNING",
    "HeaderFooter",
    "compile_template",
    "load_code_examples",
    "load_header_footer",
    "template_environment",
]
