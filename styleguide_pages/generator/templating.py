"""Jinja helpers shared by partial loading and template pages."""

from __future__ import annotations

import typing as typ

from jinja2 import Environment, TemplateSyntaxError, select_autoescape

from styleguide_pages.errors import TemplateCompileError

if typ.TYPE_CHECKING:
    from jinja2 import Template


def template_environment() -> Environment:
    """Return the Jinja environment used for partials and template pages."""
    return Environment(
        autoescape=select_autoescape(["html", "xml"], default_for_string=True),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def compile_template(source: str, *, name: str, env: Environment) -> Template:
    """Compile ``source`` once, raising :class:`TemplateCompileError` on bad syntax."""
    try:
        return env.from_string(source)
    except TemplateSyntaxError as exc:
        msg = f"Could not compile template '{name}' (line {exc.lineno}): {exc.message}"
        raise TemplateCompileError(msg) from exc


__all__ = ["compile_template", "template_environment"]
