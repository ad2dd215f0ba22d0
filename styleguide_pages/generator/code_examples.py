"""Render fenced ``<lang>_example`` blocks as live examples beside their code.

A fence labelled ``html_example`` shows the markup rendered in the page next
to its highlighted source; ``html_example_table`` does the same for several
snippets separated by blank lines. Each language has an
:class:`ExampleRenderer` naming the Pygments lexer, how to turn the snippet
into live output, and the Jinja templates used for the single and table
variants. Templates are looked up in an optional custom directory first, then
in the package's ``code_example_templates`` directory.

Custom renderers live in Python files inside ``code_example_renderers``; each
file exposes a ``RENDERERS`` iterable of :class:`ExampleRenderer`.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import re
import typing as typ
from pathlib import Path

from jinja2 import (
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    TemplateError,
    TemplateNotFound,
    select_autoescape,
)
from markdown.extensions import Extension
from markdown.preprocessors import Preprocessor
from markupsafe import Markup
from pygments import highlight
from pygments.formatters.html import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from styleguide_pages.config.helpers import _load_module_from_file
from styleguide_pages.errors import ConfigError, TemplateCompileError

if typ.TYPE_CHECKING:
    from jinja2 import Template
    from markdown import Markdown
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Template = typ.Any

PACKAGE_TEMPLATES = Path(__file__).resolve().parents[1] / "code_example_templates"
EXAMPLE_FENCE_PATTERN = re.compile(
    r"^(?P<fence>[`~]{3,})[ ]*(?P<lang>[A-Za-z0-9+#-]+)_example(?P<table>_table)?[ ]*\n"
    r"(?P<code>.*?)\n?(?P=fence)[ ]*$",
    re.DOTALL | re.MULTILINE,
)


def _passthrough(code: str) -> str:
    return code


def _script(code: str) -> str:
    return f"<script>{code}</script>"


def _babel_script(code: str) -> str:
    return f'<script type="text/babel">{code}</script>'


@dc.dataclass(frozen=True, slots=True)
class ExampleRenderer:
    """Describe how examples in one language are highlighted and rendered.

    Attributes
    ----------
    language : str
        Fence prefix, e.g. ``html`` for ``html_example``.
    lexer : str
        Pygments lexer name used for the code half.
    render_example : Callable[[str], str]
        Produces the live HTML half from the snippet source.
    example_template : str
        Template rendered for ``<lang>_example`` fences.
    table_template : str
        Template rendered for ``<lang>_example_table`` fences.
    """

    language: str
    lexer: str
    render_example: cabc.Callable[[str], str] = _passthrough
    example_template: str = "markdown_example_template.html"
    table_template: str = "markdown_table_template.html"


BUILTIN_RENDERERS = (
    ExampleRenderer("html", "html"),
    ExampleRenderer(
        "js",
        "javascript",
        render_example=_script,
        example_template="js_example_template.html",
    ),
    ExampleRenderer(
        "jsx",
        "jsx",
        render_example=_babel_script,
        example_template="jsx_example_template.html",
    ),
)


class CodeExampleRegistry:
    """Registered example renderers plus their compiled templates."""

    def __init__(
        self,
        *,
        custom_templates: Path | None = None,
        renderers: cabc.Iterable[ExampleRenderer] = BUILTIN_RENDERERS,
        pygments_style: str = "monokai",
    ) -> None:
        loaders = [FileSystemLoader(str(PACKAGE_TEMPLATES))]
        if custom_templates is not None:
            loaders.insert(0, FileSystemLoader(str(custom_templates)))
        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="highlight")
        self._renderers: dict[str, ExampleRenderer] = {}
        self._templates: dict[str, Template] = {}
        for renderer in renderers:
            self.register(renderer)

    def register(self, renderer: ExampleRenderer) -> None:
        """Add or replace the renderer for ``renderer.language``."""
        self._renderers[renderer.language] = renderer

    def load_renderers(self, directory: Path) -> None:
        """Register the ``RENDERERS`` exposed by every Python file in ``directory``."""
        for path in sorted(directory.glob("*.py")):
            try:
                module = _load_module_from_file(path)
            except (ImportError, OSError, SyntaxError) as exc:
                msg = f"Could not load code example renderer '{path}': {exc}"
                raise ConfigError(msg) from exc
            for renderer in getattr(module, "RENDERERS", ()):
                self.register(renderer)

    def compile_templates(self) -> None:
        """Compile every template named by a registered renderer.

        Raises
        ------
        TemplateCompileError
            If a template is missing or cannot be parsed.
        """
        names = {
            name
            for renderer in self._renderers.values()
            for name in (renderer.example_template, renderer.table_template)
        }
        for name in sorted(names):
            self._template(name)

    @property
    def languages(self) -> list[str]:
        return sorted(self._renderers)

    def get(self, language: str) -> ExampleRenderer | None:
        return self._renderers.get(language)

    def render(self, language: str, code: str, *, table: bool = False) -> str | None:
        """Render a snippet, or return ``None`` for unknown languages."""
        renderer = self._renderers.get(language)
        if renderer is None:
            return None
        if table:
            snippets = [chunk.strip("\n") for chunk in re.split(r"\n\s*\n", code)]
            examples = [self._example(renderer, chunk) for chunk in snippets if chunk]
            return self._template(renderer.table_template).render(examples=examples)
        context = self._example(renderer, code)
        return self._template(renderer.example_template).render(**context)

    def _example(self, renderer: ExampleRenderer, code: str) -> dict[str, Markup]:
        return {
            "rendered_example": Markup(renderer.render_example(code)),  # noqa: S704
            "code_example": Markup(self._highlight(code, renderer.lexer)),  # noqa: S704
        }

    def _highlight(self, code: str, lexer_name: str) -> str:
        try:
            lexer = get_lexer_by_name(lexer_name)
        except ClassNotFound:
            lexer = get_lexer_by_name("text")
        return highlight(code, lexer, self._formatter)

    def _template(self, name: str) -> Template:
        template = self._templates.get(name)
        if template is None:
            try:
                template = self.env.get_template(name)
            except TemplateNotFound as exc:
                msg = f"Code example template '{name}' not found."
                raise TemplateCompileError(msg) from exc
            except TemplateError as exc:
                msg = f"Could not compile code example template '{name}': {exc}"
                raise TemplateCompileError(msg) from exc
            self._templates[name] = template
        return template


class CodeExampleExtension(Extension):
    """Replace ``<lang>_example`` fences with rendered example HTML."""

    def __init__(self, registry: CodeExampleRegistry) -> None:
        super().__init__()
        self.registry = registry

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Run ahead of ``fenced_code`` so example fences never reach it."""
        md.preprocessors.register(
            CodeExamplePreprocessor(md, self.registry), "styleguide_code_examples", 27
        )


class CodeExamplePreprocessor(Preprocessor):
    """Stash rendered examples so markdown leaves their HTML untouched."""

    def __init__(self, md: Markdown, registry: CodeExampleRegistry) -> None:
        super().__init__(md)
        self.registry = registry

    def run(self, lines: list[str]) -> list[str]:
        text = "\n".join(lines)
        return EXAMPLE_FENCE_PATTERN.sub(self._replace, text).split("\n")

    def _replace(self, match: re.Match[str]) -> str:
        html = self.registry.render(
            match.group("lang"), match.group("code"), table=bool(match.group("table"))
        )
        if html is None:
            return match.group(0)
        placeholder = self.md.htmlStash.store(html)
        return f"\n\n{placeholder}\n\n"


__all__ = [
    "BUILTIN_RENDERERS",
    "CodeExampleExtension",
    "CodeExamplePreprocessor",
    "CodeExampleRegistry",
    "ExampleRenderer",
]
