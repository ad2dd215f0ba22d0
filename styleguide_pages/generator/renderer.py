"""Render styleguide markdown with highlighted code, examples, and links."""

from __future__ import annotations

import re
import typing as typ
from html import escape

from markdown import Markdown

from .code_examples import CodeExampleExtension, CodeExampleRegistry
from .link_resolver import ComponentLinkExtension

if typ.TYPE_CHECKING:
    from markdown.extensions import Extension

    from styleguide_pages.diagnostics import Diagnostics

    from .link_resolver import LinkResolver
else:  # pragma: no cover - type-checking fallback
    Extension = typ.Any
    Diagnostics = typ.Any
    LinkResolver = typ.Any

CODE_BLOCK_PATTERN = re.compile(r"```([A-Za-z0-9_+#.-]+)?[^\n]*\n(.*?)```", re.DOTALL)
FENCED_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
FENCE_LABEL_PATTERN = re.compile(
    r"^([`~]{3,})([A-Za-z0-9_+#.-]+)?(,[^\r\n]+)$", re.MULTILINE
)
CODEHILITE_OPEN_TAG = re.compile(r'<div class="codehilite">')
EXAMPLE_SUFFIXES = ("_example_table", "_example")


@typ.runtime_checkable
class MarkdownRenderer(typ.Protocol):
    """Capability required from a ``custom_markdown`` renderer class.

    The builder instantiates the class once per build with keyword arguments
    ``link_resolver``, ``code_examples`` and ``diagnostics``.
    """

    def markdown(self, text: str) -> str:
        """Return the HTML fragment for ``text``."""
        ...


class HtmlContentRenderer:
    """Render markdown and code snippets with consistent styling."""

    def __init__(
        self,
        *,
        link_resolver: LinkResolver | None = None,
        code_examples: CodeExampleRegistry | None = None,
        diagnostics: Diagnostics | None = None,
        pygments_style: str = "monokai",
    ) -> None:
        """Initialize a renderer with its link and code example collaborators.

        Parameters
        ----------
        link_resolver : LinkResolver, optional
            Index used to turn component references into page links; pass
            ``None`` to leave links untouched.
        code_examples : CodeExampleRegistry, optional
            Registry rendering ``<lang>_example`` fences. Defaults to the
            built-in renderers and templates.
        diagnostics : Diagnostics, optional
            Sink receiving warnings about unresolved component references.
        pygments_style : str, optional
            Name of the Pygments style used for syntax highlighting. Defaults to
            ``"monokai"``.
        """
        self.pygments_style = pygments_style
        self.link_resolver = link_resolver
        self.diagnostics = diagnostics
        self.code_examples = code_examples or CodeExampleRegistry(
            pygments_style=pygments_style
        )

    def markdown(self, text: str) -> str:
        """Render markdown into HTML using the configured extensions."""
        normalized = self._normalize_fenced_blocks(text)
        if not normalized.strip():
            return ""
        extensions: list[Extension | str] = [
            CodeExampleExtension(self.code_examples),
            "fenced_code",
            "codehilite",
            "tables",
            "sane_lists",
        ]
        if self.link_resolver is not None:
            extensions.append(
                ComponentLinkExtension(self.link_resolver, self.diagnostics)
            )
        md = Markdown(
            extensions=extensions,
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.pygments_style,
                }
            },
        )
        html = md.convert(normalized)
        return self._annotate_codehilite(html, normalized)

    def _annotate_codehilite(self, html: str, source_markdown: str) -> str:
        """Attach language metadata to each highlighted block in converted markdown."""
        languages = [
            match.group(1) or "text"
            for match in CODE_BLOCK_PATTERN.finditer(source_markdown)
            if not self._is_rendered_example(match.group(1) or "")
        ]
        if not languages:
            return html
        lang_iter = iter(languages)

        def _repl(match: re.Match[str]) -> str:
            lang = next(lang_iter, "text")
            return (
                f'<div class="codehilite" data-language="{escape(lang, quote=True)}">'
            )

        return CODEHILITE_OPEN_TAG.sub(_repl, html, len(languages))

    def _is_rendered_example(self, language: str) -> bool:
        """Return whether ``language`` is an example fence the registry replaces."""
        for suffix in EXAMPLE_SUFFIXES:
            if language.endswith(suffix):
                return self.code_examples.get(language.removesuffix(suffix)) is not None
        return False

    @staticmethod
    def _normalize_fenced_blocks(text: str) -> str:
        without_indent = FENCED_INDENT_PATTERN.sub(r"\1", text)

        def _strip_labels(match: re.Match[str]) -> str:
            fence, language, _extras = match.groups()
            label = language or ""
            return f"{fence}{label}"

        return FENCE_LABEL_PATTERN.sub(_strip_labels, without_indent)


__all__ = ["CODE_BLOCK_PATTERN", "HtmlContentRenderer", "MarkdownRenderer"]
