"""Render every page of a parsed styleguide into the destination directory.

Each page gets a fresh :class:`~styleguide_pages.generator.models.RenderContext`
holding its title, file name and blocks, plus read-only views of the full page
map, category index and raw configuration. Template pages are rendered as-is;
markdown pages are converted to HTML and wrapped in the header and footer
partials. Pages never depend on each other's output, only on the indexes built
before rendering starts, so the write order is simply the page map's order.

Example
-------
>>> from pathlib import Path
>>> from styleguide_pages.generator import HtmlContentRenderer, PageRenderer
>>> from styleguide_pages.generator.models import CategoryIndex, MarkdownPage
>>> renderer = PageRenderer(
...     output_dir=Path("docs"), markdown_renderer=HtmlContentRenderer()
... )  # doctest: +SKIP
>>> renderer.render_all({"intro.html": MarkdownPage(markdown="# Hi")}, CategoryIndex())  # doctest: +SKIP
[PosixPath('docs/intro.html')]
"""

from __future__ import annotations

import typing as typ

from jinja2 import TemplateError

from styleguide_pages.errors import ParserContractError, TemplateRenderError
from styleguide_pages.materializer import write_page

from .models import CategoryIndex, MarkdownPage, RenderContext, TemplatePage
from .templating import compile_template, template_environment

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from jinja2 import Environment, Template

    from .models import Page, PageMap
    from .renderer import MarkdownRenderer


def page_title(file_name: str, page: Page, categories: CategoryIndex) -> str:
    """Return the title for ``page``.

    Markdown pages without blocks (plain markdown files) have no title. Every
    other page takes the label of the first category mapped to its file.
    """
    if isinstance(page, MarkdownPage) and not page.blocks:
        return ""
    return categories.label_for(file_name) or ""


class PageRenderer:
    """Turn page map entries into HTML files on disk."""

    def __init__(
        self,
        *,
        output_dir: Path,
        markdown_renderer: MarkdownRenderer,
        header: Template | None = None,
        footer: Template | None = None,
        config: cabc.Mapping[str, typ.Any] | None = None,
        env: Environment | None = None,
    ) -> None:
        """Initialize the renderer.

        Parameters
        ----------
        output_dir : Path
            Existing destination directory.
        markdown_renderer : MarkdownRenderer
            Converts markdown page bodies to HTML; already wired to the link
            resolver for this build.
        header, footer : Template, optional
            Compiled partials wrapped around markdown pages.
        config : Mapping[str, Any], optional
            Raw configuration mapping exposed to templates as ``config``.
        env : Environment, optional
            Jinja environment used to compile template pages.
        """
        self.output_dir = output_dir
        self.markdown_renderer = markdown_renderer
        self.header = header
        self.footer = footer
        self.config = dict(config or {})
        self.env = env or template_environment()

    def render_all(self, pages: PageMap, categories: CategoryIndex) -> list[Path]:
        """Render and write every page in ``pages``.

        Returns
        -------
        list[Path]
            Written files in page map order.

        Raises
        ------
        ParserContractError
            If a page is keyed by an empty file name.
        TemplateCompileError
            If a template page does not compile.
        TemplateRenderError
            If a template fails while rendering.
        """
        written: list[Path] = []
        for file_name, page in pages.items():
            if not file_name:
                msg = "The parser produced a page without a file name."
                raise ParserContractError(msg)
            context = RenderContext.build(
                title=page_title(file_name, page, categories),
                file_name=file_name,
                blocks=page.blocks if isinstance(page, MarkdownPage) else [],
                pages=pages,
                categories=categories,
                config=self.config,
            )
            html = self.render(file_name, page, context)
            written.append(write_page(self.output_dir, file_name, html))
        return written

    def render(self, file_name: str, page: Page, context: RenderContext) -> str:
        """Return the full HTML for one page."""
        match page:
            case TemplatePage(source=source):
                template = compile_template(source, name=file_name, env=self.env)
                return self._render_template(template, context, file_name)
            case MarkdownPage(markdown=markdown):
                parts = [
                    self._render_template(self.header, context, file_name),
                    self.markdown_renderer.markdown(markdown),
                    self._render_template(self.footer, context, file_name),
                ]
                return "".join(parts)
            case _:  # pragma: no cover - exhaustive over Page
                typ.assert_never(page)

    @staticmethod
    def _render_template(
        template: Template | None, context: RenderContext, file_name: str
    ) -> str:
        if template is None:
            return ""
        try:
            return template.render(context.as_template_vars())
        except TemplateError as exc:
            msg = f"Could not render template for '{file_name}': {exc}"
            raise TemplateRenderError(msg) from exc


__all__ = ["PageRenderer", "page_title"]
