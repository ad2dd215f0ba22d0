"""Tests for the per-page render pipeline.

These cover title derivation, the template-page vs. markdown-page dispatch,
header/footer wrapping, read-only context sharing, and the fatal failure
modes (missing file names, bad templates).
"""

from __future__ import annotations

import typing as typ

import pytest
from bs4 import BeautifulSoup

from styleguide_pages.errors import (
    ParserContractError,
    TemplateCompileError,
    TemplateRenderError,
)
from styleguide_pages.generator import (
    CategoryIndex,
    ContentBlock,
    HtmlContentRenderer,
    LinkResolver,
    MarkdownPage,
    PageRenderer,
    RenderContext,
    TemplatePage,
    page_title,
)
from styleguide_pages.generator.templating import compile_template, template_environment

if typ.TYPE_CHECKING:
    from pathlib import Path

    from styleguide_pages.generator import PageMap


@pytest.fixture
def categories() -> CategoryIndex:
    return CategoryIndex([("Base CSS", "base_css.html"), ("Alias", "base_css.html")])


@pytest.fixture
def pages() -> PageMap:
    return {
        "base_css.html": MarkdownPage(
            blocks=[ContentBlock(name="button", title="Buttons")],
            markdown='<h1 id="button">Buttons</h1>\n\nSee [[grid]] and [the grid](grid).',
        ),
        "layout.html": MarkdownPage(
            blocks=[ContentBlock(name="grid", title="Grid")],
            markdown="| a | b |\n|---|---|\n| 1 | 2 |\n",
        ),
        "notes.html": MarkdownPage(blocks=[], markdown="# Notes\n"),
        "about.html": TemplatePage("<p>{{ pages|length }} pages in {{ title or 'none' }}</p>"),
    }


def _renderer(tmp_path: Path, pages: PageMap, **kwargs: typ.Any) -> PageRenderer:
    env = template_environment()
    header = compile_template(
        '<header data-title="{{ title }}">{{ config.title }}</header>', name="h", env=env
    )
    footer = compile_template("<footer>{{ file_name }}</footer>", name="f", env=env)
    options: dict[str, typ.Any] = {
        "output_dir": tmp_path,
        "markdown_renderer": HtmlContentRenderer(
            link_resolver=LinkResolver.from_pages(pages)
        ),
        "header": header,
        "footer": footer,
        "config": {"title": "Guide"},
        "env": env,
    }
    options.update(kwargs)
    return PageRenderer(**options)


def test_empty_block_page_has_empty_title() -> None:
    categories = CategoryIndex([("Notes", "notes.html")])
    assert page_title("notes.html", MarkdownPage(blocks=[]), categories) == ""


def test_title_is_first_matching_category(
    pages: PageMap, categories: CategoryIndex
) -> None:
    assert page_title("base_css.html", pages["base_css.html"], categories) == "Base CSS"


def test_title_empty_when_no_category_matches(pages: PageMap) -> None:
    assert page_title("layout.html", pages["layout.html"], CategoryIndex()) == ""


def test_render_all_writes_every_page(
    tmp_path: Path, pages: PageMap, categories: CategoryIndex
) -> None:
    written = _renderer(tmp_path, pages).render_all(pages, categories)
    assert [path.name for path in written] == list(pages)
    assert all(path.exists() for path in written)


def test_markdown_page_wrapped_in_header_and_footer(
    tmp_path: Path, pages: PageMap, categories: CategoryIndex
) -> None:
    _renderer(tmp_path, pages).render_all(pages, categories)
    html = (tmp_path / "base_css.html").read_text(encoding="utf-8")
    assert html.startswith('<header data-title="Base CSS">Guide</header>')
    assert html.endswith("<footer>base_css.html</footer>")
    soup = BeautifulSoup(html, "html.parser")
    hrefs = [link["href"] for link in soup.select("a")]
    assert hrefs == ["layout.html#grid", "layout.html#grid"]


def test_untitled_markdown_page_header(
    tmp_path: Path, pages: PageMap, categories: CategoryIndex
) -> None:
    _renderer(tmp_path, pages).render_all(pages, categories)
    soup = BeautifulSoup((tmp_path / "notes.html").read_text(encoding="utf-8"), "html.parser")
    assert soup.header["data-title"] == ""
    assert soup.h1.get_text() == "Notes"


def test_tables_enabled(
    tmp_path: Path, pages: PageMap, categories: CategoryIndex
) -> None:
    _renderer(tmp_path, pages).render_all(pages, categories)
    soup = BeautifulSoup((tmp_path / "layout.html").read_text(encoding="utf-8"), "html.parser")
    assert [cell.get_text() for cell in soup.select("td")] == ["1", "2"]


def test_template_page_not_wrapped(
    tmp_path: Path, pages: PageMap, categories: CategoryIndex
) -> None:
    _renderer(tmp_path, pages).render_all(pages, categories)
    html = (tmp_path / "about.html").read_text(encoding="utf-8")
    assert html == "<p>4 pages in none</p>"


def test_markdown_page_without_partials(
    tmp_path: Path, pages: PageMap, categories: CategoryIndex
) -> None:
    renderer = _renderer(tmp_path, pages, header=None, footer=None)
    renderer.render_all(pages, categories)
    html = (tmp_path / "notes.html").read_text(encoding="utf-8")
    assert html.strip() == '<h1>Notes</h1>'


def test_page_without_file_name_is_fatal(
    tmp_path: Path, categories: CategoryIndex
) -> None:
    pages: PageMap = {"": MarkdownPage(blocks=[], markdown="oops")}
    with pytest.raises(ParserContractError):
        _renderer(tmp_path, pages).render_all(pages, categories)
    assert list(tmp_path.iterdir()) == []


def test_bad_template_page_is_fatal(tmp_path: Path, categories: CategoryIndex) -> None:
    pages: PageMap = {"broken.html": TemplatePage("{% for x in %}")}
    with pytest.raises(TemplateCompileError, match="broken.html"):
        _renderer(tmp_path, pages).render_all(pages, categories)


def test_template_render_failure_is_fatal(
    tmp_path: Path, categories: CategoryIndex
) -> None:
    pages: PageMap = {"broken.html": TemplatePage("{{ missing.attr.deeper }}")}
    with pytest.raises(TemplateRenderError):
        _renderer(tmp_path, pages).render_all(pages, categories)


def test_context_shares_pages_read_only(pages: PageMap, categories: CategoryIndex) -> None:
    context = RenderContext.build(
        title="t",
        file_name="base_css.html",
        blocks=[],
        pages=pages,
        categories=categories,
        config={"title": "Guide"},
    )
    assert context.pages["notes.html"] is pages["notes.html"]
    with pytest.raises(TypeError):
        context.pages["new.html"] = MarkdownPage()  # type: ignore[index]
    with pytest.raises(TypeError):
        context.config["title"] = "changed"  # type: ignore[index]
