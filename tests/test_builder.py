"""End-to-end tests for ``DocBuilder``.

The ``styleguide_site`` fixture from ``conftest.py`` lays out two documented
stylesheets, one template page, header/footer partials, plain assets, and a
dependency directory. These tests run complete builds against it and inspect
the destination with BeautifulSoup.
"""

from __future__ import annotations

import os
import typing as typ

import pytest
from bs4 import BeautifulSoup

from styleguide_pages.builder import DocBuilder
from styleguide_pages.config import build_config, load_build_config
from styleguide_pages.diagnostics import Diagnostics, Level
from styleguide_pages.errors import (
    ParserContractError,
    TemplateCompileError,
    WarningsAsErrors,
)
from styleguide_pages.generator import CategoryIndex, MarkdownPage

if typ.TYPE_CHECKING:
    from pathlib import Path

    from conftest import StyleguideSite


def _soup(path: Path) -> BeautifulSoup:
    return BeautifulSoup(path.read_text(encoding="utf-8"), "html.parser")


def _builder(site: StyleguideSite, **overrides: typ.Any) -> tuple[DocBuilder, Diagnostics]:
    config = load_build_config(site.config_path)
    if overrides:
        config = build_config({**config.raw, **overrides}, base_path=config.base_path)
    diagnostics = Diagnostics(exit_on_warnings=config.exit_on_warnings)
    return DocBuilder(config, diagnostics), diagnostics


def test_builds_styleguide(styleguide_site: StyleguideSite) -> None:
    builder, diagnostics = _builder(styleguide_site)
    assert builder.build() is True

    destination = styleguide_site.destination
    html_files = sorted(path.name for path in destination.glob("*.html"))
    assert html_files == ["about.html", "base_css.html", "index.html"]
    assert diagnostics.warnings == []
    assert [d.level for d in diagnostics.messages] == [Level.SUCCESS]


def test_markdown_pages_wrapped_in_partials(styleguide_site: StyleguideSite) -> None:
    builder, _ = _builder(styleguide_site)
    builder.build()
    destination = styleguide_site.destination

    base = _soup(destination / "base_css.html")
    assert base.header["data-title"] == "Base CSS"
    assert base.header.get_text() == "Fixture Styleguide"
    assert base.footer.get_text() == "2 categories"
    assert base.select_one("h1#button").get_text() == "Buttons"
    assert base.select_one("h2#button-primary").get_text() == "Primary"
    assert base.select_one(".codeExample .exampleOutput button.btn") is not None
    grid_link = base.find("a", string="the grid")
    assert grid_link["href"] == "index.html#grid"

    index = _soup(destination / "index.html")
    assert index.header["data-title"] == "Basics"
    assert index.find("a", string="buttons")["href"] == "base_css.html#button"


def test_template_page_not_wrapped(styleguide_site: StyleguideSite) -> None:
    builder, _ = _builder(styleguide_site)
    builder.build()
    about = _soup(styleguide_site.destination / "about.html")
    assert about.header is None
    assert about.footer is None
    assert about.h1.get_text() == "About Fixture Styleguide"
    assert [a["href"] for a in about.select("li a")] == ["base_css.html", "index.html"]
    assert about.p.get_text() == "3 pages"


def test_dependencies_and_assets_copied(styleguide_site: StyleguideSite) -> None:
    builder, _ = _builder(styleguide_site)
    builder.build()
    destination = styleguide_site.destination
    assert (destination / "bundle" / "app.js").is_file()
    assert (destination / "style.css").is_file()
    assert (destination / "images" / "logo.svg").is_file()
    assert not (destination / "_header.html").exists()
    assert not (destination / "_partial.html").exists()
    assert builder.result is not None
    assert [path.name for path in builder.result.dependencies] == ["bundle"]


def test_rebuild_overwrites_previous_output(styleguide_site: StyleguideSite) -> None:
    builder, _ = _builder(styleguide_site)
    builder.build()
    (styleguide_site.assets / "style.css").write_text("body { margin: 1px; }\n", encoding="utf-8")
    stale = styleguide_site.destination / "bundle" / "stale.js"
    stale.write_text("old", encoding="utf-8")

    rebuilt, _ = _builder(styleguide_site)
    assert rebuilt.build() is True
    assert not stale.exists()
    css = (styleguide_site.destination / "style.css").read_text(encoding="utf-8")
    assert "1px" in css


def test_invalid_config_writes_nothing(styleguide_site: StyleguideSite) -> None:
    builder, diagnostics = _builder(styleguide_site, source="./missing")
    assert builder.build() is False
    assert not styleguide_site.destination.exists()
    assert builder.errors == [
        f"Can not read source directory ({styleguide_site.root.resolve() / 'missing'}), does it exist?"
    ]
    assert [d.level for d in diagnostics.messages] == [Level.ERROR]


def test_unresolvable_dependency_only_warns(styleguide_site: StyleguideSite) -> None:
    builder, diagnostics = _builder(
        styleguide_site, dependencies=["./vendor/missing", "./vendor/bundle"]
    )
    assert builder.build() is True
    assert (styleguide_site.destination / "bundle" / "app.js").is_file()
    assert len(diagnostics.warnings) == 1
    assert diagnostics.warnings[0].message.startswith("Could not copy dependency")


def test_missing_partials_warn_but_build(styleguide_site: StyleguideSite) -> None:
    (styleguide_site.assets / "_header.html").unlink()
    (styleguide_site.assets / "_footer.html").unlink()
    builder, diagnostics = _builder(styleguide_site)
    assert builder.build() is True
    messages = [d.message for d in diagnostics.warnings]
    assert messages[0].startswith("No _header.html found")
    assert messages[1].startswith("No _footer.html found")
    html = (styleguide_site.destination / "base_css.html").read_text(encoding="utf-8")
    assert "<header" not in html
    assert '<h1 id="button"' in html


def test_unprefixed_partials_used_as_fallback(styleguide_site: StyleguideSite) -> None:
    (styleguide_site.assets / "_header.html").rename(styleguide_site.assets / "header.html")
    builder, diagnostics = _builder(styleguide_site)
    builder.build()
    assert diagnostics.warnings == []
    assert _soup(styleguide_site.destination / "index.html").header is not None


def test_bad_header_aborts_before_writing(styleguide_site: StyleguideSite) -> None:
    (styleguide_site.assets / "_header.html").write_text("{% if %}", encoding="utf-8")
    builder, _ = _builder(styleguide_site)
    with pytest.raises(TemplateCompileError, match="_header.html"):
        builder.build()
    assert not styleguide_site.destination.exists()


def test_missing_index_page_warns(styleguide_site: StyleguideSite) -> None:
    builder, diagnostics = _builder(styleguide_site, index="Nowhere")
    assert builder.build() is True
    assert not (styleguide_site.destination / "index.html").exists()
    assert [d.message for d in diagnostics.warnings] == [
        "Could not generate index.html, there was no content generated for the "
        "category Nowhere."
    ]


def test_exit_on_warnings_aborts(styleguide_site: StyleguideSite) -> None:
    builder, _ = _builder(styleguide_site, index="Nowhere", exit_on_warnings=True)
    with pytest.raises(WarningsAsErrors):
        builder.build()


def test_parser_contract_violation_aborts(
    styleguide_site: StyleguideSite, mocker: typ.Any
) -> None:
    parser = mocker.Mock()
    parser.parse.return_value = (
        {"": MarkdownPage(blocks=[], markdown="x")},
        CategoryIndex(),
    )
    factory = mocker.Mock(return_value=parser)
    config = load_build_config(styleguide_site.config_path)
    builder = DocBuilder(config, Diagnostics(), parser_factory=factory)

    with pytest.raises(ParserContractError):
        builder.build()
    args, kwargs = factory.call_args
    assert args[0] == [styleguide_site.source.resolve()]
    assert args[1] == "Basics"
    assert kwargs["nav_level"] == "page"


def test_working_directory_untouched(styleguide_site: StyleguideSite) -> None:
    before = os.getcwd()
    builder, _ = _builder(styleguide_site)
    builder.build()
    assert os.getcwd() == before

    (styleguide_site.assets / "_footer.html").write_text("{{", encoding="utf-8")
    failing, _ = _builder(styleguide_site)
    with pytest.raises(TemplateCompileError):
        failing.build()
    assert os.getcwd() == before
