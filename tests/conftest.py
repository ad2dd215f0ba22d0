"""Shared fixtures building a small styleguide project on disk.

``styleguide_site`` lays out a complete project under ``tmp_path``:

* ``src/components/buttons.css`` documents ``button`` (category "Base CSS")
  with a nested ``button-primary`` block and an ``html_example`` fence.
* ``src/components/grid.css`` documents ``grid`` in the "Basics" category,
  which is configured as the index.
* ``src/about.html`` is a template page listing the categories.
* ``doc_assets`` holds header/footer partials, a reserved ``_partial.html``,
  a stylesheet, and an ``images`` directory.
* ``vendor/bundle`` is a dependency directory.

The configuration lives in ``styleguide_config.yml`` with a destination of
``build/`` that does not exist yet.
"""

from __future__ import annotations

import dataclasses as dc
import textwrap
from pathlib import Path

import pytest

BUTTONS_CSS = textwrap.dedent(
    """\
    /*doc
    ---
    title: Buttons
    name: button
    category: Base CSS
    ---

    Buttons come in several flavours. See [[the grid|grid]] for layout.

    ```html_example
    <button class="btn">Click</button>
    ```
    */
    .btn { padding: 4px; }

    /*doc
    ---
    title: Primary
    name: button-primary
    parent: button
    ---
    Use `.btn-primary` for the main call to action.
    */
    .btn-primary { color: blue; }
    """
)

GRID_CSS = textwrap.dedent(
    """\
    /*doc
    ---
    title: Grid
    name: grid
    category: Basics
    ---
    A twelve column grid. Back to [buttons](button).
    */
    .grid { display: grid; }
    """
)

ABOUT_HTML = (
    "<html><body><h1>About {{ config.title }}</h1><ul>"
    '{% for label, file in categories %}<li><a href="{{ file }}">{{ label }}</a></li>{% endfor %}'
    "</ul><p>{{ pages|length }} pages</p></body></html>\n"
)

HEADER_HTML = (
    '<header data-title="{{ title }}" data-file="{{ file_name }}">'
    "{{ config.title }}</header>\n"
)
FOOTER_HTML = "<footer>{{ categories|length }} categories</footer>\n"

CONFIG_YML = textwrap.dedent(
    """\
    title: Fixture Styleguide
    source: ./src
    destination: ./build
    documentation_assets: ./doc_assets
    index: Basics
    dependencies:
      - ./vendor/bundle
    """
)


@dc.dataclass(slots=True)
class StyleguideSite:
    """Paths of the generated fixture project."""

    root: Path
    config_path: Path
    source: Path
    assets: Path
    destination: Path
    dependency: Path


def write_site(root: Path, *, config_text: str = CONFIG_YML) -> StyleguideSite:
    """Lay out the fixture project under ``root`` and return its paths."""
    components = root / "src" / "components"
    components.mkdir(parents=True)
    (components / "buttons.css").write_text(BUTTONS_CSS, encoding="utf-8")
    (components / "grid.css").write_text(GRID_CSS, encoding="utf-8")
    (root / "src" / "about.html").write_text(ABOUT_HTML, encoding="utf-8")

    assets = root / "doc_assets"
    (assets / "images").mkdir(parents=True)
    (assets / "_header.html").write_text(HEADER_HTML, encoding="utf-8")
    (assets / "_footer.html").write_text(FOOTER_HTML, encoding="utf-8")
    (assets / "_partial.html").write_text("<aside></aside>\n", encoding="utf-8")
    (assets / "style.css").write_text("body { margin: 0; }\n", encoding="utf-8")
    (assets / "images" / "logo.svg").write_text("<svg></svg>\n", encoding="utf-8")

    dependency = root / "vendor" / "bundle"
    dependency.mkdir(parents=True)
    (dependency / "app.js").write_text("console.log('bundle');\n", encoding="utf-8")

    config_path = root / "styleguide_config.yml"
    config_path.write_text(config_text, encoding="utf-8")
    return StyleguideSite(
        root=root,
        config_path=config_path,
        source=root / "src",
        assets=assets,
        destination=root / "build",
        dependency=dependency,
    )


@pytest.fixture
def styleguide_site(tmp_path: Path) -> StyleguideSite:
    """Return a freshly written fixture project."""
    return write_site(tmp_path / "site")
