"""Turn source directories into a styleguide page map.

:class:`DocParser` walks each input directory, extracts documentation
comments from supported files, nests blocks under their parents, and groups
top-level blocks into one page per category. Standalone ``.md`` files become
untitled markdown pages and ``.html`` files become template pages, both keyed
by their base name.

Example
-------
>>> from pathlib import Path
>>> from styleguide_pages.diagnostics import Diagnostics
>>> parser = DocParser([Path("src")], diagnostics=Diagnostics())  # doctest: +SKIP
>>> pages, categories = parser.parse()  # doctest: +SKIP
>>> sorted(pages)  # doctest: +SKIP
['base_css.html', 'index.html']
"""

from __future__ import annotations

import collections.abc as cabc
import fnmatch
import typing as typ
from html import escape
from pathlib import Path

from styleguide_pages._constants import (
    DEFAULT_NAV_LEVEL,
    INDEX_FILENAME,
    page_file_name,
)
from styleguide_pages.config.helpers import _as_tuple
from styleguide_pages.diagnostics import Diagnostics
from styleguide_pages.errors import ParserError
from styleguide_pages.generator.models import (
    CategoryIndex,
    ContentBlock,
    MarkdownPage,
    PageMap,
    TemplatePage,
)

from .comments import extract_comments

if typ.TYPE_CHECKING:
    from styleguide_pages.plugins import Plugins

SUPPORTED_EXTENSIONS = (
    ".css",
    ".scss",
    ".sass",
    ".less",
    ".styl",
    ".js",
    ".jsx",
    ".ts",
    ".tsx",
    ".md",
    ".html",
)
MAX_HEADING_LEVEL = 6


class DocParser:
    """Collect documentation blocks from source directories into pages."""

    def __init__(
        self,
        input_dirs: cabc.Sequence[Path],
        index: str | None = None,
        plugins: Plugins | None = None,
        *,
        nav_level: str = DEFAULT_NAV_LEVEL,
        custom_extensions: cabc.Sequence[str] = (),
        ignore_paths: cabc.Sequence[str] = (),
        diagnostics: Diagnostics | None = None,
    ) -> None:
        """Initialize the parser.

        Parameters
        ----------
        input_dirs : Sequence[Path]
            Existing directories to scan, in priority order.
        index : str, optional
            Category whose page is written as ``index.html``.
        plugins : Plugins, optional
            Plugin host notified of every block and of the final page map.
        nav_level : str, optional
            ``page`` adds no navigation, ``section`` lists each top-level
            block's children under its heading, ``all`` additionally opens
            every page with links to its top-level blocks.
        custom_extensions : Sequence[str], optional
            Extra extensions (with leading dot) to scan.
        ignore_paths : Sequence[str], optional
            Glob patterns, relative to each input directory, to skip.
        diagnostics : Diagnostics, optional
            Sink for skipped-comment warnings.
        """
        self.input_dirs = list(input_dirs)
        self.index = index
        self.plugins = plugins
        self.nav_level = nav_level
        self.extensions = SUPPORTED_EXTENSIONS + tuple(custom_extensions)
        self.ignore_paths = tuple(ignore_paths)
        self.diagnostics = diagnostics or Diagnostics()

    def parse(self) -> tuple[PageMap, CategoryIndex]:
        """Scan every input directory and build the page map.

        Returns
        -------
        tuple[PageMap, CategoryIndex]
            Pages keyed by output file name and the category associations.

        Raises
        ------
        ParserError
            If a source file is not UTF-8, front matter is malformed, or a
            block names a missing parent.
        """
        pages: PageMap = {}
        blocks: dict[str, ContentBlock] = {}
        for input_dir in self.input_dirs:
            for path in self._source_files(input_dir):
                self._parse_file(path, pages, blocks)

        categories = CategoryIndex()
        roots = self._nest(blocks)
        for block in roots:
            for category in block.categories:
                file_name = self._category_file(category)
                categories.add(category, file_name)
                page = pages.setdefault(file_name, MarkdownPage())
                if isinstance(page, TemplatePage):
                    self.diagnostics.warning(
                        f"Category '{category}' collides with template page "
                        f"{file_name}; component '{block.name}' is not rendered there."
                    )
                    continue
                page.blocks.append(block)
        for page in pages.values():
            if isinstance(page, MarkdownPage) and page.blocks:
                page.markdown = self._page_markdown(page.blocks)

        if self.plugins is not None:
            self.plugins.finalize(pages)
        return pages, categories

    def _category_file(self, category: str) -> str:
        if self.index and category == self.index:
            return INDEX_FILENAME
        return page_file_name(category)

    def _source_files(self, input_dir: Path) -> list[Path]:
        files: list[Path] = []
        for path in sorted(input_dir.rglob("*")):
            relative = path.relative_to(input_dir)
            if any(part.startswith(".") for part in relative.parts):
                continue
            if not path.is_file() or path.suffix not in self.extensions:
                continue
            if self._ignored(relative.as_posix()):
                continue
            files.append(path)
        return files

    def _ignored(self, relative: str) -> bool:
        for pattern in self.ignore_paths:
            cleaned = pattern.strip("/")
            if fnmatch.fnmatch(relative, cleaned) or fnmatch.fnmatch(
                relative, f"{cleaned}/*"
            ):
                return True
        return False

    def _parse_file(
        self, path: Path, pages: PageMap, blocks: dict[str, ContentBlock]
    ) -> None:
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            msg = f"{path}: not valid UTF-8 ({exc.reason} at byte {exc.start})"
            raise ParserError(msg) from exc
        if path.suffix == ".md":
            pages[f"{path.stem}.html"] = MarkdownPage(blocks=[], markdown=text)
            return
        if path.suffix == ".html":
            pages[path.name] = TemplatePage(source=text)
            return
        try:
            comments = extract_comments(text)
        except ParserError as exc:
            msg = f"{path}: {exc}"
            raise ParserError(msg) from exc
        for comment in comments:
            block = self._make_block(comment.front_matter, comment.markdown, path)
            if block is None:
                self.diagnostics.warning(
                    f"Skipping doc comment without a name in {path}:{comment.line}"
                )
                continue
            if block.name in blocks:
                self.diagnostics.warning(
                    f"Duplicate component '{block.name}' in {path}:{comment.line}; "
                    "keeping the first definition."
                )
                continue
            if self.plugins is not None:
                self.plugins.block(block, path)
            blocks[block.name] = block

    @staticmethod
    def _make_block(
        front_matter: dict[str, typ.Any], markdown: str, path: Path
    ) -> ContentBlock | None:
        name = front_matter.get("name")
        if not name:
            return None
        categories = [
            str(item)
            for item in _as_tuple(front_matter.get("category"))
            + _as_tuple(front_matter.get("categories"))
        ]
        parent = front_matter.get("parent")
        return ContentBlock(
            name=str(name),
            title=str(front_matter.get("title") or name),
            categories=categories,
            parent=str(parent) if parent else None,
            markdown=markdown,
            config=front_matter,
            source_file=path,
        )

    def _nest(self, blocks: dict[str, ContentBlock]) -> list[ContentBlock]:
        """Attach children to parents and return the top-level blocks."""
        roots: list[ContentBlock] = []
        for block in blocks.values():
            if block.parent is None:
                if not block.categories:
                    self.diagnostics.warning(
                        f"Component '{block.name}' has no category or parent "
                        "and will not be rendered."
                    )
                    continue
                roots.append(block)
                continue
            parent = blocks.get(block.parent)
            if parent is None:
                msg = (
                    f"Component '{block.name}' names parent '{block.parent}', "
                    "which does not exist."
                )
                raise ParserError(msg)
            parent.children.append(block)
        return roots

    def _page_markdown(self, blocks: list[ContentBlock]) -> str:
        chunks: list[str] = []
        if self.nav_level == "all":
            chunks.append(_nav_list(blocks, "page-nav"))
        for block in blocks:
            chunks.extend(self._block_markdown(block, 1))
        return "\n\n".join(chunk for chunk in chunks if chunk) + "\n"

    def _block_markdown(self, block: ContentBlock, level: int) -> list[str]:
        heading_level = min(level, MAX_HEADING_LEVEL)
        chunks = [
            f'<h{heading_level} id="{escape(block.name, quote=True)}" '
            f'class="styleguide">{escape(block.title)}</h{heading_level}>',
        ]
        if level == 1 and self.nav_level in {"section", "all"} and block.children:
            chunks.append(_nav_list(block.children, "section-nav"))
        chunks.append(block.markdown)
        for child in block.children:
            chunks.extend(self._block_markdown(child, level + 1))
        return chunks


def _nav_list(blocks: cabc.Iterable[ContentBlock], css_class: str) -> str:
    items = "".join(
        f'<li><a href="#{escape(block.name, quote=True)}">{escape(block.title)}</a></li>'
        for block in blocks
    )
    return f'<ul class="{css_class}">{items}</ul>'


__all__ = ["SUPPORTED_EXTENSIONS", "DocParser"]
