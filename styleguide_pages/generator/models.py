"""Shared dataclasses used by the page rendering pipeline."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ
from pathlib import Path  # noqa: TC003 - used for runtime type metadata
from types import MappingProxyType


@dc.dataclass(slots=True)
class ContentBlock:
    """One documented component extracted from a source comment.

    Attributes
    ----------
    name : str
        Component identifier, unique across the styleguide; used as the anchor
        for cross-page links.
    title : str
        Heading shown for the block.
    categories : list[str]
        Categories whose pages include the block.
    parent : str or None
        Name of the block this one nests under.
    markdown : str
        Markdown body (front matter removed).
    config : dict[str, Any]
        Front matter exactly as written in the comment.
    children : list[ContentBlock]
        Nested blocks in source order.
    source_file : Path or None
        File the comment came from.
    """

    name: str
    title: str = ""
    categories: list[str] = dc.field(default_factory=list)
    parent: str | None = None
    markdown: str = ""
    config: dict[str, typ.Any] = dc.field(default_factory=dict)
    children: list[ContentBlock] = dc.field(default_factory=list)
    source_file: Path | None = None


@dc.dataclass(slots=True)
class MarkdownPage:
    """Page rendered through markdown and wrapped in header/footer."""

    blocks: list[ContentBlock] = dc.field(default_factory=list)
    markdown: str = ""


@dc.dataclass(slots=True)
class TemplatePage:
    """Page whose source is rendered as a template, without header/footer."""

    source: str


Page = MarkdownPage | TemplatePage
PageMap = dict[str, Page]


class CategoryIndex(cabc.Sequence[tuple[str, str]]):
    """Ordered ``(label, file_name)`` associations between categories and pages.

    Examples
    --------
    >>> index = CategoryIndex([("Base CSS", "base_css.html")])
    >>> index.label_for("base_css.html")
    'Base CSS'
    >>> index.label_for("index.html") is None
    True
    """

    def __init__(self, entries: cabc.Iterable[tuple[str, str]] = ()) -> None:
        self._entries: list[tuple[str, str]] = list(entries)

    def add(self, label: str, file_name: str) -> None:
        """Associate ``label`` with ``file_name`` unless already present."""
        if (label, file_name) not in self._entries:
            self._entries.append((label, file_name))

    def label_for(self, file_name: str) -> str | None:
        """Return the first category label mapped to ``file_name``."""
        return next(
            (name for name, file in self._entries if file == file_name), None
        )

    @typ.overload
    def __getitem__(self, index: int) -> tuple[str, str]: ...

    @typ.overload
    def __getitem__(self, index: slice) -> list[tuple[str, str]]: ...

    def __getitem__(
        self, index: int | slice
    ) -> tuple[str, str] | list[tuple[str, str]]:
        return self._entries[index]

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"CategoryIndex({self._entries!r})"


@dc.dataclass(frozen=True, slots=True)
class RenderContext:
    """Variables available to header, footer, and template pages.

    ``pages`` and ``categories`` are shared by every page's context and
    exposed read-only.
    """

    title: str
    file_name: str
    blocks: list[ContentBlock]
    pages: cabc.Mapping[str, Page]
    categories: CategoryIndex
    config: cabc.Mapping[str, typ.Any]

    @classmethod
    def build(
        cls,
        *,
        title: str,
        file_name: str,
        blocks: cabc.Sequence[ContentBlock],
        pages: PageMap,
        categories: CategoryIndex,
        config: cabc.Mapping[str, typ.Any],
    ) -> RenderContext:
        return cls(
            title=title,
            file_name=file_name,
            blocks=list(blocks),
            pages=MappingProxyType(pages),
            categories=categories,
            config=MappingProxyType(dict(config)),
        )

    def as_template_vars(self) -> dict[str, typ.Any]:
        return {
            "title": self.title,
            "file_name": self.file_name,
            "blocks": self.blocks,
            "pages": self.pages,
            "categories": self.categories,
            "config": self.config,
        }


__all__ = [
    "CategoryIndex",
    "ContentBlock",
    "MarkdownPage",
    "Page",
    "PageMap",
    "RenderContext",
    "TemplatePage",
]
