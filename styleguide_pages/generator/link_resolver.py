"""Resolve component references to the page and anchor that document them.

Markdown can point at another component either with an ordinary link whose
target is the bare component name (``[see the button](button)``) or with a
wiki-style reference (``[[button]]`` or ``[[the button|button]]``). Both are
rewritten to ``<page>.html#<component>`` using an index built once from the
full page map before any page is rendered.
"""

from __future__ import annotations

import collections.abc as cabc
import re
import typing as typ
import xml.etree.ElementTree as etree
from urllib.parse import urlsplit

from markdown.extensions import Extension
from markdown.inlinepatterns import InlineProcessor
from markdown.treeprocessors import Treeprocessor

from .models import MarkdownPage

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from markdown import Markdown

    from styleguide_pages.diagnostics import Diagnostics

    from .models import PageMap
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Element = typ.Any
    Diagnostics = typ.Any
    PageMap = typ.Any

WIKI_LINK_PATTERN = re.compile(r"\[\[(?:([^\]|]+)\|)?([^\]|]+)\]\]")
COMPONENT_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class LinkTarget(typ.TypedDict):
    """One page's entry in the link index."""

    name: str
    component_names: list[str]


class LinkResolver:
    """Map component names to ``page#anchor`` URLs.

    Examples
    --------
    >>> resolver = LinkResolver([{"name": "base_css.html", "component_names": ["button"]}])
    >>> resolver.resolve("button")
    'base_css.html#button'
    >>> resolver.resolve("missing") is None
    True
    """

    def __init__(self, pages: cabc.Iterable[LinkTarget]) -> None:
        self._links: dict[str, str] = {}
        for page in pages:
            for component in page["component_names"]:
                self._links.setdefault(component, page["name"])

    @classmethod
    def from_pages(cls, pages: PageMap) -> LinkResolver:
        """Index every block name on every markdown page of ``pages``."""
        targets: list[LinkTarget] = []
        for file_name, page in pages.items():
            names: list[str] = []
            if isinstance(page, MarkdownPage):
                names = list(_walk_names(page.blocks))
            targets.append({"name": file_name, "component_names": names})
        return cls(targets)

    def __contains__(self, component: object) -> bool:
        return component in self._links

    def resolve(self, component: str) -> str | None:
        page = self._links.get(component)
        if page is None:
            return None
        return f"{page}#{component}"


def _walk_names(blocks: cabc.Iterable[typ.Any]) -> cabc.Iterator[str]:
    for block in blocks:
        yield block.name
        yield from _walk_names(block.children)


class ComponentLinkExtension(Extension):
    """Rewrite component references in markdown using a :class:`LinkResolver`."""

    def __init__(
        self, resolver: LinkResolver, diagnostics: Diagnostics | None = None
    ) -> None:
        super().__init__()
        self.resolver = resolver
        self.diagnostics = diagnostics

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the reference pattern and the link treeprocessor.

        The reference pattern sits below ``backtick`` (190) and ``escape``
        (180) so code spans and escaped brackets are claimed first, and above
        ``reference`` (170) so ``[[name]]`` is never read as a bracketed link.
        """
        md.inlinePatterns.register(
            WikiLinkInlineProcessor(self.resolver, self.diagnostics),
            "styleguide_wiki_links",
            175,
        )
        md.treeprocessors.register(
            ComponentLinkTreeprocessor(md, self.resolver),
            "styleguide_component_links",
            15,
        )


class WikiLinkInlineProcessor(InlineProcessor):
    """Turn ``[[component]]`` and ``[[label|component]]`` into page links."""

    def __init__(
        self, resolver: LinkResolver, diagnostics: Diagnostics | None = None
    ) -> None:
        super().__init__(WIKI_LINK_PATTERN.pattern)
        self.resolver = resolver
        self.diagnostics = diagnostics

    def handleMatch(  # type: ignore[override]  # noqa: N802
        self, m: re.Match[str], data: str
    ) -> tuple[Element | None, int | None, int | None]:
        label, component = m.group(1), m.group(2).strip()
        url = self.resolver.resolve(component)
        if url is None:
            if self.diagnostics is not None:
                self.diagnostics.warning(
                    f"Could not resolve link to component '{component}'."
                )
            return None, None, None
        anchor = etree.Element("a")
        anchor.set("href", url)
        anchor.text = (label or component).strip()
        return anchor, m.start(0), m.end(0)


class ComponentLinkTreeprocessor(Treeprocessor):
    """Point anchors whose href is a bare component name at its page."""

    def __init__(self, md: Markdown, resolver: LinkResolver) -> None:
        super().__init__(md)
        self.resolver = resolver

    def run(self, root: Element) -> Element:
        for element in root.iter("a"):
            rewritten = self._rewrite(element.get("href"))
            if rewritten:
                element.set("href", rewritten)
        return root

    def _rewrite(self, target: str | None) -> str | None:
        if not target or not COMPONENT_NAME_PATTERN.match(target):
            return None
        parsed = urlsplit(target)
        if parsed.scheme or parsed.netloc or parsed.fragment:
            return None
        return self.resolver.resolve(parsed.path)


__all__ = [
    "ComponentLinkExtension",
    "ComponentLinkTreeprocessor",
    "LinkResolver",
    "LinkTarget",
    "WikiLinkInlineProcessor",
]
