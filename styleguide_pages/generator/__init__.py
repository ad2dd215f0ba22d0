"""Utilities for rendering parsed styleguide pages to HTML."""

from .code_examples import CodeExampleRegistry, ExampleRenderer
from .link_resolver import ComponentLinkExtension, LinkResolver
from .models import (
    CategoryIndex,
    ContentBlock,
    MarkdownPage,
    Page,
    PageMap,
    RenderContext,
    TemplatePage,
)
from .page_renderer import PageRenderer, page_title
from .renderer import HtmlContentRenderer, MarkdownRenderer

__all__ = [
    "CategoryIndex",
    "CodeExampleRegistry",
    "ComponentLinkExtension",
    "ContentBlock",
    "ExampleRenderer",
    "HtmlContentRenderer",
    "LinkResolver",
    "MarkdownPage",
    "MarkdownRenderer",
    "Page",
    "PageMap",
    "PageRenderer",
    "RenderContext",
    "TemplatePage",
    "page_title",
]
