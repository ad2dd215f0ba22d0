"""High-level orchestration for a styleguide build.

This module sequences one complete build: validate the configuration, compile
the header/footer partials and code example templates, make sure the
destination exists, parse the sources, render every page, and finally copy
dependencies and documentation assets next to the generated HTML.

Validation problems stop the build before anything is written and are
reported through the diagnostics sink. Missing partials, a missing index page,
and dependencies that cannot be copied are warnings. Every other failure
raises and aborts the build; pages already written stay on disk.

Example
-------
>>> from pathlib import Path
>>> from styleguide_pages.builder import DocBuilder
>>> from styleguide_pages.config import load_build_config
>>> config = load_build_config(Path("styleguide_config.yml"))  # doctest: +SKIP
>>> DocBuilder(config).build()  # doctest: +SKIP
True
"""

from __future__ import annotations

import typing as typ

from ._constants import INDEX_FILENAME
from .config import ResolvedDirs
from .diagnostics import Diagnostics
from .generator import (
    CategoryIndex,
    HtmlContentRenderer,
    LinkResolver,
    PageRenderer,
)
from .materializer import copy_assets, copy_dependencies
from .parser import DocParser
from .plugins import Plugins
from .templates import load_code_examples, load_header_footer, template_environment
from .validator import validate

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from jinja2 import Environment

    from .config import BuildConfig
    from .generator import MarkdownRenderer, PageMap
    from .generator.code_examples import CodeExampleRegistry
    from .templates import HeaderFooter


class SourceParser(typ.Protocol):
    """Anything that can produce the page map and category index."""

    def parse(self) -> tuple[PageMap, CategoryIndex]: ...


class BuildCompleted(typ.NamedTuple):
    """Summary of a finished build."""

    pages: list[Path]
    dependencies: list[Path]
    assets: list[Path]


class DocBuilder:
    """Run a full styleguide build for one :class:`BuildConfig`."""

    def __init__(
        self,
        config: BuildConfig,
        diagnostics: Diagnostics | None = None,
        *,
        parser_factory: cabc.Callable[..., SourceParser] = DocParser,
    ) -> None:
        """Initialize the builder.

        Parameters
        ----------
        config : BuildConfig
            Resolved build options.
        diagnostics : Diagnostics, optional
            Sink receiving errors, warnings and the success message. Defaults
            to a new sink honouring ``config.exit_on_warnings``.
        parser_factory : Callable[..., SourceParser], optional
            Called with the input directories, index name, plugins and the
            ``nav_level``/``custom_extensions``/``ignore_paths``/
            ``diagnostics`` keywords; defaults to :class:`DocParser`.
        """
        self.config = config
        self.diagnostics = diagnostics or Diagnostics(
            exit_on_warnings=config.exit_on_warnings
        )
        self.parser_factory = parser_factory
        self.errors: list[str] = []
        self.dirs = ResolvedDirs.from_config(config)
        self.pages: PageMap = {}
        self.categories = CategoryIndex()
        self.result: BuildCompleted | None = None

    def is_valid(self) -> bool:
        """Re-run validation, refreshing :attr:`errors` and resolved directories."""
        self.dirs = ResolvedDirs.from_config(self.config)
        self.errors = validate(self.config)
        return not self.errors

    def build(self) -> bool:
        """Build the styleguide.

        Returns
        -------
        bool
            ``True`` once every page, dependency and asset is in place;
            ``False`` when validation failed and nothing was written.

        Raises
        ------
        StyleguideError
            For template, parser, and configuration failures after
            validation.
        OSError
            When the destination cannot be created or written.
        """
        if not self.is_valid():
            for error in self.errors:
                self.diagnostics.error(error)
            return False

        env = template_environment()
        partials = load_header_footer(
            self.dirs.doc_assets_dir, self.diagnostics, env=env
        )
        code_examples = load_code_examples(self.config)
        output_dir = self._ensure_destination()

        self.pages, self.categories = self._parse()
        self._warn_checks()
        written = self._write_docs(output_dir, partials, code_examples, env)
        dependencies = copy_dependencies(
            self.config.dependencies, output_dir, self.diagnostics
        )
        assets = copy_assets(self.dirs.doc_assets_dir, output_dir)
        self.result = BuildCompleted(written, dependencies, assets)
        self.diagnostics.success("Build completed. (-:")
        return True

    def _ensure_destination(self) -> Path:
        """Create the destination when missing and re-resolve directories."""
        if self.dirs.output_dir is None and self.config.destination is not None:
            self.config.destination.mkdir(parents=True, exist_ok=True)
            self.dirs = ResolvedDirs.from_config(self.config)
        if self.dirs.output_dir is None:  # pragma: no cover - mkdir raised already
            msg = f"Destination {self.config.destination} is not a directory."
            raise NotADirectoryError(msg)
        return self.dirs.output_dir

    def _parse(self) -> tuple[PageMap, CategoryIndex]:
        parser = self.parser_factory(
            list(self.dirs.input_dirs),
            self.config.index,
            Plugins.from_config(self.config),
            nav_level=self.config.nav_level,
            custom_extensions=self.config.custom_extensions,
            ignore_paths=self.config.ignore_paths,
            diagnostics=self.diagnostics,
        )
        return parser.parse()

    def _warn_checks(self) -> None:
        if self.config.index and INDEX_FILENAME not in self.pages:
            self.diagnostics.warning(
                "Could not generate index.html, there was no content generated "
                f"for the category {self.config.index}."
            )
        if self.dirs.doc_assets_dir is None:
            self.diagnostics.warning(
                "Could not find documentation assets at "
                f"{self.config.documentation_assets}"
            )

    def _markdown_renderer(
        self, code_examples: CodeExampleRegistry
    ) -> MarkdownRenderer:
        renderer_cls = self.config.renderer or HtmlContentRenderer
        return renderer_cls(
            link_resolver=LinkResolver.from_pages(self.pages),
            code_examples=code_examples,
            diagnostics=self.diagnostics,
        )

    def _write_docs(
        self,
        output_dir: Path,
        partials: HeaderFooter,
        code_examples: CodeExampleRegistry,
        env: Environment,
    ) -> list[Path]:
        renderer = PageRenderer(
            output_dir=output_dir,
            markdown_renderer=self._markdown_renderer(code_examples),
            header=partials.header,
            footer=partials.footer,
            config=self.config.raw,
            env=env,
        )
        return renderer.render_all(self.pages, self.categories)


def build(config: BuildConfig, diagnostics: Diagnostics | None = None) -> bool:
    """Build ``config`` with a default :class:`DocBuilder`."""
    return DocBuilder(config, diagnostics).build()


__all__ = ["BuildCompleted", "DocBuilder", "SourceParser", "build"]
