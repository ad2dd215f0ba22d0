"""Exception taxonomy raised by the styleguide build.

Validation problems and dependency copy failures are never raised; they are
collected as error strings or warnings. Everything defined here aborts the
build when it escapes.
"""

from __future__ import annotations


class StyleguideError(Exception):
    """Base class for fatal styleguide build failures."""


class ConfigError(StyleguideError, ValueError):
    """Raised when the configuration document cannot be loaded."""


class ParserError(StyleguideError):
    """Raised when source documentation comments cannot be parsed."""


class ParserContractError(StyleguideError):
    """Raised when the parser hands back a page without a file name."""


class TemplateCompileError(StyleguideError):
    """Raised when a header, footer, or example template fails to compile."""


class TemplateRenderError(StyleguideError):
    """Raised when a compiled template fails while rendering a page."""


class WarningsAsErrors(StyleguideError):
    """Raised on the first warning when ``exit_on_warnings`` is enabled."""


__all__ = [
    "ConfigError",
    "ParserContractError",
    "ParserError",
    "StyleguideError",
    "TemplateCompileError",
    "TemplateRenderError",
    "WarningsAsErrors",
]
