"""Collect build messages without touching process-wide state.

Every component receives a :class:`Diagnostics` sink and appends to it. The
caller decides how to present the collected messages; the CLI prints them,
tests assert on :attr:`Diagnostics.messages`. Each entry is also forwarded to
the ``styleguide_pages`` logger.

Examples
--------
>>> sink = Diagnostics()
>>> sink.warning("No _footer.html found")
>>> [d.message for d in sink.warnings]
['No _footer.html found']
"""

from __future__ import annotations

import dataclasses as dc
import enum
import logging

from ._constants import LOGGER_NAME
from .errors import WarningsAsErrors

logger = logging.getLogger(LOGGER_NAME)
logger.addHandler(logging.NullHandler())


class Level(enum.StrEnum):
    """Severity attached to a diagnostic message."""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


_LOG_LEVELS = {
    Level.INFO: logging.INFO,
    Level.SUCCESS: logging.INFO,
    Level.WARNING: logging.WARNING,
    Level.ERROR: logging.ERROR,
}


@dc.dataclass(frozen=True, slots=True)
class Diagnostic:
    """A single message emitted during a build."""

    level: Level
    message: str

    def __str__(self) -> str:
        return f"{self.level.value}: {self.message}"


@dc.dataclass(slots=True)
class Diagnostics:
    """Ordered collector of build messages.

    Attributes
    ----------
    exit_on_warnings : bool
        When true, :meth:`warning` records the message and then raises
        :class:`~styleguide_pages.errors.WarningsAsErrors`.
    messages : list[Diagnostic]
        Every message in emission order.
    """

    exit_on_warnings: bool = False
    messages: list[Diagnostic] = dc.field(default_factory=list)

    def emit(self, level: Level, message: str) -> None:
        """Record ``message`` at ``level`` and mirror it to the logger."""
        self.messages.append(Diagnostic(level, message))
        logger.log(_LOG_LEVELS[level], message)

    def info(self, message: str) -> None:
        self.emit(Level.INFO, message)

    def success(self, message: str) -> None:
        self.emit(Level.SUCCESS, message)

    def error(self, message: str) -> None:
        self.emit(Level.ERROR, message)

    def warning(self, message: str) -> None:
        """Record a warning, raising when warnings are treated as fatal."""
        self.emit(Level.WARNING, message)
        if self.exit_on_warnings:
            raise WarningsAsErrors(message)

    def of_level(self, level: Level) -> list[Diagnostic]:
        return [item for item in self.messages if item.level is level]

    @property
    def warnings(self) -> list[Diagnostic]:
        return self.of_level(Level.WARNING)

    @property
    def errors(self) -> list[Diagnostic]:
        return self.of_level(Level.ERROR)


__all__ = ["Diagnostic", "Diagnostics", "Level"]
