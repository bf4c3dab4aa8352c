"""Console logging configuration.

Uses standard library logging, rendered through a `rich` console: one
`[LEVEL] message` line per record, with the status word colored when stdout is
a terminal.
"""

from __future__ import annotations

import logging
from typing import Literal

from rich.console import Console
from rich.text import Text

LEVEL_STYLES: dict[int, str] = {
    logging.DEBUG: "blue",
    logging.INFO: "green",
    logging.WARNING: "yellow",
    logging.ERROR: "red",
    logging.CRITICAL: "bold red",
}

LogStatus = Literal["info", "warning", "error"]

_STATUS_LEVELS: dict[str, int] = {
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

_logger = logging.getLogger("valesc_tools")


def build_console(*, color: bool = True) -> Console:
    """A stdout console; rich drops styling by itself when stdout is not a terminal."""

    return Console(no_color=not color, highlight=False, soft_wrap=True)


class StatusHandler(logging.Handler):
    """Write records as `[LEVEL] message` lines to a rich console."""

    def __init__(self, console: Console | None = None, *, color: bool = True) -> None:
        super().__init__()
        self.console = console or build_console(color=color)

    def render(self, record: logging.LogRecord) -> Text:
        line = Text.assemble(
            (f"[{record.levelname}]", LEVEL_STYLES.get(record.levelno, "")),
            " ",
            record.getMessage(),
        )
        if record.exc_info:
            line.append("\n" + logging.Formatter().formatException(record.exc_info))
        return line

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.console.print(self.render(record))
        except Exception:
            self.handleError(record)


def configure_logging(level: str, *, color: bool = True) -> None:
    """Configure root logging with a single console handler."""

    root = logging.getLogger()

    # Remove any existing handlers to avoid duplicate logs when re-configuring.
    for handler in list(root.handlers):
        root.removeHandler(handler)

    root.addHandler(StatusHandler(color=color))
    root.setLevel(level.upper())

    # Keep third-party loggers reasonably quiet unless explicitly configured.
    logging.getLogger("urllib3").setLevel(max(root.level, logging.WARNING))


def log(level: LogStatus, message: str) -> None:
    """Write a status line through the tooling logger."""

    _logger.log(_STATUS_LEVELS[level], message)
