"""Logging utilities for taskforge.

``log`` wraps the ``taskforge`` stdlib logger with a few presentation
helpers (sections, success lines, timed blocks, tables) rendered through
rich. ``configure_logging`` wires a ``RichHandler`` onto the logger.
"""

import logging
import time
from contextvars import ContextVar
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

LOGGER_NAME = "taskforge"

console = Console(stderr=True)

# Indentation depth for `log.indented()`, tracked per thread and per task.
_indent: ContextVar[int] = ContextVar("taskforge_log_indent", default=0)


def _markup(style: str) -> Callable[[Any], str]:
    return lambda value: f"[{style}]{value}[/{style}]"


# Markup helpers used to highlight values inside log lines.
color_palette: Dict[str, Callable[[Any], str]] = {
    "task": _markup("bold cyan"),
    "field": _markup("magenta"),
    "value": _markup("green"),
    "count": _markup("bold yellow"),
    "route": _markup("blue"),
    "error": _markup("bold red"),
}


def configure_logging(level: str = "INFO") -> None:
    """Attach a rich handler to the ``taskforge`` logger (idempotent)."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper())
    logger.propagate = False

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=console,
            markup=True,
            rich_tracebacks=True,
            show_path=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)

    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


class Logger:
    """Thin facade over the ``taskforge`` logger."""

    def __init__(self, name: str = LOGGER_NAME):
        self._logger = logging.getLogger(name)

    def _fmt(self, message: str) -> str:
        return f"{'  ' * _indent.get()}{message}"

    def debug(self, message: str) -> None:
        self._logger.debug(self._fmt(message))

    def info(self, message: str) -> None:
        self._logger.info(self._fmt(message))

    def warn(self, message: str) -> None:
        self._logger.warning(self._fmt(message))

    def error(self, message: str, exc_info: bool = False) -> None:
        self._logger.error(self._fmt(message), exc_info=exc_info)

    def success(self, message: str) -> None:
        self._logger.info(self._fmt(f"[green]✓[/green] {message}"))

    def section(self, title: str) -> None:
        """Print a horizontal rule with a title."""
        if self._logger.isEnabledFor(logging.INFO):
            console.rule(f"[bold]{title}[/bold]")

    @contextmanager
    def indented(self) -> Iterator[None]:
        token = _indent.set(_indent.get() + 1)
        try:
            yield
        finally:
            _indent.reset(token)

    @contextmanager
    def timed(self, label: str) -> Iterator[None]:
        """Log how long the wrapped block took."""
        started = time.perf_counter()
        try:
            yield
        finally:
            elapsed = (time.perf_counter() - started) * 1000
            self.info(f"{label} took {color_palette['count'](f'{elapsed:.1f}ms')}")

    def table(
        self,
        headers: Sequence[str],
        rows: List[Sequence[Any]],
        title: Optional[str] = None,
    ) -> None:
        if not self._logger.isEnabledFor(logging.INFO):
            return
        table = Table(title=title)
        for header in headers:
            table.add_column(str(header))
        for row in rows:
            table.add_row(*(str(cell) for cell in row))
        console.print(table)


log = Logger()
