"""Per-component loggers plus a rich console used for messages and the place progress bar."""

from __future__ import annotations
import inspect
import logging
from rich.console import Console
from rich.progress import (
    Progress,
    BarColumn,
    MofNCompleteColumn,
    TimeElapsedColumn,
    TextColumn,
)

__all__ = ["log_manager", "get_configured_logger", "log_and_display"]


def get_configured_logger(name: str) -> logging.Logger:
    """Return the named logger, registered so ``enable_verbose_logging`` can raise its level."""
    from img_indexer import VERBOSE_LOGGING, _CONFIGURED_LOGGERS

    logger = logging.getLogger(name)
    logger.setLevel(logging.INFO if VERBOSE_LOGGING else logging.WARNING)

    if name not in _CONFIGURED_LOGGERS:
        _CONFIGURED_LOGGERS.append(name)
    return logger


def _caller_logger() -> logging.Logger | None:
    """Module-level ``logger`` of the nearest caller outside this file."""
    for frm in inspect.stack()[2:]:
        if frm.filename == __file__:
            continue
        if (lg := frm.frame.f_globals.get("logger")) is not None:
            return lg
    return None


class ConsoleLogger:
    """Writes to stderr through rich; while a progress bar runs, messages become its description."""

    def __init__(self) -> None:
        self.console = Console(stderr=True)
        self._progress: Progress | None = None
        self._task: int | None = None
        self.logger: logging.Logger | None = None

    def start_progress(self, total: int, description: str = "Working…") -> None:
        self.stop_progress()
        self._progress = Progress(
            BarColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=self.console,
            transient=False,
        )
        self._progress.start()
        self._task = self._progress.add_task(description, total=total)

    def update_progress(self, advance: int = 1, description: str | None = None) -> None:
        if not self._progress or self._task is None:
            return
        self._progress.advance(self._task, advance)
        if description is not None:
            self._progress.update(self._task, description=description)

        if self._progress.tasks[self._task].finished:
            self.stop_progress()

    def stop_progress(self) -> None:
        if self._progress:
            self._progress.stop()
        self._progress = self._task = None

    def log(self, message: str, *, sticky: bool = False,
            level: str = "info", log: bool = True) -> None:
        if log:
            logger = self.logger or _caller_logger()
            if logger is not None:
                getattr(logger, level.lower())(message)

        if sticky:
            self.console.print(message)
        elif self._progress:
            self._progress.update(self._task, description=message)
        else:
            self.console.print(message, end="\r")


log_manager = ConsoleLogger()


def log_and_display(message: str, sticky: bool = False, level: str = "info", log: bool = True) -> None:
    """Log through the caller's module logger and show the message on the console."""
    log_manager.log(message, sticky=sticky, level=level, log=log)
