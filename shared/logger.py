"""
Machine Event Log
==================

:class:`EnigmaLogger` records what a machine does (positions set,
plugboard rewired, entries skipped, messages enciphered) on a Rich
handler on stderr and, when a log file is configured, in a rotating
file as plain text or JSON lines.

Each :class:`EnigmaLogger` drives exactly one :mod:`logging` logger.
Machines pass an ``instance`` suffix so two machines never write
through the same logger; building a logger under a name that is
already in use closes the handlers it replaces.

References:
    - Python logging HOWTO. https://docs.python.org/3/howto/logging.html
    - Rich library. https://github.com/Textualize/rich
"""

from __future__ import annotations

import json
import logging
import time
from contextlib import contextmanager
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Iterator, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

_TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_TEXT_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"

#: Keyword arguments handed to :meth:`logging.Logger.log` untouched;
#: every other keyword lands in the record's ``context``.
_PASSTHROUGH = frozenset({"exc_info", "stack_info", "stacklevel"})

# Lamp yellow for routine events, amber for skipped input.
_STDERR_THEME = Theme(
    {
        "log.level.debug": "dim cyan",
        "log.level.info": "bright_yellow",
        "log.level.warning": "bold dark_orange",
    }
)


class _JSONLineFormatter(logging.Formatter):
    """One JSON object per record.

    ``component``, ``operation`` and ``context`` are written only when
    set, e.g.::

        {"timestamp": "...", "level": "WARNING", "logger": "enigma.engine.7f3a",
         "message": "Skipped plugboard entry ' C ' ...",
         "component": "engine", "operation": "configure_plugboard",
         "context": {"position": 3, "reason": "missing separator"}}
    """

    _OPTIONAL = ("component", "operation", "context")

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in self._OPTIONAL:
            value = getattr(record, name, None)
            if value is not None:
                entry[name] = value
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def _stderr_handler(level: int) -> logging.Handler:
    return RichHandler(
        level=level,
        console=Console(theme=_STDERR_THEME, stderr=True),
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )


def _file_handler(
    path: str | Path,
    level: int,
    *,
    json_lines: bool,
    max_bytes: int,
    backup_count: int,
) -> logging.Handler:
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        file_path,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    handler.setLevel(level)
    if json_lines:
        handler.setFormatter(_JSONLineFormatter())
    else:
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT, _TEXT_DATEFMT))
    return handler


class EnigmaLogger:
    """Logger bound to one simulator component, optionally one instance.

    Usage::

        log = EnigmaLogger("engine", instance="7f3a", log_file="enigma.log", json_logs=True)
        with log.operation("configure_plugboard"):
            log.warning("Skipped entry", position=3, text=" C ")
        log.close()

    Args:
        component:      Component name (``engine``, ``cli``...).
        instance:       Suffix separating loggers of the same component.
        log_level:      Minimum severity (DEBUG, INFO, WARNING).
        log_file:       Rotating log file; ``None`` disables file logging.
        json_logs:      Write the file as JSON lines instead of text.
        max_bytes:      File size that triggers rotation.
        backup_count:   Rotated files to keep.
        console_output: Attach the Rich handler on stderr.
    """

    def __init__(
        self,
        component: str,
        *,
        instance: Optional[str] = None,
        log_level: str = "INFO",
        log_file: str | Path | None = None,
        json_logs: bool = False,
        max_bytes: int = 10_485_760,
        backup_count: int = 5,
        console_output: bool = True,
    ) -> None:
        self._component = component
        self._operation: Optional[str] = None
        level = getattr(logging, log_level.upper(), logging.INFO)

        name = f"enigma.{component}" if instance is None else f"enigma.{component}.{instance}"
        self._logger = logging.getLogger(name)
        self._logger.setLevel(level)
        self._logger.propagate = False
        self.close()

        if console_output:
            self._logger.addHandler(_stderr_handler(level))
        if log_file is not None:
            self._logger.addHandler(_file_handler(
                log_file,
                level,
                json_lines=json_logs,
                max_bytes=max_bytes,
                backup_count=backup_count,
            ))

    @property
    def name(self) -> str:
        return self._logger.name

    @property
    def handlers(self) -> tuple[logging.Handler, ...]:
        return tuple(self._logger.handlers)

    def close(self) -> None:
        """Detach and close every handler, releasing any log file."""
        for handler in list(self._logger.handlers):
            self._logger.removeHandler(handler)
            handler.close()

    # ------------------------------------------------------------------ #
    #  Records
    # ------------------------------------------------------------------ #

    def _log(self, level: int, msg: str, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        passthrough = {key: kwargs.pop(key) for key in kwargs.keys() & _PASSTHROUGH}
        passthrough.setdefault("stacklevel", 3)
        extra = {
            "component": self._component,
            "operation": self._operation,
            "context": kwargs or None,
        }
        self._logger.log(level, msg, *args, extra=extra, **passthrough)

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.DEBUG, msg, args, kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.INFO, msg, args, kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.WARNING, msg, args, kwargs)

    # ------------------------------------------------------------------ #
    #  Scopes
    # ------------------------------------------------------------------ #

    @contextmanager
    def operation(self, name: str) -> Iterator[EnigmaLogger]:
        """Tag every record inside the block with ``operation=name``."""
        previous, self._operation = self._operation, name
        try:
            yield self
        finally:
            self._operation = previous

    @contextmanager
    def timed(self, label: str) -> Iterator[None]:
        """Log the wall-clock time spent inside the block at INFO."""
        self.debug("Started: %s", label)
        start = time.perf_counter()
        try:
            yield
        finally:
            self.info("Completed: %s (%.3f sec)", label, time.perf_counter() - start)
