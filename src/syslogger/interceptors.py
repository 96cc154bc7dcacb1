"""
Interceptors routing standard library and structlog events into a Log.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from typing import Any, Optional

import structlog
from structlog.typing import EventDict, WrappedLogger

from .core import Log
from .diagnostics import DIAGNOSTICS_ROOT
from .types import LogLevel

_METHOD_LEVELS = {
    "critical": LogLevel.ERROR,
    "fatal": LogLevel.ERROR,
    "exception": LogLevel.ERROR,
    "error": LogLevel.ERROR,
    "warn": LogLevel.WARNING,
    "warning": LogLevel.WARNING,
    "info": LogLevel.INFO,
    "msg": LogLevel.INFO,
    "debug": LogLevel.DEBUG,
}

# Keys structlog processors add that are not caller arguments.
_RESERVED_KEYS = {"timestamp", "_record", "_from_structlog", "_name"}


def level_from_levelno(levelno: int) -> LogLevel:
    if levelno >= logging.ERROR:
        return LogLevel.ERROR
    if levelno >= logging.WARNING:
        return LogLevel.WARNING
    if levelno >= logging.INFO:
        return LogLevel.INFO
    return LogLevel.DEBUG


class LogHandler(logging.Handler):
    """
    Redirect standard library logging records to a Log.

    The logger name becomes the namespace unless ``namespace`` is fixed.
    ``extra={"metadata": {...}}`` on the logging call is passed through as metadata.
    """

    def __init__(self, log: Log, namespace: Optional[str] = None, level: int = logging.NOTSET):
        super().__init__(level)
        self._log = log
        self._namespace = namespace

    def emit(self, record: logging.LogRecord) -> None:
        try:
            # Our own diagnostics would loop back into the Log that produced them.
            if record.name == DIAGNOSTICS_ROOT or record.name.startswith(f"{DIAGNOSTICS_ROOT}."):
                return

            metadata = getattr(record, "metadata", None)
            error = record.exc_info[1] if record.exc_info else None
            self._log.show(
                level_from_levelno(record.levelno),
                self._namespace or self._simplify_logger_name(record.name),
                record.getMessage(),
                metadata if isinstance(metadata, Mapping) else None,
                error,
            )
        except Exception:
            self.handleError(record)

    @staticmethod
    def _simplify_logger_name(name: str) -> str:
        """
        Keep logger names short enough to read as a namespace.

        - "" or "root" -> "root"
        - "uvicorn.access" -> "uvicorn.access"
        - "app.services.billing" -> "services.billing"
        """
        if not name:
            return "root"
        parts = name.split(".")
        if len(parts) <= 2:
            return name
        return ".".join(parts[-2:])


class LogProcessor:
    """structlog processor that forwards each event to a Log and drops it.

    Place it last in the processor chain. ``event`` becomes the message,
    ``namespace`` (or ``logger``) the namespace, ``exc_info`` the error and
    ``metadata`` the metadata; every other key is passed as an extra argument.
    """

    def __init__(self, log: Log, namespace: str = "root"):
        self._log = log
        self._namespace = namespace

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        event = dict(event_dict)
        message = event.pop("event", None)
        namespace = event.pop("namespace", None) or event.pop("logger", None) or self._namespace
        event.pop("logger", None)
        level_name = str(event.pop("level", method_name)).lower()
        error = self._resolve_error(event.pop("exc_info", None))
        if error is None and method_name == "exception":
            error = sys.exc_info()[1]
        metadata = event.pop("metadata", None)
        args = {k: v for k, v in event.items() if k not in _RESERVED_KEYS}

        self._log.show(
            _METHOD_LEVELS.get(level_name, LogLevel.INFO),
            namespace,
            None if message is None else str(message),
            metadata if isinstance(metadata, Mapping) else None,
            error,
            args,
        )
        raise structlog.DropEvent

    @staticmethod
    def _resolve_error(exc_info: Any) -> Any:
        if exc_info is None or exc_info is False:
            return None
        if isinstance(exc_info, BaseException):
            return exc_info
        if isinstance(exc_info, tuple):
            return exc_info[1]
        return sys.exc_info()[1]
