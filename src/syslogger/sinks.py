"""
Log sink abstractions and concrete implementations.
"""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import Any, Optional, Protocol

from .formatters import render_console, render_structured
from .types import LogRecord, RenderOptions


class Transport(Protocol):
    def send(self, level_name: str, line: str) -> None: ...

    def close(self) -> None: ...


# =============================================================================
# Sink Abstraction (Strategy Pattern)
# =============================================================================


class BaseSink(ABC):
    """Abstract base class for log sinks."""

    @abstractmethod
    def emit(self, record: LogRecord) -> None:
        """Render and emit a record to the sink."""
        ...

    @abstractmethod
    def close(self) -> None:
        """Close the sink and release resources."""
        ...


class ConsoleSink(BaseSink):
    """Human-readable console sink.

    Args:
        stream: Output stream (default: stdout)
        colors: Emit ANSI colors. ``None`` enables them only when the stream is a TTY.
        timestamp: Prefix the first line with a bracketed timestamp.
    """

    def __init__(self, stream: Any = None, *, colors: Optional[bool] = None, timestamp: bool = True):
        self._stream = stream or sys.stdout
        if colors is None:
            colors = bool(getattr(self._stream, "isatty", lambda: False)())
        self._options = RenderOptions(colors=colors, timestamp=timestamp)

    @property
    def options(self) -> RenderOptions:
        return self._options

    def emit(self, record: LogRecord) -> None:
        self._stream.write(render_console(record, self._options) + "\n")
        self._stream.flush()

    def close(self) -> None:
        pass


class SyslogSink(BaseSink):
    """Remote sink: hands the structured line to a syslog transport."""

    def __init__(self, transport: Transport, *, label: Optional[str] = None):
        self._transport = transport
        self._label = label

    def emit(self, record: LogRecord) -> None:
        self._transport.send(record.level.value, render_structured(record, self._label))

    def close(self) -> None:
        self._transport.close()
