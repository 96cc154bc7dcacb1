"""
Syslog transport.

Delivery is fire-and-forget: ``send`` only enqueues, a QueueListener thread
hands records to a SysLogHandler. Connection and delivery errors surface
through ``logging.Handler.handleError`` on that thread and never reach the
caller of ``send``.
"""

from __future__ import annotations

import logging
import logging.handlers
import queue
import socket
from typing import Any, Optional, Tuple, Union

from .diagnostics import get_logger
from .exceptions import ConfigError

_log = get_logger("syslogger.transport")

SYSLOG_UDP_PORT = logging.handlers.SYSLOG_UDP_PORT

PROTOCOLS = {
    "udp": socket.SOCK_DGRAM,
    "udp4": socket.SOCK_DGRAM,
    "tcp": socket.SOCK_STREAM,
    "tcp4": socket.SOCK_STREAM,
    "unix": None,
}

_LEVELNOS = {
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def resolve_facility(name: Union[str, int]) -> int:
    """Map a syslog facility name (``user``, ``local0``...) to its code."""
    if isinstance(name, int):
        return name
    code = logging.handlers.SysLogHandler.facility_names.get(name.strip().lower())
    if code is None:
        raise ConfigError(f"Unknown syslog facility '{name}'", details={"facility": name})
    return code


def resolve_protocol(name: str) -> Optional[int]:
    """Map a protocol name to a socket type. ``unix`` maps to ``None``."""
    key = name.strip().lower()
    if key not in PROTOCOLS:
        raise ConfigError(f"Unknown syslog protocol '{name}'", details={"protocol": name})
    return PROTOCOLS[key]


class _DeferredSysLogHandler(logging.Handler):
    """Creates the SysLogHandler on first delivery, on the listener thread."""

    def __init__(self, address: Union[str, Tuple[str, int]], facility: int, socktype: Optional[int], ident: str):
        super().__init__()
        self._address = address
        self._facility = facility
        self._socktype = socktype
        self._ident = ident
        self._target: Optional[logging.handlers.SysLogHandler] = None

    def _connect(self) -> logging.handlers.SysLogHandler:
        handler = logging.handlers.SysLogHandler(
            address=self._address,
            facility=self._facility,
            socktype=self._socktype,
        )
        handler.ident = self._ident
        return handler

    def emit(self, record: logging.LogRecord) -> None:
        try:
            if self._target is None:
                self._target = self._connect()
            self._target.emit(record)
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        if self._target is not None:
            self._target.close()
            self._target = None
        super().close()


class SyslogTransport:
    """Remote syslog delivery for rendered lines.

    Args:
        app_name: Tag prepended to every message (``<app_name>: <line>``).
        host: Collector host for udp/tcp.
        port: Collector port for udp/tcp.
        protocol: ``udp``, ``tcp`` or ``unix``.
        facility: Syslog facility name.
        path: Socket path when protocol is ``unix``.
    """

    def __init__(
        self,
        *,
        app_name: str,
        host: str = "localhost",
        port: int = SYSLOG_UDP_PORT,
        protocol: str = "udp",
        facility: Union[str, int] = "local0",
        path: str = "/dev/log",
        handler: Optional[logging.Handler] = None,
    ):
        socktype = resolve_protocol(protocol)
        address: Union[str, Tuple[str, int]] = path if socktype is None else (host, int(port))
        self._app_name = app_name
        self._address = address
        self._handler = handler or _DeferredSysLogHandler(
            address=address,
            facility=resolve_facility(facility),
            socktype=socktype,
            ident=f"{app_name}: ",
        )
        self._queue: queue.SimpleQueue[Any] = queue.SimpleQueue()
        self._enqueue = logging.handlers.QueueHandler(self._queue)
        self._listener = logging.handlers.QueueListener(self._queue, self._handler)
        self._listener.start()
        self._closed = False
        _log.debug("syslog transport started", app_name=app_name, address=str(address), protocol=protocol)

    @property
    def address(self) -> Union[str, Tuple[str, int]]:
        return self._address

    def send(self, level_name: str, line: str) -> None:
        """Queue ``line`` for delivery at ``level_name`` priority. Does not block."""
        if self._closed:
            return
        levelno = _LEVELNOS.get(level_name.lower(), logging.INFO)
        record = logging.makeLogRecord(
            {
                "name": self._app_name,
                "msg": line,
                "levelno": levelno,
                "levelname": logging.getLevelName(levelno),
            }
        )
        self._enqueue.handle(record)

    def close(self) -> None:
        """Flush queued lines and release the socket."""
        if self._closed:
            return
        self._closed = True
        self._listener.stop()
        self._handler.close()
        _log.debug("syslog transport stopped", app_name=self._app_name)
