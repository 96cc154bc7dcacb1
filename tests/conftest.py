import io
import typing as t
from datetime import datetime

import pytest

from syslogger import Log, LoggerConfig

from helpers import FIXED_NOW, RecordingTransport


@pytest.fixture
def clock() -> t.Callable[[], datetime]:
    return lambda: FIXED_NOW


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def log(clock, transport, stream) -> t.Iterator[Log]:
    """Logger wired to an in-memory console stream and a recording transport."""
    instance = Log(
        {"env": "production"},
        LoggerConfig(app_name="DOUGLAS", colors=False),
        clock=clock,
        stream=stream,
        transport=transport,
    )
    yield instance
    instance.close()


@pytest.fixture(autouse=True)
def clean_syslog_env(monkeypatch):
    """Keep ambient environment variables from leaking into configuration tests."""
    for name in (
        "APP_NAME",
        "SYSLOG_APP_NAME",
        "SYSLOG_HOST",
        "SYSLOG_PROTOCOL",
        "SYSLOG_PORT",
        "SYSLOG_FACILITY",
        "SYSLOG_PATH",
        "SYSLOG_TIMESTAMP",
        "SYSLOG_COLORS",
        "SYSLOG_LEVEL",
        "SYSLOG_SINKS",
    ):
        monkeypatch.delenv(name, raising=False)
