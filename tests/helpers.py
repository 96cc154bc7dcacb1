"""Shared test doubles and fixed values."""

import typing as t
from datetime import datetime, timezone

FIXED_NOW = datetime(2024, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc)
FIXED_TIMESTAMP = "2024-01-02 03:04:05,678+00:00"


class RecordingTransport:
    """Transport double capturing every line handed to ``send``."""

    def __init__(self) -> None:
        self.sent: t.List[t.Tuple[str, str]] = []
        self.closed = False

    def send(self, level_name: str, line: str) -> None:
        self.sent.append((level_name, line))

    def close(self) -> None:
        self.closed = True
