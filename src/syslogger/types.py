from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Union

from .exceptions import ValidationError


class LogLevel(str, Enum):
    """Supported log levels, ordered by ascending verbosity."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    DEBUG = "debug"

    @property
    def priority(self) -> int:
        return _PRIORITIES[self]

    @classmethod
    def parse(cls, value: Union[str, "LogLevel"]) -> "LogLevel":
        """Resolve a level from its enum member, name or the ``warn`` alias."""
        if isinstance(value, LogLevel):
            return value
        if not isinstance(value, str):
            raise ValidationError(field="level", reason=f"expected a level name, got {type(value).__name__}")
        name = value.strip().lower()
        if name == "warn":
            return cls.WARNING
        try:
            return cls(name)
        except ValueError:
            raise ValidationError(field="level", reason=f"unknown level '{value}'") from None

    def enabled_for(self, threshold: "LogLevel") -> bool:
        """True when this level is at or below the verbosity of ``threshold``."""
        return self.priority <= threshold.priority


_PRIORITIES = {
    LogLevel.ERROR: 0,
    LogLevel.WARNING: 1,
    LogLevel.INFO: 2,
    LogLevel.DEBUG: 3,
}


@dataclass(frozen=True)
class LogRecord:
    """A validated log entry.

    Built fresh per log call, rendered once per sink and then discarded.
    """

    level: LogLevel
    namespace: str
    message: str
    timestamp: datetime
    metadata: Dict[str, Any] = field(default_factory=dict)
    extra_args: Dict[str, Any] = field(default_factory=dict)
    error_info: Optional[str] = None


@dataclass(frozen=True)
class RenderOptions:
    """Console rendering switches. Each one is independent of the other."""

    colors: bool = True
    timestamp: bool = True
