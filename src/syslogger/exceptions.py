"""
syslogger exception hierarchy.

Two failures ever reach the caller:

- ValidationError: a log call is missing a required field or passed a value of the wrong shape.
- ConfigError: a logger cannot be constructed from the resolved configuration.

Everything else (error normalization, rendering, delivery) degrades to best-effort
output instead of raising.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class LoggerError(Exception):
    """Root of all syslogger exceptions."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}


class ValidationError(LoggerError):
    """A log call omitted a required field or passed a malformed one.

    Raised synchronously from the record build step. Not retried.
    """

    def __init__(self, *, field: str, reason: Optional[str] = None) -> None:
        message = f"Invalid log field '{field}'"
        if reason:
            message = f"{message}: {reason}"
        details = {"field": field}
        if reason:
            details["reason"] = reason
        super().__init__(message, code="VALIDATION_ERROR", details=details)
        self.field = field


class ConfigError(LoggerError):
    """The logger configuration cannot be resolved."""

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, code="CONFIG_ERROR", details=details)
