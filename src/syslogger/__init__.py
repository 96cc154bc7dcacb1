"""
syslogger: structured logging to the console and a remote syslog collector.

Each log call is validated into an immutable LogRecord, merged with the
logger's default metadata and rendered once per sink:

- console: multi-line, optionally colored
- syslog: single structured line, delivered fire-and-forget

Design Pattern: Strategy Pattern for sink abstraction.
Library: structlog for diagnostics, orjson for JSON, pydantic-settings for environment defaults.
"""

from .config import LoggerConfig, load_env_defaults, resolve_config
from .core import Log
from .exceptions import ConfigError, LoggerError, ValidationError
from .formatters import render_console, render_structured
from .normalize import normalize_error
from .records import build_record, merge_metadata
from .types import LogLevel, LogRecord, RenderOptions

__all__ = [
    "ConfigError",
    "Log",
    "LogLevel",
    "LogRecord",
    "LoggerConfig",
    "LoggerError",
    "RenderOptions",
    "ValidationError",
    "build_record",
    "load_env_defaults",
    "merge_metadata",
    "normalize_error",
    "render_console",
    "render_structured",
    "resolve_config",
]
