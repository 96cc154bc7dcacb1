"""
Frame renderers and color utilities.

Two projections of the same LogRecord:

- render_structured: the single-line frame sent to the remote syslog collector.
- render_console: the multi-line, optionally colored block written to a terminal.

The structured line is a wire contract consumed by downstream indexing; its
tokens must not change:

    <TIMESTAMP>[<LEVEL>][<LABEL>]:[MSG](<namespace>)<message> (ARGS)=<json>(ERROR)=<error>[METADATA]<json>
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Optional

import orjson

from .serialization import UNSERIALIZABLE_VALUE, safe_dumps
from .types import LogRecord, RenderOptions

MSG_TOKEN = "[MSG]"
ARGS_TOKEN = "(ARGS)"
ERROR_TOKEN = "(ERROR)"
METADATA_TOKEN = "[METADATA]"
CONSOLE_ERROR_TOKEN = "[ERROR]"

_LINE_BREAKS = str.maketrans({"\r": "\\r", "\n": "\\n"})

# =============================================================================
# Colors
# =============================================================================

COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "debug": "\033[36m",
    "info": "\033[32m",
    "warning": "\033[33m",
    "error": "\033[31m",
    "timestamp": "\033[90m",
    "logger": "\033[35m",
    "key": "\033[34m",
}


def colorize(text: str, color: str) -> str:
    """Apply ANSI color to text."""
    return f"{COLORS.get(color, '')}{text}{COLORS['reset']}"


def _maybe_color(text: str, color: str, use_color: bool) -> str:
    if not use_color:
        return text
    return colorize(text, color)


# =============================================================================
# Value Formatting
# =============================================================================


def format_timestamp(dt: datetime) -> str:
    """UTC timestamp as ``YYYY-MM-DD HH:MM:SS,mmm+00:00``."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return f"{dt:%Y-%m-%d %H:%M:%S},{dt.microsecond // 1000:03d}+00:00"


def format_value(value: Any) -> str:
    """Mappings and sequences as 2-space indented JSON, anything else through ``str``."""
    if isinstance(value, (Mapping, list, tuple)):
        return safe_dumps(value, pretty=True)
    try:
        return str(value)
    except Exception:
        return UNSERIALIZABLE_VALUE


def _format_error_block(error_info: str) -> str:
    # Lift the stack out of the JSON so the traceback reads as a traceback.
    try:
        parsed = orjson.loads(error_info)
    except orjson.JSONDecodeError:
        return error_info
    if not isinstance(parsed, dict):
        return error_info
    stack = parsed.pop("stack", None)
    body = safe_dumps(parsed, pretty=True)
    if isinstance(stack, str) and stack:
        return f"{body}\n{stack}"
    return body


# =============================================================================
# Renderers
# =============================================================================


def render_structured(record: LogRecord, label: Optional[str] = None) -> str:
    """Render the single-line frame for the remote sink.

    ``label`` fills the second bracket (normally the application name) and
    defaults to the record namespace. The args, error and metadata sections are
    only present when they carry something.
    Carriage returns and line feeds in any field are escaped as ``\\r`` and
    ``\\n`` so one record is always one line.
    """
    parts = [
        format_timestamp(record.timestamp),
        f"[{record.level.value.upper()}]",
        f"[{label or record.namespace}]",
        ":",
        MSG_TOKEN,
        f"({record.namespace})",
        record.message,
    ]
    if record.extra_args:
        parts.append(f" {ARGS_TOKEN}={safe_dumps(record.extra_args)}")
    if record.error_info is not None:
        parts.append(f"{ERROR_TOKEN}={record.error_info}")
    if record.metadata:
        parts.append(f"{METADATA_TOKEN}{safe_dumps(record.metadata)}")
    return "".join(parts).translate(_LINE_BREAKS)


def render_console(record: LogRecord, options: Optional[RenderOptions] = None) -> str:
    """Render the human-oriented multi-line block for a terminal.

    With ``options.colors`` off the output holds no escape sequences at all.
    """
    options = options or RenderOptions()
    use_color = options.colors
    level_name = record.level.value

    head = []
    if options.timestamp:
        head.append(_maybe_color(f"[{format_timestamp(record.timestamp)}]", "timestamp", use_color))
    head.append(_maybe_color(level_name.upper(), level_name, use_color))
    head.append(_maybe_color(f"[{record.namespace}]", "logger", use_color))
    head.append(record.message)
    lines = [" ".join(head)]

    for key, value in record.extra_args.items():
        lines.append(f"{_maybe_color(f'({key})', 'key', use_color)}={format_value(value)}")

    if record.metadata:
        lines.append(f"{_maybe_color(METADATA_TOKEN, 'key', use_color)} {safe_dumps(record.metadata, pretty=True)}")

    if record.error_info is not None:
        lines.append(f"{_maybe_color(CONSOLE_ERROR_TOKEN, 'error', use_color)} {_format_error_block(record.error_info)}")

    return "\n".join(lines)
