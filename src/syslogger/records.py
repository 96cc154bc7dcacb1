"""
Record builder: validates a log call and assembles an immutable LogRecord.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional, Union

from .exceptions import ValidationError
from .normalize import normalize_error
from .types import LogLevel, LogRecord

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def merge_metadata(
    defaults: Optional[Mapping[str, Any]],
    metadata: Optional[Mapping[str, Any]],
) -> Dict[str, Any]:
    """Shallow merge into a new dict; keys in ``metadata`` win. Inputs are left untouched."""
    merged: Dict[str, Any] = dict(defaults or {})
    if metadata:
        merged.update(metadata)
    return merged


def _require_text(value: Any, field: str) -> str:
    if value is None:
        raise ValidationError(field=field, reason="required")
    if not isinstance(value, str):
        raise ValidationError(field=field, reason=f"expected a string, got {type(value).__name__}")
    if not value.strip():
        raise ValidationError(field=field, reason="must not be empty")
    return value


def _optional_mapping(value: Any, field: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ValidationError(field=field, reason=f"expected a mapping, got {type(value).__name__}")
    return dict(value)


def build_record(
    level: Union[str, LogLevel],
    namespace: Any,
    message: Any,
    metadata: Any = None,
    error: Any = None,
    extra_args: Any = None,
    *,
    default_metadata: Optional[Mapping[str, Any]] = None,
    clock: Optional[Clock] = None,
) -> LogRecord:
    """Validate the caller's fields and assemble a LogRecord.

    Raises:
        ValidationError: ``field`` names the offending input (level, namespace,
            message, metadata or args).
    """
    resolved_level = LogLevel.parse(level)
    namespace = _require_text(namespace, "namespace")
    message = _require_text(message, "message")
    call_metadata = _optional_mapping(metadata, "metadata")
    args = _optional_mapping(extra_args, "args")

    timestamp = (clock or utc_now)()
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)

    return LogRecord(
        level=resolved_level,
        namespace=namespace,
        message=message,
        timestamp=timestamp.astimezone(timezone.utc),
        metadata=merge_metadata(default_metadata, call_metadata),
        extra_args=args,
        error_info=None if error is None else normalize_error(error),
    )
