"""
Error normalization.

Turns an exception into a stable JSON string that keeps every public attribute
the exception carries, not only its message. Custom fields such as error codes
survive into the log line.
"""

from __future__ import annotations

import traceback
from typing import Any, Dict, Set

from .serialization import orjson_dumps, safe_dumps

UNSERIALIZABLE_ERROR = "<unserializable error>"
CIRCULAR_REFERENCE = "<circular reference>"

_BUILTIN_ATTRS = (
    "errno",
    "strerror",
    "filename",
    "filename2",
    "characters_written",
    "encoding",
    "reason",
    "start",
    "end",
)


def normalize_error(value: Any) -> str:
    """Serialize an error value to a string. Never raises.

    Strings pass through unchanged. Exceptions become a JSON object keyed by
    ``name``, ``message``, ``args`` (when they carry more than the message),
    built-in fields such as ``errno`` and ``filename``, ``stack`` (only for
    raised exceptions), ``notes``, the instance's public attributes in
    definition order and finally ``cause``.
    """
    if isinstance(value, str):
        return value
    if not isinstance(value, BaseException):
        return safe_dumps(value)
    try:
        return orjson_dumps(_error_fields(value, set()))
    except Exception:
        return _fallback(value)


def _error_fields(err: BaseException, seen: Set[int]) -> Dict[str, Any]:
    seen.add(id(err))
    fields: Dict[str, Any] = {"name": type(err).__name__, "message": str(err)}

    if len(err.args) > 1 or (err.args and not isinstance(err.args[0], str)):
        fields["args"] = list(err.args)

    # OSError and UnicodeError keep these in C slots, outside __dict__.
    for key in _BUILTIN_ATTRS:
        try:
            attr = getattr(err, key)
        except AttributeError:
            continue
        if attr is not None:
            fields[key] = attr

    if err.__traceback__ is not None:
        fields["stack"] = "".join(
            traceback.format_exception(type(err), err, err.__traceback__, chain=False)
        ).rstrip("\n")

    notes = getattr(err, "__notes__", None)
    if notes:
        fields["notes"] = list(notes)

    for key, attr in vars(err).items():
        if key.startswith("_"):
            continue
        fields[key] = attr

    cause = err.__cause__
    if cause is not None:
        fields["cause"] = CIRCULAR_REFERENCE if id(cause) in seen else _error_fields(cause, seen)

    return fields


def _fallback(err: BaseException) -> str:
    try:
        return f"{type(err).__name__}: {err}"
    except Exception:
        pass
    try:
        return f"{type(err).__name__}: {err.args[0]!r}" if err.args else type(err).__name__
    except Exception:
        return UNSERIALIZABLE_ERROR
