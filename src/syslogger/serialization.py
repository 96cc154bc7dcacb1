"""
JSON serialization helpers backed by orjson.
"""

from __future__ import annotations

from typing import Any

import orjson

_BASE_OPTIONS = orjson.OPT_UTC_Z | orjson.OPT_NAIVE_UTC | orjson.OPT_NON_STR_KEYS

UNSERIALIZABLE_VALUE = "<unserializable value>"


def _default(value: Any) -> str:
    return str(value)


def orjson_dumps(v: Any, *, pretty: bool = False) -> str:
    """Serialize ``v`` to JSON. Compact unless ``pretty`` (2-space indent).

    Types orjson does not know are rendered through ``str``.
    Raises ``orjson.JSONEncodeError`` on circular or otherwise unencodable input.
    """
    option = (_BASE_OPTIONS | orjson.OPT_INDENT_2) if pretty else _BASE_OPTIONS
    return orjson.dumps(v, default=_default, option=option).decode()


def safe_dumps(v: Any, *, pretty: bool = False) -> str:
    """Like ``orjson_dumps`` but never raises; falls back to ``str(v)``."""
    try:
        return orjson_dumps(v, pretty=pretty)
    except orjson.JSONEncodeError:
        pass
    try:
        return str(v)
    except Exception:
        return UNSERIALIZABLE_VALUE
