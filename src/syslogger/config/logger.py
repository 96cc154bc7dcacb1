"""
Logger Configuration.

``LoggerConfig`` is the explicit struct a caller passes in; every field is
optional. ``resolve_config`` layers it over a second ``LoggerConfig`` of
defaults (usually from ``load_env_defaults``) and then over built-in
fallbacks, validating the result.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Optional, Tuple

from ..exceptions import ConfigError, ValidationError
from ..transport import SYSLOG_UDP_PORT, resolve_facility, resolve_protocol
from ..types import LogLevel

SINK_NAMES = ("console", "syslog")

FALLBACKS = {
    "host": "localhost",
    "protocol": "udp",
    "port": SYSLOG_UDP_PORT,
    "facility": "local0",
    "path": "/dev/log",
    "timestamp": True,
    "colors": None,
    "level": LogLevel.DEBUG.value,
    "sinks": ",".join(SINK_NAMES),
}


@dataclass(frozen=True)
class LoggerConfig:
    """Caller-supplied logger configuration. ``None`` or ``""`` means unset."""

    app_name: Optional[str] = None
    host: Optional[str] = None
    protocol: Optional[str] = None
    port: Optional[int] = None
    facility: Optional[str] = None
    path: Optional[str] = None
    timestamp: Optional[bool] = None
    colors: Optional[bool] = None
    level: Optional[str] = None
    sinks: Optional[str] = None


@dataclass(frozen=True)
class ResolvedConfig:
    app_name: str
    host: str
    protocol: str
    port: int
    facility: str
    path: str
    timestamp: bool
    colors: Optional[bool]
    level: LogLevel
    sinks: Tuple[str, ...]


def _is_set(name: str, value: Any) -> bool:
    if value is None or value == "":
        return False
    if name == "port" and value == 0:
        return False
    return True


def _pick(name: str, explicit: LoggerConfig, defaults: LoggerConfig) -> Any:
    for source in (explicit, defaults):
        value = getattr(source, name)
        if _is_set(name, value):
            return value
    return FALLBACKS.get(name)


def _parse_sinks(raw: str) -> Tuple[str, ...]:
    names = tuple(part.strip().lower() for part in raw.split(",") if part.strip())
    unknown = [name for name in names if name not in SINK_NAMES]
    if unknown:
        raise ConfigError(f"Unknown sink(s): {', '.join(unknown)}", details={"sinks": raw})
    return names


def resolve_config(
    explicit: Optional[LoggerConfig] = None,
    defaults: Optional[LoggerConfig] = None,
) -> ResolvedConfig:
    """Resolve explicit settings over defaults over built-in fallbacks.

    Raises:
        ConfigError: no application name, or an unknown protocol, facility,
            level or sink name.
    """
    explicit = explicit or LoggerConfig()
    defaults = defaults or LoggerConfig()
    values = {f.name: _pick(f.name, explicit, defaults) for f in fields(LoggerConfig)}

    if not values["app_name"] or not str(values["app_name"]).strip():
        raise ConfigError("No application name configured (pass app_name or set APP_NAME)")

    resolve_protocol(values["protocol"])
    resolve_facility(values["facility"])
    try:
        level = LogLevel.parse(values["level"])
    except ValidationError as exc:
        raise ConfigError(f"Invalid log level '{values['level']}'", details={"level": values["level"]}) from exc

    try:
        port = int(values["port"])
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid syslog port '{values['port']}'", details={"port": values["port"]}) from exc

    return ResolvedConfig(
        app_name=str(values["app_name"]),
        host=values["host"],
        protocol=values["protocol"].strip().lower(),
        port=port,
        facility=values["facility"].strip().lower(),
        path=values["path"],
        timestamp=bool(values["timestamp"]),
        colors=values["colors"],
        level=level,
        sinks=_parse_sinks(values["sinks"]),
    )
