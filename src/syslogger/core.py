"""
The Log facade: owns default metadata, builds records and fans them out to sinks.

Single-writer, read-mostly: ``set_default_meta`` and ``assign_to_default_meta``
must not run concurrently with log calls on the same instance. Use one
instance per concurrent context or serialize access.
"""

from __future__ import annotations

import warnings
from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .config import LoggerConfig, ResolvedConfig, load_env_defaults, resolve_config
from .diagnostics import get_logger
from .exceptions import ValidationError
from .normalize import normalize_error
from .records import Clock, build_record, utc_now
from .sinks import BaseSink, ConsoleSink, SyslogSink, Transport
from .transport import SyslogTransport
from .types import LogLevel, LogRecord

_log = get_logger("syslogger.core")


class Log:
    """Structured logger writing to the console and a remote syslog collector.

    Args:
        default_meta: Metadata merged into every record; call metadata wins on conflict.
        config: Explicit configuration. Unset fields fall back to ``defaults``.
        defaults: Fallback configuration, typically ``load_env_defaults()``.
        sinks: Replace the configured sinks entirely.
        clock: Returns the current time; injectable for deterministic output.
        stream: Console sink stream (default: stdout).
        transport: Syslog transport to use instead of building a SyslogTransport.

    Raises:
        ConfigError: no application name resolves or a setting is invalid.
    """

    def __init__(
        self,
        default_meta: Optional[Mapping[str, Any]] = None,
        config: Optional[LoggerConfig] = None,
        *,
        defaults: Optional[LoggerConfig] = None,
        sinks: Optional[Iterable[BaseSink]] = None,
        clock: Optional[Clock] = None,
        stream: Any = None,
        transport: Optional[Transport] = None,
    ) -> None:
        self._config = resolve_config(config, defaults)
        self._clock = clock or utc_now
        self._default_meta: Dict[str, Any] = {}
        self.set_default_meta(default_meta or {})
        if sinks is not None:
            self._sinks: List[BaseSink] = list(sinks)
        else:
            self._sinks = self._create_sinks(stream, transport)

    @classmethod
    def from_environment(
        cls,
        default_meta: Optional[Mapping[str, Any]] = None,
        config: Optional[LoggerConfig] = None,
        *,
        env_file: Optional[str] = ".env",
        **kwargs: Any,
    ) -> "Log":
        """Build a Log whose unset configuration falls back to the process environment."""
        return cls(default_meta, config, defaults=load_env_defaults(env_file), **kwargs)

    def _create_sinks(self, stream: Any, transport: Optional[Transport]) -> List[BaseSink]:
        cfg = self._config
        sinks: List[BaseSink] = []
        for name in cfg.sinks:
            if name == "console":
                sinks.append(ConsoleSink(stream, colors=cfg.colors, timestamp=cfg.timestamp))
            elif name == "syslog":
                remote = transport or SyslogTransport(
                    app_name=cfg.app_name,
                    host=cfg.host,
                    port=cfg.port,
                    protocol=cfg.protocol,
                    facility=cfg.facility,
                    path=cfg.path,
                )
                sinks.append(SyslogSink(remote, label=cfg.app_name))
        return sinks

    # =========================================================================
    # Default Metadata
    # =========================================================================

    @property
    def config(self) -> ResolvedConfig:
        return self._config

    @property
    def sinks(self) -> Tuple[BaseSink, ...]:
        return tuple(self._sinks)

    @property
    def default_meta(self) -> Dict[str, Any]:
        """A copy of the current default metadata."""
        return dict(self._default_meta)

    def set_default_meta(self, default_meta: Mapping[str, Any]) -> None:
        """Replace the default metadata sent with every record."""
        if not isinstance(default_meta, Mapping):
            raise ValidationError(field="metadata", reason="default metadata must be a mapping")
        self._default_meta = dict(default_meta)

    def set_params(self, default_meta: Mapping[str, Any]) -> None:
        """Deprecated alias of ``set_default_meta``."""
        warnings.warn(
            "Log.set_params is deprecated, use Log.set_default_meta",
            DeprecationWarning,
            stacklevel=2,
        )
        self.set_default_meta(default_meta)

    def assign_to_default_meta(self, default_meta: Mapping[str, Any]) -> None:
        """Add keys to the default metadata, overwriting the ones already present."""
        if not isinstance(default_meta, Mapping):
            raise ValidationError(field="metadata", reason="default metadata must be a mapping")
        self._default_meta.update(default_meta)

    # =========================================================================
    # Logging
    # =========================================================================

    def show(
        self,
        level: Any,
        namespace: Optional[str] = None,
        msg: Optional[str] = None,
        metadata: Optional[Mapping[str, Any]] = None,
        stack_trace: Any = None,
        args: Optional[Mapping[str, Any]] = None,
    ) -> Optional[LogRecord]:
        """Build a record and hand it to every sink.

        Returns the emitted record, or ``None`` when ``level`` is more verbose
        than the configured threshold.

        Raises:
            ValidationError: a required field is missing or malformed.
        """
        record = build_record(
            level,
            namespace,
            msg,
            metadata,
            stack_trace,
            args,
            default_metadata=self._default_meta,
            clock=self._clock,
        )
        if not record.level.enabled_for(self._config.level):
            return None
        self._dispatch(record)
        return record

    def _dispatch(self, record: LogRecord) -> None:
        for sink in self._sinks:
            try:
                sink.emit(record)
            except Exception:
                _log.warning("sink emit failed", sink=type(sink).__name__, exc_info=True)

    def error(
        self,
        namespace: Optional[str] = None,
        msg: Optional[str] = None,
        metadata: Optional[Mapping[str, Any]] = None,
        stack_trace: Any = None,
        args: Optional[Mapping[str, Any]] = None,
    ) -> Optional[LogRecord]:
        """Log level error - priority 0."""
        return self.show(LogLevel.ERROR, namespace, msg, metadata, stack_trace, args)

    def warn(
        self,
        namespace: Optional[str] = None,
        msg: Optional[str] = None,
        metadata: Optional[Mapping[str, Any]] = None,
        stack_trace: Any = None,
        args: Optional[Mapping[str, Any]] = None,
    ) -> Optional[LogRecord]:
        """Log level warning - priority 1."""
        return self.show(LogLevel.WARNING, namespace, msg, metadata, stack_trace, args)

    warning = warn

    def info(
        self,
        namespace: Optional[str] = None,
        msg: Optional[str] = None,
        metadata: Optional[Mapping[str, Any]] = None,
        stack_trace: Any = None,
        args: Optional[Mapping[str, Any]] = None,
    ) -> Optional[LogRecord]:
        """Log level info - priority 2."""
        return self.show(LogLevel.INFO, namespace, msg, metadata, stack_trace, args)

    def debug(
        self,
        namespace: Optional[str] = None,
        msg: Optional[str] = None,
        metadata: Optional[Mapping[str, Any]] = None,
        stack_trace: Any = None,
        args: Optional[Mapping[str, Any]] = None,
    ) -> Optional[LogRecord]:
        """Log level debug - priority 3."""
        return self.show(LogLevel.DEBUG, namespace, msg, metadata, stack_trace, args)

    @staticmethod
    def to_error(err: Any) -> str:
        """Serialize every attribute of an error to a string."""
        return normalize_error(err)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def close(self) -> None:
        for sink in self._sinks:
            try:
                sink.close()
            except Exception:
                _log.warning("sink close failed", sink=type(sink).__name__, exc_info=True)

    def __enter__(self) -> "Log":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
