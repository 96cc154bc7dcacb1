"""
Environment Configuration.

Reads logger defaults from the process environment (and ``.env``). Only the
composing application calls this; ``Log`` itself never touches the environment.

Variables:
    APP_NAME, SYSLOG_HOST, SYSLOG_PROTOCOL, SYSLOG_PORT, SYSLOG_FACILITY,
    SYSLOG_PATH, SYSLOG_TIMESTAMP, SYSLOG_COLORS, SYSLOG_LEVEL, SYSLOG_SINKS
"""

from __future__ import annotations

from typing import Optional

import pydantic
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..exceptions import ConfigError
from .logger import LoggerConfig


class SyslogSettings(BaseSettings):
    """Process-wide logger defaults."""

    model_config = SettingsConfigDict(
        env_prefix="SYSLOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    app_name: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("APP_NAME", "SYSLOG_APP_NAME"),
        description="Application name used as syslog tag and line label",
    )
    host: Optional[str] = Field(default=None, description="Syslog collector host")
    protocol: Optional[str] = Field(default=None, description="udp, tcp or unix")
    port: Optional[int] = Field(default=None, description="Syslog collector port")
    facility: Optional[str] = Field(default=None, description="Syslog facility name")
    path: Optional[str] = Field(default=None, description="Unix socket path")
    timestamp: Optional[bool] = Field(default=None, description="Show timestamps on the console")
    colors: Optional[bool] = Field(default=None, description="Force console colors on or off")
    level: Optional[str] = Field(default=None, description="Minimum level emitted")
    sinks: Optional[str] = Field(default=None, description="Comma-separated sink names (console, syslog)")

    def to_config(self) -> LoggerConfig:
        return LoggerConfig(
            app_name=self.app_name,
            host=self.host,
            protocol=self.protocol,
            port=self.port,
            facility=self.facility,
            path=self.path,
            timestamp=self.timestamp,
            colors=self.colors,
            level=self.level,
            sinks=self.sinks,
        )


def load_env_defaults(env_file: Optional[str] = ".env") -> LoggerConfig:
    """Load logger defaults from environment variables and ``env_file``."""
    try:
        settings = SyslogSettings(_env_file=env_file)
    except pydantic.ValidationError as exc:
        raise ConfigError("Invalid logger settings in environment", details={"errors": exc.errors()}) from exc
    return settings.to_config()
