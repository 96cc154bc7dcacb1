"""
syslogger configuration.

Usage:
    from syslogger.config import LoggerConfig, load_env_defaults, resolve_config

    resolved = resolve_config(LoggerConfig(app_name="billing"), load_env_defaults())
"""

from .environment import SyslogSettings, load_env_defaults
from .logger import LoggerConfig, ResolvedConfig, resolve_config

__all__ = ["LoggerConfig", "ResolvedConfig", "SyslogSettings", "load_env_defaults", "resolve_config"]
