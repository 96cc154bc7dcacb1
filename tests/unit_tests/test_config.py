"""
Configuration resolution tests: explicit values over environment defaults over fallbacks.
"""

from __future__ import annotations

import pydantic
import pytest

from syslogger import ConfigError, LogLevel, LoggerConfig, load_env_defaults, resolve_config
from syslogger.config import SyslogSettings


class TestResolveConfig:
    """Precedence and fallbacks"""

    def test_fallbacks(self) -> None:
        resolved = resolve_config(LoggerConfig(app_name="DOUGLAS"))
        assert resolved.app_name == "DOUGLAS"
        assert resolved.host == "localhost"
        assert resolved.protocol == "udp"
        assert resolved.port == 514
        assert resolved.facility == "local0"
        assert resolved.path == "/dev/log"
        assert resolved.timestamp is True
        assert resolved.colors is None
        assert resolved.level is LogLevel.DEBUG
        assert resolved.sinks == ("console", "syslog")

    def test_explicit_wins_over_defaults(self) -> None:
        resolved = resolve_config(
            LoggerConfig(app_name="explicit", host="logs.internal"),
            LoggerConfig(app_name="ambient", host="ignored", port=1514),
        )
        assert resolved.app_name == "explicit"
        assert resolved.host == "logs.internal"
        assert resolved.port == 1514

    def test_empty_values_fall_through(self) -> None:
        resolved = resolve_config(LoggerConfig(app_name="", port=0), LoggerConfig(app_name="ambient", port=1514))
        assert resolved.app_name == "ambient"
        assert resolved.port == 1514

    def test_false_is_an_explicit_value(self) -> None:
        resolved = resolve_config(LoggerConfig(app_name="a", timestamp=False, colors=False), LoggerConfig(timestamp=True))
        assert resolved.timestamp is False
        assert resolved.colors is False

    def test_sinks_are_normalized(self) -> None:
        assert resolve_config(LoggerConfig(app_name="a", sinks=" Console , ")).sinks == ("console",)

    def test_missing_app_name(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            resolve_config(LoggerConfig(host="localhost"))
        assert exc_info.value.code == "CONFIG_ERROR"

    def test_blank_app_name(self) -> None:
        with pytest.raises(ConfigError):
            resolve_config(LoggerConfig(app_name="   "))

    @pytest.mark.parametrize(
        "config",
        [
            LoggerConfig(app_name="a", protocol="carrier-pigeon"),
            LoggerConfig(app_name="a", facility="kitchen"),
            LoggerConfig(app_name="a", level="alert"),
            LoggerConfig(app_name="a", sinks="console,gcloud"),
        ],
    )
    def test_invalid_values(self, config) -> None:
        with pytest.raises(ConfigError):
            resolve_config(config)


class TestEnvironmentDefaults:
    """Loading defaults from the process environment"""

    def test_reads_variables(self, monkeypatch) -> None:
        monkeypatch.setenv("APP_NAME", "DOUGLAS")
        monkeypatch.setenv("SYSLOG_HOST", "syslog.local")
        monkeypatch.setenv("SYSLOG_PROTOCOL", "tcp")
        monkeypatch.setenv("SYSLOG_PORT", "1514")
        monkeypatch.setenv("SYSLOG_FACILITY", "user")
        monkeypatch.setenv("SYSLOG_PATH", "/var/run/syslog")
        monkeypatch.setenv("SYSLOG_COLORS", "false")

        defaults = load_env_defaults(env_file=None)

        assert defaults == LoggerConfig(
            app_name="DOUGLAS",
            host="syslog.local",
            protocol="tcp",
            port=1514,
            facility="user",
            path="/var/run/syslog",
            colors=False,
        )

    def test_empty_environment(self) -> None:
        assert load_env_defaults(env_file=None) == LoggerConfig()

    def test_prefixed_app_name_alias(self, monkeypatch) -> None:
        monkeypatch.setenv("SYSLOG_APP_NAME", "prefixed")
        assert load_env_defaults(env_file=None).app_name == "prefixed"

    def test_invalid_port(self, monkeypatch) -> None:
        monkeypatch.setenv("SYSLOG_PORT", "not-a-port")
        with pytest.raises(ConfigError):
            load_env_defaults(env_file=None)

    def test_env_file(self, tmp_path) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("APP_NAME=from-file\nSYSLOG_LEVEL=info\n", encoding="utf-8")
        defaults = load_env_defaults(env_file=str(env_file))
        assert defaults.app_name == "from-file"
        assert defaults.level == "info"

    def test_explicit_over_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("APP_NAME", "ambient")
        monkeypatch.setenv("SYSLOG_HOST", "syslog.local")
        resolved = resolve_config(LoggerConfig(app_name="explicit"), load_env_defaults(env_file=None))
        assert resolved.app_name == "explicit"
        assert resolved.host == "syslog.local"

    def test_settings_are_frozen(self) -> None:
        settings = SyslogSettings(_env_file=None, APP_NAME="x")
        assert settings.app_name == "x"
        with pytest.raises(pydantic.ValidationError):
            settings.app_name = "y"
