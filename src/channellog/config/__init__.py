"""
channellog Configuration Module.

Implements the Nested Settings Pattern: each concern has its own settings
class and environment variable prefix.

Usage:
    from channellog.config import settings

    settings.logging.default      # "stack"
    settings.diagnostics.level    # "WARNING"

    # Full channel tree (environment + optional JSON config file)
    config = load_logging_config()
"""

from functools import cached_property

from pydantic_settings import BaseSettings, SettingsConfigDict

from .diagnostics import DiagnosticFormat, DiagnosticLevel, DiagnosticsSettings
from .loader import ConfigSource, load_logging_config
from .logging import ChannelConfig, LoggingConfig, LoggingSettings


class Settings(BaseSettings):
    """Composite settings aggregating the configuration domains."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @cached_property
    def logging(self) -> LoggingSettings:
        return LoggingSettings()

    @cached_property
    def diagnostics(self) -> DiagnosticsSettings:
        return DiagnosticsSettings()


# Singleton instance
settings = Settings()

__all__ = [
    "Settings",
    "settings",
    "ChannelConfig",
    "ConfigSource",
    "DiagnosticFormat",
    "DiagnosticLevel",
    "DiagnosticsSettings",
    "LoggingConfig",
    "LoggingSettings",
    "load_logging_config",
]
