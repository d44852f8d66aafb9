"""
Diagnostics Configuration.
"""

from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DiagnosticLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class DiagnosticFormat(str, Enum):
    CONSOLE = "console"
    JSON = "json"


class DiagnosticsSettings(BaseSettings):
    """Settings of channellog's own diagnostic output."""

    model_config = SettingsConfigDict(
        env_prefix="CHANNELLOG_DIAG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    level: DiagnosticLevel = Field(default=DiagnosticLevel.WARNING, description="Diagnostic log level")
    format: DiagnosticFormat = Field(default=DiagnosticFormat.CONSOLE, description="Output format")
