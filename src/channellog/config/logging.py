"""
Logging Configuration.

`LoggingSettings` reads the environment; `LoggingConfig` is the immutable
channel tree the registry is built from.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from channellog.formatters import DEFAULT_DATE_FORMAT
from channellog.severity import Severity, normalize

DEFAULT_CHANNEL = "stack"
DEFAULT_LEVEL = "debug"
DEFAULT_DRIVER = "single"
DEFAULT_STORAGE_PATH = Path("storage")


def _coerce_level(value: Any) -> Any:
    """Accept Severity members and integer levels alongside names."""
    if isinstance(value, Severity):
        return value.key
    if isinstance(value, int) and not isinstance(value, bool):
        return normalize(value).key
    if isinstance(value, str):
        return value.strip().lower()
    return value


class ChannelConfig(BaseModel):
    """Configuration record of a single channel."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: Optional[str] = None
    driver: str = DEFAULT_DRIVER
    path: Optional[str] = None
    level: Optional[str] = None
    days: Optional[int] = None
    channels: Optional[List[str]] = None
    ident: Optional[str] = None
    facility: Optional[Union[int, str]] = None
    address: Optional[str] = None

    @field_validator("driver", mode="before")
    @classmethod
    def _normalize_driver(cls, value: Any) -> Any:
        if value is None:
            return DEFAULT_DRIVER
        return str(value).strip().lower()

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, value: Any) -> Any:
        return _coerce_level(value)

    @field_validator("channels", mode="before")
    @classmethod
    def _listify_channels(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [value]
        return value


class LoggingConfig(BaseModel):
    """Root of the logging configuration tree."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    default: str = DEFAULT_CHANNEL
    level: str = DEFAULT_LEVEL
    channels: Dict[str, ChannelConfig] = Field(default_factory=dict)
    storage_path: Path = DEFAULT_STORAGE_PATH
    console_echo: Optional[bool] = None
    date_format: str = DEFAULT_DATE_FORMAT

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, value: Any) -> Any:
        if value is None:
            return DEFAULT_LEVEL
        return _coerce_level(value)

    @property
    def logs_dir(self) -> Path:
        return self.storage_path / "logs"

    def channel(self, name: str) -> Optional[ChannelConfig]:
        return self.channels.get(name)


class LoggingSettings(BaseSettings):
    """Logging configuration sourced from the environment."""

    model_config = SettingsConfigDict(
        env_prefix="CHANNELLOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    default: str = Field(default=DEFAULT_CHANNEL, description="Default channel name")
    level: str = Field(default=DEFAULT_LEVEL, description="Global minimum severity")
    storage_path: Path = Field(default=DEFAULT_STORAGE_PATH, description="Storage root; logs go to <root>/logs")
    config_file: Optional[Path] = Field(default=None, description="JSON file holding the channel tree")
    console_echo: Optional[bool] = Field(default=None, description="Mirror messages to stdout (auto when unset)")
    date_format: str = Field(default=DEFAULT_DATE_FORMAT, description="Timestamp format of rendered lines")
