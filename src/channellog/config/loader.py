"""
Logging Configuration Loader.

Builds a `LoggingConfig` from a mapping, a JSON file or the environment.
Loading is fail-open: invalid channel records are skipped and an unusable
tree falls back to the documented defaults, each with a diagnostic warning.
Pass `strict=True` to get a `ConfigurationError` instead.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import orjson
from pydantic import ValidationError

from channellog.diagnostics import get_logger
from channellog.exceptions import ConfigurationError

from .logging import ChannelConfig, LoggingConfig, LoggingSettings

logger = get_logger("channellog.config.loader")

ConfigSource = Union[LoggingConfig, Mapping[str, Any], str, Path, None]


def load_logging_config(
    source: ConfigSource = None,
    *,
    strict: bool = False,
    settings: Optional[LoggingSettings] = None,
) -> LoggingConfig:
    """
    Load the logging configuration tree.

    Args:
        source: A ready `LoggingConfig`, a mapping, a path to a JSON file, or
                None to read `LoggingSettings` (and its `config_file`).
        strict: Raise `ConfigurationError` instead of falling back.
        settings: Settings to use when `source` is None.

    Returns:
        LoggingConfig instance
    """
    if isinstance(source, LoggingConfig):
        return source
    if isinstance(source, (str, Path)):
        return _from_file(Path(source), strict=strict)
    if source is None:
        return _from_settings(settings or LoggingSettings(), strict=strict)
    return _from_mapping(source, source_name="mapping", strict=strict)


def _from_settings(settings: LoggingSettings, *, strict: bool) -> LoggingConfig:
    data: Dict[str, Any] = {}
    if settings.config_file is not None:
        data = _read_json(settings.config_file, strict=strict)

    # Values set explicitly through the environment win over the file
    for key in ("default", "level", "storage_path", "console_echo", "date_format"):
        if key in settings.model_fields_set or key not in data:
            data[key] = getattr(settings, key)

    return _from_mapping(data, source_name="settings", strict=strict)


def _from_file(path: Path, *, strict: bool) -> LoggingConfig:
    return _from_mapping(_read_json(path, strict=strict), source_name=str(path), strict=strict)


def _read_json(path: Path, *, strict: bool) -> Dict[str, Any]:
    try:
        data = orjson.loads(path.read_bytes())
    except (OSError, orjson.JSONDecodeError) as exc:
        return _fail({}, source=str(path), reason=str(exc), strict=strict)
    if not isinstance(data, dict):
        return _fail({}, source=str(path), reason="top-level value must be an object", strict=strict)
    return data


def _from_mapping(data: Any, *, source_name: str, strict: bool) -> LoggingConfig:
    if not isinstance(data, Mapping):
        return _fail(LoggingConfig(), source=source_name, reason="configuration must be a mapping", strict=strict)

    raw_channels = data.get("channels") or {}
    if not isinstance(raw_channels, Mapping):
        _fail(None, source=source_name, reason="'channels' must be a mapping", strict=strict)
        raw_channels = {}

    channels: Dict[str, ChannelConfig] = {}
    for name, record in raw_channels.items():
        try:
            channels[str(name)] = ChannelConfig.model_validate(record if record is not None else {})
        except ValidationError as exc:
            _fail(None, source=source_name, reason=f"channel '{name}': {exc.errors()}", strict=strict)

    root = {key: value for key, value in data.items() if key != "channels"}
    try:
        return LoggingConfig.model_validate({**root, "channels": channels})
    except ValidationError as exc:
        return _fail(LoggingConfig(), source=source_name, reason=str(exc.errors()), strict=strict)


def _fail(fallback: Any, *, source: str, reason: str, strict: bool) -> Any:
    if strict:
        raise ConfigurationError(source=source, reason=reason)
    logger.warning("logging_config_invalid", source=source, reason=reason)
    return fallback


__all__ = ["ConfigSource", "load_logging_config"]
