import io
import typing as t
from pathlib import Path

import pytest

from channellog import LogFacade, LoggingConfig, configure_diagnostics, load_logging_config
from channellog import static
from channellog.writers import DEFAULT_RETENTION_DAYS


@pytest.fixture(autouse=True)
def diagnostics_stream() -> t.Iterator[io.StringIO]:
    """
    Routes channellog's own diagnostics into a buffer for each test and
    restores the defaults afterwards.
    """
    stream = io.StringIO()
    configure_diagnostics(level="DEBUG", fmt="console", stream=stream)
    yield stream
    configure_diagnostics()


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path: Path) -> None:
    """Keeps CHANNELLOG_* variables and a stray .env file out of the tests."""
    for name in ("DEFAULT", "LEVEL", "STORAGE_PATH", "CONFIG_FILE", "CONSOLE_ECHO", "DATE_FORMAT"):
        monkeypatch.delenv(f"CHANNELLOG_{name}", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def reset_static_log() -> t.Iterator[None]:
    """Resets the process-wide facade between tests."""
    yield
    static.set_path(None)
    static.set_days(DEFAULT_RETENTION_DAYS)
    static.reset_log()


@pytest.fixture
def make_config(tmp_path: Path) -> t.Callable[..., LoggingConfig]:
    """Builds a LoggingConfig rooted in the test's temporary directory."""

    def _make(data: t.Optional[dict] = None) -> LoggingConfig:
        return load_logging_config({"storage_path": str(tmp_path / "storage"), **(data or {})}, strict=True)

    return _make


@pytest.fixture
def make_facade(make_config) -> t.Iterator[t.Callable[..., LogFacade]]:
    """Builds LogFacades with console echo off and closes them afterwards."""
    created: list[LogFacade] = []

    def _make(data: t.Optional[dict] = None, **kwargs: t.Any) -> LogFacade:
        kwargs.setdefault("console_echo", False)
        facade = LogFacade(make_config(data), **kwargs)
        created.append(facade)
        return facade

    yield _make
    for facade in created:
        facade.registry.close()


@pytest.fixture
def logs_dir(tmp_path: Path) -> Path:
    return tmp_path / "storage" / "logs"
