"""Shared test fixtures for the taglog test suite."""

import os
from unittest.mock import patch

import pytest

import taglog.logger as _logger_mod
from taglog.settings import Settings
from taglog.logger import TagLogger


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: multi-threaded stress tests")


# ---------------------------------------------------------------------------
# Console double
# ---------------------------------------------------------------------------
class RecordingConsole:
    """Console sink that keeps every line it receives."""

    def __init__(self):
        self.lines = []
        self.error_lines = []
        self.contexts = []

    def write_line(self, text, context=None):
        self.lines.append(text)
        self.contexts.append(context)

    def write_error_line(self, text, context=None):
        self.error_lines.append(text)


@pytest.fixture
def console():
    """A console sink recording normal and error lines."""
    return RecordingConsole()


@pytest.fixture
def other_console():
    """A second, independent recording console."""
    return RecordingConsole()


@pytest.fixture
def info_settings():
    """History and console on, tag header on, no timestamp, INFO active."""
    return Settings(
        log_to_console=True,
        log_to_history=True,
        log_tag_header=True,
        log_time=False,
        default_active_tags=("INFO",),
    )


@pytest.fixture
def logger(console, info_settings):
    """A TagLogger with INFO active, writing to the recording console."""
    return TagLogger(info_settings, console=console)


@pytest.fixture
def events(logger):
    """Record on_logged / on_error_logged payloads of the `logger` fixture."""
    seen = {"logged": [], "errors": []}
    logger.on_logged.subscribe(seen["logged"].append)
    logger.on_error_logged.subscribe(seen["errors"].append)
    return seen


# ---------------------------------------------------------------------------
# Singleton isolation
# ---------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def _reset_singleton():
    """Reset the TagLogger singleton between tests."""
    old = _logger_mod._logger
    _logger_mod._logger = None
    yield
    _logger_mod._logger = old


# ---------------------------------------------------------------------------
# Temporary config locations
# ---------------------------------------------------------------------------
@pytest.fixture
def tmp_config_home(tmp_path):
    """Provide a temporary home directory for ~/.taglog/config.json."""
    home = tmp_path / "home"
    home.mkdir()
    with patch.dict(os.environ, {"HOME": str(home), "USERPROFILE": str(home)}):
        with patch("pathlib.Path.home", return_value=home):
            yield home


@pytest.fixture
def tmp_project(tmp_path):
    """Provide a temporary project directory with a nested subdirectory."""
    project = tmp_path / "project"
    (project / "src" / "pkg").mkdir(parents=True)
    return project


@pytest.fixture
def clean_env(monkeypatch):
    """Remove TAGLOG_* variables so the developer's shell cannot leak in."""
    for key in list(os.environ):
        if key.startswith("TAGLOG_"):
            monkeypatch.delenv(key, raising=False)
