"""Settings snapshot and configuration loading for taglog.

Four-layer resolution (highest priority wins):
  1. Environment - TAGLOG_TAGS, TAGLOG_CONSOLE, TAGLOG_HISTORY,
     TAGLOG_TAG_HEADER, TAGLOG_TIME
  2. Project config - .taglog.json, found by walking up from the cwd
  3. Global config - ~/.taglog/config.json
  4. Built-in defaults (Settings())

A config file holds the persisted snapshot, e.g.:

    {
      "log_to_console": true,
      "log_to_history": true,
      "log_tag_header": true,
      "log_time": false,
      "default_active_tags": ["INFO", "WARN"]
    }
"""

import json
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Optional, Protocol, Tuple

from taglog import tags as _tags


PROJECT_CONFIG_NAME = ".taglog.json"

_TRUE_VALUES = {'1', 'true', 'yes', 'on'}
_FALSE_VALUES = {'0', 'false', 'no', 'off'}

ENV_KEYS = {
    'TAGLOG_CONSOLE': 'log_to_console',
    'TAGLOG_HISTORY': 'log_to_history',
    'TAGLOG_TAG_HEADER': 'log_tag_header',
    'TAGLOG_TIME': 'log_time',
    'TAGLOG_TAGS': 'default_active_tags',
}


def _to_bool(key, value):
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
    raise ValueError(f"Invalid boolean for {key!r}: {value!r}")


def _to_tags(value):
    if isinstance(value, str):
        value = value.split(',')
    return tuple(str(t).strip() for t in value if not _tags.is_blank(t))


@dataclass(frozen=True)
class Settings:
    """Immutable logger configuration.

    Attributes:
        log_to_console: Write normal logs to the console sink
        log_to_history: Mirror logs into the history buffer
        log_tag_header: Prefix messages with "[TAG1,TAG2] "
        log_time: Prefix messages with "(HH:MM:SS) "
        default_active_tags: Tags active right after settings are applied
    """
    log_to_console: bool = True
    log_to_history: bool = True
    log_tag_header: bool = True
    log_time: bool = False
    default_active_tags: Tuple[str, ...] = (
        _tags.FORCE, _tags.INFO, _tags.WARNING, _tags.IMPORTANT,
    )

    def __post_init__(self):
        # Accept lists from callers; the snapshot itself stays immutable
        if not isinstance(self.default_active_tags, tuple):
            object.__setattr__(self, 'default_active_tags',
                               _to_tags(self.default_active_tags))

    @classmethod
    def from_dict(cls, data: dict, base: "Settings" = None) -> "Settings":
        """Build a snapshot from a config dict.

        Keys may use underscores or hyphens. Missing keys keep the value
        from `base` (or the defaults); unknown keys are ignored.

        Raises:
            ValueError: if a flag value is not a recognisable boolean.
        """
        base = base or cls()
        known = {f.name for f in fields(cls)}
        updates = {}
        for key, value in (data or {}).items():
            name = key.replace('-', '_')
            if name not in known or value is None:
                continue
            if name == 'default_active_tags':
                updates[name] = _to_tags(value)
            else:
                updates[name] = _to_bool(key, value)
        return replace(base, **updates)

    def to_dict(self) -> dict:
        return {
            'log_to_console': self.log_to_console,
            'log_to_history': self.log_to_history,
            'log_tag_header': self.log_tag_header,
            'log_time': self.log_time,
            'default_active_tags': list(self.default_active_tags),
        }


class SettingsProvider(Protocol):
    """Source of the current persisted settings."""

    def get_current_settings(self) -> Settings:
        ...


class StaticSettingsProvider:
    """Provider that always returns the same snapshot."""

    def __init__(self, settings: Settings = None):
        self._settings = settings or Settings()

    def get_current_settings(self) -> Settings:
        return self._settings


# ---------------------------------------------------------------------------
# Config file locations
# ---------------------------------------------------------------------------
def get_global_config_dir():
    """Return the global config directory (~/.taglog/)."""
    return Path.home() / ".taglog"


def get_global_config_path():
    """Return path to the global config file."""
    return get_global_config_dir() / "config.json"


def find_project_config(start_dir=None):
    """Walk up from start_dir looking for .taglog.json.

    Returns the path if found, None otherwise.
    """
    current = Path(start_dir or os.getcwd()).resolve()
    for _ in range(20):  # safety limit
        candidate = current / PROJECT_CONFIG_NAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def load_json(path):
    """Load a JSON object file, returning empty dict on error."""
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (FileNotFoundError, IsADirectoryError, json.JSONDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def env_overrides(environ=None) -> dict:
    """Collect settings overrides from TAGLOG_* environment variables."""
    env = os.environ if environ is None else environ
    return {name: env[key] for key, name in ENV_KEYS.items() if key in env}


class JsonSettingsProvider:
    """Layered provider: environment > project file > global file > defaults.

    Args:
        start_dir: Directory to start the .taglog.json search from
            (default: cwd at load time)
        path: Explicit project config path; disables the upward search
        environ: Mapping used for overrides (default: os.environ)
    """

    def __init__(self, start_dir=None, path=None, environ=None):
        self.start_dir = start_dir
        self.path = Path(path) if path else None
        self.environ = environ

    def project_config_path(self):
        if self.path is not None:
            return self.path
        return find_project_config(self.start_dir)

    def get_current_settings(self) -> Settings:
        settings = Settings.from_dict(load_json(get_global_config_path()))
        project_path = self.project_config_path()
        if project_path is not None:
            settings = Settings.from_dict(load_json(project_path), base=settings)
        return Settings.from_dict(env_overrides(self.environ), base=settings)


def load_settings(provider: Optional[SettingsProvider] = None) -> Settings:
    """Return the provider's current settings.

    Provider errors are not caught; they reach the caller unchanged.
    """
    if provider is None:
        provider = JsonSettingsProvider()
    return provider.get_current_settings()


# ---------------------------------------------------------------------------
# Config writing
# ---------------------------------------------------------------------------
def save_project_settings(settings: Settings, directory=None):
    """Write .taglog.json to `directory` (default: cwd)."""
    target = Path(directory or os.getcwd()) / PROJECT_CONFIG_NAME
    with open(target, "w", encoding="utf-8") as f:
        json.dump(settings.to_dict(), f, indent=2)
        f.write("\n")
    return target


def save_global_settings(settings: Settings):
    """Write the global config file."""
    config_dir = get_global_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)
    config_path = get_global_config_path()
    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(settings.to_dict(), f, indent=2)
        f.write("\n")
    return config_path
