"""
taglog - tag-gated logging with history and log events.

Messages carry zero or more string tags and are emitted only while one of
their tags is active. The FORCE tag ('F') is always active. Everything
emitted is mirrored into an in-memory history and announced on the
on_logged / on_error_logged channels.

Public API:
    TagLogger        - the logger (one instance owns all its state)
    init_logger      - singleton initialization (idempotent)
    get_logger       - access singleton
    log, log_error, log_fast, show
                     - module-level logging through the singleton
    set_tag_active, set_tag_disabled, is_tag_active, get_tags
                     - tag control
    clear, get_history
                     - history access
    apply_settings   - reconfigure the singleton
    Settings         - immutable configuration snapshot
    load_settings    - read settings from a provider (default: JSON/env)
    TagRegistry      - the active-tag set
    trace            - function tracing decorator
"""

from taglog._version import __version__, __app_name__
from taglog import tags
from taglog.tags import FORCE, TagRegistry, format_tag_list
from taglog.settings import (
    Settings, SettingsProvider, StaticSettingsProvider, JsonSettingsProvider,
    load_settings, save_project_settings, save_global_settings,
)
from taglog.history import HistoryBuffer
from taglog.events import EventChannel, EventHub
from taglog.console import ConsoleSink, StreamConsole
from taglog.build import LOGGING_ENABLED, dev_only
from taglog.logger import (
    TagLogger, init_logger, get_logger, reset_logger,
    log, log_error, log_fast, show,
    set_tag_active, set_tag_disabled, is_tag_active, get_tags,
    get_history, clear, apply_settings, on_logged, on_error_logged,
)
from taglog.trace import trace

__all__ = [
    '__version__', '__app_name__',
    'tags', 'FORCE', 'TagRegistry', 'format_tag_list',
    'Settings', 'SettingsProvider', 'StaticSettingsProvider',
    'JsonSettingsProvider', 'load_settings',
    'save_project_settings', 'save_global_settings',
    'HistoryBuffer', 'EventChannel', 'EventHub',
    'ConsoleSink', 'StreamConsole',
    'LOGGING_ENABLED', 'dev_only',
    'TagLogger', 'init_logger', 'get_logger', 'reset_logger',
    'log', 'log_error', 'log_fast', 'show',
    'set_tag_active', 'set_tag_disabled', 'is_tag_active', 'get_tags',
    'get_history', 'clear', 'apply_settings', 'on_logged', 'on_error_logged',
    'trace',
]
