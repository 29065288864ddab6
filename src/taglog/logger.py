"""
TagLogger - the tag-gated logging core.

Central coordinator for tag-filtered output. The emit rule is:

    message shows when it has no tags, or at least one of its tags
    is active in the registry.

FORCE ('F') is always active, so log(msg, FORCE) is never filtered.
Errors skip the gate entirely.

Every emitted message goes, in order, to:
    history buffer   (if log_to_history)
    console sink     (if log_to_console; errors always)
    event channel    (on_logged / on_error_logged)

Decoration order for log()/log_error():
    "(HH:MM:SS) [TAG1,TAG2] message"
     ^ log_time  ^ log_tag_header

log_fast() and show() bypass filtering and decoration.
"""

import threading
import time
from typing import Any, List, Optional

from . import tags as _tags
from .build import dev_only
from .console import ConsoleSink, StreamConsole
from .events import EventHub
from .history import HistoryBuffer
from .settings import Settings, SettingsProvider, load_settings


def format_time(now: Optional[float] = None) -> str:
    """Local wall-clock time as HH:MM:SS (24-hour, zero padded)."""
    return time.strftime("%H:%M:%S", time.localtime(now))


def format_value(index: int, value: Any) -> str:
    """Render one show() argument as "[index: type - text]"."""
    if value is None:
        return f"[{index}: null]"
    return f"[{index}: {type(value).__name__} - {value}]"


class TagLogger:
    """Tag-gated logger with history and event notification.

    A TagLogger owns all of its state (active tags, flags, history,
    listeners), so independent instances never interfere. A reentrant
    lock serialises mutations and emissions; listeners may log from
    inside a notification.

    Usage::

        logger = TagLogger(Settings(default_active_tags=['INFO']))
        logger.log("loaded {} items".format(42), 'INFO')   # shown
        logger.log("cache miss", 'CACHE')                   # filtered
        logger.log_error("disk full", 'IO')                 # always shown
        logger.history.contents()
    """

    def __init__(self, settings: Optional[Settings] = None,
                 console: Optional[ConsoleSink] = None):
        self.console = console if console is not None else StreamConsole()
        self.registry = _tags.TagRegistry([_tags.FORCE])
        self.history = HistoryBuffer()
        self.events = EventHub(on_error=self._report_listener_error)
        self._lock = threading.RLock()
        self._configured = False
        self.log_to_console = True
        self.log_to_history = True
        self.log_tag_header = True
        self.log_time = False
        if settings is not None:
            self.apply_settings(settings)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    def apply_settings(self, settings: Settings) -> None:
        """Copy the output flags and reset the active tags from `settings`.

        May be called any number of times; each call fully replaces the
        previous tag state.
        """
        with self._lock:
            self.log_to_console = settings.log_to_console
            self.log_to_history = settings.log_to_history
            self.log_tag_header = settings.log_tag_header
            self.log_time = settings.log_time
            self.registry.reset(settings)
            self._configured = True

    @property
    def settings(self) -> Settings:
        """Current flags and active tags as a snapshot (e.g. for saving)."""
        with self._lock:
            return Settings(
                log_to_console=self.log_to_console,
                log_to_history=self.log_to_history,
                log_tag_header=self.log_tag_header,
                log_time=self.log_time,
                default_active_tags=tuple(self.registry.snapshot()),
            )

    @property
    def configured(self) -> bool:
        """True once settings have been applied."""
        return self._configured

    @property
    def on_logged(self):
        return self.events.on_logged

    @property
    def on_error_logged(self):
        return self.events.on_error_logged

    # ------------------------------------------------------------------
    # Formatting
    # ------------------------------------------------------------------
    def _report_listener_error(self, channel, listener, error) -> None:
        # Straight to the error console: firing on_error_logged here could loop
        self.console.write_error_line(
            f"taglog: {channel.name} listener {listener!r} raised "
            f"{type(error).__name__}: {error}")

    def _decorate(self, message: str, tags) -> str:
        if tags and self.log_tag_header:
            header = ",".join("" if t is None else str(t) for t in tags)
            message = "[" + header + "] " + message
        if self.log_time:
            message = "(" + format_time() + ") " + message
        return message

    # ------------------------------------------------------------------
    # Emission
    # ------------------------------------------------------------------
    @dev_only
    def log(self, message: Any, *tags: str) -> None:
        """Emit `message` if it has no tags or any of its tags is active.

        Args:
            message: Text to log; other objects are rendered with str()
            *tags: Tags classifying the message
        """
        if not isinstance(message, str):
            message = str(message)
        with self._lock:
            if tags and not self.registry.has_any(tags):
                return
            message = self._decorate(message, tags)
            if self.log_to_history:
                self.history.append(message)
            if self.log_to_console:
                self.console.write_line(message)
            self.events.on_logged.fire(message)

    def log_error(self, message: Any, *tags: str) -> None:
        """Emit an error. Errors are never filtered by tags.

        The console error channel is written even when log_to_console is
        off; history still follows log_to_history.
        """
        if not isinstance(message, str):
            message = str(message)
        with self._lock:
            message = self._decorate(message, tags)
            if self.log_to_history:
                self.history.append(message)
            self.console.write_error_line(message)
            self.events.on_error_logged.fire(message)

    @dev_only
    def log_fast(self, message: Any, context: Any = None) -> None:
        """Emit `message` untouched: no tag gate, no header, no timestamp."""
        if not isinstance(message, str):
            message = str(message)
        with self._lock:
            self.history.append(message)
            self.console.write_line(message, context)
            self.events.on_logged.fire(message)

    @dev_only
    def show(self, *values: Any) -> None:
        """Dump values with their index and type on a single line.

        show(None, 5) emits "[0: null][1: int - 5]". The line is added to
        history without a terminator.
        """
        if not values:
            return
        text = "".join(format_value(i, v) for i, v in enumerate(values))
        with self._lock:
            self.history.append_raw(text)
            self.console.write_line(text)
            self.events.on_logged.fire(text)

    # ------------------------------------------------------------------
    # Tags
    # ------------------------------------------------------------------
    @dev_only
    def set_tag_active(self, tag: str) -> None:
        with self._lock:
            self.registry.activate(tag)

    @dev_only
    def set_tag_disabled(self, tag: str) -> None:
        """Disable a tag. FORCE cannot be disabled."""
        with self._lock:
            self.registry.deactivate(tag)

    def is_tag_active(self, tag: str) -> bool:
        with self._lock:
            return self.registry.is_active(tag)

    def get_tags(self) -> List[str]:
        """Active tags in activation order."""
        with self._lock:
            return self.registry.snapshot()

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------
    def get_history(self) -> str:
        with self._lock:
            return self.history.contents()

    def clear(self) -> None:
        """Empty the history buffer."""
        with self._lock:
            self.history.clear()


# =============================================================================
# Module-level singleton
# =============================================================================

_logger: Optional[TagLogger] = None
_singleton_lock = threading.Lock()


def init_logger(provider: Optional[SettingsProvider] = None,
                settings: Optional[Settings] = None,
                console: Optional[ConsoleSink] = None) -> TagLogger:
    """Initialize the module-level TagLogger singleton.

    Call once at program startup. Repeated calls are harmless: once the
    singleton has had settings applied, initialization is skipped, so a
    startup hook that runs again without a real process restart keeps
    the live tag state. Use get_logger().apply_settings() to reconfigure
    deliberately.

    Args:
        provider: Settings source (default: layered JSON/env config)
        settings: Explicit snapshot; takes precedence over `provider`
        console: Console sink for a newly created singleton

    Returns:
        The module-level TagLogger
    """
    global _logger
    with _singleton_lock:
        if _logger is None:
            _logger = TagLogger(console=console)
        if _logger.configured:
            return _logger
        _logger.apply_settings(settings if settings is not None
                               else load_settings(provider))
        return _logger


def get_logger() -> TagLogger:
    """Get the module-level TagLogger, initializing it on first use."""
    if _logger is None or not _logger.configured:
        return init_logger()
    return _logger


def reset_logger() -> None:
    """Forget the module-level singleton (tests and embedding hosts)."""
    global _logger
    with _singleton_lock:
        _logger = None


# =============================================================================
# Module-level facade
# =============================================================================

@dev_only
def log(message: Any, *tags: str) -> None:
    """Log through the module singleton. See TagLogger.log()."""
    get_logger().log(message, *tags)


def log_error(message: Any, *tags: str) -> None:
    """Log an error through the module singleton. Never filtered."""
    get_logger().log_error(message, *tags)


@dev_only
def log_fast(message: Any, context: Any = None) -> None:
    get_logger().log_fast(message, context)


@dev_only
def show(*values: Any) -> None:
    get_logger().show(*values)


@dev_only
def set_tag_active(tag: str) -> None:
    get_logger().set_tag_active(tag)


@dev_only
def set_tag_disabled(tag: str) -> None:
    get_logger().set_tag_disabled(tag)


def is_tag_active(tag: str) -> bool:
    return get_logger().is_tag_active(tag)


def get_tags() -> List[str]:
    return get_logger().get_tags()


def get_history() -> str:
    return get_logger().get_history()


def clear() -> None:
    get_logger().clear()


def apply_settings(settings: Settings) -> None:
    get_logger().apply_settings(settings)


def on_logged():
    """The singleton's on_logged channel."""
    return get_logger().on_logged


def on_error_logged():
    """The singleton's on_error_logged channel."""
    return get_logger().on_error_logged
