"""
Broadcast notification channels.

Each channel is an ordered list of listeners keyed by a subscription
handle. fire() calls every listener synchronously, in subscription order,
with the final formatted message text. A listener that raises does not
stop the others: the failure goes to the channel's error reporter and
dispatch goes on. A TagLogger reports on its own console error line; a
bare channel prints to stderr.

Usage::

    hub = EventHub()
    handle = hub.on_logged.subscribe(lambda text: seen.append(text))
    ...
    hub.on_logged.unsubscribe(handle)
"""

import itertools
import sys
from typing import Callable, Dict, Optional, Union


Listener = Callable[[str], None]
ErrorReporter = Callable[["EventChannel", Listener, Exception], None]


def print_listener_error(channel, listener, error) -> None:
    print(f"taglog: {channel.name} listener {listener!r} raised "
          f"{type(error).__name__}: {error}", file=sys.stderr)


class EventChannel:
    """Ordered set of listeners receiving message text."""

    def __init__(self, name: str, on_error: Optional[ErrorReporter] = None):
        self.name = name
        self.on_error = on_error or print_listener_error
        self._listeners: Dict[int, Listener] = {}
        self._handles = itertools.count(1)

    def subscribe(self, callback: Listener) -> int:
        """Register a listener and return its subscription handle.

        The same callable may be subscribed more than once; each
        subscription gets its own handle and is called once per fire().
        """
        if not callable(callback):
            raise TypeError(f"{self.name} listener must be callable, "
                            f"got {type(callback).__name__}")
        handle = next(self._handles)
        self._listeners[handle] = callback
        return handle

    def unsubscribe(self, handle_or_callback: Union[int, Listener]) -> bool:
        """Remove a subscription by handle, or the first one using a callable.

        Returns:
            True if a subscription was removed
        """
        if isinstance(handle_or_callback, int):
            return self._listeners.pop(handle_or_callback, None) is not None
        for handle, listener in self._listeners.items():
            if listener == handle_or_callback:
                del self._listeners[handle]
                return True
        return False

    def fire(self, text: str) -> None:
        """Invoke every listener with `text`, isolating listener failures."""
        # Copy: listeners may subscribe/unsubscribe while we iterate
        for listener in list(self._listeners.values()):
            try:
                listener(text)
            except Exception as e:
                self.on_error(self, listener, e)

    def clear(self) -> None:
        self._listeners.clear()

    def __len__(self) -> int:
        return len(self._listeners)

    def __repr__(self) -> str:
        return f"EventChannel({self.name!r}, listeners={len(self)})"


class EventHub:
    """The two logger notification channels."""

    def __init__(self, on_error: Optional[ErrorReporter] = None):
        self.on_logged = EventChannel("on_logged", on_error)
        self.on_error_logged = EventChannel("on_error_logged", on_error)
