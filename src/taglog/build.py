"""
Build switch for development-only logging calls.

The switch is read once, at import time, from the TAGLOG_ENABLED
environment variable. Operations decorated with @dev_only are replaced
by a no-op function when the switch is off, so a disabled build carries
no runtime check at the call site:

    TAGLOG_ENABLED=0 python app.py     # log()/show()/log_fast() vanish

Error logging and tag queries are never wrapped and stay live in every
build.
"""

import functools
import os


_FALSE_VALUES = {'0', 'false', 'no', 'off'}


def _read_switch(environ=None) -> bool:
    """Return the build switch value from the environment (default: on)."""
    env = os.environ if environ is None else environ
    value = env.get('TAGLOG_ENABLED')
    if value is None:
        return True
    return value.strip().lower() not in _FALSE_VALUES


LOGGING_ENABLED = _read_switch()


def make_dev_only(enabled: bool):
    """Build a decorator that keeps a function only when `enabled` is true.

    When disabled, the decorated function is swapped for a no-op
    at definition time; its metadata is kept so introspection and
    documentation still show the original name.
    """
    def decorator(func):
        if enabled:
            return func

        @functools.wraps(func)
        def disabled(*args, **kwargs):
            return None

        disabled.__taglog_disabled__ = True
        return disabled

    return decorator


dev_only = make_dev_only(LOGGING_ENABLED)
