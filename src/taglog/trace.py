"""
Function tracing decorator.

Routes trace output through the TagLogger singleton on the TRACE tag
(or any tags given), rather than keeping its own on/off switch:

    @trace
    def load(path): ...

    @trace('IO', 'TRACE')
    def save(path, data): ...

Nothing is formatted unless one of the tags is active when the call
happens. In builds with logging disabled the function is returned
undecorated.
"""

import functools
import inspect
from pathlib import Path

from .build import LOGGING_ENABLED
from .tags import TRACE


def _short_repr(value) -> str:
    if isinstance(value, Path):
        return f"Path('{value}')"
    if isinstance(value, str) and len(value) > 50:
        return f"'{value[:47]}...'"
    if isinstance(value, (list, tuple)) and len(value) > 3:
        return f"[...{len(value)} items...]"
    return repr(value)


def _format_args(params, args, kwargs) -> str:
    args_repr = []
    remaining = args
    # Methods: show the first parameter name instead of the instance repr
    if args and params and params[0] in ('self', 'cls'):
        args_repr.append(params[0])
        remaining = args[1:]
    args_repr.extend(_short_repr(a) for a in remaining)
    args_repr.extend(f"{k}={_short_repr(v)}" for k, v in kwargs.items())
    return ', '.join(args_repr)


def _make_wrapper(func, tags):
    module = inspect.getmodule(func)
    name = f"{module.__name__ if module else 'unknown'}.{func.__name__}"
    params = list(inspect.signature(func).parameters)

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        # Lazy import to avoid circular dependency
        from .logger import get_logger

        logger = get_logger()
        if not any(logger.is_tag_active(t) for t in tags):
            return func(*args, **kwargs)

        logger.log(f">> {name}({_format_args(params, args, kwargs)})", *tags)
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            logger.log_error(f"!! {name} raised: {type(e).__name__}: {e}",
                             *tags)
            raise
        if result is not None:
            logger.log(f"<< {name} returned: {_short_repr(result)}", *tags)
        return result

    return wrapper


def trace(*tags):
    """Decorator tracing calls, returns and exceptions of a function.

    Usable bare (@trace) or with tags (@trace('IO')). Without tags the
    TRACE tag is used.
    """
    if len(tags) == 1 and callable(tags[0]):
        func = tags[0]
        if not LOGGING_ENABLED:
            return func
        return _make_wrapper(func, (TRACE,))

    trace_tags = tags or (TRACE,)

    def decorator(func):
        if not LOGGING_ENABLED:
            return func
        return _make_wrapper(func, trace_tags)

    return decorator
