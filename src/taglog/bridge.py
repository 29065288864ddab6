"""
Bridge from the standard logging module into taglog.

Attach TagLogHandler to a stdlib logger and its records go through the
tag gate like any other message. The record's top-level logger name is
used as the tag, so "requests.adapters" is shown only while "requests"
is active:

    import logging
    from taglog.bridge import TagLogHandler

    logging.getLogger().addHandler(TagLogHandler())
    taglog.set_tag_active("requests")

Records at ERROR and above go to log_error() and are never filtered.
"""

import logging
import threading
from typing import Callable, Optional

from .logger import TagLogger, get_logger


class TagLogHandler(logging.Handler):
    """logging.Handler forwarding formatted records to a TagLogger.

    Args:
        logger_getter: Returns the TagLogger to forward to; called on each
            record so the handler can be installed before initialization
        level: Minimum record level handled
        tag_from_name: Tag records with their top-level logger name; when
            False records carry no tag and are never filtered
    """

    def __init__(self,
                 logger_getter: Callable[[], TagLogger] = get_logger,
                 level: int = logging.NOTSET,
                 tag_from_name: bool = True):
        super().__init__(level)
        self._logger_getter = logger_getter
        self.tag_from_name = tag_from_name
        # Records this handler raises while forwarding one are dropped
        self._local = threading.local()

    def record_tag(self, record: logging.LogRecord) -> Optional[str]:
        if not self.tag_from_name or not record.name or record.name == 'root':
            return None
        return record.name.split('.', 1)[0]

    def emit(self, record: logging.LogRecord) -> None:
        if getattr(self._local, 'active', False):
            return
        self._local.active = True
        try:
            text = self.format(record)
            tag = self.record_tag(record)
            tags = (tag,) if tag else ()
            target = self._logger_getter()
            if record.levelno >= logging.ERROR:
                target.log_error(text, *tags)
            else:
                target.log(text, *tags)
        except Exception:
            self.handleError(record)
        finally:
            self._local.active = False
