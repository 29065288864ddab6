"""Tests for taglog.bridge - stdlib logging into the tag gate."""

import logging

import pytest

from taglog.bridge import TagLogHandler
from taglog.logger import TagLogger
from taglog.settings import Settings


@pytest.fixture
def std_logger(logger):
    """A stdlib logger named 'INFO.sub' wired to the `logger` fixture."""
    log = logging.getLogger("INFO.sub")
    log.setLevel(logging.DEBUG)
    log.propagate = False
    handler = TagLogHandler(lambda: logger)
    log.addHandler(handler)
    yield log
    log.removeHandler(handler)


class TestTagLogHandler:

    def test_top_level_name_is_tag(self, std_logger, console):
        std_logger.info("hello")
        assert console.lines == ["[INFO] hello"]

    def test_inactive_name_filtered(self, logger, console):
        log = logging.getLogger("chatty.module")
        log.propagate = False
        handler = TagLogHandler(lambda: logger)
        log.addHandler(handler)
        try:
            log.warning("noise")
        finally:
            log.removeHandler(handler)
        assert console.lines == []

    def test_errors_never_filtered(self, logger, console):
        log = logging.getLogger("chatty.module")
        log.propagate = False
        handler = TagLogHandler(lambda: logger)
        log.addHandler(handler)
        try:
            log.error("broken")
        finally:
            log.removeHandler(handler)
        assert console.error_lines == ["[chatty] broken"]

    def test_no_tag_mode(self, logger, console):
        handler = TagLogHandler(lambda: logger, tag_from_name=False)
        record = logging.LogRecord("chatty", logging.INFO, __file__, 1,
                                   "untagged %s", ("ok",), None)
        handler.emit(record)
        assert console.lines == ["untagged ok"]

    def test_record_tag(self):
        handler = TagLogHandler()
        record = logging.LogRecord("a.b.c", logging.INFO, __file__, 1,
                                   "m", None, None)
        assert handler.record_tag(record) == "a"
        record.name = "root"
        assert handler.record_tag(record) is None

    def test_recursion_guard(self, std_logger, logger, console):
        logger.on_logged.subscribe(lambda text: std_logger.info("again"))
        std_logger.info("first")
        assert console.lines == ["[INFO] first"]

    def test_guard_is_per_handler(self, std_logger, logger, other_console):
        other = TagLogger(Settings(default_active_tags=("UI",)),
                          console=other_console)
        relay = logging.getLogger("UI.relay")
        relay.setLevel(logging.DEBUG)
        relay.propagate = False
        handler = TagLogHandler(lambda: other)
        relay.addHandler(handler)
        try:
            logger.on_logged.subscribe(lambda text: relay.info("relayed"))
            std_logger.info("first")
        finally:
            relay.removeHandler(handler)
        assert other_console.lines == ["[UI] relayed"]
