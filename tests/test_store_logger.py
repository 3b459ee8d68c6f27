"""Unit tests for the store logging framework."""

import io
import sys
from datetime import datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from store_logger import (
    ConsoleAppender,
    FileAppender,
    Logger,
    LoggerFactory,
    LogLevel,
    PanelAppender,
    PlainFormatter,
    SimpleFormatter,
)


TIMESTAMP = datetime(2024, 5, 1, 12, 30, 0)


class TestFormatters:
    def test_simple(self):
        line = SimpleFormatter().format(LogLevel.INFO, "hello", TIMESTAMP)
        assert line == "2024-05-01T12:30:00 [INFO] hello"

    def test_plain(self):
        assert PlainFormatter().format(LogLevel.WARN, "hello", TIMESTAMP) == "hello"


class TestAppenders:
    def test_console_writes_to_stream(self):
        stream = io.StringIO()
        ConsoleAppender(PlainFormatter(), stream).append(LogLevel.INFO, "hi", TIMESTAMP)
        assert stream.getvalue() == "hi\n"

    def test_panel_collects_lines(self):
        panel = PanelAppender()
        panel.append(LogLevel.INFO, "one", TIMESTAMP)
        panel.append(LogLevel.INFO, "two", TIMESTAMP)
        assert panel.text() == "one\ntwo"

    def test_file_appender(self, tmp_path):
        path = tmp_path / "out.log"
        appender = FileAppender(str(path), PlainFormatter())
        appender.append(LogLevel.INFO, "first", TIMESTAMP)
        appender.append(LogLevel.INFO, "second", TIMESTAMP)
        appender.close()
        appender.close()

        assert path.read_text(encoding="utf-8") == "first\nsecond\n"

class TestLogger:
    def test_level_filtering(self):
        logger = Logger("test", LogLevel.WARN)
        panel = PanelAppender()
        logger.add_appender(panel)

        logger.debug("d")
        logger.info("i")
        logger.warn("w")
        logger.error("e")

        assert panel.lines == ["w", "e"]

    def test_set_level(self):
        logger = Logger("test", LogLevel.ERROR)
        panel = PanelAppender()
        logger.add_appender(panel)

        logger.set_level(LogLevel.DEBUG)
        logger.debug("now visible")

        assert panel.lines == ["now visible"]

    def test_every_appender_receives_record(self):
        logger = Logger("test")
        first, second = PanelAppender(), PanelAppender()
        logger.add_appender(first)
        logger.add_appender(second)
        logger.add_appender(first)

        logger.info("hello")

        assert first.lines == ["hello"]
        assert second.lines == ["hello"]

    def test_remove_appender(self):
        logger = Logger("test")
        panel = PanelAppender()
        logger.add_appender(panel)
        logger.remove_appender(panel)

        logger.info("hello")

        assert panel.lines == []


class TestLoggerFactory:
    def test_one_logger_per_name(self):
        assert LoggerFactory.get_logger("a") is LoggerFactory.get_logger("a")
        assert LoggerFactory.get_logger("a") is not LoggerFactory.get_logger("b")

    def test_close_all_forgets_loggers(self):
        logger = LoggerFactory.get_logger("a")
        LoggerFactory.close_all()
        assert LoggerFactory.get_logger("a") is not logger
