"""
Store Logger
============

Core Design: Small logging framework used by the virtual store. Every line
goes to each registered appender; the storefront keeps one appender as its
on-screen activity log.

Design Patterns & Strategies Used:
1. Strategy Pattern - Line formatting (Simple, Plain)
2. Observer Pattern - Appenders receive every accepted log record
3. Factory Pattern - One logger per name through LoggerFactory

Features:
- Log levels (DEBUG, INFO, WARN, ERROR)
- Console, in-memory panel and file appenders
- Per-logger level filtering
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Dict, Optional, TextIO
from datetime import datetime
from threading import Lock
import sys


class LogLevel(Enum):
    DEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3


# ==================== STRATEGY PATTERN ====================
# Different formatting strategies

class FormatterStrategy(ABC):
    """Formatter strategy interface"""

    @abstractmethod
    def format(self, level: LogLevel, message: str, timestamp: datetime) -> str:
        pass


class SimpleFormatter(FormatterStrategy):
    """Timestamp, level and message"""

    def format(self, level: LogLevel, message: str, timestamp: datetime) -> str:
        return f"{timestamp.isoformat(timespec='seconds')} [{level.name}] {message}"


class PlainFormatter(FormatterStrategy):
    """Message only, as shown in the activity panel"""

    def format(self, level: LogLevel, message: str, timestamp: datetime) -> str:
        return message


# ==================== OBSERVER PATTERN ====================
# Log appenders/sinks

class LogAppender(ABC):
    """Appender interface (Observer)"""

    def __init__(self, formatter: Optional[FormatterStrategy] = None):
        self.formatter = formatter or SimpleFormatter()

    @abstractmethod
    def append(self, level: LogLevel, message: str, timestamp: datetime):
        pass

    def close(self):
        pass


class ConsoleAppender(LogAppender):
    """Writes formatted lines to a stream (stdout by default)"""

    def __init__(self, formatter: Optional[FormatterStrategy] = None,
                 stream: Optional[TextIO] = None):
        super().__init__(formatter)
        self.stream = stream

    def append(self, level: LogLevel, message: str, timestamp: datetime):
        stream = self.stream or sys.stdout
        stream.write(self.formatter.format(level, message, timestamp) + "\n")


class PanelAppender(LogAppender):
    """Collects lines in memory for an on-screen log panel"""

    def __init__(self, formatter: Optional[FormatterStrategy] = None):
        super().__init__(formatter or PlainFormatter())
        self.lines: List[str] = []

    def append(self, level: LogLevel, message: str, timestamp: datetime):
        self.lines.append(self.formatter.format(level, message, timestamp))

    def text(self) -> str:
        return "\n".join(self.lines)


class FileAppender(LogAppender):
    """File appender"""

    def __init__(self, file_path: str, formatter: Optional[FormatterStrategy] = None):
        super().__init__(formatter)
        self.file_path = file_path
        self.file = open(file_path, 'a', encoding='utf-8')
        self.lock = Lock()

    def append(self, level: LogLevel, message: str, timestamp: datetime):
        formatted = self.formatter.format(level, message, timestamp)
        with self.lock:
            self.file.write(formatted + '\n')
            self.file.flush()

    def close(self):
        with self.lock:
            if not self.file.closed:
                self.file.close()


# ==================== LOGGER ====================

class Logger:
    """Named logger fanning records out to its appenders"""

    def __init__(self, name: str, level: LogLevel = LogLevel.INFO):
        self.name = name
        self.level = level
        self.appenders: List[LogAppender] = []
        self.lock = Lock()

    def add_appender(self, appender: LogAppender):
        """Add log appender"""
        with self.lock:
            if appender not in self.appenders:
                self.appenders.append(appender)

    def remove_appender(self, appender: LogAppender):
        """Remove log appender"""
        with self.lock:
            if appender in self.appenders:
                self.appenders.remove(appender)

    def set_level(self, level: LogLevel):
        self.level = level

    def is_enabled_for(self, level: LogLevel) -> bool:
        return level.value >= self.level.value

    def log(self, level: LogLevel, message: str):
        """Log a message"""
        if not self.is_enabled_for(level):
            return

        timestamp = datetime.now()

        with self.lock:
            for appender in self.appenders:
                appender.append(level, message, timestamp)

    def debug(self, message: str):
        self.log(LogLevel.DEBUG, message)

    def info(self, message: str):
        self.log(LogLevel.INFO, message)

    def warn(self, message: str):
        self.log(LogLevel.WARN, message)

    def error(self, message: str):
        self.log(LogLevel.ERROR, message)

    def close(self):
        """Close all appenders"""
        for appender in self.appenders:
            appender.close()


# ==================== FACTORY PATTERN ====================

class LoggerFactory:
    """Factory for creating loggers"""

    _loggers: Dict[str, Logger] = {}
    _lock = Lock()

    @staticmethod
    def get_logger(name: str, level: LogLevel = LogLevel.INFO) -> Logger:
        """Get or create logger (one instance per name)"""
        with LoggerFactory._lock:
            if name not in LoggerFactory._loggers:
                LoggerFactory._loggers[name] = Logger(name, level)
            return LoggerFactory._loggers[name]

    @staticmethod
    def close_all():
        """Close all loggers"""
        with LoggerFactory._lock:
            for logger in LoggerFactory._loggers.values():
                logger.close()
            LoggerFactory._loggers.clear()
