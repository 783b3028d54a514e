"""
Logging System for Symbolic Calculus

One shared logger with verbosity levels. Library code stays quiet by default:
completed operations are reported from DETAILED upwards, failures from
MINIMAL upwards, and nothing at all in SILENT mode.
"""

import logging
import sys
import time
from datetime import datetime
from enum import Enum
from typing import Optional

LOGGER_NAME = 'symbolic_calculus'
LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


class LogLevel(Enum):
    """Enumeration of logging levels"""
    SILENT = 0      # Nothing is written
    MINIMAL = 1     # Failures and warnings only
    MODERATE = 2    # Summaries of top-level requests
    DETAILED = 3    # Every operation with its input and result
    VERBOSE = 4     # Debug details as well


def _default_log_path() -> str:
    return f"{LOGGER_NAME}_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"


class CalculusLogger:
    """
    Verbosity-aware front end to the ``symbolic_calculus`` stdlib logger.

    Creating an instance replaces the handlers of the underlying logger, so the
    most recently configured instance decides where output goes.
    """

    def __init__(self, log_level: LogLevel = LogLevel.MINIMAL,
                 log_to_file: bool = False, log_file_path: Optional[str] = None):
        self.log_level = log_level
        self.log_to_file = log_to_file
        self.log_file_path = log_file_path
        self.start_time = time.time()
        self.operation_count = 0
        self.failure_count = 0

        self.logger = logging.getLogger(LOGGER_NAME)
        self.logger.setLevel(logging.DEBUG)
        self.logger.propagate = False
        self._attach_handlers()

    def _attach_handlers(self):
        for handler in list(self.logger.handlers):
            handler.close()
            self.logger.removeHandler(handler)
        formatter = logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S')

        handlers = []
        if self.log_level != LogLevel.SILENT:
            handlers.append(logging.StreamHandler(sys.stdout))
        if self.log_to_file:
            if self.log_file_path is None:
                self.log_file_path = _default_log_path()
            handlers.append(logging.FileHandler(self.log_file_path))

        for handler in handlers:
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def _should_log(self, required_level: LogLevel) -> bool:
        return self.log_level.value >= required_level.value

    def critical(self, message: str):
        if self.log_level != LogLevel.SILENT:
            self.logger.error(f"CRITICAL: {message}")

    def info(self, message: str, required_level: LogLevel = LogLevel.MODERATE):
        if self._should_log(required_level):
            self.logger.info(message)

    def warning(self, message: str):
        if self._should_log(LogLevel.MINIMAL):
            self.logger.warning(message)

    def debug(self, message: str):
        if self._should_log(LogLevel.VERBOSE):
            self.logger.debug(f"DEBUG: {message}")

    def operation(self, name: str, expression: str, result: str):
        """Record a completed operation; written out from DETAILED upwards"""
        self.operation_count += 1
        if self._should_log(LogLevel.DETAILED):
            elapsed = time.time() - self.start_time
            self.logger.info(f"{name}: {expression} -> {result} ({elapsed:.1f}s)")

    def failure(self, name: str, expression: str, error: Exception):
        """Record a failed operation together with its error kind"""
        self.failure_count += 1
        kind = getattr(error, 'kind', None)
        kind_name = kind.name if kind is not None else type(error).__name__
        self.warning(f"{name} failed for {expression}: {kind_name}: {error}")

    def summary(self):
        """Operation and failure totals since this logger was configured"""
        self.info(f"{self.operation_count} operations, {self.failure_count} failures")


_global_logger: Optional[CalculusLogger] = None


def get_logger() -> CalculusLogger:
    """Shared logger, created at MINIMAL on first use"""
    global _global_logger
    if _global_logger is None:
        _global_logger = CalculusLogger()
    return _global_logger


def set_log_level(level: LogLevel):
    """Change the verbosity of the shared logger, keeping its handlers"""
    global _global_logger
    if _global_logger is None:
        _global_logger = CalculusLogger(log_level=level)
    else:
        _global_logger.log_level = level


def configure_logging(log_level: LogLevel = LogLevel.MINIMAL,
                      log_to_file: bool = False,
                      log_file_path: Optional[str] = None) -> CalculusLogger:
    """Replace the shared logger"""
    global _global_logger
    _global_logger = CalculusLogger(log_level, log_to_file, log_file_path)
    return _global_logger


def log_info(message: str, level: LogLevel = LogLevel.MODERATE):
    get_logger().info(message, level)


def log_warning(message: str):
    get_logger().warning(message)


def log_debug(message: str):
    get_logger().debug(message)


def log_operation(name: str, expression: str, result: str):
    get_logger().operation(name, expression, result)
