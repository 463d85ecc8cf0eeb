"""
Logging configuration for Vision Report.

All diagnostics go to stderr with a ``[VisionReport]`` prefix so callers can
tell library output apart from their own.
"""

import logging
import sys
from typing import Optional, TextIO
from pathlib import Path

ROOT_LOGGER_NAME = "vision_report"
LOG_FORMAT = "%(asctime)s - [VisionReport] %(levelname)s - %(message)s"


class ColoredFormatter(logging.Formatter):
    """Colored formatter for console output."""

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[94m',      # Blue
        'WARNING': '\033[93m',   # Yellow
        'ERROR': '\033[91m',     # Red
        'CRITICAL': '\033[95m',  # Magenta
        'RESET': '\033[0m',      # Reset
        'BOLD': '\033[1m',       # Bold
    }

    def __init__(self, fmt: Optional[str] = None, use_color: bool = True):
        super().__init__(fmt)
        self.use_color = use_color

    def format(self, record):
        """Format log record with colors, without mutating the shared record."""
        if not self.use_color or record.levelname not in self.COLORS:
            return super().format(record)

        record = logging.makeLogRecord(record.__dict__)
        levelname = record.levelname
        record.levelname = f"{self.COLORS[levelname]}{levelname}{self.COLORS['RESET']}"
        if levelname in ['ERROR', 'CRITICAL']:
            record.msg = f"{self.COLORS['BOLD']}{record.msg}{self.COLORS['RESET']}"
        return super().format(record)


class _StderrHandler(logging.StreamHandler):
    """Stream handler that always writes to the current ``sys.stderr``."""

    def __init__(self):
        super().__init__(sys.stderr)

    @property
    def stream(self):
        return sys.stderr

    @stream.setter
    def stream(self, value):
        pass


def _verbosity_to_level(verbosity: int) -> int:
    if verbosity <= 0:
        return logging.WARNING  # Only errors/warnings
    if verbosity <= 2:
        return logging.INFO  # Outcome lines and progress
    return logging.DEBUG  # All messages


def setup_logger(
    name: str = ROOT_LOGGER_NAME,
    level: Optional[int] = None,
    log_file: Optional[Path] = None,
    verbosity: int = 1,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Set up logger for Vision Report.

    Args:
        name: Logger name
        level: Logging level (overrides verbosity if provided)
        log_file: Optional log file path
        verbosity: Verbosity level (0=warnings only, 1=outcome, 2=progress, 3=debug)
        stream: Console stream, stderr by default

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)

    # Clear existing handlers
    logger.handlers.clear()

    if level is None:
        level = _verbosity_to_level(verbosity)

    logger.setLevel(level)
    logger.propagate = False

    if stream is not None:
        console_handler = logging.StreamHandler(stream)
    else:
        console_handler = _StderrHandler()
    console_handler.setLevel(logger.level)
    console_stream = console_handler.stream
    use_color = hasattr(console_stream, "isatty") and console_stream.isatty()
    console_handler.setFormatter(ColoredFormatter(LOG_FORMAT, use_color=use_color))

    logger.addHandler(console_handler)

    # File handler if specified
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """
    Get logger instance under the ``vision_report`` namespace.

    Installs the default stderr handler on the package logger the first time
    it is needed, so diagnostics are printed even when the caller never
    configured logging.
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        setup_logger()
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
