"""
Core modules for Vision Report: configuration, errors and logging.
"""

from vision_report.core.config import ReportConfig
from vision_report.core.errors import (
    VisionReportError,
    ConfigurationError,
    MediaResolutionError,
    RenderError,
    ReportWriteError,
)
from vision_report.core.logging import setup_logger, get_logger

__all__ = [
    "ReportConfig",
    "VisionReportError",
    "ConfigurationError",
    "MediaResolutionError",
    "RenderError",
    "ReportWriteError",
    "setup_logger",
    "get_logger",
]
