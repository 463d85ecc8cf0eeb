"""
Vision Report Package

Record test cases and their steps, then render a single self-contained HTML
report with computed statuses, durations and charts.
"""

__version__ = "1.2.0"
__author__ = "Vision Report Team"

from vision_report.api.status import Status, derive_status
from vision_report.api.media import MediaProvider, MediaType
from vision_report.api.testcase import IdSequence, Log, Test
from vision_report.core.config import ReportConfig
from vision_report.report import ReportSettings, SystemInfo, VisionReport

__all__ = [
    "Status",
    "derive_status",
    "MediaProvider",
    "MediaType",
    "IdSequence",
    "Log",
    "Test",
    "ReportConfig",
    "ReportSettings",
    "SystemInfo",
    "VisionReport",
]
