"""
Report building and rendering for Vision Report.

This module turns a populated session into an HTML file:
- Immutable presentation models
- Media resolution into embeddable data URIs
- Status aggregation and chart data
- jinja2 rendering and output file handling
"""

from vision_report.reporting.models import (
    ChartData,
    ChartDataItem,
    LogModel,
    MediaModel,
    ReportModel,
    SystemInfoModel,
    TestModel,
)
from vision_report.reporting.results import Diagnostic, Result
from vision_report.reporting.media import MediaResolver
from vision_report.reporting.aggregator import ReportAggregator
from vision_report.reporting.builder import ReportModelBuilder
from vision_report.reporting.renderer import TemplateEngine
from vision_report.reporting.generator import ReportGenerator, resolve_output_target, write_report

__all__ = [
    "ChartData",
    "ChartDataItem",
    "LogModel",
    "MediaModel",
    "ReportModel",
    "SystemInfoModel",
    "TestModel",
    "Diagnostic",
    "Result",
    "MediaResolver",
    "ReportAggregator",
    "ReportModelBuilder",
    "TemplateEngine",
    "ReportGenerator",
    "resolve_output_target",
    "write_report",
]
