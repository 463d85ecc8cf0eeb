"""
Data models for the render-ready report.

Everything here is immutable once built: the builder produces a fresh tree
for every report run and the renderer only reads it.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from vision_report.api.status import Status

STANDARD_INFO_LABELS = {
    "standard_project": "Project",
    "standard_application": "Application",
    "standard_environment": "Environment",
    "standard_tester": "Tester",
    "standard_browser": "Browser",
}


@dataclass(frozen=True)
class MediaModel:
    """Embeddable attachment: a data URI payload plus a display title."""
    payload: str = ""
    title: str = ""

    def has_media(self) -> bool:
        return bool(self.payload)

    def to_dict(self) -> Dict[str, Any]:
        return {"payload": self.payload, "title": self.title}

    def __repr__(self) -> str:
        return f"MediaModel(title={self.title!r}, payload_length={len(self.payload)})"


@dataclass(frozen=True)
class LogModel:
    """Presentation view of one step. ``name`` and ``details`` are already HTML-escaped."""
    status: Status
    name: str
    details: str
    timestamp: str
    media: Optional[MediaModel] = None
    is_stack_trace: bool = False

    def has_media(self) -> bool:
        return self.media is not None and self.media.has_media()

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "status": self.status.value,
            "status_class": self.status.css_class,
            "name": self.name,
            "details": self.details,
            "timestamp": self.timestamp,
            "is_stack_trace": self.is_stack_trace,
            "has_media": self.has_media(),
        }
        if self.has_media():
            result["media"] = self.media.to_dict()
        return result


@dataclass(frozen=True)
class TestModel:
    """Presentation view of a test with its computed final status."""

    __test__ = False

    id: str
    name: str
    description: str
    start_time: str
    end_time: str
    duration: str
    authors: Tuple[str, ...] = ()
    categories: Tuple[str, ...] = ()
    logs: Tuple[LogModel, ...] = ()
    status: Status = Status.SKIP

    def __post_init__(self):
        if not self.id or not self.id.strip():
            raise ValueError("TestModel id cannot be empty")
        if not self.name or not self.name.strip():
            raise ValueError("TestModel name cannot be empty")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "duration": self.duration,
            "authors": list(self.authors),
            "categories": list(self.categories),
            "logs": [log.to_dict() for log in self.logs],
            "status": self.status.value,
            "status_class": self.status.css_class,
        }


@dataclass(frozen=True)
class SystemInfoModel:
    """One key/value row of the report header."""
    key: str
    value: str = ""

    def __post_init__(self):
        if not self.key or not self.key.strip():
            raise ValueError("SystemInfo key cannot be empty")

    @property
    def is_standard(self) -> bool:
        return self.key in STANDARD_INFO_LABELS

    @property
    def label(self) -> str:
        return STANDARD_INFO_LABELS.get(self.key, self.key)

    def to_dict(self) -> Dict[str, Any]:
        return {"key": self.key, "label": self.label, "value": self.value, "is_standard": self.is_standard}


@dataclass(frozen=True)
class ChartDataItem:
    """One chart bucket."""
    label: str
    value: int
    color: str = ""

    def __post_init__(self):
        if not self.label or not self.label.strip():
            raise ValueError("ChartDataItem label cannot be empty")

    def to_dict(self) -> Dict[str, Any]:
        return {"label": self.label, "value": self.value, "color": self.color}


@dataclass(frozen=True)
class ChartData:
    """Status distribution and tag distribution buckets."""
    status_summary: Tuple[ChartDataItem, ...] = ()
    tag_distribution: Tuple[ChartDataItem, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status_summary": [item.to_dict() for item in self.status_summary],
            "tag_distribution": [item.to_dict() for item in self.tag_distribution],
        }


@dataclass(frozen=True)
class ReportModel:
    """Complete, render-ready report."""
    title: str
    generated_date: str
    generated_time: str
    system_info: Tuple[SystemInfoModel, ...] = ()
    tests: Tuple[TestModel, ...] = ()
    pass_count: int = 0
    fail_count: int = 0
    skip_count: int = 0
    total_tests: int = 0
    chart_data: ChartData = field(default_factory=ChartData)
    diagnostics: Tuple[str, ...] = ()

    @property
    def pass_rate(self) -> float:
        """Percentage of passed tests, 0.0 for an empty report."""
        if self.total_tests == 0:
            return 0.0
        return self.pass_count / self.total_tests * 100

    def get_status_counts(self) -> Dict[str, int]:
        """Get count of tests by status."""
        return {
            "passed": self.pass_count,
            "failed": self.fail_count,
            "skipped": self.skip_count,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Keyed data bag handed to the template."""
        return {
            "title": self.title,
            "generated_date": self.generated_date,
            "generated_time": self.generated_time,
            "system_info": [info.to_dict() for info in self.system_info],
            "tests": [test.to_dict() for test in self.tests],
            "pass_count": self.pass_count,
            "fail_count": self.fail_count,
            "skip_count": self.skip_count,
            "total_tests": self.total_tests,
            "pass_rate": self.pass_rate,
            "chart_data": self.chart_data.to_dict(),
            "diagnostics": list(self.diagnostics),
        }
