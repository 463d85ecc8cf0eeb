"""
Conversion of a populated report session into an immutable ``ReportModel``.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Callable, List, Optional

from vision_report.api.status import Status, derive_status
from vision_report.api.testcase import Log, Test
from vision_report.core.config import DEFAULT_TITLE
from vision_report.core.logging import get_logger
from vision_report.reporting.aggregator import ReportAggregator
from vision_report.reporting.media import MediaResolver
from vision_report.reporting.models import (
    LogModel,
    ReportModel,
    SystemInfoModel,
    TestModel,
)
from vision_report.reporting.results import Diagnostic, Result

if TYPE_CHECKING:
    from vision_report.report import VisionReport

TIME_FORMAT = "%I:%M:%S %p"
REPORT_DATE_FORMAT = "%d %b, %Y"
REPORT_TIME_FORMAT = "%I:%M:%S %p %Z"
FALLBACK_TIMESTAMP = "00:00:00"

NO_DESCRIPTION = "[No description provided]"
NO_LOG_NAME = "[No log name provided]"
NO_DETAILS = "[No details provided]"

logger = get_logger(__name__)


def escape_html(text: Optional[str]) -> str:
    """Escape HTML special characters."""
    if text is None:
        return ""
    return (text.replace("&", "&amp;")
               .replace("<", "&lt;")
               .replace(">", "&gt;")
               .replace('"', "&quot;")
               .replace("'", "&#x27;"))


def format_duration(start: datetime, end: datetime) -> str:
    """Elapsed time as zero-padded ``HH:MM:SS``; hours are not wrapped at 24."""
    total = max(int((end - start).total_seconds()), 0)
    hours, remainder = divmod(total, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def _fallback_log(name: str, details: str) -> LogModel:
    return LogModel(Status.FAIL, name, details, FALLBACK_TIMESTAMP)


class ReportModelBuilder:
    """
    Build the render-ready model from a ``VisionReport`` session.

    Statuses are computed bottom-up: every log entry is converted first, then
    each test's status is derived from its converted logs, then report counts
    and chart buckets are aggregated. A log entry that cannot be converted is
    replaced by a FAIL fallback entry and recorded as a diagnostic; it never
    aborts the rest of the report.
    """

    def __init__(
        self,
        media_resolver: Optional[MediaResolver] = None,
        aggregator: Optional[ReportAggregator] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.media_resolver = media_resolver if media_resolver is not None else MediaResolver()
        self.aggregator = aggregator if aggregator is not None else ReportAggregator()
        self.clock = clock
        self.diagnostics: List[Diagnostic] = []

    def build(self, report: "VisionReport") -> ReportModel:
        if report is None:
            raise ValueError("VisionReport cannot be None")

        self.diagnostics = []
        now = self.clock().astimezone()

        title = report.title.strip() if report.title and report.title.strip() else DEFAULT_TITLE
        system_info = tuple(SystemInfoModel(info.key, info.value) for info in report.system_info)
        tests = tuple(self.build_test(test) for test in report.tests if test is not None)

        counts = self.aggregator.count_statuses(tests)
        return ReportModel(
            title=title,
            generated_date=now.strftime(REPORT_DATE_FORMAT),
            generated_time=now.strftime(REPORT_TIME_FORMAT).strip(),
            system_info=system_info,
            tests=tests,
            pass_count=counts[Status.PASS],
            fail_count=counts[Status.FAIL],
            skip_count=counts[Status.SKIP],
            total_tests=len(tests),
            chart_data=self.aggregator.chart_data(counts, tests),
            diagnostics=tuple(str(d) for d in self.diagnostics),
        )

    def build_test(self, test: Test) -> TestModel:
        description = test.description_text.strip() if test.description_text else ""
        logs = tuple(self._collect(self.build_log(log, test.id)) for log in test.logs)
        return TestModel(
            id=test.id,
            name=test.name,
            description=description or NO_DESCRIPTION,
            start_time=test.start_time.strftime(TIME_FORMAT),
            end_time=test.end_time.strftime(TIME_FORMAT),
            duration=format_duration(test.start_time, test.end_time),
            authors=tuple(test.authors),
            categories=tuple(test.categories),
            logs=logs,
            status=derive_status(log.status for log in logs),
        )

    def build_log(self, log: Optional[Log], test_id: str = "") -> Result[LogModel]:
        """Convert one log entry, isolating any failure to this entry."""
        source = f"test {test_id}" if test_id else "log"
        if log is None:
            return Result.failure(
                source, "Log entry was None",
                fallback=_fallback_log("[Invalid Log Entry]", "[Log object was null]"),
            )
        try:
            name = escape_html(log.name.strip()) if log.name and log.name.strip() else NO_LOG_NAME
            details = escape_html(log.details.strip()) if log.details and log.details.strip() else NO_DETAILS
            is_stack_trace = False
            if log.has_error:
                details = f"<pre class='stack-trace'>{escape_html(log.stack_trace())}</pre>"
                is_stack_trace = True

            media = None
            if log.media is not None:
                media_result = self.media_resolver.resolve_with_diagnostic(log.media)
                if media_result.ok:
                    media = media_result.value
                else:
                    logger.warning(str(media_result.diagnostic))
                    self.diagnostics.append(media_result.diagnostic)

            return Result.success(LogModel(
                status=Status.parse(log.status),
                name=name,
                details=details,
                timestamp=log.timestamp or FALLBACK_TIMESTAMP,
                media=media,
                is_stack_trace=is_stack_trace,
            ))
        except Exception as e:
            logger.error(f"Failed to build log entry for {source}: {e}", exc_info=True)
            return Result.failure(
                source, "Unexpected error while building log entry", e,
                fallback=_fallback_log(
                    "[Log Processing Error]",
                    "An unexpected error occurred while building this log entry. See console for details.",
                ),
            )

    def _collect(self, result: Result[LogModel]) -> LogModel:
        if not result.ok:
            self.diagnostics.append(result.diagnostic)
        return result.value
