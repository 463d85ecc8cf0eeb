"""
Report-level counts and chart buckets.
"""

from collections import Counter
from typing import Dict, Iterable, Sequence

from vision_report.api.status import Status
from vision_report.reporting.models import ChartData, ChartDataItem, TestModel

STATUS_BUCKETS = (
    (Status.PASS, "Pass", "var(--success-color)"),
    (Status.FAIL, "Fail", "var(--danger-color)"),
    (Status.SKIP, "Skip", "var(--warning-color)"),
)


class ReportAggregator:
    """Compute status counts and chart data over built tests."""

    def count_statuses(self, tests: Iterable[TestModel]) -> Dict[Status, int]:
        counts = {status: 0 for status in Status}
        for test in tests:
            counts[test.status] += 1
        return counts

    def tag_counts(self, tests: Iterable[TestModel]) -> Dict[str, int]:
        """Occurrences of every category across all tests, in first-seen order."""
        # Counter keeps insertion order, so buckets come out in first-seen order.
        return dict(Counter(tag for test in tests for tag in test.categories))

    def chart_data(self, counts: Dict[Status, int], tests: Sequence[TestModel]) -> ChartData:
        status_summary = tuple(
            ChartDataItem(label, counts.get(status, 0), color)
            for status, label, color in STATUS_BUCKETS
            if counts.get(status, 0) > 0
        )
        tag_distribution = tuple(
            ChartDataItem(tag, count) for tag, count in self.tag_counts(tests).items()
        )
        return ChartData(status_summary, tag_distribution)
