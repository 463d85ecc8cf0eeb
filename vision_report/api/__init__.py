"""
Caller-facing building blocks: statuses, media references and test cases.
"""

from vision_report.api.status import Status, derive_status
from vision_report.api.media import MediaProvider, MediaType
from vision_report.api.testcase import IdSequence, Log, Test

__all__ = [
    "Status",
    "derive_status",
    "MediaProvider",
    "MediaType",
    "IdSequence",
    "Log",
    "Test",
]
