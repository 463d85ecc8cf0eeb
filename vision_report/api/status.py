"""
Step and test outcome statuses.
"""

from enum import Enum
from typing import Iterable, Optional, Union


class Status(Enum):
    """Outcome of a logged step or of a whole test."""
    PASS = "PASS"
    FAIL = "FAIL"
    SKIP = "SKIP"
    INFO = "INFO"

    def __str__(self) -> str:
        return self.value

    @property
    def priority(self) -> int:
        """Aggregation precedence, higher wins: FAIL > SKIP > PASS > INFO."""
        return _PRIORITY[self]

    @property
    def css_class(self) -> str:
        return self.value.lower()

    @classmethod
    def parse(cls, text: Optional[Union[str, "Status"]]) -> "Status":
        """
        Parse a status from free text.

        Matching is case-insensitive. Blank or unknown text falls back to INFO
        so a bad status string never aborts report generation.
        """
        if isinstance(text, Status):
            return text
        if text is None or not str(text).strip():
            return cls.INFO
        try:
            return cls[str(text).strip().upper()]
        except KeyError:
            return cls.INFO


_PRIORITY = {
    Status.INFO: 0,
    Status.PASS: 1,
    Status.SKIP: 2,
    Status.FAIL: 3,
}


def derive_status(statuses: Iterable[Status]) -> Status:
    """
    Aggregate step statuses into a single test status.

    An empty sequence is SKIP. Otherwise FAIL wins over SKIP, and anything
    else (including a sequence made only of INFO steps) is PASS.
    """
    seen = set(statuses)
    if not seen:
        return Status.SKIP
    if Status.FAIL in seen:
        return Status.FAIL
    if Status.SKIP in seen:
        return Status.SKIP
    return Status.PASS
