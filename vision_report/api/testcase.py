"""
Test cases and their logged steps.

A ``Test`` is a mutable accumulator filled in by the caller through fluent
methods. It is not thread-safe: each test should only be touched by one
caller at a time.
"""

import threading
import traceback
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional, Tuple, Union

from vision_report.api.media import MediaProvider
from vision_report.api.status import Status, derive_status

TIMESTAMP_FORMAT = "%I:%M:%S %p"

UNNAMED_LOG = "[Unnamed Log]"
UNNAMED_STEP = "[Unnamed Step]"
UNTITLED_TEST = "Untitled Test"
NULL_EXCEPTION_NAME = "Null exception passed"
NULL_EXCEPTION_DETAILS = "[A null exception was passed to log_exception]"
EXCEPTION_PLACEHOLDER = "Exception Occurred"

Clock = Callable[[], datetime]


class IdSequence:
    """Thread-safe generator of sequential test ids (``TC001``, ``TC002``, ...)."""

    def __init__(self, prefix: str = "TC", width: int = 3, start: int = 0):
        self.prefix = prefix
        self.width = width
        self._value = start
        self._lock = threading.Lock()

    def next_id(self) -> str:
        with self._lock:
            self._value += 1
            value = self._value
        return f"{self.prefix}{value:0{self.width}d}"

    @property
    def current(self) -> int:
        return self._value


# Used only by tests created outside a VisionReport session.
_DEFAULT_SEQUENCE = IdSequence()


def _clean(text: Optional[str]) -> str:
    return "" if text is None else str(text).strip()


@dataclass(frozen=True)
class Log:
    """One recorded step of a test. Never mutated after creation."""
    timestamp: str
    status: Status
    name: str
    details: str = ""
    media: Optional[MediaProvider] = None
    error: Optional[BaseException] = None

    @classmethod
    def create(
        cls,
        status: Optional[Status],
        name: Optional[str],
        details: Optional[str] = None,
        media: Optional[MediaProvider] = None,
        error: Optional[BaseException] = None,
        clock: Clock = datetime.now,
    ) -> "Log":
        """Create a log stamped with the current time of day."""
        return cls(
            timestamp=clock().strftime(TIMESTAMP_FORMAT),
            status=status if status is not None else Status.INFO,
            name=_clean(name) or UNNAMED_LOG,
            details=_clean(details),
            media=media,
            error=error,
        )

    @property
    def has_error(self) -> bool:
        return self.error is not None

    def stack_trace(self) -> str:
        """Full formatted traceback of the captured error, or an empty string."""
        if self.error is None:
            return ""
        return "".join(
            traceback.format_exception(type(self.error), self.error, self.error.__traceback__)
        )

    def __repr__(self) -> str:
        return (
            f"Log(timestamp={self.timestamp!r}, status={self.status}, name={self.name!r}, "
            f"media={'Attached' if self.media else 'None'}, "
            f"error={type(self.error).__name__ if self.error else 'None'})"
        )


class Test:
    """A named, ordered collection of logged steps."""

    # Keep pytest from collecting this class when imported into test modules.
    __test__ = False

    def __init__(
        self,
        name: Optional[str] = None,
        test_id: Optional[str] = None,
        description: Optional[str] = None,
        id_sequence: Optional[IdSequence] = None,
        clock: Clock = datetime.now,
    ):
        sequence = id_sequence if id_sequence is not None else _DEFAULT_SEQUENCE
        self.id = _clean(test_id) or sequence.next_id()
        self.name = _clean(name) or UNTITLED_TEST
        self._description = _clean(description)
        self._authors: List[str] = []
        self._categories: List[str] = []
        self._logs: List[Log] = []
        self._clock = clock
        self.start_time: datetime = clock()
        self.end_time: datetime = self.start_time

    def _touch(self) -> None:
        now = self._clock()
        self.end_time = now if now >= self.start_time else self.start_time

    def description(self, text: Optional[str]) -> "Test":
        self._description = _clean(text)
        return self

    def assign_author(self, *authors: Optional[str]) -> "Test":
        self._authors.extend(a.strip() for a in authors if a is not None and a.strip())
        return self

    def assign_category(self, *categories: Optional[str]) -> "Test":
        self._categories.extend(c.strip() for c in categories if c is not None and c.strip())
        return self

    def log(
        self,
        status: Union[Status, str],
        name: Optional[str] = None,
        details: Optional[str] = None,
        media: Optional[MediaProvider] = None,
    ) -> "Test":
        """
        Record a step.

        Args:
            status: Step status. ``None`` is a programming error and raises,
                since guessing would corrupt the aggregated results. Strings
                are parsed leniently with ``Status.parse``.
            name: Step name, defaults to ``[Unnamed Step]``
            details: Free-text details, defaults to an empty string
            media: Optional attachment

        Returns:
            This test, for chaining
        """
        if status is None:
            raise ValueError("Status cannot be None")
        if not isinstance(status, Status):
            status = Status.parse(status)
        self._touch()
        self._logs.append(Log.create(
            status, _clean(name) or UNNAMED_STEP, details, media, clock=self._clock,
        ))
        return self

    def info(self, name: Optional[str] = None, details: Optional[str] = None,
             media: Optional[MediaProvider] = None) -> "Test":
        return self.log(Status.INFO, name, details, media)

    def pass_(self, name: Optional[str] = None, details: Optional[str] = None,
              media: Optional[MediaProvider] = None) -> "Test":
        return self.log(Status.PASS, name, details, media)

    def fail(self, name: Optional[str] = None, details: Optional[str] = None,
             media: Optional[MediaProvider] = None) -> "Test":
        return self.log(Status.FAIL, name, details, media)

    def skip(self, name: Optional[str] = None, details: Optional[str] = None,
             media: Optional[MediaProvider] = None) -> "Test":
        return self.log(Status.SKIP, name, details, media)

    def log_exception(
        self,
        error: Optional[BaseException] = None,
        media: Optional[MediaProvider] = None,
    ) -> "Test":
        """Record a captured exception. The step is always FAIL."""
        self._touch()
        if error is None:
            self._logs.append(Log.create(
                Status.FAIL, NULL_EXCEPTION_NAME, NULL_EXCEPTION_DETAILS, media, clock=self._clock,
            ))
            return self
        message = _clean(str(error))
        self._logs.append(Log.create(
            Status.FAIL, message or EXCEPTION_PLACEHOLDER, None, media, error=error, clock=self._clock,
        ))
        return self

    def calculate_final_status(self) -> Status:
        return derive_status(log.status for log in self._logs)

    @property
    def logs(self) -> Tuple[Log, ...]:
        return tuple(self._logs)

    @property
    def authors(self) -> Tuple[str, ...]:
        return tuple(self._authors)

    @property
    def categories(self) -> Tuple[str, ...]:
        return tuple(self._categories)

    @property
    def description_text(self) -> str:
        return self._description

    def __repr__(self) -> str:
        return (
            f"Test(id={self.id!r}, name={self.name!r}, logs={len(self._logs)}, "
            f"authors={list(self._authors)}, categories={list(self._categories)})"
        )
