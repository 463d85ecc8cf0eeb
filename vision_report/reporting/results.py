"""
Per-unit outcomes for the report pipeline.

Each conversion step (one media reference, one log entry) returns a
``Result``: either a value, or a fallback value plus the ``Diagnostic``
explaining what went wrong. The builder collects the diagnostics instead of
letting one bad unit abort the whole report.
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Diagnostic:
    """A non-fatal problem found while building the report."""
    source: str
    message: str
    error: Optional[BaseException] = None

    def __str__(self) -> str:
        if self.error is not None:
            return f"{self.source}: {self.message} ({type(self.error).__name__}: {self.error})"
        return f"{self.source}: {self.message}"


@dataclass(frozen=True)
class Result(Generic[T]):
    """Value of a conversion step, with a diagnostic when it had to degrade."""
    value: Optional[T] = None
    diagnostic: Optional[Diagnostic] = None

    @property
    def ok(self) -> bool:
        return self.diagnostic is None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, source: str, message: str, error: Optional[BaseException] = None,
                fallback: Optional[T] = None) -> "Result[T]":
        return cls(value=fallback, diagnostic=Diagnostic(source, message, error))
