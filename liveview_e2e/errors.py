"""Failures raised by the LiveView synchronization helpers."""

from __future__ import annotations

from typing import Any


class SyncError(Exception):
    """Base class for every synchronization failure."""


class Timeout(SyncError, TimeoutError):
    """A bounded wait elapsed before its condition held."""

    def __init__(
        self,
        description: str,
        deadline: float,
        last_observed: Any = None,
        last_error: BaseException | None = None,
    ):
        self.description = description
        self.deadline = deadline
        self.last_observed = last_observed
        self.last_error = last_error
        message = f"Timed out after {deadline:.3f}s waiting for {description}"
        if last_observed is not None:
            message += f" (last observed: {last_observed!r})"
        if last_error is not None:
            message += f" (last error: {last_error})"
        super().__init__(message)


class MissingCapability(Timeout):
    """The page never exposed the LiveView socket handle."""


class AssertionTimeout(SyncError, AssertionError):
    """An observational check never reached the expected state."""

    def __init__(self, subject: str, expected: Any, observed: Any, deadline: float):
        self.subject = subject
        self.expected = expected
        self.observed = observed
        self.deadline = deadline
        super().__init__(
            f"{subject}: expected {expected!r}, last observed {observed!r} "
            f"after {deadline:.3f}s"
        )
