"""Failure taxonomy for workflow runs.

Every failure is terminal for the run that raised it; nothing here is
retried. Each error carries the raw payload or URL that caused it so callers
can log a diagnosable message.
"""

from typing import Optional


class RunError(Exception):
    """Base class for all workflow run failures."""

    def __init__(self, message: str, payload: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.payload = payload


class TransportError(RunError):
    """Network-level failure (DNS, connect, timeout) before a response arrived."""


class TaskCreationError(RunError):
    """The create call was rejected or returned no task ID."""


class StatusQueryError(RunError):
    """A status response could not be used (bad HTTP code, JSON, or envelope code)."""


class TaskFailedError(RunError):
    """RunningHub reported the task as FAILED."""


class TaskTimeoutError(RunError):
    """Deadline elapsed or the run was cancelled before a terminal status."""

    def __init__(self, message: str, cancelled: bool = False, payload: Optional[str] = None):
        super().__init__(message, payload)
        self.cancelled = cancelled


class OutputFetchError(RunError):
    """The outputs call failed or listed no descriptors."""


class ArtifactDownloadError(RunError):
    """A selected artifact could not be downloaded."""

    def __init__(self, message: str, url: str, payload: Optional[str] = None):
        super().__init__(message, payload)
        self.url = url


class NoTextOutputError(RunError):
    """The task finished but produced no text artifact."""
