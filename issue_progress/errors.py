"""Error types raised by the progress report core and its comment sinks."""

from __future__ import annotations

from typing import Optional


class ProgressError(Exception):
    """Base class for progress report failures."""


class TaskNotFound(ProgressError, LookupError):
    """No staged task matches the requested key."""

    def __init__(self, key: str):
        super().__init__(f"no task at key {key}")
        self.key = key


class PublishFailed(ProgressError):
    """The comment sink reported a failure while publishing.

    The message is the sink's own message, unchanged. The original error is
    available as ``cause`` and as ``__cause__``.
    """

    def __init__(self, cause: BaseException):
        super().__init__(str(cause))
        self.cause = cause


class CommentSinkError(ProgressError):
    """HTTP-level failure talking to the issue tracker."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
