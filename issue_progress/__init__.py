"""Issue progress reports - staged reports published as one issue comment."""

from .errors import CommentSinkError, ProgressError, PublishFailed, TaskNotFound
from .models import Report, TargetLocation, Task
from .publisher import CommentSink, publish
from .rendering import render_report

__all__ = [
    "CommentSink",
    "CommentSinkError",
    "ProgressError",
    "PublishFailed",
    "Report",
    "TargetLocation",
    "Task",
    "TaskNotFound",
    "publish",
    "render_report",
]
