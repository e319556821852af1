"""Publishing of rendered reports through a comment sink."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Protocol

from .errors import PublishFailed
from .models import Report, TargetLocation
from .progress_logging import log_error_with_context, log_operation, log_performance
from .rendering import render_report


class CommentSink(Protocol):
    """Creates or updates the single comment identified by ``(target, key)``.

    Calling again with the same target and key must edit the same comment in
    place; a key never seen on the target creates a new comment.
    """

    def create_or_update_comment(
        self,
        credential: Any,
        target: TargetLocation,
        key: str,
        body: str,
    ) -> Any:
        ...


@log_performance("publish")
def publish(report: Report, sink: CommentSink, now: Optional[datetime] = None) -> str:
    """Render ``report`` and hand it to ``sink``. Returns the rendered body.

    Every call sends, even when nothing was staged since the last publish.
    There is no retry and the report is never modified.

    Raises:
        PublishFailed: the sink raised; its error is kept as the cause.
    """
    body = render_report(report, now=now)
    context = {
        "repo": report.target.repo,
        "issue": report.target.issue,
        "key": report.key,
    }
    with log_operation("publish", body_length=len(body), **context):
        try:
            sink.create_or_update_comment(report.credential, report.target, report.key, body)
        except Exception as e:
            log_error_with_context(e, {"operation": "publish", **context})
            raise PublishFailed(e) from e
    return body
