"""MCP server exposing staged issue progress reports.

Reports travel between tool calls as plain dictionaries: each staging tool
takes the current report and returns the updated one, and nothing is kept
on the server between calls. ``publish_report`` renders the report and
creates or updates its single comment on the target issue.
"""

from __future__ import annotations

from typing import Any, Dict

from mcp.server.fastmcp import FastMCP

from issue_progress import Report, publish, render_report
from issue_progress.config import load_settings
from issue_progress.github import GitHubCommentSink, comment_marker
from issue_progress.publisher import CommentSink
from issue_progress.progress_logging import log_report_staged, setup_logging

mcp = FastMCP("issue-progress")


def _load(report: Dict[str, Any], credential: Any = None) -> Report:
    try:
        return Report.from_dict(report, credential=credential)
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise ValueError(
            f"Malformed report: {e}. Pass the 'report' value returned by new_report or a staging tool."
        ) from e


def _comment_sink() -> CommentSink:
    settings = load_settings()
    return GitHubCommentSink(api_url=settings.api_url, timeout=settings.timeout)


def _staged(report: Report, operation: str, message: str, **fields) -> Dict[str, Any]:
    log_report_staged(operation, report.key, **fields)
    return {
        "report": report.to_dict(),
        "message": f"{message} Call publish_report to apply it.",
    }


@mcp.tool()
def new_report(key: str, repo: str, issue: int) -> Dict[str, Any]:
    """Create an empty progress report for a GitHub issue.
    The key identifies the report on the issue: publishing a report with the same key
    on the same issue overwrites the same comment."""

    report = Report.create(key=key, repo=repo, issue=issue)
    return {
        "report": report.to_dict(),
        "message": f"Report '{key}' created for {report.target}.",
    }


@mcp.tool()
def write_title(report: Dict[str, Any], title: str) -> Dict[str, Any]:
    """Stage a new title. Any previous title is overwritten.
    It should be a single line of unformatted text and is shown as a level-2 heading."""

    updated = _load(report).set_title(title)
    return _staged(updated, "write_title", "Title staged.")


@mcp.tool()
def write_summary(report: Dict[str, Any], summary: str) -> Dict[str, Any]:
    """Stage a new markdown summary. Any previous summary is overwritten.
    It is shown as-is after the title and before the task table."""

    updated = _load(report).set_summary(summary)
    return _staged(updated, "write_summary", "Summary staged.", summary_length=len(summary))


@mcp.tool()
def append_summary(report: Dict[str, Any], summary: str) -> Dict[str, Any]:
    """Stage markdown text appended to the summary, without overwriting it.
    It goes on a new line unless the current summary already ends with one."""

    updated = _load(report).append_summary(summary)
    return _staged(updated, "append_summary", "Summary text appended.", summary_length=len(updated.summary))


@mcp.tool()
def start_task(report: Dict[str, Any], key: str, description: str, status: str) -> Dict[str, Any]:
    """Stage a new task row. The key is not shown in the comment; use it to update the status later.
    Description and status are placed in the first and second columns of the task table."""

    updated = _load(report).start_task(key, description, status)
    return _staged(updated, "start_task", f"Task '{key}' staged.", task_key=key)


@mcp.tool()
def update_task(report: Dict[str, Any], key: str, status: str) -> Dict[str, Any]:
    """Stage a new status for the first task with the given key."""

    updated = _load(report).update_task(key, status)
    return _staged(updated, "update_task", f"Task '{key}' set to '{status}'.", task_key=key, status=status)


@mcp.tool()
def preview_report(report: Dict[str, Any]) -> Dict[str, Any]:
    """Render the comment body without publishing it."""

    loaded = _load(report)
    return {"report": loaded.to_dict(), "body": render_report(loaded)}


@mcp.tool()
def publish_report(report: Dict[str, Any]) -> Dict[str, Any]:
    """Publish all staged changes.
    This creates the report's comment on the target issue, or updates it in place."""

    settings = load_settings()
    loaded = _load(report, credential=settings.require_token())
    body = publish(loaded, _comment_sink())
    return {
        "report": loaded.to_dict(),
        "body": body,
        "message": f"Report '{loaded.key}' published to {loaded.target}.",
    }


@mcp.resource("issue-progress://format")
def resource_format():
    """Describe the layout of published progress comments."""

    lines = [
        "Issue Progress Comment Layout",
        "",
        "## <TITLE, title-case mapped> (only when a title is staged)",
        "<summary markdown>            (only when a summary is staged)",
        "### Tasks + Description/Status table (only when tasks are staged)",
        "<sub>*Last update: YYYY-MM-DD HH:MM:SS TZ*</sub>",
        "",
        f"Each comment ends with a hidden marker such as {comment_marker('<key>')}",
        "so that later publishes with the same key edit the same comment.",
    ]
    return "\n".join(lines)


if __name__ == "__main__":
    settings = load_settings()
    setup_logging(settings.log_level, settings.log_file)
    mcp.run(transport="stdio")
