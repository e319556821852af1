"""Markdown rendering of progress reports.

The body depends only on the report's title, summary and tasks plus the
timestamp of the trailing "last update" line. The footer is wrapped in a
properly closed ``<sub>...</sub>`` pair; earlier progress comments closed it
with a second opening ``<sub>`` tag.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from .models import Report

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S %Z"


def format_timestamp(now: Optional[datetime] = None) -> str:
    """Format ``now`` (default: current local time) for the footer line."""
    if now is None:
        now = datetime.now().astimezone()
    elif now.tzinfo is None:
        now = now.astimezone()
    return now.strftime(TIMESTAMP_FORMAT)


def render_tasks(report: Report) -> str:
    """Render the task table. Cells are inserted without escaping."""
    lines: List[str] = [
        "### Tasks",
        "",
        "<table>",
        "<tr><th>Description</th><th>Status</th></tr>",
    ]
    for task in report.tasks:
        lines.append(f"<tr><td>{task.description}</td><td>{task.status}</td></tr>")
    lines.append("</table>")
    return "\n".join(lines) + "\n"


def render_report(report: Report, now: Optional[datetime] = None) -> str:
    """Render the full comment body for ``report``."""
    contents = ""
    if report.title:
        contents += f"## {report.title}\n\n"
    if report.summary:
        contents += f"{report.summary}\n\n"
    if report.tasks:
        contents += render_tasks(report)
    contents += f"\n<sub>*Last update: {format_timestamp(now)}*</sub>\n"
    return contents
