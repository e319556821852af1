"""Data models for issue progress reports.

A report is an immutable value: every staging method returns a new
``Report`` and leaves the receiver untouched, so intermediate values can be
kept, discarded or branched freely. Nothing here performs I/O; call
``issue_progress.publisher.publish`` to send the staged state.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple

from .errors import TaskNotFound

REPO_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+/[A-Za-z0-9_.-]+$")


def to_title(text: str) -> str:
    """Map each character to its title-case form when that is a single character."""
    mapped = []
    for char in text:
        titled = char.title()
        mapped.append(titled if len(titled) == 1 else char)
    return "".join(mapped)


@dataclass(frozen=True, slots=True)
class TargetLocation:
    """Issue that receives the progress comment."""

    repo: str
    issue: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {"repo": self.repo, "issue": self.issue}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TargetLocation":
        """Create from dictionary representation."""
        return cls(repo=data["repo"], issue=int(data["issue"]))

    def validate(self) -> List[str]:
        """Validate the location and return any issues."""
        issues = []

        if not self.repo:
            issues.append("Repository is required")
        elif not REPO_PATTERN.match(self.repo):
            issues.append(f"Repository must look like 'owner/name', got: {self.repo}")
        if isinstance(self.issue, bool) or not isinstance(self.issue, int):
            issues.append(f"Issue number must be an integer, got: {self.issue!r}")
        elif self.issue <= 0:
            issues.append(f"Issue number must be positive, got: {self.issue}")

        return issues

    def __str__(self) -> str:
        return f"{self.repo}#{self.issue}"


@dataclass(frozen=True, slots=True)
class Task:
    """A row of the task table. The key is used for lookups and never rendered."""

    key: str
    description: str
    status: str

    def to_dict(self) -> Dict[str, str]:
        """Convert to dictionary representation."""
        return {
            "key": self.key,
            "description": self.description,
            "status": self.status,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        """Create from dictionary representation."""
        return cls(
            key=data["key"],
            description=data.get("description", ""),
            status=data.get("status", ""),
        )


@dataclass(frozen=True, slots=True)
class Report:
    """Staged state of a progress comment on one issue.

    ``key``, ``target`` and ``credential`` identify where and how the report
    is published and are fixed at construction. ``title``, ``summary`` and
    ``tasks`` are the only inputs to rendering.
    """

    key: str
    target: TargetLocation
    credential: Any = field(default=None, repr=False, compare=False)
    title: str = ""
    summary: str = ""
    tasks: Tuple[Task, ...] = ()

    @classmethod
    def create(cls, key: str, repo: str, issue: int, credential: Any = None) -> "Report":
        """Build an empty report after checking the target location."""
        target = TargetLocation(repo=repo, issue=issue)
        issues = target.validate()
        if issues:
            raise ValueError("; ".join(issues))
        return cls(key=key, target=target, credential=credential)

    # ------------------------------------------------------------------
    # Staging
    # ------------------------------------------------------------------

    def set_title(self, title: str) -> "Report":
        """Replace the title, mapped character by character to title case.

        Characters without a single-character title-case form are kept as is,
        so the title never changes length.
        """
        return replace(self, title=to_title(title))

    def set_summary(self, summary: str) -> "Report":
        """Replace the summary. Any previous summary is overwritten."""
        return replace(self, summary=summary)

    def append_summary(self, text: str) -> "Report":
        """Append text to the summary without overwriting it.

        The current summary is stripped and joined to ``text`` with a newline,
        unless it already ended with a newline before stripping, in which case
        nothing is inserted.
        """
        if not self.summary:
            return replace(self, summary=text)
        sep = "" if self.summary.endswith("\n") else "\n"
        return replace(self, summary=self.summary.strip() + sep + text)

    def start_task(self, key: str, description: str, status: str) -> "Report":
        """Append a task. Duplicate keys are accepted; lookups hit the first one."""
        task = Task(key=key, description=description, status=status)
        return replace(self, tasks=self.tasks + (task,))

    def update_task(self, key: str, status: str) -> "Report":
        """Set the status of the first task with ``key``.

        Raises:
            TaskNotFound: no task has that key. The report is unchanged.
        """
        for index, task in enumerate(self.tasks):
            if task.key == key:
                updated = replace(task, status=status)
                tasks = self.tasks[:index] + (updated,) + self.tasks[index + 1:]
                return replace(self, tasks=tasks)
        raise TaskNotFound(key)

    def find_task(self, key: str) -> Optional[Task]:
        """Return the first task with ``key``, if any."""
        for task in self.tasks:
            if task.key == key:
                return task
        return None

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation. The credential is left out."""
        return {
            "key": self.key,
            "repo": self.target.repo,
            "issue": self.target.issue,
            "title": self.title,
            "summary": self.summary,
            "tasks": [task.to_dict() for task in self.tasks],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], credential: Any = None) -> "Report":
        """Create from dictionary representation, attaching ``credential``.

        The title is taken as stored; it was normalized when it was staged.
        """
        return cls(
            key=data["key"],
            target=TargetLocation(repo=data["repo"], issue=int(data["issue"])),
            credential=credential,
            title=data.get("title", ""),
            summary=data.get("summary", ""),
            tasks=tuple(Task.from_dict(item) for item in data.get("tasks", [])),
        )
