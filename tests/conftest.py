"""Shared fixtures for issue progress tests."""

from datetime import datetime, timezone

import pytest

from issue_progress.models import Report, TargetLocation


class RecordingCommentSink:
    """In-memory comment sink keeping one comment per (target, key)."""

    def __init__(self):
        self.calls = []
        self.comments = {}
        self.next_id = 1
        self.error = None

    def create_or_update_comment(self, credential, target, key, body):
        self.calls.append({"credential": credential, "target": target, "key": key, "body": body})
        if self.error is not None:
            raise self.error
        slot = (target, key)
        if slot in self.comments:
            self.comments[slot]["body"] = body
        else:
            self.comments[slot] = {"id": self.next_id, "body": body}
            self.next_id += 1
        return self.comments[slot]


@pytest.fixture
def sink():
    return RecordingCommentSink()


@pytest.fixture
def fixed_now():
    return datetime(2024, 5, 17, 9, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def report():
    return Report(
        key="deploy",
        target=TargetLocation(repo="acme/widgets", issue=42),
        credential="ghp_secret",
    )
