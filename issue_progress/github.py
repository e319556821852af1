"""GitHub implementation of the comment sink.

The report key is embedded in each managed comment as a hidden HTML marker,
so later publishes find and edit the same comment instead of adding one.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional

import requests

from .errors import CommentSinkError
from .models import TargetLocation

LOGGER = logging.getLogger("issue_progress.github")

DEFAULT_API_URL = "https://api.github.com"
PAGE_SIZE = 100


def comment_marker(key: str) -> str:
    """Hidden marker identifying the comment managed under ``key``."""
    return f"<!-- issue-progress:key={key} -->"


def with_marker(body: str, key: str) -> str:
    if not body.endswith("\n"):
        body += "\n"
    return body + comment_marker(key) + "\n"


class GitHubCommentSink:
    """Create-or-update issue comments through the GitHub REST API."""

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "Accept": "application/vnd.github+json",
            "User-Agent": "issue-progress-mcp",
        })

    def _request(self, method: str, url: str, credential: Any, **kwargs) -> requests.Response:
        LOGGER.debug("%s %s params=%s", method, url, kwargs.get("params"))
        headers = {}
        if credential:
            headers["Authorization"] = f"Bearer {credential}"
        try:
            response = self.session.request(method, url, headers=headers, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise CommentSinkError(f"GitHub request failed: {e}") from e
        if response.status_code >= 400:
            raise CommentSinkError(
                f"GitHub API error {response.status_code}: {response.text}",
                status_code=response.status_code,
            )
        return response

    def _comments_url(self, target: TargetLocation) -> str:
        return f"{self.api_url}/repos/{target.repo}/issues/{target.issue}/comments"

    def list_comments(self, credential: Any, target: TargetLocation) -> Iterable[Dict[str, Any]]:
        """Yield every comment on the target issue, following pagination."""
        url: Optional[str] = self._comments_url(target)
        params: Optional[dict] = {"per_page": PAGE_SIZE}
        while url:
            response = self._request("GET", url, credential, params=params)
            data = response.json()
            if not isinstance(data, list):
                raise CommentSinkError(
                    f"Expected list response for {url}, received {type(data).__name__}"
                )
            yield from data
            if "next" in response.links:
                url = response.links["next"]["url"]
                params = None
            else:
                url = None

    def find_comment(self, credential: Any, target: TargetLocation, key: str) -> Optional[Dict[str, Any]]:
        """Return the first comment carrying the marker for ``key``."""
        marker = comment_marker(key)
        for comment in self.list_comments(credential, target):
            if marker in (comment.get("body") or ""):
                return comment
        return None

    def create_or_update_comment(
        self,
        credential: Any,
        target: TargetLocation,
        key: str,
        body: str,
    ) -> Dict[str, Any]:
        """Edit the comment managed under ``key`` or create it."""
        payload = {"body": with_marker(body, key)}
        existing = self.find_comment(credential, target, key)
        if existing is None:
            LOGGER.info("Creating progress comment %s on %s", key, target)
            response = self._request("POST", self._comments_url(target), credential, json=payload)
        else:
            LOGGER.info("Updating progress comment %s (id %s) on %s", key, existing["id"], target)
            url = f"{self.api_url}/repos/{target.repo}/issues/comments/{existing['id']}"
            response = self._request("PATCH", url, credential, json=payload)
        return response.json()
