"""Environment-driven settings for the report server."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .github import DEFAULT_API_URL


@dataclass(slots=True)
class Settings:
    """Runtime settings resolved from environment variables."""

    github_token: Optional[str] = None
    api_url: str = DEFAULT_API_URL
    timeout: float = 30.0
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    def require_token(self) -> str:
        """Return the GitHub token or explain how to provide one."""
        if not self.github_token:
            raise ValueError(
                "No GitHub token configured. Set the GITHUB_TOKEN environment variable before publishing."
            )
        return self.github_token


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build ``Settings`` from ``environ`` (default: ``os.environ``)."""
    env = os.environ if environ is None else environ

    raw_timeout = env.get("ISSUE_PROGRESS_TIMEOUT", "30")
    try:
        timeout = float(raw_timeout)
    except ValueError:
        raise ValueError(
            f"Environment variable ISSUE_PROGRESS_TIMEOUT must be a number of seconds, got '{raw_timeout}'."
        ) from None
    if timeout <= 0:
        raise ValueError(f"Environment variable ISSUE_PROGRESS_TIMEOUT must be positive, got '{raw_timeout}'.")

    log_file = env.get("ISSUE_PROGRESS_LOG_FILE")
    return Settings(
        github_token=env.get("GITHUB_TOKEN") or None,
        api_url=env.get("ISSUE_PROGRESS_API_URL") or DEFAULT_API_URL,
        timeout=timeout,
        log_level=(env.get("ISSUE_PROGRESS_LOG_LEVEL") or "INFO").upper(),
        log_file=Path(log_file).expanduser() if log_file else None,
    )
