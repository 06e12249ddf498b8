"""Test configuration and fixtures."""

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

from gh_triage.config import TriageSettings
from gh_triage.github_client.models import GitHubIssue, GitHubLabel, GitHubRelease

NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    """Fixed evaluation time."""
    return NOW


@pytest.fixture
def settings() -> TriageSettings:
    """Default settings for the fastlane repository."""
    return TriageSettings(bot_login="fastlane-bot")


def days_ago(days: float) -> datetime:
    return NOW - timedelta(days=days)


def make_issue(
    number: int = 1,
    state: str = "open",
    labels: list[str] | None = None,
    updated_days_ago: float = 1,
    created_days_ago: float | None = None,
    closed_days_ago: float | None = None,
    **fields: Any,
) -> GitHubIssue:
    created = days_ago(
        created_days_ago if created_days_ago is not None else updated_days_ago
    )
    values: dict[str, Any] = {
        "number": number,
        "title": "Something is broken",
        "body": "",
        "state": state,
        "labels": [GitHubLabel(name=name) for name in labels or []],
        "created_at": created,
        "updated_at": days_ago(updated_days_ago),
        "closed_at": days_ago(closed_days_ago) if closed_days_ago is not None else None,
    }
    values.update(fields)
    return GitHubIssue(**values)


def make_pr(**kwargs: Any) -> GitHubIssue:
    return make_issue(is_pull_request=True, **kwargs)


def make_release(
    tag_name: str | None, body: str | None, **fields: Any
) -> GitHubRelease:
    return GitHubRelease(tag_name=tag_name, body=body, **fields)


@pytest.fixture
def issue_factory() -> Callable[..., GitHubIssue]:
    return make_issue


@pytest.fixture
def pr_factory() -> Callable[..., GitHubIssue]:
    return make_pr


@pytest.fixture
def release_factory() -> Callable[..., GitHubRelease]:
    return make_release
