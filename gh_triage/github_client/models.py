"""Pydantic models for GitHub data structures.

These models map onto GitHub's REST API v3 response structures, trimmed to the
fields the triage rules read.
API Reference: https://docs.github.com/en/rest/issues
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator


class GitHubUser(BaseModel):
    """GitHub user model representing a user account.

    Maps to GitHub REST API User object.
    API Reference: https://docs.github.com/en/rest/users/users
    """

    login: str = Field(..., description="GitHub username/login (string)")
    id: int = Field(..., description="Unique user identifier (integer)")


class GitHubLabel(BaseModel):
    """GitHub label model representing repository labels.

    Maps to GitHub REST API Label object.
    API Reference: https://docs.github.com/en/rest/issues/labels
    """

    name: str = Field(..., description="Name of the label (string)")
    color: str | None = Field(
        None, description="Hexadecimal color code without leading # (string)"
    )
    description: str | None = Field(
        None, description="Short description of the label (string, max 100 characters)"
    )


class GitHubIssue(BaseModel):
    """Read-only snapshot of an issue or pull request.

    The issues endpoint returns pull requests too; ``is_pull_request`` tells
    them apart. ``merged_at`` is not part of this payload and is fetched
    separately when a rule needs it.
    API Reference: https://docs.github.com/en/rest/issues/issues
    """

    number: int = Field(..., gt=0, description="Issue number within the repository")
    title: str = Field("", description="Short description/title of the issue")
    body: str = Field("", description="Detailed description in markdown")
    state: Literal["open", "closed"] = Field(..., description="'open' or 'closed'")
    is_pull_request: bool = Field(
        False, description="Whether this item is a pull request"
    )
    labels: list[GitHubLabel] = Field(
        default_factory=list, description="Array of labels attached to the issue"
    )
    comment_count: int = Field(0, ge=0, description="Number of comments")
    locked: bool = Field(False, description="Whether the conversation is locked")
    user: GitHubUser | None = Field(None, description="Creator/author of the issue")
    html_url: str | None = Field(None, description="Browser URL of the issue")
    created_at: datetime = Field(..., description="Timestamp of creation (ISO 8601)")
    updated_at: datetime | None = Field(
        None, description="Timestamp of last update (ISO 8601)"
    )
    closed_at: datetime | None = Field(
        None, description="Timestamp of closing, only set for closed items"
    )

    @field_validator("title", "body", mode="before")
    @classmethod
    def normalize_text(cls, value: str | None) -> str:
        return value or ""


class GitHubRelease(BaseModel):
    """GitHub release model.

    Maps to GitHub REST API Release object.
    API Reference: https://docs.github.com/en/rest/releases/releases
    """

    tag_name: str | None = Field(None, description="Tag the release points at")
    body: str | None = Field(None, description="Release notes in markdown")
    draft: bool = Field(False, description="Whether the release is a draft")
    prerelease: bool = Field(False, description="Whether the release is a prerelease")
