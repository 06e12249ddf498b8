"""GitHub client package for API interaction."""

from .client import GitHubClient
from .models import GitHubIssue, GitHubLabel, GitHubRelease, GitHubUser

__all__ = [
    "GitHubClient",
    "GitHubUser",
    "GitHubLabel",
    "GitHubIssue",
    "GitHubRelease",
]
