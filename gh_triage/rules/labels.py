"""Marker labels and the triage state they encode.

Labels are the only persisted state: every evaluation derives the current
state from the label set it is handed and never caches it.
"""

from enum import Enum

from ..github_client.models import GitHubIssue

AWAITING_REPLY = "status: waiting-for-reply"
AUTO_CLOSED = "status: auto-closed"
NEEDS_ATTENTION = "status: needs-attention"
REGRESSION = "status: regression"
RELEASED = "status: released"
INCLUDED_IN_NEXT_RELEASE = "status: included-in-next-release"


class IssueState(str, Enum):
    """Inactivity state of an issue."""

    ACTIVE = "active"
    AWAITING_REPLY = "awaiting_reply"
    AUTO_CLOSED = "auto_closed"
    LOCKED = "locked"


def has_label(issue: GitHubIssue, name: str) -> bool:
    return any(label.name == name for label in issue.labels)


def issue_state(issue: GitHubIssue) -> IssueState:
    """Derive the inactivity state from the lock flag, state and labels."""
    if issue.locked:
        return IssueState.LOCKED
    if issue.state == "closed" and has_label(issue, AUTO_CLOSED):
        return IssueState.AUTO_CLOSED
    if has_label(issue, AWAITING_REPLY):
        return IssueState.AWAITING_REPLY
    return IssueState.ACTIVE
