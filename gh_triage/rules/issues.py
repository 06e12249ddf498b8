"""Inactivity rules for issues: nudge, auto-close and lock.

Every transition flips the marker label its own guard checks, so running the
rules again without new activity on the issue produces no further changes.
"""

import logging
from collections.abc import Callable
from datetime import datetime

from ..config import TriageSettings
from ..github_client.models import GitHubIssue
from ..utils.clock import elapsed_months, utc_now
from . import messages
from .actions import TriageAction, TriagePlan
from .classifiers import build_guidance_comment, is_regression, issue_text
from .labels import (
    AUTO_CLOSED,
    AWAITING_REPLY,
    REGRESSION,
    IssueState,
    has_label,
    issue_state,
)

logger = logging.getLogger(__name__)


def require_updated_at(issue: GitHubIssue) -> datetime:
    """The last update timestamp; every rule refuses to guess a missing one."""
    if issue.updated_at is None:
        raise ValueError(
            f"Issue #{issue.number} has no updated_at timestamp; refusing to evaluate"
        )
    return issue.updated_at


def months_since_update(issue: GitHubIssue, now: datetime) -> float:
    return elapsed_months(require_updated_at(issue), now)


def evaluate_open_issue(
    issue: GitHubIssue,
    settings: TriageSettings,
    bot_login: str,
    last_comment_author: Callable[[], str | None],
    now: datetime | None = None,
) -> TriagePlan:
    """Apply the inactivity state machine to an open issue.

    Args:
        issue: Snapshot of the issue
        settings: Thresholds and templates
        bot_login: Login the bot comments as
        last_comment_author: Resolves the latest commenter; only called when
            the issue is awaiting a reply
        now: Evaluation time, defaults to the current UTC time

    Returns:
        TriagePlan with at most one state transition
    """
    now = now or utc_now()
    plan = TriagePlan(number=issue.number)
    age = months_since_update(issue, now)
    state = issue_state(issue)

    if state == IssueState.AWAITING_REPLY:
        author = last_comment_author()
        if author == bot_login:
            if age > settings.issue_close_months:
                logger.info(
                    f"#{issue.number} ({issue.title}) is {age:.1f} months old, "
                    f"closing now"
                )
                plan.actions.extend(
                    [
                        TriageAction.add_comment(messages.closing_message(settings)),
                        TriageAction.close(),
                        TriageAction.add_label(AUTO_CLOSED),
                    ]
                )
        else:
            logger.info(
                f"#{issue.number} ({issue.title}) was replied to by a different user"
            )
            plan.actions.append(TriageAction.remove_label(AWAITING_REPLY))
    elif age > settings.issue_warning_months:
        logger.info(
            f"#{issue.number} ({issue.title}) is {age:.1f} months old, pinging now"
        )
        plan.actions.extend(
            [
                TriageAction.add_comment(messages.nudge_message(settings)),
                TriageAction.add_label(AWAITING_REPLY),
            ]
        )

    return plan


def evaluate_new_issue(issue: GitHubIssue, settings: TriageSettings) -> TriagePlan:
    """Post one combined guidance comment on issues nobody has answered yet."""
    require_updated_at(issue)
    plan = TriagePlan(number=issue.number)
    if issue.comment_count > 0:
        return plan

    comment = build_guidance_comment(issue, settings)
    if comment:
        plan.actions.append(TriageAction.add_comment(comment))
    return plan


def lock_action(
    issue: GitHubIssue, settings: TriageSettings, now: datetime
) -> TriageAction | None:
    """Lock old conversations; never unlocks and never locks twice."""
    if issue.locked:
        return None

    age = months_since_update(issue, now)
    if age <= settings.issue_lock_months:
        return None

    logger.info(
        f"Locking conversation on #{issue.number} since it hasn't been updated "
        f"in {round(age)} months"
    )
    return TriageAction.lock()


def evaluate_closed_issue(
    issue: GitHubIssue, settings: TriageSettings, now: datetime | None = None
) -> TriagePlan:
    require_updated_at(issue)
    now = now or utc_now()
    plan = TriagePlan(number=issue.number)
    action = lock_action(issue, settings, now)
    if action:
        plan.actions.append(action)
    return plan


def evaluate_regression(issue: GitHubIssue) -> TriagePlan:
    """Label issues and PRs mentioning a regression, open or closed."""
    require_updated_at(issue)
    plan = TriagePlan(number=issue.number)
    if not is_regression(issue_text(issue)):
        return plan
    if has_label(issue, REGRESSION):
        return plan

    logger.info(f"Found regression on #{issue.number}")
    plan.actions.append(TriageAction.add_label(REGRESSION))
    plan.regression = True
    return plan
