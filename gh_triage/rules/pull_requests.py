"""Pull request rules: attention tracking and release linkage."""

import logging
from collections.abc import Callable
from datetime import datetime

from ..config import TriageSettings
from ..github_client.models import GitHubIssue
from ..utils.clock import elapsed_days, elapsed_hours, utc_now
from . import messages
from .actions import TriageAction, TriagePlan
from .issues import lock_action, require_updated_at
from .labels import INCLUDED_IN_NEXT_RELEASE, NEEDS_ATTENTION, RELEASED, has_label

logger = logging.getLogger(__name__)


def attention_age_days(pr: GitHubIssue, now: datetime) -> float:
    """Days since the PR was opened.

    Measured from ``created_at``; ``updated_at`` moves whenever the PR is
    relabelled, the needs-attention label included.
    """
    return elapsed_days(pr.created_at, now)


def evaluate_open_pr(
    pr: GitHubIssue, settings: TriageSettings, now: datetime | None = None
) -> TriagePlan:
    """Keep the needs-attention label in sync with the PR's age.

    ``plan.needs_attention`` tells the orchestrator to include the PR in the
    run's aggregate notification.
    """
    require_updated_at(pr)
    now = now or utc_now()
    plan = TriagePlan(number=pr.number)
    age = attention_age_days(pr, now)
    labelled = has_label(pr, NEEDS_ATTENTION)

    if age > settings.attention_days:
        if not labelled:
            logger.info(f"Adding {NEEDS_ATTENTION} label on #{pr.number}")
            plan.actions.append(TriageAction.add_label(NEEDS_ATTENTION))
        plan.needs_attention = True
    elif labelled:
        logger.info(f"Removing {NEEDS_ATTENTION} label on #{pr.number}")
        plan.actions.append(TriageAction.remove_label(NEEDS_ATTENTION))

    return plan


def release_actions(
    pr: GitHubIssue, settings: TriageSettings, prs_to_releases: dict[int, str]
) -> list[TriageAction]:
    """Mark a PR as released when the release notes reference it."""
    if has_label(pr, RELEASED) or pr.number not in prs_to_releases:
        return []

    version = prs_to_releases[pr.number]
    logger.info(f"Marking #{pr.number} as having been released in version {version}")

    actions = []
    if has_label(pr, INCLUDED_IN_NEXT_RELEASE):
        actions.append(TriageAction.remove_label(INCLUDED_IN_NEXT_RELEASE))
    actions.append(TriageAction.add_label(RELEASED))
    actions.append(
        TriageAction.add_comment(messages.released_message(settings, version))
    )
    return actions


def should_mark_as_merged(
    pr: GitHubIssue,
    settings: TriageSettings,
    merged_at: Callable[[], datetime | None],
    now: datetime,
) -> bool:
    """Whether a PR was merged recently and not announced yet.

    ``merged_at`` costs an extra request, so the cheap checks on the labels
    and ``closed_at`` come first.
    """
    if has_label(pr, RELEASED) or has_label(pr, INCLUDED_IN_NEXT_RELEASE):
        return False
    if pr.closed_at is None:
        return False
    if elapsed_hours(pr.closed_at, now) >= settings.merged_recency_hours:
        return False

    merged = merged_at()
    if merged is None:
        return False
    return elapsed_hours(merged, now) < settings.merged_recency_hours


def evaluate_closed_pr(
    pr: GitHubIssue,
    settings: TriageSettings,
    prs_to_releases: dict[int, str],
    merged_at: Callable[[], datetime | None],
    now: datetime | None = None,
) -> TriagePlan:
    """Clean up, link to a release or announce the merge, then maybe lock.

    Release linkage takes priority over the "included in next release" note
    so a PR is never told both in the same run.
    """
    require_updated_at(pr)
    now = now or utc_now()
    plan = TriagePlan(number=pr.number)

    if has_label(pr, NEEDS_ATTENTION):
        logger.info(f"Removing {NEEDS_ATTENTION} label on #{pr.number}")
        plan.actions.append(TriageAction.remove_label(NEEDS_ATTENTION))

    released = release_actions(pr, settings, prs_to_releases)
    if released:
        plan.actions.extend(released)
    elif should_mark_as_merged(pr, settings, merged_at, now):
        author = pr.user.login if pr.user else None
        logger.info(f"Marking #{pr.number} as included in the next release")
        plan.actions.append(
            TriageAction.add_comment(messages.merged_message(settings, author))
        )
        plan.actions.append(TriageAction.add_label(INCLUDED_IN_NEXT_RELEASE))

    lock = lock_action(pr, settings, now)
    if lock:
        plan.actions.append(lock)

    return plan
