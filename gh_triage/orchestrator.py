"""Run one rule-set over every issue or pull request of a repository."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from .config import TriageSettings
from .github_client.client import GitHubClient
from .github_client.models import GitHubIssue
from .releases.resolver import map_prs_to_releases
from .rules.actions import TriagePlan
from .rules.commands import evaluate_comment_event
from .rules.issues import (
    evaluate_closed_issue,
    evaluate_new_issue,
    evaluate_open_issue,
    evaluate_regression,
)
from .rules.pull_requests import evaluate_closed_pr, evaluate_open_pr
from .slack.client import SlackClient
from .utils.clock import utc_now

logger = logging.getLogger(__name__)


class ProcessMode(str, Enum):
    """Which rule-set a run applies."""

    ISSUES = "issues"
    PRS = "prs"
    REGRESSIONS = "regressions"


@dataclass
class RunSummary:
    """Outcome of a run.

    ``plans`` is only filled on dry runs, where it backs the preview table.
    """

    mode: ProcessMode
    pages: int = 0
    evaluated: int = 0
    updated: int = 0
    actions_applied: int = 0
    needs_attention: list[int] = field(default_factory=list)
    regressions: list[int] = field(default_factory=list)
    notified: bool = False
    plans: list[TriagePlan] = field(default_factory=list)


class TriageRunner:
    """Paginates through a repository and applies the lifecycle rules.

    The runner owns no global state: the GitHub client and the optional Slack
    client are handed in, and the only data kept across items is the
    needs-attention list and the PR -> release map of the current run.
    """

    def __init__(
        self,
        client: GitHubClient,
        settings: TriageSettings,
        notifier: SlackClient | None = None,
        dry_run: bool = False,
        sleep: Callable[[float], None] = time.sleep,
        now: datetime | None = None,
    ):
        self.client = client
        self.settings = settings
        self.notifier = notifier
        self.dry_run = dry_run
        self.sleep = sleep
        self.now = now
        self._bot_login: str | None = settings.bot_login

    @property
    def bot_login(self) -> str:
        if self._bot_login is None:
            self._bot_login = self.client.get_authenticated_login()
        return self._bot_login

    def run(self, mode: ProcessMode) -> RunSummary:
        """Evaluate every item of the repository page by page."""
        now = self.now or utc_now()
        summary = RunSummary(mode=mode)
        settings = self.settings

        prs_to_releases: dict[int, str] = {}
        if mode == ProcessMode.PRS:
            logger.info(f"Fetching release information for '{settings.repository}'...")
            releases = self.client.get_recent_releases(
                settings.org, settings.repo, limit=settings.release_window
            )
            prs_to_releases = map_prs_to_releases(releases)

        logger.info(f"Fetching issues and PRs from '{settings.repository}'...")
        for page in self.client.iter_issue_pages(settings.org, settings.repo):
            summary.pages += 1
            for item in page:
                plan = self.evaluate(item, mode, prs_to_releases, now)
                if plan is None:
                    continue

                summary.evaluated += 1
                if plan.needs_attention:
                    summary.needs_attention.append(item.number)
                if plan.needs_update:
                    summary.updated += 1
                    if self.dry_run:
                        summary.plans.append(plan)
                    summary.actions_applied += self.apply(plan)
                if plan.regression:
                    summary.regressions.append(item.number)
                    self._notify_regression(item)

        if summary.needs_attention and self.notifier and not self.dry_run:
            summary.notified = self.notifier.notify_needs_attention(
                summary.needs_attention, settings
            )

        logger.info(
            f"Evaluated {summary.evaluated} items across {summary.pages} pages, "
            f"{summary.updated} needed changes"
        )
        return summary

    def evaluate(
        self,
        item: GitHubIssue,
        mode: ProcessMode,
        prs_to_releases: dict[int, str],
        now: datetime,
    ) -> TriagePlan | None:
        """Plan the changes for one item, or None if the mode skips it."""
        settings = self.settings
        org, repo = settings.org, settings.repo

        if mode == ProcessMode.REGRESSIONS:
            return evaluate_regression(item)

        if mode == ProcessMode.ISSUES and not item.is_pull_request:
            logger.info(f"Investigating issue #{item.number}...")
            if item.state == "closed":
                return evaluate_closed_issue(item, settings, now)

            plan = evaluate_open_issue(
                item,
                settings,
                self.bot_login,
                lambda: self.client.get_last_comment_author(org, repo, item.number),
                now,
            )
            plan.actions.extend(evaluate_new_issue(item, settings).actions)
            return plan

        if mode == ProcessMode.PRS and item.is_pull_request:
            logger.info(f"Investigating PR #{item.number}...")
            if item.state == "open":
                return evaluate_open_pr(item, settings, now)
            return evaluate_closed_pr(
                item,
                settings,
                prs_to_releases,
                lambda: self.client.get_merged_at(org, repo, item.number),
                now,
            )

        return None

    def apply(self, plan: TriagePlan) -> int:
        """Apply a plan's actions in order, pausing after each mutation.

        Returns:
            Number of actions applied (0 on dry runs)
        """
        if self.dry_run:
            for action in plan.actions:
                logger.info(f"[dry-run] #{plan.number}: {action.describe()}")
            return 0

        applied = 0
        for action in plan.actions:
            self.client.apply_action(
                self.settings.org, self.settings.repo, plan.number, action
            )
            applied += 1
            self.sleep(self.settings.action_delay_seconds)
        return applied

    def handle_comment_event(self, payload: dict[str, Any]) -> TriagePlan | None:
        """Apply maintainer commands from an ``issue_comment`` webhook payload."""
        plan = evaluate_comment_event(payload, self.settings)
        if plan is None:
            logger.info("Comment event carries no command for this bot")
            return None
        self.apply(plan)
        return plan

    def _notify_regression(self, item: GitHubIssue) -> None:
        if self.notifier and not self.dry_run:
            self.notifier.notify_regression(item, self.settings)
