"""Tests for the issue inactivity rules."""

from collections.abc import Callable
from datetime import datetime
from unittest.mock import Mock

import pytest

from gh_triage.config import TriageSettings
from gh_triage.github_client.models import GitHubIssue
from gh_triage.rules.actions import TriageAction
from gh_triage.rules.issues import (
    evaluate_closed_issue,
    evaluate_new_issue,
    evaluate_open_issue,
    evaluate_regression,
)
from gh_triage.rules.labels import (
    AUTO_CLOSED,
    AWAITING_REPLY,
    REGRESSION,
    IssueState,
    issue_state,
)

BOT = "fastlane-bot"

# Default thresholds: warning 45 days, close 54 days, lock 60 days


def author(login: str | None) -> Mock:
    return Mock(return_value=login)


class TestOpenIssue:
    """Test the open issue state machine."""

    def test_recent_issue_is_left_alone(
        self,
        issue_factory: Callable[..., GitHubIssue],
        settings: TriageSettings,
        now: datetime,
    ) -> None:
        issue = issue_factory(updated_days_ago=10)
        resolver = author(BOT)

        plan = evaluate_open_issue(issue, settings, BOT, resolver, now)

        assert plan.actions == []
        resolver.assert_not_called()

    def test_inactive_issue_gets_nudged(
        self,
        issue_factory: Callable[..., GitHubIssue],
        settings: TriageSettings,
        now: datetime,
    ) -> None:
        issue = issue_factory(updated_days_ago=46)
        resolver = author(BOT)

        plan = evaluate_open_issue(issue, settings, BOT, resolver, now)

        assert [a.kind for a in plan.actions] == ["add_comment", "add_label"]
        assert plan.actions[1] == TriageAction.add_label(AWAITING_REPLY)
        assert "There hasn't been any activity" in (plan.actions[0].value or "")
        resolver.assert_not_called()

    def test_unanswered_warning_closes_issue(
        self,
        issue_factory: Callable[..., GitHubIssue],
        settings: TriageSettings,
        now: datetime,
    ) -> None:
        issue = issue_factory(labels=[AWAITING_REPLY], updated_days_ago=55)

        plan = evaluate_open_issue(issue, settings, BOT, author(BOT), now)

        assert [a.kind for a in plan.actions] == ["add_comment", "close", "add_label"]
        assert plan.actions[2] == TriageAction.add_label(AUTO_CLOSED)
        assert "auto-closed" in (plan.actions[0].value or "")

    def test_human_reply_removes_marker(
        self,
        issue_factory: Callable[..., GitHubIssue],
        settings: TriageSettings,
        now: datetime,
    ) -> None:
        issue = issue_factory(labels=[AWAITING_REPLY], updated_days_ago=55)

        plan = evaluate_open_issue(issue, settings, BOT, author("reporter"), now)

        assert plan.actions == [TriageAction.remove_label(AWAITING_REPLY)]
        assert not plan.has("close")

    def test_human_reply_removes_marker_before_close_threshold(
        self,
        issue_factory: Callable[..., GitHubIssue],
        settings: TriageSettings,
        now: datetime,
    ) -> None:
        issue = issue_factory(labels=[AWAITING_REPLY], updated_days_ago=2)

        plan = evaluate_open_issue(issue, settings, BOT, author("reporter"), now)

        assert plan.actions == [TriageAction.remove_label(AWAITING_REPLY)]

    @pytest.mark.parametrize("days", [0, 10, 45, 53.9])
    def test_awaiting_reply_below_close_threshold_is_idempotent(
        self,
        issue_factory: Callable[..., GitHubIssue],
        settings: TriageSettings,
        now: datetime,
        days: float,
    ) -> None:
        issue = issue_factory(labels=[AWAITING_REPLY], updated_days_ago=days)

        plan = evaluate_open_issue(issue, settings, BOT, author(BOT), now)

        assert plan.actions == []

    @pytest.mark.parametrize("days", [46, 55, 120, 400])
    @pytest.mark.parametrize("labels", [[], [AWAITING_REPLY]])
    def test_never_pings_and_closes_together(
        self,
        issue_factory: Callable[..., GitHubIssue],
        settings: TriageSettings,
        now: datetime,
        days: float,
        labels: list[str],
    ) -> None:
        issue = issue_factory(labels=labels, updated_days_ago=days)

        plan = evaluate_open_issue(issue, settings, BOT, author(BOT), now)

        pinged = TriageAction.add_label(AWAITING_REPLY) in plan.actions
        assert not (pinged and plan.has("close"))

    def test_nudge_then_rerun_is_stable(
        self,
        issue_factory: Callable[..., GitHubIssue],
        settings: TriageSettings,
        now: datetime,
    ) -> None:
        issue = issue_factory(updated_days_ago=46)
        first = evaluate_open_issue(issue, settings, BOT, author(BOT), now)

        # The label store now holds the marker; the bot's comment is the
        # latest activity.
        relabelled = issue_factory(
            labels=first.labels_added(), updated_days_ago=0, created_days_ago=46
        )
        second = evaluate_open_issue(relabelled, settings, BOT, author(BOT), now)

        assert second.actions == []

    def test_missing_updated_at_is_refused(
        self,
        issue_factory: Callable[..., GitHubIssue],
        settings: TriageSettings,
        now: datetime,
    ) -> None:
        issue = issue_factory(updated_at=None)

        with pytest.raises(ValueError, match="no updated_at timestamp"):
            evaluate_open_issue(issue, settings, BOT, author(BOT), now)


class TestClosedIssue:
    """Test the lock rule."""

    def test_old_closed_issue_is_locked(
        self,
        issue_factory: Callable[..., GitHubIssue],
        settings: TriageSettings,
        now: datetime,
    ) -> None:
        issue = issue_factory(state="closed", updated_days_ago=61, closed_days_ago=61)

        plan = evaluate_closed_issue(issue, settings, now)

        assert plan.actions == [TriageAction.lock()]

    def test_recently_closed_issue_is_not_locked(
        self,
        issue_factory: Callable[..., GitHubIssue],
        settings: TriageSettings,
        now: datetime,
    ) -> None:
        issue = issue_factory(state="closed", updated_days_ago=30, closed_days_ago=30)

        assert evaluate_closed_issue(issue, settings, now).actions == []

    @pytest.mark.parametrize("days", [0, 59, 61, 365, 3650])
    def test_locked_issue_is_never_locked_again(
        self,
        issue_factory: Callable[..., GitHubIssue],
        settings: TriageSettings,
        now: datetime,
        days: float,
    ) -> None:
        issue = issue_factory(
            state="closed", locked=True, updated_days_ago=days, closed_days_ago=days
        )

        assert evaluate_closed_issue(issue, settings, now).actions == []

    def test_missing_updated_at_is_refused(
        self,
        issue_factory: Callable[..., GitHubIssue],
        settings: TriageSettings,
        now: datetime,
    ) -> None:
        issue = issue_factory(state="closed", closed_days_ago=90, updated_at=None)

        with pytest.raises(ValueError, match="no updated_at timestamp"):
            evaluate_closed_issue(issue, settings, now)


class TestNewIssueGuidance:
    """Test the combined guidance comment."""

    def test_single_comment_for_all_fragments(
        self,
        issue_factory: Callable[..., GitHubIssue],
        settings: TriageSettings,
    ) -> None:
        issue = issue_factory(
            title="match fails", body="Provisioning profile not found"
        )

        plan = evaluate_new_issue(issue, settings)

        assert [a.kind for a in plan.actions] == ["add_comment"]
        comment = plan.actions[0].value or ""
        assert "code signing" in comment
        assert "fastlane env" in comment

    def test_issue_with_comments_gets_no_guidance(
        self,
        issue_factory: Callable[..., GitHubIssue],
        settings: TriageSettings,
    ) -> None:
        issue = issue_factory(body="signing broken", comment_count=2)

        assert evaluate_new_issue(issue, settings).actions == []

    def test_complete_report_gets_no_guidance(
        self,
        issue_factory: Callable[..., GitHubIssue],
        settings: TriageSettings,
    ) -> None:
        issue = issue_factory(
            title="Crash on launch", body="Loaded fastlane plugins:\nNo plugins"
        )

        assert evaluate_new_issue(issue, settings).actions == []

    def test_missing_updated_at_is_refused(
        self,
        issue_factory: Callable[..., GitHubIssue],
        settings: TriageSettings,
    ) -> None:
        issue = issue_factory(body="signing broken", updated_at=None)

        with pytest.raises(ValueError, match="no updated_at timestamp"):
            evaluate_new_issue(issue, settings)


class TestRegression:
    """Test regression labelling."""

    @pytest.mark.parametrize("state", ["open", "closed"])
    def test_regression_is_labelled(
        self, issue_factory: Callable[..., GitHubIssue], state: str
    ) -> None:
        issue = issue_factory(state=state, title="Regression in 2.100.0")

        plan = evaluate_regression(issue)

        assert plan.actions == [TriageAction.add_label(REGRESSION)]
        assert plan.regression is True

    def test_already_labelled_regression_is_skipped(
        self, issue_factory: Callable[..., GitHubIssue]
    ) -> None:
        issue = issue_factory(body="this is a REGRESSION", labels=[REGRESSION])

        plan = evaluate_regression(issue)

        assert plan.actions == []
        assert plan.regression is False

    def test_no_regression(self, issue_factory: Callable[..., GitHubIssue]) -> None:
        assert evaluate_regression(issue_factory(body="feature request")).actions == []

    def test_missing_updated_at_is_refused(
        self, issue_factory: Callable[..., GitHubIssue]
    ) -> None:
        issue = issue_factory(title="Regression in 2.100.0", updated_at=None)

        with pytest.raises(ValueError, match="no updated_at timestamp"):
            evaluate_regression(issue)


class TestIssueState:
    """Test state derivation from labels."""

    def test_states(self, issue_factory: Callable[..., GitHubIssue]) -> None:
        assert issue_state(issue_factory()) == IssueState.ACTIVE
        assert (
            issue_state(issue_factory(labels=[AWAITING_REPLY]))
            == IssueState.AWAITING_REPLY
        )
        assert (
            issue_state(
                issue_factory(state="closed", labels=[AUTO_CLOSED, AWAITING_REPLY])
            )
            == IssueState.AUTO_CLOSED
        )
        assert (
            issue_state(issue_factory(state="closed", locked=True))
            == IssueState.LOCKED
        )
