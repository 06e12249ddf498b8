"""CLI commands running one triage rule-set over a repository."""

from datetime import datetime

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..config import TriageSettings
from ..github_client.client import GitHubClient
from ..orchestrator import ProcessMode, RunSummary, TriageRunner
from ..rules.actions import TriagePlan
from ..slack.client import SlackClient
from ..utils.clock import parse_timestamp
from ..utils.logging_setup import configure_logging
from .options import (
    AS_OF_OPTION,
    ATTENTION_DAYS_OPTION,
    DELAY_OPTION,
    DRY_RUN_OPTION,
    LOCK_MONTHS_OPTION,
    NO_NOTIFY_OPTION,
    RELEASE_WINDOW_OPTION,
    REPOSITORY_OPTION,
    TOKEN_OPTION,
    VERBOSE_OPTION,
    WARNING_MONTHS_OPTION,
)

console = Console()


def build_settings(**overrides: object) -> TriageSettings:
    """Settings from the environment with CLI overrides, or exit on error."""
    try:
        return TriageSettings.from_env(**overrides)
    except ValueError as e:
        console.print(f"❌ [red]Error: invalid configuration: {e}[/red]")
        raise typer.Exit(1)


def parse_as_of(as_of: str | None) -> datetime | None:
    if as_of is None:
        return None
    try:
        return parse_timestamp(as_of)
    except ValueError as e:
        console.print(f"❌ [red]Error: {e}[/red]")
        raise typer.Exit(1)


def build_client(token: str | None, settings: TriageSettings) -> GitHubClient:
    try:
        return GitHubClient(token=token, per_page=settings.page_size)
    except ValueError as e:
        console.print(f"❌ [red]Error: {e}[/red]")
        raise typer.Exit(1)


def build_notifier(no_notify: bool) -> SlackClient | None:
    if no_notify:
        return None
    notifier = SlackClient()
    if not notifier.config.is_configured():
        console.print(
            "⚠️  [yellow]SLACK_WEBHOOK_URL is not set, Slack notifications "
            "are disabled[/yellow]"
        )
        return None
    return notifier


def render_plans(plans: list[TriagePlan]) -> None:
    table = Table(title="Planned changes")
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Actions")
    for plan in plans:
        table.add_row(
            str(plan.number),
            "\n".join(escape(action.describe()) for action in plan.actions),
        )
    console.print(table)


def print_summary(summary: RunSummary, dry_run: bool) -> None:
    if dry_run and summary.plans:
        render_plans(summary.plans)

    console.print(
        f"✅ [green]{summary.mode.value}: evaluated {summary.evaluated} items "
        f"across {summary.pages} pages, {summary.updated} needed changes[/green]"
    )
    if summary.needs_attention:
        console.print(
            f"🔔 {len(summary.needs_attention)} PR(s) need attention"
            + (" (Slack notified)" if summary.notified else "")
        )
    if summary.regressions:
        console.print(f"🐛 {len(summary.regressions)} new regression(s) labelled")
    if dry_run:
        console.print("🔍 [blue]Dry run: no changes were applied[/blue]")


def run_mode(
    mode: ProcessMode,
    settings: TriageSettings,
    token: str | None,
    dry_run: bool,
    no_notify: bool,
    as_of: str | None,
) -> None:
    now = parse_as_of(as_of)
    client = build_client(token, settings)
    notifier = build_notifier(no_notify)
    runner = TriageRunner(
        client, settings, notifier=notifier, dry_run=dry_run, now=now
    )

    console.print(
        f"🔍 [blue]Running {mode.value} triage on {settings.repository}[/blue]"
    )
    try:
        summary = runner.run(mode)
    except Exception as e:
        console.print(f"❌ [red]Triage run failed: {e}[/red]")
        raise typer.Exit(1)

    print_summary(summary, dry_run)


def issues(
    repo: str | None = REPOSITORY_OPTION,
    token: str | None = TOKEN_OPTION,
    dry_run: bool = DRY_RUN_OPTION,
    delay: float | None = DELAY_OPTION,
    as_of: str | None = AS_OF_OPTION,
    warning_months: float | None = WARNING_MONTHS_OPTION,
    lock_months: float | None = LOCK_MONTHS_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Nudge, auto-close and lock inactive issues.

    Open issues without activity get a reminder and the waiting-for-reply
    label; if nobody answers they are closed. Old closed issues are locked.
    New, unanswered issues get one comment with guidance.

    Examples:
        gh-triage issues --repo fastlane/fastlane --dry-run
        gh-triage issues --repo fastlane/fastlane --warning-months 2
    """
    configure_logging(verbose)
    settings = build_settings(
        repository=repo,
        action_delay_seconds=delay,
        issue_warning_months=warning_months,
        issue_lock_months=lock_months,
    )
    run_mode(ProcessMode.ISSUES, settings, token, dry_run, True, as_of)


def prs(
    repo: str | None = REPOSITORY_OPTION,
    token: str | None = TOKEN_OPTION,
    dry_run: bool = DRY_RUN_OPTION,
    delay: float | None = DELAY_OPTION,
    no_notify: bool = NO_NOTIFY_OPTION,
    as_of: str | None = AS_OF_OPTION,
    attention_days: float | None = ATTENTION_DAYS_OPTION,
    release_window: int | None = RELEASE_WINDOW_OPTION,
    lock_months: float | None = LOCK_MONTHS_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Track PRs needing attention and link merged PRs to releases.

    Open PRs older than the attention threshold get the needs-attention label
    and are summarised in one Slack message. Closed PRs referenced in recent
    release notes are marked as released.

    Examples:
        gh-triage prs --repo fastlane/fastlane --dry-run
        gh-triage prs --repo fastlane/fastlane --attention-days 21
    """
    configure_logging(verbose)
    settings = build_settings(
        repository=repo,
        action_delay_seconds=delay,
        attention_days=attention_days,
        release_window=release_window,
        issue_lock_months=lock_months,
    )
    run_mode(ProcessMode.PRS, settings, token, dry_run, no_notify, as_of)


def regressions(
    repo: str | None = REPOSITORY_OPTION,
    token: str | None = TOKEN_OPTION,
    dry_run: bool = DRY_RUN_OPTION,
    delay: float | None = DELAY_OPTION,
    no_notify: bool = NO_NOTIFY_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Label issues and PRs mentioning a regression and notify Slack.

    Examples:
        gh-triage regressions --repo fastlane/fastlane
    """
    configure_logging(verbose)
    settings = build_settings(repository=repo, action_delay_seconds=delay)
    run_mode(ProcessMode.REGRESSIONS, settings, token, dry_run, no_notify, None)
