"""Standardized CLI option definitions for consistent shorthand mappings.

This module provides centralized option definitions so every triage command
exposes the same flags.
"""

import typer

# Core options
REPOSITORY_OPTION = typer.Option(
    None,
    "--repo",
    "-r",
    envvar="TRIAGE_REPOSITORY",
    help="Repository as owner/name (defaults to TRIAGE_REPOSITORY)",
)

TOKEN_OPTION = typer.Option(
    None, "--token", "-t", help="GitHub API token (defaults to GITHUB_TOKEN env var)"
)

# Behavior options
DRY_RUN_OPTION = typer.Option(
    False, "--dry-run", "-d", help="Preview changes without applying them"
)

DELAY_OPTION = typer.Option(
    None, "--delay", help="Delay after each mutating API call in seconds"
)

NO_NOTIFY_OPTION = typer.Option(
    False, "--no-notify", help="Skip Slack notifications for this run"
)

VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Enable debug logging")

AS_OF_OPTION = typer.Option(
    None,
    "--as-of",
    help="Evaluate as if it were this date (YYYY-MM-DD), useful with --dry-run",
)

# Threshold options
WARNING_MONTHS_OPTION = typer.Option(
    None, "--warning-months", help="Months of inactivity before the nudge comment"
)

LOCK_MONTHS_OPTION = typer.Option(
    None, "--lock-months", help="Months of inactivity before locking closed items"
)

ATTENTION_DAYS_OPTION = typer.Option(
    None, "--attention-days", help="Days before an open PR needs attention"
)

RELEASE_WINDOW_OPTION = typer.Option(
    None, "--release-window", help="Number of recent releases to mine for PR numbers"
)

# Event options
PAYLOAD_OPTION = typer.Option(
    ...,
    "--payload",
    "-p",
    help="Path to an issue_comment webhook payload (JSON)",
)
