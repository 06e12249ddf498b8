"""CLI command handling maintainer commands from a webhook payload."""

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from ..orchestrator import TriageRunner
from ..utils.logging_setup import configure_logging
from .options import DRY_RUN_OPTION, PAYLOAD_OPTION, TOKEN_OPTION, VERBOSE_OPTION
from .triage import build_client, build_settings

console = Console()


def handle_comment(
    payload: Path = PAYLOAD_OPTION,
    token: str | None = TOKEN_OPTION,
    dry_run: bool = DRY_RUN_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Apply '@bot' commands found in a new issue comment.

    Reads an issue_comment webhook payload, e.g. $GITHUB_EVENT_PATH in a
    GitHub Actions workflow. Supported commands: close issue, lock issue,
    reopen issue, add tags [a, b], remove tags [a, b]. Only users listed in
    TRIAGE_ALLOWED_USERS may run them; the command comment is deleted.

    Examples:
        gh-triage handle-comment --payload "$GITHUB_EVENT_PATH"
    """
    configure_logging(verbose)

    if not payload.exists():
        console.print(f"❌ [red]Error: Payload file {payload} does not exist[/red]")
        raise typer.Exit(1)

    try:
        event = json.loads(payload.read_text())
    except json.JSONDecodeError as e:
        console.print(f"❌ [red]Error: Payload is not valid JSON: {e}[/red]")
        raise typer.Exit(1)

    repository = (event.get("repository") or {}).get("full_name")
    settings = build_settings(repository=repository)
    if not settings.command_bot_user:
        console.print(
            "❌ [red]Error: TRIAGE_BOT_USER is required to handle comment "
            "commands[/red]"
        )
        raise typer.Exit(1)

    client = build_client(token, settings)
    runner = TriageRunner(client, settings, dry_run=dry_run)

    try:
        plan = runner.handle_comment_event(event)
    except Exception as e:
        console.print(f"❌ [red]Failed to handle comment: {e}[/red]")
        raise typer.Exit(1)

    if plan is None:
        console.print("No command for this bot in the comment")
        return

    for action in plan.actions:
        prefix = "\\[dry-run] " if dry_run else ""
        console.print(f"{prefix}#{plan.number}: {escape(action.describe())}")
