"""Maintainer commands written as issue comments.

A maintainer mentions the bot in a comment, for example::

    @fastlane-bot add tags [bug, needs-repro]

and the bot applies the command and deletes the comment.
"""

import logging
import re
from typing import Any

from ..config import TriageSettings
from .actions import TriageAction, TriagePlan

logger = logging.getLogger(__name__)

CLOSE_COMMAND = re.compile(r"\bclose issue\b", re.IGNORECASE)
LOCK_COMMAND = re.compile(r"\block issue\b", re.IGNORECASE)
REOPEN_COMMAND = re.compile(r"\breopen issue\b", re.IGNORECASE)
ADD_TAGS_COMMAND = re.compile(r"\badd tags:?\s*\[([^\]]*)\]", re.IGNORECASE)
REMOVE_TAGS_COMMAND = re.compile(r"\bremove tags:?\s*\[([^\]]*)\]", re.IGNORECASE)


def parse_tags(raw: str) -> list[str]:
    return [tag.strip() for tag in raw.split(",") if tag.strip()]


def parse_commands(body: str, current_labels: set[str]) -> list[TriageAction]:
    """Translate a comment body into actions, in a fixed command order."""
    actions: list[TriageAction] = []

    if CLOSE_COMMAND.search(body):
        actions.append(TriageAction.close())
    if LOCK_COMMAND.search(body):
        actions.append(TriageAction.lock())
    if REOPEN_COMMAND.search(body):
        actions.append(TriageAction.reopen())

    add_match = ADD_TAGS_COMMAND.search(body)
    if add_match:
        for tag in parse_tags(add_match.group(1)):
            if tag not in current_labels:
                actions.append(TriageAction.add_label(tag))

    remove_match = REMOVE_TAGS_COMMAND.search(body)
    if remove_match:
        for tag in parse_tags(remove_match.group(1)):
            actions.append(TriageAction.remove_label(tag))

    return actions


def is_command_recognised(body: str) -> bool:
    return any(
        pattern.search(body)
        for pattern in (
            CLOSE_COMMAND,
            LOCK_COMMAND,
            REOPEN_COMMAND,
            ADD_TAGS_COMMAND,
            REMOVE_TAGS_COMMAND,
        )
    )


def evaluate_comment_event(
    payload: dict[str, Any], settings: TriageSettings
) -> TriagePlan | None:
    """Plan the actions for an ``issue_comment`` webhook payload.

    Returns None when the event is not a command for this bot: a different
    action, no mention, an author outside ``allowed_users`` or no recognised
    command.
    """
    if payload.get("action") != "created":
        return None
    if not settings.command_bot_user:
        raise ValueError(
            "command_bot_user is required to handle comment commands. "
            "Set TRIAGE_BOT_USER environment variable."
        )

    comment = payload.get("comment") or {}
    issue = payload.get("issue") or {}
    body = comment.get("body") or ""
    author = (comment.get("user") or {}).get("login")

    if f"@{settings.command_bot_user}" not in body:
        return None
    if author not in settings.allowed_users:
        logger.info(f"Ignoring command from {author}: not an allowed user")
        return None
    if not is_command_recognised(body):
        return None

    current_labels = {label["name"] for label in issue.get("labels") or []}
    plan = TriagePlan(number=issue["number"])
    plan.actions.extend(parse_commands(body, current_labels))
    plan.actions.append(TriageAction.delete_comment(comment["id"]))

    logger.info(f"#{plan.number}: {len(plan.actions)} action(s) requested by {author}")
    return plan
