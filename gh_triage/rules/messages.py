"""Comment and notification templates."""

from urllib.parse import quote_plus

from ..config import TriageSettings
from ..mining.patterns import StackTraceReference
from .labels import NEEDS_ATTENTION


def nudge_message(settings: TriageSettings) -> str:
    body = [
        "There hasn't been any activity on this issue recently. Due to the high "
        "number of incoming GitHub notifications, we have to clean some of the "
        "old issues, as many of them have already been resolved with the latest "
        "updates.",
        f"Please make sure to update to the latest `{settings.project_name}` "
        "version and check if that solves the issue. Let us know if that works "
        "for you by adding a comment :+1:",
    ]
    return "\n\n".join(body)


def closing_message(settings: TriageSettings) -> str:
    return (
        "This issue will be auto-closed because there hasn't been any activity "
        "for a few months. Feel free to "
        f"[open a new one]({settings.repository_url}/issues/new) "
        "if you still experience this problem :+1:"
    )


def release_url(settings: TriageSettings, version: str) -> str:
    return f"{settings.repository_url}/releases/tag/{version}"


def released_message(settings: TriageSettings, version: str) -> str:
    return (
        "Congratulations! :tada: This was released as part of "
        f"[_{settings.project_name}_ {version}]({release_url(settings, version)}) "
        ":rocket:"
    )


def merged_message(settings: TriageSettings, author: str | None) -> str:
    lines = []
    if author:
        lines.append(f"Hey @{author} :wave:\n")
    lines.extend(
        [
            f"Thank you for your contribution to _{settings.project_name}_ and "
            "congrats on getting this pull request merged :tada:",
            f"The code change now lives in the `{settings.default_branch}` branch, "
            "however it wasn't released yet.",
            "We usually ship about once a week, and your PR will be included in "
            "the next one.\n",
            "Please let us know if this change requires an immediate release by "
            "adding a comment here :+1:",
            "We'll notify you once we shipped a new release with your changes "
            ":rocket:",
        ]
    )
    return "\n".join(lines)


def code_signing_message(settings: TriageSettings) -> str:
    body = [
        "It seems like this issue might be related to code signing :no_entry_sign:",
        "Have you seen our new "
        f"[Code Signing Troubleshooting Guide]({settings.signing_guide_url})? "
        "It will help you resolve the most common code signing issues :+1:",
    ]
    return "\n\n".join(body)


def env_report_message(settings: TriageSettings) -> str:
    body = [
        "It seems like you have not included the output of "
        f"`{settings.env_report_command}`",
        "To make it easier for us help you resolve this issue, please update the "
        f"issue to include the output of `{settings.env_report_command}` :+1:",
    ]
    return "\n\n".join(body)


def tool_relevance_message(tools: list[tuple[str, float]]) -> str:
    rendered = ", ".join(f"`{tool}` ({share:.0f}%)" for tool, share in tools)
    return f"This issue seems to be mostly about: {rendered}"


def stack_trace_link(
    settings: TriageSettings, reference: StackTraceReference
) -> str:
    return (
        f"{settings.repository_url}/blob/{settings.default_branch}/"
        f"{reference.component}/lib/{reference.component}/{reference.path}"
        f"#L{reference.line}"
    )


def stack_trace_message(
    settings: TriageSettings, references: list[StackTraceReference]
) -> str:
    lines = ["The stack trace points at the following source locations:"]
    for reference in references:
        label = f"{reference.component}/{reference.path}:{reference.line}"
        lines.append(f"- [{label}]({stack_trace_link(settings, reference)})")
    return "\n".join(lines)


def needs_attention_query_url(settings: TriageSettings) -> str:
    return (
        f"{settings.repository_url}/pulls?q=is%3Aopen+is%3Apr+label%3A%22"
        f"{quote_plus(NEEDS_ATTENTION)}%22"
    )


def needs_attention_notification(settings: TriageSettings, pr_count: int) -> str:
    noun = "PR" if pr_count == 1 else "PRs"
    verb = "has" if pr_count == 1 else "have"
    link = f"<{needs_attention_query_url(settings)}|{pr_count} {noun}>"
    return f"{link} {verb} been alive for more than {settings.attention_days:g} days."


def regression_notification(url: str) -> str:
    return f'New PR/Issue containing the word "regression": {url}'
