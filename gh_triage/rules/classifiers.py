"""Content classifiers over an issue's title and body.

Each classifier returns a rendered guidance fragment or None. Fragments are
combined into a single comment by ``build_guidance_comment``.
"""

import logging
from dataclasses import dataclass, field

from ..config import TriageSettings
from ..github_client.models import GitHubIssue
from ..mining.patterns import (
    StackTraceReference,
    count_occurrences,
    find_stack_trace_references,
    matching_keywords,
)
from . import messages

logger = logging.getLogger(__name__)

NO_TOOL_DETECTED = "no tool detected"


@dataclass(frozen=True)
class ToolShare:
    tool: str
    occurrences: int
    percentage: float


@dataclass
class ToolRelevance:
    """Tools ranked by their share of vocabulary occurrences in a text."""

    shares: list[ToolShare] = field(default_factory=list)

    @property
    def detected(self) -> bool:
        return len(self.shares) > 0

    def summary(self) -> str:
        if not self.detected:
            return NO_TOOL_DETECTED
        return ", ".join(f"{s.tool} ({s.percentage:.0f}%)" for s in self.shares)


def issue_text(issue: GitHubIssue) -> str:
    """Title and body joined; missing fields count as empty."""
    return f"{issue.title or ''}\n{issue.body or ''}"


def code_signing_guidance(text: str, settings: TriageSettings) -> str | None:
    if not matching_keywords(text, settings.signing_keywords):
        return None
    return messages.code_signing_message(settings)


def env_report_guidance(text: str, settings: TriageSettings) -> str | None:
    """Guidance for the case where the environment report is missing."""
    if settings.env_report_marker in text:
        return None
    return messages.env_report_message(settings)


def is_regression(text: str) -> bool:
    return "regression" in text.lower()


def score_tool_relevance(
    text: str, vocabulary: list[str], top: int = 3
) -> ToolRelevance:
    """Rank vocabulary tools by their share of all occurrences in ``text``.

    Occurrences may overlap. When nothing in the vocabulary occurs the
    result is empty rather than a division by zero.
    """
    lowered = text.lower()
    counts = {tool: count_occurrences(lowered, tool.lower()) for tool in vocabulary}
    total = sum(counts.values())
    if total == 0:
        return ToolRelevance()

    shares = [
        ToolShare(tool=tool, occurrences=count, percentage=count * 100.0 / total)
        for tool, count in counts.items()
        if count > 0
    ]
    shares.sort(key=lambda share: share.occurrences, reverse=True)
    return ToolRelevance(shares=shares[:top])


def tool_relevance_guidance(text: str, settings: TriageSettings) -> str | None:
    relevance = score_tool_relevance(
        text, settings.tool_vocabulary, top=settings.tool_relevance_top
    )
    if not relevance.detected:
        return None
    return messages.tool_relevance_message(
        [(share.tool, share.percentage) for share in relevance.shares]
    )


def known_stack_trace_references(
    text: str, settings: TriageSettings
) -> list[StackTraceReference]:
    """Stack trace references into known tools, first occurrence only."""
    vocabulary = set(settings.tool_vocabulary)
    seen: set[StackTraceReference] = set()
    references = []
    for reference in find_stack_trace_references(text):
        if reference.component in vocabulary and reference not in seen:
            seen.add(reference)
            references.append(reference)
    return references


def stack_trace_guidance(text: str, settings: TriageSettings) -> str | None:
    references = known_stack_trace_references(text, settings)
    if not references:
        return None
    return messages.stack_trace_message(settings, references)


CLASSIFIERS = [
    code_signing_guidance,
    env_report_guidance,
    tool_relevance_guidance,
    stack_trace_guidance,
]


def build_guidance_comment(issue: GitHubIssue, settings: TriageSettings) -> str | None:
    """Run every classifier and join the fragments into one comment."""
    text = issue_text(issue)
    fragments = []
    for classifier in CLASSIFIERS:
        fragment = classifier(text, settings)
        if fragment:
            logger.info(f"#{issue.number}: {classifier.__name__} matched")
            fragments.append(fragment)

    if not fragments:
        return None
    return "\n\n---\n\n".join(fragments)
