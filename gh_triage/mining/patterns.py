"""Regex patterns for release notes and issue text.

Each helper returns structured matches so the patterns can be tested on
their own, independent of the rules that consume them.
"""

import re
from dataclasses import dataclass

# Matches a parenthesised, comma separated group of PR references:
#   (#8324)
#   (#8324,#8325)
#   (#8324, #8325, #8326)
# and captures what is inside the parens.
PR_REFERENCE_GROUP = re.compile(r"\((#\d+(?:,\s*#\d+)*)\)")
PR_NUMBER = re.compile(r"#(\d+)")

# lib/<component>/<file>:<line>, as printed in Ruby backtraces. Wrapped in a
# lookahead so a gem install path such as
# lib/ruby/gems/.../gym/lib/gym/runner.rb:42 still yields the inner reference.
STACK_TRACE_REFERENCE = re.compile(
    r"(?=(?<![A-Za-z0-9_])lib/([A-Za-z0-9_]+)/([\w./-]+?):(\d+))"
)


@dataclass(frozen=True)
class PullRequestReference:
    """A PR number together with the parenthesised group it came from."""

    number: int
    group: str


@dataclass(frozen=True)
class StackTraceReference:
    component: str
    path: str
    line: int


def find_pr_references(line: str) -> list[PullRequestReference]:
    """Extract PR numbers from the first reference group on a line.

    A line without a group yields an empty list.
    """
    match = PR_REFERENCE_GROUP.search(line)
    if not match:
        return []

    group = match.group(1)
    return [
        PullRequestReference(number=int(number), group=group)
        for number in PR_NUMBER.findall(group)
    ]


def find_stack_trace_references(text: str) -> list[StackTraceReference]:
    """All ``lib/<component>/<file>:<line>`` references, in order of appearance.

    Nested ``lib/`` segments ending at the same ``:<line>`` yield only the
    innermost one.
    """
    by_end: dict[int, StackTraceReference] = {}
    for match in STACK_TRACE_REFERENCE.finditer(text):
        by_end.pop(match.end(3), None)
        by_end[match.end(3)] = StackTraceReference(
            component=match.group(1), path=match.group(2), line=int(match.group(3))
        )
    return list(by_end.values())


def count_occurrences(text: str, term: str) -> int:
    """Count occurrences of ``term`` in ``text``, overlapping ones included."""
    if not term:
        return 0
    return len(re.findall(f"(?={re.escape(term)})", text))


def matching_keywords(text: str, keywords: list[str]) -> list[str]:
    """Keywords that appear in the lowercased text."""
    lowered = text.lower()
    return [keyword for keyword in keywords if keyword.lower() in lowered]
