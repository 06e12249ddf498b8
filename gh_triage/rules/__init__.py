"""Pure lifecycle rules: snapshots in, planned side effects out."""

from .actions import TriageAction, TriagePlan
from .issues import evaluate_closed_issue, evaluate_open_issue, evaluate_regression
from .labels import IssueState, issue_state
from .pull_requests import evaluate_closed_pr, evaluate_open_pr

__all__ = [
    "IssueState",
    "TriageAction",
    "TriagePlan",
    "evaluate_closed_issue",
    "evaluate_closed_pr",
    "evaluate_open_issue",
    "evaluate_open_pr",
    "evaluate_regression",
    "issue_state",
]
