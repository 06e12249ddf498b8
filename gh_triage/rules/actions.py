"""Side-effect requests produced by the rule engine."""

from dataclasses import dataclass, field
from typing import Literal

ActionKind = Literal[
    "add_comment",
    "add_label",
    "remove_label",
    "close",
    "reopen",
    "lock",
    "delete_comment",
]


@dataclass(frozen=True)
class TriageAction:
    """A single mutation the orchestrator should apply to an issue."""

    kind: ActionKind
    value: str | None = None
    comment_id: int | None = None

    @classmethod
    def add_comment(cls, text: str) -> "TriageAction":
        return cls("add_comment", value=text)

    @classmethod
    def add_label(cls, label: str) -> "TriageAction":
        return cls("add_label", value=label)

    @classmethod
    def remove_label(cls, label: str) -> "TriageAction":
        return cls("remove_label", value=label)

    @classmethod
    def close(cls) -> "TriageAction":
        return cls("close")

    @classmethod
    def reopen(cls) -> "TriageAction":
        return cls("reopen")

    @classmethod
    def lock(cls) -> "TriageAction":
        return cls("lock")

    @classmethod
    def delete_comment(cls, comment_id: int) -> "TriageAction":
        return cls("delete_comment", comment_id=comment_id)

    def describe(self) -> str:
        """One-line human readable description, used for dry runs."""
        if self.kind == "add_comment":
            first_line = (self.value or "").splitlines()[0] if self.value else ""
            return f"comment: {first_line[:60]}"
        if self.kind in ("add_label", "remove_label"):
            verb = "add" if self.kind == "add_label" else "remove"
            return f"{verb} label '{self.value}'"
        if self.kind == "delete_comment":
            return f"delete comment {self.comment_id}"
        return self.kind


@dataclass
class TriagePlan:
    """Everything the rules decided for one issue or pull request."""

    number: int
    actions: list[TriageAction] = field(default_factory=list)
    needs_attention: bool = False
    regression: bool = False

    @property
    def needs_update(self) -> bool:
        return len(self.actions) > 0

    def labels_added(self) -> list[str]:
        return [a.value for a in self.actions if a.kind == "add_label" and a.value]

    def has(self, kind: ActionKind) -> bool:
        return any(action.kind == kind for action in self.actions)
