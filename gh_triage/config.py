"""Triage configuration: repository identity, thresholds and vocabularies."""

import os

from pydantic import BaseModel, Field, field_validator, model_validator

DEFAULT_SIGNING_KEYWORDS = ["signing", "provisioning"]

DEFAULT_TOOL_VOCABULARY = [
    "spaceship",
    "fastlane_core",
    "credentials_manager",
    "deliver",
    "snapshot",
    "frameit",
    "pem",
    "sigh",
    "produce",
    "cert",
    "gym",
    "pilot",
    "supply",
    "match",
    "scan",
    "screengrab",
    "precheck",
]


class TriageSettings(BaseModel):
    """Settings shared by the rule engine, the orchestrator and the CLI.

    Month based thresholds use 30 day months, matching how elapsed time is
    computed in ``gh_triage.utils.clock``.
    """

    repository: str = Field(
        "fastlane/fastlane", description="Target repository as 'owner/name'"
    )
    project_name: str = Field(
        "fastlane", description="Project name used in comment templates"
    )
    default_branch: str = Field(
        "master", description="Branch used when linking stack trace references"
    )
    bot_login: str | None = Field(
        None,
        description="Login of the bot account; resolved from the token when unset",
    )

    # Issue inactivity
    issue_warning_months: float = Field(
        1.5, gt=0, description="Months without activity before the nudge comment"
    )
    issue_close_grace_months: float = Field(
        0.3, gt=0, description="Extra months after the warning threshold before closing"
    )
    issue_lock_months: float = Field(
        2.0, gt=0, description="Months without activity before locking closed items"
    )

    # Pull request attention
    attention_days: float = Field(
        14, gt=0, description="Days after opening before an open PR needs attention"
    )
    merged_recency_hours: float = Field(
        24, gt=0, description="Window in which a merged PR gets the 'next release' note"
    )

    # Fetching and pacing
    release_window: int = Field(
        5, ge=1, description="Number of most recent releases mined for PR references"
    )
    page_size: int = Field(100, ge=1, le=100, description="Issues fetched per page")
    action_delay_seconds: float = Field(
        5.0, ge=0, description="Delay after every mutating API call"
    )

    # Content classifiers
    signing_keywords: list[str] = Field(
        default_factory=lambda: list(DEFAULT_SIGNING_KEYWORDS)
    )
    signing_guide_url: str = "https://docs.fastlane.tools/codesigning/getting-started/"
    env_report_marker: str = "Loaded fastlane plugins"
    env_report_command: str = "fastlane env"
    tool_vocabulary: list[str] = Field(
        default_factory=lambda: list(DEFAULT_TOOL_VOCABULARY)
    )
    tool_relevance_top: int = Field(3, ge=1)

    # Chat-ops commands
    command_bot_user: str | None = Field(
        None, description="Account that must be @mentioned to trigger a command"
    )
    allowed_users: list[str] = Field(
        default_factory=list, description="Logins allowed to issue commands"
    )

    @field_validator("repository")
    @classmethod
    def validate_repository(cls, value: str) -> str:
        parts = value.split("/")
        if len(parts) != 2 or not parts[0] or not parts[1]:
            raise ValueError(
                f"Invalid repository '{value}'. Expected format: owner/name"
            )
        return value

    @model_validator(mode="after")
    def validate_threshold_order(self) -> "TriageSettings":
        if self.issue_lock_months <= self.issue_close_months:
            raise ValueError(
                f"issue_lock_months ({self.issue_lock_months}) must be greater than "
                f"the close threshold ({self.issue_close_months:.2f} months)"
            )
        return self

    @property
    def issue_close_months(self) -> float:
        """Inactivity after which an issue awaiting reply is closed."""
        return self.issue_warning_months + self.issue_close_grace_months

    @property
    def org(self) -> str:
        return self.repository.split("/")[0]

    @property
    def repo(self) -> str:
        return self.repository.split("/")[1]

    @property
    def repository_url(self) -> str:
        return f"https://github.com/{self.repository}"

    @classmethod
    def from_env(cls, **overrides: object) -> "TriageSettings":
        """Build settings from TRIAGE_* environment variables.

        Explicit keyword overrides win over the environment; ``None`` values
        are ignored so unset CLI options fall through to the defaults.
        """
        values: dict[str, object] = {}
        if os.getenv("TRIAGE_REPOSITORY"):
            values["repository"] = os.environ["TRIAGE_REPOSITORY"]
        if os.getenv("TRIAGE_BOT_LOGIN"):
            values["bot_login"] = os.environ["TRIAGE_BOT_LOGIN"]
        if os.getenv("TRIAGE_BOT_USER"):
            values["command_bot_user"] = os.environ["TRIAGE_BOT_USER"]
        if os.getenv("TRIAGE_ALLOWED_USERS"):
            values["allowed_users"] = [
                user.strip()
                for user in os.environ["TRIAGE_ALLOWED_USERS"].split(",")
                if user.strip()
            ]
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls.model_validate(values)
