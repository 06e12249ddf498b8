"""Configuration for Slack integration."""

import os
from typing import Optional


class SlackConfig:
    """Configuration class for the Slack incoming webhook."""

    def __init__(self) -> None:
        """Initialize Slack configuration from environment variables."""
        self.webhook_url: Optional[str] = os.getenv("SLACK_WEBHOOK_URL")

    def is_configured(self) -> bool:
        """Check if Slack is properly configured."""
        return bool(self.webhook_url)

    def validate(self) -> None:
        """Validate configuration and raise error if invalid."""
        if not self.webhook_url:
            raise ValueError(
                "SLACK_WEBHOOK_URL environment variable is required for Slack "
                "notifications"
            )
