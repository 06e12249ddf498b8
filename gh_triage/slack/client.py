"""Slack client for triage notifications."""

import logging
from typing import Optional

from slack_sdk.errors import SlackApiError
from slack_sdk.webhook import WebhookClient

from ..config import TriageSettings
from ..github_client.models import GitHubIssue
from ..rules import messages
from .config import SlackConfig

logger = logging.getLogger(__name__)


class SlackClient:
    """Client for posting triage notifications to a Slack channel."""

    def __init__(self, config: Optional[SlackConfig] = None) -> None:
        """Initialize Slack client with configuration."""
        self.config = config or SlackConfig()
        self._webhook: Optional[WebhookClient] = None

    @property
    def webhook(self) -> WebhookClient:
        """Get or create the WebhookClient instance."""
        if self._webhook is None:
            self.config.validate()
            self._webhook = WebhookClient(self.config.webhook_url)
        return self._webhook

    def post_message(self, text: str) -> bool:
        """
        Post a plain text message through the incoming webhook.

        Args:
            text: Message text, Slack mrkdwn allowed

        Returns:
            True if successful, False otherwise
        """
        if not self.config.is_configured():
            logger.warning("Slack is not configured, skipping notification")
            return False

        try:
            response = self.webhook.send(text=text)
            if response.status_code == 200:
                return True
            logger.error(
                f"Slack webhook returned {response.status_code}: {response.body}"
            )

        except SlackApiError as e:
            logger.error(f"Error posting message to Slack: {e}")
        except Exception as e:
            logger.error(f"Unexpected error posting message to Slack: {e}")

        return False

    def notify_needs_attention(
        self, pr_numbers: list[int], settings: TriageSettings
    ) -> bool:
        """
        Send the end-of-run summary about PRs that need attention.

        Nothing is sent for an empty list.

        Args:
            pr_numbers: PRs collected during the run
            settings: Used for the repository link and threshold wording

        Returns:
            True if a notification was sent successfully, False otherwise
        """
        if not pr_numbers:
            return False

        logger.info("Notifying the Slack room about PRs that need attention...")
        sent = self.post_message(
            messages.needs_attention_notification(settings, len(pr_numbers))
        )
        if sent:
            logger.info("Successfully notified the Slack room about PRs")
        else:
            logger.info("Failed to notify the Slack room about PRs")
        return sent

    def notify_regression(self, issue: GitHubIssue, settings: TriageSettings) -> bool:
        """Tell the channel about a newly spotted regression."""
        url = issue.html_url or f"{settings.repository_url}/issues/{issue.number}"
        sent = self.post_message(messages.regression_notification(url))
        if sent:
            logger.info(f"Notified the Slack room about regression #{issue.number}")
        else:
            logger.info(
                f"Failed to notify the Slack room about regression #{issue.number}"
            )
        return sent
