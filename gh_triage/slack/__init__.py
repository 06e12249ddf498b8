"""Slack integration module for triage notifications."""

from .client import SlackClient
from .config import SlackConfig

__all__ = ["SlackClient", "SlackConfig"]
