"""Slack notification module for the Corona Stats Slack Bot."""

from corona_bot.notify.slack import SlackPublisher
from corona_bot.notify.formatters import MessageFormatter

__all__ = ["SlackPublisher", "MessageFormatter"]
