"""
Slack Web API publisher.

Keeps a single bot message per channel up to date, either by editing it
in place or by replying in its thread.
https://api.slack.com/methods
"""

import logging
from typing import Optional

from slack_sdk import WebClient

from corona_bot.config import get_settings
from corona_bot.models import SpamStrategy

logger = logging.getLogger(__name__)


class SlackPublisher:
    """
    Slack client for publishing status updates.

    Looks at the most recent message in the channel: if the bot wrote it,
    the update is threaded under it or written over it depending on the
    spam strategy; otherwise a new top-level message is posted.
    """

    def __init__(
        self,
        client: Optional[WebClient] = None,
        channel: Optional[str] = None,
        bot_name: Optional[str] = None,
        spam_strategy: Optional[SpamStrategy] = None,
    ):
        """
        Initialize Slack publisher.

        Args:
            client: Slack WebClient, built from SLACK_KEY if not provided
            channel: Slack channel ID
            bot_name: Bot profile name used to recognize own messages
            spam_strategy: EDIT or THREAD
        """
        if client is None or not (channel and bot_name and spam_strategy):
            settings = get_settings()
            client = client or WebClient(token=settings.slack_key)
            channel = channel or settings.channel
            bot_name = bot_name or settings.bot_name
            spam_strategy = spam_strategy or settings.spam_strategy

        self.client = client
        self.channel = channel
        self.bot_name = bot_name
        self.spam_strategy = spam_strategy

    def find_own_message(self) -> Optional[str]:
        """
        Look up the most recent channel message.

        Returns:
            str: Timestamp of that message if this bot wrote it, else None
        """
        history = self.client.conversations_history(channel=self.channel, limit=1)
        messages = history.get("messages") or []
        if not messages:
            return None

        latest = messages[0]
        bot_profile = latest.get("bot_profile") or {}
        if bot_profile.get("name") == self.bot_name:
            return latest.get("ts")
        return None

    def publish(self, message: str) -> None:
        """
        Post, edit or thread the message depending on channel state.

        Args:
            message: The message text to publish

        Raises:
            SlackApiError: If any Slack call fails
        """
        thread_ts = self.find_own_message()

        if thread_ts is None:
            logger.info("Posting new message")
            self.client.chat_postMessage(channel=self.channel, text=message)
        elif self.spam_strategy == SpamStrategy.THREAD:
            logger.info(f"Adding thread message under {thread_ts}")
            self.client.chat_postMessage(
                channel=self.channel,
                text=message,
                thread_ts=thread_ts,
            )
        else:
            logger.info(f"Editing last message {thread_ts}")
            self.client.chat_update(channel=self.channel, ts=thread_ts, text=message)
