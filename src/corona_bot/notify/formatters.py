"""
Message formatters for Slack notifications.

Formats statistics snapshots into the short Norwegian status line posted
to the channel.
"""

from corona_bot.models import StatsSnapshot


class MessageFormatter:
    """
    Formats notification content for Slack messages.

    Uses Slack mrkdwn (`*bold*`) for the headline numbers.
    """

    TEMPLATE = (
        "*{infected}* bekreftet smittet "
        "({per_100k} per 100k, {new_today} nye i dag, {new_yesterday} i går), "
        "og *{dead}* døde"
    )

    @staticmethod
    def _format_rate(value: float) -> str:
        """Round to one decimal place for display."""
        return f"{value:.1f}"

    @classmethod
    def format_stats(cls, stats: StatsSnapshot) -> str:
        """
        Format a snapshot for a Slack notification.

        Args:
            stats: Snapshot to format, population must be non-zero

        Returns:
            str: Formatted message string
        """
        return cls.TEMPLATE.format(
            infected=stats.infected,
            per_100k=cls._format_rate(stats.per_100k),
            new_today=stats.new_today,
            new_yesterday=stats.new_yesterday,
            dead=stats.dead,
        )
