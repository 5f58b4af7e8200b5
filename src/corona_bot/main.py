"""
Main orchestrator for the Corona Stats Slack Bot.

Runs the polling loop; each tick:
1. Fetches the latest statistics (falling back to the last good reading)
2. Decides whether the change is significant
3. Formats and publishes the update to Slack in the background
"""

import logging
import sys
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Callable, Optional

from pydantic import ValidationError

from corona_bot.config import Settings, get_settings, setup_logging
from corona_bot.evaluator import evaluate
from corona_bot.models import DecisionState
from corona_bot.notify import MessageFormatter, SlackPublisher
from corona_bot.sources import VgStatsFetcher

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StatsMonitor:
    """
    Main orchestrator for statistics monitoring.

    Owns the decision state and runs fetch, evaluate and publish on a
    fixed delay. Publishing is handed to a single background worker so a
    slow or failing Slack call never holds up the next tick; queued
    publishes run one at a time.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        fetcher: Optional[VgStatsFetcher] = None,
        publisher: Optional[SlackPublisher] = None,
        formatter: Optional[MessageFormatter] = None,
        clock: Optional[Callable[[], datetime]] = None,
        executor: Optional[ThreadPoolExecutor] = None,
    ):
        """Initialize the monitor with all components."""
        self.settings = settings or get_settings()
        self.fetcher = fetcher or VgStatsFetcher()
        self.publisher = publisher or SlackPublisher()
        self.formatter = formatter or MessageFormatter()
        self.clock = clock or _utcnow
        self.executor = executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="publish"
        )
        self.state = DecisionState()

    def tick(self) -> bool:
        """
        Run one fetch-evaluate-publish cycle.

        Returns:
            bool: True if an update was dispatched
        """
        logger.info("Looking for updates")
        stats = self.fetcher.fetch()
        if not stats.is_complete:
            logger.info("No data yet ...")
            return False

        now = self.clock()

        send, reason = evaluate(
            self.state.last_snapshot,
            stats,
            self.state.elapsed_since_last(now),
            new_limit=self.settings.new_limit,
            max_wait=self.settings.max_wait_time,
        )
        if not send:
            if reason == "no_change":
                logger.info("Nothing new ...")
            else:
                logger.info(f"Not interesting enough yet ... ({stats.infected} infected now)")
            return False

        message = self.formatter.format_stats(stats)
        self.state.record(stats, now)
        logger.info(f"New data ({reason}): {stats}")

        self._dispatch(message)
        return True

    def _dispatch(self, message: str) -> Future:
        """Submit a publish without waiting for it."""
        future = self.executor.submit(self.publisher.publish, message)
        future.add_done_callback(self._log_publish_result)
        return future

    @staticmethod
    def _log_publish_result(future: Future) -> None:
        error = future.exception()
        if error is not None:
            logger.error(
                f"Failed to publish update: {error}",
                exc_info=(type(error), error, error.__traceback__),
            )

    def run(self, stop_event: Optional[threading.Event] = None) -> None:
        """
        Tick on a fixed delay until `stop_event` is set.

        Args:
            stop_event: Optional event used to stop the loop
        """
        stop_event = stop_event or threading.Event()
        delay = self.settings.poll_interval.total_seconds()

        logger.info("=" * 50)
        logger.info(f"Starting Corona Stats Bot (every {delay:.0f}s)")
        logger.info("=" * 50)

        while not stop_event.is_set():
            try:
                self.tick()
            except Exception as e:
                logger.error(f"Tick failed with error: {e}", exc_info=True)
            stop_event.wait(delay)

    def shutdown(self) -> None:
        """Stop the publish worker, letting queued publishes finish."""
        self.executor.shutdown(wait=True)


def main() -> int:
    """
    Entry point for the Corona Stats Slack Bot.

    Returns:
        int: Exit code (0 on clean shutdown, 1 on configuration error)
    """
    try:
        # Validate configuration early
        settings = get_settings()
    except ValidationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        print(
            "Please check your environment variables: CHANNEL, BOT_NAME, SLACK_KEY.",
            file=sys.stderr,
        )
        return 1

    setup_logging(settings)
    logger.debug(f"Loaded configuration for channel {settings.channel}")

    monitor = StatsMonitor(settings=settings)
    try:
        monitor.run()
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    finally:
        monitor.shutdown()

    return 0


if __name__ == "__main__":
    sys.exit(main())
