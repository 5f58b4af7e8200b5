"""
Significance evaluation for new statistics.

Decides whether a fresh snapshot is worth posting, compared to the last
snapshot that was posted.
"""

from datetime import timedelta
from typing import Optional, Tuple

from corona_bot.models import StatsSnapshot

DEFAULT_NEW_LIMIT = 50
DEFAULT_MAX_WAIT = timedelta(hours=4)


def evaluate(
    previous: Optional[StatsSnapshot],
    current: StatsSnapshot,
    elapsed: Optional[timedelta],
    new_limit: int = DEFAULT_NEW_LIMIT,
    max_wait: Optional[timedelta] = DEFAULT_MAX_WAIT,
) -> Tuple[bool, str]:
    """
    Decide whether `current` warrants a notification.

    Rules are applied in order: the first reading always notifies, an
    unchanged reading never does, and a small case delta without new deaths
    is held back until `max_wait` has passed since the last notification.

    Args:
        previous: Last notified snapshot, None if nothing was posted yet
        current: Freshly fetched snapshot
        elapsed: Time since the last notification, None if never notified
        new_limit: Minimum new cases needed when deaths are unchanged
        max_wait: Override window; None always suppresses small deltas

    Returns:
        Tuple of (should notify, reason)
    """
    if previous is None:
        return True, "first_reading"

    if current.infected == previous.infected and current.dead == previous.dead:
        return False, "no_change"

    if current.dead == previous.dead and current.infected - previous.infected < new_limit:
        if max_wait is not None and (elapsed is None or elapsed >= max_wait):
            return True, "max_wait_elapsed"
        return False, "below_threshold"

    return True, "significant_change"


def should_notify(
    previous: Optional[StatsSnapshot],
    current: StatsSnapshot,
    elapsed: Optional[timedelta],
    new_limit: int = DEFAULT_NEW_LIMIT,
    max_wait: Optional[timedelta] = DEFAULT_MAX_WAIT,
) -> bool:
    """Boolean shortcut for `evaluate`."""
    send, _ = evaluate(previous, current, elapsed, new_limit, max_wait)
    return send
