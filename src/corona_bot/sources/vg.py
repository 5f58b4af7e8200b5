"""
VG corona statistics client.

Fetches the Norwegian region sheet from VG's public API and normalizes it
into a StatsSnapshot. Falls back to the last good reading on any failure.
"""

import logging
from typing import Optional

import requests

from corona_bot.config import get_settings
from corona_bot.models import StatsPayload, StatsSnapshot

logger = logging.getLogger(__name__)


class VgStatsFetcher:
    """
    Statistics client with an in-memory fallback cache.

    The cache starts out as an all-zero snapshot and is only replaced by
    complete readings, so a failed fetch never corrupts it.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the fetcher.

        Args:
            url: Statistics endpoint, defaults to the configured STATS_URL
            timeout: Request timeout in seconds
            session: Optional requests session to reuse
        """
        if not (url and timeout):
            settings = get_settings()
            url = url or settings.stats_url
            timeout = timeout or settings.request_timeout

        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()
        self.cached = StatsSnapshot()

    def fetch(self) -> StatsSnapshot:
        """
        Fetch the latest statistics.

        Returns:
            StatsSnapshot: Fresh reading, or the cached one if the fetch failed
        """
        try:
            snapshot = self._load()
        except requests.exceptions.RequestException as e:
            logger.warning(f"Error loading VG data, using cache: {e}")
            return self.cached
        except ValueError as e:  # includes pydantic's ValidationError
            logger.warning(f"Malformed VG data, using cache: {e}")
            return self.cached

        if not snapshot.is_complete:
            logger.warning(f"No data received, using cache: {snapshot}")
            return self.cached

        self.cached = snapshot
        return snapshot

    def _load(self) -> StatsSnapshot:
        response = self.session.get(self.url, timeout=self.timeout)
        response.raise_for_status()
        return StatsPayload.model_validate(response.json()).to_snapshot()
