"""Statistics sources module."""

from corona_bot.sources.vg import VgStatsFetcher

__all__ = ["VgStatsFetcher"]
