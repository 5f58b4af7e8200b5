"""
Data models for the Corona Stats Slack Bot.

Defines Pydantic models for:
- StatsSnapshot (one normalized reading of the statistics)
- DecisionState (what was last posted, and when)
- The raw statistics API payload
"""

from datetime import datetime, timedelta
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SpamStrategy(str, Enum):
    """How repeated updates are presented in the channel."""
    EDIT = "EDIT"
    THREAD = "THREAD"


class StatsSnapshot(BaseModel):
    """
    A single point-in-time reading of the corona statistics.

    Attributes:
        population: Population the figures relate to
        infected: Cumulative confirmed cases
        new_today: Cases confirmed today
        new_yesterday: Cases confirmed yesterday
        dead: Cumulative deaths
    """
    model_config = ConfigDict(frozen=True)

    population: int = 0
    infected: int = 0
    new_today: int = 0
    new_yesterday: int = 0
    dead: int = 0

    @property
    def is_complete(self) -> bool:
        """A reading without population is treated as a failed fetch."""
        return self.population > 0

    @property
    def per_100k(self) -> float:
        """Confirmed cases per 100 000 inhabitants."""
        return 100_000 * self.infected / self.population


class DecisionState(BaseModel):
    """
    The last snapshot that triggered a notification and when it was sent.

    Lives for the lifetime of the process only.
    """
    last_snapshot: Optional[StatsSnapshot] = None
    last_notified_at: Optional[datetime] = None

    def elapsed_since_last(self, now: datetime) -> Optional[timedelta]:
        """Time since the last notification, or None if nothing was sent yet."""
        if self.last_notified_at is None:
            return None
        return now - self.last_notified_at

    def record(self, snapshot: StatsSnapshot, now: datetime) -> None:
        """Remember a snapshot as notified."""
        self.last_snapshot = snapshot
        self.last_notified_at = now


class CaseCounts(BaseModel):
    """Counts block of the API payload (`confirmed` or `dead`)."""
    model_config = ConfigDict(populate_by_name=True)

    total: int = 0
    new_today: int = Field(default=0, alias="newToday")
    new_yesterday: int = Field(default=0, alias="newYesterday")


class StatsMetadata(BaseModel):
    """The `metadata` section of the statistics document."""
    population: int = 0
    confirmed: CaseCounts
    dead: CaseCounts


class StatsPayload(BaseModel):
    """Top-level statistics document; everything but `metadata` is ignored."""
    metadata: StatsMetadata

    def to_snapshot(self) -> StatsSnapshot:
        meta = self.metadata
        return StatsSnapshot(
            population=meta.population,
            infected=meta.confirmed.total,
            new_today=meta.confirmed.new_today,
            new_yesterday=meta.confirmed.new_yesterday,
            dead=meta.dead.total,
        )
