"""
Base feed adapter interface for all regional data sources.
"""
from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional

from config.regions import is_known_region
from config.region_seeds import SEED_AS_OF, SEED_SOURCES
from region_bundle.errors import FeedUnavailable

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_as_of(value: Optional[str]) -> Optional[datetime]:
    """ISO date/datetime string → aware datetime (UTC assumed when naive)."""
    if not value:
        return None
    return as_utc(datetime.fromisoformat(value))


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


@dataclass(frozen=True)
class RawFeedRecord:
    """One feed's untyped answer for one region."""
    feed: str
    region_id: str
    payload: dict
    source: str
    source_url: str
    fetched_at: datetime
    data_as_of: Optional[datetime] = None


class BaseFeedAdapter(ABC):
    """Abstract base for all source feed adapters. Stateless between calls."""

    feed_kind: str = "base"

    def __init__(self, clock: Optional[Clock] = None):
        self._clock = clock or utc_now

    @abstractmethod
    async def fetch(self, region_id: str) -> RawFeedRecord:
        """
        Fetch this feed's payload for a region.

        Raises FeedUnavailable when the region is unknown to the source or
        the source cannot be reached. An empty payload is not an error.
        """
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """Verify the source is reachable and responding."""
        ...


class StaticFeedAdapter(BaseFeedAdapter):
    """
    Serves synthetic seed payloads from config.region_seeds.

    `latency` (seconds) simulates the round trip of a real feed so callers
    exercise the same suspension point a network adapter would.
    """

    def __init__(self, clock: Optional[Clock] = None, latency: float = 0.0):
        super().__init__(clock)
        self._latency = latency

    @abstractmethod
    def build_payload(self, region_id: str) -> Optional[dict]:
        ...

    async def fetch(self, region_id: str) -> RawFeedRecord:
        if self._latency:
            await asyncio.sleep(self._latency)

        if not is_known_region(region_id):
            raise FeedUnavailable(self.feed_kind, region_id, "region not covered by seed data")
        payload = self.build_payload(region_id)
        if payload is None:
            raise FeedUnavailable(self.feed_kind, region_id, "no seed profile for region")

        source, source_url = SEED_SOURCES.get(self.feed_kind, ("seed", ""))
        as_of = SEED_AS_OF.get(self.feed_kind)
        logger.debug("%s seed feed: %s served", self.feed_kind, region_id)
        return RawFeedRecord(
            feed=self.feed_kind,
            region_id=region_id,
            payload=payload,
            source=source,
            source_url=source_url,
            fetched_at=self._clock(),
            data_as_of=parse_as_of(as_of),
        )

    async def health_check(self) -> bool:
        return True

