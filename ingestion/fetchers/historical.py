"""
Historical feed: annual series backing the indicator trend badges.

Every series covers the same declared period range. A year with no
published figure is sent as an explicit null, never dropped.
"""
from __future__ import annotations

from typing import Optional

from config.region_seeds import historical_payload
from ingestion.fetchers.base import StaticFeedAdapter


class HistoricalFeed(StaticFeedAdapter):

    feed_kind = "historical"

    def build_payload(self, region_id: str) -> Optional[dict]:
        return historical_payload(region_id)
