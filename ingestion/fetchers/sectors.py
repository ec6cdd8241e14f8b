"""
Sector feed: investable sectors and their economic-impact multipliers.
"""
from __future__ import annotations

from typing import Optional

from config.region_seeds import sector_payload
from ingestion.fetchers.base import StaticFeedAdapter


class SectorFeed(StaticFeedAdapter):
    """Sectors with region-specific IMPLAN-style output multipliers."""

    feed_kind = "sector"

    def build_payload(self, region_id: str) -> Optional[dict]:
        return sector_payload(region_id)
