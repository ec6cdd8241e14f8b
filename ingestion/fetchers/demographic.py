"""
Demographic feed — headline indicators and neighborhood hotspots.

Seed payloads approximate Census ACS 1-year estimates for the region's
Black population, plus the sub-areas with the highest unemployment.
"""
from __future__ import annotations

from typing import Optional

from config.region_seeds import demographic_payload
from ingestion.fetchers.base import StaticFeedAdapter


class DemographicFeed(StaticFeedAdapter):
    """Indicators + hotspots for a region."""

    feed_kind = "demographic"

    def build_payload(self, region_id: str) -> Optional[dict]:
        return demographic_payload(region_id)
