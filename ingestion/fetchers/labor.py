"""
Labor feed: employment, unemployment and wages by demographic slice.
"""
from __future__ import annotations

from typing import Optional

from config.region_seeds import labor_payload
from ingestion.fetchers.base import StaticFeedAdapter


class LaborFeed(StaticFeedAdapter):

    feed_kind = "labor"

    def build_payload(self, region_id: str) -> Optional[dict]:
        return labor_payload(region_id)
