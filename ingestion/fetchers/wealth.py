"""
Wealth & capital feed — raw group figures behind the equity gaps.

Returns two sections: household-level `gaps` (wealth, homeownership,
income) and `capital_metrics` (loan denial, startup capital, mortgage
denial). Only the raw group values are supplied; the aggregation engine
computes every gap from them.
"""
from __future__ import annotations

from typing import Optional

from config.region_seeds import wealth_payload
from ingestion.fetchers.base import StaticFeedAdapter


class WealthFeed(StaticFeedAdapter):

    feed_kind = "wealth"

    def build_payload(self, region_id: str) -> Optional[dict]:
        return wealth_payload(region_id)
