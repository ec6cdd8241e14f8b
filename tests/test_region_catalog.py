from __future__ import annotations

import asyncio

import pytest

from config.regions import DEFAULT_REGION_ID, get_region, is_known_region, list_regions
from feed_doubles import FIXED_NOW, fixed_clock
from ingestion.fetchers.demographic import DemographicFeed
from ingestion.fetchers.historical import HistoricalFeed
from ingestion.fetchers.labor import LaborFeed
from ingestion.fetchers.sectors import SectorFeed
from ingestion.fetchers.wealth import WealthFeed
from region_bundle.errors import FeedUnavailable


def test_list_regions_is_stable():
    assert list_regions() == list_regions()
    assert [r.id for r in list_regions()] == ["memphis", "atlanta", "birmingham", "jackson", "new-orleans"]


def test_region_ids_unique():
    ids = [r.id for r in list_regions()]
    assert len(ids) == len(set(ids))


def test_default_region_is_registered():
    assert is_known_region(DEFAULT_REGION_ID)


def test_get_region():
    memphis = get_region("memphis")
    assert memphis.name == "Memphis, TN"
    assert memphis.state == "Tennessee"
    assert "38106" in memphis.subareas
    assert get_region("gotham") is None


# ── Seed feeds ────────────────────────────────────────────────────────────────

SEED_FEEDS = [DemographicFeed, LaborFeed, WealthFeed, SectorFeed, HistoricalFeed]


@pytest.mark.parametrize("feed_cls", SEED_FEEDS)
def test_seed_feed_serves_every_catalog_region(feed_cls):
    feed = feed_cls(clock=fixed_clock)
    for region in list_regions():
        record = asyncio.run(feed.fetch(region.id))
        assert record.feed == feed.feed_kind
        assert record.region_id == region.id
        assert record.fetched_at == FIXED_NOW
        assert isinstance(record.payload, dict)


@pytest.mark.parametrize("feed_cls", SEED_FEEDS)
def test_seed_feed_rejects_unknown_region(feed_cls):
    with pytest.raises(FeedUnavailable) as excinfo:
        asyncio.run(feed_cls(clock=fixed_clock).fetch("gotham"))
    assert excinfo.value.region_id == "gotham"


def test_seed_feed_health_check():
    assert asyncio.run(SectorFeed().health_check()) is True
