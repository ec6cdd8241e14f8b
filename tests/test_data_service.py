from __future__ import annotations

import asyncio

import pytest

from feed_doubles import counting_adapters, fixed_clock, unreachable
from ingestion.aggregation import RegionAggregator
from production.data_service import EconomicDataService, RegionSelection
from region_bundle.errors import AggregationFailed, EmptyBundle, UnknownRegion, UnknownSector


def _service(**per_feed) -> EconomicDataService:
    adapters = counting_adapters(**per_feed)
    return EconomicDataService(RegionAggregator(list(adapters.values()), clock=fixed_clock))


def test_get_available_regions():
    regions = _service().get_available_regions()
    assert regions[0].id == "memphis"


def test_fetch_and_simulate():
    service = _service()
    bundle = asyncio.run(service.fetch_region_data("memphis"))
    projection = service.simulate_impact(bundle, "green-construction", 1000)
    assert projection.multiplied_dollars == pytest.approx(1850)


def test_simulate_needs_bundle_and_known_sector():
    service = _service()
    with pytest.raises(EmptyBundle):
        service.simulate_impact(None, "green-construction", 1000)
    bundle = asyncio.run(service.fetch_region_data("jackson"))
    with pytest.raises(UnknownSector):
        service.simulate_impact(bundle, "tech-services", 1000)   # not offered in Jackson


def test_export_through_service(tmp_path):
    service = _service()
    bundle = asyncio.run(service.fetch_region_data("atlanta"))
    path = service.export_region_data_as_csv(bundle, tmp_path)
    assert path.exists()


# ── Last-request-wins ─────────────────────────────────────────────────────────

@pytest.mark.parametrize("slow_region", ["memphis", "atlanta"])
def test_last_request_wins_regardless_of_completion_order(slow_region):
    service = _service(demographic={"delays": {slow_region: 0.03}})
    selection = RegionSelection(service)

    async def run():
        return await asyncio.gather(
            selection.select("memphis"),
            selection.select("atlanta"),
        )

    applied_memphis, applied_atlanta = asyncio.run(run())
    assert selection.current.context.id == "atlanta"
    assert applied_atlanta is True
    assert applied_memphis is False
    assert selection.latest_token == 2
    assert selection.loading is False


def test_stale_failure_does_not_clobber_newer_bundle():
    service = _service(wealth={
        "fail_with": unreachable("wealth", "memphis"),
        "fail_for": {"memphis"},
        "delays": {"memphis": 0.03},
    })
    selection = RegionSelection(service)

    async def run():
        return await asyncio.gather(
            selection.select("memphis"),
            selection.select("birmingham"),
        )

    applied = asyncio.run(run())
    assert applied == [False, True]
    assert selection.error is None
    assert selection.current.context.id == "birmingham"


def test_failure_is_an_explicit_error_state():
    selection = RegionSelection(_service())
    assert asyncio.run(selection.select("gotham")) is True
    assert selection.current is None
    assert isinstance(selection.error, UnknownRegion)
    assert selection.loading is False


def test_malformed_feed_number_is_an_explicit_error_state():
    huge = {"sectors": [{"id": "x", "name": "X", "multiplier": 10**400, "category": "green"}]}
    selection = RegionSelection(_service(sector={"payload_override": huge}))
    assert asyncio.run(selection.select("memphis")) is True
    assert selection.current is None
    assert isinstance(selection.error, AggregationFailed)
    assert selection.loading is False


def test_successful_select_clears_previous_error():
    selection = RegionSelection(_service())

    async def run():
        await selection.select("gotham")
        await selection.select("memphis")

    asyncio.run(run())
    assert selection.error is None
    assert selection.current.context.id == "memphis"
