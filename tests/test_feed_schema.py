from __future__ import annotations

import copy

import pytest

from config.regions import get_region
from config.region_seeds import (
    demographic_payload,
    historical_payload,
    labor_payload,
    sector_payload,
    wealth_payload,
)
from feed_doubles import FIXED_NOW
from ingestion.feed_schema import (
    parse_demographic,
    parse_historical,
    parse_labor,
    parse_sectors,
    parse_wealth,
)
from ingestion.fetchers.base import RawFeedRecord
from region_bundle.errors import FeedSchemaError, FeedUnavailable

MEMPHIS = get_region("memphis")


def _record(feed: str, payload: dict, region_id: str = "memphis") -> RawFeedRecord:
    return RawFeedRecord(
        feed=feed, region_id=region_id, payload=payload,
        source="test", source_url="", fetched_at=FIXED_NOW,
    )


# ── Demographic ───────────────────────────────────────────────────────────────

def test_parse_demographic_seed():
    indicators, hotspots = parse_demographic(_record("demographic", demographic_payload("memphis")), MEMPHIS)
    assert [i.id for i in indicators] == ["black-unemployment", "black-median-income", "black-owned-firms"]
    assert hotspots[0].location == "38106"
    assert hotspots[0].severity == "critical"


def test_hotspot_outside_region_rejected():
    payload = demographic_payload("memphis")
    payload["hotspots"][0]["location"] = "30314"   # an Atlanta ZIP
    with pytest.raises(FeedSchemaError) as excinfo:
        parse_demographic(_record("demographic", payload), MEMPHIS)
    assert excinfo.value.feed == "demographic"
    assert "hotspots[0].location" in excinfo.value.field_name


def test_indicator_unknown_unit_rejected():
    payload = demographic_payload("memphis")
    payload["indicators"][1]["unit"] = "furlongs"
    with pytest.raises(FeedSchemaError):
        parse_demographic(_record("demographic", payload), MEMPHIS)


def test_indicator_non_numeric_value_rejected():
    payload = demographic_payload("memphis")
    payload["indicators"][0]["raw_value"] = "9.4%"
    with pytest.raises(FeedSchemaError):
        parse_demographic(_record("demographic", payload), MEMPHIS)


def test_duplicate_indicator_ids_rejected():
    payload = demographic_payload("memphis")
    payload["indicators"].append(copy.deepcopy(payload["indicators"][0]))
    with pytest.raises(FeedSchemaError):
        parse_demographic(_record("demographic", payload), MEMPHIS)


def test_empty_demographic_payload_is_valid():
    assert parse_demographic(_record("demographic", {}), MEMPHIS) == ((), ())


# ── Labor ─────────────────────────────────────────────────────────────────────

def test_parse_labor_seed():
    stats = parse_labor(_record("labor", labor_payload("memphis")))
    assert stats.total_employed == 598_000
    assert {s.category for s in stats.slices} == {"race", "geography"}
    assert sum(s.share_pct for s in stats.slices_for("race")) == pytest.approx(100.0)


def test_labor_shares_within_rounding_tolerance_accepted():
    payload = labor_payload("memphis")
    payload["slices"][0]["share_pct"] += 0.4     # race shares now 100.4
    assert parse_labor(_record("labor", payload)) is not None


def test_labor_shares_over_100_rejected():
    payload = labor_payload("memphis")
    payload["slices"][0]["share_pct"] += 2.0     # race shares now 102
    with pytest.raises(FeedSchemaError):
        parse_labor(_record("labor", payload))


def test_labor_missing_total_rejected():
    payload = labor_payload("memphis")
    del payload["median_wage"]
    with pytest.raises(FeedSchemaError):
        parse_labor(_record("labor", payload))


# ── Wealth ────────────────────────────────────────────────────────────────────

def test_parse_wealth_computes_gaps():
    gaps, capital = parse_wealth(_record("wealth", wealth_payload("memphis")))
    wealth_gap = gaps[0]
    assert wealth_gap.gap == pytest.approx(184_500 - 18_900)
    assert wealth_gap.direction == "a_higher"
    assert [c.market for c in capital] == ["loans", "equity", "credit"]
    assert capital[1].method == "ratio"
    assert capital[1].gap == pytest.approx(round(35_000 / 107_000, 4))


def test_feed_cannot_supply_its_own_gap():
    payload = wealth_payload("memphis")
    payload["gaps"][0]["gap"] = 999_999
    gaps, _ = parse_wealth(_record("wealth", payload))
    assert gaps[0].gap == pytest.approx(184_500 - 18_900)


def test_ratio_gap_zero_denominator_rejected():
    payload = wealth_payload("memphis")
    payload["gaps"][2]["group_b_value"] = 0
    with pytest.raises(FeedSchemaError):
        parse_wealth(_record("wealth", payload))


def test_capital_metric_unknown_market_rejected():
    payload = wealth_payload("memphis")
    payload["capital_metrics"][0]["market"] = "crypto"
    with pytest.raises(FeedSchemaError):
        parse_wealth(_record("wealth", payload))


# ── Sectors ───────────────────────────────────────────────────────────────────

def test_parse_sectors_seed():
    sectors = parse_sectors(_record("sector", sector_payload("memphis")))
    green = next(s for s in sectors if s.id == "green-construction")
    assert green.multiplier == 1.85
    assert green.category == "green"


@pytest.mark.parametrize("multiplier", [0, -1.2, "1.5", None, 10**400])
def test_sector_bad_multiplier_rejected(multiplier):
    payload = sector_payload("memphis")
    payload["sectors"][0]["multiplier"] = multiplier
    with pytest.raises(FeedSchemaError):
        parse_sectors(_record("sector", payload))


def test_sector_bad_category_rejected():
    payload = sector_payload("memphis")
    payload["sectors"][0]["category"] = "blue"
    with pytest.raises(FeedSchemaError):
        parse_sectors(_record("sector", payload))


def test_sectors_not_a_list_rejected():
    with pytest.raises(FeedSchemaError):
        parse_sectors(_record("sector", {"sectors": {"id": "x"}}))


# ── Historical ────────────────────────────────────────────────────────────────

def test_parse_historical_keeps_explicit_nulls():
    trends = parse_historical(_record("historical", historical_payload("memphis")))
    firms = next(t for t in trends if t.id == "black_owned_firms")
    assert [p.period for p in firms.points] == ["2019", "2020", "2021", "2022", "2023"]
    assert firms.points[1].value is None


def test_trend_gap_in_periods_rejected():
    payload = historical_payload("memphis")
    del payload["trends"][0]["points"][2]      # 2019, 2020, 2022, 2023
    with pytest.raises(FeedSchemaError):
        parse_historical(_record("historical", payload))


def test_trend_out_of_order_rejected():
    payload = historical_payload("memphis")
    points = payload["trends"][0]["points"]
    points[0], points[1] = points[1], points[0]
    with pytest.raises(FeedSchemaError):
        parse_historical(_record("historical", payload))


def test_trend_missing_value_key_rejected():
    payload = historical_payload("memphis")
    del payload["trends"][0]["points"][1]["value"]
    with pytest.raises(FeedSchemaError):
        parse_historical(_record("historical", payload))


def test_trend_period_with_trailing_newline_rejected():
    payload = historical_payload("memphis")
    payload["trends"][0]["points"][0]["period"] = "2019\n"
    with pytest.raises(FeedSchemaError):
        parse_historical(_record("historical", payload))


def test_trend_mixed_granularity_rejected():
    payload = {"trends": [{
        "id": "x", "label": "X", "unit": "count",
        "points": [{"period": "2023", "value": 1}, {"period": "2024-Q1", "value": 2}],
    }]}
    with pytest.raises(FeedSchemaError):
        parse_historical(_record("historical", payload))


def test_quarterly_trend_accepted():
    payload = {"trends": [{
        "id": "x", "label": "X", "unit": "count",
        "points": [
            {"period": "2023-Q3", "value": 1},
            {"period": "2023-Q4", "value": None},
            {"period": "2024-Q1", "value": 3},
        ],
    }]}
    (trend,) = parse_historical(_record("historical", payload))
    assert len(trend.points) == 3


def test_schema_error_is_a_feed_failure():
    assert issubclass(FeedSchemaError, FeedUnavailable)


def test_number_too_large_for_float_rejected():
    payload = labor_payload("memphis")
    payload["median_wage"] = 10**400
    with pytest.raises(FeedSchemaError) as excinfo:
        parse_labor(_record("labor", payload))
    assert "out of range" in str(excinfo.value)
