"""
Feed schema boundary.

Converts each feed's untyped payload into the typed entities of
region_bundle.schema. Nothing past this module handles raw dicts. A payload
that breaks its schema raises FeedSchemaError naming the feed and field, so
the engine can treat it like any other feed failure.

Missing list sections are treated as empty: zero sectors or zero hotspots
is valid data, not an error.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional

from ingestion.fetchers.base import RawFeedRecord
from region_bundle.errors import FeedSchemaError
from region_bundle.schema import (
    CAPITAL_MARKETS,
    GAP_METHODS,
    SECTOR_CATEGORIES,
    SEVERITIES,
    SHARE_TOLERANCE_PCT,
    UNITS,
    CapitalMetric,
    EquityGap,
    HistoricalTrend,
    Hotspot,
    LaborSlice,
    LaborStats,
    Region,
    Sector,
    TrendPoint,
    compute_gap,
    gap_direction,
    parse_period,
)


@dataclass(frozen=True)
class RawIndicator:
    """Indicator as the feed sends it, before trend derivation."""
    id: str
    label: str
    raw_value: float
    unit: str
    period: str
    series_id: str
    context: str


class _Reader:
    """Typed field access bound to one feed answer, for precise error messages."""

    def __init__(self, record: RawFeedRecord):
        self.feed = record.feed
        self.region_id = record.region_id

    def fail(self, field_name: str, reason: str) -> FeedSchemaError:
        return FeedSchemaError(self.feed, self.region_id, field_name, reason)

    def obj(self, value: Any, where: str) -> dict:
        if not isinstance(value, dict):
            raise self.fail(where, f"expected object, got {type(value).__name__}")
        return value

    def items(self, data: dict, key: str) -> list:
        value = data.get(key)
        if value is None:
            return []
        if not isinstance(value, list):
            raise self.fail(key, f"expected list, got {type(value).__name__}")
        return value

    def text(self, data: dict, key: str, where: str, default: Optional[str] = None) -> str:
        value = data.get(key, default)
        if not isinstance(value, str) or (default is None and not value):
            raise self.fail(f"{where}.{key}", "expected non-empty string")
        return value

    def number(self, data: dict, key: str, where: str) -> float:
        value = data.get(key)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise self.fail(f"{where}.{key}", f"expected number, got {value!r}")
        try:
            finite = math.isfinite(value)
        except OverflowError:
            raise self.fail(f"{where}.{key}", "out of range") from None
        if not finite:
            raise self.fail(f"{where}.{key}", "must be finite")
        return float(value)

    def optional_number(self, data: dict, key: str, where: str) -> Optional[float]:
        if key not in data:
            raise self.fail(f"{where}.{key}", "missing (use null for an unpublished period)")
        if data[key] is None:
            return None
        return self.number(data, key, where)

    def choice(self, data: dict, key: str, where: str, allowed: tuple[str, ...]) -> str:
        value = data.get(key)
        if value not in allowed:
            raise self.fail(f"{where}.{key}", f"{value!r} not in {allowed}")
        return value

    def unique(self, ids: list[str], where: str) -> None:
        seen: set[str] = set()
        for item_id in ids:
            if item_id in seen:
                raise self.fail(where, f"duplicate id {item_id!r}")
            seen.add(item_id)


# ─── Demographic ─────────────────────────────────────────────────────────────

def parse_demographic(
    record: RawFeedRecord, region: Region
) -> tuple[tuple[RawIndicator, ...], tuple[Hotspot, ...]]:
    r = _Reader(record)
    data = r.obj(record.payload, "payload")

    indicators: list[RawIndicator] = []
    for i, item in enumerate(r.items(data, "indicators")):
        where = f"indicators[{i}]"
        item = r.obj(item, where)
        period = r.text(item, "period", where)
        try:
            parse_period(period)
        except ValueError as exc:
            raise r.fail(f"{where}.period", str(exc)) from exc
        indicators.append(RawIndicator(
            id=r.text(item, "id", where),
            label=r.text(item, "label", where),
            raw_value=r.number(item, "raw_value", where),
            unit=r.choice(item, "unit", where, UNITS),
            period=period,
            series_id=r.text(item, "series_id", where),
            context=r.text(item, "context", where, default=""),
        ))
    r.unique([ind.id for ind in indicators], "indicators")

    hotspots: list[Hotspot] = []
    for i, item in enumerate(r.items(data, "hotspots")):
        where = f"hotspots[{i}]"
        item = r.obj(item, where)
        location = r.text(item, "location", where)
        if location not in region.subareas:
            raise r.fail(f"{where}.location", f"{location!r} is not inside {region.name}")
        hotspots.append(Hotspot(
            location=location,
            metric=r.text(item, "metric", where),
            value=r.number(item, "value", where),
            severity=r.choice(item, "severity", where, SEVERITIES),
        ))

    return tuple(indicators), tuple(hotspots)


# ─── Labor ───────────────────────────────────────────────────────────────────

def parse_labor(record: RawFeedRecord) -> Optional[LaborStats]:
    """LaborStats, or None when the feed has nothing for the region."""
    r = _Reader(record)
    data = r.obj(record.payload, "payload")
    if not data:
        return None

    slices: list[LaborSlice] = []
    for i, item in enumerate(r.items(data, "slices")):
        where = f"slices[{i}]"
        item = r.obj(item, where)
        share = r.number(item, "share_pct", where)
        if share < 0:
            raise r.fail(f"{where}.share_pct", "must not be negative")
        slices.append(LaborSlice(
            category=r.text(item, "category", where),
            label=r.text(item, "label", where),
            share_pct=share,
            unemployment_rate=r.number(item, "unemployment_rate", where),
            median_wage=r.number(item, "median_wage", where),
        ))

    totals: dict[str, float] = {}
    for s in slices:
        totals[s.category] = totals.get(s.category, 0.0) + s.share_pct
    for category, total in totals.items():
        if total > 100.0 + SHARE_TOLERANCE_PCT:
            raise r.fail(f"slices[{category}]", f"shares sum to {total:.1f}% (> 100%)")

    total_employed = r.number(data, "total_employed", "payload")
    return LaborStats(
        total_employed=int(total_employed),
        unemployment_rate=r.number(data, "unemployment_rate", "payload"),
        labor_force_participation=r.number(data, "labor_force_participation", "payload"),
        median_wage=r.number(data, "median_wage", "payload"),
        slices=tuple(slices),
    )


# ─── Wealth & Capital ────────────────────────────────────────────────────────

def _gap_fields(r: _Reader, item: dict, where: str) -> dict:
    a_value = r.number(item, "group_a_value", where)
    b_value = r.number(item, "group_b_value", where)
    method = r.choice(item, "method", where, GAP_METHODS)
    if method == "ratio" and b_value == 0:
        raise r.fail(f"{where}.group_b_value", "ratio gap needs a non-zero denominator")
    return dict(
        metric=r.text(item, "metric", where),
        group_a=r.text(item, "group_a", where),
        group_a_value=a_value,
        group_b=r.text(item, "group_b", where),
        group_b_value=b_value,
        method=method,
        gap=compute_gap(a_value, b_value, method),
        direction=gap_direction(a_value, b_value),
        context=r.text(item, "context", where, default=""),
    )


def parse_wealth(
    record: RawFeedRecord,
) -> tuple[tuple[EquityGap, ...], tuple[CapitalMetric, ...]]:
    r = _Reader(record)
    data = r.obj(record.payload, "payload")

    gaps = tuple(
        EquityGap(**_gap_fields(r, r.obj(item, f"gaps[{i}]"), f"gaps[{i}]"))
        for i, item in enumerate(r.items(data, "gaps"))
    )

    capital: list[CapitalMetric] = []
    for i, item in enumerate(r.items(data, "capital_metrics")):
        where = f"capital_metrics[{i}]"
        item = r.obj(item, where)
        capital.append(CapitalMetric(
            **_gap_fields(r, item, where),
            market=r.choice(item, "market", where, CAPITAL_MARKETS),
        ))

    return gaps, tuple(capital)


# ─── Sectors ─────────────────────────────────────────────────────────────────

def parse_sectors(record: RawFeedRecord) -> tuple[Sector, ...]:
    r = _Reader(record)
    data = r.obj(record.payload, "payload")

    sectors: list[Sector] = []
    for i, item in enumerate(r.items(data, "sectors")):
        where = f"sectors[{i}]"
        item = r.obj(item, where)
        multiplier = r.number(item, "multiplier", where)
        if multiplier <= 0:
            raise r.fail(f"{where}.multiplier", f"must be > 0, got {multiplier}")
        sectors.append(Sector(
            id=r.text(item, "id", where),
            name=r.text(item, "name", where),
            multiplier=multiplier,
            category=r.choice(item, "category", where, SECTOR_CATEGORIES),
            description=r.text(item, "description", where, default=""),
        ))
    r.unique([s.id for s in sectors], "sectors")
    return tuple(sectors)


# ─── Historical ──────────────────────────────────────────────────────────────

def parse_historical(record: RawFeedRecord) -> tuple[HistoricalTrend, ...]:
    r = _Reader(record)
    data = r.obj(record.payload, "payload")

    trends: list[HistoricalTrend] = []
    for i, item in enumerate(r.items(data, "trends")):
        where = f"trends[{i}]"
        item = r.obj(item, where)

        points: list[TrendPoint] = []
        granularity: Optional[str] = None
        last_ordinal: Optional[int] = None
        for j, raw_point in enumerate(r.items(item, "points")):
            pwhere = f"{where}.points[{j}]"
            raw_point = r.obj(raw_point, pwhere)
            period = r.text(raw_point, "period", pwhere)
            try:
                kind, ordinal = parse_period(period)
            except ValueError as exc:
                raise r.fail(f"{pwhere}.period", str(exc)) from exc
            if granularity is not None and kind != granularity:
                raise r.fail(f"{pwhere}.period", f"mixes {kind} with {granularity} periods")
            if last_ordinal is not None and ordinal != last_ordinal + 1:
                raise r.fail(
                    f"{pwhere}.period",
                    f"{period} does not follow the previous period (gap or out of order)",
                )
            granularity, last_ordinal = kind, ordinal
            points.append(TrendPoint(period=period, value=r.optional_number(raw_point, "value", pwhere)))

        trends.append(HistoricalTrend(
            id=r.text(item, "id", where),
            label=r.text(item, "label", where),
            unit=r.choice(item, "unit", where, UNITS),
            points=tuple(points),
        ))
    r.unique([t.id for t in trends], "trends")
    return tuple(trends)
