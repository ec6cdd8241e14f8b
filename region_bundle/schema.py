"""
Region data bundle schema.

Typed, immutable entities assembled by the aggregation engine, plus the
small pure derivation rules (trend direction, equity gap, value formatting)
that turn raw feed figures into the fields the dashboard reads.
"""
from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import Literal, Mapping, Optional

from config.settings import GAP_PRECISION

Trend = Literal["up", "down", "flat"]
SectorCategory = Literal["standard", "green"]
GapMethod = Literal["difference", "ratio"]
GapDirection = Literal["a_higher", "b_higher", "parity"]
Severity = Literal["low", "moderate", "high", "critical"]
CapitalMarket = Literal["loans", "equity", "credit"]
Unit = Literal["percent", "currency", "count", "ratio"]

SECTOR_CATEGORIES = ("standard", "green")
GAP_METHODS = ("difference", "ratio")
SEVERITIES = ("low", "moderate", "high", "critical")
CAPITAL_MARKETS = ("loans", "equity", "credit")
UNITS = ("percent", "currency", "count", "ratio")

# Shares within one labor category may overshoot 100 by this much (rounding)
SHARE_TOLERANCE_PCT = 0.5


# ─── Entities ────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Region:
    id: str
    name: str
    state: str
    subareas: tuple[str, ...] = ()


@dataclass(frozen=True)
class Indicator:
    id: str
    label: str
    value: str            # formatted for display, e.g. "12.4%"
    raw_value: float
    unit: Unit
    period: str
    series_id: str
    trend: Trend
    trend_label: str
    context: str


@dataclass(frozen=True)
class LaborSlice:
    """One demographic/geographic slice of the regional labor market."""
    category: str         # e.g. "race", "geography"
    label: str
    share_pct: float      # share of the labor force, 0-100
    unemployment_rate: float
    median_wage: float


@dataclass(frozen=True)
class LaborStats:
    total_employed: int
    unemployment_rate: float
    labor_force_participation: float
    median_wage: float
    slices: tuple[LaborSlice, ...] = ()

    def slices_for(self, category: str) -> tuple[LaborSlice, ...]:
        return tuple(s for s in self.slices if s.category == category)


@dataclass(frozen=True)
class Hotspot:
    location: str
    metric: str
    value: float
    severity: Severity


@dataclass(frozen=True)
class Sector:
    id: str
    name: str
    multiplier: float     # dollars circulated per dollar invested
    category: SectorCategory
    description: str = ""


@dataclass(frozen=True)
class EquityGap:
    metric: str
    group_a: str
    group_a_value: float
    group_b: str
    group_b_value: float
    method: GapMethod
    gap: float
    direction: GapDirection
    context: str = ""


@dataclass(frozen=True)
class CapitalMetric(EquityGap):
    """An equity gap scoped to capital markets (loans, equity, credit)."""
    market: CapitalMarket = "loans"


@dataclass(frozen=True)
class TrendPoint:
    period: str
    value: Optional[float]   # None marks a period with no published figure


@dataclass(frozen=True)
class HistoricalTrend:
    id: str
    label: str
    unit: Unit
    points: tuple[TrendPoint, ...] = ()

    def value_before(self, period: str) -> tuple[Optional[str], Optional[float]]:
        """Return (period, value) of the point immediately preceding `period`."""
        for i, point in enumerate(self.points):
            if point.period == period:
                if i == 0:
                    return None, None
                prior = self.points[i - 1]
                return prior.period, prior.value
        return None, None


@dataclass(frozen=True)
class FeedProvenance:
    feed: str
    source: str
    source_url: str
    fetched_at: datetime
    data_as_of: Optional[datetime]
    is_stale: bool


@dataclass(frozen=True)
class SourceMetadata:
    """Feed name → provenance. Display/trust signaling only."""
    feeds: Mapping[str, FeedProvenance]

    @property
    def newest_fetch(self) -> Optional[datetime]:
        return max((p.fetched_at for p in self.feeds.values()), default=None)

    @property
    def oldest_fetch(self) -> Optional[datetime]:
        return min((p.fetched_at for p in self.feeds.values()), default=None)

    @property
    def stale_feeds(self) -> tuple[str, ...]:
        return tuple(name for name, p in self.feeds.items() if p.is_stale)


@dataclass(frozen=True)
class RegionDataBundle:
    """
    Everything the dashboard shows for one region.

    Built only by RegionAggregator. Never mutated: a new region selection
    produces a new bundle.
    """
    context: Region
    indicators: tuple[Indicator, ...]
    labor_stats: Optional[LaborStats]   # None when the labor feed had nothing
    hotspots: tuple[Hotspot, ...]
    sectors: tuple[Sector, ...]
    gaps: tuple[EquityGap, ...]
    historical_trends: tuple[HistoricalTrend, ...]
    capital_metrics: tuple[CapitalMetric, ...]
    source_metadata: SourceMetadata
    last_updated: datetime

    def get_sector(self, sector_id: str) -> Optional[Sector]:
        for sector in self.sectors:
            if sector.id == sector_id:
                return sector
        return None


def freeze_mapping(data: Mapping) -> Mapping:
    return MappingProxyType(dict(data))


# ─── Derivation rules ────────────────────────────────────────────────────────

def compute_gap(group_a_value: float, group_b_value: float, method: str) -> float:
    """
    Gap between two group values, derivable from them alone.

    difference → a - b, ratio → a / b. Rounded to GAP_PRECISION places so a
    consumer can recompute it as a consistency check.
    """
    if method == "ratio":
        if group_b_value == 0:
            raise ZeroDivisionError("ratio gap needs a non-zero group_b_value")
        return round(group_a_value / group_b_value, GAP_PRECISION)
    return round(group_a_value - group_b_value, GAP_PRECISION)


def gap_direction(group_a_value: float, group_b_value: float) -> GapDirection:
    if math.isclose(group_a_value, group_b_value, rel_tol=1e-9, abs_tol=1e-12):
        return "parity"
    return "a_higher" if group_a_value > group_b_value else "b_higher"


def derive_trend(
    current: float,
    prior: Optional[float],
    prior_period: Optional[str],
    flat_threshold: float,
) -> tuple[Trend, str]:
    """Map current vs prior-period value → (trend, trend_label)."""
    if prior is None or prior_period is None:
        return "flat", "No prior data"

    if prior == 0:
        if current == 0:
            return "flat", f"No change vs {prior_period}"
        if current > 0:
            return "up", f"Up from zero vs {prior_period}"
        return "down", f"Down from zero vs {prior_period}"

    relative = (current - prior) / abs(prior)
    if abs(relative) < flat_threshold:
        return "flat", f"No change vs {prior_period}"
    trend: Trend = "up" if relative > 0 else "down"
    return trend, f"{relative * 100:+.1f}% vs {prior_period}"


def format_value(raw_value: float, unit: str) -> str:
    """Display string for an indicator value."""
    if unit == "percent":
        return f"{raw_value:.1f}%"
    if unit == "currency":
        return f"${raw_value:,.0f}"
    if unit == "ratio":
        return f"{raw_value:.2f}x"
    return f"{raw_value:,.0f}"


# ─── Periods ─────────────────────────────────────────────────────────────────

_ANNUAL_RE = re.compile(r"(\d{4})")
_QUARTER_RE = re.compile(r"(\d{4})-Q([1-4])")


def parse_period(period: str) -> tuple[str, int]:
    """
    "2021" → ("annual", 2021); "2021-Q3" → ("quarterly", 2021 * 4 + 2).

    The integer is an ordinal: consecutive periods differ by exactly one.
    """
    m = _ANNUAL_RE.fullmatch(period)
    if m:
        return "annual", int(m.group(1))
    m = _QUARTER_RE.fullmatch(period)
    if m:
        return "quarterly", int(m.group(1)) * 4 + int(m.group(2)) - 1
    raise ValueError(f"unrecognised period {period!r}")
