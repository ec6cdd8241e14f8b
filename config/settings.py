"""
Regional Economic Equity Engine — Configuration

Feed registry, derivation thresholds, cost-per-job table and storage paths.
Every numeric knob the aggregation engine and impact simulator read lives
here so it can be overridden per deployment without touching the logic.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
)
logger = logging.getLogger(__name__)


def _float_env(key: str, default: float) -> float:
    val = os.environ.get(key)
    if val is None or val == "":
        return default
    try:
        return float(val)
    except ValueError:
        logger.warning("Ignoring %s=%r: not a number, using %s", key, val, default)
        return default


# ─── Storage Paths ───────────────────────────────────────────────────────────

DEV_DATA_ROOT = Path(__file__).parent.parent / "data"
EXPORT_DIR = Path(os.environ.get("EQUITY_EXPORT_DIR") or DEV_DATA_ROOT / "exports")


# ─── Feeds ───────────────────────────────────────────────────────────────────

# Order matters: it is the dispatch order and the order failures are reported in
FEED_KINDS: tuple[str, ...] = ("demographic", "labor", "wealth", "sector", "historical")

# Network-backed feeds; static seed feeds are used when unset
FEED_BASE_URL = os.environ.get("EQUITY_FEED_BASE_URL", "")
FEED_TIMEOUT = _float_env("EQUITY_FEED_TIMEOUT", 15.0)

# How many days old a feed's data vintage can be before it is flagged stale
STALENESS_DAYS: dict[str, int] = {
    "demographic": 400,  # ACS 1-year estimates
    "labor": 45,         # BLS LAUS monthly
    "wealth": 400,       # SCF / HMDA annual
    "sector": 400,       # IMPLAN multipliers, annual
    "historical": 400,
    "default": 30,
}


# ─── Derivation ──────────────────────────────────────────────────────────────

# Relative change below this is reported as "flat" (0.001 = 0.1%)
TREND_FLAT_THRESHOLD = _float_env("EQUITY_TREND_FLAT_THRESHOLD", 0.001)

# Decimal places kept on computed equity gaps
GAP_PRECISION = 4


@dataclass(frozen=True)
class AggregationConfig:
    """Knobs injected into RegionAggregator."""
    trend_flat_threshold: float = TREND_FLAT_THRESHOLD
    staleness_days: Mapping[str, int] = field(default_factory=lambda: dict(STALENESS_DAYS))

    def staleness_for(self, feed: str) -> int:
        return self.staleness_days.get(feed, self.staleness_days.get("default", 30))


# ─── Impact Simulation ───────────────────────────────────────────────────────

# Dollars of total activity needed to support one job, by sector id.
# Source: IMPLAN employment/output ratios for Southeastern metros (rounded).
COST_PER_JOB_BY_SECTOR: dict[str, float] = {
    "green-construction": 92_000.0,
    "logistics": 105_000.0,
    "healthcare": 88_000.0,
    "advanced-manufacturing": 135_000.0,
    "food-systems": 70_000.0,
    "clean-energy": 120_000.0,
    "tech-services": 150_000.0,
}

# Fallback by sector category when a sector id has no entry above
COST_PER_JOB_BY_CATEGORY: dict[str, float] = {
    "standard": 110_000.0,
    "green": 100_000.0,
}

DEFAULT_COST_PER_JOB = 110_000.0


@dataclass(frozen=True)
class ImpactConfig:
    """Cost-per-job table injected into the impact simulator."""
    by_sector: Mapping[str, float] = field(default_factory=lambda: dict(COST_PER_JOB_BY_SECTOR))
    by_category: Mapping[str, float] = field(default_factory=lambda: dict(COST_PER_JOB_BY_CATEGORY))
    default: float = DEFAULT_COST_PER_JOB

    def cost_per_job(self, sector_id: str, category: str) -> float:
        if sector_id in self.by_sector:
            return self.by_sector[sector_id]
        return self.by_category.get(category, self.default)
