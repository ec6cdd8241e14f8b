"""
Investment impact simulator.

Projects the dollars and jobs generated by investing in one sector:

    multiplied_dollars = investment_amount × sector.multiplier
    estimated_jobs     = multiplied_dollars / cost_per_job

The multiplier comes from the region's sector feed. The cost-per-job ratio
is configuration (config.settings.ImpactConfig), looked up by sector id,
then by sector category, then a platform default.

Everything here is a pure function: no I/O and no state shared between
calls, so the same inputs always give the same projection.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Sequence

from config.settings import ImpactConfig
from region_bundle.errors import InvalidScenario, UnknownSector
from region_bundle.schema import Sector

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG = ImpactConfig()


@dataclass(frozen=True)
class InvestmentScenario:
    """What the user asks: put `investment_amount` dollars into `sector_id`."""
    sector_id: str
    investment_amount: float


@dataclass(frozen=True)
class ImpactProjection:
    sector_id: str
    sector_name: str
    multiplier: float
    direct_dollars: float
    multiplied_dollars: float
    indirect_dollars: float     # activity beyond the direct spend
    cost_per_job: float
    estimated_jobs: int


def _validate_amount(amount: float) -> None:
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        raise InvalidScenario(f"investment_amount must be a number, got {amount!r}")
    if not math.isfinite(amount) or amount <= 0:
        raise InvalidScenario(f"investment_amount must be > 0, got {amount!r}")


def _project(sector: Sector, amount: float, config: ImpactConfig) -> ImpactProjection:
    multiplied = amount * sector.multiplier
    cost_per_job = config.cost_per_job(sector.id, sector.category)
    return ImpactProjection(
        sector_id=sector.id,
        sector_name=sector.name,
        multiplier=sector.multiplier,
        direct_dollars=amount,
        multiplied_dollars=multiplied,
        indirect_dollars=multiplied - amount,
        cost_per_job=cost_per_job,
        estimated_jobs=round(multiplied / cost_per_job),
    )


def simulate(
    sectors: Sequence[Sector],
    scenario: InvestmentScenario,
    config: Optional[ImpactConfig] = None,
) -> ImpactProjection:
    """
    Project one investment scenario against a region's sector list.

    Raises:
        InvalidScenario: investment_amount is not a positive finite number
        UnknownSector:   scenario.sector_id is not in `sectors`
    """
    _validate_amount(scenario.investment_amount)
    sector = next((s for s in sectors if s.id == scenario.sector_id), None)
    if sector is None:
        raise UnknownSector(scenario.sector_id)

    projection = _project(sector, scenario.investment_amount, config or _DEFAULT_CONFIG)
    logger.debug(
        "Simulated %s: $%.0f → $%.0f, %d jobs",
        sector.id, projection.direct_dollars, projection.multiplied_dollars,
        projection.estimated_jobs,
    )
    return projection


def compare_sectors(
    sectors: Sequence[Sector],
    investment_amount: float,
    config: Optional[ImpactConfig] = None,
) -> list[ImpactProjection]:
    """Same amount across every sector, biggest multiplied impact first."""
    _validate_amount(investment_amount)
    cfg = config or _DEFAULT_CONFIG
    projections = [_project(s, investment_amount, cfg) for s in sectors]
    return sorted(projections, key=lambda p: (-p.multiplied_dollars, p.sector_id))
