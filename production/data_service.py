"""
Economic data service: the surface the dashboard (or CLI) talks to.

    service = EconomicDataService()
    regions = service.get_available_regions()
    bundle = await service.fetch_region_data("memphis")
    projection = service.simulate_impact(bundle, "green-construction", 250_000)
    path = service.export_region_data_as_csv(bundle)

RegionSelection holds the one piece of view state, the bundle currently
shown. It is owned by the consumer, not the service: the core itself
keeps no "current region".
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from config.regions import list_regions
from config.settings import ImpactConfig
from ingestion.aggregation import RegionAggregator
from models.impact_simulator import ImpactProjection, InvestmentScenario, simulate
from production.csv_export import export_region_data_as_csv
from region_bundle.errors import EmptyBundle, EquityEngineError
from region_bundle.schema import Region, RegionDataBundle

logger = logging.getLogger(__name__)


class EconomicDataService:
    """Thin facade over the catalog, aggregator, simulator and exporter."""

    def __init__(
        self,
        aggregator: Optional[RegionAggregator] = None,
        impact_config: Optional[ImpactConfig] = None,
    ):
        self.aggregator = aggregator or RegionAggregator()
        self._impact_config = impact_config

    def get_available_regions(self) -> tuple[Region, ...]:
        return list_regions()

    async def fetch_region_data(self, region_id: str, timeout: Optional[float] = None) -> RegionDataBundle:
        return await self.aggregator.assemble(region_id, timeout=timeout)

    def simulate_impact(
        self,
        bundle: Optional[RegionDataBundle],
        sector_id: str,
        investment_amount: float,
    ) -> ImpactProjection:
        if bundle is None:
            raise EmptyBundle()
        scenario = InvestmentScenario(sector_id=sector_id, investment_amount=investment_amount)
        return simulate(bundle.sectors, scenario, self._impact_config)

    def export_region_data_as_csv(
        self,
        bundle: Optional[RegionDataBundle],
        output_dir: Optional[Path] = None,
    ) -> Path:
        return export_region_data_as_csv(bundle, output_dir)


class RegionSelection:
    """
    Last-request-wins holder for the bundle being shown.

    Every select() takes a new, strictly increasing token. When its assembly
    resolves, the bundle (or error) is applied only if no newer select()
    has started since. Superseded fetches run to completion; their results
    are dropped.
    """

    def __init__(self, service: EconomicDataService):
        self._service = service
        self._latest_token = 0
        self.current: Optional[RegionDataBundle] = None
        self.error: Optional[EquityEngineError] = None
        self.loading = False

    @property
    def latest_token(self) -> int:
        return self._latest_token

    async def select(self, region_id: str, timeout: Optional[float] = None) -> bool:
        """
        Load `region_id` and show it if still wanted.

        Returns True if this request's outcome was applied, False if a newer
        request superseded it.
        """
        self._latest_token += 1
        token = self._latest_token
        self.loading = True

        try:
            bundle = await self._service.fetch_region_data(region_id, timeout=timeout)
        except EquityEngineError as exc:
            if token != self._latest_token:
                logger.info("Discarding stale failure for %s (token %d < %d)", region_id, token, self._latest_token)
                return False
            self.current, self.error, self.loading = None, exc, False
            return True

        if token != self._latest_token:
            logger.info("Discarding stale bundle for %s (token %d < %d)", region_id, token, self._latest_token)
            return False
        self.current, self.error, self.loading = bundle, None, False
        return True
