"""
Regional Economic Equity Engine — Main Entry Point

Command-line front end over the aggregation engine, impact simulator and
CSV exporter.

Usage:
    # List selectable regions
    python main.py --mode regions

    # Regional pulse: indicators, gaps, sectors, feed freshness
    python main.py --mode dashboard --region memphis

    # What-if: invest $250k in green construction
    python main.py --mode simulate --region memphis --sector green-construction --amount 250000

    # Rank every sector for the same investment
    python main.py --mode compare --region atlanta --amount 1000000

    # Download the bundle as CSV
    python main.py --mode export --region memphis --output-dir ./exports

Set EQUITY_FEED_BASE_URL (or pass --feed-url) to read live feeds instead of
the bundled seed data.
"""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from config.regions import DEFAULT_REGION_ID
from config.settings import FEED_BASE_URL, FEED_TIMEOUT
from ingestion.aggregation import RegionAggregator, build_default_adapters
from models.impact_simulator import compare_sectors
from production.data_service import EconomicDataService
from region_bundle.errors import EquityEngineError
from region_bundle.schema import RegionDataBundle

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
)
logger = logging.getLogger("main")


def print_regions(service: EconomicDataService) -> None:
    logger.info("Available regions:")
    for region in service.get_available_regions():
        marker = "*" if region.id == DEFAULT_REGION_ID else " "
        logger.info("  %s %-12s %-18s %s", marker, region.id, region.name, region.state)


def print_dashboard(bundle: RegionDataBundle) -> None:
    """Print the regional pulse for a bundle."""
    logger.info("\n" + "=" * 70)
    logger.info("DASHBOARD: %s (%s)", bundle.context.name, bundle.context.state)
    logger.info("=" * 70)

    logger.info("\n  Indicators:")
    for ind in bundle.indicators:
        logger.info("    %-32s %12s  [%s] %s", ind.label, ind.value, ind.trend, ind.trend_label)

    if bundle.labor_stats is not None:
        labor = bundle.labor_stats
        logger.info("\n  Labor market: %d employed, %.1f%% unemployed, median wage $%.0f",
                    labor.total_employed, labor.unemployment_rate, labor.median_wage)
        for s in labor.slices:
            logger.info("    %-10s %-12s %5.1f%% of workforce, %4.1f%% unemployed",
                        s.category, s.label, s.share_pct, s.unemployment_rate)

    logger.info("\n  Hotspots:")
    for h in bundle.hotspots:
        logger.info("    %-18s %-18s %6.1f  %s", h.location, h.metric, h.value, h.severity.upper())

    logger.info("\n  Equity gaps:")
    for gap in list(bundle.gaps) + list(bundle.capital_metrics):
        symbol = "÷" if gap.method == "ratio" else "−"
        logger.info("    %-38s %s %s %s = %g", gap.metric, gap.group_a, symbol, gap.group_b, gap.gap)

    logger.info("\n  Sectors:")
    for sector in bundle.sectors:
        logger.info("    %-24s %.2fx  (%s)", sector.id, sector.multiplier, sector.category)

    meta = bundle.source_metadata
    logger.info("\n  Last updated: %s (oldest feed: %s)", bundle.last_updated.isoformat(), meta.oldest_fetch.isoformat())
    if meta.stale_feeds:
        logger.warning("  Stale feeds: %s", ", ".join(meta.stale_feeds))


async def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Regional Economic Equity Engine")
    parser.add_argument(
        "--mode",
        choices=["regions", "dashboard", "simulate", "compare", "export"],
        default="dashboard",
        help="Execution mode",
    )
    parser.add_argument("--region", type=str, default=DEFAULT_REGION_ID, help="Region id")
    parser.add_argument("--sector", type=str, default="green-construction", help="Sector id for simulate mode")
    parser.add_argument("--amount", type=float, default=1_000_000.0, help="Investment amount in dollars")
    parser.add_argument("--output-dir", type=Path, default=None, help="Directory for CSV export")
    parser.add_argument("--feed-url", type=str, default=FEED_BASE_URL, help="Base URL of live feeds")
    parser.add_argument("--timeout", type=float, default=None, help="Assembly deadline in seconds")
    args = parser.parse_args()

    adapters = build_default_adapters(base_url=args.feed_url, timeout=FEED_TIMEOUT)
    service = EconomicDataService(RegionAggregator(adapters))

    if args.mode == "regions":
        print_regions(service)
        return 0

    try:
        bundle = await service.fetch_region_data(args.region, timeout=args.timeout)

        if args.mode == "dashboard":
            print_dashboard(bundle)

        elif args.mode == "simulate":
            p = service.simulate_impact(bundle, args.sector, args.amount)
            logger.info("\n" + "=" * 70)
            logger.info("IMPACT: $%s into %s (%s)", f"{p.direct_dollars:,.0f}", p.sector_name, bundle.context.name)
            logger.info("=" * 70)
            logger.info("  Multiplier:          %.2fx", p.multiplier)
            logger.info("  Total activity:      $%s", f"{p.multiplied_dollars:,.0f}")
            logger.info("  Indirect activity:   $%s", f"{p.indirect_dollars:,.0f}")
            logger.info("  Estimated jobs:      %d (at $%s per job)", p.estimated_jobs, f"{p.cost_per_job:,.0f}")

        elif args.mode == "compare":
            logger.info("\nSector ranking for $%s in %s:", f"{args.amount:,.0f}", bundle.context.name)
            for rank, p in enumerate(compare_sectors(bundle.sectors, args.amount), start=1):
                logger.info("  %d. %-24s $%14s  %5d jobs", rank, p.sector_id,
                            f"{p.multiplied_dollars:,.0f}", p.estimated_jobs)

        elif args.mode == "export":
            path = service.export_region_data_as_csv(bundle, args.output_dir)
            logger.info("CSV written: %s", path)

    except EquityEngineError as exc:
        logger.error("Failed to load regional data: %s", exc)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
