"""
Aggregation engine — builds one immutable RegionDataBundle per request.

Dispatches every feed adapter concurrently, waits for all of them, and
only then parses and derives. Any feed failure fails the whole assembly:
a dashboard with silently blank sections is worse than an explicit error.

Concurrent requests for the same region share one in-flight assembly, so
feeds are fetched once. The entry is dropped when the assembly settles;
this is request de-duplication, not a cache.
"""
from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta
from typing import Iterable, Optional, Sequence

from config.regions import get_region
from config.settings import FEED_KINDS, FEED_TIMEOUT, AggregationConfig
from ingestion.feed_schema import (
    RawIndicator,
    parse_demographic,
    parse_historical,
    parse_labor,
    parse_sectors,
    parse_wealth,
)
from ingestion.fetchers.base import BaseFeedAdapter, Clock, RawFeedRecord, as_utc, utc_now
from ingestion.fetchers.demographic import DemographicFeed
from ingestion.fetchers.historical import HistoricalFeed
from ingestion.fetchers.http_feed import HttpFeedAdapter
from ingestion.fetchers.labor import LaborFeed
from ingestion.fetchers.sectors import SectorFeed
from ingestion.fetchers.wealth import WealthFeed
from region_bundle.errors import (
    AggregationFailed,
    AggregationTimeout,
    FeedUnavailable,
    UnknownRegion,
)
from region_bundle.schema import (
    FeedProvenance,
    HistoricalTrend,
    Indicator,
    Region,
    RegionDataBundle,
    SourceMetadata,
    derive_trend,
    format_value,
    freeze_mapping,
)

logger = logging.getLogger(__name__)


def build_default_adapters(
    base_url: str = "",
    clock: Optional[Clock] = None,
    latency: float = 0.0,
    timeout: float = FEED_TIMEOUT,
) -> list[BaseFeedAdapter]:
    """HTTP adapters when a base URL is configured, seed adapters otherwise."""
    if base_url:
        return [HttpFeedAdapter(kind, base_url, timeout=timeout, clock=clock) for kind in FEED_KINDS]
    return [
        DemographicFeed(clock=clock, latency=latency),
        LaborFeed(clock=clock, latency=latency),
        WealthFeed(clock=clock, latency=latency),
        SectorFeed(clock=clock, latency=latency),
        HistoricalFeed(clock=clock, latency=latency),
    ]


def derive_indicators(
    raw_indicators: Iterable[RawIndicator],
    trends: Iterable[HistoricalTrend],
    flat_threshold: float,
) -> tuple[Indicator, ...]:
    """Attach trend/trend_label by comparing each value with its series' prior period."""
    series_by_id = {t.id: t for t in trends}
    indicators: list[Indicator] = []
    for raw in raw_indicators:
        prior_period, prior_value = None, None
        series = series_by_id.get(raw.series_id)
        if series is not None:
            prior_period, prior_value = series.value_before(raw.period)
        trend, trend_label = derive_trend(raw.raw_value, prior_value, prior_period, flat_threshold)
        indicators.append(Indicator(
            id=raw.id,
            label=raw.label,
            value=format_value(raw.raw_value, raw.unit),
            raw_value=raw.raw_value,
            unit=raw.unit,
            period=raw.period,
            series_id=raw.series_id,
            trend=trend,
            trend_label=trend_label,
            context=raw.context,
        ))
    return tuple(indicators)


class RegionAggregator:
    """
    Assembles RegionDataBundles from the five source feeds.

    Usage:
        aggregator = RegionAggregator()
        bundle = await aggregator.assemble("memphis")

        # Caller-imposed deadline (expiry → AggregationFailed(AggregationTimeout))
        bundle = await aggregator.assemble("memphis", timeout=5.0)
    """

    def __init__(
        self,
        adapters: Optional[Sequence[BaseFeedAdapter]] = None,
        config: Optional[AggregationConfig] = None,
        clock: Optional[Clock] = None,
    ):
        self._clock = clock or utc_now
        self._config = config or AggregationConfig()
        if adapters is None:
            adapters = build_default_adapters(clock=self._clock)

        by_kind = {a.feed_kind: a for a in adapters}
        missing = [k for k in FEED_KINDS if k not in by_kind]
        unknown = [k for k in by_kind if k not in FEED_KINDS]
        if missing or unknown:
            raise ValueError(f"adapter set mismatch: missing={missing} unknown={unknown}")
        # Dispatch in FEED_KINDS order so "first failure" is deterministic
        self._adapters: dict[str, BaseFeedAdapter] = {k: by_kind[k] for k in FEED_KINDS}

        # region_id → in-flight assembly; only touched from the event loop thread
        self._in_flight: dict[str, asyncio.Task] = {}

    @property
    def in_flight(self) -> tuple[str, ...]:
        return tuple(self._in_flight)

    async def assemble(self, region_id: str, timeout: Optional[float] = None) -> RegionDataBundle:
        region = get_region(region_id)
        if region is None:
            raise UnknownRegion(region_id)

        task = self._in_flight.get(region_id)
        if task is None:
            task = asyncio.create_task(self._assemble(region))
            self._in_flight[region_id] = task
            task.add_done_callback(lambda t, rid=region_id: self._release(rid, t))
        else:
            logger.debug("Assembly %s: joining in-flight request", region_id)

        # shield: a caller giving up must not cancel the fetch other callers share
        try:
            if timeout is None:
                return await asyncio.shield(task)
            return await asyncio.wait_for(asyncio.shield(task), timeout)
        except asyncio.TimeoutError as exc:
            cause = AggregationTimeout(region_id, timeout)
            logger.error("Assembly %s: %s", region_id, cause)
            raise AggregationFailed(region_id, cause) from exc

    def _release(self, region_id: str, task: asyncio.Task) -> None:
        if self._in_flight.get(region_id) is task:
            del self._in_flight[region_id]
        # Mark the result retrieved even if every caller timed out
        if not task.cancelled():
            task.exception()

    async def _assemble(self, region: Region) -> RegionDataBundle:
        kinds = list(self._adapters)
        logger.info("Assembly %s: dispatching %d feeds", region.id, len(kinds))
        start_ts = self._clock()

        results = await asyncio.gather(
            *(self._adapters[k].fetch(region.id) for k in kinds),
            return_exceptions=True,
        )

        failures = [(k, r) for k, r in zip(kinds, results) if isinstance(r, BaseException)]
        for kind, exc in failures:
            logger.error("FAIL: %s / %s — %s", region.id, kind, exc)
        if failures:
            cause = failures[0][1]
            raise AggregationFailed(region.id, cause) from cause

        records: dict[str, RawFeedRecord] = dict(zip(kinds, results))
        try:
            bundle = self._build_bundle(region, records)
        except FeedUnavailable as exc:
            logger.error("FAIL: %s / %s — %s", region.id, exc.feed, exc)
            raise AggregationFailed(region.id, exc) from exc
        except Exception as exc:
            logger.error("FAIL: %s / bundle — %s", region.id, exc)
            raise AggregationFailed(region.id, exc) from exc

        elapsed = (self._clock() - start_ts).total_seconds()
        logger.info(
            "Assembly %s complete in %.2fs: %d indicators, %d sectors, %d gaps, %d trends",
            region.id, elapsed, len(bundle.indicators), len(bundle.sectors),
            len(bundle.gaps), len(bundle.historical_trends),
        )
        return bundle

    def _build_bundle(self, region: Region, records: dict[str, RawFeedRecord]) -> RegionDataBundle:
        raw_indicators, hotspots = parse_demographic(records["demographic"], region)
        labor_stats = parse_labor(records["labor"])
        gaps, capital_metrics = parse_wealth(records["wealth"])
        sectors = parse_sectors(records["sector"])
        trends = parse_historical(records["historical"])

        indicators = derive_indicators(raw_indicators, trends, self._config.trend_flat_threshold)
        metadata = self._source_metadata(records)

        return RegionDataBundle(
            context=region,
            indicators=indicators,
            labor_stats=labor_stats,
            hotspots=hotspots,
            sectors=sectors,
            gaps=gaps,
            historical_trends=trends,
            capital_metrics=capital_metrics,
            source_metadata=metadata,
            last_updated=metadata.newest_fetch,
        )

    def _source_metadata(self, records: dict[str, RawFeedRecord]) -> SourceMetadata:
        now = as_utc(self._clock())
        feeds: dict[str, FeedProvenance] = {}
        for kind, record in records.items():
            feeds[kind] = FeedProvenance(
                feed=kind,
                source=record.source,
                source_url=record.source_url,
                fetched_at=record.fetched_at,
                data_as_of=record.data_as_of,
                is_stale=self._is_stale(kind, record.data_as_of, now),
            )
        return SourceMetadata(feeds=freeze_mapping(feeds))

    def _is_stale(self, feed: str, data_as_of: Optional[datetime], now: datetime) -> bool:
        if data_as_of is None:
            return False
        return now - data_as_of > timedelta(days=self._config.staleness_for(feed))
