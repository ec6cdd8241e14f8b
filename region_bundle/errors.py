"""
Error taxonomy for the aggregation engine, impact simulator and exporter.

Feed-level errors are raised by adapters and wrapped by the engine into a
single AggregationFailed. Simulator and export errors are plain input
validation errors: fix the input and call again.
"""
from __future__ import annotations

from typing import Optional


class EquityEngineError(Exception):
    """Base class for every error the core raises."""


class UnknownRegion(EquityEngineError):
    def __init__(self, region_id: str):
        self.region_id = region_id
        super().__init__(f"Unknown region: {region_id!r}")


class FeedUnavailable(EquityEngineError):
    """A single source feed could not serve the region."""

    def __init__(self, feed: str, region_id: str, reason: str):
        self.feed = feed
        self.region_id = region_id
        self.reason = reason
        super().__init__(f"{feed} feed unavailable for {region_id!r}: {reason}")


class FeedSchemaError(FeedUnavailable):
    """A feed answered, but its payload broke the per-feed schema."""

    def __init__(self, feed: str, region_id: str, field_name: str, reason: str):
        self.field_name = field_name
        super().__init__(feed, region_id, f"invalid {field_name}: {reason}")


class AggregationTimeout(EquityEngineError):
    def __init__(self, region_id: str, timeout: float):
        self.region_id = region_id
        self.timeout = timeout
        super().__init__(f"Assembly of {region_id!r} exceeded {timeout:g}s")


class AggregationFailed(EquityEngineError):
    """Assembly failed as a whole; `cause` is the first feed failure."""

    def __init__(self, region_id: str, cause: Optional[BaseException]):
        self.region_id = region_id
        self.cause = cause
        super().__init__(f"Assembly of {region_id!r} failed: {cause}")


class InvalidScenario(EquityEngineError):
    pass


class UnknownSector(EquityEngineError):
    def __init__(self, sector_id: str):
        self.sector_id = sector_id
        super().__init__(f"Unknown sector: {sector_id!r}")


class EmptyBundle(EquityEngineError):
    def __init__(self):
        super().__init__("No region data loaded; nothing to export")
