"""
CSV export of a region data bundle.

One row per Indicator, Sector, EquityGap, HistoricalTrend point and
CapitalMetric, in that order (the bundle's field order). Within a section,
rows keep bundle order. All sections share the EXPORT_COLUMNS layout;
cells a section does not use are left empty.

Numbers are written as plain decimals (no thousands separators, no
exponent) so the file re-imports losslessly, and the same bundle always
produces byte-identical output.

Columns:
    section        indicator | sector | gap | trend_point | capital_metric
    id             indicator/sector/series id; market for capital metrics
    label          display label, sector name or gap metric
    period         indicator or trend point period
    value          formatted indicator value
    raw_value      numeric indicator value or trend point value
    unit           indicator / series unit
    trend          up | down | flat
    trend_label    e.g. "+5.6% vs 2022"
    group_a        gap group A label
    group_a_value
    group_b        gap group B label
    group_b_value
    method         difference | ratio
    gap            computed gap
    direction      a_higher | b_higher | parity
    multiplier     sector multiplier
    category       sector category
    description    indicator context, sector description or gap context
"""
from __future__ import annotations

import logging
from decimal import Decimal
from pathlib import Path
from typing import Optional, Union

import polars as pl

from config.settings import EXPORT_DIR
from region_bundle.errors import EmptyBundle
from region_bundle.schema import EquityGap, RegionDataBundle

logger = logging.getLogger(__name__)

EXPORT_COLUMNS: tuple[str, ...] = (
    "section", "id", "label", "period", "value", "raw_value", "unit",
    "trend", "trend_label", "group_a", "group_a_value", "group_b",
    "group_b_value", "method", "gap", "direction", "multiplier",
    "category", "description",
)


def plain_decimal(value: Union[int, float, None]) -> str:
    """1850.0 → "1850", 0.00000015 → "0.00000015", None → ""."""
    if value is None:
        return ""
    if isinstance(value, int):
        return str(value)
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")


def _row(section: str, **cells: str) -> list[str]:
    cells["section"] = section
    return [cells.get(col, "") for col in EXPORT_COLUMNS]


def _gap_cells(gap: EquityGap) -> dict[str, str]:
    return dict(
        label=gap.metric,
        group_a=gap.group_a,
        group_a_value=plain_decimal(gap.group_a_value),
        group_b=gap.group_b,
        group_b_value=plain_decimal(gap.group_b_value),
        method=gap.method,
        gap=plain_decimal(gap.gap),
        direction=gap.direction,
        description=gap.context,
    )


def to_table(bundle: Optional[RegionDataBundle]) -> list[list[str]]:
    """Data rows (header excluded) for a bundle, in export order."""
    if bundle is None:
        raise EmptyBundle()

    rows: list[list[str]] = []

    for ind in bundle.indicators:
        rows.append(_row(
            "indicator",
            id=ind.id, label=ind.label, period=ind.period, value=ind.value,
            raw_value=plain_decimal(ind.raw_value), unit=ind.unit,
            trend=ind.trend, trend_label=ind.trend_label, description=ind.context,
        ))

    for sector in bundle.sectors:
        rows.append(_row(
            "sector",
            id=sector.id, label=sector.name, multiplier=plain_decimal(sector.multiplier),
            category=sector.category, description=sector.description,
        ))

    for gap in bundle.gaps:
        rows.append(_row("gap", **_gap_cells(gap)))

    for series in bundle.historical_trends:
        for point in series.points:
            rows.append(_row(
                "trend_point",
                id=series.id, label=series.label, period=point.period,
                raw_value=plain_decimal(point.value), unit=series.unit,
            ))

    for metric in bundle.capital_metrics:
        rows.append(_row("capital_metric", id=metric.market, **_gap_cells(metric)))

    return rows


def _frame(bundle: Optional[RegionDataBundle]) -> pl.DataFrame:
    rows = to_table(bundle)
    return pl.DataFrame(
        {col: [row[i] for row in rows] for i, col in enumerate(EXPORT_COLUMNS)},
        schema={col: pl.Utf8 for col in EXPORT_COLUMNS},
    )


def to_csv_text(bundle: Optional[RegionDataBundle]) -> str:
    """Header + data rows as CSV text."""
    return _frame(bundle).write_csv()


def export_filename(bundle: RegionDataBundle) -> str:
    return f"{bundle.context.id}_equity_data.csv"


def export_region_data_as_csv(
    bundle: Optional[RegionDataBundle],
    output_dir: Optional[Path] = None,
) -> Path:
    """Write the bundle's CSV to `output_dir` and return the file path."""
    df = _frame(bundle)
    out_dir = output_dir or EXPORT_DIR
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / export_filename(bundle)
    df.write_csv(path)
    logger.info("Exported %d rows for %s → %s", len(df), bundle.context.id, path)
    return path
