"""
Region Catalog: the geographies a user can select.

Static, insertion-ordered registry. Each region lists the sub-areas
(ZIP codes / neighborhoods) that hotspot records are allowed to reference.
"""
from __future__ import annotations

from typing import Optional

from region_bundle.schema import Region

DEFAULT_REGION_ID = "memphis"


# ─── Region Registry ─────────────────────────────────────────────────────────

REGION_REGISTRY: tuple[Region, ...] = (
    Region(
        id="memphis", name="Memphis, TN", state="Tennessee",
        subareas=("38106", "38109", "38126", "38127", "38128", "Orange Mound", "Frayser"),
    ),
    Region(
        id="atlanta", name="Atlanta, GA", state="Georgia",
        subareas=("30310", "30314", "30315", "30318", "West End", "Vine City"),
    ),
    Region(
        id="birmingham", name="Birmingham, AL", state="Alabama",
        subareas=("35204", "35207", "35211", "35212", "Ensley", "North Birmingham"),
    ),
    Region(
        id="jackson", name="Jackson, MS", state="Mississippi",
        subareas=("39203", "39204", "39209", "39213", "Georgetown", "Virden Addition"),
    ),
    Region(
        id="new-orleans", name="New Orleans, LA", state="Louisiana",
        subareas=("70113", "70117", "70119", "70126", "Lower Ninth Ward", "Central City"),
    ),
)

_BY_ID: dict[str, Region] = {r.id: r for r in REGION_REGISTRY}


def list_regions() -> tuple[Region, ...]:
    """All selectable regions, in registration order."""
    return REGION_REGISTRY


def get_region(region_id: str) -> Optional[Region]:
    """Look up a region by id."""
    return _BY_ID.get(region_id)


def is_known_region(region_id: str) -> bool:
    return region_id in _BY_ID
