from __future__ import annotations

import math

import pytest

from config.settings import ImpactConfig
from models.impact_simulator import InvestmentScenario, compare_sectors, simulate
from region_bundle.errors import InvalidScenario, UnknownSector
from region_bundle.schema import Sector

SECTORS = (
    Sector(id="green-construction", name="Green Construction", multiplier=1.85, category="green"),
    Sector(id="logistics", name="Logistics", multiplier=1.62, category="standard"),
    Sector(id="urban-farming", name="Urban Farming", multiplier=1.40, category="green"),
)

FLAT_CONFIG = ImpactConfig(by_sector={}, by_category={}, default=100_000.0)


def test_green_construction_multiplier():
    p = simulate(SECTORS, InvestmentScenario("green-construction", 1000))
    assert p.direct_dollars == 1000
    assert p.multiplied_dollars == pytest.approx(1850)
    assert p.indirect_dollars == pytest.approx(850)


def test_doubling_investment_doubles_output():
    single = simulate(SECTORS, InvestmentScenario("green-construction", 1000))
    double = simulate(SECTORS, InvestmentScenario("green-construction", 2000))
    assert double.multiplied_dollars == 2 * single.multiplied_dollars


def test_unknown_sector():
    with pytest.raises(UnknownSector):
        simulate(SECTORS, InvestmentScenario("nonexistent", 100))


@pytest.mark.parametrize("amount", [0, -500, math.nan, math.inf, "100", True])
def test_invalid_amount(amount):
    with pytest.raises(InvalidScenario):
        simulate(SECTORS, InvestmentScenario("green-construction", amount))


def test_invalid_amount_checked_before_sector():
    with pytest.raises(InvalidScenario):
        simulate(SECTORS, InvestmentScenario("nonexistent", 0))


def test_empty_sector_list():
    with pytest.raises(UnknownSector):
        simulate((), InvestmentScenario("green-construction", 100))


def test_estimated_jobs_uses_configured_cost_per_job():
    p = simulate(SECTORS, InvestmentScenario("green-construction", 1_000_000), FLAT_CONFIG)
    assert p.cost_per_job == 100_000.0
    assert p.estimated_jobs == round(1_850_000 / 100_000)


def test_cost_per_job_lookup_order():
    config = ImpactConfig(
        by_sector={"logistics": 50_000.0},
        by_category={"green": 80_000.0},
        default=120_000.0,
    )
    assert simulate(SECTORS, InvestmentScenario("logistics", 1), config).cost_per_job == 50_000.0
    assert simulate(SECTORS, InvestmentScenario("urban-farming", 1), config).cost_per_job == 80_000.0

    no_category = ImpactConfig(by_sector={}, by_category={}, default=120_000.0)
    assert simulate(SECTORS, InvestmentScenario("logistics", 1), no_category).cost_per_job == 120_000.0


def test_simulate_is_deterministic_and_independent():
    scenario = InvestmentScenario("logistics", 250_000)
    first = simulate(SECTORS, scenario)
    simulate(SECTORS, InvestmentScenario("green-construction", 9_999_999))
    second = simulate(SECTORS, scenario)
    assert first == second


def test_compare_sectors_ranked_by_impact():
    ranked = compare_sectors(SECTORS, 1000, FLAT_CONFIG)
    assert [p.sector_id for p in ranked] == ["green-construction", "logistics", "urban-farming"]


def test_compare_sectors_validates_amount():
    with pytest.raises(InvalidScenario):
        compare_sectors(SECTORS, 0)
