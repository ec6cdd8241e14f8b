"""
Region Seed Data — synthetic feed payloads for the static adapters.

These are the untyped dicts a real feed would return as JSON. They go
through ingestion.feed_schema exactly like network payloads do.

Figures are rounded approximations of ACS 1-year, BLS LAUS, Fed SCF/HMDA
and IMPLAN releases. They are seed values for demos and tests, not an
authoritative dataset.
"""
from __future__ import annotations

from typing import Optional

# Vintage of each seed feed (ISO date), surfaced as data_as_of
SEED_AS_OF: dict[str, str] = {
    "demographic": "2024-09-12",
    "labor": "2024-10-01",
    "wealth": "2024-06-30",
    "sector": "2024-03-15",
    "historical": "2024-09-12",
}

SEED_SOURCES: dict[str, tuple[str, str]] = {
    "demographic": ("Census ACS 1-year", "https://data.census.gov"),
    "labor": ("BLS LAUS", "https://www.bls.gov/lau/"),
    "wealth": ("Fed SCF / FFIEC HMDA", "https://ffiec.cfpb.gov"),
    "sector": ("IMPLAN multipliers", "https://implan.com"),
    "historical": ("Census ACS 1-year", "https://data.census.gov"),
}

TREND_PERIODS: tuple[str, ...] = ("2019", "2020", "2021", "2022", "2023")


# ─── Per-Region Profiles ─────────────────────────────────────────────────────
# Series values line up with TREND_PERIODS. None = not published that year
# (the 2020 Annual Business Survey was skipped).

REGION_PROFILES: dict[str, dict] = {
    "memphis": {
        "black_unemployment": [9.8, 14.1, 11.2, 8.9, 9.4],
        "black_median_income": [36100, 35400, 37900, 39800, 41200],
        "black_owned_firms": [2980, None, 3120, 3260, 3410],
        "hotspots": [("38106", 18.4, "critical"), ("38126", 15.2, "high"), ("Frayser", 11.0, "moderate")],
        "labor": {
            "total_employed": 598_000, "unemployment_rate": 5.1,
            "participation": 62.8, "median_wage": 44_300,
            "race": [("Black", 47.9, 9.4, 35_100), ("White", 41.2, 3.1, 54_800),
                     ("Hispanic", 6.8, 4.6, 38_200), ("Other", 4.1, 4.0, 47_500)],
            "geography": [("Urban core", 58.0, 7.9, 39_900), ("Suburban", 42.0, 3.4, 51_200)],
        },
        "wealth": {"black": 18_900, "white": 184_500},
        "homeownership": {"black": 38.7, "white": 67.3},
        "income_ratio": {"white": 71_900, "black": 41_200},
        "loan_denial": {"black": 38.2, "white": 17.5},
        "startup_capital": {"black": 35_000, "white": 107_000},
        "mortgage_denial": {"black": 21.3, "white": 8.9},
        "multipliers": {"green-construction": 1.85, "logistics": 1.62, "healthcare": 1.74,
                        "advanced-manufacturing": 2.05, "food-systems": 1.58},
    },
    "atlanta": {
        "black_unemployment": [7.2, 12.5, 8.8, 6.1, 6.1],
        "black_median_income": [42300, 41800, 45100, 48900, 51200],
        "black_owned_firms": [8900, None, 9450, 10100, 10800],
        "hotspots": [("30314", 14.9, "high"), ("30310", 12.7, "high"), ("West End", 9.8, "moderate")],
        "labor": {
            "total_employed": 3_050_000, "unemployment_rate": 3.6,
            "participation": 66.1, "median_wage": 52_700,
            "race": [("Black", 34.2, 6.1, 45_300), ("White", 46.5, 2.6, 68_900),
                     ("Hispanic", 11.3, 3.8, 41_700), ("Other", 8.0, 3.1, 63_200)],
            "geography": [("Urban core", 31.0, 5.2, 49_800), ("Suburban", 69.0, 3.0, 54_100)],
        },
        "wealth": {"black": 24_100, "white": 221_300},
        "homeownership": {"black": 46.1, "white": 72.4},
        "income_ratio": {"white": 98_300, "black": 51_200},
        "loan_denial": {"black": 33.6, "white": 15.2},
        "startup_capital": {"black": 41_000, "white": 126_000},
        "mortgage_denial": {"black": 17.8, "white": 7.1},
        "multipliers": {"green-construction": 1.79, "logistics": 1.71, "healthcare": 1.68,
                        "tech-services": 1.92, "clean-energy": 1.88},
    },
    "birmingham": {
        "black_unemployment": [8.1, 12.0, 9.5, 7.4, 7.0],
        "black_median_income": [33800, 33500, 35200, 36900, 38100],
        "black_owned_firms": [1450, None, 1510, 1580, 1620],
        "hotspots": [("35207", 16.1, "critical"), ("Ensley", 13.3, "high"), ("35211", 8.7, "moderate")],
        "labor": {
            "total_employed": 523_000, "unemployment_rate": 3.2,
            "participation": 60.4, "median_wage": 45_100,
            "race": [("Black", 29.8, 7.0, 36_400), ("White", 64.1, 2.2, 53_300),
                     ("Hispanic", 3.9, 3.5, 35_900), ("Other", 2.2, 3.0, 46_000)],
            "geography": [("Urban core", 22.0, 6.4, 38_100), ("Suburban", 78.0, 2.6, 47_000)],
        },
        "wealth": {"black": 15_600, "white": 169_800},
        "homeownership": {"black": 45.3, "white": 74.9},
        "income_ratio": {"white": 70_200, "black": 38_100},
        "loan_denial": {"black": 36.9, "white": 16.4},
        "startup_capital": {"black": 31_000, "white": 98_000},
        "mortgage_denial": {"black": 19.6, "white": 8.2},
        "multipliers": {"green-construction": 1.76, "advanced-manufacturing": 2.11,
                        "healthcare": 1.81, "logistics": 1.55},
    },
    "jackson": {
        "black_unemployment": [10.2, 13.8, 11.9, 9.6, 9.1],
        "black_median_income": [31200, 30600, 32100, 33400, 34000],
        "black_owned_firms": [980, None, 1010, 1060, 1095],
        "hotspots": [("39213", 19.2, "critical"), ("39203", 16.5, "critical"), ("Georgetown", 12.1, "high")],
        "labor": {
            "total_employed": 268_000, "unemployment_rate": 4.1,
            "participation": 59.7, "median_wage": 40_800,
            "race": [("Black", 49.6, 9.1, 32_800), ("White", 46.3, 2.7, 52_400),
                     ("Hispanic", 2.1, 4.1, 34_000), ("Other", 2.0, 3.6, 41_200)],
            "geography": [("Urban core", 36.0, 8.3, 34_500), ("Suburban", 64.0, 2.9, 44_900)],
        },
        "wealth": {"black": 12_300, "white": 158_200},
        "homeownership": {"black": 49.8, "white": 76.1},
        "income_ratio": {"white": 69_500, "black": 34_000},
        "loan_denial": {"black": 41.5, "white": 18.8},
        "startup_capital": {"black": 27_000, "white": 92_000},
        "mortgage_denial": {"black": 24.1, "white": 9.7},
        "multipliers": {"green-construction": 1.72, "food-systems": 1.64, "healthcare": 1.77},
    },
    "new-orleans": {
        "black_unemployment": [9.5, 18.2, 12.4, 8.7, 8.9],
        "black_median_income": [30900, 29800, 32400, 34100, 35600],
        "black_owned_firms": [2100, None, 2190, 2300, 2380],
        "hotspots": [("70117", 17.6, "critical"), ("Lower Ninth Ward", 15.9, "high"), ("70113", 10.4, "moderate")],
        "labor": {
            "total_employed": 582_000, "unemployment_rate": 4.0,
            "participation": 61.2, "median_wage": 43_600,
            "race": [("Black", 35.7, 8.9, 33_900), ("White", 53.8, 2.9, 57_800),
                     ("Hispanic", 6.9, 4.2, 37_300), ("Other", 3.6, 3.8, 44_100)],
            "geography": [("Urban core", 40.0, 7.1, 39_200), ("Suburban", 60.0, 3.1, 46_500)],
        },
        "wealth": {"black": 13_800, "white": 176_400},
        "homeownership": {"black": 42.6, "white": 65.8},
        "income_ratio": {"white": 79_600, "black": 35_600},
        "loan_denial": {"black": 37.4, "white": 16.9},
        "startup_capital": {"black": 29_000, "white": 101_000},
        "mortgage_denial": {"black": 22.7, "white": 9.3},
        "multipliers": {"green-construction": 1.83, "clean-energy": 1.91, "food-systems": 1.69,
                        "logistics": 1.66},
    },
}

SECTOR_CATALOG: dict[str, dict] = {
    "green-construction": {
        "name": "Green Construction & Retrofits", "category": "green",
        "description": "Weatherization, solar install and energy retrofits with local-hire requirements.",
    },
    "logistics": {
        "name": "Logistics & Distribution", "category": "standard",
        "description": "Warehousing, freight brokerage and last-mile delivery.",
    },
    "healthcare": {
        "name": "Healthcare Services", "category": "standard",
        "description": "Home health, clinics and allied health staffing.",
    },
    "advanced-manufacturing": {
        "name": "Advanced Manufacturing", "category": "standard",
        "description": "Auto parts, medical devices and precision machining suppliers.",
    },
    "food-systems": {
        "name": "Local Food Systems", "category": "green",
        "description": "Urban agriculture, food processing and grocery ownership.",
    },
    "clean-energy": {
        "name": "Clean Energy Generation", "category": "green",
        "description": "Community solar, storage and grid services contractors.",
    },
    "tech-services": {
        "name": "Technology Services", "category": "standard",
        "description": "IT managed services, software and data contracting.",
    },
}


# ─── Payload Builders ────────────────────────────────────────────────────────

def _profile(region_id: str) -> Optional[dict]:
    return REGION_PROFILES.get(region_id)


def demographic_payload(region_id: str) -> Optional[dict]:
    p = _profile(region_id)
    if p is None:
        return None
    current = TREND_PERIODS[-1]
    return {
        "indicators": [
            {
                "id": "black-unemployment", "label": "Black Unemployment Rate",
                "raw_value": p["black_unemployment"][-1], "unit": "percent",
                "period": current, "series_id": "black_unemployment_rate",
                "context": "Share of the Black labor force actively seeking work",
            },
            {
                "id": "black-median-income", "label": "Black Median Household Income",
                "raw_value": p["black_median_income"][-1], "unit": "currency",
                "period": current, "series_id": "black_median_income",
                "context": "Inflation-adjusted, ACS 1-year estimate",
            },
            {
                "id": "black-owned-firms", "label": "Black-Owned Employer Firms",
                "raw_value": p["black_owned_firms"][-1], "unit": "count",
                "period": current, "series_id": "black_owned_firms",
                "context": "Firms with at least one paid employee (Annual Business Survey)",
            },
        ],
        "hotspots": [
            {"location": loc, "metric": "unemployment_rate", "value": value, "severity": severity}
            for loc, value, severity in p["hotspots"]
        ],
    }


def labor_payload(region_id: str) -> Optional[dict]:
    p = _profile(region_id)
    if p is None:
        return None
    labor = p["labor"]
    slices = []
    for category in ("race", "geography"):
        for label, share, unemployment, wage in labor[category]:
            slices.append({
                "category": category, "label": label, "share_pct": share,
                "unemployment_rate": unemployment, "median_wage": wage,
            })
    return {
        "total_employed": labor["total_employed"],
        "unemployment_rate": labor["unemployment_rate"],
        "labor_force_participation": labor["participation"],
        "median_wage": labor["median_wage"],
        "slices": slices,
    }


def _gap(metric: str, a: tuple[str, float], b: tuple[str, float], method: str, context: str) -> dict:
    return {
        "metric": metric, "group_a": a[0], "group_a_value": a[1],
        "group_b": b[0], "group_b_value": b[1], "method": method, "context": context,
    }


def wealth_payload(region_id: str) -> Optional[dict]:
    p = _profile(region_id)
    if p is None:
        return None
    capital = [
        dict(_gap("Small business loan denial rate (%)",
                  ("Black-owned", p["loan_denial"]["black"]), ("White-owned", p["loan_denial"]["white"]),
                  "difference", "SBA 7(a) and bank CRA lending"), market="loans"),
        dict(_gap("Average startup capital ($)",
                  ("Black-owned", p["startup_capital"]["black"]), ("White-owned", p["startup_capital"]["white"]),
                  "ratio", "Owner equity plus outside capital at founding"), market="equity"),
        dict(_gap("Mortgage denial rate (%)",
                  ("Black applicants", p["mortgage_denial"]["black"]),
                  ("White applicants", p["mortgage_denial"]["white"]),
                  "difference", "HMDA conventional home-purchase loans"), market="credit"),
    ]
    return {
        "gaps": [
            _gap("Median household wealth ($)",
                 ("White", p["wealth"]["white"]), ("Black", p["wealth"]["black"]),
                 "difference", "Net worth including home equity"),
            _gap("Homeownership rate (%)",
                 ("White", p["homeownership"]["white"]), ("Black", p["homeownership"]["black"]),
                 "difference", "Owner-occupied housing units"),
            _gap("Median household income ratio",
                 ("White", p["income_ratio"]["white"]), ("Black", p["income_ratio"]["black"]),
                 "ratio", "Dollars earned by White households per dollar earned by Black households"),
        ],
        "capital_metrics": capital,
    }


def sector_payload(region_id: str) -> Optional[dict]:
    p = _profile(region_id)
    if p is None:
        return None
    return {
        "sectors": [
            {"id": sector_id, "multiplier": multiplier, **SECTOR_CATALOG[sector_id]}
            for sector_id, multiplier in p["multipliers"].items()
        ],
    }


def historical_payload(region_id: str) -> Optional[dict]:
    p = _profile(region_id)
    if p is None:
        return None
    series = (
        ("black_unemployment_rate", "Black unemployment rate", "percent", p["black_unemployment"]),
        ("black_median_income", "Black median household income", "currency", p["black_median_income"]),
        ("black_owned_firms", "Black-owned employer firms", "count", p["black_owned_firms"]),
    )
    return {
        "trends": [
            {
                "id": series_id, "label": label, "unit": unit,
                "points": [{"period": period, "value": value} for period, value in zip(TREND_PERIODS, values)],
            }
            for series_id, label, unit, values in series
        ],
    }


PAYLOAD_BUILDERS = {
    "demographic": demographic_payload,
    "labor": labor_payload,
    "wealth": wealth_payload,
    "sector": sector_payload,
    "historical": historical_payload,
}
