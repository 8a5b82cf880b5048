"""Static emission-factor tables queried by the source calculators.

Factors are addressed by a substance key and, where they vary, a region
(purchased inputs) or ISO-2 country code (grid electricity). Lookups for an
unknown region or country never fail: they log a warning and return the
documented default so that a batch run with incomplete metadata keeps going.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .config import DEFAULTS
from .constants import DEFAULT_INPUT_REGION, FUEL_UNITS

LOGGER = logging.getLogger("dairy_footprint.registry")


@dataclass(frozen=True)
class EmissionFactor:
    """One emission factor with its unit, provenance and plausible range."""

    value: float
    unit: str
    source_note: str
    low: float | None = None
    high: float | None = None

    @property
    def has_range(self) -> bool:
        return self.low is not None and self.high is not None


# (mean, low, high) per region; units are kg CO2eq per kg (per kg N for fertilizer)
_REGIONAL_INPUTS: dict[str, dict[str, tuple[float, float, float]]] = {
    "global": {
        "fertilizer:mixed": (6.6, 5.5, 7.8),
        "fertilizer:urea": (7.2, 6.1, 8.5),
        "fertilizer:ammonium_nitrate": (6.1, 5.2, 7.2),
        "fertilizer:organic": (0.8, 0.5, 1.2),
        "feed:concentrate": (0.70, 0.50, 1.20),
        "feed:grain_dry": (0.40, 0.30, 0.60),
        "feed:grain_wet": (0.30, 0.25, 0.45),
        "feed:ration": (0.60, 0.40, 0.80),
        "feed:byproducts": (0.15, 0.10, 0.25),
        "feed:proteins": (1.80, 1.20, 2.50),
        "feed:corn": (0.45, 0.35, 0.65),
        "feed:soy": (2.10, 1.50, 2.80),
        "feed:wheat": (0.52, 0.40, 0.70),
        "plastic:mixed": (2.5, 1.8, 3.5),
        "plastic:LDPE": (2.8, 2.2, 3.6),
        "plastic:HDPE": (2.3, 1.9, 2.9),
        "plastic:PP": (2.1, 1.6, 2.8),
    },
    "EU": {
        "fertilizer:mixed": (6.8, 5.8, 7.9),
        "fertilizer:urea": (7.5, 6.5, 8.7),
        "fertilizer:ammonium_nitrate": (6.3, 5.5, 7.3),
        "fertilizer:organic": (0.9, 0.6, 1.3),
        "feed:concentrate": (0.75, 0.55, 1.10),
        "feed:grain_dry": (0.42, 0.32, 0.58),
        "feed:grain_wet": (0.32, 0.26, 0.42),
        "feed:ration": (0.65, 0.45, 0.85),
        "feed:byproducts": (0.18, 0.12, 0.28),
        "feed:proteins": (2.20, 1.60, 2.90),
        "feed:corn": (0.48, 0.38, 0.65),
        "feed:soy": (2.60, 2.10, 3.20),
        "feed:wheat": (0.51, 0.42, 0.68),
        "plastic:mixed": (2.3, 1.9, 3.1),
        "plastic:LDPE": (2.6, 2.1, 3.3),
        "plastic:HDPE": (2.1, 1.8, 2.7),
        "plastic:PP": (1.9, 1.5, 2.5),
    },
    "US": {
        "fertilizer:mixed": (6.4, 5.3, 7.6),
        "fertilizer:urea": (6.9, 5.8, 8.1),
        "fertilizer:ammonium_nitrate": (5.9, 5.0, 6.9),
        "fertilizer:organic": (0.7, 0.4, 1.0),
        "feed:concentrate": (0.65, 0.48, 0.95),
        "feed:grain_dry": (0.35, 0.28, 0.48),
        "feed:grain_wet": (0.28, 0.22, 0.38),
        "feed:ration": (0.55, 0.38, 0.75),
        "feed:byproducts": (0.12, 0.08, 0.18),
        "feed:proteins": (1.50, 1.10, 2.10),
        "feed:corn": (0.38, 0.31, 0.52),
        "feed:soy": (1.60, 1.20, 2.20),
        "feed:wheat": (0.45, 0.35, 0.61),
        "plastic:mixed": (2.4, 1.7, 3.4),
        "plastic:LDPE": (2.7, 2.0, 3.5),
        "plastic:HDPE": (2.2, 1.7, 2.8),
        "plastic:PP": (2.0, 1.5, 2.7),
    },
    "Brazil": {
        "fertilizer:mixed": (7.1, 6.0, 8.3),
        "fertilizer:urea": (7.8, 6.6, 9.2),
        "fertilizer:ammonium_nitrate": (6.5, 5.5, 7.6),
        "fertilizer:organic": (0.6, 0.3, 0.9),
        "feed:concentrate": (0.68, 0.51, 0.98),
        "feed:grain_dry": (0.36, 0.29, 0.49),
        "feed:grain_wet": (0.29, 0.23, 0.39),
        "feed:ration": (0.58, 0.41, 0.78),
        "feed:byproducts": (0.13, 0.09, 0.19),
        "feed:proteins": (1.40, 1.00, 1.90),
        "feed:corn": (0.32, 0.26, 0.44),
        "feed:soy": (1.20, 0.90, 1.60),
        "feed:wheat": (0.58, 0.45, 0.78),
        "plastic:mixed": (2.7, 2.1, 3.6),
        "plastic:LDPE": (3.0, 2.4, 3.8),
        "plastic:HDPE": (2.5, 2.0, 3.2),
        "plastic:PP": (2.3, 1.8, 3.0),
    },
    "Argentina": {
        "fertilizer:mixed": (6.9, 5.8, 8.1),
        "fertilizer:urea": (7.6, 6.4, 8.9),
        "fertilizer:ammonium_nitrate": (6.3, 5.3, 7.4),
        "fertilizer:organic": (0.5, 0.3, 0.8),
        "feed:concentrate": (0.62, 0.46, 0.89),
        "feed:grain_dry": (0.34, 0.27, 0.46),
        "feed:grain_wet": (0.27, 0.21, 0.37),
        "feed:ration": (0.56, 0.39, 0.76),
        "feed:byproducts": (0.11, 0.07, 0.17),
        "feed:proteins": (1.30, 0.90, 1.80),
        "feed:corn": (0.31, 0.25, 0.42),
        "feed:soy": (1.10, 0.80, 1.50),
        "feed:wheat": (0.41, 0.32, 0.56),
        "plastic:mixed": (2.8, 2.2, 3.7),
        "plastic:LDPE": (3.1, 2.5, 3.9),
        "plastic:HDPE": (2.6, 2.1, 3.3),
        "plastic:PP": (2.4, 1.9, 3.1),
    },
    "Australia": {
        "fertilizer:mixed": (6.5, 5.4, 7.7),
        "fertilizer:urea": (7.0, 5.9, 8.2),
        "fertilizer:ammonium_nitrate": (6.0, 5.1, 7.0),
        "fertilizer:organic": (0.8, 0.5, 1.1),
        "feed:concentrate": (0.72, 0.53, 1.05),
        "feed:grain_dry": (0.41, 0.33, 0.56),
        "feed:grain_wet": (0.31, 0.25, 0.41),
        "feed:ration": (0.63, 0.44, 0.84),
        "feed:byproducts": (0.16, 0.11, 0.24),
        "feed:proteins": (1.90, 1.40, 2.60),
        "feed:corn": (0.46, 0.37, 0.62),
        "feed:soy": (2.30, 1.80, 3.00),
        "feed:wheat": (0.44, 0.35, 0.59),
        "plastic:mixed": (2.6, 2.0, 3.5),
        "plastic:LDPE": (2.9, 2.3, 3.7),
        "plastic:HDPE": (2.4, 1.9, 3.1),
        "plastic:PP": (2.2, 1.7, 2.9),
    },
}

# kg CO2 per kWh
GRID_FACTORS: dict[str, float] = {
    "UY": 0.08,
    "AR": 0.35,
    "BR": 0.12,
    "NZ": 0.15,
    "US": 0.45,
    "AU": 0.75,
    "DE": 0.40,
    "DK": 0.25,
    "NL": 0.35,
    "IE": 0.30,
}

FUEL_FACTORS: dict[str, float] = {
    "diesel": 2.67,
    "petrol": 2.31,
    "lpg": 3.0,
    "natural_gas": 2.0,
}

# fraction added on top of direct combustion emissions
UPSTREAM_FACTORS: dict[str, float] = {
    "diesel": 0.15,
    "petrol": 0.12,
    "lpg": 0.08,
    "natural_gas": 0.10,
    "electricity": 0.05,
}

# fraction of excreted N lost through volatilisation (gasf) and leaching
_TIERED_FRACTIONS: dict[str, dict[int, float]] = {
    "manure_frac_gasf": {1: 0.20, 2: 0.18},
    "manure_frac_leach": {1: 0.30, 2: 0.25},
}


def available_regions() -> list[str]:
    return sorted(_REGIONAL_INPUTS)


def get_factor(
    substance: str,
    region_or_country: str | None = None,
    tier: int | None = None,
) -> EmissionFactor:
    """Return the emission factor for ``substance``.

    Parameters
    ----------
    substance:
        ``fertilizer:<type>``, ``feed:<category>``, ``plastic:<type>``,
        ``electricity``, ``fuel:<name>``, ``upstream:<name>`` or one of the
        tier-dependent manure N fractions.
    region_or_country:
        Input region (``EU``, ``global`` ...) or ISO-2 country code for
        electricity. Unknown values fall back to the default with a warning.
    tier:
        Methodology tier for tier-dependent factors; defaults to 1.
    """

    if substance == "electricity":
        country = (region_or_country or "").upper()
        if country in GRID_FACTORS:
            return EmissionFactor(
                GRID_FACTORS[country], "kg CO2 kWh-1", f"national grid average ({country})"
            )
        LOGGER.warning(
            "No grid factor for country '%s'; using default %.2f kg CO2/kWh",
            region_or_country,
            DEFAULTS.grid_factor_fallback,
        )
        return EmissionFactor(
            DEFAULTS.grid_factor_fallback, "kg CO2 kWh-1", "default grid factor"
        )

    if substance.startswith("fuel:"):
        fuel = substance.split(":", 1)[1]
        if fuel not in FUEL_FACTORS:
            raise KeyError(f"Unknown fuel '{fuel}'. Available: {sorted(FUEL_FACTORS)}")
        return EmissionFactor(FUEL_FACTORS[fuel], FUEL_UNITS[fuel], "IPCC 2006 stationary/mobile combustion")

    if substance.startswith("upstream:"):
        carrier = substance.split(":", 1)[1]
        if carrier not in UPSTREAM_FACTORS:
            raise KeyError(f"Unknown energy carrier '{carrier}'. Available: {sorted(UPSTREAM_FACTORS)}")
        return EmissionFactor(UPSTREAM_FACTORS[carrier], "fraction of direct", "well-to-tank uplift")

    if substance in _TIERED_FRACTIONS:
        values = _TIERED_FRACTIONS[substance]
        resolved_tier = 1 if tier is None else int(tier)
        if resolved_tier not in values:
            raise KeyError(f"No tier {tier} value for '{substance}'")
        return EmissionFactor(values[resolved_tier], "kg N kg-1 N", f"IPCC 2019 Tier {resolved_tier}")

    region = region_or_country or DEFAULT_INPUT_REGION
    table = _REGIONAL_INPUTS.get(region)
    if table is None:
        LOGGER.warning(
            "Unknown region '%s' for %s; falling back to '%s'",
            region,
            substance,
            DEFAULT_INPUT_REGION,
        )
        region = DEFAULT_INPUT_REGION
        table = _REGIONAL_INPUTS[region]
    if substance not in table:
        raise KeyError(f"Unknown substance '{substance}'")
    mean, low, high = table[substance]
    unit = "kg CO2eq kg-1 N" if substance.startswith("fertilizer:") else "kg CO2eq kg-1"
    return EmissionFactor(mean, unit, f"regional LCI average ({region})", low, high)
