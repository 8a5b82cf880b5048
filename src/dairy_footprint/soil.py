"""Soil N2O from nitrogen applied to or deposited on farm land."""

from __future__ import annotations

import logging

from .boundaries import BoundaryScope, is_excluded
from .config import DEFAULTS, MethodDefaults
from .constants import (
    EF_N2O_LEACHING,
    EF_N2O_VOLATILIZATION,
    N2O_N_TO_N2O,
    SOIL_CLIMATES,
    SOIL_DIRECT_EF,
    SOIL_FRAC_LEACH,
    SOIL_FRAC_VOLATILIZATION,
    SOIL_TYPES,
)
from .results import SourceResult
from .validation import (
    check_choice,
    check_fraction,
    check_non_negative,
    check_result_total,
    check_tier,
)

LOGGER = logging.getLogger("dairy_footprint.soil")

SOURCE = "soil"
N_SOURCES = ("synthetic", "organic", "excreta_pasture", "crop_residues")


def calc_emissions_soil(
    n_fertilizer_synthetic: float = 0.0,
    n_fertilizer_organic: float = 0.0,
    n_excreta_pasture: float = 0.0,
    n_crop_residues: float = 0.0,
    area_ha: float | None = None,
    soil_type: str = "well_drained",
    climate: str = "temperate",
    ef_direct: float | None = None,
    include_indirect: bool = True,
    frac_volatilization: float | None = None,
    frac_leach: float | None = None,
    gwp_n2o: float | None = None,
    tier: int = 1,
    boundaries: BoundaryScope | None = None,
    defaults: MethodDefaults | None = None,
) -> SourceResult:
    """Direct and indirect soil N2O.

    Nitrogen quantities are kg N per year. ``frac_volatilization`` and
    ``frac_leach`` are site-specific loss fractions used at Tier 2 only.
    """
    defaults = defaults or DEFAULTS
    n_inputs = {
        "synthetic": check_non_negative("n_fertilizer_synthetic", n_fertilizer_synthetic) or 0.0,
        "organic": check_non_negative("n_fertilizer_organic", n_fertilizer_organic) or 0.0,
        "excreta_pasture": check_non_negative("n_excreta_pasture", n_excreta_pasture) or 0.0,
        "crop_residues": check_non_negative("n_crop_residues", n_crop_residues) or 0.0,
    }
    area_ha = check_non_negative("area_ha", area_ha)
    check_choice("soil_type", soil_type, SOIL_TYPES)
    check_choice("climate", climate, SOIL_CLIMATES)
    tier = check_tier(tier)
    ef_direct = check_non_negative("ef_direct", ef_direct)
    frac_volatilization = check_fraction("frac_volatilization", frac_volatilization)
    frac_leach = check_fraction("frac_leach", frac_leach)
    gwp_n2o = check_non_negative("gwp_n2o", gwp_n2o)
    gwp_n2o = defaults.gwp_n2o if gwp_n2o is None else gwp_n2o

    inputs: dict[str, object] = {
        **{f"n_{name}_kg": value for name, value in n_inputs.items()},
        "area_ha": area_ha,
        "soil_type": soil_type,
        "climate": climate,
        "include_indirect": include_indirect,
        "tier": tier,
    }
    boundary_info = boundaries.as_dict() if boundaries is not None else None

    if is_excluded(boundaries, SOURCE):
        return SourceResult(
            source=SOURCE,
            co2eq_kg=0.0,
            methodology="excluded_by_boundaries",
            emissions_breakdown={
                "n2o_direct_kg": 0.0,
                "n2o_volatilization_kg": 0.0,
                "n2o_leaching_kg": 0.0,
                "n2o_total_kg": 0.0,
            },
            inputs=inputs,
            boundaries=boundary_info,
            excluded=True,
        )

    site_fractions = frac_volatilization is not None or frac_leach is not None
    if site_fractions and tier == 1:
        LOGGER.warning("Site-specific soil N loss fractions are ignored at Tier 1")
    use_site = site_fractions and tier == 2

    ef = SOIL_DIRECT_EF[climate][soil_type] if ef_direct is None else ef_direct
    total_n = sum(n_inputs.values())
    direct_by_source = {name: value * ef * N2O_N_TO_N2O for name, value in n_inputs.items()}
    n2o_direct = sum(direct_by_source.values())

    n2o_volatilization = 0.0
    n2o_leaching = 0.0
    vol_by_source = {name: 0.0 for name in N_SOURCES}
    leach_by_source = {name: 0.0 for name in N_SOURCES}
    if include_indirect:
        for name in N_SOURCES:
            if use_site and frac_volatilization is not None:
                frac = frac_volatilization if name in SOIL_FRAC_VOLATILIZATION else 0.0
            else:
                frac = SOIL_FRAC_VOLATILIZATION.get(name, 0.0)
            vol_by_source[name] = n_inputs[name] * frac * EF_N2O_VOLATILIZATION * N2O_N_TO_N2O
            leach_frac = frac_leach if use_site and frac_leach is not None else SOIL_FRAC_LEACH
            leach_by_source[name] = n_inputs[name] * leach_frac * EF_N2O_LEACHING * N2O_N_TO_N2O
        n2o_volatilization = sum(vol_by_source.values())
        n2o_leaching = sum(leach_by_source.values())

    n2o_total = n2o_direct + n2o_volatilization + n2o_leaching
    co2eq_kg = check_result_total(SOURCE, n2o_total * gwp_n2o)

    metrics: dict[str, object] = {"total_n_applied_kg": total_n}
    if n2o_total > 0:
        metrics["source_contributions_pct"] = {
            name: (direct_by_source[name] + vol_by_source[name] + leach_by_source[name]) / n2o_total * 100.0
            for name in N_SOURCES
        }
    if area_ha:
        metrics.update(
            {
                "n_applied_kg_per_ha": total_n / area_ha,
                "n2o_kg_per_ha": n2o_total / area_ha,
                "co2eq_kg_per_ha": co2eq_kg / area_ha,
            }
        )

    factors: dict[str, object] = {
        "ef_direct": {"value": ef, "unit": "kg N2O-N kg-1 N"},
        "ef_volatilization": EF_N2O_VOLATILIZATION,
        "ef_leaching": EF_N2O_LEACHING,
        "gwp_n2o": gwp_n2o,
    }
    if use_site:
        factors["site_fractions"] = {"volatilization": frac_volatilization, "leach": frac_leach}

    if tier == 1:
        methodology = "IPCC Tier 1"
    else:
        methodology = "IPCC Tier 2 (site fractions)" if use_site else "IPCC Tier 2 (tier1_defaults)"
    return SourceResult(
        source=SOURCE,
        co2eq_kg=co2eq_kg,
        methodology=methodology,
        emissions_breakdown={
            "n2o_direct_kg": n2o_direct,
            "n2o_volatilization_kg": n2o_volatilization,
            "n2o_leaching_kg": n2o_leaching,
            "n2o_total_kg": n2o_total,
        },
        emission_factors_used=factors,
        inputs=inputs,
        metrics=metrics,
        boundaries=boundary_info,
    )
