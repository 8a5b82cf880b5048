"""Manure-management CH4 and N2O."""

from __future__ import annotations

from .boundaries import BoundaryScope, is_excluded
from .config import DEFAULTS, MethodDefaults
from .constants import (
    EF_N2O_LEACHING,
    EF_N2O_VOLATILIZATION,
    MANURE_CH4_DENSITY_KG_PER_M3,
    MANURE_CLIMATES,
    MANURE_MCF_PERCENT,
    MANURE_SYSTEMS,
    MANURE_TIER1_CH4_EF,
    N2O_N_TO_N2O,
)
from .registry import get_factor
from .results import SourceResult
from .validation import (
    check_choice,
    check_fraction,
    check_non_negative,
    check_number,
    check_quantity,
    check_result_total,
    check_tier,
)

SOURCE = "manure"

PROTEIN_TO_N = 1.0 / 6.25
N_EXCRETED_FRACTION = 0.75


def volatile_solids_kg_per_day(body_weight: float, digestibility: float) -> float:
    coeff = 0.04 if body_weight > 200 else 0.05
    return coeff * body_weight * (2.0 - digestibility)


def max_methane_capacity(digestibility: float) -> float:
    """B0 in m3 CH4 per kg VS."""
    if digestibility > 0.70:
        return 0.20
    if digestibility > 0.60:
        return 0.18
    return 0.15


def methane_conversion_factor(
    manure_system: str,
    climate: str,
    system_temperature: float | None = None,
    retention_days: float | None = None,
) -> float:
    """MCF as a percentage, adjusted for temperature and storage time."""
    mcf = MANURE_MCF_PERCENT[manure_system][climate]
    if system_temperature is not None:
        if system_temperature < 15:
            mcf *= 0.8
        elif system_temperature > 25:
            mcf *= 1.2
    if retention_days is not None and manure_system != "pasture":
        if retention_days < 30:
            mcf *= 0.7
        elif retention_days > 120:
            mcf *= 1.1
    return mcf


def _zero_breakdown() -> dict[str, float]:
    return {
        "ch4_kg": 0.0,
        "n2o_direct_kg": 0.0,
        "n2o_indirect_kg": 0.0,
        "n2o_total_kg": 0.0,
        "ch4_co2eq_kg": 0.0,
        "n2o_co2eq_kg": 0.0,
    }


def calc_emissions_manure(
    n_cows: float,
    manure_system: str = "pasture",
    climate: str = "temperate",
    n_excreted: float | None = None,
    protein_intake_kg: float | None = None,
    ef_n2o_direct: float | None = None,
    include_indirect: bool = False,
    avg_body_weight: float | None = None,
    diet_digestibility: float | None = None,
    retention_days: float | None = None,
    system_temperature: float | None = None,
    gwp_ch4: float | None = None,
    gwp_n2o: float | None = None,
    tier: int = 1,
    boundaries: BoundaryScope | None = None,
    defaults: MethodDefaults | None = None,
) -> SourceResult:
    """Manure CH4 and N2O for a herd of ``n_cows`` animals.

    Tier 2 switches CH4 to the volatile-solids route as soon as any of body
    weight, digestibility, retention time or storage temperature is given;
    missing members of that set take their defaults.
    """
    defaults = defaults or DEFAULTS
    n_cows = check_quantity("n_cows", n_cows)
    check_choice("manure_system", manure_system, MANURE_SYSTEMS)
    check_choice("climate", climate, MANURE_CLIMATES)
    tier = check_tier(tier)
    n_excreted = check_non_negative("n_excreted", n_excreted)
    protein_intake_kg = check_non_negative("protein_intake_kg", protein_intake_kg)
    ef_direct = check_non_negative("ef_n2o_direct", ef_n2o_direct)
    avg_body_weight = check_non_negative("avg_body_weight", avg_body_weight)
    diet_digestibility = check_fraction("diet_digestibility", diet_digestibility, allow_zero=False)
    retention_days = check_non_negative("retention_days", retention_days)
    gwp_ch4 = check_non_negative("gwp_ch4", gwp_ch4)
    gwp_n2o = check_non_negative("gwp_n2o", gwp_n2o)
    system_temperature = check_number("system_temperature", system_temperature)

    gwp_ch4 = defaults.gwp_ch4 if gwp_ch4 is None else gwp_ch4
    gwp_n2o = defaults.gwp_n2o if gwp_n2o is None else gwp_n2o
    ef_direct = defaults.ef_n2o_manure_direct if ef_direct is None else ef_direct

    inputs = {
        "n_cows": n_cows,
        "manure_system": manure_system,
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
            emissions_breakdown=_zero_breakdown(),
            inputs=inputs,
            boundaries=boundary_info,
            excluded=True,
        )

    detailed = tier == 2 and any(
        value is not None
        for value in (avg_body_weight, diet_digestibility, retention_days, system_temperature)
    )

    factors: dict[str, object] = {}
    if detailed:
        body_weight = avg_body_weight if avg_body_weight is not None else defaults.manure_body_weight_kg
        digestibility = (
            diet_digestibility if diet_digestibility is not None else defaults.diet_digestibility
        )
        vs = volatile_solids_kg_per_day(body_weight, digestibility)
        b0 = max_methane_capacity(digestibility)
        mcf = methane_conversion_factor(manure_system, climate, system_temperature, retention_days)
        ch4_per_cow = vs * b0 * mcf / 100.0 * MANURE_CH4_DENSITY_KG_PER_M3 * 365.0
        factors.update(
            {
                "volatile_solids_kg_per_day": {"value": vs, "unit": "kg VS head-1 d-1"},
                "b0": {"value": b0, "unit": "m3 CH4 kg-1 VS"},
                "mcf_percent": {"value": mcf, "unit": "%"},
            }
        )
        inputs.update(
            {
                "avg_body_weight": body_weight,
                "diet_digestibility": digestibility,
                "retention_days": retention_days,
                "system_temperature": system_temperature,
            }
        )
        methodology = "IPCC Tier 2 (VS x B0 x MCF)"
    else:
        ch4_per_cow = MANURE_TIER1_CH4_EF[manure_system]
        factors["ef_ch4_kg_per_head"] = {"value": ch4_per_cow, "unit": "kg CH4 head-1 yr-1"}
        methodology = "IPCC Tier 1" if tier == 1 else "IPCC Tier 2 (tier1_defaults)"

    ch4_kg = n_cows * ch4_per_cow

    if protein_intake_kg is not None:
        n_per_cow = protein_intake_kg * PROTEIN_TO_N * N_EXCRETED_FRACTION * 365.0
    elif n_excreted is not None:
        n_per_cow = n_excreted
    else:
        n_per_cow = defaults.n_excreted_kg
    total_n = n_cows * n_per_cow
    n2o_direct = total_n * ef_direct * N2O_N_TO_N2O

    n2o_indirect = 0.0
    if include_indirect:
        fraction_tier = 2 if detailed else 1
        frac_gasf = get_factor("manure_frac_gasf", tier=fraction_tier).value
        frac_leach = get_factor("manure_frac_leach", tier=fraction_tier).value
        n2o_indirect = (
            total_n * (frac_gasf * EF_N2O_VOLATILIZATION + frac_leach * EF_N2O_LEACHING) * N2O_N_TO_N2O
        )
        factors["frac_gasf"] = frac_gasf
        factors["frac_leach"] = frac_leach

    n2o_total = n2o_direct + n2o_indirect
    ch4_co2eq = ch4_kg * gwp_ch4
    n2o_co2eq = n2o_total * gwp_n2o
    co2eq_kg = check_result_total(SOURCE, ch4_co2eq + n2o_co2eq)

    factors.update(
        {
            "ef_n2o_direct": {"value": ef_direct, "unit": "kg N2O-N kg-1 N"},
            "gwp_ch4": gwp_ch4,
            "gwp_n2o": gwp_n2o,
        }
    )
    inputs["n_excreted_per_cow_kg"] = n_per_cow

    metrics: dict[str, float] = {}
    if n_cows > 0:
        metrics = {
            "ch4_kg_per_cow": ch4_kg / n_cows,
            "n2o_kg_per_cow": n2o_total / n_cows,
            "co2eq_kg_per_cow": co2eq_kg / n_cows,
        }

    return SourceResult(
        source=SOURCE,
        co2eq_kg=co2eq_kg,
        methodology=methodology,
        emissions_breakdown={
            "ch4_kg": ch4_kg,
            "n2o_direct_kg": n2o_direct,
            "n2o_indirect_kg": n2o_indirect,
            "n2o_total_kg": n2o_total,
            "ch4_co2eq_kg": ch4_co2eq,
            "n2o_co2eq_kg": n2o_co2eq,
        },
        emission_factors_used=factors,
        inputs=inputs,
        metrics=metrics,
        boundaries=boundary_info,
    )
