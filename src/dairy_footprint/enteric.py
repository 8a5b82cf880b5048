"""Enteric methane from ruminal fermentation.

Tier 1 multiplies head counts by category/system default factors. Tier 2
refines the per-head factor from whatever detail is supplied, in order of
preference:

1. dry-matter intake (directly, or derived from annual ``feed_inputs``)
   through gross energy and the methane conversion factor Ym;
2. for dairy cows, net energy for maintenance, lactation and pregnancy
   from body weight and milk yield;
3. for other categories, metabolic-weight scaling of the Tier 1 factor.

With none of these fields Tier 2 reproduces Tier 1.
"""

from __future__ import annotations

from typing import Mapping

from .boundaries import BoundaryScope, is_excluded
from .config import DEFAULTS, MethodDefaults
from .constants import (
    CATTLE_CATEGORIES,
    CH4_ENERGY_MJ_PER_KG,
    DEFAULT_BODY_WEIGHT_KG,
    ENTERIC_TIER1_EF,
    GROSS_ENERGY_MJ_PER_KG_DM,
    PRODUCTION_SYSTEMS,
)
from .results import SourceResult
from .validation import (
    check_choice,
    check_non_negative,
    check_quantity,
    check_result_total,
    check_tier,
)

SOURCE = "enteric"

# net energy terms, MJ per day
NE_MAINTENANCE_COEFF = 0.335
NE_LACTATION_MJ_PER_KG_MILK = 5.15
NE_PREGNANCY_MJ = 10.0
NE_TO_GE_RATIO = 0.6


def _tier2_factor(
    category: str,
    n_animals: float,
    dry_matter_intake: float | None,
    feed_inputs: Mapping[str, float] | None,
    avg_body_weight: float | None,
    avg_milk_yield: float | None,
    ym_percent: float,
    tier1_ef: float,
    defaults: MethodDefaults,
) -> tuple[float, str, float | None]:
    """Return (kg CH4 per head per year, route label, DMI used)."""
    if dry_matter_intake is None and feed_inputs:
        annual_dm = sum(feed_inputs.values())
        if n_animals > 0:
            dry_matter_intake = annual_dm / (n_animals * 365.0)

    if dry_matter_intake is not None:
        gross_energy_mj = dry_matter_intake * GROSS_ENERGY_MJ_PER_KG_DM * 365.0
        ef = gross_energy_mj * ym_percent / 100.0 / CH4_ENERGY_MJ_PER_KG
        return ef, "dry_matter_intake", dry_matter_intake

    if category == "dairy_cows" and (avg_body_weight is not None or avg_milk_yield is not None):
        body_weight = avg_body_weight if avg_body_weight is not None else DEFAULT_BODY_WEIGHT_KG[category]
        milk_yield = avg_milk_yield if avg_milk_yield is not None else defaults.milk_yield_kg
        net_energy_mj = (
            NE_MAINTENANCE_COEFF * body_weight**0.75
            + milk_yield * NE_LACTATION_MJ_PER_KG_MILK / 365.0
            + NE_PREGNANCY_MJ
        )
        gross_energy_mj = net_energy_mj * 365.0 / NE_TO_GE_RATIO
        ef = gross_energy_mj * ym_percent / 100.0 / CH4_ENERGY_MJ_PER_KG
        return ef, "net_energy", None

    if category != "dairy_cows" and avg_body_weight is not None:
        scale = (avg_body_weight / DEFAULT_BODY_WEIGHT_KG[category]) ** 0.75
        return tier1_ef * scale, "metabolic_weight", None

    return tier1_ef, "tier1_defaults", None


def calc_emissions_enteric(
    n_animals: float,
    cattle_category: str = "dairy_cows",
    production_system: str = "mixed",
    avg_milk_yield: float | None = None,
    avg_body_weight: float | None = None,
    dry_matter_intake: float | None = None,
    feed_inputs: Mapping[str, float] | None = None,
    ym_percent: float | None = None,
    gwp_ch4: float | None = None,
    tier: int = 1,
    boundaries: BoundaryScope | None = None,
    defaults: MethodDefaults | None = None,
) -> SourceResult:
    """Enteric CH4 and CO2eq for one animal category.

    ``dry_matter_intake`` is kg DM per head per day; ``feed_inputs`` maps feed
    names to kg DM per year for the whole group. Boundary exclusion returns a
    result whose ``co2eq_kg`` is ``None``.
    """
    defaults = defaults or DEFAULTS
    n_animals = check_quantity("n_animals", n_animals)
    check_choice("cattle_category", cattle_category, CATTLE_CATEGORIES)
    check_choice("production_system", production_system, PRODUCTION_SYSTEMS)
    tier = check_tier(tier)
    avg_milk_yield = check_non_negative("avg_milk_yield", avg_milk_yield)
    avg_body_weight = check_non_negative("avg_body_weight", avg_body_weight)
    dry_matter_intake = check_non_negative("dry_matter_intake", dry_matter_intake)
    if feed_inputs is not None:
        feed_inputs = {
            name: check_non_negative(f"feed_inputs[{name!r}]", value) or 0.0
            for name, value in feed_inputs.items()
        }
    ym = check_non_negative("ym_percent", ym_percent)
    ym = defaults.ym_percent if ym is None else ym
    gwp = check_non_negative("gwp_ch4", gwp_ch4)
    gwp = defaults.gwp_ch4 if gwp is None else gwp

    inputs = {
        "n_animals": n_animals,
        "cattle_category": cattle_category,
        "production_system": production_system,
        "avg_milk_yield": avg_milk_yield,
        "avg_body_weight": avg_body_weight,
        "dry_matter_intake": dry_matter_intake,
        "ym_percent": ym,
        "tier": tier,
    }
    boundary_info = boundaries.as_dict() if boundaries is not None else None

    if is_excluded(boundaries, SOURCE):
        return SourceResult(
            source=SOURCE,
            co2eq_kg=None,
            methodology="excluded_by_boundaries",
            emissions_breakdown={"ch4_kg": 0.0, "co2eq_kg": 0.0},
            inputs=inputs,
            boundaries=boundary_info,
            excluded=True,
        )

    tier1_ef = ENTERIC_TIER1_EF[cattle_category][production_system]
    route = "tier1_defaults"
    dmi_used = None
    ef = tier1_ef
    if tier == 2:
        ef, route, dmi_used = _tier2_factor(
            cattle_category,
            n_animals,
            dry_matter_intake,
            feed_inputs,
            avg_body_weight,
            avg_milk_yield,
            ym,
            tier1_ef,
            defaults,
        )
        if ef <= 0:
            ef, route = tier1_ef, "tier1_defaults"

    ch4_kg = n_animals * ef
    co2eq_kg = check_result_total(SOURCE, ch4_kg * gwp)

    metrics: dict[str, float | None] = {
        "ch4_kg_per_head": ef if n_animals > 0 else 0.0,
        "co2eq_kg_per_head": ef * gwp if n_animals > 0 else 0.0,
    }
    if cattle_category == "dairy_cows":
        milk_yield = avg_milk_yield if avg_milk_yield is not None else defaults.milk_yield_kg
        metrics["co2eq_kg_per_kg_milk"] = ef * gwp / milk_yield if milk_yield > 0 else None
    inputs["dry_matter_intake"] = dmi_used if dmi_used is not None else dry_matter_intake

    methodology = "IPCC Tier 1" if tier == 1 else f"IPCC Tier 2 ({route})"
    return SourceResult(
        source=SOURCE,
        co2eq_kg=co2eq_kg,
        methodology=methodology,
        emissions_breakdown={"ch4_kg": ch4_kg, "co2eq_kg": co2eq_kg},
        emission_factors_used={
            "ef_ch4_kg_per_head": {"value": ef, "unit": "kg CH4 head-1 yr-1"},
            "ym_percent": {"value": ym, "unit": "%"},
            "gwp_ch4": {"value": gwp, "unit": "kg CO2eq kg-1 CH4"},
            "route": route,
        },
        inputs=inputs,
        metrics=metrics,
        boundaries=boundary_info,
    )


def _check_per_category(name: str, values: Mapping[str, float | None] | None) -> dict[str, float | None]:
    checked: dict[str, float | None] = {}
    for category, value in (values or {}).items():
        check_choice(f"{name} category", category, CATTLE_CATEGORIES)
        checked[category] = check_non_negative(f"{name}[{category!r}]", value)
    return checked


def calc_emissions_enteric_herd(
    herd: Mapping[str, float],
    production_system: str = "mixed",
    body_weights: Mapping[str, float | None] | None = None,
    dry_matter_intakes: Mapping[str, float | None] | None = None,
    avg_milk_yield: float | None = None,
    ym_percent: float | None = None,
    gwp_ch4: float | None = None,
    tier: int = 1,
    boundaries: BoundaryScope | None = None,
    defaults: MethodDefaults | None = None,
) -> SourceResult:
    """Sum enteric emissions over several cattle categories.

    ``herd`` maps a category to its head count; categories with zero head are
    skipped. The per-category results are kept under
    ``emissions_breakdown['by_category']``.
    """
    tier = check_tier(tier)
    counts = _check_per_category("herd", herd)
    body_weights = _check_per_category("body_weights", body_weights)
    dry_matter_intakes = _check_per_category("dry_matter_intakes", dry_matter_intakes)

    if is_excluded(boundaries, SOURCE):
        return calc_emissions_enteric(
            0.0,
            production_system=production_system,
            avg_milk_yield=avg_milk_yield,
            ym_percent=ym_percent,
            gwp_ch4=gwp_ch4,
            tier=tier,
            boundaries=boundaries,
            defaults=defaults,
        )

    per_category: dict[str, SourceResult] = {}
    for category in CATTLE_CATEGORIES:
        count = counts.get(category) or 0.0
        if count <= 0:
            continue
        per_category[category] = calc_emissions_enteric(
            count,
            cattle_category=category,
            production_system=production_system,
            avg_milk_yield=avg_milk_yield if category == "dairy_cows" else None,
            avg_body_weight=body_weights.get(category),
            dry_matter_intake=dry_matter_intakes.get(category),
            ym_percent=ym_percent,
            gwp_ch4=gwp_ch4,
            tier=tier,
            boundaries=boundaries,
            defaults=defaults,
        )

    ch4_kg = sum(result.emissions_breakdown["ch4_kg"] for result in per_category.values())
    co2eq_kg = sum(result.co2eq_kg or 0.0 for result in per_category.values())
    methodologies = sorted({result.methodology for result in per_category.values()})
    return SourceResult(
        source=SOURCE,
        co2eq_kg=co2eq_kg,
        methodology="; ".join(methodologies) or ("IPCC Tier 1" if tier == 1 else "IPCC Tier 2"),
        emissions_breakdown={
            "ch4_kg": ch4_kg,
            "co2eq_kg": co2eq_kg,
            "by_category": {
                category: result.co2eq_kg for category, result in per_category.items()
            },
        },
        emission_factors_used={
            category: result.emission_factors_used for category, result in per_category.items()
        },
        inputs={"herd": dict(herd), "production_system": production_system, "tier": tier},
        metrics={"total_animals": sum(r.inputs["n_animals"] for r in per_category.values())},
        boundaries=boundaries.as_dict() if boundaries is not None else None,
    )
