"""Embedded emissions of purchased inputs: feed, fertilizer and plastic.

Factors come from the regional tables in :mod:`dairy_footprint.registry`.
An optional Monte-Carlo pass samples every non-overridden factor uniformly
over its plausible range and summarises the spread of the total. The pass
only describes uncertainty around the point estimate; ``co2eq_kg`` is always
the deterministic mean-factor result.
"""

from __future__ import annotations

from typing import Mapping

import numpy as np

from .boundaries import BoundaryScope, is_excluded
from .config import DEFAULTS, MethodDefaults
from .constants import (
    FEED_CATEGORIES,
    FERTILIZER_TYPES,
    INPUT_REGIONS,
    PLASTIC_TYPES,
    TRUCK_EF_KG_PER_KG_KM,
)
from .registry import EmissionFactor, get_factor
from .results import SourceResult
from .validation import check_choice, check_non_negative, check_result_total

SOURCE = "inputs"


def _normalise_plastic_type(plastic_type: str) -> str:
    value = str(plastic_type).strip()
    if value.lower() == "mixed":
        return "mixed"
    return check_choice("plastic_type", value.upper(), PLASTIC_TYPES)


def simulate_input_uncertainty(
    quantities: Mapping[str, float],
    factors: Mapping[str, EmissionFactor],
    *,
    fixed_co2eq_kg: float = 0.0,
    n_simulations: int = 1000,
    seed: int | None = None,
) -> dict[str, object]:
    """Monte-Carlo summary of ``sum(quantity * factor) + fixed_co2eq_kg``.

    Factors without a range (for example user overrides) are held at their
    value. Returns mean, median, standard deviation, coefficient of variation,
    percentiles and a 95 % interval.
    """
    if n_simulations < 2:
        raise ValueError("n_simulations must be at least 2")
    rng = np.random.default_rng(seed)
    totals = np.full(n_simulations, float(fixed_co2eq_kg))
    for name, quantity in quantities.items():
        if not quantity:
            continue
        factor = factors[name]
        if factor.has_range:
            draws = rng.uniform(factor.low, factor.high, size=n_simulations)
        else:
            draws = np.full(n_simulations, factor.value)
        totals += quantity * draws

    mean = float(np.mean(totals))
    sd = float(np.std(totals, ddof=1))
    p2_5, p5, p25, p75, p95, p97_5 = np.percentile(totals, [2.5, 5, 25, 75, 95, 97.5])
    return {
        "n_simulations": n_simulations,
        "mean": mean,
        "median": float(np.median(totals)),
        "sd": sd,
        "cv_percent": sd / mean * 100.0 if mean > 0 else 0.0,
        "percentiles": {
            "p5": float(p5),
            "p25": float(p25),
            "p75": float(p75),
            "p95": float(p95),
        },
        "confidence_interval_95": {"lower": float(p2_5), "upper": float(p97_5)},
    }


def calc_emissions_inputs(
    conc_kg: float = 0.0,
    fert_n_kg: float = 0.0,
    plastic_kg: float = 0.0,
    feed_grain_dry_kg: float = 0.0,
    feed_grain_wet_kg: float = 0.0,
    feed_ration_kg: float = 0.0,
    feed_byproducts_kg: float = 0.0,
    feed_proteins_kg: float = 0.0,
    feed_corn_kg: float = 0.0,
    feed_soy_kg: float = 0.0,
    feed_wheat_kg: float = 0.0,
    region: str = "global",
    fert_type: str = "mixed",
    plastic_type: str = "mixed",
    transport_km: float | None = None,
    ef_conc: float | None = None,
    ef_fert: float | None = None,
    ef_plastic: float | None = None,
    include_uncertainty: bool = False,
    n_simulations: int | None = None,
    seed: int | None = None,
    boundaries: BoundaryScope | None = None,
    defaults: MethodDefaults | None = None,
) -> SourceResult:
    """Cradle-to-purchase emissions of bought-in inputs (kg CO2eq)."""
    defaults = defaults or DEFAULTS
    check_choice("region", region, INPUT_REGIONS)
    check_choice("fert_type", fert_type, FERTILIZER_TYPES)
    plastic_type = _normalise_plastic_type(plastic_type)

    feeds_kg = {
        "grain_dry": feed_grain_dry_kg,
        "grain_wet": feed_grain_wet_kg,
        "ration": feed_ration_kg,
        "byproducts": feed_byproducts_kg,
        "proteins": feed_proteins_kg,
        "corn": feed_corn_kg,
        "soy": feed_soy_kg,
        "wheat": feed_wheat_kg,
    }
    feeds_kg = {name: check_non_negative(f"feed_{name}_kg", value) or 0.0 for name, value in feeds_kg.items()}
    conc_kg = check_non_negative("conc_kg", conc_kg) or 0.0
    fert_n_kg = check_non_negative("fert_n_kg", fert_n_kg) or 0.0
    plastic_kg = check_non_negative("plastic_kg", plastic_kg) or 0.0
    transport_km = check_non_negative("transport_km", transport_km) or 0.0
    ef_conc = check_non_negative("ef_conc", ef_conc)
    ef_fert = check_non_negative("ef_fert", ef_fert)
    ef_plastic = check_non_negative("ef_plastic", ef_plastic)

    total_feeds_kg = sum(feeds_kg.values())
    inputs = {
        "concentrate_kg": conc_kg,
        "fertilizer_n_kg": fert_n_kg,
        "plastic_kg": plastic_kg,
        "total_feeds_kg": total_feeds_kg,
        "feed_breakdown_kg": feeds_kg,
        "region": region,
        "fert_type": fert_type,
        "plastic_type": plastic_type,
        "transport_km": transport_km,
    }
    boundary_info = boundaries.as_dict() if boundaries is not None else None

    if is_excluded(boundaries, SOURCE):
        return SourceResult(
            source=SOURCE,
            co2eq_kg=0.0,
            methodology="excluded_by_boundaries",
            emissions_breakdown={
                "concentrate_co2eq_kg": 0.0,
                "fertilizer_co2eq_kg": 0.0,
                "plastic_co2eq_kg": 0.0,
                "feeds_co2eq_kg": {name: 0.0 for name in FEED_CATEGORIES},
                "total_feeds_co2eq_kg": 0.0,
                "transport_adjustment_co2eq_kg": 0.0,
            },
            inputs=inputs,
            boundaries=boundary_info,
            excluded=True,
        )

    factors: dict[str, EmissionFactor] = {
        "concentrate": get_factor("feed:concentrate", region),
        "fertilizer": get_factor(f"fertilizer:{fert_type}", region),
        "plastic": get_factor(f"plastic:{plastic_type}", region),
    }
    for name in FEED_CATEGORIES:
        factors[name] = get_factor(f"feed:{name}", region)
    overrides = {"concentrate": ef_conc, "fertilizer": ef_fert, "plastic": ef_plastic}
    for name, value in overrides.items():
        if value is not None:
            factors[name] = EmissionFactor(value, factors[name].unit, "user override")

    conc_co2 = conc_kg * factors["concentrate"].value
    fert_co2 = fert_n_kg * factors["fertilizer"].value
    plastic_co2 = plastic_kg * factors["plastic"].value
    feed_co2 = {name: feeds_kg[name] * factors[name].value for name in FEED_CATEGORIES}
    total_feed_co2 = sum(feed_co2.values())

    transport_co2 = 0.0
    if transport_km > 0:
        transport_co2 = (conc_kg + total_feeds_kg) * transport_km * TRUCK_EF_KG_PER_KG_KM

    total = check_result_total(SOURCE, conc_co2 + fert_co2 + plastic_co2 + total_feed_co2 + transport_co2)

    metrics: dict[str, object] = {}
    if total > 0:
        metrics["contribution_analysis"] = {
            "concentrate_pct": conc_co2 / total * 100.0,
            "fertilizer_pct": fert_co2 / total * 100.0,
            "plastic_pct": plastic_co2 / total * 100.0,
            "feeds_pct": total_feed_co2 / total * 100.0,
            "transport_pct": transport_co2 / total * 100.0,
        }
    if boundaries is not None:
        metrics["upstream_feed_in_scope"] = boundaries.includes("feed")

    uncertainty = None
    if include_uncertainty:
        quantities = {"concentrate": conc_kg, "fertilizer": fert_n_kg, "plastic": plastic_kg, **feeds_kg}
        uncertainty = simulate_input_uncertainty(
            quantities,
            factors,
            fixed_co2eq_kg=transport_co2,
            n_simulations=n_simulations or defaults.n_simulations,
            seed=seed,
        )

    return SourceResult(
        source=SOURCE,
        co2eq_kg=total,
        methodology="Regional emission factors"
        + (" with Monte-Carlo uncertainty" if include_uncertainty else ""),
        emissions_breakdown={
            "concentrate_co2eq_kg": conc_co2,
            "fertilizer_co2eq_kg": fert_co2,
            "plastic_co2eq_kg": plastic_co2,
            "feeds_co2eq_kg": feed_co2,
            "total_feeds_co2eq_kg": total_feed_co2,
            "transport_adjustment_co2eq_kg": transport_co2,
        },
        emission_factors_used={
            name: {"value": factor.value, "unit": factor.unit, "source": factor.source_note}
            for name, factor in factors.items()
        },
        inputs=inputs,
        metrics=metrics,
        uncertainty=uncertainty,
        boundaries=boundary_info,
    )
