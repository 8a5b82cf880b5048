"""CO2 from on-farm fuel combustion and purchased electricity."""

from __future__ import annotations

from typing import Mapping

from .boundaries import BoundaryScope, is_excluded
from .constants import DEFAULT_COUNTRY, FUEL_ENERGY_KWH, FUELS
from .exceptions import ValidationError
from .registry import get_factor
from .results import SourceResult
from .validation import check_non_negative, check_result_total

SOURCE = "energy"

# keyword used for each carrier in energy_breakdown entries
_CARRIER_KEYS = {
    "diesel": "diesel_l",
    "petrol": "petrol_l",
    "lpg": "lpg_kg",
    "natural_gas": "natural_gas_m3",
    "electricity": "electricity_kwh",
}


def _sum_breakdown(
    energy_breakdown: Mapping[str, Mapping[str, float]],
) -> tuple[dict[str, float], dict[str, dict[str, float]]]:
    totals = {carrier: 0.0 for carrier in _CARRIER_KEYS}
    per_use: dict[str, dict[str, float]] = {}
    for use, quantities in energy_breakdown.items():
        if not isinstance(quantities, Mapping):
            raise TypeError(f"energy_breakdown[{use!r}] must be a mapping of carrier quantities")
        unknown = sorted(set(quantities) - set(_CARRIER_KEYS.values()))
        if unknown:
            raise ValidationError(
                f"energy_breakdown[{use!r}] has unknown keys {unknown}; "
                f"use {sorted(_CARRIER_KEYS.values())}"
            )
        per_use[use] = {}
        for carrier, key in _CARRIER_KEYS.items():
            value = check_non_negative(f"energy_breakdown[{use!r}][{key!r}]", quantities.get(key, 0.0))
            per_use[use][carrier] = value or 0.0
            totals[carrier] += value or 0.0
    return totals, per_use


def calc_emissions_energy(
    diesel_l: float = 0.0,
    petrol_l: float = 0.0,
    lpg_kg: float = 0.0,
    natural_gas_m3: float = 0.0,
    electricity_kwh: float = 0.0,
    country: str = DEFAULT_COUNTRY,
    ef_electricity: float | None = None,
    include_upstream: bool = False,
    energy_breakdown: Mapping[str, Mapping[str, float]] | None = None,
    boundaries: BoundaryScope | None = None,
) -> SourceResult:
    """Direct CO2 from fuels and electricity, optionally with upstream supply.

    Factors are already in kg CO2 per activity unit, so no GWP is applied.
    When ``energy_breakdown`` is given it maps a use (``milking``, ``cooling``
    ...) to carrier quantities and replaces the scalar arguments.
    """
    quantities = {
        "diesel": check_non_negative("diesel_l", diesel_l) or 0.0,
        "petrol": check_non_negative("petrol_l", petrol_l) or 0.0,
        "lpg": check_non_negative("lpg_kg", lpg_kg) or 0.0,
        "natural_gas": check_non_negative("natural_gas_m3", natural_gas_m3) or 0.0,
        "electricity": check_non_negative("electricity_kwh", electricity_kwh) or 0.0,
    }
    ef_electricity = check_non_negative("ef_electricity", ef_electricity)
    per_use: dict[str, dict[str, float]] | None = None
    if energy_breakdown:
        quantities, per_use = _sum_breakdown(energy_breakdown)

    inputs: dict[str, object] = {
        _CARRIER_KEYS[carrier]: value for carrier, value in quantities.items()
    }
    inputs.update({"country": country, "include_upstream": include_upstream})
    boundary_info = boundaries.as_dict() if boundaries is not None else None

    if is_excluded(boundaries, SOURCE):
        return SourceResult(
            source=SOURCE,
            co2eq_kg=0.0,
            methodology="excluded_by_boundaries",
            emissions_breakdown={f"{carrier}_co2_kg": 0.0 for carrier in _CARRIER_KEYS}
            | {"upstream_co2_kg": 0.0},
            inputs=inputs,
            boundaries=boundary_info,
            excluded=True,
        )

    factors: dict[str, float] = {fuel: get_factor(f"fuel:{fuel}").value for fuel in FUELS}
    if ef_electricity is None:
        factors["electricity"] = get_factor("electricity", country).value
    else:
        factors["electricity"] = ef_electricity

    direct = {carrier: quantities[carrier] * factors[carrier] for carrier in _CARRIER_KEYS}
    upstream = 0.0
    if include_upstream:
        upstream = sum(
            direct[carrier] * get_factor(f"upstream:{carrier}").value for carrier in _CARRIER_KEYS
        )
    co2_total = check_result_total(SOURCE, sum(direct.values()) + upstream)

    fuel_kwh = sum(quantities[fuel] * FUEL_ENERGY_KWH[fuel] for fuel in FUELS)
    total_kwh = fuel_kwh + quantities["electricity"]
    metrics: dict[str, object] = {"total_energy_kwh": total_kwh}
    if total_kwh > 0:
        metrics["electricity_share_pct"] = quantities["electricity"] / total_kwh * 100.0
        metrics["fossil_share_pct"] = fuel_kwh / total_kwh * 100.0
        metrics["co2_intensity_kg_per_mwh"] = co2_total / (total_kwh / 1000.0)
    if per_use is not None:
        metrics["co2_by_use_kg"] = {
            use: sum(values[carrier] * factors[carrier] for carrier in _CARRIER_KEYS)
            for use, values in per_use.items()
        }

    breakdown = {f"{carrier}_co2_kg": value for carrier, value in direct.items()}
    breakdown["upstream_co2_kg"] = upstream
    return SourceResult(
        source=SOURCE,
        co2eq_kg=co2_total,
        methodology="Direct combustion factors" + (" + upstream" if include_upstream else ""),
        emissions_breakdown=breakdown,
        emission_factors_used={
            carrier: {
                "value": value,
                "unit": "kg CO2 kWh-1" if carrier == "electricity" else get_factor(f"fuel:{carrier}").unit,
            }
            for carrier, value in factors.items()
        },
        inputs=inputs,
        metrics=metrics,
        boundaries=boundary_info,
    )
