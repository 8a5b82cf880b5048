"""Per-kg-milk and per-hectare emission intensities."""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Any, Mapping

from .aggregate import resolve_total
from .config import DEFAULTS, MethodDefaults
from .constants import (
    AREA_BENCHMARKS,
    BENCHMARK_CATEGORIES,
    FPCM_CONSTANT,
    FPCM_FAT_COEFF,
    FPCM_PROTEIN_COEFF,
)
from .exceptions import ValidationError
from .results import AreaIntensityResult, Benchmark, IntensityResult, TotalResult
from .validation import check_non_negative, check_positive

LOGGER = logging.getLogger("dairy_footprint.intensity")


def _total_emissions(total: float | TotalResult | Mapping[str, Any]) -> float:
    if isinstance(total, TotalResult):
        value = total.total_co2eq
    elif isinstance(total, Mapping):
        value = resolve_total(total, str(total.get("source", "total")))
    else:
        try:
            value = float(total)
        except (TypeError, ValueError):
            raise ValidationError(f"total emissions must be numeric (got {total!r})") from None
    if not math.isfinite(value) or value < 0:
        raise ValidationError(f"total emissions must be a finite number >= 0 (got {value!r})")
    return value


def fpcm_kg(milk_kg: float, fat_percent: float, protein_percent: float) -> float:
    """Fat- and protein-corrected milk (IDF 2022)."""
    return milk_kg * (
        FPCM_FAT_COEFF * fat_percent + FPCM_PROTEIN_COEFF * protein_percent + FPCM_CONSTANT
    )


def calc_intensity_litre(
    total_emissions: float | TotalResult | Mapping[str, Any],
    milk_litres: float,
    fat: float | None = None,
    protein: float | None = None,
    milk_density: float | None = None,
    defaults: MethodDefaults | None = None,
) -> IntensityResult:
    """kg CO2eq per kg FPCM."""
    defaults = defaults or DEFAULTS
    total = _total_emissions(total_emissions)
    milk_litres = check_positive("milk_litres", milk_litres)
    fat = check_non_negative("fat", fat)
    protein = check_non_negative("protein", protein)
    milk_density = check_positive("milk_density", milk_density)
    fat = defaults.fat_percent if fat is None else fat
    protein = defaults.protein_percent if protein is None else protein
    milk_density = defaults.milk_density if milk_density is None else milk_density

    milk_kg = milk_litres * milk_density
    fpcm = fpcm_kg(milk_kg, fat, protein)
    if fpcm <= 0:
        raise ValidationError(f"FPCM production must be > 0 (got {fpcm!r})")
    return IntensityResult(
        intensity_co2eq_per_kg_fpcm=total / fpcm,
        fpcm_production_kg=fpcm,
        milk_production_kg=milk_kg,
        milk_production_litres=milk_litres,
        fat_percent=fat,
        protein_percent=protein,
        milk_density_kg_per_l=milk_density,
        total_emissions_co2eq=total,
    )


def calc_intensity_area(
    total_emissions: float | TotalResult | Mapping[str, Any],
    area_total_ha: float,
    area_productive_ha: float | None = None,
    area_breakdown: Mapping[str, float] | None = None,
    validate_area_sum: bool = True,
    tolerance: float | None = None,
    defaults: MethodDefaults | None = None,
) -> AreaIntensityResult:
    """kg CO2eq per hectare of total and productive land.

    ``area_breakdown`` maps land-use names to hectares. Each use gets its share
    of the area and the same share of emissions. A breakdown that does not add
    up to ``area_total_ha`` within ``tolerance`` (relative) is reported in
    ``warnings`` rather than rejected.
    """
    defaults = defaults or DEFAULTS
    total = _total_emissions(total_emissions)
    area_total_ha = check_positive("area_total_ha", area_total_ha)
    area_productive_ha = check_positive("area_productive_ha", area_productive_ha)
    productive = area_total_ha if area_productive_ha is None else area_productive_ha
    tolerance = defaults.area_tolerance if tolerance is None else tolerance

    warnings: list[str] = []
    if productive > area_total_ha:
        message = (
            f"Productive area ({productive:g} ha) exceeds total area ({area_total_ha:g} ha)"
        )
        LOGGER.warning("%s", message)
        warnings.append(message)

    allocation: dict[str, dict[str, float]] | None = None
    if area_breakdown:
        hectares = {
            name: check_non_negative(f"area_breakdown[{name!r}]", value) or 0.0
            for name, value in area_breakdown.items()
        }
        summed = sum(hectares.values())
        if validate_area_sum and abs(summed - area_total_ha) > tolerance * area_total_ha:
            message = (
                f"Area breakdown sums to {summed:g} ha but area_total_ha is {area_total_ha:g} ha"
            )
            LOGGER.warning("%s", message)
            warnings.append(message)
        if summed > 0:
            allocation = {
                name: {
                    "area_ha": value,
                    "percentage": value / summed * 100.0,
                    "emissions_co2eq_kg": total * value / summed,
                }
                for name, value in hectares.items()
            }

    return AreaIntensityResult(
        intensity_per_total_ha=total / area_total_ha,
        intensity_per_productive_ha=total / productive,
        land_use_efficiency=productive / area_total_ha,
        area_total_ha=area_total_ha,
        area_productive_ha=productive,
        total_emissions_co2eq=total,
        area_breakdown=allocation,
        warnings=warnings,
    )


def classify_ratio(ratio: float) -> str:
    for upper, label in BENCHMARK_CATEGORIES:
        if ratio <= upper:
            return label
    return "needs_improvement"


def benchmark_area_intensity(area_result: AreaIntensityResult, region: str) -> AreaIntensityResult:
    """Attach a regional performance label; emissions are left untouched."""
    key = str(region).strip().lower()
    if key not in AREA_BENCHMARKS:
        raise ValidationError(
            f"benchmark region must be one of: {', '.join(AREA_BENCHMARKS)} (got {region!r})"
        )
    reference = AREA_BENCHMARKS[key]
    ratio = area_result.intensity_per_productive_ha / reference
    benchmark = Benchmark(
        region=key,
        reference_kg_co2eq_per_ha=reference,
        ratio=ratio,
        performance_category=classify_ratio(ratio),
    )
    return replace(area_result, benchmark=benchmark)
