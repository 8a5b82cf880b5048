"""Plain-text renderings of result objects."""

from __future__ import annotations

from typing import TypeVar

from .results import (
    AreaIntensityResult,
    BatchRunResult,
    IntensityResult,
    SourceResult,
    TotalResult,
)

T = TypeVar("T")


def format_source(result: SourceResult) -> str:
    total = "excluded" if result.co2eq_kg is None else f"{result.co2eq_kg:,.1f} kg CO2eq"
    lines = [f"{result.source}: {total}", f"  methodology: {result.methodology}"]
    for key, value in result.emissions_breakdown.items():
        if isinstance(value, (int, float)):
            lines.append(f"  {key}: {value:,.2f}")
    return "\n".join(lines)


def format_total(total: TotalResult) -> str:
    lines = [
        "Farm emissions",
        f"  total: {total.total_co2eq:,.1f} {total.unit}",
        f"  sources: {total.n_sources}",
    ]
    for source, value, _unit in total.by_source:
        share = value / total.total_co2eq * 100.0 if total.total_co2eq > 0 else 0.0
        lines.append(f"  - {source:<8} {value:>14,.1f}  ({share:4.1f}%)")
    return "\n".join(lines)


def format_intensity(result: IntensityResult) -> str:
    return "\n".join(
        [
            "Milk intensity",
            f"  {result.intensity_co2eq_per_kg_fpcm:.3f} kg CO2eq / kg FPCM",
            f"  milk: {result.milk_production_litres:,.0f} L = {result.milk_production_kg:,.0f} kg",
            f"  FPCM: {result.fpcm_production_kg:,.0f} kg "
            f"(fat {result.fat_percent:g}%, protein {result.protein_percent:g}%)",
        ]
    )


def format_area_intensity(result: AreaIntensityResult) -> str:
    lines = [
        "Area intensity",
        f"  per total ha: {result.intensity_per_total_ha:,.2f} kg CO2eq/ha",
        f"  per productive ha: {result.intensity_per_productive_ha:,.2f} kg CO2eq/ha",
        f"  land use efficiency: {result.land_use_efficiency:.2f}",
    ]
    if result.area_breakdown:
        for name, entry in result.area_breakdown.items():
            lines.append(
                f"  - {name}: {entry['area_ha']:g} ha ({entry['percentage']:.1f}%), "
                f"{entry['emissions_co2eq_kg']:,.0f} kg CO2eq"
            )
    if result.benchmark is not None:
        lines.append(
            f"  benchmark ({result.benchmark.region}): {result.benchmark.performance_category}"
        )
    lines.extend(f"  warning: {message}" for message in result.warnings)
    return "\n".join(lines)


def format_batch(result: BatchRunResult) -> str:
    summary = result.summary
    lines = [
        f"Batch run {summary.processing_date.isoformat()} ({summary.boundaries_used})",
        f"  processed: {summary.n_farms_processed}",
        f"  successful: {summary.n_farms_successful}",
        f"  with errors: {summary.n_farms_with_errors}",
    ]
    for failure in result.failures():
        lines.append(f"  ! {failure.farm_id}: {failure.error}")
    return "\n".join(lines)


_FORMATTERS = (
    (TotalResult, format_total),
    (IntensityResult, format_intensity),
    (AreaIntensityResult, format_area_intensity),
    (BatchRunResult, format_batch),
    (SourceResult, format_source),
)


def format_result(obj: object) -> str:
    for kind, formatter in _FORMATTERS:
        if isinstance(obj, kind):
            return formatter(obj)
    raise TypeError(f"No text view for {type(obj).__name__}")


def print_result(obj: T) -> T:
    """Print ``obj`` and hand it back unchanged."""
    print(format_result(obj))
    return obj
