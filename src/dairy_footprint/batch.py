"""Run the full emissions pipeline over a table of farms.

Each row goes through the five source calculators, the aggregator and both
intensity calculators. A failure in one farm is logged and recorded as a
:class:`FarmFailure`; the remaining farms are still processed and the output
keeps the input row order.
"""

from __future__ import annotations

import datetime as dt
import logging
import math
from pathlib import Path
from typing import Any, Iterable, Mapping

import pandas as pd

from .aggregate import calc_total_emissions
from .boundaries import BoundaryScope, set_system_boundaries
from .config import DEFAULTS, MethodDefaults, load_config
from .constants import (
    AREA_BENCHMARKS,
    CATTLE_CATEGORIES,
    DEFAULT_COUNTRY,
    DEFAULT_INPUT_REGION,
    FEED_COLUMNS,
    HERD_COLUMNS,
    LAND_USE_COLUMNS,
    REQUIRED_COLUMNS,
)
from .energy import calc_emissions_energy
from .enteric import calc_emissions_enteric_herd
from .exceptions import ValidationError
from .inputs import calc_emissions_inputs
from .intensity import benchmark_area_intensity, calc_intensity_area, calc_intensity_litre
from .manure import calc_emissions_manure
from .results import BatchRunResult, BatchSummary, FarmFailure, FarmRecord, FarmSuccess
from .soil import calc_emissions_soil
from .validation import check_tier

LOGGER = logging.getLogger("dairy_footprint.batch")

FARM_ERRORS = (ValueError, ArithmeticError, KeyError, TypeError)

_HERD_COUNT_COLUMNS = {
    "heifers": "Heifers_total",
    "calves": "Calves_total",
    "bulls": "Bulls_total",
}


def _cell(row: Mapping[str, Any], column: str) -> Any:
    value = row.get(column)
    if value is None:
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _number(row: Mapping[str, Any], column: str) -> float | None:
    value = _cell(row, column)
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{column} must be numeric (got {value!r})") from None


def _text(row: Mapping[str, Any], column: str, default: str) -> str:
    value = _cell(row, column)
    return default if value is None else str(value).strip()


def _farm_id(row: Mapping[str, Any], position: int) -> str:
    value = _cell(row, "FarmID")
    return f"farm_{position + 1}" if value is None else str(value)


def _year(row: Mapping[str, Any]) -> int | None:
    value = _cell(row, "Year")
    try:
        return None if value is None else int(value)
    except (TypeError, ValueError):
        return None


def process_farm(
    row: Mapping[str, Any],
    position: int,
    *,
    tier: int,
    boundaries: BoundaryScope,
    benchmark_region: str | None = None,
    save_detailed_objects: bool = False,
    processing_date: dt.date | None = None,
    defaults: MethodDefaults | None = None,
) -> FarmSuccess:
    """Run every calculator for one farm row and build its success record."""
    defaults = defaults or DEFAULTS
    farm_id = _farm_id(row, position)

    milk_litres = _number(row, "Milk_litres")
    if milk_litres is None:
        raise ValidationError("Milk_litres is required")

    cows_milking = _number(row, "Cows_milking")
    if cows_milking is None:
        raise ValidationError("Cows_milking is required")
    dairy_cows = cows_milking + (_number(row, "Cows_dry") or 0.0)
    herd = {"dairy_cows": dairy_cows}
    for category, column in _HERD_COUNT_COLUMNS.items():
        herd[category] = _number(row, column) or 0.0
    body_weights = {
        category: _number(row, HERD_COLUMNS[category]["body_weight"]) for category in CATTLE_CATEGORIES
    }
    intakes = {category: _number(row, HERD_COLUMNS[category]["intake"]) for category in CATTLE_CATEGORIES}
    total_animals = sum(herd.values())

    enteric = calc_emissions_enteric_herd(
        herd,
        production_system=_text(row, "Production_system", "mixed"),
        body_weights=body_weights,
        dry_matter_intakes=intakes,
        avg_milk_yield=_number(row, "Milk_yield_kg_cow_year"),
        ym_percent=_number(row, "Ym_percent"),
        tier=tier,
        boundaries=boundaries,
        defaults=defaults,
    )
    manure = calc_emissions_manure(
        total_animals,
        manure_system=_text(row, "Manure_system", "pasture"),
        climate=_text(row, "Climate", "temperate"),
        n_excreted=_number(row, "N_excreted_per_cow_kg"),
        include_indirect=True,
        tier=tier,
        boundaries=boundaries,
        defaults=defaults,
    )
    area_total = _number(row, "Area_total_ha")
    soil = calc_emissions_soil(
        n_fertilizer_synthetic=_number(row, "N_fertilizer_kg") or 0.0,
        n_fertilizer_organic=_number(row, "N_fertilizer_organic_kg") or 0.0,
        n_excreta_pasture=_number(row, "N_excreta_pasture_kg") or 0.0,
        n_crop_residues=_number(row, "N_crop_residues_kg") or 0.0,
        area_ha=area_total,
        soil_type=_text(row, "Soil_type", "well_drained"),
        climate=_text(row, "Climate_zone", "temperate"),
        include_indirect=True,
        tier=tier,
        boundaries=boundaries,
        defaults=defaults,
    )
    energy = calc_emissions_energy(
        diesel_l=_number(row, "Diesel_litres") or 0.0,
        petrol_l=_number(row, "Petrol_litres") or 0.0,
        lpg_kg=_number(row, "LPG_kg") or 0.0,
        natural_gas_m3=_number(row, "Natural_gas_m3") or 0.0,
        electricity_kwh=_number(row, "Electricity_kWh") or 0.0,
        country=_text(row, "Country", DEFAULT_COUNTRY),
        boundaries=boundaries,
    )
    feed_kwargs = {keyword: _number(row, column) or 0.0 for keyword, column in FEED_COLUMNS.items()}
    inputs = calc_emissions_inputs(
        conc_kg=_number(row, "Concentrate_feed_kg") or 0.0,
        fert_n_kg=_number(row, "N_fertilizer_kg") or 0.0,
        plastic_kg=_number(row, "Plastic_kg") or 0.0,
        region=_text(row, "Region", DEFAULT_INPUT_REGION),
        transport_km=_number(row, "Transport_km"),
        boundaries=boundaries,
        defaults=defaults,
        **feed_kwargs,
    )

    total = calc_total_emissions(enteric, manure, soil, energy, inputs)
    milk = calc_intensity_litre(
        total,
        milk_litres,
        fat=_number(row, "Fat_percent"),
        protein=_number(row, "Protein_percent"),
        milk_density=_number(row, "Milk_density"),
        defaults=defaults,
    )

    area = None
    if area_total is not None:
        land_use = {
            name: _number(row, column)
            for name, column in LAND_USE_COLUMNS.items()
            if _number(row, column) is not None
        }
        area = calc_intensity_area(
            total,
            area_total,
            area_productive_ha=_number(row, "Area_productive_ha"),
            area_breakdown=land_use or None,
            defaults=defaults,
        )
        if benchmark_region:
            area = benchmark_area_intensity(area, benchmark_region)

    details = None
    if save_detailed_objects:
        details = {
            "enteric": enteric,
            "manure": manure,
            "soil": soil,
            "energy": energy,
            "inputs": inputs,
            "total": total,
            "intensity_milk": milk,
            "intensity_area": area,
        }

    return FarmSuccess(
        farm_id=farm_id,
        year=_year(row),
        emissions_enteric=enteric.co2eq_kg,
        emissions_manure=manure.co2eq_kg or 0.0,
        emissions_soil=soil.co2eq_kg or 0.0,
        emissions_energy=energy.co2eq_kg or 0.0,
        emissions_inputs=inputs.co2eq_kg or 0.0,
        emissions_total=total.total_co2eq,
        intensity_milk_kg_co2eq_per_kg_fpcm=milk.intensity_co2eq_per_kg_fpcm,
        fpcm_production_kg=milk.fpcm_production_kg,
        milk_production_kg=milk.milk_production_kg,
        milk_production_litres=milk.milk_production_litres,
        intensity_area_kg_co2eq_per_ha_total=area.intensity_per_total_ha if area else None,
        intensity_area_kg_co2eq_per_ha_productive=area.intensity_per_productive_ha if area else None,
        land_use_efficiency=area.land_use_efficiency if area else None,
        total_animals=total_animals,
        dairy_cows=dairy_cows,
        benchmark_region=benchmark_region,
        benchmark_performance=(
            area.benchmark.performance_category if area is not None and area.benchmark else None
        ),
        boundaries_used=boundaries.scope,
        tier_used=f"tier_{tier}",
        processing_date=processing_date or dt.date.today(),
        detailed_objects=details,
    )


def _as_frame(farm_table: pd.DataFrame | Iterable[Mapping[str, Any]]) -> pd.DataFrame:
    if isinstance(farm_table, pd.DataFrame):
        return farm_table
    return pd.DataFrame(list(farm_table))


def run_batch(
    farm_table: pd.DataFrame | Iterable[Mapping[str, Any]],
    tier: int = 1,
    boundaries: BoundaryScope | None = None,
    benchmark_region: str | None = None,
    save_detailed_objects: bool = False,
    defaults: MethodDefaults | None = None,
) -> BatchRunResult:
    """Process every farm row and return the run summary with per-farm records.

    The table, the tier and the benchmark region are checked before any farm
    is touched; those failures abort the whole run. Per-farm failures do not.
    """
    frame = _as_frame(farm_table)
    if frame.empty:
        raise ValueError("farm table is empty")
    tier = check_tier(tier)
    missing = [column for column in REQUIRED_COLUMNS if column not in frame.columns]
    if missing:
        raise ValidationError(f"farm table is missing required columns: {missing}")
    if benchmark_region is not None:
        benchmark_region = str(benchmark_region).strip().lower()
        if benchmark_region not in AREA_BENCHMARKS:
            raise ValidationError(
                f"benchmark_region must be one of: {', '.join(AREA_BENCHMARKS)} (got {benchmark_region!r})"
            )
    boundaries = boundaries or set_system_boundaries("farm_gate")
    processing_date = dt.date.today()

    LOGGER.info("Processing %d farm(s) at tier %d (%s)", len(frame), tier, boundaries.describe())
    records: list[FarmRecord | None] = [None] * len(frame)
    for position, row in enumerate(frame.to_dict(orient="records")):
        farm_id = _farm_id(row, position)
        try:
            records[position] = process_farm(
                row,
                position,
                tier=tier,
                boundaries=boundaries,
                benchmark_region=benchmark_region,
                save_detailed_objects=save_detailed_objects,
                processing_date=processing_date,
                defaults=defaults,
            )
            LOGGER.info("  • farm '%s' done", farm_id)
        except FARM_ERRORS as exc:
            LOGGER.warning("Farm '%s' failed: %s", farm_id, exc)
            records[position] = FarmFailure(
                farm_id=farm_id,
                year=_year(row),
                error=str(exc),
                processing_date=processing_date,
            )

    farm_results = tuple(record for record in records if record is not None)
    n_ok = sum(1 for record in farm_results if isinstance(record, FarmSuccess))
    summary = BatchSummary(
        n_farms_processed=len(farm_results),
        n_farms_successful=n_ok,
        n_farms_with_errors=len(farm_results) - n_ok,
        boundaries_used=boundaries.scope,
        benchmark_region=benchmark_region,
        processing_date=processing_date,
    )
    LOGGER.info(
        "Batch finished: %d successful, %d with errors",
        summary.n_farms_successful,
        summary.n_farms_with_errors,
    )
    return BatchRunResult(summary=summary, farm_results=farm_results)


def read_farm_table(path: Path | str) -> pd.DataFrame:
    """Load a farm table from ``.csv`` or ``.xlsx``."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Farm table not found: {path}")
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return pd.read_csv(path, comment="#")
    if suffix in {".xlsx", ".xls"}:
        return pd.read_excel(path, sheet_name=0)
    raise ValueError(f"Unsupported farm table format '{path.suffix}'; use .csv or .xlsx")


def run_from_config(
    config_path: Path | str | None = None,
    *,
    input_file: Path | str | None = None,
    output_file: Path | str | None = None,
) -> BatchRunResult:
    """Run a batch described by the ``batch`` section of ``config.yaml``.

    ``input_file`` and ``output_file`` override the configured paths. Relative
    paths resolve against the directory of the config file.
    """
    from config_paths import resolve_path  # local import to avoid cycle

    from .writers import export_report

    config = load_config(config_path)
    module_cfg = config.get("batch")
    if not module_cfg:
        raise ValueError("'batch' section missing from config.yaml")
    defaults = MethodDefaults.from_mapping(config.get("defaults"))

    boundary_cfg = module_cfg.get("boundary") or {}
    boundaries = set_system_boundaries(
        boundary_cfg.get("scope", "farm_gate"),
        boundary_cfg.get("include"),
    )

    source = input_file or module_cfg.get("input_file")
    if not source:
        raise ValueError("'batch.input_file' must point to a farm table")
    source_path = resolve_path(source, config)
    LOGGER.info("Reading farm table %s", source_path)
    table = read_farm_table(source_path)

    result = run_batch(
        table,
        tier=int(module_cfg.get("tier", 1)),
        boundaries=boundaries,
        benchmark_region=module_cfg.get("benchmark_region"),
        save_detailed_objects=bool(module_cfg.get("include_details", False)),
        defaults=defaults,
    )

    destination = output_file or module_cfg.get("output_file")
    if destination:
        dest_path = resolve_path(destination, config)
        export_report(result, dest_path, include_details=bool(module_cfg.get("include_details", False)))
        LOGGER.info("Report written to %s", dest_path)
    return result
