from __future__ import annotations

import datetime as dt
import logging
import re
from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any, Iterator

import pandas as pd

from .constants import CO2EQ_UNIT, TEMPLATE_COLUMNS
from .results import BatchRunResult, FarmFailure, FarmSuccess

LOGGER = logging.getLogger("dairy_footprint.writers")

EXAMPLE_FARMS: tuple[dict[str, object], ...] = (
    {
        "FarmID": "Farm_001",
        "Year": 2023,
        "Milk_litres": 750000,
        "Fat_percent": 3.9,
        "Protein_percent": 3.2,
        "Milk_density": 1.03,
        "Cows_milking": 120,
        "Cows_dry": 25,
        "Heifers_total": 40,
        "Calves_total": 60,
        "Bulls_total": 5,
        "Milk_yield_kg_cow_year": 6000,
        "Body_weight_cows_kg": 550,
        "Body_weight_heifers_kg": 350,
        "Body_weight_calves_kg": 150,
        "Body_weight_bulls_kg": 700,
        "MS_intake_cows_kg_day": 17,
        "MS_intake_heifers_kg_day": 10,
        "MS_intake_calves_kg_day": 5,
        "MS_intake_bulls_kg_day": 12,
        "Ym_percent": 6.5,
        "Production_system": "mixed",
        "Manure_system": "pasture",
        "Climate": "temperate",
        "N_excreted_per_cow_kg": 100,
        "N_fertilizer_kg": 8000,
        "N_fertilizer_organic_kg": 0,
        "N_excreta_pasture_kg": 0,
        "N_crop_residues_kg": 0,
        "Area_total_ha": 150,
        "Area_productive_ha": 140,
        "Soil_type": "well_drained",
        "Climate_zone": "temperate",
        "Pasture_permanent_ha": 100,
        "Pasture_temporary_ha": 20,
        "Crops_feed_ha": 15,
        "Crops_cash_ha": 0,
        "Infrastructure_ha": 5,
        "Woodland_ha": 10,
        "Diesel_litres": 8500,
        "Petrol_litres": 1200,
        "Electricity_kWh": 45000,
        "LPG_kg": 500,
        "Natural_gas_m3": 0,
        "Country": "UY",
        "Region": "global",
        "Concentrate_feed_kg": 230000,
        "Plastic_kg": 400,
        "Feed_grain_dry_kg": 120000,
        "Feed_grain_wet_kg": 60000,
        "Feed_ration_kg": 100000,
        "Feed_byproducts_kg": 30000,
        "Feed_proteins_kg": 25000,
        "Feed_corn_kg": 0,
        "Feed_soy_kg": 0,
        "Feed_wheat_kg": 0,
        "Transport_km": 0,
    },
    {
        "FarmID": "Farm_002",
        "Year": 2023,
        "Milk_litres": 450000,
        "Fat_percent": 4.1,
        "Protein_percent": 3.4,
        "Milk_density": 1.03,
        "Cows_milking": 85,
        "Cows_dry": 18,
        "Heifers_total": 25,
        "Calves_total": 35,
        "Bulls_total": 3,
        "Milk_yield_kg_cow_year": 5200,
        "Body_weight_cows_kg": 520,
        "Body_weight_heifers_kg": 340,
        "Body_weight_calves_kg": 140,
        "Body_weight_bulls_kg": 680,
        "MS_intake_cows_kg_day": 15,
        "MS_intake_heifers_kg_day": 9,
        "MS_intake_calves_kg_day": 4,
        "MS_intake_bulls_kg_day": 11,
        "Ym_percent": 6.5,
        "Production_system": "extensive",
        "Manure_system": "pasture",
        "Climate": "temperate",
        "N_excreted_per_cow_kg": 95,
        "N_fertilizer_kg": 5000,
        "N_fertilizer_organic_kg": 0,
        "N_excreta_pasture_kg": 0,
        "N_crop_residues_kg": 0,
        "Area_total_ha": 95,
        "Area_productive_ha": 90,
        "Soil_type": "poorly_drained",
        "Climate_zone": "temperate",
        "Pasture_permanent_ha": 60,
        "Pasture_temporary_ha": 15,
        "Crops_feed_ha": 10,
        "Crops_cash_ha": 0,
        "Infrastructure_ha": 3,
        "Woodland_ha": 7,
        "Diesel_litres": 5000,
        "Petrol_litres": 800,
        "Electricity_kWh": 30000,
        "LPG_kg": 300,
        "Natural_gas_m3": 0,
        "Country": "UY",
        "Region": "global",
        "Concentrate_feed_kg": 130000,
        "Plastic_kg": 250,
        "Feed_grain_dry_kg": 80000,
        "Feed_grain_wet_kg": 40000,
        "Feed_ration_kg": 70000,
        "Feed_byproducts_kg": 20000,
        "Feed_proteins_kg": 15000,
        "Feed_corn_kg": 0,
        "Feed_soy_kg": 0,
        "Feed_wheat_kg": 0,
        "Transport_km": 0,
    },
)


def write_template(path: Path | str, include_examples: bool = True) -> Path:
    """Write the farm-table template (``.xlsx`` or ``.csv``) and return its path."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    rows = list(EXAMPLE_FARMS) if include_examples else []
    df = pd.DataFrame(rows, columns=list(TEMPLATE_COLUMNS))
    if path.suffix.lower() == ".csv":
        df.to_csv(path, index=False)
    else:
        df.to_excel(path, index=False, sheet_name="Farms", engine="openpyxl")
    LOGGER.info("Template saved to %s", path)
    return path


def _summary_frame(result: BatchRunResult) -> pd.DataFrame:
    summary = result.summary
    rows = [
        ("Farms processed", summary.n_farms_processed),
        ("Farms successful", summary.n_farms_successful),
        ("Farms with errors", summary.n_farms_with_errors),
        ("Boundaries", summary.boundaries_used),
        ("Benchmark region", summary.benchmark_region or ""),
        ("Processing date", summary.processing_date.isoformat()),
    ]
    successes = result.successes()
    if successes:
        totals = [record.emissions_total for record in successes]
        intensities = [record.intensity_milk_kg_co2eq_per_kg_fpcm for record in successes]
        rows.extend(
            [
                (f"Mean total emissions ({CO2EQ_UNIT})", sum(totals) / len(totals)),
                ("Mean intensity (kg CO2eq/kg FPCM)", sum(intensities) / len(intensities)),
            ]
        )
    return pd.DataFrame(rows, columns=["Metric", "Value"])


def farm_results_frame(result: BatchRunResult) -> pd.DataFrame:
    """One row per farm; failed farms carry only FarmID, Year and Error."""
    rows: list[dict[str, Any]] = []
    for record in result.farm_results:
        if isinstance(record, FarmSuccess):
            data = record.as_dict()
            data["processing_date"] = record.processing_date.isoformat()
            rows.append({"FarmID": data.pop("farm_id"), "Year": data.pop("year"), **data})
        elif isinstance(record, FarmFailure):
            rows.append(
                {"FarmID": record.farm_id, "Year": record.year, "success": False, "Error": record.error}
            )
    return pd.DataFrame(rows)


def _flatten(prefix: str, value: Any) -> Iterator[tuple[str, Any]]:
    if is_dataclass(value) and not isinstance(value, type):
        value = asdict(value)
    if isinstance(value, dict):
        for key, item in value.items():
            yield from _flatten(f"{prefix}.{key}" if prefix else str(key), item)
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            yield from _flatten(f"{prefix}[{index}]", item)
    elif isinstance(value, dt.date):
        yield prefix, value.isoformat()
    else:
        yield prefix, value


def _detail_frame(details: dict[str, Any]) -> pd.DataFrame:
    rows = []
    for section, obj in details.items():
        if obj is None:
            continue
        for item, value in _flatten("", obj):
            rows.append({"Section": section, "Item": item, "Value": value})
    return pd.DataFrame(rows, columns=["Section", "Item", "Value"])


def _sheet_name(farm_id: str, used: set[str]) -> str:
    base = "Farm_" + re.sub(r"[\[\]:*?/\\]", "_", farm_id)
    name = base[:31]
    counter = 2
    while name in used:
        suffix = f"_{counter}"
        name = base[: 31 - len(suffix)] + suffix
        counter += 1
    used.add(name)
    return name


def export_report(result: BatchRunResult, path: Path | str, include_details: bool = False) -> Path:
    """Write a batch report and return its path.

    ``.xlsx`` files get ``Summary`` and ``Farm_results`` sheets, plus one
    sheet per farm when ``include_details`` is set and the batch kept its
    detailed objects. ``.csv`` files get the farm results only.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    farms = farm_results_frame(result)

    if path.suffix.lower() == ".csv":
        with path.open("w", encoding="utf-8") as fh:
            fh.write(f"# unit: {CO2EQ_UNIT}\n")
            farms.to_csv(fh, index=False)
        return path

    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        _summary_frame(result).to_excel(writer, sheet_name="Summary", index=False)
        farms.to_excel(writer, sheet_name="Farm_results", index=False)
        if include_details:
            used: set[str] = {"Summary", "Farm_results"}
            for record in result.successes():
                if not record.detailed_objects:
                    LOGGER.info(
                        "No detailed objects stored for farm '%s'; run the batch with "
                        "save_detailed_objects=True to include them",
                        record.farm_id,
                    )
                    continue
                _detail_frame(record.detailed_objects).to_excel(
                    writer, sheet_name=_sheet_name(record.farm_id, used), index=False
                )
    LOGGER.info("Report saved to %s", path)
    return path
