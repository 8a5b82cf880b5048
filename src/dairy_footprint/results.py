"""Result containers returned by calculators, the aggregator and the batch runner."""

from __future__ import annotations

import datetime as dt
from dataclasses import asdict, dataclass, field
from typing import Any, Union

import pandas as pd

from .constants import CO2EQ_UNIT


@dataclass
class SourceResult:
    """Output of one source calculator.

    ``co2eq_kg`` is ``None`` only for an enteric result excluded by the
    boundary scope; every other excluded source reports ``0.0``.
    """

    source: str
    co2eq_kg: float | None
    methodology: str
    emissions_breakdown: dict[str, Any] = field(default_factory=dict)
    emission_factors_used: dict[str, Any] = field(default_factory=dict)
    inputs: dict[str, Any] = field(default_factory=dict)
    metrics: dict[str, Any] = field(default_factory=dict)
    uncertainty: dict[str, Any] | None = None
    boundaries: dict[str, Any] | None = None
    excluded: bool = False
    date: dt.date = field(default_factory=dt.date.today)

    @property
    def total_co2eq_kg(self) -> float | None:
        return self.co2eq_kg

    def as_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["total_co2eq_kg"] = self.co2eq_kg
        return data


@dataclass
class TotalResult:
    """Farm total across sources."""

    total_co2eq: float
    breakdown: dict[str, float]
    by_source: list[tuple[str, float, str]]
    n_sources: int
    unit: str = CO2EQ_UNIT
    date: dt.date = field(default_factory=dt.date.today)

    @property
    def co2eq_kg(self) -> float:
        return self.total_co2eq

    @property
    def total_co2eq_kg(self) -> float:
        return self.total_co2eq

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(self.by_source, columns=["source", "co2eq_kg", "unit"])


@dataclass
class IntensityResult:
    """Emissions per kg of fat- and protein-corrected milk."""

    intensity_co2eq_per_kg_fpcm: float
    fpcm_production_kg: float
    milk_production_kg: float
    milk_production_litres: float
    fat_percent: float
    protein_percent: float
    milk_density_kg_per_l: float
    total_emissions_co2eq: float
    date: dt.date = field(default_factory=dt.date.today)

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class AreaIntensityResult:
    """Emissions per hectare, with an optional land-use allocation."""

    intensity_per_total_ha: float
    intensity_per_productive_ha: float
    land_use_efficiency: float
    area_total_ha: float
    area_productive_ha: float
    total_emissions_co2eq: float
    area_breakdown: dict[str, dict[str, float]] | None = None
    warnings: list[str] = field(default_factory=list)
    benchmark: "Benchmark | None" = None
    date: dt.date = field(default_factory=dt.date.today)

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Benchmark:
    region: str
    reference_kg_co2eq_per_ha: float
    ratio: float
    performance_category: str


@dataclass
class FarmSuccess:
    """Batch record for a farm whose pipeline completed."""

    farm_id: str
    year: int | None
    emissions_enteric: float | None
    emissions_manure: float
    emissions_soil: float
    emissions_energy: float
    emissions_inputs: float
    emissions_total: float
    intensity_milk_kg_co2eq_per_kg_fpcm: float
    fpcm_production_kg: float
    milk_production_kg: float
    milk_production_litres: float
    intensity_area_kg_co2eq_per_ha_total: float | None = None
    intensity_area_kg_co2eq_per_ha_productive: float | None = None
    land_use_efficiency: float | None = None
    total_animals: float = 0.0
    dairy_cows: float = 0.0
    benchmark_region: str | None = None
    benchmark_performance: str | None = None
    boundaries_used: str = ""
    tier_used: str = "tier_1"
    processing_date: dt.date = field(default_factory=dt.date.today)
    detailed_objects: dict[str, Any] | None = None

    success = True

    def as_dict(self, include_details: bool = False) -> dict[str, Any]:
        data = {"success": True, **asdict(self)}
        if not include_details:
            data.pop("detailed_objects")
        return data


@dataclass
class FarmFailure:
    """Batch record for a farm whose pipeline raised."""

    farm_id: str
    year: int | None
    error: str
    processing_date: dt.date = field(default_factory=dt.date.today)

    success = False

    def as_dict(self, include_details: bool = False) -> dict[str, Any]:
        return {"success": False, **asdict(self)}


FarmRecord = Union[FarmSuccess, FarmFailure]


@dataclass(frozen=True)
class BatchSummary:
    n_farms_processed: int
    n_farms_successful: int
    n_farms_with_errors: int
    boundaries_used: str
    benchmark_region: str | None
    processing_date: dt.date

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class BatchRunResult:
    """Summary plus one record per input row, in input order."""

    summary: BatchSummary
    farm_results: tuple[FarmRecord, ...]

    def successes(self) -> list[FarmSuccess]:
        return [record for record in self.farm_results if isinstance(record, FarmSuccess)]

    def failures(self) -> list[FarmFailure]:
        return [record for record in self.farm_results if isinstance(record, FarmFailure)]

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame([record.as_dict() for record in self.farm_results])
