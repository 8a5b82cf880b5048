from .aggregate import calc_total_emissions
from .batch import read_farm_table, run_batch, run_from_config
from .boundaries import BoundaryScope, set_system_boundaries
from .config import DEFAULTS, MethodDefaults
from .constants import CO2EQ_UNIT, TEMPLATE_COLUMNS
from .energy import calc_emissions_energy
from .enteric import calc_emissions_enteric, calc_emissions_enteric_herd
from .exceptions import AggregationError, BoundaryConfigError, ValidationError
from .inputs import calc_emissions_inputs
from .intensity import benchmark_area_intensity, calc_intensity_area, calc_intensity_litre
from .manure import calc_emissions_manure
from .registry import EmissionFactor, get_factor
from .results import (
    AreaIntensityResult,
    BatchRunResult,
    FarmFailure,
    FarmSuccess,
    IntensityResult,
    SourceResult,
    TotalResult,
)
from .soil import calc_emissions_soil

__all__ = [
    "CO2EQ_UNIT",
    "DEFAULTS",
    "TEMPLATE_COLUMNS",
    "AggregationError",
    "AreaIntensityResult",
    "BatchRunResult",
    "BoundaryConfigError",
    "BoundaryScope",
    "EmissionFactor",
    "FarmFailure",
    "FarmSuccess",
    "IntensityResult",
    "MethodDefaults",
    "SourceResult",
    "TotalResult",
    "ValidationError",
    "benchmark_area_intensity",
    "calc_emissions_energy",
    "calc_emissions_enteric",
    "calc_emissions_enteric_herd",
    "calc_emissions_inputs",
    "calc_emissions_manure",
    "calc_emissions_soil",
    "calc_intensity_area",
    "calc_intensity_litre",
    "calc_total_emissions",
    "get_factor",
    "read_farm_table",
    "run_batch",
    "run_from_config",
    "set_system_boundaries",
]
