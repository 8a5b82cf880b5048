from __future__ import annotations

CO2EQ_UNIT = "kg CO2eq yr-1"

SOURCE_TAGS = ("enteric", "manure", "soil", "energy", "inputs", "feed")
EMISSION_SOURCES = ("enteric", "manure", "soil", "energy", "inputs")

BOUNDARY_SCOPES: dict[str, tuple[str, ...]] = {
    "farm_gate": ("enteric", "manure", "soil", "energy", "inputs"),
    "cradle_to_farm_gate": ("enteric", "manure", "soil", "energy", "inputs", "feed"),
    "partial": (),
}

N2O_N_TO_N2O = 44.0 / 28.0
CH4_ENERGY_MJ_PER_KG = 55.65
GROSS_ENERGY_MJ_PER_KG_DM = 18.45

# ---------------------------------------------------------------- enteric
CATTLE_CATEGORIES = ("dairy_cows", "heifers", "calves", "bulls")
PRODUCTION_SYSTEMS = ("intensive", "extensive", "mixed")

DEFAULT_BODY_WEIGHT_KG: dict[str, float] = {
    "dairy_cows": 550.0,
    "heifers": 350.0,
    "calves": 150.0,
    "bulls": 700.0,
}

# kg CH4 head-1 yr-1
ENTERIC_TIER1_EF: dict[str, dict[str, float]] = {
    "dairy_cows": {"intensive": 120.0, "extensive": 100.0, "mixed": 115.0},
    "heifers": {"intensive": 85.0, "extensive": 75.0, "mixed": 80.0},
    "calves": {"intensive": 45.0, "extensive": 40.0, "mixed": 42.0},
    "bulls": {"intensive": 110.0, "extensive": 95.0, "mixed": 105.0},
}

# ----------------------------------------------------------------- manure
MANURE_SYSTEMS = ("pasture", "solid_storage", "liquid_storage", "anaerobic_digester")
MANURE_CLIMATES = ("cold", "temperate", "warm")

# kg CH4 cow-1 yr-1
MANURE_TIER1_CH4_EF: dict[str, float] = {
    "pasture": 1.5,
    "solid_storage": 20.0,
    "liquid_storage": 30.0,
    "anaerobic_digester": 10.0,
}

# methane conversion factor, percent
MANURE_MCF_PERCENT: dict[str, dict[str, float]] = {
    "pasture": {"cold": 1.0, "temperate": 1.5, "warm": 2.0},
    "solid_storage": {"cold": 2.0, "temperate": 3.5, "warm": 5.5},
    "liquid_storage": {"cold": 17.0, "temperate": 39.0, "warm": 65.0},
    "anaerobic_digester": {"cold": 20.0, "temperate": 75.0, "warm": 85.0},
}

MANURE_CH4_DENSITY_KG_PER_M3 = 0.67
EF_N2O_VOLATILIZATION = 0.01
EF_N2O_LEACHING = 0.0075

# ------------------------------------------------------------------- soil
SOIL_TYPES = ("well_drained", "poorly_drained")
SOIL_CLIMATES = ("temperate", "tropical")

SOIL_DIRECT_EF: dict[str, dict[str, float]] = {
    "temperate": {"well_drained": 0.010, "poorly_drained": 0.015},
    "tropical": {"well_drained": 0.012, "poorly_drained": 0.018},
}

SOIL_FRAC_VOLATILIZATION: dict[str, float] = {
    "synthetic": 0.10,
    "organic": 0.20,
    "excreta_pasture": 0.20,
}
SOIL_FRAC_LEACH = 0.30

# ----------------------------------------------------------------- energy
FUELS = ("diesel", "petrol", "lpg", "natural_gas")

FUEL_UNITS: dict[str, str] = {
    "diesel": "kg CO2 L-1",
    "petrol": "kg CO2 L-1",
    "lpg": "kg CO2 kg-1",
    "natural_gas": "kg CO2 m-3",
}

# kWh per activity unit, used for energy shares
FUEL_ENERGY_KWH: dict[str, float] = {
    "diesel": 10.0,
    "petrol": 9.1,
    "lpg": 12.8,
    "natural_gas": 10.5,
}

DEFAULT_COUNTRY = "UY"

# ----------------------------------------------------------------- inputs
INPUT_REGIONS = ("EU", "US", "Brazil", "Argentina", "Australia", "global")
DEFAULT_INPUT_REGION = "global"
FERTILIZER_TYPES = ("urea", "ammonium_nitrate", "mixed", "organic")
PLASTIC_TYPES = ("LDPE", "HDPE", "PP", "mixed")
FEED_CATEGORIES = (
    "grain_dry",
    "grain_wet",
    "ration",
    "byproducts",
    "proteins",
    "corn",
    "soy",
    "wheat",
)
TRUCK_EF_KG_PER_KG_KM = 1e-4

# -------------------------------------------------------------- intensity
FPCM_FAT_COEFF = 0.1226
FPCM_PROTEIN_COEFF = 0.0776
FPCM_CONSTANT = 0.2534

LAND_USE_TYPES = (
    "pasture_permanent",
    "pasture_temporary",
    "crops_feed",
    "crops_cash",
    "infrastructure",
    "woodland",
)

# kg CO2eq per productive hectare
AREA_BENCHMARKS: dict[str, float] = {
    "uruguay": 7500.0,
    "argentina": 8000.0,
    "brazil": 9000.0,
    "new_zealand": 10500.0,
    "australia": 6500.0,
    "ireland": 11000.0,
    "europe": 11500.0,
    "global": 8500.0,
}

BENCHMARK_CATEGORIES: tuple[tuple[float, str], ...] = (
    (0.8, "excellent"),
    (1.0, "good"),
    (1.2, "average"),
)

# ------------------------------------------------------------------ batch
TEMPLATE_COLUMNS: tuple[str, ...] = (
    "FarmID",
    "Year",
    "Milk_litres",
    "Fat_percent",
    "Protein_percent",
    "Milk_density",
    "Cows_milking",
    "Cows_dry",
    "Heifers_total",
    "Calves_total",
    "Bulls_total",
    "Milk_yield_kg_cow_year",
    "Body_weight_cows_kg",
    "Body_weight_heifers_kg",
    "Body_weight_calves_kg",
    "Body_weight_bulls_kg",
    "MS_intake_cows_kg_day",
    "MS_intake_heifers_kg_day",
    "MS_intake_calves_kg_day",
    "MS_intake_bulls_kg_day",
    "Ym_percent",
    "Production_system",
    "Manure_system",
    "Climate",
    "N_excreted_per_cow_kg",
    "N_fertilizer_kg",
    "N_fertilizer_organic_kg",
    "N_excreta_pasture_kg",
    "N_crop_residues_kg",
    "Area_total_ha",
    "Area_productive_ha",
    "Soil_type",
    "Climate_zone",
    "Pasture_permanent_ha",
    "Pasture_temporary_ha",
    "Crops_feed_ha",
    "Crops_cash_ha",
    "Infrastructure_ha",
    "Woodland_ha",
    "Diesel_litres",
    "Petrol_litres",
    "Electricity_kWh",
    "LPG_kg",
    "Natural_gas_m3",
    "Country",
    "Region",
    "Concentrate_feed_kg",
    "Plastic_kg",
    "Feed_grain_dry_kg",
    "Feed_grain_wet_kg",
    "Feed_ration_kg",
    "Feed_byproducts_kg",
    "Feed_proteins_kg",
    "Feed_corn_kg",
    "Feed_soy_kg",
    "Feed_wheat_kg",
    "Transport_km",
)

REQUIRED_COLUMNS = ("FarmID", "Milk_litres", "Cows_milking")

LAND_USE_COLUMNS: dict[str, str] = {
    "pasture_permanent": "Pasture_permanent_ha",
    "pasture_temporary": "Pasture_temporary_ha",
    "crops_feed": "Crops_feed_ha",
    "crops_cash": "Crops_cash_ha",
    "infrastructure": "Infrastructure_ha",
    "woodland": "Woodland_ha",
}

HERD_COLUMNS: dict[str, dict[str, str]] = {
    "dairy_cows": {
        "body_weight": "Body_weight_cows_kg",
        "intake": "MS_intake_cows_kg_day",
    },
    "heifers": {
        "body_weight": "Body_weight_heifers_kg",
        "intake": "MS_intake_heifers_kg_day",
    },
    "calves": {
        "body_weight": "Body_weight_calves_kg",
        "intake": "MS_intake_calves_kg_day",
    },
    "bulls": {
        "body_weight": "Body_weight_bulls_kg",
        "intake": "MS_intake_bulls_kg_day",
    },
}

FEED_COLUMNS: dict[str, str] = {
    "feed_grain_dry_kg": "Feed_grain_dry_kg",
    "feed_grain_wet_kg": "Feed_grain_wet_kg",
    "feed_ration_kg": "Feed_ration_kg",
    "feed_byproducts_kg": "Feed_byproducts_kg",
    "feed_proteins_kg": "Feed_proteins_kg",
    "feed_corn_kg": "Feed_corn_kg",
    "feed_soy_kg": "Feed_soy_kg",
    "feed_wheat_kg": "Feed_wheat_kg",
}
