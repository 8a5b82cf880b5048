"""Put ``src`` and the repository root on ``sys.path`` so tests run uninstalled."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

for path in (ROOT, SRC):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))


@pytest.fixture
def farm_rows() -> list[dict[str, object]]:
    return [
        {
            "FarmID": "Farm1",
            "Year": 2023,
            "Milk_litres": 600000,
            "Fat_percent": 3.8,
            "Protein_percent": 3.2,
            "Cows_milking": 90,
            "Cows_dry": 15,
            "Heifers_total": 30,
            "Calves_total": 45,
            "Area_total_ha": 100,
            "N_fertilizer_kg": 5000,
            "Diesel_litres": 6000,
            "Electricity_kWh": 30000,
            "Concentrate_feed_kg": 150000,
        },
        {
            "FarmID": "Farm2",
            "Year": 2023,
            "Milk_litres": 800000,
            "Fat_percent": 4.0,
            "Protein_percent": 3.3,
            "Cows_milking": 120,
            "Cows_dry": 20,
            "Heifers_total": 40,
            "Calves_total": 60,
            "Area_total_ha": 150,
            "N_fertilizer_kg": 7000,
            "Diesel_litres": 8500,
            "Electricity_kWh": 45000,
            "Concentrate_feed_kg": 200000,
        },
    ]
