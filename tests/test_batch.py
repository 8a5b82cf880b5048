from pathlib import Path

import pandas as pd
import pytest

from dairy_footprint.batch import read_farm_table, run_batch
from dairy_footprint.boundaries import set_system_boundaries
from dairy_footprint.exceptions import BoundaryConfigError, ValidationError
from dairy_footprint.results import FarmFailure, FarmSuccess

ROOT = Path(__file__).resolve().parents[1]


def test_sample_table_runs_end_to_end():
    table = read_farm_table(ROOT / "data" / "farms.csv")
    result = run_batch(table, tier=1, benchmark_region="uruguay")

    assert result.summary.n_farms_processed == 3
    assert result.summary.n_farms_successful == 3
    assert result.summary.n_farms_with_errors == 0
    assert [record.farm_id for record in result.farm_results] == ["Farm1", "Farm2", "Farm3"]
    for record in result.successes():
        parts = [
            record.emissions_enteric,
            record.emissions_manure,
            record.emissions_soil,
            record.emissions_energy,
            record.emissions_inputs,
        ]
        assert record.emissions_total == pytest.approx(sum(parts))
        assert 0 < record.intensity_milk_kg_co2eq_per_kg_fpcm < 5
        assert record.benchmark_performance in {"excellent", "good", "average", "needs_improvement"}
        assert record.tier_used == "tier_1"
        assert record.boundaries_used == "farm_gate"


def test_herd_counts_feed_enteric_and_manure(farm_rows):
    result = run_batch(farm_rows)
    farm1 = result.farm_results[0]
    assert isinstance(farm1, FarmSuccess)
    assert farm1.dairy_cows == 105
    assert farm1.total_animals == 180


def test_one_bad_farm_does_not_stop_the_batch(farm_rows):
    farm_rows[1]["Milk_litres"] = -1000
    result = run_batch(farm_rows)

    assert result.summary.n_farms_successful == 1
    assert result.summary.n_farms_with_errors == 1
    bad = result.farm_results[1]
    assert isinstance(bad, FarmFailure)
    assert bad.farm_id == "Farm2"
    assert bad.year == 2023
    assert "Milk_litres" in bad.error or "milk_litres" in bad.error
    assert result.farm_results[0].success


def test_non_numeric_cell_fails_only_that_farm(farm_rows):
    farm_rows[0]["Diesel_litres"] = "a lot"
    result = run_batch(farm_rows)
    assert isinstance(result.farm_results[0], FarmFailure)
    assert isinstance(result.farm_results[1], FarmSuccess)


def test_results_are_repeatable(farm_rows):
    first = run_batch(farm_rows)
    second = run_batch(farm_rows)
    for a, b in zip(first.farm_results, second.farm_results):
        assert a.as_dict() == b.as_dict()


def test_missing_farm_id_gets_positional_default(farm_rows):
    del farm_rows[1]["FarmID"]
    frame = pd.DataFrame(farm_rows)
    result = run_batch(frame)
    assert result.farm_results[1].farm_id == "farm_2"


def test_partial_scope_keeps_enteric_only(farm_rows):
    scope = set_system_boundaries("partial", include=["enteric"])
    result = run_batch(farm_rows, boundaries=scope)
    farm = result.farm_results[0]
    assert farm.emissions_manure == 0.0
    assert farm.emissions_energy == 0.0
    assert farm.emissions_total == pytest.approx(farm.emissions_enteric)
    assert result.summary.boundaries_used == "partial"


def test_enteric_excluded_reports_none(farm_rows):
    scope = set_system_boundaries("partial", include=["energy"])
    farm = run_batch(farm_rows, boundaries=scope).farm_results[0]
    assert farm.emissions_enteric is None
    assert farm.emissions_total == pytest.approx(farm.emissions_energy)


def test_tier2_uses_farm_detail(farm_rows):
    for row in farm_rows:
        row["MS_intake_cows_kg_day"] = 20
    tier1 = run_batch(farm_rows, tier=1).farm_results[0]
    tier2 = run_batch(farm_rows, tier=2).farm_results[0]
    assert tier2.tier_used == "tier_2"
    assert tier2.emissions_enteric != pytest.approx(tier1.emissions_enteric)


def test_detailed_objects_are_optional(farm_rows):
    plain = run_batch(farm_rows).farm_results[0]
    detailed = run_batch(farm_rows, save_detailed_objects=True).farm_results[0]
    assert plain.detailed_objects is None
    assert set(detailed.detailed_objects) >= {"enteric", "total", "intensity_milk", "intensity_area"}


def test_area_intensity_needs_area_column(farm_rows):
    for row in farm_rows:
        del row["Area_total_ha"]
    farm = run_batch(farm_rows).farm_results[0]
    assert farm.intensity_area_kg_co2eq_per_ha_total is None
    assert farm.land_use_efficiency is None


def test_empty_table_is_rejected():
    with pytest.raises(ValueError, match="empty"):
        run_batch(pd.DataFrame())


@pytest.mark.parametrize("tier", [0, 3])
def test_invalid_tier_is_rejected(farm_rows, tier):
    with pytest.raises(ValidationError):
        run_batch(farm_rows, tier=tier)


def test_missing_required_column_is_rejected(farm_rows):
    for row in farm_rows:
        del row["Cows_milking"]
    with pytest.raises(ValidationError, match="Cows_milking"):
        run_batch(farm_rows)


def test_unknown_benchmark_region_is_rejected(farm_rows):
    with pytest.raises(ValidationError):
        run_batch(farm_rows, benchmark_region="atlantis")


def test_invalid_boundary_scope_is_rejected_before_the_batch():
    with pytest.raises(BoundaryConfigError):
        set_system_boundaries("everything")


def test_read_farm_table_formats(tmp_path, farm_rows):
    xlsx = tmp_path / "farms.xlsx"
    pd.DataFrame(farm_rows).to_excel(xlsx, index=False)
    assert list(read_farm_table(xlsx)["FarmID"]) == ["Farm1", "Farm2"]

    unsupported = tmp_path / "farms.json"
    unsupported.write_text("{}")
    with pytest.raises(ValueError):
        read_farm_table(unsupported)

    with pytest.raises(FileNotFoundError):
        read_farm_table(tmp_path / "missing.csv")


@pytest.mark.parametrize("value", [None, float("nan"), ""])
def test_blank_milking_cows_fails_the_farm(farm_rows, value):
    farm_rows[0]["Cows_milking"] = value
    result = run_batch(farm_rows)
    failure = result.farm_results[0]
    assert isinstance(failure, FarmFailure)
    assert "Cows_milking" in failure.error
    assert isinstance(result.farm_results[1], FarmSuccess)


def test_failed_farm_leaves_other_totals_unchanged(farm_rows):
    alone = run_batch([farm_rows[0]]).farm_results[0]
    farm_rows[1]["Milk_litres"] = -1000
    mixed = run_batch(farm_rows).farm_results[0]
    assert mixed.emissions_total == alone.emissions_total
    assert mixed.intensity_milk_kg_co2eq_per_kg_fpcm == alone.intensity_milk_kg_co2eq_per_kg_fpcm


def test_tier2_without_detail_columns_matches_tier1(farm_rows):
    tier1 = run_batch(farm_rows, tier=1)
    tier2 = run_batch(farm_rows, tier=2)
    for a, b in zip(tier1.farm_results, tier2.farm_results):
        assert b.emissions_total == pytest.approx(a.emissions_total)
        assert b.emissions_enteric == pytest.approx(a.emissions_enteric)
        assert b.emissions_manure == pytest.approx(a.emissions_manure)
