import pytest

from dairy_footprint.boundaries import set_system_boundaries
from dairy_footprint.config import DEFAULTS
from dairy_footprint.enteric import calc_emissions_enteric, calc_emissions_enteric_herd
from dairy_footprint.exceptions import ValidationError


def test_tier1_uses_category_system_factor():
    result = calc_emissions_enteric(100)
    assert result.source == "enteric"
    assert result.emissions_breakdown["ch4_kg"] == pytest.approx(11500.0)
    assert result.co2eq_kg == pytest.approx(11500.0 * 27.2)
    assert result.methodology == "IPCC Tier 1"


def test_tier1_varies_with_system():
    extensive = calc_emissions_enteric(10, production_system="extensive")
    intensive = calc_emissions_enteric(10, production_system="intensive")
    assert extensive.emissions_breakdown["ch4_kg"] == pytest.approx(1000.0)
    assert intensive.emissions_breakdown["ch4_kg"] == pytest.approx(1200.0)


def test_tier2_without_detail_matches_tier1():
    for category in ("dairy_cows", "heifers", "calves", "bulls"):
        tier1 = calc_emissions_enteric(50, cattle_category=category, tier=1)
        tier2 = calc_emissions_enteric(50, cattle_category=category, tier=2)
        assert tier2.co2eq_kg == tier1.co2eq_kg


def test_tier2_dry_matter_intake_route():
    result = calc_emissions_enteric(10, dry_matter_intake=18.0, tier=2)
    expected_ef = 18.0 * 18.45 * 365 * 0.065 / 55.65
    assert result.emissions_breakdown["ch4_kg"] == pytest.approx(10 * expected_ef)
    assert "dry_matter_intake" in result.methodology


def test_tier2_feed_inputs_derive_intake():
    direct = calc_emissions_enteric(10, dry_matter_intake=15.0, tier=2)
    derived = calc_emissions_enteric(10, feed_inputs={"pasture": 10 * 15.0 * 365}, tier=2)
    assert derived.co2eq_kg == pytest.approx(direct.co2eq_kg)


def test_tier2_net_energy_route_for_dairy_cows():
    result = calc_emissions_enteric(100, avg_milk_yield=7000, tier=2)
    net_energy = 0.335 * 550**0.75 + 7000 * 5.15 / 365 + 10
    expected_ef = net_energy * 365 / 0.6 * 0.065 / 55.65
    assert result.emissions_breakdown["ch4_kg"] == pytest.approx(100 * expected_ef)
    assert result.metrics["co2eq_kg_per_kg_milk"] == pytest.approx(expected_ef * 27.2 / 7000)


def test_tier2_body_weight_scaling_for_heifers():
    default = calc_emissions_enteric(10, cattle_category="heifers", avg_body_weight=350, tier=2)
    heavier = calc_emissions_enteric(10, cattle_category="heifers", avg_body_weight=450, tier=2)
    assert default.co2eq_kg == pytest.approx(calc_emissions_enteric(10, cattle_category="heifers").co2eq_kg)
    assert heavier.co2eq_kg > default.co2eq_kg


def test_zero_body_weight_falls_back_to_tier1():
    result = calc_emissions_enteric(10, cattle_category="bulls", avg_body_weight=0, tier=2)
    assert result.co2eq_kg == pytest.approx(10 * 105 * 27.2)


def test_more_animals_never_decrease_emissions():
    values = [calc_emissions_enteric(n).co2eq_kg for n in (0, 1, 10, 100)]
    assert values == sorted(values)
    assert values[0] == 0.0


def test_custom_gwp_and_defaults_object():
    custom = calc_emissions_enteric(10, defaults=DEFAULTS.replace(gwp_ch4=28.0))
    explicit = calc_emissions_enteric(10, gwp_ch4=28.0)
    assert custom.co2eq_kg == pytest.approx(explicit.co2eq_kg)
    assert DEFAULTS.gwp_ch4 == 27.2


def test_boundary_exclusion_returns_none():
    scope = set_system_boundaries("partial", include=["manure"])
    result = calc_emissions_enteric(100, boundaries=scope)
    assert result.co2eq_kg is None
    assert result.excluded
    assert result.methodology == "excluded_by_boundaries"
    assert result.emissions_breakdown["ch4_kg"] == 0.0


@pytest.mark.parametrize(
    "kwargs",
    [
        {"n_animals": -1},
        {"n_animals": 10, "cattle_category": "goats"},
        {"n_animals": 10, "production_system": "feedlot"},
        {"n_animals": 10, "tier": 3},
        {"n_animals": 10, "ym_percent": -2},
    ],
)
def test_invalid_inputs_raise_validation_error(kwargs):
    with pytest.raises(ValidationError):
        calc_emissions_enteric(**kwargs)


def test_herd_sums_categories():
    herd = calc_emissions_enteric_herd({"dairy_cows": 100, "heifers": 30, "calves": 0})
    cows = calc_emissions_enteric(100)
    heifers = calc_emissions_enteric(30, cattle_category="heifers")
    assert herd.co2eq_kg == pytest.approx(cows.co2eq_kg + heifers.co2eq_kg)
    assert set(herd.emissions_breakdown["by_category"]) == {"dairy_cows", "heifers"}
    assert herd.metrics["total_animals"] == 130


def test_herd_exclusion_propagates_none():
    scope = set_system_boundaries("partial", include=["energy"])
    herd = calc_emissions_enteric_herd({"dairy_cows": 100}, boundaries=scope)
    assert herd.co2eq_kg is None


def test_missing_head_count_is_rejected():
    with pytest.raises(ValidationError, match="n_animals"):
        calc_emissions_enteric(None)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"tier": 1},
        {"tier": 2, "dry_matter_intake": 15.0},
        {"tier": 1, "boundaries": set_system_boundaries("partial", include=["energy"])},
    ],
)
def test_negative_feed_mass_is_rejected_on_every_path(kwargs):
    with pytest.raises(ValidationError, match="feed_inputs"):
        calc_emissions_enteric(10, feed_inputs={"pasture": -5000}, **kwargs)


def test_herd_counts_checked_even_when_excluded():
    scope = set_system_boundaries("partial", include=["energy"])
    with pytest.raises(ValidationError):
        calc_emissions_enteric_herd({"dairy_cows": -50}, boundaries=scope)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"body_weights": {"heifers": -300}},
        {"dry_matter_intakes": {"calves": -2}},
        {"body_weights": {"goats": 60}},
    ],
)
def test_herd_detail_checked_for_empty_categories(kwargs):
    with pytest.raises(ValidationError):
        calc_emissions_enteric_herd({"dairy_cows": 10, "heifers": 0}, tier=2, **kwargs)
