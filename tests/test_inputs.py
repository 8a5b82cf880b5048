import numpy as np
import pytest

from dairy_footprint.boundaries import set_system_boundaries
from dairy_footprint.exceptions import ValidationError
from dairy_footprint.inputs import calc_emissions_inputs, simulate_input_uncertainty
from dairy_footprint.registry import EmissionFactor


def test_global_point_estimate():
    result = calc_emissions_inputs(conc_kg=1000, fert_n_kg=200, plastic_kg=50)
    breakdown = result.emissions_breakdown
    assert breakdown["concentrate_co2eq_kg"] == pytest.approx(700.0)
    assert breakdown["fertilizer_co2eq_kg"] == pytest.approx(1320.0)
    assert breakdown["plastic_co2eq_kg"] == pytest.approx(125.0)
    assert result.co2eq_kg == pytest.approx(2145.0)
    assert result.uncertainty is None


def test_feed_categories_and_region():
    result = calc_emissions_inputs(feed_soy_kg=1000, feed_corn_kg=2000, region="Brazil")
    feeds = result.emissions_breakdown["feeds_co2eq_kg"]
    assert feeds["soy"] == pytest.approx(1200.0)
    assert feeds["corn"] == pytest.approx(640.0)
    assert result.emissions_breakdown["total_feeds_co2eq_kg"] == pytest.approx(1840.0)


def test_fertilizer_and_plastic_types():
    urea = calc_emissions_inputs(fert_n_kg=100, fert_type="urea")
    ldpe = calc_emissions_inputs(plastic_kg=100, plastic_type="ldpe")
    assert urea.co2eq_kg == pytest.approx(720.0)
    assert ldpe.co2eq_kg == pytest.approx(280.0)
    assert ldpe.inputs["plastic_type"] == "LDPE"


def test_factor_overrides():
    result = calc_emissions_inputs(conc_kg=1000, ef_conc=0.5)
    assert result.co2eq_kg == pytest.approx(500.0)
    assert result.emission_factors_used["concentrate"]["source"] == "user override"


def test_transport_adjustment():
    result = calc_emissions_inputs(conc_kg=1000, feed_ration_kg=1000, transport_km=100)
    assert result.emissions_breakdown["transport_adjustment_co2eq_kg"] == pytest.approx(2000 * 100 * 1e-4)


def test_contribution_shares_sum_to_100():
    result = calc_emissions_inputs(conc_kg=1000, fert_n_kg=100, plastic_kg=10, feed_soy_kg=500)
    assert sum(result.metrics["contribution_analysis"].values()) == pytest.approx(100.0)


def test_uncertainty_is_reproducible_and_leaves_point_estimate():
    kwargs = {"conc_kg": 10000, "fert_n_kg": 500, "plastic_kg": 100}
    point = calc_emissions_inputs(**kwargs)
    first = calc_emissions_inputs(include_uncertainty=True, n_simulations=500, seed=42, **kwargs)
    second = calc_emissions_inputs(include_uncertainty=True, n_simulations=500, seed=42, **kwargs)

    assert first.co2eq_kg == point.co2eq_kg
    assert first.uncertainty == second.uncertainty
    summary = first.uncertainty
    assert summary["n_simulations"] == 500
    assert summary["sd"] > 0
    assert summary["confidence_interval_95"]["lower"] < summary["mean"] < summary["confidence_interval_95"]["upper"]
    assert summary["percentiles"]["p5"] <= summary["percentiles"]["p25"] <= summary["percentiles"]["p75"]


def test_simulation_holds_fixed_factors():
    factors = {"a": EmissionFactor(2.0, "kg CO2eq kg-1", "fixed")}
    summary = simulate_input_uncertainty({"a": 10.0}, factors, fixed_co2eq_kg=5.0, n_simulations=50, seed=1)
    assert summary["mean"] == pytest.approx(25.0)
    assert summary["sd"] == pytest.approx(0.0)


def test_simulation_stays_within_factor_range():
    factors = {"a": EmissionFactor(1.0, "kg CO2eq kg-1", "range", 0.5, 1.5)}
    summary = simulate_input_uncertainty({"a": 100.0}, factors, n_simulations=2000, seed=7)
    assert 50.0 <= summary["percentiles"]["p5"]
    assert summary["percentiles"]["p95"] <= 150.0
    np.testing.assert_allclose(summary["mean"], 100.0, rtol=0.05)


def test_simulation_needs_two_draws():
    with pytest.raises(ValueError):
        simulate_input_uncertainty({}, {}, n_simulations=1)


def test_boundary_exclusion_returns_zero():
    result = calc_emissions_inputs(
        conc_kg=1000, boundaries=set_system_boundaries("partial", include=["enteric"])
    )
    assert result.co2eq_kg == 0.0
    assert result.excluded


def test_feed_tag_is_reported_in_metrics():
    cradle = calc_emissions_inputs(conc_kg=10, boundaries=set_system_boundaries("cradle_to_farm_gate"))
    gate = calc_emissions_inputs(conc_kg=10, boundaries=set_system_boundaries("farm_gate"))
    assert cradle.metrics["upstream_feed_in_scope"] is True
    assert gate.metrics["upstream_feed_in_scope"] is False
    assert cradle.co2eq_kg == gate.co2eq_kg


@pytest.mark.parametrize(
    "kwargs",
    [
        {"conc_kg": -1},
        {"region": "Mars"},
        {"fert_type": "compost"},
        {"plastic_type": "PVC"},
    ],
)
def test_invalid_inputs_raise(kwargs):
    with pytest.raises(ValidationError):
        calc_emissions_inputs(**kwargs)


def test_more_concentrate_never_decreases_emissions():
    values = [calc_emissions_inputs(conc_kg=v, fert_n_kg=100).co2eq_kg for v in (0, 10, 1000, 100000)]
    assert values == sorted(values)
