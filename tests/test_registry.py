import pytest

from dairy_footprint.registry import available_regions, get_factor


def test_regional_factor_with_range():
    factor = get_factor("fertilizer:urea", "EU")
    assert factor.value == pytest.approx(7.5)
    assert factor.has_range
    assert factor.low < factor.value < factor.high
    assert factor.unit == "kg CO2eq kg-1 N"


def test_default_region_is_global():
    assert get_factor("feed:concentrate").value == pytest.approx(0.70)


def test_unknown_region_falls_back_to_global():
    assert get_factor("feed:soy", "Atlantis").value == get_factor("feed:soy", "global").value


def test_grid_factor_by_country():
    assert get_factor("electricity", "UY").value == pytest.approx(0.08)
    assert get_factor("electricity", "uy").value == pytest.approx(0.08)


def test_unknown_country_uses_default_grid_factor():
    factor = get_factor("electricity", "XX")
    assert factor.value == pytest.approx(0.35)
    assert not factor.has_range


def test_fuel_and_upstream_factors():
    assert get_factor("fuel:diesel").value == pytest.approx(2.67)
    assert get_factor("upstream:electricity").value == pytest.approx(0.05)
    with pytest.raises(KeyError):
        get_factor("fuel:coal")


def test_tiered_manure_fractions():
    assert get_factor("manure_frac_gasf").value == pytest.approx(0.20)
    assert get_factor("manure_frac_gasf", tier=2).value == pytest.approx(0.18)
    assert get_factor("manure_frac_leach", tier=2).value == pytest.approx(0.25)


def test_unknown_substance_raises():
    with pytest.raises(KeyError):
        get_factor("feed:caviar", "EU")


def test_available_regions():
    regions = available_regions()
    assert "global" in regions
    assert len(regions) == 6
