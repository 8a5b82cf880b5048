import pytest

from dairy_footprint.boundaries import is_excluded, set_system_boundaries
from dairy_footprint.exceptions import BoundaryConfigError


def test_farm_gate_includes_on_farm_sources():
    scope = set_system_boundaries("farm_gate")
    assert scope.include == {"enteric", "manure", "soil", "energy", "inputs"}
    assert not scope.includes("feed")


def test_cradle_to_farm_gate_adds_feed():
    scope = set_system_boundaries("cradle_to_farm_gate")
    assert "feed" in scope.include
    assert scope.include >= set_system_boundaries("farm_gate").include


def test_partial_uses_explicit_include():
    scope = set_system_boundaries("partial", include=["enteric", "manure"])
    assert scope.include == {"enteric", "manure"}
    assert is_excluded(scope, "energy")
    assert not is_excluded(scope, "enteric")
    assert not is_excluded(None, "energy")


def test_partial_without_include_is_rejected():
    with pytest.raises(BoundaryConfigError):
        set_system_boundaries("partial")


def test_unknown_scope_is_rejected():
    with pytest.raises(BoundaryConfigError, match="Unknown boundary scope"):
        set_system_boundaries("invalid_scope")


def test_unknown_tag_is_rejected():
    with pytest.raises(BoundaryConfigError, match="bogus"):
        set_system_boundaries("partial", include=["enteric", "bogus"])


def test_empty_include_is_rejected():
    with pytest.raises(BoundaryConfigError):
        set_system_boundaries("farm_gate", include=[])


def test_scope_is_immutable():
    scope = set_system_boundaries("farm_gate")
    with pytest.raises(AttributeError):
        scope.scope = "partial"  # type: ignore[misc]
