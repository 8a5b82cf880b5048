import json
from pathlib import Path

import pandas as pd
import pytest

from config_paths import CONFIG_ENV_VAR, get_config_path, resolve_path
from dairy_footprint.batch import run_from_config
from dairy_footprint.config import DEFAULTS, MethodDefaults, load_config
from dairy_footprint.enteric import calc_emissions_enteric

ROOT = Path(__file__).resolve().parents[1]


def _write_config(path: Path, payload: dict) -> Path:
    # JSON is a subset of YAML
    path.write_text(json.dumps(payload))
    return path


def test_repository_config_loads():
    config = load_config(ROOT / "config.yaml")
    assert config["batch"]["tier"] == 1
    defaults = MethodDefaults.from_mapping(config["defaults"])
    assert defaults.gwp_ch4 == pytest.approx(27.2)
    assert isinstance(defaults.n_simulations, int)


def test_defaults_section_overrides_values(tmp_path):
    path = _write_config(tmp_path / "config.yaml", {"defaults": {"gwp_ch4": 28, "ym_percent": 6.0}})
    defaults = MethodDefaults.from_config(path)
    assert defaults.gwp_ch4 == pytest.approx(28.0)
    assert defaults.ym_percent == pytest.approx(6.0)
    assert defaults.gwp_n2o == DEFAULTS.gwp_n2o

    result = calc_emissions_enteric(10, defaults=defaults)
    assert result.co2eq_kg == pytest.approx(10 * 115 * 28.0)


def test_unknown_default_key_is_rejected(tmp_path):
    path = _write_config(tmp_path / "config.yaml", {"defaults": {"gwp_sf6": 1}})
    with pytest.raises(ValueError, match="gwp_sf6"):
        MethodDefaults.from_config(path)


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_env_var_selects_config(tmp_path, monkeypatch):
    path = _write_config(tmp_path / "custom.yaml", {"defaults": {"gwp_n2o": 265}})
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
    assert get_config_path() == path.resolve()
    assert MethodDefaults.from_config().gwp_n2o == pytest.approx(265.0)


def test_relative_paths_resolve_against_config(tmp_path):
    path = _write_config(tmp_path / "config.yaml", {})
    config = load_config(path)
    assert resolve_path("data/farms.csv", config) == (tmp_path / "data" / "farms.csv").resolve()


def test_run_from_config(tmp_path, farm_rows):
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    pd.DataFrame(farm_rows).to_csv(data_dir / "farms.csv", index=False)
    path = _write_config(
        tmp_path / "config.yaml",
        {
            "defaults": {"gwp_ch4": 27.2},
            "batch": {
                "input_file": "data/farms.csv",
                "output_file": "results/report.csv",
                "tier": 1,
                "boundary": {"scope": "partial", "include": ["enteric", "manure"]},
                "benchmark_region": "ireland",
            },
        },
    )

    result = run_from_config(path)

    assert result.summary.n_farms_successful == 2
    assert result.summary.boundaries_used == "partial"
    assert result.summary.benchmark_region == "ireland"
    report = pd.read_csv(tmp_path / "results" / "report.csv", comment="#")
    assert list(report["FarmID"]) == ["Farm1", "Farm2"]
    assert (report["emissions_energy"] == 0).all()


def test_run_from_config_needs_batch_section(tmp_path):
    path = _write_config(tmp_path / "config.yaml", {"defaults": {}})
    with pytest.raises(ValueError, match="'batch' section missing"):
        run_from_config(path)


def test_run_from_config_overrides_resolve_against_config_dir(tmp_path, farm_rows):
    (tmp_path / "tables").mkdir()
    pd.DataFrame(farm_rows).to_csv(tmp_path / "tables" / "other.csv", index=False)
    path = _write_config(tmp_path / "config.yaml", {"batch": {"input_file": "missing.csv"}})

    result = run_from_config(path, input_file="tables/other.csv", output_file="out/report.csv")

    assert result.summary.n_farms_successful == 2
    assert (tmp_path / "out" / "report.csv").exists()
