import json

import pandas as pd

from scripts import run_batch


def test_script_writes_report(tmp_path, farm_rows):
    table = tmp_path / "farms.csv"
    pd.DataFrame(farm_rows).to_csv(table, index=False)
    output = tmp_path / "report.xlsx"

    code = run_batch.main(["--input", str(table), "--output", str(output), "--benchmark", "uruguay"])

    assert code == 0
    sheets = pd.read_excel(output, sheet_name=None)
    assert list(sheets["Farm_results"]["FarmID"]) == ["Farm1", "Farm2"]


def test_script_flags_override_config(tmp_path, farm_rows):
    table = tmp_path / "farms.csv"
    pd.DataFrame(farm_rows).to_csv(table, index=False)
    config = tmp_path / "config.yaml"
    config.write_text(
        json.dumps({"batch": {"input_file": "farms.csv", "output_file": "out.csv", "tier": 1}})
    )

    code = run_batch.main(
        ["--config", str(config), "--scope", "partial", "--include", "energy", "--tier", "2"]
    )

    assert code == 0
    report = pd.read_csv(tmp_path / "out.csv", comment="#")
    assert (report["emissions_manure"] == 0).all()
    assert (report["tier_used"] == "tier_2").all()


def test_script_reports_configuration_errors(tmp_path, farm_rows):
    table = tmp_path / "farms.csv"
    pd.DataFrame(farm_rows).to_csv(table, index=False)
    output = tmp_path / "report.xlsx"
    assert run_batch.main(["--input", str(table), "--output", str(output), "--scope", "partial"]) == 1
    assert not output.exists()


def test_script_returns_two_when_every_farm_fails(tmp_path, farm_rows):
    for row in farm_rows:
        row["Milk_litres"] = -1
    table = tmp_path / "farms.csv"
    pd.DataFrame(farm_rows).to_csv(table, index=False)
    assert run_batch.main(["--input", str(table), "--output", str(tmp_path / "report.csv")]) == 2
