"""Run the dairy farm emissions batch for a farm table.

Settings come from the ``batch`` section of ``config.yaml`` (or the file named
by ``--config`` / ``DAIRY_FOOTPRINT_CONFIG_PATH``); command-line flags override
individual settings. The report is written as ``.xlsx`` or ``.csv`` depending
on the output suffix.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]

sys.path.insert(0, str(ROOT / "src"))

from config_paths import get_config_path, resolve_path  # noqa: E402
from dairy_footprint import (  # noqa: E402
    AggregationError,
    BoundaryConfigError,
    MethodDefaults,
    ValidationError,
    read_farm_table,
    run_batch,
    set_system_boundaries,
)
from dairy_footprint.config import load_config  # noqa: E402
from dairy_footprint.views import format_batch  # noqa: E402
from dairy_footprint.writers import export_report  # noqa: E402

LOGGER = logging.getLogger("dairy_footprint.run")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Compute farm GHG emissions for a table of dairy farms")
    parser.add_argument("--config", help="Path to config.yaml (defaults to the repository config)")
    parser.add_argument("--input", help="Farm table (.csv or .xlsx); overrides batch.input_file")
    parser.add_argument("--output", help="Report path (.xlsx or .csv); overrides batch.output_file")
    parser.add_argument("--tier", type=int, choices=(1, 2), help="IPCC methodology tier")
    parser.add_argument(
        "--scope",
        choices=("farm_gate", "cradle_to_farm_gate", "partial"),
        help="System boundary scope",
    )
    parser.add_argument("--include", nargs="+", help="Source tags to include (required for 'partial')")
    parser.add_argument("--benchmark", help="Benchmark region for the area-intensity label")
    parser.add_argument(
        "--details",
        action="store_true",
        help="Keep per-source results and write one detail sheet per farm",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(name)s: %(message)s")
    parser = _build_parser()
    args = parser.parse_args(argv)

    config_path = Path(args.config) if args.config else get_config_path()
    config = load_config(config_path) if config_path.exists() else {}
    batch_cfg = config.get("batch") or {}
    boundary_cfg = batch_cfg.get("boundary") or {}

    input_setting = args.input or batch_cfg.get("input_file")
    if not input_setting:
        parser.error("No farm table given; pass --input or set batch.input_file")
    input_path = Path(args.input) if args.input else resolve_path(input_setting, config)

    output_setting = args.output or batch_cfg.get("output_file")
    output_path = None
    if output_setting:
        output_path = Path(args.output) if args.output else resolve_path(output_setting, config)

    include_details = args.details or bool(batch_cfg.get("include_details", False))
    try:
        boundaries = set_system_boundaries(
            args.scope or boundary_cfg.get("scope", "farm_gate"),
            args.include or boundary_cfg.get("include"),
        )
        defaults = MethodDefaults.from_mapping(config.get("defaults"))
        table = read_farm_table(input_path)
        LOGGER.info("Running batch for %s", input_path)
        result = run_batch(
            table,
            tier=args.tier or int(batch_cfg.get("tier", 1)),
            boundaries=boundaries,
            benchmark_region=args.benchmark or batch_cfg.get("benchmark_region"),
            save_detailed_objects=include_details,
            defaults=defaults,
        )
    except (BoundaryConfigError, ValidationError, AggregationError, FileNotFoundError, ValueError) as exc:
        LOGGER.error("Batch run failed: %s", exc)
        return 1

    LOGGER.info("\n%s", format_batch(result))
    if output_path is not None:
        export_report(result, output_path, include_details=include_details)
        LOGGER.info("Report written to %s", output_path)
    return 0 if result.summary.n_farms_successful else 2


if __name__ == "__main__":
    sys.exit(main())
