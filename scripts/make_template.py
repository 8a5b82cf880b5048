"""Write an empty or example-filled farm table template."""

from __future__ import annotations

import argparse
import logging

import _path_setup  # noqa: F401
from dairy_footprint.writers import write_template

LOGGER = logging.getLogger("dairy_footprint.template")


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(name)s: %(message)s")
    parser = argparse.ArgumentParser(description="Create the farm table template")
    parser.add_argument("output", help="Destination file (.xlsx or .csv)")
    parser.add_argument("--blank", action="store_true", help="Write headers only, without example farms")
    args = parser.parse_args()
    path = write_template(args.output, include_examples=not args.blank)
    LOGGER.info("Template written to %s", path)


if __name__ == "__main__":
    main()
