"""Methodology defaults and YAML configuration loading.

Every calculator takes an explicit :class:`MethodDefaults` instance (or falls
back to :data:`DEFAULTS`). Overriding one factor for a run or a test is a
``DEFAULTS.replace(gwp_ch4=28.0)`` call rather than a change to module state.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping

import yaml

LOGGER = logging.getLogger("dairy_footprint")
if not LOGGER.handlers:
    handler = logging.StreamHandler()
    handler.setLevel(logging.INFO)
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    LOGGER.addHandler(handler)
LOGGER.setLevel(logging.INFO)
LOGGER.propagate = False


@dataclass(frozen=True, slots=True)
class MethodDefaults:
    """Default constants shared by the source calculators."""

    gwp_ch4: float = 27.2
    gwp_n2o: float = 273.0
    ym_percent: float = 6.5
    milk_yield_kg: float = 6000.0
    n_excreted_kg: float = 100.0
    ef_n2o_manure_direct: float = 0.02
    manure_body_weight_kg: float = 600.0
    diet_digestibility: float = 0.65
    grid_factor_fallback: float = 0.35
    milk_density: float = 1.03
    fat_percent: float = 4.0
    protein_percent: float = 3.3
    area_tolerance: float = 0.05
    n_simulations: int = 1000

    def replace(self, **changes: Any) -> "MethodDefaults":
        return replace(self, **changes)

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any] | None) -> "MethodDefaults":
        if not values:
            return cls()
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ValueError(f"Unknown keys in 'defaults' section: {unknown}")
        parsed: dict[str, Any] = {}
        for key, value in values.items():
            parsed[key] = int(value) if key == "n_simulations" else float(value)
        return cls(**parsed)

    @classmethod
    def from_config(cls, config_path: Path | str | None = None) -> "MethodDefaults":
        """Build defaults from the ``defaults`` section of ``config.yaml``."""
        config = load_config(config_path)
        section = config.get("defaults") or {}
        if not isinstance(section, Mapping):
            raise ValueError("'defaults' section of config.yaml must be a mapping")
        return cls.from_mapping(section)


DEFAULTS = MethodDefaults()


def load_config(config_path: Path | str | None = None) -> dict[str, Any]:
    """Read a YAML configuration file, honouring ``DAIRY_FOOTPRINT_CONFIG_PATH``."""
    from config_paths import get_config_path, set_config_root  # local import to avoid cycle

    path = Path(config_path) if config_path is not None else get_config_path()
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")
    with path.open() as handle:
        config = yaml.safe_load(handle) or {}
    if not isinstance(config, dict):
        raise ValueError(f"Configuration file {path} must contain a mapping")
    set_config_root(config, path.parent)
    return config
