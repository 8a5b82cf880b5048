"""Helpers to resolve the configuration file and paths relative to it."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, MutableMapping

REPO_ROOT = Path(__file__).resolve().parents[1]

CONFIG_ENV_VAR = "DAIRY_FOOTPRINT_CONFIG_PATH"
CONFIG_ROOT_KEY = "_config_root"


def get_config_path(default: Path | None = None) -> Path:
    """Return the configuration path, honouring DAIRY_FOOTPRINT_CONFIG_PATH when set."""

    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser().resolve()
    if default is not None:
        return default.resolve()
    return (REPO_ROOT / "config.yaml").resolve()


def set_config_root(config: MutableMapping[str, object], root: Path) -> None:
    """Annotate a config mapping with its filesystem root for relative paths."""

    if not isinstance(config, MutableMapping):
        return
    config[CONFIG_ROOT_KEY] = str(root.resolve())


def get_config_root(config: Mapping[str, object], fallback: Path | None = None) -> Path:
    """Return the base directory that relative paths should resolve against."""

    if isinstance(config, Mapping):
        value = config.get(CONFIG_ROOT_KEY)
        if isinstance(value, str):
            return Path(value).expanduser().resolve()
    return (fallback or REPO_ROOT).resolve()


def resolve_path(path_like: str | Path, config: Mapping[str, object] | None = None) -> Path:
    """Resolve ``path_like`` against the config root unless it is absolute."""

    path = Path(path_like).expanduser()
    if path.is_absolute():
        return path
    return (get_config_root(config or {}) / path).resolve()
