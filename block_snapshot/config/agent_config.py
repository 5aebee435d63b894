"""Configuration loader for block-snapshot.

Resolution order (first match wins):
  1. --config <path> CLI flag (explicit_path argument)
  2. BLOCK_SNAPSHOT_CONFIG environment variable
  3. /etc/block-snapshot/config.yaml, when present

Environment overrides applied after loading:
  BLOCK_SNAPSHOT_CHROOT            replaces ``chroot``
  BLOCK_SNAPSHOT_DISABLE_WARNINGS  sets ``warnings`` to false

Example::

    chroot: /mnt/image
    paths:
      etc_mtab: /proc/self/mounts
    output:
      format: yaml
"""

from __future__ import annotations

import copy
import os
from pathlib import Path
from typing import Any

from ..paths import SysPaths

_CONFIG_ENV   = "BLOCK_SNAPSHOT_CONFIG"
_CHROOT_ENV   = "BLOCK_SNAPSHOT_CHROOT"
_NO_WARN_ENV  = "BLOCK_SNAPSHOT_DISABLE_WARNINGS"

_DEFAULT_CONFIG_PATH = Path("/etc/block-snapshot/config.yaml")

_DEFAULTS: dict[str, Any] = {
    "chroot": "/",
    "paths": {
        "sys_block":     None,
        "run_udev_data": None,
        "etc_mtab":      None,
    },
    "output": {
        "format": "text",   # text | json | yaml
        "pretty": True,
    },
    "warnings": True,
}


def _load_yaml(path: Path) -> dict:
    """Load a YAML file and return its top-level mapping."""
    import yaml
    with open(path, encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config must be a YAML mapping, got {type(data).__name__}: {path}")
    return data


def _deep_merge(base: dict, override: dict) -> dict:
    """Return a new dict with override merged recursively into base."""
    result = copy.deepcopy(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _env_flag(name: str) -> bool:
    value = os.environ.get(name)
    if value is None:
        return False
    return value.strip().lower() not in {"", "0", "false", "no"}


def load_config(explicit_path: str | None = None) -> dict:
    """Load and return the resolved configuration dict.

    Raises:
        FileNotFoundError: If ``explicit_path`` is given but does not exist.
        ValueError: If the YAML file, or its ``paths`` or ``output`` section,
            is not a mapping.
    """
    raw: dict = {}

    if explicit_path is not None:
        p = Path(explicit_path)
        if not p.exists():
            raise FileNotFoundError(f"Config file not found: {p}")
        raw = _load_yaml(p)
    else:
        env_path_str = os.environ.get(_CONFIG_ENV)
        if env_path_str:
            env_p = Path(env_path_str)
            if env_p.exists():
                raw = _load_yaml(env_p)
            else:
                print(
                    f"  [config] Warning: {_CONFIG_ENV} points to missing file: {env_p}",
                    flush=True,
                )
        if not raw and _DEFAULT_CONFIG_PATH.exists():
            raw = _load_yaml(_DEFAULT_CONFIG_PATH)

    config = _deep_merge(_DEFAULTS, raw)
    for section in ("paths", "output"):
        if not isinstance(config[section], dict):
            raise ValueError(
                f"Config section '{section}' must be a mapping, "
                f"got {type(config[section]).__name__}"
            )

    chroot = os.environ.get(_CHROOT_ENV)
    if chroot:
        config["chroot"] = chroot
    if _env_flag(_NO_WARN_ENV):
        config["warnings"] = False

    return config


def sys_paths(config: dict) -> SysPaths:
    """Build the collector input paths described by *config*."""
    return SysPaths.from_root(config.get("chroot") or "/", **(config.get("paths") or {}))
