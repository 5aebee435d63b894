"""Locations of the host data sources read by the Linux collector."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class SysPaths:
    sys_block: Path
    run_udev_data: Path
    etc_mtab: Path

    @classmethod
    def from_root(cls, root: str | Path = "/", **overrides) -> SysPaths:
        """Build the default layout under *root*, then apply non-empty overrides.

        Useful for inspecting a mounted image or a captured snapshot of
        another host's ``/sys``, ``/run`` and ``/etc``.
        """
        root = Path(root)
        paths = {
            "sys_block":     root / "sys" / "block",
            "run_udev_data": root / "run" / "udev" / "data",
            "etc_mtab":      root / "etc" / "mtab",
        }
        for key, value in overrides.items():
            if key not in paths:
                raise ValueError(f"Unknown path override: {key}")
            if value:
                paths[key] = Path(value)
        return cls(**paths)
