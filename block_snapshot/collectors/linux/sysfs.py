"""Read per-device attribute files under ``/sys/block``.

Every reader degrades to a sentinel on its own; one unreadable attribute
never prevents the rest of a device from being described.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from ...models.schema import SECTOR_SIZE, UNKNOWN


def _read_text(path: Path) -> Optional[str]:
    try:
        return path.read_text().strip()
    except (OSError, UnicodeDecodeError):
        return None


def _read_int(path: Path) -> Optional[int]:
    raw = _read_text(path)
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def size_bytes(dev_dir: Path) -> int:
    """Device size from its sector count; 0 when unreadable."""
    sectors = _read_int(dev_dir / "size")
    if sectors is None or sectors < 0:
        return 0
    return sectors * SECTOR_SIZE


def physical_block_size_bytes(dev_dir: Path) -> int:
    value = _read_int(dev_dir / "queue" / "physical_block_size")
    if value is None or value < 0:
        return 0
    return value


def is_removable(dev_dir: Path) -> bool:
    return _read_text(dev_dir / "removable") == "1"


def is_rotational(dev_dir: Path) -> bool:
    """True only when the queue reports ``1``; unreadable counts as non-rotational."""
    return _read_int(dev_dir / "queue" / "rotational") == 1


def vendor(dev_dir: Path) -> str:
    value = _read_text(dev_dir / "device" / "vendor")
    if value is None:
        return UNKNOWN
    return value


def numa_node_id(sys_block: Path, name: str) -> int:
    """Return the NUMA node the device hangs off, or -1 if none is reported.

    ``/sys/block/<name>`` links into the devices tree, for example
    ``../devices/pci0000:00/0000:00:1f.2/ata1/host0/target0:0:0/0:0:0:0/block/sda``.
    The link target and each of its ancestors below ``devices/`` is checked
    for a ``numa_node`` attribute, nearest first.
    """
    try:
        link = os.readlink(sys_block / name)
    except OSError:
        return -1
    parts = Path(link).parts
    if parts[:2] != ("..", "devices"):
        return -1
    for depth in range(len(parts), 2, -1):
        node = _read_int(sys_block.joinpath(*parts[:depth]) / "numa_node")
        if node is not None:
            return node
    return -1
