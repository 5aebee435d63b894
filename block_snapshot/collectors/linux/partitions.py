"""Enumerate the partitions nested under a disk's sysfs directory."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from ...models.schema import Partition
from ..base import Diagnostics
from . import sysfs
from .mounts import MountEntry, mount_info_for
from .udev import DeviceProperties, load_properties


def partition_names(disk_dir: Path, disk: str) -> list[str]:
    """Names of entries under *disk_dir* that share the disk's name (``sda1``, ``sda2``).

    Raises:
        OSError: *disk_dir* cannot be listed.
    """
    return [entry.name for entry in disk_dir.iterdir() if entry.name.startswith(disk)]


def disk_partitions(
    sys_block: Path,
    disk: str,
    mounts: Sequence[MountEntry],
    udev_root: Path,
    diagnostics: Diagnostics,
) -> list[Partition]:
    """Build the partitions of *disk* (a name such as ``sda``, not ``/dev/sda``)."""
    disk_dir = sys_block / disk
    try:
        names = partition_names(disk_dir, disk)
    except OSError as exc:
        diagnostics.warn(f"failed to read disk partitions of {disk}: {exc}")
        return []

    out = []
    for name in names:
        part_dir = disk_dir / name
        try:
            props = DeviceProperties.from_mapping(load_properties(part_dir, udev_root))
        except (OSError, ValueError) as exc:
            diagnostics.warn(f"no udev properties for partition {name}: {exc}")
            props = DeviceProperties()
        out.append(Partition(
            name=name,
            size_bytes=sysfs.size_bytes(part_dir),
            label=props.label,
            uuid=props.uuid,
            mount_info=mount_info_for(mounts, name),
            disk_name=disk,
        ))
    return out
