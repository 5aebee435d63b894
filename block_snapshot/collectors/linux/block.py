"""Collect block storage topology on Linux from sysfs, udev and mtab.

None of the sources require root: fdisk, lshw or blockdev would, but the same
information is exposed under /sys/block and /run/udev/data.
"""

from __future__ import annotations

from pathlib import Path

from ...models.schema import BlockInfo, Disk
from ...paths import SysPaths
from ..base import BaseCollector, BlockDiscoveryError, Diagnostics
from . import sysfs
from .classify import apply_rotational, classify
from .mounts import MountEntry, load_mount_table, mount_info_for
from .partitions import disk_partitions
from .udev import DeviceProperties, load_properties


def disk_names(sys_block: Path) -> list[str]:
    """List device names under *sys_block*, skipping loopback devices.

    Raises:
        BlockDiscoveryError: *sys_block* cannot be listed.
    """
    try:
        entries = list(sys_block.iterdir())
    except OSError as exc:
        raise BlockDiscoveryError(f"cannot list {sys_block}: {exc}") from exc
    return [e.name for e in entries if not e.name.startswith("loop")]


def build_disk(
    paths: SysPaths,
    name: str,
    mounts: list[MountEntry],
    diagnostics: Diagnostics,
) -> Disk:
    dev_dir = paths.sys_block / name

    drive_type, controller = classify(name)
    drive_type = apply_rotational(drive_type, sysfs.is_rotational(dev_dir))

    try:
        props = DeviceProperties.from_mapping(load_properties(dev_dir, paths.run_udev_data))
    except (OSError, ValueError) as exc:
        diagnostics.warn(f"no udev properties for disk {name}: {exc}")
        props = DeviceProperties()

    partitions = disk_partitions(
        paths.sys_block, name, mounts, paths.run_udev_data, diagnostics,
    )

    return Disk(
        name=name,
        size_bytes=sysfs.size_bytes(dev_dir),
        physical_block_size_bytes=sysfs.physical_block_size_bytes(dev_dir),
        drive_type=drive_type,
        is_removable=sysfs.is_removable(dev_dir),
        storage_controller=controller,
        bus_path=props.bus_path,
        numa_node_id=sysfs.numa_node_id(paths.sys_block, name),
        vendor=sysfs.vendor(dev_dir),
        model=props.model,
        serial_number=props.serial_number,
        wwn=props.wwn,
        partitions=tuple(partitions),
        mount_info=mount_info_for(mounts, name),
    )


class LinuxBlockCollector(BaseCollector):
    name = "linux.block"

    def __init__(self, paths: SysPaths | None = None) -> None:
        self.paths = paths or SysPaths.from_root("/")

    def _collect(self, diagnostics: Diagnostics) -> BlockInfo:
        names = disk_names(self.paths.sys_block)
        mounts = load_mount_table(self.paths.etc_mtab, diagnostics)
        return BlockInfo.from_disks(
            build_disk(self.paths, name, mounts, diagnostics) for name in names
        )


def block_info(paths: SysPaths | None = None) -> BlockInfo:
    """Return a fresh snapshot of the host's block devices.

    Raises:
        BlockDiscoveryError: the device tree cannot be listed.
    """
    return LinuxBlockCollector(paths).snapshot()
