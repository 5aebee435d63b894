"""Human-readable summary of a block snapshot."""

from __future__ import annotations

import math

from ..models.schema import UNKNOWN, BlockInfo, Disk, Partition

_KB = 1024
_MB = _KB * 1024
_GB = _MB * 1024
_TB = _GB * 1024
_PB = _TB * 1024


def amount_unit(size: int) -> tuple[int, str]:
    """Return the 1024-based unit used to display *size* bytes."""
    if size < _MB:
        return _KB, "KB"
    if size < _GB:
        return _MB, "MB"
    if size < _TB:
        return _GB, "GB"
    if size < _PB:
        return _TB, "TB"
    return _PB, "PB"


def format_size(size: int) -> str:
    """Format *size* rounded up to its unit, e.g. ``477GB``; ``unknown`` for 0."""
    if size <= 0:
        return UNKNOWN
    unit, label = amount_unit(size)
    return f"{math.ceil(size / unit)}{label}"


def describe_info(info: BlockInfo) -> str:
    plural = "disk" if len(info.disks) == 1 else "disks"
    return (
        f"block storage ({len(info.disks)} {plural}, "
        f"{format_size(info.total_physical_bytes)} physical storage)"
    )


def describe_disk(disk: Disk) -> str:
    type_str = mount_str = ""
    if disk.mount_info is not None:
        type_str = f" [{disk.mount_info.filesystem_type}]"
        mount_str = f" mounted@{disk.mount_info.mount_point}"

    extras = ""
    if disk.vendor:
        extras += f" vendor={disk.vendor}"
    if disk.model != UNKNOWN:
        extras += f" model={disk.model}"
    if disk.serial_number != UNKNOWN:
        extras += f" serial={disk.serial_number}"
    if disk.wwn != UNKNOWN:
        extras += f" WWN={disk.wwn}"
    if disk.is_removable:
        extras += " removable=true"

    at_node = f" (node #{disk.numa_node_id})" if disk.numa_node_id >= 0 else ""
    return (
        f"{disk.name} {disk.drive_type.display_name} ({format_size(disk.size_bytes)}) "
        f"{disk.storage_controller.display_name}{type_str}{mount_str} "
        f"[@{disk.bus_path}{at_node}]{extras}"
    )


def describe_partition(part: Partition) -> str:
    type_str = mount_str = ""
    if part.mount_info is not None:
        type_str = f"[{part.mount_info.filesystem_type}]"
        mount_str = f" mounted@{part.mount_info.mount_point}"
    return f"{part.name} ({format_size(part.size_bytes)}) {type_str}{mount_str}".rstrip()


def render_text(info: BlockInfo) -> str:
    lines = [describe_info(info)]
    for disk in info.disks:
        lines.append(f"  {describe_disk(disk)}")
        for part in disk.partitions:
            lines.append(f"    {describe_partition(part)}")
    return "\n".join(lines) + "\n"
