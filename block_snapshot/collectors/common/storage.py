"""Best-effort block collector for hosts without sysfs, via psutil.

Only mounted devices are visible. Each becomes a Disk carrying its own
mount info; controller and drive type come from the device name.
"""

import os

import psutil

from ...models.schema import SECTOR_SIZE, BlockInfo, Disk, MountInfo
from ..base import BaseCollector, Diagnostics
from ..linux.classify import classify


def _device_name(device: str) -> str:
    name = os.path.basename(device.rstrip("/\\"))
    return name or device


class PsutilBlockCollector(BaseCollector):
    name = "common.block"

    def _collect(self, diagnostics: Diagnostics) -> BlockInfo:
        disks = []
        seen: set[str] = set()

        for part in psutil.disk_partitions(all=False):
            if part.device in seen:
                continue
            seen.add(part.device)

            name = _device_name(part.device)
            size = 0
            try:
                usage = psutil.disk_usage(part.mountpoint)
                size = usage.total // SECTOR_SIZE * SECTOR_SIZE
            except OSError as exc:
                diagnostics.warn(f"failed to read usage of {part.mountpoint}: {exc}")

            drive_type, controller = classify(name)
            disks.append(Disk(
                name=name,
                size_bytes=size,
                drive_type=drive_type,
                storage_controller=controller,
                mount_info=MountInfo(
                    mount_point=part.mountpoint,
                    filesystem_type=part.fstype,
                    read_only="rw" not in part.opts.split(","),
                ),
            ))

        return BlockInfo.from_disks(disks)
