"""Pydantic v2 schema definitions for block-snapshot."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

# Sentinel for string attributes that could not be resolved.
UNKNOWN = "unknown"

# Raw device sizes are reported in 512-byte sectors regardless of block size.
SECTOR_SIZE = 512


class DriveType(str, Enum):
    UNKNOWN = "unknown"
    HDD = "hdd"
    FDD = "fdd"
    ODD = "odd"
    SSD = "ssd"

    @property
    def display_name(self) -> str:
        return _DRIVE_TYPE_NAMES[self]


class StorageController(str, Enum):
    UNKNOWN = "unknown"
    IDE = "ide"
    SCSI = "scsi"
    NVME = "nvme"
    VIRTIO = "virtio"
    MMC = "mmc"

    @property
    def display_name(self) -> str:
        return _STORAGE_CONTROLLER_NAMES[self]


_DRIVE_TYPE_NAMES = {
    DriveType.UNKNOWN: "Unknown",
    DriveType.HDD:     "HDD",
    DriveType.FDD:     "FDD",
    DriveType.ODD:     "ODD",
    DriveType.SSD:     "SSD",
}

_STORAGE_CONTROLLER_NAMES = {
    StorageController.UNKNOWN: "Unknown",
    StorageController.IDE:     "IDE",
    StorageController.SCSI:    "SCSI",
    StorageController.NVME:    "NVMe",
    StorageController.VIRTIO:  "virtio",
    StorageController.MMC:     "MMC",
}


class MountInfo(BaseModel):
    model_config = {"frozen": True}

    mount_point: str = ""
    filesystem_type: str = Field(default="", serialization_alias="type")
    read_only: bool = True


class Partition(BaseModel):
    """A logical division of a Disk.

    ``disk_name`` is a relation to the owning Disk, resolved through
    :meth:`BlockInfo.disk_for`. It is not serialized.
    """

    model_config = {"frozen": True}

    name: str
    size_bytes: int = 0
    label: str = UNKNOWN
    uuid: str = UNKNOWN
    mount_info: Optional[MountInfo] = None
    disk_name: str = Field(default="", exclude=True)


class Disk(BaseModel):
    """A single disk drive providing raw block storage."""

    model_config = {"frozen": True}

    name: str
    size_bytes: int = 0
    physical_block_size_bytes: int = 0
    drive_type: DriveType = DriveType.UNKNOWN
    is_removable: bool = Field(default=False, serialization_alias="removable")
    storage_controller: StorageController = StorageController.UNKNOWN
    bus_path: str = UNKNOWN
    numa_node_id: int = Field(default=-1, exclude=True)
    vendor: str = UNKNOWN
    model: str = UNKNOWN
    serial_number: str = UNKNOWN
    wwn: str = UNKNOWN
    partitions: tuple[Partition, ...] = ()
    mount_info: Optional[MountInfo] = None


class BlockInfo(BaseModel):
    """All disk drives and partitions found on the host."""

    model_config = {"frozen": True}

    total_physical_bytes: int = Field(default=0, serialization_alias="total_size_bytes")
    disks: tuple[Disk, ...] = ()

    @classmethod
    def from_disks(cls, disks) -> BlockInfo:
        disks = tuple(disks)
        return cls(
            total_physical_bytes=sum(d.size_bytes for d in disks),
            disks=disks,
        )

    @property
    def partitions(self) -> list[Partition]:
        return [p for d in self.disks for p in d.partitions]

    def disk_for(self, partition: Partition) -> Disk | None:
        for disk in self.disks:
            if disk.name == partition.disk_name:
                return disk
        return None

    def to_dict(self) -> dict:
        """Return the JSON-compatible shape written by the reporters."""
        return {"block": self.model_dump(mode="json", by_alias=True)}
