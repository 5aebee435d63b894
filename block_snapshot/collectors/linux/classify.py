"""Map kernel device names to drive type and storage controller."""

from ...models.schema import DriveType, StorageController

# Evaluated in order; first matching prefix wins.
# Naming conventions: https://en.wikipedia.org/wiki/Device_file
_PREFIX_RULES: tuple[tuple[str, DriveType, StorageController], ...] = (
    ("fd",   DriveType.FDD, StorageController.UNKNOWN),
    ("sd",   DriveType.HDD, StorageController.SCSI),
    ("hd",   DriveType.HDD, StorageController.IDE),
    ("vd",   DriveType.HDD, StorageController.VIRTIO),
    ("nvme", DriveType.SSD, StorageController.NVME),
    ("sr",   DriveType.ODD, StorageController.SCSI),
    ("xvd",  DriveType.HDD, StorageController.SCSI),
    ("mmc",  DriveType.SSD, StorageController.MMC),
)


def classify(name: str) -> tuple[DriveType, StorageController]:
    """Return ``(drive_type, storage_controller)`` for a device name like ``sda``."""
    for prefix, drive_type, controller in _PREFIX_RULES:
        if name.startswith(prefix):
            return drive_type, controller
    return DriveType.UNKNOWN, StorageController.UNKNOWN


def apply_rotational(drive_type: DriveType, rotational: bool) -> DriveType:
    """Force SSD for any device not reporting itself rotational."""
    if not rotational:
        return DriveType.SSD
    return drive_type
