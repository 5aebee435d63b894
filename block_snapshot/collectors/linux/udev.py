"""Look up device properties in the udev runtime database.

Each block device has a record at ``/run/udev/data/b<MAJOR>:<MINOR>``.
Property lines carry an ``E:`` marker::

    E:ID_MODEL=Samsung_SSD_860_EVO_500GB
    E:ID_SERIAL_SHORT=S3Z2NB0K123456A

Other record lines (``S:`` symlinks, ``I:`` ids, ``G:`` tags ...) are ignored.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from ...models.schema import UNKNOWN

_DEV_NUMBER_RE = re.compile(r"^(\d+):(\d+)$")


def parse_properties(text: str) -> dict[str, str]:
    """Return the ``E:`` key/value pairs of a udev record; later keys win."""
    props: dict[str, str] = {}
    for line in text.splitlines():
        if not line.startswith("E:"):
            continue
        key, sep, value = line[2:].partition("=")
        if sep:
            props[key] = value
    return props


def udev_key(dev_dir: Path) -> str:
    """Return the database key (``b8:0``) for the device whose sysfs dir is *dev_dir*.

    Raises:
        OSError: the ``dev`` attribute cannot be read.
        ValueError: the ``dev`` attribute is not ``MAJOR:MINOR``.
    """
    raw = (Path(dev_dir) / "dev").read_text().strip()
    match = _DEV_NUMBER_RE.match(raw)
    if match is None:
        raise ValueError(f"malformed device number {raw!r} in {dev_dir}")
    return f"b{match.group(1)}:{match.group(2)}"


def load_properties(dev_dir: Path, udev_root: Path) -> dict[str, str]:
    """Load the udev properties record for the device at *dev_dir*.

    Raises:
        OSError: the ``dev`` attribute or the record file cannot be read.
        ValueError: the ``dev`` attribute is malformed.
    """
    record = Path(udev_root) / udev_key(dev_dir)
    return parse_properties(record.read_text(encoding="utf-8", errors="replace"))


def _first(props: dict[str, str], *keys: str) -> str:
    for key in keys:
        if key in props:
            return props[key]
    return UNKNOWN


@dataclass(frozen=True)
class DeviceProperties:
    model: str = UNKNOWN
    serial_number: str = UNKNOWN
    bus_path: str = UNKNOWN
    wwn: str = UNKNOWN
    label: str = UNKNOWN
    uuid: str = UNKNOWN

    @classmethod
    def from_mapping(cls, props: dict[str, str]) -> DeviceProperties:
        return cls(
            model=_first(props, "ID_MODEL"),
            # ID_SERIAL repeats vendor and model information; prefer the short form.
            serial_number=_first(props, "ID_SERIAL_SHORT", "ID_SERIAL"),
            # ID_PATH_TAG mangles punctuation into underscores.
            bus_path=_first(props, "ID_PATH"),
            # Same fallback order lsblk uses.
            wwn=_first(props, "ID_WWN_WITH_EXTENSION", "ID_WWN"),
            label=_first(props, "ID_FS_LABEL"),
            uuid=_first(props, "ID_PART_ENTRY_UUID", "ID_FS_UUID"),
        )
