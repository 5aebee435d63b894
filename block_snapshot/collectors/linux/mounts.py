"""Parse the mount table (``/etc/mtab`` format) and resolve device mounts.

Entries look like::

    /dev/sda6 / ext4 rw,relatime,errors=remount-ro,data=ordered 0 0

Only device-backed lines (source field starting with ``/``) are kept.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from ...models.schema import MountInfo
from ..base import Diagnostics

# getmntent(3) encodes these characters in the mount point field.
_ESCAPES = {
    "\\011": "\t",
    "\\012": "\n",
    "\\040": " ",
    "\\\\":  "\\",
}
_ESCAPE_RE = re.compile("|".join(re.escape(code) for code in _ESCAPES))


@dataclass(frozen=True)
class MountEntry:
    device: str
    mount_point: str
    filesystem_type: str
    options: tuple[str, ...]

    @property
    def read_only(self) -> bool:
        return "rw" not in self.options

    def to_mount_info(self) -> MountInfo:
        return MountInfo(
            mount_point=self.mount_point,
            filesystem_type=self.filesystem_type,
            read_only=self.read_only,
        )


def decode_mount_point(raw: str) -> str:
    """Decode octal escapes in a single left-to-right pass.

    A decoded backslash is never re-read as the start of another escape.
    """
    return _ESCAPE_RE.sub(lambda m: _ESCAPES[m.group(0)], raw)


def parse_mount_entry(line: str) -> Optional[MountEntry]:
    """Parse one mount table line; return None for lines that are not device mounts."""
    if not line.startswith("/"):
        return None
    fields = line.split()
    if len(fields) < 4:
        return None
    return MountEntry(
        device=fields[0],
        mount_point=decode_mount_point(fields[1]),
        filesystem_type=fields[2],
        options=tuple(fields[3].split(",")),
    )


def parse_mount_table(text: str) -> list[MountEntry]:
    entries = []
    for line in text.splitlines():
        entry = parse_mount_entry(line)
        if entry is not None:
            entries.append(entry)
    return entries


def load_mount_table(path: Path, diagnostics: Diagnostics | None = None) -> list[MountEntry]:
    """Read and parse the mount table at *path*.

    An unreadable table yields no entries, so every lookup falls back to
    "not mounted".
    """
    try:
        text = Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        if diagnostics is not None:
            diagnostics.warn(f"failed to read mount table {path}: {exc}")
        return []
    return parse_mount_table(text)


def _device_path(part: str) -> str:
    # Accept either "sda1" or "/dev/sda1".
    if part.startswith("/dev"):
        return part
    return "/dev/" + part


def find_mount(entries: Iterable[MountEntry], part: str) -> Optional[MountEntry]:
    """Return the first entry, in table order, mounted from *part*."""
    device = _device_path(part)
    for entry in entries:
        if entry.device == device:
            return entry
    return None


def partition_info(entries: Iterable[MountEntry], part: str) -> tuple[str, str, bool]:
    """Return ``(mount_point, filesystem_type, read_only)`` for *part*.

    Unmounted devices report ``("", "", True)``.
    """
    entry = find_mount(entries, part)
    if entry is None:
        return "", "", True
    return entry.mount_point, entry.filesystem_type, entry.read_only


def mount_info_for(entries: Iterable[MountEntry], part: str) -> Optional[MountInfo]:
    entry = find_mount(entries, part)
    if entry is None:
        return None
    return entry.to_mount_info()
