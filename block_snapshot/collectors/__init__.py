"""Platform collector selection for block-snapshot."""

import sys

from .base import BaseCollector
from ..paths import SysPaths


def load_platform_collector(paths: SysPaths | None = None) -> BaseCollector:
    """Return the block collector implementation for the running platform."""
    if sys.platform.startswith("linux"):
        from .linux.block import LinuxBlockCollector
        return LinuxBlockCollector(paths)
    from .common.storage import PsutilBlockCollector
    return PsutilBlockCollector()
