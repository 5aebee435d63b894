"""block-snapshot: best-effort block storage inventory for the local host."""

__version__ = "1.0.0"
