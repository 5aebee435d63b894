"""Base classes for all collectors."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

from ..models.schema import BlockInfo


class BlockDiscoveryError(Exception):
    """The device tree could not be listed; no snapshot can be produced."""


class Diagnostics:
    """Collects non-fatal warnings raised while building a snapshot."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def warn(self, message: str) -> None:
        self.messages.append(message)

    def __len__(self) -> int:
        return len(self.messages)


@dataclass
class CollectorResult:
    data: Optional[BlockInfo] = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


class BaseCollector(ABC):
    name: str = "base"

    @abstractmethod
    def _collect(self, diagnostics: Diagnostics) -> BlockInfo:
        """Implement in subclass to return the block snapshot."""
        ...

    def snapshot(self) -> BlockInfo:
        """Return the snapshot, raising :class:`BlockDiscoveryError` on fatal failure."""
        return self._collect(Diagnostics())

    def collect(self) -> CollectorResult:
        """Wrap _collect; never raises."""
        diagnostics = Diagnostics()
        try:
            data = self._collect(diagnostics)
        except Exception as exc:  # noqa: BLE001
            return CollectorResult(
                errors=[f"{self.name}: {exc}"],
                warnings=diagnostics.messages,
            )
        return CollectorResult(data=data, warnings=diagnostics.messages)
