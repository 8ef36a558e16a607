from __future__ import annotations

from abc import ABC, abstractmethod

from ...clients import Providers
from ...settings import HoldingsSettings


class BaseLogoAdapter(ABC):
    """Abstract base class for token logo sources."""

    def __init__(self, config: HoldingsSettings, providers: Providers):
        self.config = config
        self.providers = providers
        self.failures: list[BaseException] = []

    @property
    @abstractmethod
    def adapter_name(self) -> str:
        ...

    @abstractmethod
    async def fetch_logos(self, mints: list[str]) -> dict[str, str]:
        """Return normalised http(s) logo URLs for the mints this source knows."""
        ...
