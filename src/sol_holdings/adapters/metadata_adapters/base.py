from __future__ import annotations

from abc import ABC, abstractmethod

from ...clients import Providers
from ...domain import TokenMetadata
from ...settings import HoldingsSettings


class BaseMetadataAdapter(ABC):
    """Abstract base class for token metadata sources."""

    def __init__(self, config: HoldingsSettings, providers: Providers):
        """Initialize the adapter with configuration and provider clients."""
        self.config = config
        self.providers = providers
        self.failures: list[BaseException] = []

    @property
    @abstractmethod
    def adapter_name(self) -> str:
        """Return the name of this adapter."""
        ...

    @abstractmethod
    async def fetch_metadata(self, mints: list[str]) -> dict[str, TokenMetadata]:
        """Fetch symbol/decimals for the given mints.

        Mints the source does not know are simply absent from the result.
        """
        ...
