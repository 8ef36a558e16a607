from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal

from ...clients import Providers
from ...settings import HoldingsSettings


@dataclass(frozen=True)
class PriceRequest:
    """A mint still waiting for a USD price, with its resolved symbol."""

    mint: str
    symbol: str


@dataclass
class PriceData:
    """USD unit prices accumulated across price adapters."""

    prices: dict[str, Decimal] = field(default_factory=dict)  # mint -> USD per unit
    sources: dict[str, str] = field(default_factory=dict)  # mint -> adapter name

    def record(self, mint: str, price: Decimal, source: str) -> bool:
        """Store a price unless the mint is already priced.

        The first source to price a mint wins outright; prices are never
        blended or overwritten.

        Returns:
            True when the price was stored
        """
        if mint in self.prices:
            return False
        self.prices[mint] = price
        self.sources[mint] = source
        return True

    def has(self, mint: str) -> bool:
        return mint in self.prices


class BasePriceAdapter(ABC):
    """Abstract base class for price adapters."""

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
    async def fetch_prices(
        self, requests: list[PriceRequest], prices_accumulator: PriceData
    ) -> PriceData:
        """Price the given (still unpriced) mints into the accumulator."""
        ...
