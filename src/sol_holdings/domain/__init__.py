"""Domain models for holdings resolution."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from ..units import format_quantity


@dataclass(frozen=True)
class TokenAccount:
    """One parsed SPL token account owned by the queried address."""

    mint: str
    ui_amount_string: str
    decimals: int | None


@dataclass
class RawHolding:
    """Unpriced, unlabeled quantity of one mint owned by the address."""

    mint: str
    amount: Decimal
    decimals: int | None = None
    is_nft: bool = False

    @property
    def amount_text(self) -> str:
        return format_quantity(self.amount)


@dataclass(frozen=True)
class TokenMetadata:
    """Partial symbol/decimals record reported by a single metadata source."""

    symbol: str | None = None
    decimals: int | None = None


@dataclass(frozen=True)
class ResolvedMetadata:
    """Final display symbol and decimals for a mint."""

    mint: str
    symbol: str
    decimals: int


@dataclass(frozen=True)
class Holding:
    """A priced, labeled holding returned to the caller.

    ``price_usd`` and ``value_usd`` stay ``None`` when no provider could
    price the mint, so "unknown" is never confused with "worthless".
    """

    mint: str
    symbol: str
    amount: Decimal
    decimals: int
    is_nft: bool
    price_usd: Decimal | None = None
    value_usd: Decimal | None = None
    logo_uri: str | None = None
    price_source: str | None = None

    @property
    def amount_text(self) -> str:
        return format_quantity(self.amount)

    def as_dict(self) -> dict[str, Any]:
        """Return a JSON-ready dict, omitting unknown optional fields."""
        data: dict[str, Any] = {
            "mint": self.mint,
            "symbol": self.symbol,
            "amount": float(self.amount),
            "amountText": self.amount_text,
            "decimals": self.decimals,
            "isNFT": self.is_nft,
        }
        if self.price_usd is not None:
            data["priceUSD"] = float(self.price_usd)
        if self.value_usd is not None:
            data["valueUSD"] = float(self.value_usd)
        if self.logo_uri is not None:
            data["logoURI"] = self.logo_uri
        if self.price_source is not None:
            data["priceSource"] = self.price_source
        return data


@dataclass(frozen=True)
class HoldingsResult:
    """Sorted holdings for one address plus the time they were resolved."""

    address: str
    holdings: list[Holding] = field(default_factory=list)
    updated_at: int = 0  # epoch milliseconds

    @property
    def mints(self) -> set[str]:
        return {h.mint for h in self.holdings}

    def as_dict(self) -> dict[str, Any]:
        return {
            "holdings": [h.as_dict() for h in self.holdings],
            "updatedAt": self.updated_at,
        }
