from __future__ import annotations

from decimal import Decimal

from ...constants import USD_STABLE_SYMBOLS
from ...normalize import currency_code
from .base import BasePriceAdapter, PriceData, PriceRequest

STABLE_PRICE_USD = Decimal("1")

# Compared in normalised currency-code form, so "USDC.E" matches "USDCE"
STABLE_CODES = frozenset(
    {s.upper() for s in USD_STABLE_SYMBOLS}
    | {currency_code(s) for s in USD_STABLE_SYMBOLS}
)


class StablecoinPriceAdapter(BasePriceAdapter):
    """Assign $1 to known stablecoins the oracles missed."""

    @property
    def adapter_name(self) -> str:
        return "stablecoin"

    async def fetch_prices(
        self, requests: list[PriceRequest], prices_accumulator: PriceData
    ) -> PriceData:
        for request in requests:
            if request.symbol.strip().upper() in STABLE_CODES:
                prices_accumulator.record(
                    request.mint, STABLE_PRICE_USD, self.adapter_name
                )
        return prices_accumulator
