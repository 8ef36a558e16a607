from __future__ import annotations

from ...clients.http import UpstreamError
from ...constants import SOL_MINT
from ...logger import get_logger
from ...units import as_price
from .base import BasePriceAdapter, PriceData, PriceRequest

logger = get_logger(__name__)

COINGECKO_SOLANA_ID = "solana"


class NativeSpotPriceAdapter(BasePriceAdapter):
    """CoinGecko spot price, consulted for the native SOL mint only."""

    @property
    def adapter_name(self) -> str:
        return "native-spot"

    async def fetch_prices(
        self, requests: list[PriceRequest], prices_accumulator: PriceData
    ) -> PriceData:
        if not any(r.mint == SOL_MINT for r in requests):
            return prices_accumulator

        try:
            payload = await self.providers.http.fetch_json(
                self.config.coingecko_price_url,
                params={"ids": COINGECKO_SOLANA_ID, "vs_currencies": "usd"},
                timeout=self.config.spot_price_timeout,
            )
        except UpstreamError as e:
            logger.warning("CoinGecko SOL price lookup failed: %s", e)
            self.failures.append(e)
            return prices_accumulator

        entry = payload.get(COINGECKO_SOLANA_ID) if isinstance(payload, dict) else None
        price = as_price(entry.get("usd")) if isinstance(entry, dict) else None
        if price is None:
            logger.warning("CoinGecko returned no usable SOL price")
            return prices_accumulator

        prices_accumulator.record(SOL_MINT, price, self.adapter_name)
        return prices_accumulator
