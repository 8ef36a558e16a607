from __future__ import annotations

from ...logger import get_logger
from .base import BasePriceAdapter, PriceData, PriceRequest

logger = get_logger(__name__)


class DexScreenerPriceAdapter(BasePriceAdapter):
    """Liquidity-pool fallback: price from the best DexScreener pair."""

    @property
    def adapter_name(self) -> str:
        return "dexscreener"

    async def fetch_prices(
        self, requests: list[PriceRequest], prices_accumulator: PriceData
    ) -> PriceData:
        mints = [r.mint for r in requests]
        if not mints:
            return prices_accumulator

        pairs = self.providers.pairs
        seen_failures = len(pairs.failures)
        best = await pairs.best_pairs(mints)
        self.failures.extend(pairs.failures[seen_failures:])

        for mint in mints:
            pair = best.get(mint)
            if pair is not None and pair.price_usd > 0:
                prices_accumulator.record(mint, pair.price_usd, self.adapter_name)
                logger.debug(
                    "Priced %s from DexScreener (liquidity %.0f USD, stable quote=%s)",
                    mint,
                    pair.liquidity_usd,
                    pair.stable_quote,
                )
        return prices_accumulator
