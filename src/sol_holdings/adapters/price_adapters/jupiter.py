from __future__ import annotations

from decimal import Decimal
from typing import Any

from ...clients.batching import chunked, gather_batches, unique
from ...units import as_price
from .base import BasePriceAdapter, PriceData, PriceRequest


def parse_price_map(payload: Any) -> dict[str, Decimal]:
    """Read ``{"data": {key: {"price": number}}}`` into key -> price."""
    data = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(data, dict):
        return {}
    out: dict[str, Decimal] = {}
    for key, entry in data.items():
        if not isinstance(entry, dict):
            continue
        price = as_price(entry.get("price"))
        if price is not None:
            out[key] = price
    return out


class JupiterMintPriceAdapter(BasePriceAdapter):
    """Jupiter price oracle queried by mint address."""

    @property
    def adapter_name(self) -> str:
        return "jupiter-mint"

    async def _fetch_batch(self, batch: list[str]) -> dict[str, Decimal]:
        payload = await self.providers.http.fetch_json(
            self.config.jupiter_price_url,
            params={"mints": ",".join(batch)},
            timeout=self.config.mint_price_timeout,
        )
        return parse_price_map(payload)

    async def fetch_prices(
        self, requests: list[PriceRequest], prices_accumulator: PriceData
    ) -> PriceData:
        mints = unique(r.mint for r in requests)
        if not mints:
            return prices_accumulator

        results, failures = await gather_batches(
            chunked(mints, self.config.price_batch_size),
            self._fetch_batch,
            label=self.adapter_name,
        )
        self.failures.extend(failures)

        wanted = set(mints)
        for result in results:
            for mint, price in result.items():
                if mint in wanted:
                    prices_accumulator.record(mint, price, self.adapter_name)
        return prices_accumulator


def symbol_variants(symbols: list[str]) -> list[str]:
    """Original, UPPER and lower casings of every symbol, deduplicated in that order."""
    base = unique(s.strip() for s in symbols)
    return unique([*base, *(s.upper() for s in base), *(s.lower() for s in base)])


class JupiterSymbolPriceAdapter(BasePriceAdapter):
    """Jupiter price oracle queried by symbol.

    The oracle's id namespace is case-sensitive and inconsistent upstream,
    so every symbol is sent in three casings in one deduplicated batch set.
    """

    @property
    def adapter_name(self) -> str:
        return "jupiter-symbol"

    async def _fetch_batch(self, batch: list[str]) -> dict[str, Decimal]:
        payload = await self.providers.http.fetch_json(
            self.config.jupiter_price_url,
            params={"ids": ",".join(batch)},
            timeout=self.config.symbol_price_timeout,
        )
        return parse_price_map(payload)

    async def fetch_prices(
        self, requests: list[PriceRequest], prices_accumulator: PriceData
    ) -> PriceData:
        variants = symbol_variants([r.symbol for r in requests])
        if not variants:
            return prices_accumulator

        results, failures = await gather_batches(
            chunked(variants, self.config.price_batch_size),
            self._fetch_batch,
            label=self.adapter_name,
        )
        self.failures.extend(failures)

        by_id: dict[str, Decimal] = {}
        for result in results:
            for key, price in result.items():
                for variant in (key, key.upper(), key.lower()):
                    by_id.setdefault(variant, price)

        for request in requests:
            symbol = request.symbol.strip()
            if not symbol:
                continue
            for variant in (symbol, symbol.upper(), symbol.lower()):
                price = by_id.get(variant)
                if price is not None:
                    prices_accumulator.record(request.mint, price, self.adapter_name)
                    break
        return prices_accumulator
