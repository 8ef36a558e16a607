"""DexScreener pair lookup shared by the price and logo fallbacks."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from ..constants import DEXSCREENER_STABLE_QUOTES
from ..logger import get_logger
from ..units import parse_quantity
from .batching import chunked, gather_batches, unique
from .http import HttpClient, UpstreamError

logger = get_logger(__name__)


@dataclass(frozen=True)
class BestPair:
    """The pair chosen to price (and illustrate) one mint."""

    price_usd: Decimal
    liquidity_usd: float
    stable_quote: bool
    image_url: str | None = None


def is_better_pair(candidate: BestPair, incumbent: BestPair | None) -> bool:
    """Decide whether ``candidate`` replaces ``incumbent``.

    A stable-quoted pair always beats a non-stable one; with equal stability
    strictly greater USD liquidity wins. Anything else keeps the incumbent,
    so the first pair seen wins full ties.
    """
    if incumbent is None:
        return True
    if candidate.stable_quote != incumbent.stable_quote:
        return candidate.stable_quote
    return candidate.liquidity_usd > incumbent.liquidity_usd


def _liquidity_usd(pair: dict[str, Any]) -> float:
    liquidity = pair.get("liquidity")
    value = liquidity.get("usd") if isinstance(liquidity, dict) else None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    return float(value) if math.isfinite(value) else 0.0


def _address(token: Any) -> str | None:
    if not isinstance(token, dict):
        return None
    address = token.get("address")
    return address if isinstance(address, str) and address else None


def select_best_pairs(
    pairs: Iterable[Any], wanted: set[str]
) -> dict[str, BestPair]:
    """Pick the best pair for every wanted mint appearing on either side of a pair."""
    best: dict[str, BestPair] = {}
    for pair in pairs:
        if not isinstance(pair, dict):
            continue
        raw_price = pair.get("priceUsd")
        price = parse_quantity(raw_price) if raw_price is not None else None
        if price is None:
            continue

        quote = pair.get("quoteToken") or {}
        quote_symbol = str(quote.get("symbol") or "").upper() if isinstance(quote, dict) else ""
        info = pair.get("info")
        image_url = info.get("imageUrl") if isinstance(info, dict) else None

        candidate = BestPair(
            price_usd=price,
            liquidity_usd=_liquidity_usd(pair),
            stable_quote=quote_symbol in DEXSCREENER_STABLE_QUOTES,
            image_url=image_url if isinstance(image_url, str) and image_url else None,
        )

        for mint in (_address(pair.get("baseToken")), _address(quote)):
            if mint is None or mint not in wanted:
                continue
            if is_better_pair(candidate, best.get(mint)):
                best[mint] = candidate
    return best


class DexScreenerClient:
    """Batched DexScreener lookup memoised for the lifetime of one request.

    Mints answered by a successful batch (with or without a pair) are not
    queried again, so the price and logo fallbacks share one round trip.
    """

    def __init__(
        self,
        http: HttpClient,
        base_url: str,
        *,
        batch_size: int = 30,
        timeout: float = 12.0,
    ):
        self._http = http
        self._base_url = base_url.rstrip("/")
        self._batch_size = batch_size
        self._timeout = timeout
        self._resolved: dict[str, BestPair | None] = {}
        self.failures: list[BaseException] = []

    async def _fetch_batch(self, batch: list[str]) -> tuple[list[str], list[Any]]:
        url = f"{self._base_url}/{','.join(batch)}"
        payload = await self._http.fetch_json(url, timeout=self._timeout)
        # API returns one flattened list of pairs, older shape wraps it in "pairs"
        if isinstance(payload, list):
            return batch, payload
        if isinstance(payload, dict) and isinstance(payload.get("pairs"), list):
            return batch, payload["pairs"]
        raise UpstreamError(url, None, "unexpected DexScreener payload")

    async def best_pairs(self, mints: Iterable[str]) -> dict[str, BestPair]:
        """Return the best pair for each mint that DexScreener knows about."""
        requested = unique(mints)
        pending = [mint for mint in requested if mint not in self._resolved]

        if pending:
            wanted = set(pending)
            results, failures = await gather_batches(
                chunked(pending, self._batch_size),
                self._fetch_batch,
                label="dexscreener",
            )
            self.failures.extend(failures)

            best: dict[str, BestPair] = {}
            answered: list[str] = []
            for batch, pairs in results:
                answered.extend(batch)
                for mint, candidate in select_best_pairs(pairs, wanted).items():
                    if is_better_pair(candidate, best.get(mint)):
                        best[mint] = candidate
            # only mints whose own batch succeeded are final; the rest are retried
            for mint in answered:
                self._resolved[mint] = best.get(mint)

            logger.debug(
                "DexScreener matched %d of %d mints", len(best), len(pending)
            )

        return {
            mint: pair
            for mint in requested
            if (pair := self._resolved.get(mint)) is not None
        }
