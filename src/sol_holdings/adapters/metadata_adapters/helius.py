from __future__ import annotations

from typing import Any

import backoff

from ...clients.batching import chunked, gather_batches
from ...clients.http import UpstreamError
from ...domain import TokenMetadata
from ...logger import get_logger
from .base import BaseMetadataAdapter

logger = get_logger(__name__)

MINT_PATHS = (
    ("mint",),
    ("mintAddress",),
    ("id",),
    ("address",),
    ("onChainMetadata", "mintAddress"),
)
SYMBOL_PATHS = (
    ("symbol",),
    ("tokenSymbol",),
    ("onChainMetadata", "metadata", "symbol"),
    ("offChainMetadata", "metadata", "symbol"),
    ("metadata", "symbol"),
)
DECIMALS_PATHS = (
    ("decimals",),
    ("tokenDecimals",),
    ("onChainAccountInfo", "data", "parsed", "info", "decimals"),
    ("onChainMetadata", "metadata", "decimals"),
    ("offChainMetadata", "metadata", "decimals"),
)


def _first(item: dict[str, Any], paths: tuple[tuple[str, ...], ...]) -> Any:
    """Return the first non-null value found along ``paths``."""
    for path in paths:
        value: Any = item
        for key in path:
            value = value.get(key) if isinstance(value, dict) else None
        if value is not None:
            return value
    return None


def _as_decimals(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def parse_metadata_item(item: Any) -> tuple[str, TokenMetadata] | None:
    """Read mint, symbol and decimals from any of Helius' payload shapes."""
    if not isinstance(item, dict):
        return None
    mint = _first(item, MINT_PATHS)
    if not mint or not isinstance(mint, str):
        return None
    symbol = _first(item, SYMBOL_PATHS)
    return mint, TokenMetadata(
        symbol=symbol if isinstance(symbol, str) and symbol else None,
        decimals=_as_decimals(_first(item, DECIMALS_PATHS)),
    )


class HeliusMetadataAdapter(BaseMetadataAdapter):
    """Secondary registry: keyed Helius token-metadata endpoint.

    Skipped when no Helius API key is configured.
    """

    @property
    def adapter_name(self) -> str:
        return "helius"

    @backoff.on_exception(
        backoff.expo,
        UpstreamError,
        max_tries=5,
        max_value=10,
        giveup=lambda e: not e.retriable,
        jitter=backoff.full_jitter,
    )
    async def _lookup(self, batch: list[str]) -> dict[str, TokenMetadata]:
        payload = await self.providers.http.fetch_json(
            self.config.helius_metadata_url,
            "POST",
            body={"mintAccounts": batch},
            params={"api-key": self.config.helius_key_required},
            timeout=self.config.metadata_timeout,
        )
        if not isinstance(payload, list):
            return {}

        out: dict[str, TokenMetadata] = {}
        for item in payload:
            parsed = parse_metadata_item(item)
            if parsed is not None:
                mint, meta = parsed
                out[mint] = meta
        return out

    async def fetch_metadata(self, mints: list[str]) -> dict[str, TokenMetadata]:
        if not self.config.has_helius_key:
            logger.debug("No Helius API key configured, skipping %d mints", len(mints))
            return {}

        results, failures = await gather_batches(
            chunked(mints, self.config.metadata_batch_size),
            self._lookup,
            label=self.adapter_name,
        )
        self.failures.extend(failures)

        wanted = set(mints)
        metadata: dict[str, TokenMetadata] = {}
        for result in results:
            metadata.update(
                {mint: meta for mint, meta in result.items() if mint in wanted}
            )
        return metadata
