from __future__ import annotations

import backoff

from ...clients.batching import chunked, gather_batches
from ...clients.http import UpstreamError
from ...domain import TokenMetadata
from ...logger import get_logger
from .base import BaseMetadataAdapter

logger = get_logger(__name__)


class JupiterMetadataAdapter(BaseMetadataAdapter):
    """Primary registry: Jupiter token search, queried with comma-joined mints."""

    @property
    def adapter_name(self) -> str:
        return "jupiter"

    @backoff.on_exception(
        backoff.expo,
        UpstreamError,
        max_tries=3,
        max_value=10,
        giveup=lambda e: not e.retriable,
        jitter=backoff.full_jitter,
    )
    async def _search(self, batch: list[str]) -> dict[str, TokenMetadata]:
        payload = await self.providers.http.fetch_json(
            self.config.jupiter_search_url,
            params={"query": ",".join(batch)},
            timeout=self.config.metadata_timeout,
        )
        if not isinstance(payload, list):
            return {}

        out: dict[str, TokenMetadata] = {}
        for item in payload:
            if not isinstance(item, dict):
                continue
            mint = item.get("id")
            if not mint or not isinstance(mint, str):
                continue
            symbol = item.get("symbol")
            decimals = item.get("decimals")
            out[mint] = TokenMetadata(
                symbol=symbol if isinstance(symbol, str) and symbol else None,
                decimals=(
                    decimals
                    if isinstance(decimals, int) and not isinstance(decimals, bool)
                    else None
                ),
            )
        return out

    async def fetch_metadata(self, mints: list[str]) -> dict[str, TokenMetadata]:
        results, failures = await gather_batches(
            chunked(mints, self.config.metadata_batch_size),
            self._search,
            label=self.adapter_name,
        )
        self.failures.extend(failures)
        wanted = set(mints)
        metadata: dict[str, TokenMetadata] = {}
        for result in results:
            metadata.update(
                {mint: meta for mint, meta in result.items() if mint in wanted}
            )
        logger.debug("Jupiter resolved %d of %d mints", len(metadata), len(mints))
        return metadata
