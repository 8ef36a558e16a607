from __future__ import annotations

from ...constants import TOKEN_HINTS
from ...domain import TokenMetadata
from .base import BaseMetadataAdapter


class StaticHintsAdapter(BaseMetadataAdapter):
    """Local hint table for well-known mints; never touches the network."""

    @property
    def adapter_name(self) -> str:
        return "static_hints"

    async def fetch_metadata(self, mints: list[str]) -> dict[str, TokenMetadata]:
        return {
            mint: TokenMetadata(symbol=hint["symbol"], decimals=hint["decimals"])
            for mint in mints
            if (hint := TOKEN_HINTS.get(mint)) is not None
        }
