from __future__ import annotations

from ...normalize import normalize_logo_url
from .base import BaseLogoAdapter


class DexScreenerLogoAdapter(BaseLogoAdapter):
    """Pair artwork from DexScreener, reusing lookups already made for pricing."""

    @property
    def adapter_name(self) -> str:
        return "dexscreener"

    async def fetch_logos(self, mints: list[str]) -> dict[str, str]:
        if not mints:
            return {}
        pairs = self.providers.pairs
        seen_failures = len(pairs.failures)
        best = await pairs.best_pairs(mints)
        self.failures.extend(pairs.failures[seen_failures:])

        logos: dict[str, str] = {}
        for mint, pair in best.items():
            logo = normalize_logo_url(pair.image_url)
            if logo:
                logos[mint] = logo
        return logos
