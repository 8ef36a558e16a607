from __future__ import annotations

from ...clients import CatalogueToken, UpstreamError, load_token_catalogue
from ...logger import get_logger
from ...normalize import normalize_logo_url
from .base import BaseLogoAdapter

logger = get_logger(__name__)


class TokenListLogoAdapter(BaseLogoAdapter):
    """Logos from the bulk Jupiter token catalogue, cached process-wide."""

    @property
    def adapter_name(self) -> str:
        return "token_list"

    async def _load(self) -> dict[str, CatalogueToken]:
        return await load_token_catalogue(
            self.providers.http,
            self.config.token_list_url,
            timeout=self.config.token_list_timeout,
        )

    async def fetch_logos(self, mints: list[str]) -> dict[str, str]:
        if not mints:
            return {}
        try:
            catalogue = await self.providers.token_list.get_or_refresh(self._load)
        except UpstreamError as e:
            logger.warning("Token list unavailable, skipping catalogue logos: %s", e)
            self.failures.append(e)
            return {}

        logos: dict[str, str] = {}
        for mint in mints:
            token = catalogue.get(mint)
            logo = normalize_logo_url(token.logo_uri) if token else None
            if logo:
                logos[mint] = logo
        return logos
