"""Jupiter token catalogue loader."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..logger import get_logger
from .http import HttpClient, UpstreamError

logger = get_logger(__name__)


@dataclass(frozen=True)
class CatalogueToken:
    """Minimal view of one entry in the Jupiter "all tokens" catalogue."""

    logo_uri: str | None = None
    symbol: str | None = None
    decimals: int | None = None


async def load_token_catalogue(
    http: HttpClient, url: str, *, timeout: float = 15.0
) -> dict[str, CatalogueToken]:
    """Fetch the full Jupiter token list keyed by mint.

    Raises:
        UpstreamError: If the request fails or the payload is not a list
    """
    payload = await http.fetch_json(url, timeout=timeout)
    if not isinstance(payload, list):
        raise UpstreamError(url, None, "token list payload is not a list")

    tokens: dict[str, CatalogueToken] = {}
    for item in payload:
        if not isinstance(item, dict):
            continue
        mint = item.get("address")
        if not mint or not isinstance(mint, str):
            continue
        tokens[mint] = CatalogueToken(
            logo_uri=_str_or_none(item.get("logoURI")),
            symbol=_str_or_none(item.get("symbol")),
            decimals=_int_or_none(item.get("decimals")),
        )

    logger.info("Loaded %d tokens from the Jupiter catalogue", len(tokens))
    return tokens


def _str_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


def _int_or_none(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value
