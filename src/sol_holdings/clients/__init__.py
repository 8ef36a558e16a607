from __future__ import annotations

from dataclasses import dataclass

import requests

from ..cache import TokenListCache
from ..settings import HoldingsSettings
from .dexscreener import BestPair, DexScreenerClient
from .http import HttpClient, UpstreamError, UpstreamTimeout
from .jupiter import CatalogueToken, load_token_catalogue
from .solana_rpc import LedgerUnavailable, SolanaRpcClient


@dataclass
class Providers:
    """Per-request provider clients handed to every adapter."""

    http: HttpClient
    ledger: SolanaRpcClient
    pairs: DexScreenerClient
    token_list: TokenListCache[dict[str, CatalogueToken]]


def build_providers(
    settings: HoldingsSettings,
    session: requests.Session,
    token_list: TokenListCache[dict[str, CatalogueToken]],
) -> Providers:
    """Wire the provider clients for one holdings request.

    Must be called from inside the running event loop: the HTTP client's
    concurrency limiter belongs to it.
    """
    http = HttpClient(session, max_concurrent_requests=settings.max_concurrent_requests)
    return Providers(
        http=http,
        ledger=SolanaRpcClient(
            http, settings.rpc_endpoints, timeout=settings.rpc_timeout
        ),
        pairs=DexScreenerClient(
            http,
            settings.dexscreener_tokens_url,
            batch_size=settings.dexscreener_batch_size,
            timeout=settings.dexscreener_timeout,
        ),
        token_list=token_list,
    )


__all__ = [
    "BestPair",
    "CatalogueToken",
    "DexScreenerClient",
    "HttpClient",
    "LedgerUnavailable",
    "Providers",
    "SolanaRpcClient",
    "UpstreamError",
    "UpstreamTimeout",
    "build_providers",
    "load_token_catalogue",
]
