from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import pytest
import requests

from sol_holdings.cache import TokenListCache
from sol_holdings.clients import DexScreenerClient, Providers, SolanaRpcClient
from sol_holdings.settings import HoldingsSettings
from sol_holdings.state import AppState


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep local config files and SOL_HOLDINGS_* variables out of tests."""
    import os

    for key in list(os.environ):
        if key.startswith("SOL_HOLDINGS_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))


@pytest.fixture
def settings() -> HoldingsSettings:
    return HoldingsSettings(_env_file=None)


@pytest.fixture
def keyed_settings() -> HoldingsSettings:
    return HoldingsSettings(_env_file=None, helius_api_key="test-key")


class FakeHttp:
    """Stands in for HttpClient: routes each call to ``handler`` and records it."""

    def __init__(self, handler: Callable[..., Any]):
        self.handler = handler
        self.calls: list[dict[str, Any]] = []

    async def fetch_json(
        self,
        url: str,
        method: str = "GET",
        *,
        body: Any = None,
        headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
        timeout: float = 15.0,
    ) -> Any:
        call = {
            "url": url,
            "method": method,
            "body": body,
            "params": params,
            "timeout": timeout,
        }
        self.calls.append(call)
        result = self.handler(**call)
        if isinstance(result, BaseException):
            raise result
        return result

    def calls_to(self, prefix: str) -> list[dict[str, Any]]:
        return [c for c in self.calls if c["url"].startswith(prefix)]


def make_providers(
    settings: HoldingsSettings,
    http: FakeHttp,
    token_list: TokenListCache | None = None,
) -> Providers:
    return Providers(
        http=http,  # type: ignore[arg-type]
        ledger=SolanaRpcClient(http, settings.rpc_endpoints),  # type: ignore[arg-type]
        pairs=DexScreenerClient(
            http,  # type: ignore[arg-type]
            settings.dexscreener_tokens_url,
            batch_size=settings.dexscreener_batch_size,
        ),
        token_list=token_list or TokenListCache(settings.token_list_ttl_seconds),
    )


def make_state(settings: HoldingsSettings) -> AppState:
    return AppState(
        settings=settings,
        logger=logging.getLogger("test"),
        token_list_cache=TokenListCache(settings.token_list_ttl_seconds),
        session=requests.Session(),
    )


@pytest.fixture
def fake_http() -> type[FakeHttp]:
    return FakeHttp


@pytest.fixture
def providers_for() -> Callable[..., Providers]:
    return make_providers


@pytest.fixture
def state_for() -> Callable[[HoldingsSettings], AppState]:
    return make_state
