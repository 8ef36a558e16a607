from decimal import Decimal

import pytest

from sol_holdings.clients.http import UpstreamError
from sol_holdings.clients.solana_rpc import LedgerUnavailable
from sol_holdings.constants import (
    SOL_LOGO_URI,
    SOL_MINT,
    TOKEN_2022_PROGRAM_ID,
    TOKEN_PROGRAM_ID,
)
from sol_holdings.pipeline import InvalidAddressError
from sol_holdings.pipeline import run as pipeline_run

OWNER = "Owner1111111111111111111111111111111111111"


def _account(mint: str, ui_amount: str, decimals: int) -> dict:
    return {
        "account": {
            "data": {
                "parsed": {
                    "info": {
                        "mint": mint,
                        "tokenAmount": {"uiAmountString": ui_amount, "decimals": decimals},
                    }
                }
            }
        }
    }


class Upstreams:
    """Routes fake provider traffic for one wallet."""

    def __init__(self, settings, lamports=0, accounts=None):
        self.settings = settings
        self.lamports = lamports
        self.accounts = accounts or []
        self.search = []
        self.mint_prices = {}
        self.symbol_prices = {}
        self.spot = None
        self.pairs = []
        self.catalogue = []
        self.fail = set()

    def __call__(self, url, method, body, params, **_):
        s = self.settings
        for prefix in self.fail:
            if url.startswith(prefix):
                return UpstreamError(url, 400, "down")
        if url == s.public_rpc_url:
            if body["method"] == "getBalance":
                return {"result": {"context": {}, "value": self.lamports}}
            program = body["params"][1]["programId"]
            if program == TOKEN_PROGRAM_ID:
                return {"result": {"value": self.accounts}}
            assert program == TOKEN_2022_PROGRAM_ID
            return {"result": {"value": []}}
        if url == s.jupiter_search_url:
            return self.search
        if url == s.jupiter_price_url and "mints" in params:
            return {"data": {k: {"price": v} for k, v in self.mint_prices.items()}}
        if url == s.jupiter_price_url and "ids" in params:
            return {"data": {k: {"price": v} for k, v in self.symbol_prices.items()}}
        if url == s.coingecko_price_url:
            return {"solana": {"usd": self.spot}} if self.spot is not None else {}
        if url.startswith(s.dexscreener_tokens_url):
            return self.pairs
        if url == s.token_list_url:
            return self.catalogue
        raise AssertionError(f"unexpected call to {url}")


@pytest.fixture
def wire(monkeypatch, fake_http, providers_for):
    """Point the pipeline at a FakeHttp driven by ``upstreams``."""

    def _wire(upstreams):
        http = fake_http(upstreams)
        monkeypatch.setattr(
            pipeline_run,
            "build_providers",
            lambda s, session, token_list: providers_for(s, http, token_list=token_list),
        )
        return http

    return _wire


@pytest.mark.asyncio
async def test_native_plus_token_scenario(settings, state_for, wire):
    upstreams = Upstreams(
        settings,
        lamports=2_500_000_000,
        accounts=[_account("MintX", "100.5", 6)],
    )
    upstreams.search = [{"id": "MintX", "symbol": "xtok", "decimals": 6}]
    upstreams.mint_prices = {SOL_MINT: 150}
    upstreams.catalogue = [{"address": "MintX", "logoURI": "https://x.png"}]
    wire(upstreams)

    result = await pipeline_run.resolve_holdings(state_for(settings), OWNER)

    sol, x = result.holdings
    assert sol.mint == SOL_MINT
    assert sol.symbol == "SOL"
    assert sol.amount == Decimal("2.5")
    assert sol.value_usd == Decimal("375.0")
    assert sol.logo_uri == SOL_LOGO_URI
    assert sol.price_source == "jupiter-mint"
    assert x.symbol == "XTOK"
    assert x.amount == Decimal("100.5")
    assert x.price_usd is None
    assert x.value_usd is None
    assert x.logo_uri == "https://x.png"
    assert not any(h.is_nft for h in result.holdings)
    assert result.updated_at > 0


@pytest.mark.asyncio
async def test_empty_wallet_returns_empty_list(settings, state_for, wire):
    http = wire(Upstreams(settings))

    result = await pipeline_run.resolve_holdings(state_for(settings), OWNER)

    assert result.holdings == []
    assert result.as_dict()["holdings"] == []
    assert all(c["url"] == settings.public_rpc_url for c in http.calls)


@pytest.mark.asyncio
async def test_ledger_failure_is_fatal(settings, state_for, wire):
    upstreams = Upstreams(settings, lamports=1)
    upstreams.fail = {settings.public_rpc_url}
    wire(upstreams)

    with pytest.raises(LedgerUnavailable):
        await pipeline_run.resolve_holdings(state_for(settings), OWNER)


@pytest.mark.asyncio
@pytest.mark.parametrize("address", ["", "   ", None])
async def test_invalid_address_rejected_before_network(settings, state_for, wire, address):
    http = wire(Upstreams(settings))

    with pytest.raises(InvalidAddressError):
        await pipeline_run.resolve_holdings(state_for(settings), address)

    assert http.calls == []


@pytest.mark.asyncio
async def test_unpriced_holding_survives_and_sorts_last(settings, state_for, wire):
    upstreams = Upstreams(
        settings,
        lamports=1_000_000_000,
        accounts=[_account("MintX", "5", 6)],
    )
    upstreams.search = [{"id": "MintX", "symbol": "AAA", "decimals": 6}]
    upstreams.spot = 100
    upstreams.fail = {settings.jupiter_price_url, settings.dexscreener_tokens_url}
    wire(upstreams)

    result = await pipeline_run.resolve_holdings(state_for(settings), OWNER)

    assert [h.symbol for h in result.holdings] == ["SOL", "AAA"]
    assert result.holdings[0].price_source == "native-spot"
    unpriced = result.holdings[1].as_dict()
    assert "priceUSD" not in unpriced
    assert "valueUSD" not in unpriced


@pytest.mark.asyncio
async def test_stablecoin_without_quote_is_one_dollar(settings, state_for, wire):
    upstreams = Upstreams(settings, accounts=[_account("MintS", "12.5", 6)])
    upstreams.search = [{"id": "MintS", "symbol": "USDC", "decimals": 6}]
    wire(upstreams)

    result = await pipeline_run.resolve_holdings(state_for(settings), OWNER)

    [holding] = result.holdings
    assert holding.price_usd == Decimal("1")
    assert holding.value_usd == Decimal("12.5")
    assert holding.price_source == "stablecoin"


@pytest.mark.asyncio
async def test_metadata_failures_fall_back_to_hints_and_placeholder(settings, state_for, wire):
    usdc = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"
    upstreams = Upstreams(
        settings,
        accounts=[_account(usdc, "3", 6), _account("Qwerty123", "7", 2)],
    )
    upstreams.fail = {settings.jupiter_search_url}
    wire(upstreams)

    result = await pipeline_run.resolve_holdings(state_for(settings), OWNER)

    by_mint = {h.mint: h for h in result.holdings}
    assert by_mint[usdc].symbol == "USDC"
    assert by_mint["Qwerty123"].symbol == "TOKEN-Qwerty"
    assert by_mint["Qwerty123"].decimals == 2


@pytest.mark.asyncio
async def test_repeated_calls_share_token_list_and_return_same_mints(
    settings, state_for, wire
):
    upstreams = Upstreams(
        settings,
        lamports=5,
        accounts=[_account("MintX", "1.5", 6), _account("MintY", "2", 6)],
    )
    upstreams.catalogue = [{"address": "MintX", "logoURI": "https://x.png"}]
    http = wire(upstreams)
    state = state_for(settings)

    first = await pipeline_run.resolve_holdings(state, OWNER)
    second = await pipeline_run.resolve_holdings(state, OWNER)

    assert first.mints == second.mints == {SOL_MINT, "MintX", "MintY"}
    assert len(http.calls_to(settings.token_list_url)) == 1
