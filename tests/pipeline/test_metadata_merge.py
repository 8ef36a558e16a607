from decimal import Decimal

import pytest

from sol_holdings.constants import SOL_MINT
from sol_holdings.domain import RawHolding, TokenMetadata
from sol_holdings.pipeline.context import PipelineContext
from sol_holdings.pipeline.metadata import is_resolved, merge_metadata, resolve_metadata


def test_on_chain_decimals_win_over_registries():
    raw = RawHolding(mint="MintA", amount=Decimal("1"), decimals=8)
    reports = [{"MintA": TokenMetadata(symbol="aaa", decimals=6)}]

    meta = merge_metadata(raw, reports)

    assert meta.symbol == "AAA"
    assert meta.decimals == 8


def test_fields_merge_in_source_order():
    raw = RawHolding(mint="MintA", amount=Decimal("1"))
    reports = [
        {"MintA": TokenMetadata(symbol=None, decimals=5)},
        {"MintA": TokenMetadata(symbol="second", decimals=7)},
        {"MintA": TokenMetadata(symbol="third", decimals=9)},
    ]

    meta = merge_metadata(raw, reports)

    assert meta.symbol == "SECOND"
    assert meta.decimals == 5


def test_unknown_mint_gets_placeholder_and_default_decimals():
    meta = merge_metadata(RawHolding(mint="ZyXwVu987", amount=Decimal("1")), [])

    assert meta.symbol == "TOKEN-ZyXwVu"
    assert meta.decimals == 6


def test_native_asset_is_fixed():
    raw = RawHolding(mint=SOL_MINT, amount=Decimal("1"), decimals=9)
    reports = [{SOL_MINT: TokenMetadata(symbol="WSOL", decimals=3)}]

    meta = merge_metadata(raw, reports)

    assert (meta.symbol, meta.decimals) == ("SOL", 9)


BONK_MINT = "DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263"


def test_mint_with_symbol_but_no_decimals_is_still_unresolved():
    raw = RawHolding(mint=BONK_MINT, amount=Decimal("1"))

    assert not is_resolved(raw, [{BONK_MINT: TokenMetadata(symbol="Bonk")}])
    assert is_resolved(
        RawHolding(mint=BONK_MINT, amount=Decimal("1"), decimals=5),
        [{BONK_MINT: TokenMetadata(symbol="Bonk")}],
    )


@pytest.mark.asyncio
async def test_static_hint_decimals_fill_gap_left_by_registry(
    settings, state_for, fake_http, providers_for
):
    def handler(url, **_):
        assert url == settings.jupiter_search_url
        return [{"id": BONK_MINT, "symbol": "Bonk"}]

    ctx = PipelineContext(
        state=state_for(settings),
        address="Owner",
        providers=providers_for(settings, fake_http(handler)),
    )
    ctx.raw_holdings = [RawHolding(mint=BONK_MINT, amount=Decimal("10"))]

    await resolve_metadata(ctx)

    meta = ctx.metadata_required[BONK_MINT]
    assert meta.symbol == "BONK"
    assert meta.decimals == 5
