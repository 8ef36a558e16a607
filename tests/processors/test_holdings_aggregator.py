from decimal import Decimal

from sol_holdings.adapters.price_adapters.base import PriceData
from sol_holdings.constants import SOL_LOGO_URI, SOL_MINT
from sol_holdings.domain import RawHolding, ResolvedMetadata
from sol_holdings.processors import assemble_holdings


def _meta(mint: str, symbol: str, decimals: int = 6) -> ResolvedMetadata:
    return ResolvedMetadata(mint=mint, symbol=symbol, decimals=decimals)


def test_sorted_by_value_desc_then_symbol_with_unknown_last():
    raw = [
        RawHolding(mint="A", amount=Decimal("1")),
        RawHolding(mint="B", amount=Decimal("10")),
        RawHolding(mint="C", amount=Decimal("5")),
        RawHolding(mint="D", amount=Decimal("2")),
        RawHolding(mint="E", amount=Decimal("4")),
    ]
    metadata = {
        "A": _meta("A", "ZED"),
        "B": _meta("B", "BEE"),
        "C": _meta("C", "CEE"),
        "D": _meta("D", "ALPHA"),
        "E": _meta("E", "AARDVARK"),
    }
    prices = PriceData()
    prices.record("A", Decimal("10"), "jupiter-mint")  # value 10
    prices.record("B", Decimal("1"), "jupiter-mint")  # value 10
    prices.record("C", Decimal("0"), "jupiter-mint")  # value 0

    holdings = assemble_holdings(raw, metadata, prices, {})

    assert [h.symbol for h in holdings] == ["BEE", "ZED", "CEE", "AARDVARK", "ALPHA"]
    assert holdings[0].value_usd == Decimal("10")
    assert holdings[2].value_usd == Decimal("0")


def test_unpriced_holding_keeps_price_and_value_absent():
    raw = [RawHolding(mint="X", amount=Decimal("3"))]

    holdings = assemble_holdings(raw, {"X": _meta("X", "X")}, PriceData(), {})

    assert holdings[0].price_usd is None
    assert holdings[0].value_usd is None
    assert holdings[0].price_source is None
    assert "valueUSD" not in holdings[0].as_dict()


def test_native_asset_has_fixed_logo():
    raw = [
        RawHolding(mint=SOL_MINT, amount=Decimal("2.5"), decimals=9),
        RawHolding(mint="X", amount=Decimal("1")),
    ]
    metadata = {SOL_MINT: _meta(SOL_MINT, "SOL", 9), "X": _meta("X", "X")}
    logos = {SOL_MINT: "https://elsewhere/sol.png", "X": "https://x.png"}

    holdings = {h.mint: h for h in assemble_holdings(raw, metadata, PriceData(), logos)}

    assert holdings[SOL_MINT].logo_uri == SOL_LOGO_URI
    assert holdings["X"].logo_uri == "https://x.png"


def test_value_is_price_times_amount():
    raw = [RawHolding(mint="X", amount=Decimal("100.5"))]
    prices = PriceData()
    prices.record("X", Decimal("2"), "dexscreener")

    [holding] = assemble_holdings(raw, {"X": _meta("X", "X")}, prices, {})

    assert holding.value_usd == Decimal("201.0")
    assert holding.price_source == "dexscreener"
