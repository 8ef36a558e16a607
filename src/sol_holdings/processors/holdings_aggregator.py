from __future__ import annotations

from decimal import Decimal

from ..adapters.price_adapters.base import PriceData
from ..constants import DEFAULT_TOKEN_DECIMALS, SOL_LOGO_URI, SOL_MINT
from ..domain import Holding, RawHolding, ResolvedMetadata
from ..normalize import synthesize_symbol

# Sorts below every real value, which is never negative
UNKNOWN_VALUE_SENTINEL = Decimal(-1)


def holding_sort_key(holding: Holding) -> tuple[Decimal, str]:
    value = holding.value_usd if holding.value_usd is not None else UNKNOWN_VALUE_SENTINEL
    return (-value, holding.symbol)


def assemble_holdings(
    raw_holdings: list[RawHolding],
    metadata: dict[str, ResolvedMetadata],
    price_data: PriceData,
    logos: dict[str, str],
) -> list[Holding]:
    """Join raw holdings with their enrichment maps and sort them.

    Value is ``price * amount`` only when a price is known; otherwise both
    stay ``None``. Ordered by descending value with unknown values last,
    then by ascending symbol.
    """
    holdings: list[Holding] = []
    for raw in raw_holdings:
        meta = metadata.get(raw.mint)
        symbol = meta.symbol if meta else synthesize_symbol(raw.mint)
        decimals = meta.decimals if meta else raw.decimals
        if decimals is None:
            decimals = DEFAULT_TOKEN_DECIMALS

        price = price_data.prices.get(raw.mint)
        logo = SOL_LOGO_URI if raw.mint == SOL_MINT else logos.get(raw.mint)

        holdings.append(
            Holding(
                mint=raw.mint,
                symbol=symbol,
                amount=raw.amount,
                decimals=decimals,
                is_nft=raw.is_nft,
                price_usd=price,
                value_usd=price * raw.amount if price is not None else None,
                logo_uri=logo,
                price_source=price_data.sources.get(raw.mint),
            )
        )

    holdings.sort(key=holding_sort_key)
    return holdings
