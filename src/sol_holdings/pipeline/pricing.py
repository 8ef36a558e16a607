"""USD pricing through the ordered price adapters."""

from __future__ import annotations

from ..adapters import PRICE_ADAPTERS
from ..adapters.price_adapters.base import PriceData, PriceRequest
from .context import PipelineContext


async def price_holdings(ctx: PipelineContext) -> None:
    """Price every holding, each adapter seeing only mints still unpriced.

    Adapter failures are logged and leave the affected mints unpriced; the
    first adapter to price a mint wins.

    Sets the price data in the context.
    """
    s = ctx.state.settings
    log = ctx.state.logger
    metadata = ctx.metadata_required
    raw_holdings = ctx.raw_holdings_required

    log.info("Fetching prices for %d holdings...", len(raw_holdings))
    price_data = PriceData()

    price_adapters = [AdapterClass(s, ctx.providers) for AdapterClass in PRICE_ADAPTERS]
    for price_adapter in price_adapters:
        pending = [
            PriceRequest(mint=h.mint, symbol=metadata[h.mint].symbol)
            for h in raw_holdings
            if not price_data.has(h.mint)
        ]
        if not pending:
            break

        before = len(price_data.prices)
        try:
            price_data = await price_adapter.fetch_prices(pending, price_data)
        except Exception as e:
            log.warning("Price source '%s' failed: %s", price_adapter.adapter_name, e)
            price_adapter.failures.append(e)

        ctx.record_degraded(price_adapter.adapter_name, price_adapter.failures)
        log.debug(
            "Price adapter '%s' priced %d of %d pending mints",
            price_adapter.adapter_name,
            len(price_data.prices) - before,
            len(pending),
        )

    unpriced = [h.mint for h in raw_holdings if not price_data.has(h.mint)]
    if unpriced:
        log.warning("No price found for %d holding(s): %s", len(unpriced), ", ".join(unpriced))

    ctx.price_data = price_data
