"""Final assembly of priced, labeled holdings."""

from __future__ import annotations

from ..processors import assemble_holdings as assemble
from .context import PipelineContext


async def assemble_holdings(ctx: PipelineContext) -> None:
    """Sets the sorted holdings in the context."""
    holdings = assemble(
        ctx.raw_holdings_required,
        ctx.metadata_required,
        ctx.price_data_required,
        ctx.logos_required,
    )
    priced = sum(1 for h in holdings if h.price_usd is not None)
    ctx.state.logger.info(
        "Assembled %d holdings (%d priced, %d degraded provider call(s))",
        len(holdings),
        priced,
        len(ctx.degraded),
    )
    ctx.holdings = holdings
