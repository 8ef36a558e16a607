"""Raw holdings collection."""

from __future__ import annotations

from ..processors import build_raw_holdings
from .context import PipelineContext


async def collect_raw_holdings(ctx: PipelineContext) -> None:
    """Merge the ledger snapshot into one raw holding per mint.

    Sets the raw holdings in the context.
    """
    log = ctx.state.logger
    raw = build_raw_holdings(
        ctx.native_lamports_required,
        ctx.token_accounts_required,
        include_nft=ctx.include_nft,
    )
    log.info(
        "Collected %d raw holdings from %d token accounts",
        len(raw),
        len(ctx.token_accounts_required),
    )
    ctx.raw_holdings = raw
