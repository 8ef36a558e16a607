"""Logo resolution: cached token catalogue first, then DexScreener."""

from __future__ import annotations

from ..adapters import LOGO_ADAPTERS
from ..constants import SOL_MINT
from .context import PipelineContext


async def resolve_logos(ctx: PipelineContext) -> None:
    """Sets the logo map (mint -> http(s) URL) in the context."""
    s = ctx.state.settings
    log = ctx.state.logger
    raw_holdings = ctx.raw_holdings_required

    logos: dict[str, str] = {}
    for adapter in [AdapterClass(s, ctx.providers) for AdapterClass in LOGO_ADAPTERS]:
        # native SOL has a fixed icon
        pending = [h.mint for h in raw_holdings if h.mint != SOL_MINT and h.mint not in logos]
        if not pending:
            break

        try:
            found = await adapter.fetch_logos(pending)
        except Exception as e:
            log.warning("Logo source '%s' failed: %s", adapter.adapter_name, e)
            adapter.failures.append(e)
            found = {}

        ctx.record_degraded(adapter.adapter_name, adapter.failures)
        for mint, uri in found.items():
            logos.setdefault(mint, uri)

    ctx.logos = logos
