"""Symbol and decimals resolution."""

from __future__ import annotations

from ..adapters import METADATA_ADAPTERS
from ..constants import DEFAULT_TOKEN_DECIMALS, SOL_DECIMALS, SOL_MINT, SOL_SYMBOL
from ..domain import RawHolding, ResolvedMetadata, TokenMetadata
from ..normalize import currency_code, synthesize_symbol
from .context import PipelineContext


def merge_metadata(
    raw: RawHolding, reports: list[dict[str, TokenMetadata]]
) -> ResolvedMetadata:
    """Combine per-source reports for one mint, field by field, in source order.

    Decimals prefer the on-chain value, then each source, then the default.
    The symbol falls back to a placeholder derived from the mint.
    """
    if raw.mint == SOL_MINT:
        return ResolvedMetadata(mint=SOL_MINT, symbol=SOL_SYMBOL, decimals=SOL_DECIMALS)

    symbol: str | None = None
    decimals = raw.decimals
    for report in reports:
        meta = report.get(raw.mint)
        if meta is None:
            continue
        if symbol is None and meta.symbol and meta.symbol.strip():
            symbol = meta.symbol
        if decimals is None and meta.decimals is not None:
            decimals = meta.decimals

    return ResolvedMetadata(
        mint=raw.mint,
        symbol=currency_code(symbol) if symbol else synthesize_symbol(raw.mint),
        decimals=decimals if decimals is not None else DEFAULT_TOKEN_DECIMALS,
    )


def is_resolved(raw: RawHolding, reports: list[dict[str, TokenMetadata]]) -> bool:
    """True once earlier sources (or the chain) supplied both symbol and decimals."""
    has_symbol = False
    has_decimals = raw.decimals is not None
    for report in reports:
        meta = report.get(raw.mint)
        if meta is None:
            continue
        has_symbol = has_symbol or bool(meta.symbol and meta.symbol.strip())
        has_decimals = has_decimals or meta.decimals is not None
    return has_symbol and has_decimals


async def resolve_metadata(ctx: PipelineContext) -> None:
    """Run the metadata sources in priority order over still-unresolved mints.

    Source failures are logged and leave the affected mints unresolved.

    Sets the resolved metadata in the context.
    """
    s = ctx.state.settings
    log = ctx.state.logger
    raw_holdings = ctx.raw_holdings_required

    reports: list[dict[str, TokenMetadata]] = []
    adapters = [AdapterClass(s, ctx.providers) for AdapterClass in METADATA_ADAPTERS]
    for adapter in adapters:
        pending = [
            h.mint
            for h in raw_holdings
            if h.mint != SOL_MINT and not is_resolved(h, reports)
        ]
        if not pending:
            break

        try:
            report = await adapter.fetch_metadata(pending)
        except Exception as e:
            log.warning("Metadata source '%s' failed: %s", adapter.adapter_name, e)
            adapter.failures.append(e)
            report = {}

        ctx.record_degraded(adapter.adapter_name, adapter.failures)
        log.debug(
            "Metadata source '%s' answered %d of %d mints",
            adapter.adapter_name,
            len(report),
            len(pending),
        )
        reports.append(report)

    ctx.metadata = {h.mint: merge_metadata(h, reports) for h in raw_holdings}
