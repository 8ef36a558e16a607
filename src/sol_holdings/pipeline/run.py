"""High-level pipeline orchestration."""

from __future__ import annotations

import asyncio
import time

from ..clients import build_providers
from ..domain import HoldingsResult
from ..state import AppState
from .assets import collect_raw_holdings
from .context import PipelineContext
from .holdings import assemble_holdings
from .ledger import read_ledger
from .logos import resolve_logos
from .metadata import resolve_metadata
from .pricing import price_holdings


class InvalidAddressError(ValueError):
    """Raised for an empty or whitespace-only address, before any network call."""


def validate_address(address: str | None) -> str:
    """Return the stripped address, or raise InvalidAddressError."""
    if not isinstance(address, str) or not address.strip():
        raise InvalidAddressError("address must be a non-empty string")
    return address.strip()


async def resolve_holdings(
    state: AppState, address: str, include_nft: bool = False
) -> HoldingsResult:
    """Resolve the priced, labeled holdings of a wallet.

    This is a thin orchestrator that sequences the pipeline steps:
    1. Ledger read (fatal on failure)
    2. Raw holdings
    3. Metadata
    4. Pricing
    5. Logos
    6. Assembly and sorting

    Args:
        state: Process-wide application state
        address: Wallet address to resolve
        include_nft: Keep accounts classified as likely NFTs

    Returns:
        The sorted holdings and the time they were resolved

    Raises:
        InvalidAddressError: If the address is empty
        LedgerUnavailable: If every ledger endpoint failed
        asyncio.TimeoutError: If the request exceeded ``global_timeout_seconds``
    """
    address = validate_address(address)
    s = state.settings
    log = state.logger

    log.info(
        "Resolving holdings",
        extra={"address": address, "include_nft": include_nft},
    )

    timeout_s = s.global_timeout_seconds

    ctx = PipelineContext(
        state=state,
        address=address,
        providers=build_providers(s, state.session, state.token_list_cache),
        include_nft=include_nft,
    )

    async def _run_pipeline() -> None:
        await read_ledger(ctx)
        await collect_raw_holdings(ctx)
        await resolve_metadata(ctx)
        await price_holdings(ctx)
        await resolve_logos(ctx)
        await assemble_holdings(ctx)

    try:
        if timeout_s is None or timeout_s <= 0:
            await _run_pipeline()
        else:
            async with asyncio.timeout(timeout_s):
                await _run_pipeline()
    except asyncio.TimeoutError as exc:
        log.error(
            "Holdings pipeline timed out",
            extra={"address": address, "timeout_seconds": timeout_s},
        )
        raise asyncio.TimeoutError(
            "Holdings resolution exceeded global timeout "
            f"{timeout_s}s (address={address})\n N.B. This can be changed via `global_timeout_seconds`."
        ) from exc

    for entry in ctx.degraded:
        log.debug("Degraded provider call: %s", entry)

    log.info("Holdings resolved", extra={"address": address})
    return HoldingsResult(
        address=address,
        holdings=ctx.holdings_required,
        updated_at=int(time.time() * 1000),
    )
