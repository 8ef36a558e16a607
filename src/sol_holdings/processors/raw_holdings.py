from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from ..constants import SOL_DECIMALS, SOL_MINT
from ..domain import RawHolding, TokenAccount
from ..logger import get_logger
from ..units import lamports_to_sol, parse_quantity

logger = get_logger(__name__)

NFT_AMOUNT_STRINGS = frozenset({"1", "1.0"})


def is_likely_nft(decimals: int | None, ui_amount_string: str) -> bool:
    """Zero-decimal accounts holding exactly one unit are treated as NFTs.

    The comparison is on the string the ledger reported, not the number.
    """
    return decimals == 0 and ui_amount_string.strip() in NFT_AMOUNT_STRINGS


def build_raw_holdings(
    native_lamports: int,
    accounts: Iterable[TokenAccount],
    include_nft: bool = False,
) -> list[RawHolding]:
    """Merge the native balance and token accounts into one entry per mint.

    Args:
        native_lamports: Native SOL balance in lamports
        accounts: Parsed token accounts from every queried token program
        include_nft: Keep accounts classified as likely NFTs

    Returns:
        Raw holdings with strictly positive amounts, in first-seen order.
        Wrapped SOL accounts are folded into the native entry.
    """
    merged: dict[str, RawHolding] = {}
    if native_lamports > 0:
        merged[SOL_MINT] = RawHolding(
            mint=SOL_MINT,
            amount=lamports_to_sol(native_lamports),
            decimals=SOL_DECIMALS,
        )

    skipped_nfts = 0
    for account in accounts:
        amount = parse_quantity(account.ui_amount_string)
        if amount is None or amount <= 0:
            continue

        nft = is_likely_nft(account.decimals, account.ui_amount_string)
        if nft and not include_nft:
            skipped_nfts += 1
            continue

        existing = merged.get(account.mint)
        if existing is None:
            merged[account.mint] = RawHolding(
                mint=account.mint,
                amount=amount,
                decimals=account.decimals,
                is_nft=nft,
            )
            continue

        existing.amount += amount
        if existing.decimals is None:
            existing.decimals = account.decimals
        existing.is_nft = existing.is_nft or nft

    if skipped_nfts:
        logger.debug("Skipped %d likely NFT accounts", skipped_nfts)

    return [h for h in merged.values() if h.amount > Decimal(0)]
