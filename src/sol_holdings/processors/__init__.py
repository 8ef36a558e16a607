from __future__ import annotations

from .holdings_aggregator import (
    UNKNOWN_VALUE_SENTINEL,
    assemble_holdings,
    holding_sort_key,
)
from .raw_holdings import build_raw_holdings, is_likely_nft

__all__ = [
    "UNKNOWN_VALUE_SENTINEL",
    "assemble_holdings",
    "build_raw_holdings",
    "holding_sort_key",
    "is_likely_nft",
]
