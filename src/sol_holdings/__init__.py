"""Solana wallet holdings resolution."""

from __future__ import annotations

from .clients import LedgerUnavailable, UpstreamError, UpstreamTimeout
from .domain import Holding, HoldingsResult
from .logger import setup_logging
from .pipeline import InvalidAddressError, resolve_holdings
from .settings import HoldingsSettings
from .state import AppState, build_state

__all__ = [
    "AppState",
    "Holding",
    "HoldingsResult",
    "HoldingsSettings",
    "InvalidAddressError",
    "LedgerUnavailable",
    "UpstreamError",
    "UpstreamTimeout",
    "build_state",
    "resolve_holdings",
    "setup_logging",
]
