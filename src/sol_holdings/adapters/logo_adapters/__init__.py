from __future__ import annotations

from .base import BaseLogoAdapter
from .dexscreener import DexScreenerLogoAdapter
from .token_list import TokenListLogoAdapter

LOGO_ADAPTERS: list[type[BaseLogoAdapter]] = [
    TokenListLogoAdapter,
    DexScreenerLogoAdapter,
]

__all__ = [
    "LOGO_ADAPTERS",
    "BaseLogoAdapter",
    "DexScreenerLogoAdapter",
    "TokenListLogoAdapter",
]
