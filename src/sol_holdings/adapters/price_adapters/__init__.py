from __future__ import annotations

from .base import BasePriceAdapter, PriceData, PriceRequest
from .coingecko import NativeSpotPriceAdapter
from .dexscreener import DexScreenerPriceAdapter
from .jupiter import JupiterMintPriceAdapter, JupiterSymbolPriceAdapter
from .stablecoin import StablecoinPriceAdapter

# Priority order: each adapter only sees mints the earlier ones left unpriced
PRICE_ADAPTERS: list[type[BasePriceAdapter]] = [
    JupiterMintPriceAdapter,
    JupiterSymbolPriceAdapter,
    StablecoinPriceAdapter,
    NativeSpotPriceAdapter,
    DexScreenerPriceAdapter,
]

__all__ = [
    "PRICE_ADAPTERS",
    "BasePriceAdapter",
    "DexScreenerPriceAdapter",
    "JupiterMintPriceAdapter",
    "JupiterSymbolPriceAdapter",
    "NativeSpotPriceAdapter",
    "PriceData",
    "PriceRequest",
    "StablecoinPriceAdapter",
]
