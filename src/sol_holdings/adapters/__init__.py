from __future__ import annotations

from .logo_adapters import LOGO_ADAPTERS
from .metadata_adapters import METADATA_ADAPTERS
from .price_adapters import PRICE_ADAPTERS

__all__ = ["LOGO_ADAPTERS", "METADATA_ADAPTERS", "PRICE_ADAPTERS"]
