from __future__ import annotations

from .base import BaseMetadataAdapter
from .helius import HeliusMetadataAdapter
from .jupiter import JupiterMetadataAdapter
from .static_hints import StaticHintsAdapter

# Priority order: earlier adapters win per field
METADATA_ADAPTERS: list[type[BaseMetadataAdapter]] = [
    JupiterMetadataAdapter,
    HeliusMetadataAdapter,
    StaticHintsAdapter,
]

__all__ = [
    "METADATA_ADAPTERS",
    "BaseMetadataAdapter",
    "HeliusMetadataAdapter",
    "JupiterMetadataAdapter",
    "StaticHintsAdapter",
]
