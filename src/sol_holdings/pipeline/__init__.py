from __future__ import annotations

from .context import PipelineContext
from .run import InvalidAddressError, resolve_holdings, validate_address

__all__ = [
    "InvalidAddressError",
    "PipelineContext",
    "resolve_holdings",
    "validate_address",
]
