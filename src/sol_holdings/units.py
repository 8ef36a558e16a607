from __future__ import annotations

import math
from decimal import Decimal, InvalidOperation
from typing import Any

from .constants import LAMPORTS_PER_SOL


def lamports_to_sol(lamports: int) -> Decimal:
    """Convert a lamport balance to SOL without float rounding."""
    return Decimal(lamports) / Decimal(LAMPORTS_PER_SOL)


def scale_down(raw_amount: int, decimals: int) -> Decimal:
    """Apply ``decimals`` to an integer base-unit amount.

    Args:
        raw_amount: Integer amount in the token's smallest unit.
        decimals: Decimal precision of the token.

    Returns:
        The display amount as an exact Decimal.
    """
    if decimals < 0:
        raise ValueError(f"decimals must be non-negative, got {decimals}")
    return Decimal(raw_amount).scaleb(-decimals)


def parse_quantity(value: Any) -> Decimal | None:
    """Parse a display quantity into a Decimal.

    Returns None for anything that is not a finite number (None, booleans,
    empty or malformed strings, NaN/Infinity).
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        parsed = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    if not parsed.is_finite():
        return None
    return parsed


def format_quantity(amount: Decimal) -> str:
    """Render a Decimal in plain notation with trailing zeros trimmed.

    Never produces scientific notation, so tiny balances such as 1e-9 SOL
    come out as ``0.000000001``.
    """
    if not amount.is_finite():
        return "0"
    text = format(amount, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("", "-0"):
        return "0"
    return text


def as_price(value: Any) -> Decimal | None:
    """Accept a provider price only if it is a real, finite, non-negative JSON number.

    Strings and booleans are rejected: oracles that return them are
    treated as having no quote.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value) or value < 0:
        return None
    return Decimal(str(value))
