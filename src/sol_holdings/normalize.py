"""Symbol and logo URL normalisation."""

from __future__ import annotations

import re

_NON_CODE_CHARS = re.compile(r"[^A-Z0-9-]")

IPFS_GATEWAY = "https://ipfs.io/ipfs/"
ARWEAVE_GATEWAY = "https://arweave.net/"


def currency_code(raw: str | None) -> str:
    """Map a free-form token symbol to an upper-case currency-code token.

    Keeps A-Z, 0-9 and '-', truncated to 16 characters; falls back to
    ``UNKNOWN`` when nothing survives.
    """
    up = _NON_CODE_CHARS.sub("", (raw or "").upper())
    return up[:16] or "UNKNOWN"


def synthesize_symbol(mint: str) -> str:
    return f"TOKEN-{mint[:6]}"


def normalize_logo_url(uri: str | None) -> str | None:
    """Return an http(s) URL for a logo, rewriting IPFS/Arweave URIs to gateways.

    Unknown schemes and empty values yield None.
    """
    if not uri:
        return None
    uri = uri.strip()
    if uri.startswith(("http://", "https://")):
        return uri
    if uri.startswith("ipfs://"):
        cid = uri[len("ipfs://") :]
        if cid.startswith("ipfs/"):
            cid = cid[len("ipfs/") :]
        return f"{IPFS_GATEWAY}{cid}" if cid else None
    for prefix in ("ar://", "arweave://"):
        if uri.startswith(prefix):
            ident = uri[len(prefix) :]
            return f"{ARWEAVE_GATEWAY}{ident}" if ident else None
    return None
