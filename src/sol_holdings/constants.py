"""Solana mint, program and provider endpoint constants."""

from typing import TypedDict


class TokenHint(TypedDict):
    symbol: str
    decimals: int


LAMPORTS_PER_SOL = 1_000_000_000

SOL_MINT = "So11111111111111111111111111111111111111112"
SOL_SYMBOL = "SOL"
SOL_DECIMALS = 9
SOL_LOGO_URI = (
    "https://raw.githubusercontent.com/trustwallet/assets/master/"
    "blockchains/solana/info/logo.png"
)

TOKEN_PROGRAM_ID = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
TOKEN_2022_PROGRAM_ID = "TokenzQdBNbLqP5VEhdkAS6EPFLC1PHnBqCXEpPxuEb"

# Used when no source reports decimals for a mint
DEFAULT_TOKEN_DECIMALS = 6

# Static hints for well-known mints (extend freely)
TOKEN_HINTS: dict[str, TokenHint] = {
    "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v": {"symbol": "USDC", "decimals": 6},
    "Es9vMFrzaCERmJfrF4H2FYD4KCoNkY11McCe8BenwNYB": {"symbol": "USDT", "decimals": 6},
    SOL_MINT: {"symbol": SOL_SYMBOL, "decimals": SOL_DECIMALS},
    "JUP4Fb2cqiRUcaTHdrPC8h2gNsA2ETXiPDD33WcGuJB": {"symbol": "JUP", "decimals": 6},
    "DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263": {"symbol": "BONK", "decimals": 5},
    "DGXSgA3UGZ92x9RLkG9ZHzk4VXwx6zbdMwsbCq7qp7bX": {"symbol": "PYTH", "decimals": 6},
    "4k3Dyjzvzp8eMZWUXbBCjEvwSkkk59S5iCNLY3QrkX6R": {"symbol": "RAY", "decimals": 6},
    "orcaEKTdK7LKz57vaAYr9QeAwaQfG8Wuc3gw5cQRFPr": {"symbol": "ORCA", "decimals": 6},
}

# $1 heuristic when the price oracles miss a stablecoin
USD_STABLE_SYMBOLS = (
    "USDC",
    "USDT",
    "DAI",
    "cUSD",
    "USDH",
    "UXD",
    "PAI",
    "USDC.E",
    "USDT.E",
)

# Pairs quoted against these win the DexScreener best-pair selection
DEXSCREENER_STABLE_QUOTES = frozenset({"USDC", "USDT", "DAI"})

DEFAULT_PUBLIC_RPC_URL = "https://api.mainnet-beta.solana.com"
DEFAULT_HELIUS_RPC_URL = "https://mainnet.helius-rpc.com/"
DEFAULT_HELIUS_METADATA_URL = "https://api.helius.xyz/v0/token-metadata"
DEFAULT_JUPITER_SEARCH_URL = "https://lite-api.jup.ag/tokens/v2/search"
DEFAULT_JUPITER_PRICE_URL = "https://price.jup.ag/v6/price"
DEFAULT_JUPITER_TOKEN_LIST_URL = "https://token.jup.ag/all"
DEFAULT_COINGECKO_PRICE_URL = "https://api.coingecko.com/api/v3/simple/price"
DEFAULT_DEXSCREENER_TOKENS_URL = "https://api.dexscreener.com/tokens/v1/solana"

# Provider-documented request limits
JUPITER_MAX_IDS_PER_CALL = 100
HELIUS_MAX_MINTS_PER_CALL = 100
DEXSCREENER_MAX_ADDRESSES_PER_CALL = 30

TOKEN_LIST_TTL_SECONDS = 6 * 60 * 60
