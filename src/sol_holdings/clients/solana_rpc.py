"""Solana JSON-RPC reader with ordered endpoint failover."""

from __future__ import annotations

import random
from typing import Any

from ..domain import TokenAccount
from ..logger import get_logger
from ..units import format_quantity, parse_quantity, scale_down
from .http import HttpClient, UpstreamError, redact

logger = get_logger(__name__)

ERROR_SNIPPET_CHARS = 200


class LedgerUnavailable(Exception):
    """Raised when every ledger endpoint failed for an RPC method.

    This is fatal for a holdings request: no partial ledger data is usable.
    """

    def __init__(self, method: str, failures: list[str]):
        self.method = method
        self.failures = failures
        details = " | ".join(failures) if failures else "no endpoints configured"
        super().__init__(
            f"All RPC endpoints failed for {method}. Details: {details}"
        )


class SolanaRpcClient:
    """Reads native and SPL token balances for an owner address.

    Endpoints are tried in order; the first JSON-RPC response without an
    ``error`` member wins.
    """

    def __init__(
        self,
        http: HttpClient,
        endpoints: list[str],
        *,
        timeout: float = 15.0,
    ):
        self._http = http
        self._endpoints = list(endpoints)
        self._timeout = timeout

    @property
    def endpoints(self) -> list[str]:
        return list(self._endpoints)

    async def call(self, method: str, params: list[Any]) -> Any:
        """Issue a JSON-RPC call with failover across endpoints.

        Raises:
            LedgerUnavailable: If every endpoint failed or returned an RPC error
        """
        payload = {
            "jsonrpc": "2.0",
            "id": random.randint(1, 1_000_000_000),
            "method": method,
            "params": params,
        }

        failures: list[str] = []
        for endpoint in self._endpoints:
            safe_endpoint = redact(endpoint)
            try:
                data = await self._http.fetch_json(
                    endpoint, "POST", body=payload, timeout=self._timeout
                )
            except UpstreamError as e:
                logger.warning("RPC %s failed on %s: %s", method, safe_endpoint, e)
                failures.append(f"{safe_endpoint}: {e}")
                continue

            if not isinstance(data, dict):
                failures.append(f"{safe_endpoint}: unexpected payload {type(data).__name__}")
                continue
            if data.get("error"):
                error = redact(str(data["error"]))[:ERROR_SNIPPET_CHARS]
                logger.warning(
                    "RPC %s returned an error on %s: %s", method, safe_endpoint, error
                )
                failures.append(f"{safe_endpoint}: {error}")
                continue

            logger.debug("RPC %s served by %s", method, safe_endpoint)
            return data.get("result")

        logger.error("RPC %s failed on every endpoint", method)
        raise LedgerUnavailable(method, failures)

    async def get_native_balance(self, address: str) -> int:
        """Return the SOL balance in lamports."""
        result = await self.call("getBalance", [address, {"commitment": "confirmed"}])
        if isinstance(result, dict):
            result = result.get("value", 0)
        if isinstance(result, bool) or not isinstance(result, int):
            return 0
        return result

    async def get_token_accounts(
        self, address: str, program_id: str
    ) -> list[TokenAccount]:
        """Return the parsed token accounts owned by ``address`` under a token program."""
        result = await self.call(
            "getTokenAccountsByOwner",
            [
                address,
                {"programId": program_id},
                {"encoding": "jsonParsed", "commitment": "confirmed"},
            ],
        )
        items = result.get("value") if isinstance(result, dict) else None
        if not isinstance(items, list):
            return []

        accounts: list[TokenAccount] = []
        for item in items:
            account = parse_token_account(item)
            if account is not None:
                accounts.append(account)
        return accounts


def parse_token_account(item: Any) -> TokenAccount | None:
    """Extract mint, display amount and decimals from a jsonParsed account."""
    info = _dig(item, "account", "data", "parsed", "info")
    if not isinstance(info, dict):
        return None
    mint = info.get("mint")
    token_amount = info.get("tokenAmount")
    if not mint or not isinstance(mint, str) or not isinstance(token_amount, dict):
        return None

    raw_decimals = token_amount.get("decimals")
    decimals = (
        raw_decimals
        if isinstance(raw_decimals, int) and not isinstance(raw_decimals, bool)
        else None
    )

    ui_amount_string = token_amount.get("uiAmountString")
    if not isinstance(ui_amount_string, str):
        ui_amount = token_amount.get("uiAmount")
        if parse_quantity(ui_amount) is not None:
            ui_amount_string = str(ui_amount)
        else:
            ui_amount_string = _from_base_units(token_amount.get("amount"), decimals)

    return TokenAccount(mint=mint, ui_amount_string=ui_amount_string, decimals=decimals)


def _from_base_units(amount: Any, decimals: int | None) -> str:
    if decimals is None or not isinstance(amount, str) or not amount.isdigit():
        return "0"
    return format_quantity(scale_down(int(amount), decimals))


def _dig(obj: Any, *keys: str) -> Any:
    for key in keys:
        if not isinstance(obj, dict):
            return None
        obj = obj.get(key)
    return obj
