from __future__ import annotations

from dataclasses import dataclass, field

from ..adapters.price_adapters.base import PriceData
from ..clients import Providers
from ..domain import Holding, RawHolding, ResolvedMetadata, TokenAccount
from ..state import AppState


@dataclass
class PipelineContext:
    state: AppState
    address: str
    providers: Providers
    include_nft: bool = False
    native_lamports: int | None = None
    token_accounts: list[TokenAccount] | None = None
    raw_holdings: list[RawHolding] | None = None
    metadata: dict[str, ResolvedMetadata] | None = None
    price_data: PriceData | None = None
    logos: dict[str, str] | None = None
    holdings: list[Holding] | None = None
    degraded: list[str] = field(default_factory=list)  # "provider: reason"

    def record_degraded(self, provider: str, failures: list[BaseException]) -> None:
        for failure in failures:
            self.degraded.append(f"{provider}: {failure}")

    @property
    def native_lamports_required(self) -> int:
        if self.native_lamports is None:
            raise RuntimeError(
                "Native balance has not been set. Ensure read_ledger() is called before accessing this property."
            )
        return self.native_lamports

    @property
    def token_accounts_required(self) -> list[TokenAccount]:
        if self.token_accounts is None:
            raise RuntimeError(
                "Token accounts have not been set. Ensure read_ledger() is called before accessing this property."
            )
        return self.token_accounts

    @property
    def raw_holdings_required(self) -> list[RawHolding]:
        if self.raw_holdings is None:
            raise RuntimeError(
                "Raw holdings have not been set. Ensure collect_raw_holdings() is called before accessing this property."
            )
        return self.raw_holdings

    @property
    def metadata_required(self) -> dict[str, ResolvedMetadata]:
        if self.metadata is None:
            raise RuntimeError(
                "Metadata has not been set. Ensure resolve_metadata() is called before accessing this property."
            )
        return self.metadata

    @property
    def price_data_required(self) -> PriceData:
        if self.price_data is None:
            raise RuntimeError(
                "Price data has not been set. Ensure price_holdings() is called before accessing this property."
            )
        return self.price_data

    @property
    def logos_required(self) -> dict[str, str]:
        if self.logos is None:
            raise RuntimeError(
                "Logos have not been set. Ensure resolve_logos() is called before accessing this property."
            )
        return self.logos

    @property
    def holdings_required(self) -> list[Holding]:
        if self.holdings is None:
            raise RuntimeError(
                "Holdings have not been set. Ensure assemble_holdings() is called before accessing this property."
            )
        return self.holdings
