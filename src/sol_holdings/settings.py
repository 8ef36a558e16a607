"""Settings module with unified configuration precedence: INIT > ENV > CONFIG FILE."""

from __future__ import annotations

import os
import tomllib
from enum import Enum
from pathlib import Path
from typing import Any
from urllib.parse import quote

from dotenv import load_dotenv
from pydantic import Field, SecretStr, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from .constants import (
    DEFAULT_COINGECKO_PRICE_URL,
    DEFAULT_DEXSCREENER_TOKENS_URL,
    DEFAULT_HELIUS_METADATA_URL,
    DEFAULT_HELIUS_RPC_URL,
    DEFAULT_JUPITER_PRICE_URL,
    DEFAULT_JUPITER_SEARCH_URL,
    DEFAULT_JUPITER_TOKEN_LIST_URL,
    DEFAULT_PUBLIC_RPC_URL,
    DEXSCREENER_MAX_ADDRESSES_PER_CALL,
    HELIUS_MAX_MINTS_PER_CALL,
    JUPITER_MAX_IDS_PER_CALL,
    TOKEN_LIST_TTL_SECONDS,
)

load_dotenv()

SECRET_FIELDS = frozenset({"helius_api_key"})


class RpcPreference(str, Enum):
    KEYED_FIRST = "keyed-first"
    PUBLIC_FIRST = "public-first"


class HoldingsSettings(BaseSettings):
    """Single source of truth for configuration. Values may come from:
    - init kwargs
    - ENV / .env (prefixed with SOL_HOLDINGS_)
    - Config file (TOML), lowest precedence

    Do not read os.environ or files elsewhere in the codebase.
    """

    # --- ledger ---
    helius_api_key: SecretStr | None = None
    public_rpc_url: str = DEFAULT_PUBLIC_RPC_URL
    helius_rpc_url: str = DEFAULT_HELIUS_RPC_URL
    rpc_preference: RpcPreference = RpcPreference.KEYED_FIRST
    include_token_2022: bool = True
    rpc_timeout: float = Field(default=15.0, gt=0)

    # --- metadata registries ---
    jupiter_search_url: str = DEFAULT_JUPITER_SEARCH_URL
    helius_metadata_url: str = DEFAULT_HELIUS_METADATA_URL
    metadata_timeout: float = Field(default=15.0, gt=0)
    metadata_batch_size: int = Field(default=HELIUS_MAX_MINTS_PER_CALL, gt=0)

    # --- price oracles ---
    jupiter_price_url: str = DEFAULT_JUPITER_PRICE_URL
    coingecko_price_url: str = DEFAULT_COINGECKO_PRICE_URL
    price_batch_size: int = Field(default=JUPITER_MAX_IDS_PER_CALL, gt=0)
    mint_price_timeout: float = Field(default=12.0, gt=0)
    symbol_price_timeout: float = Field(default=10.0, gt=0)
    spot_price_timeout: float = Field(default=8.0, gt=0)

    # --- liquidity pools / logos ---
    dexscreener_tokens_url: str = DEFAULT_DEXSCREENER_TOKENS_URL
    dexscreener_batch_size: int = Field(
        default=DEXSCREENER_MAX_ADDRESSES_PER_CALL, gt=0
    )
    dexscreener_timeout: float = Field(default=12.0, gt=0)
    token_list_url: str = DEFAULT_JUPITER_TOKEN_LIST_URL
    token_list_timeout: float = Field(default=15.0, gt=0)
    token_list_ttl_seconds: float = Field(default=TOKEN_LIST_TTL_SECONDS, gt=0)

    # --- request shaping ---
    max_concurrent_requests: int = Field(default=5, gt=0)
    global_timeout_seconds: float = 60.0

    # --- logging ---
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="SOL_HOLDINGS_",
        env_file=".env",
        extra="ignore",  # ignore unknown keys in env/config file
    )

    @field_validator("helius_api_key", mode="before")
    @classmethod
    def wrap_secrets(cls, v: Any) -> SecretStr | None:
        """Wrap string secrets in SecretStr, treating blank values as unset."""
        if v is None or isinstance(v, SecretStr):
            return v
        if isinstance(v, str) and not v.strip():
            return None
        return SecretStr(str(v).strip())

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.strip().upper()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Custom config-file source with explicit precedence: INIT > ENV > FILE."""
        env_cfg = os.environ.get("SOL_HOLDINGS_CONFIG")
        cfg_path = Path(env_cfg) if env_cfg else None

        class TomlConfigSource(PydanticBaseSettingsSource):
            def __init__(self, settings_cls: type[BaseSettings], path: Path | None):
                super().__init__(settings_cls)
                self._path = path

            def get_field_value(
                self, field: Any, field_name: str
            ) -> tuple[Any, str, bool]:
                return None, "", False

            def __call__(self) -> dict[str, Any]:
                if not self._path:
                    # Try default locations
                    local_config = Path("sol-holdings.toml")
                    user_config = (
                        Path.home() / ".config" / "sol-holdings" / "config.toml"
                    )
                    if local_config.exists():
                        self._path = local_config
                    elif user_config.exists():
                        self._path = user_config
                    else:
                        return {}

                if not self._path.exists():
                    return {}

                with self._path.open("rb") as f:
                    data = tomllib.load(f)  # supports top-level or [sol_holdings]
                body = data.get("sol_holdings", data)
                if not isinstance(body, dict):
                    return {}

                for key in SECRET_FIELDS:
                    if key in body:
                        raise ValueError(
                            f"Security violation: '{key}' found in TOML config file. "
                            f"Secrets must only be provided via environment variables."
                        )

                return body

        return (
            init_settings,  # INIT (highest)
            env_settings,  # ENV
            dotenv_settings,  # .env
            TomlConfigSource(settings_cls, cfg_path),  # CONFIG (lowest)
            file_secret_settings,  # optional secrets dir
        )

    def as_safe_dict(self) -> dict[str, Any]:
        """Return the config as a dict with secrets redacted."""
        data = self.model_dump()
        for key in SECRET_FIELDS:
            if data.get(key) is not None:
                data[key] = "***redacted***"
        return data

    @property
    def has_helius_key(self) -> bool:
        return self.helius_api_key is not None

    @property
    def helius_key_required(self) -> str:
        """Get the Helius API key, raising ValueError if not set."""
        if self.helius_api_key is None:
            raise ValueError("helius_api_key must be configured")
        return self.helius_api_key.get_secret_value()

    @property
    def keyed_rpc_url(self) -> str | None:
        """Helius RPC endpoint with the API key embedded, or None without a key."""
        if self.helius_api_key is None:
            return None
        key = quote(self.helius_api_key.get_secret_value(), safe="")
        return f"{self.helius_rpc_url}?api-key={key}"

    @property
    def rpc_endpoints(self) -> list[str]:
        """Ledger endpoints in the order they should be tried."""
        keyed = self.keyed_rpc_url
        if keyed is None:
            return [self.public_rpc_url]
        if self.rpc_preference is RpcPreference.KEYED_FIRST:
            return [keyed, self.public_rpc_url]
        return [self.public_rpc_url, keyed]
