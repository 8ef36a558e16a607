"""Application state container."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import requests

from .cache import TokenListCache
from .clients.jupiter import CatalogueToken
from .logger import get_logger, setup_logging
from .settings import HoldingsSettings


@dataclass
class AppState:
    """Container for process-wide state and dependencies.

    Built once per process and shared by every holdings request. The token
    list cache and the HTTP session are the only state shared between
    concurrent requests.
    """

    settings: HoldingsSettings
    logger: logging.Logger
    token_list_cache: TokenListCache[dict[str, CatalogueToken]]
    session: requests.Session


def build_state(
    settings: HoldingsSettings | None = None, *, configure_logging: bool = True
) -> AppState:
    """Create the process-wide state from settings (loaded from the environment if omitted).

    Installs the coloured log handler at ``settings.log_level`` unless
    ``configure_logging`` is False (for hosts that own logging themselves).
    """
    settings = settings or HoldingsSettings()
    if configure_logging:
        setup_logging(settings.log_level)
    return AppState(
        settings=settings,
        logger=get_logger("sol_holdings"),
        token_list_cache=TokenListCache(settings.token_list_ttl_seconds),
        session=requests.Session(),
    )
