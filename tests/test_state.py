import logging

import pytest

from sol_holdings.logger import TRACE
from sol_holdings.settings import HoldingsSettings
from sol_holdings.state import build_state


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    noisy = {name: logging.getLogger(name).level for name in ("urllib3", "backoff")}
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    for name, noisy_level in noisy.items():
        logging.getLogger(name).setLevel(noisy_level)


def test_build_state_wires_shared_cache_and_logging():
    settings = HoldingsSettings(_env_file=None, log_level="debug", token_list_ttl_seconds=60)

    state = build_state(settings)

    assert state.settings is settings
    assert state.token_list_cache.ttl_seconds == 60
    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("urllib3").level == logging.WARNING


def test_trace_level_shows_http_internals():
    build_state(HoldingsSettings(_env_file=None, log_level="trace"))

    assert logging.getLogger().level == TRACE
    assert logging.getLogger("backoff").level == TRACE


def test_logging_can_be_left_to_the_host():
    root = logging.getLogger()
    root.setLevel(logging.ERROR)

    build_state(HoldingsSettings(_env_file=None), configure_logging=False)

    assert root.level == logging.ERROR
