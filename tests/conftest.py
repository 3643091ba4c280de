"""Shared pytest fixtures for Tufan booking tests."""
import sys
sys.dont_write_bytecode = True

import logging  # noqa: E402

import pytest  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_settings(monkeypatch):
    """Clear TUFAN_* env vars and the cached settings around each test.

    load_settings() is lru_cached at module level; without the reset a
    test that sets TUFAN_NUMBER_GROUPING would leak into the next one.
    """
    from tufan.infra.settings import load_settings

    for var in (
        "TUFAN_TIMEZONE",
        "TUFAN_CURRENCY_SYMBOL",
        "TUFAN_NUMBER_GROUPING",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)

    load_settings.cache_clear()
    yield
    load_settings.cache_clear()


@pytest.fixture
def fresh_logger():
    """Yield a logger name and strip whatever get_logger attached to it.

    get_logger() turns propagation off, which would hide records from
    caplog in later tests if left in place.
    """
    name = "tufan-test-json"
    yield name
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
