# tests/conftest.py
"""Shared test setup for project."""

from collections.abc import Generator

import pytest

import sol_flattener.logs as mod_logs
from tests.utils import DEFAULT_TEST_LOG_LEVEL
from tests.utils.log_fixtures import (
    direct_logger,
    module_logger,
)


# These fixtures are intentionally re-exported so pytest can discover them.
__all__ = [
    "direct_logger",
    "module_logger",
]


@pytest.fixture(autouse=True)
def reset_logger_level() -> Generator[None, None, None]:
    """Reset the app logger before and after each test.

    The logger is a module-level singleton and the CLI changes its level and
    color, so every test starts from the same state.
    """
    logger = mod_logs.getAppLogger()
    logger.setLevel(DEFAULT_TEST_LOG_LEVEL)
    logger.enable_color = False
    logger.handlers.clear()
    yield
    logger.setLevel(DEFAULT_TEST_LOG_LEVEL)
    logger.enable_color = False
    logger.handlers.clear()
