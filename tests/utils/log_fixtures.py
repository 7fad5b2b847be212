# tests/utils/log_fixtures.py
"""Reusable fixtures for testing the app logger."""

import sys
import uuid

import pytest

import sol_flattener.logs as mod_logs
import sol_flattener.meta as mod_meta


def _suffix() -> str:
    return "_" + uuid.uuid4().hex[:6]


@pytest.fixture
def direct_logger() -> mod_logs.AppLogger:
    """Create a brand-new AppLogger with no shared state.

    Does NOT affect getAppLogger(); only for testing the logger itself.
    """
    logger = mod_logs.AppLogger(f"test_logger{_suffix()}", enable_color=False)
    logger.setLevel("trace")
    return logger


@pytest.fixture
def module_logger(monkeypatch: pytest.MonkeyPatch) -> mod_logs.AppLogger:
    """Replace getAppLogger() in every loaded app module with a new logger.

    Reverted automatically after the test.
    """
    new_logger = mod_logs.AppLogger(f"isolated_logger{_suffix()}", enable_color=False)
    new_logger.setLevel("trace")

    # compare against the original; patching sol_flattener.logs rebinds the name
    original = mod_logs.getAppLogger
    for name, module in list(sys.modules.items()):
        if name != mod_meta.PROGRAM_PACKAGE and not name.startswith(
            f"{mod_meta.PROGRAM_PACKAGE}."
        ):
            continue
        if getattr(module, "getAppLogger", None) is original:
            monkeypatch.setattr(module, "getAppLogger", lambda: new_logger)
    return new_logger
