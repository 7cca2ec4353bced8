"""Pytest configuration for test isolation.

Settings and the log level are read from ``LEDGER_ZIPPER_*`` environment
variables, and the CLI configures the package logger once per process. Tests
that run the CLI in the same interpreter would otherwise leak both into later
tests (a handler bound to a previous runner's stderr, or a tie-break key list
exported by the developer's shell), so each test starts from a clean slate.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

import ledger_zipper.logging_setup as logging_setup

_ENV_VARS = (
    "LEDGER_ZIPPER_TIE_BREAK_KEYS",
    "LEDGER_ZIPPER_ENCODING",
    "LEDGER_ZIPPER_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Clear package env vars and run from a directory without a ``.env``."""

    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    yield
    logger = logging.getLogger("ledger_zipper")
    for h in list(logger.handlers):
        logger.removeHandler(h)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
    logging_setup._CONFIGURED = False
