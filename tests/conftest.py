"""Pytest configuration for test isolation.

Settings are read from ``PAYMENT_REPORTS_*`` environment variables and from a
``.env`` in the current working directory, and the CLI configures the package
logger once per process. Any of these leaking between tests would make
results depend on test order, so every test runs with the variables cleared,
inside its own temporary working directory, and with the logging state
restored afterwards.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

# Make sure the workspace `packages/` dir is on sys.path so `payment_reports` is importable
_ROOT = Path(__file__).resolve().parents[1]
_PKG_DIR = _ROOT / "packages"
sys.path[:0] = [p for p in [str(_PKG_DIR), str(_ROOT)] if p not in sys.path]


@pytest.fixture(autouse=True)
def _isolate_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear ``PAYMENT_REPORTS_*`` variables and run from a scratch directory."""

    for key in list(os.environ):
        if key.startswith("PAYMENT_REPORTS_"):
            monkeypatch.delenv(key, raising=False)
    cwd = tmp_path / "cwd"
    cwd.mkdir(parents=True, exist_ok=True)
    monkeypatch.chdir(cwd)


@pytest.fixture(autouse=True)
def _isolate_logging(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Let each test configure package logging afresh."""

    from payment_reports import logging_setup

    logger = logging.getLogger("payment_reports")
    saved = (list(logger.handlers), logger.propagate, logger.level)
    monkeypatch.setattr(logging_setup, "_CONFIGURED", False)
    yield
    logger.handlers[:] = saved[0]
    logger.propagate = saved[1]
    logger.setLevel(saved[2])
