"""Pytest configuration for test isolation.

Parser settings are read from ``VOICE_ENTRY_*`` environment variables, and
the CLI configures the package logger once per process. Either can leak from
one test into the next (a developer's shell exporting
``VOICE_ENTRY_DEFAULT_CURRENCY=USD`` would change every expected currency),
so both are reset around each test.
"""

from __future__ import annotations

import logging
import os

import pytest

from voice_entry import logging_setup


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop any ``VOICE_ENTRY_*`` variables inherited from the shell."""

    for key in list(os.environ):
        if key.startswith("VOICE_ENTRY_"):
            monkeypatch.delenv(key, raising=False)
    # The CLI loads ``.env`` from the working directory; keep it out of tests.
    monkeypatch.setattr("voice_entry.cli.load_dotenv", lambda *a, **k: False)


@pytest.fixture(autouse=True)
def _reset_logging():
    """Undo ``configure_logging`` so each test starts with a silent package logger."""

    yield
    logger = logging.getLogger("voice_entry")
    for h in list(logger.handlers):
        logger.removeHandler(h)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
    logging_setup._CONFIGURED = False
