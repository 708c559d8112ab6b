# tests/conftest.py

from __future__ import annotations

import os

import pytest

from core.config import AppSettings

from .fakes import API_BASE_URL, FakeSignaloid


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep real SIGNALOID_* variables from leaking into tests."""
    for name in list(os.environ):
        if name.upper().startswith("SIGNALOID_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def settings() -> AppSettings:
    """
    Settings with a fake key and no wait between polls.

    `_env_file=None` skips both the project and the per-user .env files.
    """
    return AppSettings(
        _env_file=None,
        api_key="test-key",
        api_base_url=API_BASE_URL,
        poll_interval_seconds=0,
    )


@pytest.fixture()
def fake_api() -> FakeSignaloid:
    return FakeSignaloid()
