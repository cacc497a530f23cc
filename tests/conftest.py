# tests/conftest.py

"""Shared pytest fixtures for all price tracker tests."""

from collections.abc import Generator

import pytest

from src.config.settings import Settings


@pytest.fixture(autouse=True)
def clean_pantry_env(
    monkeypatch: pytest.MonkeyPatch,
) -> Generator[None, None, None]:
    """Keep a developer's real PANTRY_API_KEY out of every test."""
    monkeypatch.delenv(Settings.PANTRY_API_KEY_ENV, raising=False)
    yield
