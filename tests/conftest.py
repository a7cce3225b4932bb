"""Test fixtures."""

from __future__ import annotations

import pytest

_SETTINGS = ("ALGORITHM", "SECRET", "KEY_FILE", "LOG_LEVEL", "LOG_PROFILE")
"""Settings of `~jwsverify.config.VerifierConfig`."""


@pytest.fixture(autouse=True)
def environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear any configuration from the environment running the tests."""
    for setting in _SETTINGS:
        monkeypatch.delenv(f"JWSVERIFY_{setting}", raising=False)
