"""Tests for the jwsverify.config package."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError
from safir.logging import LogLevel

from jwsverify.algorithms import Algorithm
from jwsverify.config import VerifierConfig

from .support.constants import RFC_SECRET


def test_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JWSVERIFY_ALGORITHM", "HS256")
    monkeypatch.setenv("JWSVERIFY_SECRET", RFC_SECRET)
    monkeypatch.setenv("JWSVERIFY_LOG_LEVEL", "DEBUG")

    config = VerifierConfig()
    assert config.algorithm == Algorithm.HS256
    assert config.secret
    assert config.secret.get_secret_value() == RFC_SECRET
    assert RFC_SECRET not in repr(config)
    assert config.key_file is None
    assert config.log_level == LogLevel.DEBUG

    # Constructor arguments take precedence over the environment.
    config = VerifierConfig(algorithm=Algorithm.HS512)
    assert config.algorithm == Algorithm.HS512


def test_defaults(tmp_path: Path) -> None:
    key_file = tmp_path / "key.pem"
    config = VerifierConfig(key_file=key_file)
    assert config.algorithm == Algorithm.RS256
    assert config.key_file == key_file
    assert config.secret is None
    assert config.log_level == LogLevel.INFO


def test_invalid(tmp_path: Path) -> None:
    key_file = tmp_path / "key.pem"

    with pytest.raises(ValidationError):
        VerifierConfig()
    with pytest.raises(ValidationError):
        VerifierConfig(algorithm="HS256")
    with pytest.raises(ValidationError):
        VerifierConfig(algorithm="HS256", secret="c2VjcmV0", key_file=key_file)
    with pytest.raises(ValidationError):
        VerifierConfig(algorithm="RS256", secret="c2VjcmV0")
    with pytest.raises(ValidationError):
        VerifierConfig(algorithm="none", key_file=key_file)
    with pytest.raises(ValidationError):
        VerifierConfig(key_file=key_file, issuer="https://example.com/")
