"""Configuration for building a verifier."""

from __future__ import annotations

from pathlib import Path
from typing import Self

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from safir.logging import LogLevel, Profile, configure_logging

from .algorithms import Algorithm, AlgorithmFamily

__all__ = ["VerifierConfig"]


class VerifierConfig(BaseSettings):
    """Configuration for a single verifier.

    Every setting may be overridden by an environment variable with a
    ``JWSVERIFY_`` prefix, such as ``JWSVERIFY_ALGORITHM``.
    """

    model_config = SettingsConfigDict(
        env_prefix="JWSVERIFY_", extra="forbid"
    )

    algorithm: Algorithm = Field(
        Algorithm.RS256,
        title="Signature algorithm",
        description=(
            "Algorithm the verifier is pinned to. The alg field of the token"
            " header is never used to choose the algorithm."
        ),
    )

    secret: SecretStr | None = Field(
        None,
        title="Shared secret",
        description=(
            "Base64url-encoded shared secret, required for HMAC algorithms"
        ),
    )

    key_file: Path | None = Field(
        None,
        title="Public key file",
        description=(
            "File containing a PEM public key, a PEM certificate, or a JWK,"
            " required for asymmetric algorithms"
        ),
    )

    log_level: LogLevel = Field(
        LogLevel.INFO,
        title="Log level",
        description="Log level of the jwsverify logger",
    )

    log_profile: Profile = Field(
        Profile.development,
        title="Logging profile",
        description="Logging profile, which controls the output format",
    )

    @model_validator(mode="after")
    def _validate_key(self) -> Self:
        if self.algorithm.family == AlgorithmFamily.hmac:
            if not self.secret:
                raise ValueError(f"secret is required for {self.algorithm}")
            if self.key_file:
                msg = f"key_file cannot be used with {self.algorithm}"
                raise ValueError(msg)
        else:
            if not self.key_file:
                msg = f"key_file is required for {self.algorithm}"
                raise ValueError(msg)
            if self.secret:
                msg = f"secret cannot be used with {self.algorithm}"
                raise ValueError(msg)
        return self

    def configure_logging(self) -> None:
        """Configure logging based on the configuration."""
        configure_logging(
            name="jwsverify",
            profile=self.log_profile,
            log_level=self.log_level,
        )
