"""Create verifiers from configuration."""

from __future__ import annotations

import structlog
from structlog.stdlib import BoundLogger

from .config import VerifierConfig
from .keys import PublicKey, SharedSecretKey, VerificationKey
from .verify import AsymmetricVerifier, SharedSecretVerifier, Verifier

__all__ = ["Factory"]


class Factory:
    """Build the key and verifier described by a configuration.

    Parameters
    ----------
    config
        Verifier configuration.
    logger
        Logger to use for reporting status. If not given, the ``jwsverify``
        logger is used.
    """

    def __init__(
        self, config: VerifierConfig, logger: BoundLogger | None = None
    ) -> None:
        self._config = config
        self._logger = logger or structlog.get_logger("jwsverify")

    def load_key(self) -> VerificationKey:
        """Load the key named by the configuration.

        Returns
        -------
        SharedSecretKey or PublicKey
            A shared secret for HMAC algorithms and a public key otherwise.
            Key files whose contents start with ``{`` are read as a JWK and
            all others as PEM.

        Raises
        ------
        jwsverify.exceptions.InvalidKeyError
            Raised if the key could not be parsed.
        jwsverify.exceptions.UnknownAlgorithmError
            Raised if the key cannot be used with the configured algorithm.
        OSError
            Raised if the key file could not be read.
        """
        algorithm = self._config.algorithm
        if self._config.secret:
            secret = self._config.secret.get_secret_value()
            self._logger.debug("Loaded shared secret", algorithm=algorithm)
            return SharedSecretKey.from_base64url(secret, algorithm)

        assert self._config.key_file
        path = self._config.key_file
        data = path.read_bytes()
        if data.lstrip().startswith(b"{"):
            key = PublicKey.from_jwk(data.decode(), algorithm)
            key_format = "JWK"
        else:
            key = PublicKey.from_pem(data, algorithm)
            key_format = "PEM"
        self._logger.debug(
            "Loaded public key",
            algorithm=algorithm,
            format=key_format,
            path=str(path),
        )
        return key

    def create_verifier(self) -> Verifier:
        """Create a verifier for the configured key and algorithm.

        Returns
        -------
        Verifier
            Either a `~jwsverify.verify.SharedSecretVerifier` or an
            `~jwsverify.verify.AsymmetricVerifier`.
        """
        key = self.load_key()
        if isinstance(key, SharedSecretKey):
            return SharedSecretVerifier(key)
        else:
            return AsymmetricVerifier(key)
