"""Keys used to verify token signatures."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Self

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric import ec, ed448, ed25519, rsa
from cryptography.hazmat.primitives.serialization import load_pem_public_key

from .algorithms import Algorithm, AlgorithmFamily
from .exceptions import InvalidKeyError, UnknownAlgorithmError
from .util import base64_to_number, base64url_decode

__all__ = [
    "PublicKey",
    "SharedSecretKey",
    "VerificationKey",
]

VerificationPublicKey = (
    rsa.RSAPublicKey
    | ec.EllipticCurvePublicKey
    | ed25519.Ed25519PublicKey
    | ed448.Ed448PublicKey
)
"""Public key types that can verify a signature."""

_JWK_CURVES: dict[str, type[ec.EllipticCurve]] = {
    "P-256": ec.SECP256R1,
    "P-384": ec.SECP384R1,
    "P-521": ec.SECP521R1,
}
"""Mapping of JWK ``crv`` values to EC curves."""


@dataclass(frozen=True)
class SharedSecretKey:
    """Secret key material for HMAC verification.

    Parameters
    ----------
    secret
        The raw shared secret.
    algorithm
        The HMAC algorithm this secret is used with.

    Raises
    ------
    jwsverify.exceptions.UnknownAlgorithmError
        Raised if the algorithm is not an HMAC algorithm.
    """

    secret: bytes = field(repr=False)
    algorithm: Algorithm = Algorithm.HS256

    def __post_init__(self) -> None:
        if self.algorithm.family != AlgorithmFamily.hmac:
            msg = f"{self.algorithm} is not a shared-secret algorithm"
            raise UnknownAlgorithmError(msg)

    @classmethod
    def from_base64url(
        cls, encoded: str, algorithm: Algorithm = Algorithm.HS256
    ) -> Self:
        """Create a key from a base64url-encoded secret.

        Parameters
        ----------
        encoded
            The secret encoded in unpadded base64url.
        algorithm
            The HMAC algorithm this secret is used with.

        Returns
        -------
        SharedSecretKey
            The corresponding key.

        Raises
        ------
        jwsverify.exceptions.InvalidKeyError
            Raised if the secret is not valid base64url.
        """
        try:
            secret = base64url_decode(encoded)
        except ValueError as e:
            raise InvalidKeyError(f"Invalid shared secret: {e}") from e
        return cls(secret, algorithm)


@dataclass(frozen=True)
class PublicKey:
    """A public key pinned to one asymmetric signature algorithm.

    Parameters
    ----------
    key
        The public key.
    algorithm
        The asymmetric algorithm this key verifies.

    Raises
    ------
    jwsverify.exceptions.UnknownAlgorithmError
        Raised if the algorithm is a shared-secret algorithm or the key type
        does not match the algorithm.

    Notes
    -----
    Usually created by calling :py:meth:`~PublicKey.from_pem` or
    :py:meth:`~PublicKey.from_jwk` rather than the constructor.
    """

    key: VerificationPublicKey
    algorithm: Algorithm

    def __post_init__(self) -> None:
        valid = False
        match self.algorithm.family:
            case AlgorithmFamily.hmac:
                msg = f"{self.algorithm} cannot be used with a public key"
                raise UnknownAlgorithmError(msg)
            case AlgorithmFamily.rsa | AlgorithmFamily.rsa_pss:
                valid = isinstance(self.key, rsa.RSAPublicKey)
            case AlgorithmFamily.ecdsa:
                curve = self.algorithm.curve
                valid = (
                    isinstance(self.key, ec.EllipticCurvePublicKey)
                    and curve is not None
                    and isinstance(self.key.curve, curve)
                )
            case AlgorithmFamily.eddsa:
                valid = isinstance(
                    self.key,
                    (ed25519.Ed25519PublicKey, ed448.Ed448PublicKey),
                )
        if not valid:
            key_type = type(self.key).__name__
            msg = f"{key_type} cannot be used with {self.algorithm}"
            raise UnknownAlgorithmError(msg)

    @classmethod
    def from_pem(cls, pem: bytes, algorithm: Algorithm) -> Self:
        """Import a PEM-encoded public key or certificate.

        Parameters
        ----------
        pem
            Either a public key in SubjectPublicKeyInfo format or an X.509
            certificate, in PEM encoding.
        algorithm
            The asymmetric algorithm this key verifies.

        Returns
        -------
        PublicKey
            The corresponding public key.

        Raises
        ------
        jwsverify.exceptions.InvalidKeyError
            Raised if the PEM data could not be parsed or holds a key that
            cannot verify signatures.
        jwsverify.exceptions.UnknownAlgorithmError
            Raised if the key type does not match the algorithm.
        """
        try:
            if b"-----BEGIN CERTIFICATE-----" in pem:
                key: Any = x509.load_pem_x509_certificate(pem).public_key()
            else:
                key = load_pem_public_key(pem)
        except (ValueError, UnsupportedAlgorithm) as e:
            raise InvalidKeyError(f"Cannot load public key: {e}") from e
        if not isinstance(key, VerificationPublicKey):
            key_type = type(key).__name__
            raise InvalidKeyError(f"Unsupported public key type {key_type}")
        return cls(key, algorithm)

    @classmethod
    def from_jwk(
        cls, jwk: Mapping[str, Any] | str, algorithm: Algorithm | None = None
    ) -> Self:
        """Import a public key in JWK format.

        Parameters
        ----------
        jwk
            The JWK, either already parsed or as a JSON string.
        algorithm
            The asymmetric algorithm this key verifies. If not given, the
            ``alg`` field of the JWK is used.

        Returns
        -------
        PublicKey
            The corresponding public key.

        Raises
        ------
        jwsverify.exceptions.InvalidKeyError
            Raised if the JWK is missing required fields or they are invalid.
        jwsverify.exceptions.UnknownAlgorithmError
            Raised if no algorithm is known, the algorithm conflicts with the
            ``alg`` field of the JWK, or it does not match the key type.
        """
        if isinstance(jwk, str):
            try:
                jwk = json.loads(jwk)
            except json.JSONDecodeError as e:
                raise InvalidKeyError(f"Invalid JWK JSON: {e}") from e
        if not isinstance(jwk, Mapping):
            raise InvalidKeyError("JWK is not a JSON object")

        jwk_alg = jwk.get("alg")
        if jwk_alg is not None:
            try:
                jwk_algorithm = Algorithm(jwk_alg)
            except ValueError as e:
                msg = f"Unknown JWK algorithm {jwk_alg}"
                raise UnknownAlgorithmError(msg) from e
            if algorithm and algorithm != jwk_algorithm:
                msg = f"JWK is for {jwk_algorithm}, not {algorithm}"
                raise UnknownAlgorithmError(msg)
            algorithm = jwk_algorithm
        if not algorithm:
            raise UnknownAlgorithmError("No algorithm given for JWK")

        try:
            key = _build_public_key(jwk)
        except KeyError as e:
            raise InvalidKeyError(f"JWK is missing {e.args[0]}") from e
        except (TypeError, ValueError) as e:
            raise InvalidKeyError(f"Invalid JWK: {e}") from e
        return cls(key, algorithm)


VerificationKey = SharedSecretKey | PublicKey
"""Any key that can be given to a verifier."""


def _build_public_key(jwk: Mapping[str, Any]) -> VerificationPublicKey:
    """Convert the parameters of a JWK to a public key."""
    match jwk["kty"]:
        case "RSA":
            e = base64_to_number(jwk["e"])
            n = base64_to_number(jwk["n"])
            return rsa.RSAPublicNumbers(e, n).public_key()
        case "EC":
            crv = jwk["crv"]
            if crv not in _JWK_CURVES:
                raise ValueError(f"unknown EC curve {crv}")
            x = base64_to_number(jwk["x"])
            y = base64_to_number(jwk["y"])
            numbers = ec.EllipticCurvePublicNumbers(x, y, _JWK_CURVES[crv]())
            return numbers.public_key()
        case "OKP":
            x = base64url_decode(jwk["x"])
            match jwk["crv"]:
                case "Ed25519":
                    return ed25519.Ed25519PublicKey.from_public_bytes(x)
                case "Ed448":
                    return ed448.Ed448PublicKey.from_public_bytes(x)
                case crv:
                    raise ValueError(f"unknown OKP curve {crv}")
        case kty:
            raise ValueError(f"unsupported key type {kty}")
