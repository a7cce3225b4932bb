"""Signature algorithms that a verifier may be pinned to."""

from __future__ import annotations

from enum import StrEnum

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec

__all__ = [
    "Algorithm",
    "AlgorithmFamily",
]


class AlgorithmFamily(StrEnum):
    """Kind of signing scheme, which determines the required key type."""

    hmac = "hmac"
    """Shared-secret MAC."""

    rsa = "rsa"
    """RSASSA-PKCS1-v1_5."""

    rsa_pss = "rsa_pss"
    """RSASSA-PSS with MGF1 and a salt the size of the digest."""

    ecdsa = "ecdsa"
    """ECDSA with the fixed-width ``r || s`` signature encoding."""

    eddsa = "eddsa"
    """EdDSA with either Ed25519 or Ed448."""


class Algorithm(StrEnum):
    """A JWS signature algorithm, named as in the ``alg`` header.

    Verifiers are always constructed with an explicit algorithm. The ``alg``
    field of an unverified header is never used to select one.
    """

    HS256 = "HS256"
    HS384 = "HS384"
    HS512 = "HS512"
    RS256 = "RS256"
    RS384 = "RS384"
    RS512 = "RS512"
    PS256 = "PS256"
    PS384 = "PS384"
    PS512 = "PS512"
    ES256 = "ES256"
    ES384 = "ES384"
    ES512 = "ES512"
    EdDSA = "EdDSA"

    @property
    def family(self) -> AlgorithmFamily:
        """The signing scheme used by this algorithm."""
        match self.value[:2]:
            case "HS":
                return AlgorithmFamily.hmac
            case "RS":
                return AlgorithmFamily.rsa
            case "PS":
                return AlgorithmFamily.rsa_pss
            case "ES":
                return AlgorithmFamily.ecdsa
            case _:
                return AlgorithmFamily.eddsa

    @property
    def curve(self) -> type[ec.EllipticCurve] | None:
        """The elliptic curve required for ECDSA, or `None` otherwise."""
        return _CURVES.get(self)

    def hash_algorithm(self) -> hashes.HashAlgorithm | None:
        """Return a new instance of the digest used by this algorithm.

        Returns
        -------
        cryptography.hazmat.primitives.hashes.HashAlgorithm or None
            The digest, or `None` for EdDSA, which hashes internally.
        """
        if self.family == AlgorithmFamily.eddsa:
            return None
        match self.value[2:]:
            case "256":
                return hashes.SHA256()
            case "384":
                return hashes.SHA384()
            case _:
                return hashes.SHA512()


_CURVES: dict[Algorithm, type[ec.EllipticCurve]] = {
    Algorithm.ES256: ec.SECP256R1,
    Algorithm.ES384: ec.SECP384R1,
    Algorithm.ES512: ec.SECP521R1,
}
