"""Verify the signature of a token."""

from __future__ import annotations

from typing import Protocol

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hmac
from cryptography.hazmat.primitives.asymmetric import ec, padding, rsa
from cryptography.hazmat.primitives.asymmetric.utils import (
    encode_dss_signature,
)

from .algorithms import Algorithm, AlgorithmFamily
from .exceptions import (
    InvalidEncodingError,
    InvalidSignatureError,
    SignatureEncodingError,
)
from .keys import PublicKey, SharedSecretKey
from .tokens import UnverifiedToken

__all__ = [
    "AsymmetricVerifier",
    "SharedSecretVerifier",
    "VerifiedToken",
    "Verifier",
]

_VERIFIER_CAPABILITY = object()
"""Required to construct a `VerifiedToken`, never exported."""


class VerifiedToken:
    """A token whose signature has been verified.

    Holding one of these is proof that the signature of the token matched
    its signed data under the key and algorithm of some verifier. The claims
    still have to be checked by the caller.

    Notes
    -----
    Only returned by the ``verify`` method of a verifier. Calling the
    constructor directly raises `TypeError`.
    """

    __slots__ = ("_algorithm", "_token")

    def __init__(
        self,
        token: UnverifiedToken,
        algorithm: Algorithm,
        *,
        _capability: object = None,
    ) -> None:
        if _capability is not _VERIFIER_CAPABILITY:
            raise TypeError("VerifiedToken can only be created by a verifier")
        self._token = token
        self._algorithm = algorithm

    def __repr__(self) -> str:
        return (
            f"VerifiedToken(algorithm={self._algorithm.value!r},"
            f" encoded_header={self._token.encoded_header()!r})"
        )

    @property
    def algorithm(self) -> Algorithm:
        """Algorithm of the verifier that checked the signature."""
        return self._algorithm

    def encoded_header(self) -> str:
        """Return the header segment as it appears in the token.

        Practically, `decode_header` is more useful, since this is still
        base64url-encoded.
        """
        return self._token.encoded_header()

    def encoded_claims(self) -> str:
        """Return the claims segment as it appears in the token."""
        return self._token.encoded_claims()

    def encoded_signature(self) -> str:
        """Return the signature segment as it appears in the token."""
        return self._token.encoded_signature()

    def signed_data(self) -> str:
        """Return the encoded header and claims covered by the signature."""
        return self._token.signed_data()

    def decode_header(self) -> bytes:
        """Decode the header.

        Raises
        ------
        jwsverify.exceptions.InvalidEncodingError
            Raised if the header is not valid base64url. The signature was
            still valid.
        """
        return self._token.decode_header()

    def decode_claims(self) -> bytes:
        """Decode the claims for JSON parsing and validation by the caller.

        Raises
        ------
        jwsverify.exceptions.InvalidEncodingError
            Raised if the claims are not valid base64url. The signature was
            still valid.
        """
        return self._token.decode_claims()

    def decode_signature(self) -> bytes:
        """Decode the signature."""
        return self._token.decode_signature()


class Verifier(Protocol):
    """Interface for checking token signatures with one key and algorithm.

    Each implementation wraps a different kind of signature primitive.
    Verifiers hold no mutable state, so the same verifier may be used
    concurrently from multiple threads.
    """

    @property
    def algorithm(self) -> Algorithm:
        """The algorithm this verifier is pinned to."""

    def verify(self, token: UnverifiedToken) -> VerifiedToken:
        """Verify the signature of a token.

        Parameters
        ----------
        token
            The parsed token.

        Returns
        -------
        VerifiedToken
            The token, now known to be signed with the verifier's key.

        Raises
        ------
        jwsverify.exceptions.InvalidSignatureError
            Raised if the signature does not match.
        jwsverify.exceptions.SignatureEncodingError
            Raised if the signature segment is not valid base64url.
        """

    def verify_data_with_decoded_signature(
        self, signed_data: bytes | str, decoded_signature: bytes
    ) -> None:
        """Verify a signature over arbitrary data.

        Parameters
        ----------
        signed_data
            The data that was signed. A `str` is encoded in UTF-8.
        decoded_signature
            The raw signature.

        Raises
        ------
        jwsverify.exceptions.InvalidSignatureError
            Raised if the signature does not match.
        """


class SharedSecretVerifier:
    """Verifies HMAC signatures with a shared secret.

    Parameters
    ----------
    key
        The shared secret and the HMAC algorithm to use with it.
    """

    def __init__(self, key: SharedSecretKey) -> None:
        self._key = key

    @property
    def algorithm(self) -> Algorithm:
        return self._key.algorithm

    def verify(self, token: UnverifiedToken) -> VerifiedToken:
        signature = _decode_signature(token)
        self.verify_data_with_decoded_signature(token.signed_data(), signature)
        return VerifiedToken(
            token, self.algorithm, _capability=_VERIFIER_CAPABILITY
        )

    def verify_data_with_decoded_signature(
        self, signed_data: bytes | str, decoded_signature: bytes
    ) -> None:
        hash_algorithm = self._key.algorithm.hash_algorithm()
        assert hash_algorithm
        mac = hmac.HMAC(self._key.secret, hash_algorithm)
        mac.update(_as_bytes(signed_data))
        try:
            mac.verify(decoded_signature)
        except InvalidSignature:
            raise InvalidSignatureError from None


class AsymmetricVerifier:
    """Verifies RSA, ECDSA, or EdDSA signatures with a public key.

    Parameters
    ----------
    key
        The public key and the algorithm to use with it.
    """

    def __init__(self, key: PublicKey) -> None:
        self._key = key

    @property
    def algorithm(self) -> Algorithm:
        return self._key.algorithm

    def verify(self, token: UnverifiedToken) -> VerifiedToken:
        signature = _decode_signature(token)
        self.verify_data_with_decoded_signature(token.signed_data(), signature)
        return VerifiedToken(
            token, self.algorithm, _capability=_VERIFIER_CAPABILITY
        )

    def verify_data_with_decoded_signature(
        self, signed_data: bytes | str, decoded_signature: bytes
    ) -> None:
        data = _as_bytes(signed_data)
        key = self._key.key
        hash_algorithm = self.algorithm.hash_algorithm()
        try:
            match self.algorithm.family:
                case AlgorithmFamily.rsa:
                    assert isinstance(key, rsa.RSAPublicKey)
                    assert hash_algorithm
                    key.verify(
                        decoded_signature,
                        data,
                        padding.PKCS1v15(),
                        hash_algorithm,
                    )
                case AlgorithmFamily.rsa_pss:
                    assert isinstance(key, rsa.RSAPublicKey)
                    assert hash_algorithm
                    pss = padding.PSS(
                        mgf=padding.MGF1(hash_algorithm),
                        salt_length=hash_algorithm.digest_size,
                    )
                    key.verify(decoded_signature, data, pss, hash_algorithm)
                case AlgorithmFamily.ecdsa:
                    assert isinstance(key, ec.EllipticCurvePublicKey)
                    assert hash_algorithm
                    der = _ecdsa_signature_to_der(key, decoded_signature)
                    key.verify(der, data, ec.ECDSA(hash_algorithm))
                case AlgorithmFamily.eddsa:
                    assert not isinstance(
                        key, (rsa.RSAPublicKey, ec.EllipticCurvePublicKey)
                    )
                    key.verify(decoded_signature, data)
                case _:
                    raise InvalidSignatureError
        except InvalidSignature:
            raise InvalidSignatureError from None


def _as_bytes(signed_data: bytes | str) -> bytes:
    if isinstance(signed_data, str):
        return signed_data.encode()
    return signed_data


def _decode_signature(token: UnverifiedToken) -> bytes:
    """Decode the signature, wrapping any failure as a verification error."""
    try:
        return token.decode_signature()
    except InvalidEncodingError as e:
        raise SignatureEncodingError(str(e)) from e


def _ecdsa_signature_to_der(
    key: ec.EllipticCurvePublicKey, signature: bytes
) -> bytes:
    """Convert a fixed-width ``r || s`` signature to DER.

    Raises
    ------
    cryptography.exceptions.InvalidSignature
        Raised if the signature is the wrong length for the curve.
    """
    size = (key.curve.key_size + 7) // 8
    if len(signature) != 2 * size:
        raise InvalidSignature
    r = int.from_bytes(signature[:size], byteorder="big")
    s = int.from_bytes(signature[size:], byteorder="big")
    return encode_dss_signature(r, s)
