"""Exceptions for jwsverify."""

from __future__ import annotations

__all__ = [
    "InvalidEncodingError",
    "InvalidKeyError",
    "InvalidSignatureError",
    "MalformedTokenError",
    "SignatureEncodingError",
    "TokenError",
    "UnknownAlgorithmError",
    "VerifyTokenError",
]


class TokenError(Exception):
    """Base class for all errors from parsing or verifying a token."""


class MalformedTokenError(TokenError):
    """The token is not three non-empty dot-separated segments."""


class InvalidEncodingError(TokenError):
    """A token segment is not valid unpadded base64url."""


class VerifyTokenError(TokenError):
    """Base class for failures to verify the signature of a token."""


class InvalidSignatureError(VerifyTokenError):
    """The signature does not match the signed data.

    This intentionally carries no detail about why verification failed, so
    tampering, a wrong key, and a wrong algorithm are indistinguishable.
    """

    def __init__(self) -> None:
        super().__init__("Invalid signature")


class SignatureEncodingError(InvalidEncodingError, VerifyTokenError):
    """The signature segment could not be decoded during verification."""


class UnknownAlgorithmError(ValueError):
    """The algorithm is unknown or does not match the key it is used with."""


class InvalidKeyError(ValueError):
    """The key material could not be parsed."""
