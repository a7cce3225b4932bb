"""Parsing of compact-serialized tokens."""

from __future__ import annotations

from typing import Self

from .exceptions import InvalidEncodingError, MalformedTokenError
from .util import base64url_decode

__all__ = [
    "UnverifiedToken",
    "parse_token",
]


class UnverifiedToken:
    """A token split into its segments but whose signature is not checked.

    Nothing about the contents of the segments is validated at parse time.
    Each decode method base64url-decodes its segment on every call, so a
    segment with an invalid encoding is only reported when it is decoded.

    Parameters
    ----------
    raw
        The compact serialization of the token: the encoded header, claims,
        and signature, separated by periods.

    Raises
    ------
    jwsverify.exceptions.MalformedTokenError
        Raised if the token is not exactly three non-empty segments.
    """

    __slots__ = (
        "_encoded_claims",
        "_encoded_header",
        "_encoded_signature",
        "_signed_data",
    )

    def __init__(self, raw: str) -> None:
        segments = raw.split(".")
        if len(segments) != 3:
            msg = f"Token has {len(segments)} segments, not 3"
            raise MalformedTokenError(msg)
        if not all(segments):
            raise MalformedTokenError("Token has an empty segment")
        header, claims, signature = segments
        self._encoded_header = header
        self._encoded_claims = claims
        self._encoded_signature = signature
        self._signed_data = raw[: len(header) + 1 + len(claims)]

    @classmethod
    def from_str(cls, raw: str) -> Self:
        """Parse a token.

        Parameters
        ----------
        raw
            The compact serialization of the token.

        Returns
        -------
        UnverifiedToken
            The parsed token.

        Raises
        ------
        jwsverify.exceptions.MalformedTokenError
            Raised if the token is not exactly three non-empty segments.
        """
        return cls(raw)

    def __repr__(self) -> str:
        return f"UnverifiedToken(encoded_header={self._encoded_header!r})"

    def encoded_header(self) -> str:
        """Return the header segment as it appears in the token."""
        return self._encoded_header

    def encoded_claims(self) -> str:
        """Return the claims segment as it appears in the token."""
        return self._encoded_claims

    def encoded_signature(self) -> str:
        """Return the signature segment as it appears in the token."""
        return self._encoded_signature

    def signed_data(self) -> str:
        """Return the data covered by the signature.

        This is the encoded header, a period, and the encoded claims, exactly
        as they appear in the original token.
        """
        return self._signed_data

    def decode_header(self) -> bytes:
        """Decode the header segment.

        The header of an unverified token may be inspected, for example to
        find the key ID, but nothing in it can be trusted.

        Raises
        ------
        jwsverify.exceptions.InvalidEncodingError
            Raised if the header is not valid base64url.
        """
        return _decode_segment(self._encoded_header, "header")

    def decode_claims(self) -> bytes:
        """Decode the claims segment.

        Raises
        ------
        jwsverify.exceptions.InvalidEncodingError
            Raised if the claims are not valid base64url.
        """
        return _decode_segment(self._encoded_claims, "claims")

    def decode_signature(self) -> bytes:
        """Decode the signature segment.

        Raises
        ------
        jwsverify.exceptions.InvalidEncodingError
            Raised if the signature is not valid base64url.
        """
        return _decode_segment(self._encoded_signature, "signature")


def parse_token(raw: str) -> UnverifiedToken:
    """Parse the compact serialization of a token.

    Parameters
    ----------
    raw
        The encoded header, claims, and signature, separated by periods.

    Returns
    -------
    UnverifiedToken
        The parsed token, which must be verified before its claims are used.

    Raises
    ------
    jwsverify.exceptions.MalformedTokenError
        Raised if the token is not exactly three non-empty segments.
    """
    return UnverifiedToken(raw)


def _decode_segment(encoded: str, name: str) -> bytes:
    try:
        return base64url_decode(encoded)
    except ValueError as e:
        msg = f"Token {name} is not valid base64url: {e}"
        raise InvalidEncodingError(msg) from e
