"""General utility functions."""

from __future__ import annotations

import base64
import re

__all__ = [
    "add_padding",
    "base64_to_number",
    "base64url_decode",
    "base64url_encode",
]

_BASE64URL_REGEX = re.compile("[A-Za-z0-9_-]*")
"""Characters allowed in unpadded base64url."""


def add_padding(encoded: str) -> str:
    """Add padding to base64 encoded bytes.

    Parameters
    ----------
    encoded
        A base64-encoded string, possibly with the padding removed.

    Returns
    -------
    str
        A correctly-padded version of the encoded string.
    """
    underflow = len(encoded) % 4
    if underflow:
        return encoded + ("=" * (4 - underflow))
    else:
        return encoded


def base64url_decode(encoded: str) -> bytes:
    """Decode unpadded URL-safe base64.

    Unlike `base64.urlsafe_b64decode`, this is strict: padding, characters
    from the standard alphabet, and whitespace are all rejected, as are
    non-zero unused bits in the final character. Every byte string
    therefore has exactly one accepted encoding.

    Parameters
    ----------
    encoded
        Unpadded base64url-encoded data.

    Returns
    -------
    bytes
        The decoded data.

    Raises
    ------
    ValueError
        Raised if the input is not valid unpadded base64url.
    """
    if not _BASE64URL_REGEX.fullmatch(encoded):
        raise ValueError("Invalid character in base64url data")
    if len(encoded) % 4 == 1:
        raise ValueError("Invalid length for base64url data")
    decoded = base64.urlsafe_b64decode(add_padding(encoded))
    if base64url_encode(decoded) != encoded:
        raise ValueError("Non-zero trailing bits in base64url data")
    return decoded


def base64url_encode(data: bytes) -> str:
    """Encode data as unpadded URL-safe base64."""
    return base64.urlsafe_b64encode(data).decode().rstrip("=")


def base64_to_number(data: str) -> int:
    """Convert base64-encoded bytes to an integer.

    Parameters
    ----------
    data
        Base64-encoded number, possibly without padding.

    Returns
    -------
    int
        The result converted to a number.  Note that Python ints can be
        arbitrarily large.

    Notes
    -----
    Used for converting the modulus and exponent of an RSA JWK, and the
    coordinates of an EC JWK, to integers in preparation for turning them
    into a public key.
    """
    return int.from_bytes(base64url_decode(data), byteorder="big")
