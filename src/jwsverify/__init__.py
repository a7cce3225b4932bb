"""Parse and verify signed tokens in compact serialization."""

from importlib.metadata import PackageNotFoundError, version

from .algorithms import Algorithm
from .exceptions import (
    InvalidEncodingError,
    InvalidKeyError,
    InvalidSignatureError,
    MalformedTokenError,
    SignatureEncodingError,
    TokenError,
    UnknownAlgorithmError,
    VerifyTokenError,
)
from .keys import PublicKey, SharedSecretKey
from .tokens import UnverifiedToken, parse_token
from .verify import (
    AsymmetricVerifier,
    SharedSecretVerifier,
    VerifiedToken,
    Verifier,
)

__all__ = [
    "Algorithm",
    "AsymmetricVerifier",
    "InvalidEncodingError",
    "InvalidKeyError",
    "InvalidSignatureError",
    "MalformedTokenError",
    "PublicKey",
    "SharedSecretKey",
    "SharedSecretVerifier",
    "SignatureEncodingError",
    "TokenError",
    "UnknownAlgorithmError",
    "UnverifiedToken",
    "VerifiedToken",
    "Verifier",
    "VerifyTokenError",
    "__version__",
    "parse_token",
]

try:
    __version__ = version("jwsverify")
except PackageNotFoundError:
    __version__ = "0.0.0"
