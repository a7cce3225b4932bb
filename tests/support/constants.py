"""Constants used in test fixtures and setup."""

from cryptography.hazmat.primitives.asymmetric import ec, ed25519, rsa

__all__ = [
    "RFC_CLAIMS",
    "RFC_HEADER",
    "RFC_SECRET",
    "RFC_SIGNATURE",
    "RFC_TOKEN",
    "TEST_EC_KEYS",
    "TEST_ED25519_KEY",
    "TEST_RSA_KEY",
]

RFC_HEADER = b'{"typ":"JWT",\r\n "alg":"HS256"}'
"""Header of the HMAC example in RFC 7515 appendix A.1."""

RFC_CLAIMS = (
    b'{"iss":"joe",\r\n "exp":1300819380,\r\n'
    b' "http://example.com/is_root":true}'
)
"""Claims of the HMAC example in RFC 7515 appendix A.1."""

RFC_SECRET = (
    "AyM1SysPpbyDfgZld3umj1qzKObwVMkoqQ-EstJQLr_T-1qS0gZH75aKtMN3Yj0iPS4hcgUu"
    "TwjAzZr1Z9CAow"
)
"""Base64url-encoded HMAC key of the RFC 7515 example."""

RFC_SIGNATURE = "dBjftJeZ4CVP-mB92K27uhbUJU1p1r_wW1gFWFOEjXk"
"""Encoded signature of the RFC 7515 example."""

RFC_TOKEN = (
    "eyJ0eXAiOiJKV1QiLA0KICJhbGciOiJIUzI1NiJ9"
    ".eyJpc3MiOiJqb2UiLA0KICJleHAiOjEzMDA4MTkzODAsDQogImh0dHA6Ly9leGFtcGxl"
    "LmNvbS9pc19yb290Ijp0cnVlfQ"
    f".{RFC_SIGNATURE}"
)
"""Complete token of the RFC 7515 example."""

TEST_RSA_KEY = rsa.generate_private_key(public_exponent=65537, key_size=2048)
"""RSA private key for signing test tokens.

Generating this takes a surprisingly long time when summed across every test,
so generate one statically at import time for each test run.
"""

TEST_EC_KEYS = {
    "ES256": ec.generate_private_key(ec.SECP256R1()),
    "ES384": ec.generate_private_key(ec.SECP384R1()),
    "ES512": ec.generate_private_key(ec.SECP521R1()),
}
"""EC private keys for signing test tokens, by algorithm."""

TEST_ED25519_KEY = ed25519.Ed25519PrivateKey.generate()
"""Ed25519 private key for signing test tokens."""
