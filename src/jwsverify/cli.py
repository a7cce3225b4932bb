"""Command-line interface for verifying tokens."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import click
import structlog
from pydantic import ValidationError
from safir.click import display_help

from .algorithms import Algorithm
from .config import VerifierConfig
from .exceptions import (
    InvalidEncodingError,
    InvalidKeyError,
    InvalidSignatureError,
    MalformedTokenError,
    UnknownAlgorithmError,
)
from .factory import Factory
from .tokens import UnverifiedToken
from .verify import VerifiedToken, Verifier

__all__ = [
    "help",
    "inspect",
    "main",
    "verify",
]


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(message="%(version)s")
def main() -> None:
    """Parse and verify signed tokens."""


@main.command()
@click.argument("topic", default=None, required=False, nargs=1)
@click.pass_context
def help(ctx: click.Context, topic: str | None) -> None:
    """Show help for any command."""
    display_help(main, ctx, topic)


@main.command()
@click.argument("token")
@click.option(
    "--algorithm",
    "-a",
    type=click.Choice([a.value for a in Algorithm]),
    default=None,
    help="Algorithm to require (default from JWSVERIFY_ALGORITHM).",
)
@click.option(
    "--secret",
    multiple=True,
    help="Base64url-encoded HMAC secret. May be given more than once.",
)
@click.option(
    "--key-file",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="PEM or JWK public key file. May be given more than once.",
)
def verify(
    *,
    token: str,
    algorithm: str | None,
    secret: tuple[str, ...],
    key_file: tuple[Path, ...],
) -> None:
    """Verify the signature of TOKEN and print its header and claims.

    Each key is tried in the order given until one verifies the signature,
    which allows verification during a key rollover. If no keys are given
    on the command line, the key is taken from JWSVERIFY_SECRET or
    JWSVERIFY_KEY_FILE. Use - as TOKEN to read the token from standard input.
    """
    configs = _build_configs(algorithm, secret, key_file)
    configs[0].configure_logging()
    logger = structlog.get_logger("jwsverify")

    unverified = _parse(token)
    verifiers = []
    for config in configs:
        try:
            verifiers.append(Factory(config, logger).create_verifier())
        except (InvalidKeyError, UnknownAlgorithmError, OSError) as e:
            raise click.ClickException(str(e)) from e

    verified = _verify_with_any(unverified, verifiers)
    logger.debug("Verified token signature", algorithm=verified.algorithm)
    try:
        header = verified.decode_header()
        claims = verified.decode_claims()
    except InvalidEncodingError as e:
        msg = f"Signature is valid but token cannot be decoded: {e}"
        raise click.ClickException(msg) from e
    click.echo(f"Header: {header.decode(errors='replace')}")
    click.echo(f"Claims: {claims.decode(errors='replace')}")


@main.command()
@click.argument("token")
def inspect(*, token: str) -> None:
    """Print the header and claims of TOKEN without verifying it.

    Nothing printed by this command should be trusted. Use - as TOKEN to
    read the token from standard input.
    """
    unverified = _parse(token)
    try:
        header = unverified.decode_header()
        claims = unverified.decode_claims()
    except InvalidEncodingError as e:
        raise click.ClickException(str(e)) from e
    click.echo("WARNING: signature has not been verified", err=True)
    click.echo(f"Header: {header.decode(errors='replace')}")
    click.echo(f"Claims: {claims.decode(errors='replace')}")


def _build_configs(
    algorithm: str | None,
    secrets: tuple[str, ...],
    key_files: tuple[Path, ...],
) -> list[VerifierConfig]:
    """Build one configuration per candidate key."""
    settings: list[dict[str, Any]] = [
        {"secret": s, "key_file": None} for s in secrets
    ]
    settings.extend({"secret": None, "key_file": f} for f in key_files)
    if not settings:
        settings.append({})
    if algorithm:
        for kwargs in settings:
            kwargs["algorithm"] = algorithm
    try:
        return [VerifierConfig(**kwargs) for kwargs in settings]
    except ValidationError as e:
        raise click.UsageError(str(e)) from e


def _parse(token: str) -> UnverifiedToken:
    if token == "-":
        token = click.get_text_stream("stdin").read().strip()
    try:
        return UnverifiedToken.from_str(token)
    except MalformedTokenError as e:
        raise click.ClickException(f"Malformed token: {e}") from e


def _verify_with_any(
    token: UnverifiedToken, verifiers: list[Verifier]
) -> VerifiedToken:
    """Try each verifier in turn, returning the first success."""
    for verifier in verifiers:
        try:
            return verifier.verify(token)
        except InvalidSignatureError:
            continue
        except InvalidEncodingError as e:
            raise click.ClickException(str(e)) from e
    raise click.ClickException("Invalid signature")
