"""Typer-based command line interface for keywrap."""
from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

import typer

from ..config import LOG_LEVELS, AppConfig, load_config
from ..core.exceptions import IntegrityCheckFailed, KeyWrapError
from ..crypto.rfc3394 import DEFAULT_IV, unwrap_key, wrap_key
from ..logging import configure_logging
from ..utils.codec import decode, encode
from ..version import __version__

app = typer.Typer(help="AES Key Wrap (RFC 3394) command line interface")

EXIT_INVALID_INPUT = 1
EXIT_INTEGRITY = 2


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"keywrap {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(None, "--config", metavar="PATH"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override the configured log level"),
    version: bool = typer.Option(False, "--version", callback=_version_callback, is_eager=True),
) -> None:
    if log_level is not None and log_level.lower() not in LOG_LEVELS:
        typer.echo(f"--log-level must be one of {', '.join(LOG_LEVELS)}, got '{log_level}'", err=True)
        raise typer.Exit(code=EXIT_INVALID_INPUT)
    try:
        ctx.obj = load_config(config)
    except ValueError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=EXIT_INVALID_INPUT) from exc
    configure_logging(log_level or ctx.obj.logging.normalized_level())


def _decode_arg(name: str, value: str, encoding: str) -> bytes:
    try:
        return decode(value, encoding)
    except ValueError as exc:
        typer.echo(f"--{name}: {exc}", err=True)
        raise typer.Exit(code=EXIT_INVALID_INPUT) from exc


def _run(operation: Callable[..., bytes], kek: bytes, data: bytes, iv: bytes) -> bytes:
    try:
        return operation(kek, data, iv=iv)
    except IntegrityCheckFailed as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=EXIT_INTEGRITY) from exc
    except (KeyWrapError, TypeError) as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=EXIT_INVALID_INPUT) from exc


@app.command()
def wrap(
    ctx: typer.Context,
    kek: str = typer.Option(..., "--kek", help="Key encryption key (128, 192 or 256 bits)"),
    key: str = typer.Option(..., "--key", help="Key to wrap, a multiple of 64 bits"),
    iv: Optional[str] = typer.Option(None, "--iv", help="Alternate 64-bit initial value"),
    encoding: Optional[str] = typer.Option(None, "--encoding", help="hex or base64, defaults to config"),
) -> None:
    """Wrap a key under a KEK and print the wrapped key"""
    config: AppConfig = ctx.obj
    enc = encoding or config.io.encoding
    initial = _decode_arg("iv", iv, enc) if iv else DEFAULT_IV
    wrapped = _run(wrap_key, _decode_arg("kek", kek, enc), _decode_arg("key", key, enc), initial)
    typer.echo(encode(wrapped, enc))


@app.command()
def unwrap(
    ctx: typer.Context,
    kek: str = typer.Option(..., "--kek", help="Key encryption key (128, 192 or 256 bits)"),
    wrapped: str = typer.Option(..., "--wrapped", help="Wrapped key produced by 'wrap'"),
    iv: Optional[str] = typer.Option(None, "--iv", help="Alternate 64-bit initial value"),
    encoding: Optional[str] = typer.Option(None, "--encoding", help="hex or base64, defaults to config"),
) -> None:
    """Unwrap a wrapped key, verify its integrity and print the plain key"""
    config: AppConfig = ctx.obj
    enc = encoding or config.io.encoding
    initial = _decode_arg("iv", iv, enc) if iv else DEFAULT_IV
    plain = _run(unwrap_key, _decode_arg("kek", kek, enc), _decode_arg("wrapped", wrapped, enc), initial)
    typer.echo(encode(plain, enc))


@app.command()
def version() -> None:
    typer.echo(f"keywrap {__version__}")


if __name__ == "__main__":  # pragma: no cover
    app()
