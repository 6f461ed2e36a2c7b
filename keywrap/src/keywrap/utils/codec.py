
from __future__ import annotations

import base64
import binascii

ENCODINGS: tuple[str, ...] = ("hex", "base64")


def b64e(b: bytes) -> str:
    """URL-safe base64 encoding without padding."""
    return base64.urlsafe_b64encode(b).decode("ascii").rstrip("=")


def b64d(s: str) -> bytes:
    """URL-safe base64 decode, accepting missing padding."""
    s = s.strip()
    pad = "=" * (-len(s) % 4)
    try:
        return base64.urlsafe_b64decode((s + pad).encode("ascii"))
    except (binascii.Error, UnicodeEncodeError) as exc:
        raise ValueError(f"Invalid base64 input: {exc}") from exc


def hexd(s: str) -> bytes:
    """Hex decode, ignoring case and embedded whitespace."""
    compact = "".join(s.split())
    try:
        return bytes.fromhex(compact)
    except ValueError as exc:
        raise ValueError(f"Invalid hex input: {exc}") from exc


def encode(data: bytes, encoding: str = "hex") -> str:
    name = encoding.lower()
    if name == "hex":
        return data.hex().upper()
    if name == "base64":
        return b64e(data)
    raise ValueError(f"Unsupported encoding: {encoding}")


def decode(text: str, encoding: str = "hex") -> bytes:
    name = encoding.lower()
    if name == "hex":
        return hexd(text)
    if name == "base64":
        return b64d(text)
    raise ValueError(f"Unsupported encoding: {encoding}")


__all__ = ["ENCODINGS", "b64d", "b64e", "decode", "encode", "hexd"]
