"""Utility validation helpers."""
from __future__ import annotations

import secrets


def constant_time_compare(lhs: bytes | bytearray, rhs: bytes | bytearray) -> bool:
    """Compare two byte sequences without leaking timing information"""
    return secrets.compare_digest(bytes(lhs), bytes(rhs))


def zeroize(buffer: bytearray) -> None:
    """Overwrite a mutable buffer in place."""
    for index in range(len(buffer)):
        buffer[index] = 0
