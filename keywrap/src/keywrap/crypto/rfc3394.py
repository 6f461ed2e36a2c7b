
from __future__ import annotations

"""AES Key Wrap as defined in RFC 3394.

A key of ``n`` 64-bit blocks is wrapped with ``6 * n`` chained single-block
AES operations. The first 64-bit half of every AES output feeds the integrity
register ``A`` and the second half replaces the data register being
processed. Unwrap runs the same schedule backwards and succeeds only when
``A`` ends up equal to the initial value again.
"""

import logging
from typing import Final

import structlog

from keywrap.core.exceptions import (
    DataTooLarge,
    IntegrityCheckFailed,
    InvalidDataLength,
    InvalidKekLength,
)
from keywrap.crypto.block import AesBlockCipher
from keywrap.utils.checks import constant_time_compare, zeroize

DEFAULT_IV: Final[bytes] = b"\xa6" * 8
ALLOWED_KEK_BITS: Final[tuple[int, ...]] = (128, 192, 256)
SEMIBLOCK: Final[int] = 8
ROUNDS: Final[int] = 6
MAX_COUNTER: Final[int] = 0xFF

# routed through stdlib logging; unconfigured hosts only see warnings, on stderr
log = structlog.wrap_logger(
    logging.getLogger("keywrap.rfc3394"), wrapper_class=structlog.stdlib.BoundLogger
)


def msb(size: int, buffer: bytes) -> bytes:
    """Return the ``size`` most significant (leading) bytes of ``buffer``."""
    if not 0 <= size <= len(buffer):
        raise ValueError(f"Cannot take {size} bytes from a {len(buffer)}-byte buffer")
    return bytes(buffer[:size])


def lsb(size: int, buffer: bytes) -> bytes:
    """Return the ``size`` least significant (trailing) bytes of ``buffer``."""
    if not 0 <= size <= len(buffer):
        raise ValueError(f"Cannot take {size} bytes from a {len(buffer)}-byte buffer")
    return bytes(buffer[len(buffer) - size:])


def wrap_key(kek: bytes, plain_key: bytes, *, iv: bytes = DEFAULT_IV) -> bytes:
    """Wrap ``plain_key`` under ``kek``.

    Returns ``A || R[0] || ... || R[n-1]``, which is ``len(plain_key) + 8``
    bytes long.

    Raises
    ------
    InvalidKekLength
        ``kek`` is missing or not 128, 192 or 256 bits.
    InvalidDataLength
        ``plain_key`` is missing, empty or not a multiple of 64 bits, or
        ``iv`` is not 64 bits.
    DataTooLarge
        ``plain_key`` is longer than ``kek``.
    """
    kek, plain_key = _validate(kek, plain_key, argument="plain_key", overhead=0)
    initial = _validate_iv(iv)
    blocks = len(plain_key) // SEMIBLOCK
    _check_counter_range(blocks)

    integrity = bytearray(initial)
    registers = bytearray(plain_key)

    with AesBlockCipher(kek) as aes:
        for j in range(ROUNDS):
            for i in range(blocks):
                t = blocks * j + i + 1
                offset = i * SEMIBLOCK
                output = aes.encrypt_block(bytes(integrity) + registers[offset:offset + SEMIBLOCK])
                integrity[:] = msb(SEMIBLOCK, output)
                integrity[SEMIBLOCK - 1] ^= t
                registers[offset:offset + SEMIBLOCK] = lsb(SEMIBLOCK, output)

    wrapped = bytes(integrity) + bytes(registers)
    zeroize(registers)
    log.debug("key_wrapped", kek_bits=len(kek) * 8, blocks=blocks)
    return wrapped


def unwrap_key(kek: bytes, wrapped_key: bytes, *, iv: bytes = DEFAULT_IV) -> bytes:
    """Unwrap ``wrapped_key`` with ``kek`` and verify its integrity.

    Raises the same input errors as :func:`wrap_key` (with ``wrapped_key``
    allowed to be up to ``len(kek) + 8`` bytes), plus
    :class:`IntegrityCheckFailed` when the recovered initial value does not
    match ``iv``. No key material is returned or attached on failure.
    """
    kek, wrapped_key = _validate(kek, wrapped_key, argument="wrapped_key", overhead=SEMIBLOCK)
    expected = _validate_iv(iv)
    blocks = len(wrapped_key) // SEMIBLOCK - 1
    _check_counter_range(blocks)

    integrity = bytearray(wrapped_key[:SEMIBLOCK])
    registers = bytearray(wrapped_key[SEMIBLOCK:])

    with AesBlockCipher(kek) as aes:
        for j in range(ROUNDS - 1, -1, -1):
            for i in range(blocks - 1, -1, -1):
                t = blocks * j + i + 1
                offset = i * SEMIBLOCK
                # the counter goes into A before the block is formed
                integrity[SEMIBLOCK - 1] ^= t
                output = aes.decrypt_block(bytes(integrity) + registers[offset:offset + SEMIBLOCK])
                integrity[:] = msb(SEMIBLOCK, output)
                registers[offset:offset + SEMIBLOCK] = lsb(SEMIBLOCK, output)

    if not constant_time_compare(integrity, expected):
        zeroize(registers)
        log.warning("integrity_check_failed", kek_bits=len(kek) * 8, blocks=blocks)
        raise IntegrityCheckFailed("Integrity check failed: wrong KEK or corrupted wrapped key")

    plain_key = bytes(registers)
    zeroize(registers)
    log.debug("key_unwrapped", kek_bits=len(kek) * 8, blocks=blocks)
    return plain_key


class AesKeyWrap:
    """Reusable RFC 3394 wrapper with API parity to :func:`wrap_key`.

    Instances hold no key material; every call builds and releases its own
    AES context, so one instance may be shared between threads.
    """

    def __init__(self, iv: bytes = DEFAULT_IV) -> None:
        self._iv = _validate_iv(iv)

    @property
    def iv(self) -> bytes:
        return self._iv

    def wrap(self, kek: bytes, plain_key: bytes) -> bytes:
        return wrap_key(kek, plain_key, iv=self._iv)

    def unwrap(self, kek: bytes, wrapped_key: bytes) -> bytes:
        return unwrap_key(kek, wrapped_key, iv=self._iv)


def _as_bytes(value: object, argument: str) -> bytes:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise TypeError(f"{argument} must be bytes-like, not {type(value).__name__}")


def _validate(kek: bytes | None, data: bytes | None, *, argument: str, overhead: int) -> tuple[bytes, bytes]:
    """Check the KEK and key data before any AES work.

    ``overhead`` is the number of bytes the data carries on top of the
    plain key: 0 for wrap, 8 for the integrity block of a wrapped key.
    """
    if kek is None:
        raise InvalidKekLength("kek must not be None", argument="kek")
    kek = _as_bytes(kek, "kek")
    if len(kek) * 8 not in ALLOWED_KEK_BITS:
        allowed = ", ".join(str(bits) for bits in ALLOWED_KEK_BITS)
        raise InvalidKekLength(
            f"Length of kek must be one of {allowed} bits, got {len(kek) * 8}",
            argument="kek",
        )

    if data is None:
        raise InvalidDataLength(f"{argument} must not be None", argument=argument)
    data = _as_bytes(data, argument)
    if len(data) % SEMIBLOCK != 0:
        raise InvalidDataLength(
            f"Length of {argument} must be a multiple of 64 bits, got {len(data) * 8}",
            argument=argument,
        )
    if len(data) <= overhead:
        raise InvalidDataLength(
            f"{argument} must hold at least one 64-bit key block",
            argument=argument,
        )
    if len(data) > len(kek) + overhead:
        raise DataTooLarge(
            f"Length of {argument} must be at most {len(kek) + overhead} bytes for a {len(kek) * 8}-bit kek",
            argument=argument,
        )
    return kek, data


def _validate_iv(iv: bytes | None) -> bytes:
    if iv is None:
        raise InvalidDataLength("iv must not be None", argument="iv")
    iv = _as_bytes(iv, "iv")
    if len(iv) != SEMIBLOCK:
        raise InvalidDataLength(f"iv must be exactly 64 bits, got {len(iv) * 8}", argument="iv")
    return iv


def _check_counter_range(blocks: int) -> None:
    # t = n*j + i + 1 is folded into a single byte of A
    if ROUNDS * blocks > MAX_COUNTER:
        raise DataTooLarge(
            f"{blocks} key blocks exceed the one-byte step counter",
            argument="blocks",
        )


__all__ = [
    "ALLOWED_KEK_BITS",
    "AesKeyWrap",
    "DEFAULT_IV",
    "lsb",
    "msb",
    "unwrap_key",
    "wrap_key",
]
