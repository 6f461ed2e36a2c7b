
from __future__ import annotations

from typing import Final

from cryptography.hazmat.primitives.ciphers import Cipher, CipherContext, algorithms, modes

from keywrap.core.exceptions import CryptoError

BLOCK_SIZE: Final[int] = 16


class AesBlockCipher:
    """Single-block AES-ECB keyed permutation, scoped to one wrap/unwrap call.

    Every call to :meth:`encrypt_block` or :meth:`decrypt_block` transforms
    exactly one 128-bit block with no padding and no chaining between
    blocks. Use it as a context manager so the underlying cipher contexts
    are finalized and dropped on every exit path::

        with AesBlockCipher(kek) as aes:
            out = aes.encrypt_block(block)
    """

    def __init__(self, key: bytes) -> None:
        self._cipher: Cipher | None = Cipher(algorithms.AES(key), modes.ECB())
        self._encryptor: CipherContext | None = None
        self._decryptor: CipherContext | None = None

    def __enter__(self) -> "AesBlockCipher":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._cipher is None

    def encrypt_block(self, block: bytes) -> bytes:
        if self._encryptor is None:
            self._encryptor = self._require_cipher().encryptor()
        return self._transform(self._encryptor, block)

    def decrypt_block(self, block: bytes) -> bytes:
        if self._decryptor is None:
            self._decryptor = self._require_cipher().decryptor()
        return self._transform(self._decryptor, block)

    def close(self) -> None:
        contexts = (self._encryptor, self._decryptor)
        self._encryptor = None
        self._decryptor = None
        self._cipher = None
        for context in contexts:
            if context is not None:
                # only whole blocks are ever fed in, so nothing is buffered
                context.finalize()

    def _require_cipher(self) -> Cipher:
        if self._cipher is None:
            raise CryptoError("AES block cipher has already been closed")
        return self._cipher

    @staticmethod
    def _transform(context: CipherContext, block: bytes) -> bytes:
        if len(block) != BLOCK_SIZE:
            raise CryptoError(f"AES block must be exactly {BLOCK_SIZE} bytes, got {len(block)}")
        out = context.update(bytes(block))
        if len(out) != BLOCK_SIZE:
            raise CryptoError("AES primitive did not return a full block")
        return out
