"""AES key wrap primitives."""
from .block import AesBlockCipher
from .rfc3394 import ALLOWED_KEK_BITS, DEFAULT_IV, AesKeyWrap, lsb, msb, unwrap_key, wrap_key

__all__ = [
    "ALLOWED_KEK_BITS",
    "AesBlockCipher",
    "AesKeyWrap",
    "DEFAULT_IV",
    "lsb",
    "msb",
    "unwrap_key",
    "wrap_key",
]
