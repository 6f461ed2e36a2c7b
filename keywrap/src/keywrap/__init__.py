"""AES Key Wrap (RFC 3394) for wrapping keys under a key encryption key."""
from .core.exceptions import (
    CryptoError,
    DataTooLarge,
    InputError,
    IntegrityCheckFailed,
    InvalidDataLength,
    InvalidKekLength,
    KeyWrapError,
)
from .crypto.rfc3394 import ALLOWED_KEK_BITS, DEFAULT_IV, AesKeyWrap, lsb, msb, unwrap_key, wrap_key
from .version import __version__

__all__ = [
    "ALLOWED_KEK_BITS",
    "AesKeyWrap",
    "CryptoError",
    "DEFAULT_IV",
    "DataTooLarge",
    "InputError",
    "IntegrityCheckFailed",
    "InvalidDataLength",
    "InvalidKekLength",
    "KeyWrapError",
    "__version__",
    "lsb",
    "msb",
    "unwrap_key",
    "wrap_key",
]
