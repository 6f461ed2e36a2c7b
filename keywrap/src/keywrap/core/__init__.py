"""Exception exports."""
from .exceptions import (
    CryptoError,
    DataTooLarge,
    InputError,
    IntegrityCheckFailed,
    InvalidDataLength,
    InvalidKekLength,
    KeyWrapError,
)

__all__ = [
    "CryptoError",
    "DataTooLarge",
    "InputError",
    "IntegrityCheckFailed",
    "InvalidDataLength",
    "InvalidKekLength",
    "KeyWrapError",
]
