
from __future__ import annotations

"""Central exception hierarchy"""
class KeyWrapError(Exception):
    """Base exception for all failures"""


class InputError(KeyWrapError, ValueError):
    """Raised when a caller passes malformed input, before any AES work"""

    def __init__(self, message: str, *, argument: str) -> None:
        super().__init__(message)
        self.argument = argument


class InvalidKekLength(InputError):
    """Raised when the KEK is absent or not 128, 192 or 256 bits"""


class InvalidDataLength(InputError):
    """Raised when key data is absent, empty or not a multiple of 64 bits"""


class DataTooLarge(InputError):
    """Raised when key data exceeds what the KEK size allows"""


class CryptoError(KeyWrapError):
    """Raised for cryptographic integrity failures"""


class IntegrityCheckFailed(CryptoError):
    """Raised when an unwrapped key does not carry the expected initial value"""
