"""Utility exports."""
from .checks import constant_time_compare, zeroize
from .codec import b64d, b64e, decode, encode, hexd

__all__ = [
    "b64d",
    "b64e",
    "constant_time_compare",
    "decode",
    "encode",
    "hexd",
    "zeroize",
]
