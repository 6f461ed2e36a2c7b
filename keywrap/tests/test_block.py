from __future__ import annotations

import pytest

from keywrap import IntegrityCheckFailed, unwrap_key, wrap_key
from keywrap.core.exceptions import CryptoError
from keywrap.crypto import rfc3394
from keywrap.crypto.block import AesBlockCipher

# FIPS-197 appendix C.1
FIPS_KEY = bytes(range(16))
FIPS_PLAIN = bytes.fromhex("00112233445566778899aabbccddeeff")
FIPS_CIPHER = bytes.fromhex("69c4e0d86a7b0430d8cdb78070b4c55a")


def test_encrypts_and_decrypts_single_block() -> None:
    with AesBlockCipher(FIPS_KEY) as aes:
        assert aes.encrypt_block(FIPS_PLAIN) == FIPS_CIPHER
        assert aes.decrypt_block(FIPS_CIPHER) == FIPS_PLAIN


def test_blocks_are_independent() -> None:
    with AesBlockCipher(FIPS_KEY) as aes:
        first = aes.encrypt_block(FIPS_PLAIN)
        second = aes.encrypt_block(FIPS_PLAIN)
    assert first == second == FIPS_CIPHER


@pytest.mark.parametrize("size", [0, 8, 15, 17, 32])
def test_rejects_partial_or_multi_block_input(size: int) -> None:
    with AesBlockCipher(FIPS_KEY) as aes:
        with pytest.raises(CryptoError):
            aes.encrypt_block(bytes(size))


def test_closed_cipher_refuses_work() -> None:
    aes = AesBlockCipher(FIPS_KEY)
    with aes:
        aes.encrypt_block(FIPS_PLAIN)
    assert aes.closed
    with pytest.raises(CryptoError):
        aes.encrypt_block(FIPS_PLAIN)
    with pytest.raises(CryptoError):
        aes.decrypt_block(FIPS_CIPHER)


def test_close_is_idempotent() -> None:
    aes = AesBlockCipher(FIPS_KEY)
    aes.close()
    aes.close()
    assert aes.closed


class _TrackingCipher(AesBlockCipher):
    instances: list["_TrackingCipher"] = []

    def __init__(self, key: bytes) -> None:
        super().__init__(key)
        _TrackingCipher.instances.append(self)


@pytest.fixture
def tracking(monkeypatch: pytest.MonkeyPatch) -> list[_TrackingCipher]:
    _TrackingCipher.instances = []
    monkeypatch.setattr(rfc3394, "AesBlockCipher", _TrackingCipher)
    return _TrackingCipher.instances


def test_each_call_gets_its_own_released_cipher(tracking: list[_TrackingCipher]) -> None:
    wrapped = wrap_key(FIPS_KEY, FIPS_PLAIN)
    unwrap_key(FIPS_KEY, wrapped)
    assert len(tracking) == 2
    assert tracking[0] is not tracking[1]
    assert all(cipher.closed for cipher in tracking)


def test_cipher_is_released_on_integrity_failure(tracking: list[_TrackingCipher]) -> None:
    wrapped = wrap_key(FIPS_KEY, FIPS_PLAIN)
    with pytest.raises(IntegrityCheckFailed):
        unwrap_key(bytes(16), wrapped)
    assert len(tracking) == 2
    assert tracking[-1].closed


def test_no_cipher_is_built_for_invalid_input(tracking: list[_TrackingCipher]) -> None:
    with pytest.raises(ValueError):
        wrap_key(bytes(15), FIPS_PLAIN)
    assert tracking == []


def test_registers_are_zeroed_before_integrity_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    zeroed: list[bytearray] = []
    real_zeroize = rfc3394.zeroize

    def recording_zeroize(buffer: bytearray) -> None:
        real_zeroize(buffer)
        zeroed.append(buffer)

    monkeypatch.setattr(rfc3394, "zeroize", recording_zeroize)
    wrapped = wrap_key(FIPS_KEY, FIPS_PLAIN)
    zeroed.clear()

    with pytest.raises(IntegrityCheckFailed):
        unwrap_key(bytes(16), wrapped)

    assert len(zeroed) == 1
    assert len(zeroed[0]) == len(FIPS_PLAIN)
    assert zeroed[0] == bytearray(len(FIPS_PLAIN))
