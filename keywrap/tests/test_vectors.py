from __future__ import annotations

import pytest

from keywrap import AesKeyWrap, unwrap_key, wrap_key

KEK_128 = bytes(range(16))
KEK_192 = bytes(range(24))
KEK_256 = bytes(range(32))
DATA_128 = bytes.fromhex("00112233445566778899AABBCCDDEEFF")
DATA_192 = DATA_128 + bytes(range(8))
DATA_256 = DATA_128 + bytes(range(16))

# RFC 3394 section 4
VECTORS = [
    pytest.param(KEK_128, DATA_128, "1FA68B0A8112B447AEF34BD8FB5A7B829D3E862371D2CFE5", id="4.1-128-data-128-kek"),
    pytest.param(KEK_192, DATA_128, "96778B25AE6CA435F92B5B97C050AED2468AB8A17AD84E5D", id="4.2-128-data-192-kek"),
    pytest.param(KEK_256, DATA_128, "64E8C3F9CE0F5BA263E9777905818A2A93C8191E7D6E8AE7", id="4.3-128-data-256-kek"),
    pytest.param(
        KEK_192,
        DATA_192,
        "031D33264E15D33268F24EC260743EDCE1C6C7DDEE725A936BA814915C6762D2",
        id="4.4-192-data-192-kek",
    ),
    pytest.param(
        KEK_256,
        DATA_192,
        "A8F9BC1612C68B3FF6E6F4FBE30E71E4769C8B80A32CB8958CD5D17D6B254DA1",
        id="4.5-192-data-256-kek",
    ),
    pytest.param(
        KEK_256,
        DATA_256,
        "28C9F404C4B810F4CBCCB35CFB87F8263F5786E2D80ED326CBC7F0E71A99F43BFB988B9B7A02DD21",
        id="4.6-256-data-256-kek",
    ),
]


@pytest.mark.parametrize("kek, plain, expected_hex", VECTORS)
def test_wrap_matches_rfc_vector(kek: bytes, plain: bytes, expected_hex: str) -> None:
    assert wrap_key(kek, plain) == bytes.fromhex(expected_hex)


@pytest.mark.parametrize("kek, plain, expected_hex", VECTORS)
def test_unwrap_matches_rfc_vector(kek: bytes, plain: bytes, expected_hex: str) -> None:
    assert unwrap_key(kek, bytes.fromhex(expected_hex)) == plain


def test_wrapper_object_matches_functions() -> None:
    wrapper = AesKeyWrap()
    wrapped = wrapper.wrap(KEK_256, DATA_256)
    assert wrapped == wrap_key(KEK_256, DATA_256)
    assert wrapper.unwrap(KEK_256, wrapped) == DATA_256


def test_accepts_bytearray_and_memoryview() -> None:
    wrapped = wrap_key(bytearray(KEK_128), memoryview(DATA_128))
    assert isinstance(wrapped, bytes)
    assert wrapped == bytes.fromhex("1FA68B0A8112B447AEF34BD8FB5A7B829D3E862371D2CFE5")
    assert unwrap_key(memoryview(KEK_128), bytearray(wrapped)) == DATA_128


def test_single_block_key_round_trips() -> None:
    plain = bytes.fromhex("0011223344556677")
    wrapped = wrap_key(KEK_128, plain)
    assert len(wrapped) == 16
    assert unwrap_key(KEK_128, wrapped) == plain
