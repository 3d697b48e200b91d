import pytest

from yewoh.twofish import Twofish


def _cipher(key: bytes) -> Twofish:
    cipher = Twofish()
    cipher.key_schedule(key)
    return cipher


@pytest.mark.parametrize("length", [0, 8, 15, 40])
def test_bad_key_length_rejected(length):
    with pytest.raises(ValueError):
        Twofish().key_schedule(bytes(length))


@pytest.mark.parametrize("length", [0, 15, 17, 32])
def test_bad_block_length_rejected(length):
    cipher = _cipher(bytes(16))
    with pytest.raises(ValueError):
        cipher.encrypt(bytes(length))


def test_encryption_is_deterministic_and_keyed():
    block = bytes(range(16))
    first = _cipher(b"\x01" * 16).encrypt(block)
    again = _cipher(b"\x01" * 16).encrypt(block)
    other = _cipher(b"\x02" * 16).encrypt(block)
    assert first == again
    assert len(first) == 16
    assert first != other


def test_distinct_plaintexts_give_distinct_ciphertexts():
    cipher = _cipher(bytes(range(24)))
    outputs = {cipher.encrypt(bytes([i]) + bytes(15)) for i in range(64)}
    assert len(outputs) == 64


def test_rescheduling_replaces_key():
    cipher = _cipher(b"\x05" * 32)
    cipher.key_schedule(bytes(16))
    assert cipher.encrypt(bytes(16)) == _cipher(bytes(16)).encrypt(bytes(16))