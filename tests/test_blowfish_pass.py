from yewoh.blowfish_pass import SUPER_BLOCK_SIZE, BlowfishPass


def test_deterministic_and_length_preserving():
    data = b"login packet bytes" * 4
    first = BlowfishPass().crypt(data)
    second = BlowfishPass().crypt(data)
    assert first == second
    assert len(first) == len(data)
    assert first != data


def test_chunked_matches_whole():
    data = bytes(i % 256 for i in range(100))
    whole = BlowfishPass().crypt(data)
    chunked = BlowfishPass()
    pieces = [chunked.crypt(data[a:b]) for a, b in ((0, 3), (3, 8), (8, 9), (9, 100))]
    assert b"".join(pieces) == whole


def test_change_affects_only_later_bytes():
    base = bytearray(64)
    changed = bytearray(64)
    changed[10] = 0x55
    a = BlowfishPass().crypt(bytes(base))
    b = BlowfishPass().crypt(bytes(changed))
    assert a[:10] == b[:10]
    assert a[10] ^ b[10] == 0x55
    assert a[16:] != b[16:]


def test_first_byte_is_keystream_xor():
    zero = BlowfishPass().crypt(b"\x00")
    ones = BlowfishPass().crypt(b"\xff")
    assert zero[0] ^ ones[0] == 0xFF


def test_instances_are_independent():
    used = BlowfishPass()
    used.crypt(bytes(40))
    assert BlowfishPass().crypt(bytes(8)) == BlowfishPass().crypt(bytes(8))
    assert used.crypt(bytes(8)) != BlowfishPass().crypt(bytes(8))


def test_across_super_block_boundary():
    data = bytes(i % 253 for i in range(SUPER_BLOCK_SIZE * 2 + 50))
    whole = BlowfishPass().crypt(data)
    chunked = BlowfishPass()
    split = SUPER_BLOCK_SIZE - 3
    out = chunked.crypt(data[:split]) + chunked.crypt(data[split:])
    assert out == whole
    assert len(whole) == len(data)