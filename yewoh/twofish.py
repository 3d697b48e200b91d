"""The Twofish block cipher (encryption direction only)."""

from __future__ import annotations

import struct

_MASK = 0xFFFFFFFF
_BLOCK = struct.Struct("<4I")
_RHO = 0x01010101

QORD = (
    (1, 1, 0, 0, 1),
    (0, 1, 1, 0, 0),
    (0, 0, 0, 1, 1),
    (1, 0, 1, 1, 0),
)


def _nibbles(text: str) -> tuple[int, ...]:
    return tuple(int(char, 16) for char in text)


QBOX = (
    (
        _nibbles("817D6F320B59ECA4"),
        _nibbles("ECB81235F4A6709D"),
        _nibbles("BA5E6D90C8F32471"),
        _nibbles("D7F4126E9B3085CA"),
    ),
    (
        _nibbles("28BDF76E31940AC5"),
        _nibbles("1E2B4C376DA5F908"),
        _nibbles("4C7516A90ED82B3F"),
        _nibbles("B951C3DE647F208A"),
    ),
)

RS = tuple(
    tuple(bytes.fromhex(row))
    for row in ("01a455875a58db9e", "a45682f31ec668e5", "02a1fcc147ae3d19", "a455875a58db9e03")
)

MDS_POLY = 0x69
RS_POLY = 0x4D


def _gf_mult(a: int, b: int, poly: int) -> int:
    result = 0
    while a:
        if a & 1:
            result ^= b
        a >>= 1
        b = ((b << 1) ^ poly) & 0xFF if b & 0x80 else (b << 1) & 0xFF
    return result


def _q_permutation(index: int, x: int) -> int:
    box = QBOX[index]
    a0, b0 = (x >> 4) & 15, x & 15
    a1 = a0 ^ b0
    b1 = (a0 ^ ((b0 << 3) | (b0 >> 1)) ^ (a0 << 3)) & 15
    a2, b2 = box[0][a1], box[1][b1]
    a3 = a2 ^ b2
    b3 = (a2 ^ ((b2 << 3) | (b2 >> 1)) ^ (a2 << 3)) & 15
    a4, b4 = box[2][a3], box[3][b3]
    return (b4 << 4) + a4


def _mds_column(x: int, column: int) -> int:
    x5b = _gf_mult(x, 0x5B, MDS_POLY)
    xef = _gf_mult(x, 0xEF, MDS_POLY)
    columns = (
        (x, x5b, xef, xef),
        (xef, xef, x5b, x),
        (x5b, xef, x, xef),
        (x5b, x, xef, x5b),
    )
    return int.from_bytes(bytes(columns[column]), "little")


_Q = tuple(tuple(_q_permutation(i, x) for x in range(256)) for i in range(2))
_MDS = tuple(tuple(_mds_column(x, column) for x in range(256)) for column in range(4))


def _mds_mult(y: list[int]) -> int:
    return _MDS[0][y[0]] ^ _MDS[1][y[1]] ^ _MDS[2][y[2]] ^ _MDS[3][y[3]]


def _rs_mult(chunk: bytes) -> list[int]:
    out = []
    for row in RS:
        value = 0
        for byte, factor in zip(chunk, row):
            value ^= _gf_mult(byte, factor, RS_POLY)
        out.append(value)
    return out


def _rol(value: int, bits: int) -> int:
    return ((value << bits) | (value >> (32 - bits))) & _MASK


def _ror(value: int, bits: int) -> int:
    return _rol(value, 32 - bits)


def _h(x: int, m: bytes, k: int, offset: int) -> int:
    q0, q1 = _Q
    y = list(x.to_bytes(4, "little"))

    if k == 4:
        base = 4 * (6 + offset)
        y = [q1[y[0]] ^ m[base], q0[y[1]] ^ m[base + 1],
             q0[y[2]] ^ m[base + 2], q1[y[3]] ^ m[base + 3]]

    if k >= 3:
        base = 4 * (4 + offset)
        y = [q1[y[0]] ^ m[base], q1[y[1]] ^ m[base + 1],
             q0[y[2]] ^ m[base + 2], q0[y[3]] ^ m[base + 3]]

    a = 4 * (2 + offset)
    b = 4 * offset
    y = [
        q1[q0[q0[y[0]] ^ m[a]] ^ m[b]],
        q0[q0[q1[y[1]] ^ m[a + 1]] ^ m[b + 1]],
        q1[q1[q0[y[2]] ^ m[a + 2]] ^ m[b + 2]],
        q0[q1[q1[y[3]] ^ m[a + 3]] ^ m[b + 3]],
    ]
    return _mds_mult(y)


class Twofish:
    """Twofish cipher; call ``key_schedule`` before encrypting."""

    def __init__(self) -> None:
        self._s = [0] * 16
        self._k = [0] * 40
        self._start = 0

    def key_schedule(self, key: bytes) -> None:
        """Derive subkeys and S-box keys from a 128, 192 or 256-bit key."""
        key = bytes(key)
        k = len(key) // 8
        if k not in (2, 3, 4):
            raise ValueError(f"unsupported Twofish key length: {len(key)} bytes")

        subkeys = []
        for x in range(20):
            a = _h(_RHO * (2 * x), key, k, 0)
            b = _rol(_h(_RHO * (2 * x + 1), key, k, 1), 8)
            v = (a + b) & _MASK
            subkeys.append(v)
            subkeys.append(_rol((v + b) & _MASK, 9))

        s = [0] * 16
        for i in range(k):
            s[i * 4:(i + 1) * 4] = _rs_mult(key[i * 8:i * 8 + 8])

        self._k = subkeys
        self._s = s
        self._start = 4 - k

    def _g(self, x: int) -> int:
        start = self._start
        s = self._s
        result = 0
        for y, row in enumerate(QORD):
            g = _Q[row[start]][(x >> (8 * y)) & 0xFF]
            for z in range(start + 1, 5):
                g ^= s[4 * (z - start - 1) + y]
                g = _Q[row[z]][g]
            result ^= _MDS[y][g]
        return result

    def encrypt(self, block: bytes) -> bytes:
        """Encrypt one 16-byte block."""
        block = bytes(block)
        if len(block) != 16:
            raise ValueError(f"Twofish blocks are 16 bytes, got {len(block)}")

        key = self._k
        p0, p1, p2, p3 = (word ^ key[i] for i, word in enumerate(_BLOCK.unpack(block)))

        for r in range(8):
            k = 4 * r + 8

            t1 = self._g(_rol(p1, 8))
            t0 = (self._g(p0) + t1) & _MASK
            p2 = _ror(p2 ^ ((t0 + key[k]) & _MASK), 1)
            t2 = (t1 + t0 + key[k + 1]) & _MASK
            p3 = _rol(p3, 1) ^ t2

            t1 = self._g(_rol(p3, 8))
            t0 = (self._g(p2) + t1) & _MASK
            p0 = _ror(p0 ^ ((t0 + key[k + 2]) & _MASK), 1)
            t2 = (t1 + t0 + key[k + 3]) & _MASK
            p1 = _rol(p1, 1) ^ t2

        return _BLOCK.pack(p2 ^ key[4], p3 ^ key[5], p0 ^ key[6], p1 ^ key[7])