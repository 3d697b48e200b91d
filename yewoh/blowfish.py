"""The Blowfish block cipher, operating on pairs of 32-bit words."""

from __future__ import annotations

from collections.abc import Iterator

_MASK = 0xFFFFFFFF

_P_WORDS = 18
_S_BOXES = 4
_S_BOX_WORDS = 256

Block = tuple[int, int]


def _pi_fraction_words(count: int) -> list[int]:
    """The first ``count`` 32-bit words of the hexadecimal fraction of pi.

    Blowfish takes its initial subkeys and S-boxes from these digits.
    """
    bits = count * 32
    guard = 64
    one = 1 << (bits + guard)

    def arctan_inverse(x: int) -> int:
        term = one // x
        total = term
        x_squared = x * x
        divisor = 1
        negative = True
        while term:
            term //= x_squared
            divisor += 2
            part = term // divisor
            total = total - part if negative else total + part
            negative = not negative
        return total

    pi_scaled = 16 * arctan_inverse(5) - 4 * arctan_inverse(239)
    fraction = (pi_scaled >> guard) & ((1 << bits) - 1)
    return [
        (fraction >> (bits - 32 * (index + 1))) & _MASK
        for index in range(count)
    ]


def _initial_tables() -> tuple[tuple[int, ...], tuple[tuple[int, ...], ...]]:
    words = _pi_fraction_words(_P_WORDS + _S_BOXES * _S_BOX_WORDS)
    p = tuple(words[:_P_WORDS])
    rest = words[_P_WORDS:]
    s = tuple(
        tuple(rest[box * _S_BOX_WORDS:(box + 1) * _S_BOX_WORDS])
        for box in range(_S_BOXES)
    )
    return p, s


P, S = _initial_tables()


def _key_words(key: bytes) -> Iterator[int]:
    """Big-endian 32-bit words taken from the key, cycling through it forever."""
    position = 0
    while True:
        word = 0
        for _ in range(4):
            if position >= len(key):
                position = 0
            word = (word << 8) | key[position]
            position += 1
        yield word


def _check_block(block: Block) -> tuple[int, int]:
    left, right = block
    if not (0 <= left <= _MASK and 0 <= right <= _MASK):
        raise ValueError(f"block halves must be 32-bit unsigned values: {block!r}")
    return left, right


class Blowfish:
    """Blowfish cipher state; starts from the standard tables until a key is expanded."""

    def __init__(self) -> None:
        self._p = list(P)
        self._s = [list(box) for box in S]

    def copy(self) -> "Blowfish":
        clone = Blowfish.__new__(Blowfish)
        clone._p = list(self._p)
        clone._s = [list(box) for box in self._s]
        return clone

    def expand_key(self, key: bytes) -> None:
        """Mix ``key`` into the current subkeys and S-boxes."""
        key = bytes(key)
        if not key:
            raise ValueError("Blowfish key must not be empty")

        words = _key_words(key)
        self._p = [value ^ next(words) for value in self._p]

        block: Block = (0, 0)
        for i in range(9):
            block = self.encrypt(block)
            self._p[2 * i], self._p[2 * i + 1] = block
        for box in self._s:
            for j in range(128):
                block = self.encrypt(block)
                box[2 * j], box[2 * j + 1] = block

    def _round(self, x: int) -> int:
        s0, s1, s2, s3 = self._s
        a = s0[x >> 24]
        b = s1[(x >> 16) & 0xFF]
        c = s2[(x >> 8) & 0xFF]
        d = s3[x & 0xFF]
        return ((((a + b) & _MASK) ^ c) + d) & _MASK

    def encrypt(self, block: Block) -> Block:
        """Encrypt one (left, right) pair of 32-bit words."""
        left, right = _check_block(block)
        p = self._p
        for i in range(8):
            left ^= p[2 * i]
            right ^= self._round(left)
            right ^= p[2 * i + 1]
            left ^= self._round(right)
        left ^= p[16]
        right ^= p[17]
        return right, left

    def decrypt(self, block: Block) -> Block:
        """Decrypt one (left, right) pair of 32-bit words."""
        left, right = _check_block(block)
        p = self._p
        for i in range(8, 0, -1):
            left ^= p[2 * i + 1]
            right ^= self._round(left)
            right ^= p[2 * i]
            left ^= self._round(right)
        left ^= p[1]
        right ^= p[0]
        return right, left