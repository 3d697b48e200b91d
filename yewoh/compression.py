"""Huffman compression used on the server-to-client stream."""

from __future__ import annotations

# Bit count of the code for each byte value; the last entry is the end-of-packet code.
_CODE_LENGTHS = (
    2, 5, 6, 7, 7, 6, 6, 7, 8, 8, 7, 8, 9, 8, 6, 7,
    8, 8, 9, 8, 7, 7, 8, 8, 9, 9, 7, 9, 8, 8, 8, 8,
    6, 9, 8, 9, 10, 8, 10, 10, 9, 9, 9, 10, 9, 9, 9, 10,
    9, 9, 9, 6, 9, 9, 9, 9, 9, 9, 9, 9, 9, 9, 9, 9,
    5, 8, 8, 9, 9, 9, 9, 9, 9, 9, 9, 9, 9, 9, 9, 9,
    9, 9, 9, 9, 8, 9, 9, 9, 9, 9, 9, 9, 10, 10, 9, 10,
    10, 7, 9, 8, 8, 7, 9, 9, 8, 7, 9, 9, 8, 8, 7, 7,
    8, 9, 7, 8, 7, 7, 9, 6, 8, 9, 9, 9, 10, 10, 10, 9,
    9, 9, 9, 7, 8, 9, 9, 10, 10, 10, 10, 10, 10, 10, 10, 10,
    7, 8, 10, 10, 10, 9, 10, 10, 10, 10, 10, 10, 10, 10, 10, 10,
    9, 10, 10, 9, 10, 10, 11, 11, 11, 10, 10, 10, 10, 10, 11, 10,
    10, 10, 9, 11, 11, 10, 11, 11, 10, 10, 11, 10, 11, 11, 10, 10,
    9, 10, 11, 10, 11, 10, 11, 10, 10, 10, 10, 10, 10, 10, 10, 10,
    10, 10, 10, 10, 10, 11, 10, 10, 10, 10, 10, 10, 10, 10, 11, 11,
    11, 10, 11, 10, 11, 11, 10, 11, 10, 11, 8, 10, 10, 10, 10, 10,
    10, 10, 10, 10, 10, 11, 10, 11, 9, 10, 10, 10, 11, 10, 10, 7,
    4,
)

# Code value for each byte value, read most significant bit first.
_CODE_BITS = (
    0x000, 0x01f, 0x022, 0x034, 0x075, 0x028, 0x03b, 0x032,
    0x0e0, 0x062, 0x056, 0x079, 0x19d, 0x097, 0x02a, 0x057,
    0x071, 0x05b, 0x1cc, 0x0a7, 0x025, 0x04f, 0x066, 0x07d,
    0x191, 0x1ce, 0x03f, 0x090, 0x059, 0x07b, 0x091, 0x0c6,
    0x02d, 0x186, 0x06f, 0x093, 0x1cc, 0x05a, 0x1ae, 0x1c0,
    0x148, 0x14a, 0x082, 0x19f, 0x171, 0x120, 0x0e7, 0x1f3,
    0x14b, 0x100, 0x190, 0x013, 0x161, 0x125, 0x133, 0x195,
    0x173, 0x1ca, 0x086, 0x1e9, 0x0db, 0x1ec, 0x08b, 0x085,
    0x00a, 0x096, 0x09c, 0x1c3, 0x19c, 0x08f, 0x18f, 0x091,
    0x087, 0x0c6, 0x177, 0x089, 0x0d6, 0x08c, 0x1ee, 0x1eb,
    0x084, 0x164, 0x175, 0x1cd, 0x05e, 0x088, 0x12b, 0x172,
    0x10a, 0x08d, 0x13a, 0x11c, 0x1e1, 0x1e0, 0x187, 0x1dc,
    0x1df, 0x074, 0x19f, 0x08d, 0x0e4, 0x079, 0x0ea, 0x0e1,
    0x040, 0x041, 0x10b, 0x0b0, 0x06a, 0x0c1, 0x071, 0x078,
    0x0b1, 0x14c, 0x043, 0x076, 0x066, 0x04d, 0x08a, 0x02f,
    0x0c9, 0x0ce, 0x149, 0x160, 0x1ba, 0x19e, 0x39f, 0x0e5,
    0x194, 0x184, 0x126, 0x030, 0x06c, 0x121, 0x1e8, 0x1c1,
    0x11d, 0x163, 0x385, 0x3db, 0x17d, 0x106, 0x397, 0x24e,
    0x02e, 0x098, 0x33c, 0x32e, 0x1e9, 0x0bf, 0x3df, 0x1dd,
    0x32d, 0x2ed, 0x30b, 0x107, 0x2e8, 0x3de, 0x125, 0x1e8,
    0x0e9, 0x1cd, 0x1b5, 0x165, 0x232, 0x2e1, 0x3ae, 0x3c6,
    0x3e2, 0x205, 0x29a, 0x248, 0x2cd, 0x23b, 0x3c5, 0x251,
    0x2e9, 0x252, 0x1ea, 0x3a0, 0x391, 0x23c, 0x392, 0x3d5,
    0x233, 0x2cc, 0x390, 0x1bb, 0x3a1, 0x3c4, 0x211, 0x203,
    0x12a, 0x231, 0x3e0, 0x29b, 0x3d7, 0x202, 0x3ad, 0x213,
    0x253, 0x32c, 0x23d, 0x23f, 0x32f, 0x11c, 0x384, 0x31c,
    0x17c, 0x30a, 0x2e0, 0x276, 0x250, 0x3e3, 0x396, 0x18f,
    0x204, 0x206, 0x230, 0x265, 0x212, 0x23e, 0x3ac, 0x393,
    0x3e1, 0x1de, 0x3d6, 0x31d, 0x3e5, 0x3e4, 0x207, 0x3c7,
    0x277, 0x3d4, 0x0c0, 0x162, 0x3da, 0x124, 0x1b4, 0x264,
    0x33d, 0x1d1, 0x1af, 0x39e, 0x24f, 0x373, 0x249, 0x372,
    0x167, 0x210, 0x23a, 0x1b8, 0x3af, 0x18e, 0x2ec, 0x062,
    0x00d,
)

_CODES = tuple(zip(_CODE_LENGTHS, _CODE_BITS))
_TERMINATOR_SYMBOL = 256
_TERMINATOR = _CODES[_TERMINATOR_SYMBOL]

_U32_MASK = 0xFFFFFFFF


def _build_tree() -> tuple[tuple[int, int], ...]:
    """Build the decoding tree from the code table.

    Each node holds two children; a non-negative child is the index of
    another node, a negative child ``c`` is the leaf for symbol ``-c - 1``.
    """
    nodes: list[list[int | None]] = [[None, None]]
    for symbol, (count, code) in enumerate(_CODES):
        node = 0
        for shift in range(count - 1, 0, -1):
            bit = (code >> shift) & 1
            child = nodes[node][bit]
            if child is None:
                nodes.append([None, None])
                child = len(nodes) - 1
                nodes[node][bit] = child
            elif child < 0:
                raise ValueError("Huffman code table is not prefix-free")
            node = child
        bit = code & 1
        if nodes[node][bit] is not None:
            raise ValueError("Huffman code table is not prefix-free")
        nodes[node][bit] = -symbol - 1

    if any(child is None for node in nodes for child in node):
        raise ValueError("Huffman code table is incomplete")
    return tuple((node[0], node[1]) for node in nodes)  # type: ignore[misc]


_TREE = _build_tree()


class _BitWriter:
    """Packs variable-length codes, most significant bit first."""

    def __init__(self, output: bytearray) -> None:
        self.output = output
        self._buffer = 0
        self._length = 0

    def _drain(self) -> None:
        while self._length >= 8:
            self._length -= 8
            self.output.append((self._buffer >> self._length) & 0xFF)

    def write_bits(self, count: int, value: int) -> None:
        self._length += count
        self._buffer = ((self._buffer << count) | value) & _U32_MASK
        self._drain()

    def flush(self) -> None:
        if self._length & 7:
            align = 8 - (self._length & 7)
            self._length += align
            self._buffer = (self._buffer << align) & _U32_MASK
        self._drain()


def huffman_compress(data: bytes) -> bytes:
    """Compress one packet, terminated and padded to a byte boundary."""
    writer = HuffmanWriter()
    writer.write(data)
    writer.finish()
    return bytes(writer.output)


class HuffmanWriter:
    """Incremental compressor that appends to ``output``."""

    def __init__(self, output: bytearray | None = None) -> None:
        self.output = output if output is not None else bytearray()
        self._bits = _BitWriter(self.output)

    def write(self, data: bytes) -> int:
        for byte in data:
            self._bits.write_bits(*_CODES[byte])
        return len(data)

    def finish(self) -> None:
        """Write the end-of-packet code and pad to a whole byte."""
        self._bits.write_bits(*_TERMINATOR)
        self._bits.flush()


class BitReader:
    """Reads bits from a byte string, most significant bit first."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._position = 0
        self._bit = 0

    @property
    def consumed(self) -> int:
        """Number of whole bytes read past."""
        return self._position

    def pop(self) -> bool | None:
        if self._position >= len(self._data):
            return None
        value = bool(self._data[self._position] & (0x80 >> self._bit))
        if self._bit >= 7:
            self._bit = 0
            self._position += 1
        else:
            self._bit += 1
        return value

    def flush_byte(self) -> None:
        """Skip the rest of a partially read byte."""
        if self._bit:
            self._position += 1
            self._bit = 0


class HuffmanDecoder:
    """Decodes a compressed stream that may arrive in pieces."""

    def __init__(self) -> None:
        self._storage = bytearray()
        self._node = 0

    def write(self, data: bytes) -> tuple[int, bytes] | None:
        """Feed bytes; on a complete packet return (bytes consumed, packet)."""
        reader = BitReader(data)
        while (bit := reader.pop()) is not None:
            child = _TREE[self._node][bit]
            if child >= 0:
                self._node = child
                continue

            symbol = -child - 1
            if symbol == _TERMINATOR_SYMBOL:
                reader.flush_byte()
                packet = bytes(self._storage)
                self._storage.clear()
                return reader.consumed, packet

            self._storage.append(symbol)
            self._node = 0
        return None