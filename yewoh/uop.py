"""Reader for UOP container files, which store named entries addressed by hash."""

from __future__ import annotations

import io
import struct
import zlib
from collections.abc import Iterator
from dataclasses import dataclass

FILE_MAGIC = b"MYP\0"
MAX_VERSION = 5

_MASK = 0xFFFFFFFF
_U32 = struct.Struct("<I")
_HEADER = struct.Struct("<IQII")
_TABLE = struct.Struct("<IQ")
_ENTRY = struct.Struct("<QIIIQIH")


class UopFormatError(ValueError):
    """Raised when UOP data is malformed or unsupported."""


def _rot(value: int, bits: int) -> int:
    return ((value << bits) | (value >> (32 - bits))) & _MASK


def _partial_u32(chunk: bytes) -> int:
    return int.from_bytes(chunk[:4], "little")


def uop_hash(data: bytes) -> int:
    """The 64-bit hash under which UOP entries are stored."""
    src = bytes(data)
    a = b = c = (len(src) + 0xDEADBEEF) & _MASK

    while len(src) > 12:
        a = (a + _U32.unpack_from(src, 0)[0]) & _MASK
        b = (b + _U32.unpack_from(src, 4)[0]) & _MASK
        c = (c + _U32.unpack_from(src, 8)[0]) & _MASK

        a = ((a - c) & _MASK) ^ _rot(c, 4)
        c = (c + b) & _MASK
        b = ((b - a) & _MASK) ^ _rot(a, 6)
        a = (a + c) & _MASK
        c = ((c - b) & _MASK) ^ _rot(b, 8)
        b = (b + a) & _MASK
        a = ((a - c) & _MASK) ^ _rot(c, 16)
        c = (c + b) & _MASK
        b = ((b - a) & _MASK) ^ _rot(a, 19)
        a = (a + c) & _MASK
        c = ((c - b) & _MASK) ^ _rot(b, 4)
        b = (b + a) & _MASK

        src = src[12:]

    if src:
        a = (a + _partial_u32(src[0:4])) & _MASK
        b = (b + _partial_u32(src[4:8])) & _MASK
        c = (c + _partial_u32(src[8:12])) & _MASK

        c = ((c ^ b) - _rot(b, 14)) & _MASK
        a = ((a ^ c) - _rot(c, 11)) & _MASK
        b = ((b ^ a) - _rot(a, 25)) & _MASK
        c = ((c ^ b) - _rot(b, 16)) & _MASK
        a = ((a ^ c) - _rot(c, 4)) & _MASK
        b = ((b ^ a) - _rot(a, 14)) & _MASK
        c = ((c ^ b) - _rot(b, 24)) & _MASK

    return (b << 32) | c


def _read(layout: struct.Struct, data: bytes, offset: int) -> tuple:
    if offset < 0 or offset + layout.size > len(data):
        raise UopFormatError(f"UOP data truncated at offset {offset}")
    return layout.unpack_from(data, offset)


@dataclass(frozen=True)
class _EntryInfo:
    offset: int
    header_length: int
    compressed_length: int
    decompressed_length: int
    is_compressed: bool


class UopEntry:
    """One stored entry: its header bytes and a readable payload."""

    def __init__(self, header: bytes, payload: bytes, length: int, compressed: bool) -> None:
        self.header = header
        self._payload = payload
        self._length = length
        self._compressed = compressed
        self._stream: io.BytesIO | None = None

    def __len__(self) -> int:
        return self._length

    def read(self, size: int = -1) -> bytes:
        """Read up to ``size`` bytes of the payload, or all that remains."""
        if self._stream is None:
            content = self._payload
            if self._compressed:
                try:
                    content = zlib.decompress(content)
                except zlib.error as exc:
                    raise UopFormatError(f"corrupt compressed entry: {exc}") from exc
            self._stream = io.BytesIO(content)
        return self._stream.read(size)


class UopBuffer:
    """An in-memory UOP file with its entry table parsed."""

    def __init__(self, data: bytes) -> None:
        data = bytes(data)
        if not data.startswith(FILE_MAGIC):
            raise UopFormatError("Invalid UOP file header")

        (version,) = _read(_U32, data, len(FILE_MAGIC))
        if version > MAX_VERSION:
            raise UopFormatError(f"Unsupported UOP version {version}")
        timestamp, next_block, block_size, count = _read(
            _HEADER, data, len(FILE_MAGIC) + _U32.size
        )

        entries: dict[int, _EntryInfo] = {}
        visited: set[int] = set()
        while next_block:
            if next_block in visited:
                raise UopFormatError(f"UOP block table loops at offset {next_block}")
            visited.add(next_block)

            file_count, following = _read(_TABLE, data, next_block)
            position = next_block + _TABLE.size
            for _ in range(file_count):
                offset, header_len, stored_len, length, key_hash, _crc, compressed = _read(
                    _ENTRY, data, position
                )
                position += _ENTRY.size
                entries[key_hash] = _EntryInfo(offset, header_len, stored_len, length, compressed == 1)
            next_block = following

        self.data = data
        self.version = version
        self.format_timestamp = timestamp
        self.block_size = block_size
        self.count = count
        self._entries = entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"UopBuffer(version={self.version}, entries={len(self._entries)})"

    def hashes(self) -> Iterator[int]:
        return iter(self._entries)

    def get(self, key: str) -> UopEntry | None:
        return self.get_by_hash(uop_hash(key.encode()))

    def get_by_hash(self, key_hash: int) -> UopEntry | None:
        info = self._entries.get(key_hash)
        if info is None:
            return None

        payload_start = info.offset + info.header_length
        payload_end = payload_start + info.compressed_length
        if payload_end > len(self.data):
            raise UopFormatError(f"entry {key_hash:#x} extends past the end of the file")

        return UopEntry(
            header=self.data[info.offset:payload_start],
            payload=self.data[payload_start:payload_end],
            length=info.decompressed_length,
            compressed=info.is_compressed,
        )