"""Map terrain chunks and static objects."""

from __future__ import annotations

import os
import struct
from collections.abc import Iterator
from dataclasses import dataclass, field

from yewoh.mul import MulReader

CHUNK_SIZE = 8
CHUNK_AREA = CHUNK_SIZE * CHUNK_SIZE

_NO_BLOCK = 0xFFFFFFFF
_MAP_BLOCK = struct.Struct("<I" + "Hb" * CHUNK_AREA)
_STATIC_INDEX = struct.Struct("<III")
_STATIC = struct.Struct("<HbbbH")


def _zeros() -> list[int]:
    return [0] * CHUNK_AREA


@dataclass
class MapChunk:
    """An 8x8 block of terrain tiles, stored row by row."""

    tile_ids: list[int] = field(default_factory=_zeros)
    heights: list[int] = field(default_factory=_zeros)

    def get(self, x: int, y: int) -> tuple[int, int]:
        """Return (tile id, height) at a position inside the chunk."""
        index = x + CHUNK_SIZE * y
        return self.tile_ids[index], self.heights[index]


@dataclass
class Static:
    position: tuple[int, int, int]
    graphic_id: int
    hue: int


def _blocks(length: int) -> int:
    return (length + CHUNK_SIZE - 1) // CHUNK_SIZE


def _unpack(reader: MulReader, layout: struct.Struct) -> tuple:
    raw = reader.read(layout.size)
    if len(raw) != layout.size:
        raise EOFError("map data ended early")
    return layout.unpack(raw)


def load_map(data_path: str | os.PathLike, index: int, width: int,
             height: int) -> Iterator[tuple[int, int, MapChunk]]:
    """Yield (block x, block y, chunk) for every block of ``map<index>``."""
    reader = MulReader.open(data_path, f"map{index}")

    def chunks() -> Iterator[tuple[int, int, MapChunk]]:
        for block_x in range(_blocks(width)):
            for block_y in range(_blocks(height)):
                values = _unpack(reader, _MAP_BLOCK)
                yield block_x, block_y, MapChunk(list(values[1::2]), list(values[2::2]))

    return chunks()


def load_statics(data_path: str | os.PathLike, index: int, width: int,
                 height: int) -> Iterator[Static]:
    """Yield every static object of ``statics<index>``, in index order."""
    index_reader = MulReader.open(data_path, f"staidx{index}")
    data = MulReader.open(data_path, f"statics{index}").read()

    def statics() -> Iterator[Static]:
        for block_x in range(_blocks(width)):
            for block_y in range(_blocks(height)):
                offset, length, _extra = _unpack(index_reader, _STATIC_INDEX)
                if offset == _NO_BLOCK or length == _NO_BLOCK:
                    continue
                if offset + length > len(data):
                    raise ValueError(f"static block ({block_x}, {block_y}) lies outside the data")
                if length % _STATIC.size:
                    raise EOFError(f"static block ({block_x}, {block_y}) ends mid-record")

                x_base = block_x * CHUNK_SIZE
                y_base = block_y * CHUNK_SIZE
                for graphic_id, x_off, y_off, z, hue in _STATIC.iter_unpack(data[offset:offset + length]):
                    yield Static((x_base + x_off, y_base + y_off, z), graphic_id, hue)

    return statics()