"""Tile properties for land and item graphics."""

from __future__ import annotations

import os
import struct
from dataclasses import dataclass, field
from enum import IntFlag

from yewoh.mul import MulReader

NUM_LAND_TILES = 0x4000
NUM_ITEMS = 0x10000

_GROUP_HEADER = struct.Struct("<I")
_LAND = struct.Struct("<QH20s")
_ITEM = struct.Struct("<QBBHBBIBBB20s")


class TileFlags(IntFlag):
    BACKGROUND = 1 << 0
    WEAPON = 1 << 1
    TRANSPARENT = 1 << 2
    TRANSLUCENT = 1 << 3
    WALL = 1 << 4
    DAMAGING = 1 << 5
    IMPASSABLE = 1 << 6
    WET = 1 << 7
    SURFACE = 1 << 9
    BRIDGE = 1 << 10
    FUNGIBLE = 1 << 11
    WINDOW = 1 << 12
    BLOCK_LOS = 1 << 13
    ARTICLE_A = 1 << 14
    ARTICLE_AN = 1 << 15
    INTERNAL = 1 << 16
    FOLIAGE = 1 << 17
    PARTIAL_HUE = 1 << 18
    MAP = 1 << 20
    CONTAINER = 1 << 21
    WEARABLE = 1 << 22
    LIGHT_SOURCE = 1 << 23
    ANIMATION = 1 << 24
    HOVER_OVER = 1 << 25
    ARMOUR = 1 << 27
    ROOF = 1 << 28
    DOOR = 1 << 29
    STAIR_BACK = 1 << 30
    STAIR_RIGHT = 1 << 31


_KNOWN_FLAGS = sum(flag.value for flag in TileFlags)


def _flags(raw: int) -> TileFlags:
    return TileFlags(raw & _KNOWN_FLAGS)


@dataclass
class LandInfo:
    name: str
    flags: TileFlags
    texture_id: int


@dataclass
class ItemInfo:
    name: str
    flags: TileFlags
    weight: int
    quality: int
    animation: int
    quantity: int
    value: int
    height: int


@dataclass
class TileData:
    land: list[LandInfo] = field(default_factory=list)
    items: list[ItemInfo] = field(default_factory=list)


def _unpack(reader: MulReader, layout: struct.Struct) -> tuple:
    raw = reader.read(layout.size)
    if len(raw) != layout.size:
        raise EOFError("tile data ended early")
    return layout.unpack(raw)


def _name(raw: bytes) -> str:
    return raw.split(b"\0", 1)[0].decode("utf-8")


def load_tile_data(data_path: str | os.PathLike) -> TileData:
    """Load every land and item tile record from ``tiledata``."""
    reader = MulReader.open(data_path, "tiledata")
    data = TileData()

    for index in range(NUM_LAND_TILES):
        if index & 0x1F == 0:
            _unpack(reader, _GROUP_HEADER)
        raw_flags, texture_id, name = _unpack(reader, _LAND)
        data.land.append(LandInfo(_name(name), _flags(raw_flags), texture_id))

    for index in range(NUM_ITEMS):
        if index & 0x1F == 0:
            _unpack(reader, _GROUP_HEADER)
        (raw_flags, weight, quality, animation, _unknown, quantity,
         _unknown32, _unknown8, value, height, name) = _unpack(reader, _ITEM)
        data.items.append(ItemInfo(
            name=_name(name),
            flags=_flags(raw_flags),
            weight=weight,
            quality=quality,
            animation=animation,
            quantity=quantity,
            value=value,
            height=height,
        ))

    return data