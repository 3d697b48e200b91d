"""Core identifiers and enumerations shared across the protocol and assets."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar

_U32_MAX = 0xFFFFFFFF


@dataclass(frozen=True, order=True)
class EntityId:
    """A 32-bit entity serial; zero means no entity."""

    value: int = 0

    ZERO: ClassVar["EntityId"]

    def __post_init__(self) -> None:
        if not 0 <= self.value <= _U32_MAX:
            raise ValueError(f"entity id out of range: {self.value}")

    def is_valid(self) -> bool:
        return self.value != 0

    def as_u32(self) -> int:
        return self.value


EntityId.ZERO = EntityId(0)


class Direction(IntEnum):
    """One of the eight facing directions, in wire order."""

    NORTH = 0
    RIGHT = 1
    EAST = 2
    DOWN = 3
    SOUTH = 4
    LEFT = 5
    WEST = 6
    UP = 7

    def as_vec2(self) -> tuple[int, int]:
        """Unit step on the map grid for this direction, as (x, y)."""
        return _DIRECTION_VECTORS[self]


_DIRECTION_VECTORS: dict[Direction, tuple[int, int]] = {
    Direction.NORTH: (0, -1),
    Direction.RIGHT: (1, -1),
    Direction.EAST: (1, 0),
    Direction.DOWN: (1, 1),
    Direction.SOUTH: (0, 1),
    Direction.LEFT: (-1, 1),
    Direction.WEST: (-1, 0),
    Direction.UP: (-1, -1),
}


class EntityKind(IntEnum):
    ITEM = 0
    CHARACTER = 1
    MULTI = 2


class Notoriety(IntEnum):
    INNOCENT = 1
    FRIEND = 2
    NEUTRAL = 3
    CRIMINAL = 4
    ENEMY = 5
    MURDERER = 6
    INVULNERABLE = 7