"""Multi-tile structure prefabs such as houses and boats."""

from __future__ import annotations

import logging
import os
import struct
from dataclasses import dataclass, field
from pathlib import Path

from yewoh.tiles import TileFlags
from yewoh.uop import UopBuffer, UopEntry

MAX_MULTIS = 9000

_logger = logging.getLogger(__name__)

_HEADER = struct.Struct("<II")
_COMPONENT = struct.Struct("<HhhhHI")
_TOOLTIP = struct.Struct("<I")


@dataclass
class MultiPrefabComponent:
    graphic: int
    position: tuple[int, int, int]
    tile_flags: TileFlags
    component_flags: int
    tooltip_ids: list[int] = field(default_factory=list)


@dataclass
class MultiPrefab:
    components: list[MultiPrefabComponent] = field(default_factory=list)


@dataclass
class MultiData:
    prefabs: list[MultiPrefab] = field(default_factory=list)


def _unpack(entry: UopEntry, layout: struct.Struct) -> tuple:
    raw = entry.read(layout.size)
    if len(raw) != layout.size:
        raise EOFError("multi entry ended early")
    return layout.unpack(raw)


def _read_prefab(entry: UopEntry, expected_id: int) -> MultiPrefab:
    multi_id, count = _unpack(entry, _HEADER)
    if multi_id != expected_id:
        _logger.warning("multi %d has wrong ID %d", expected_id, multi_id)

    prefab = MultiPrefab()
    for _ in range(count):
        graphic, x, y, z, component_flags, tooltip_count = _unpack(entry, _COMPONENT)
        tooltip_ids = [_unpack(entry, _TOOLTIP)[0] for _ in range(tooltip_count)]
        prefab.components.append(MultiPrefabComponent(
            graphic=graphic,
            position=(x, y, z),
            tile_flags=TileFlags(0),
            component_flags=component_flags,
            tooltip_ids=tooltip_ids,
        ))
    return prefab


def load_multi_data(data_path: str | os.PathLike) -> MultiData:
    """Load the prefabs present in ``MultiCollection.uop``, in ID order."""
    uop = UopBuffer((Path(data_path) / "MultiCollection.uop").read_bytes())
    data = MultiData()
    for multi_id in range(MAX_MULTIS):
        entry = uop.get(f"build/multicollection/{multi_id:06}.bin")
        if entry is not None:
            data.prefabs.append(_read_prefab(entry, multi_id))
    return data