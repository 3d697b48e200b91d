import logging
import struct

import pytest

from yewoh.multi import MultiPrefabComponent, load_multi_data
from yewoh.tiles import TileFlags
from yewoh.uop import uop_hash


def build_uop(entries):
    count = len(entries)
    data_start = 28 + 12 + 34 * count
    out = bytearray(b"MYP\0" + struct.pack("<IIQII", 5, 0, 28, count, count))
    out += struct.pack("<IQ", count, 0)
    blob = bytearray()
    for key, payload in entries.items():
        out += struct.pack(
            "<QIIIQIH", data_start + len(blob), 0, len(payload), len(payload),
            uop_hash(key.encode()), 0, 0,
        )
        blob += payload
    return bytes(out + blob)


def multi_key(multi_id):
    return f"build/multicollection/{multi_id:06}.bin"


def write_collection(directory, entries):
    (directory / "MultiCollection.uop").write_bytes(build_uop(entries))


def test_loads_prefabs_in_id_order(tmp_path):
    house = struct.pack("<II", 0, 1) + struct.pack("<HhhhHI", 0x1234, -3, 4, 0, 1, 2) + struct.pack("<II", 100, 200)
    empty = struct.pack("<II", 5, 0)
    write_collection(tmp_path, {multi_key(5): empty, multi_key(0): house})

    data = load_multi_data(tmp_path)
    assert len(data.prefabs) == 2
    assert data.prefabs[0].components == [
        MultiPrefabComponent(0x1234, (-3, 4, 0), TileFlags(0), 1, [100, 200])
    ]
    assert data.prefabs[1].components == []


def test_wrong_id_is_logged(tmp_path, caplog):
    write_collection(tmp_path, {multi_key(2): struct.pack("<II", 7, 0)})
    with caplog.at_level(logging.WARNING, logger="yewoh.multi"):
        data = load_multi_data(tmp_path)
    assert len(data.prefabs) == 1
    assert "multi 2 has wrong ID 7" in caplog.text


def test_truncated_entry_raises(tmp_path):
    write_collection(tmp_path, {multi_key(1): struct.pack("<II", 1, 1)})
    with pytest.raises(EOFError):
        load_multi_data(tmp_path)


def test_missing_collection_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_multi_data(tmp_path)