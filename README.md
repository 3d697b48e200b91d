# yewoh

Building blocks for Ultima Online compatible clients and servers, in pure Python
with no third-party dependencies.

## What it provides

- **Core types** (`yewoh.core`): `EntityId` (with `is_valid()` and `as_u32()`),
  `Direction` (with `as_vec2()`, returning an `(x, y)` step), `EntityKind` and
  `Notoriety`.
- **Client versions** (`yewoh.client_version`): `ClientVersion`, an ordered
  four-part version, and `ExtendedClientVersion.parse()`, which reads version
  strings such as `"7.0.15.1"` and keeps any trailing text as `suffix`.
  `ClientFlags` holds the expansion feature flags. `VERSION_HIGH_SEAS` and
  `VERSION_GRID_INVENTORY` mark two version thresholds.
- **Compression** (`yewoh.compression`): the Huffman coding used for
  server-to-client traffic. `huffman_compress()` or a `HuffmanWriter` compresses;
  a `HuffmanDecoder` decodes a stream that may arrive in pieces, returning
  `(bytes consumed, packet)` once a whole packet is in, or `None` until then.
- **Encryption**:
  - `yewoh.encryption`: `EncryptionKind.for_version()` picks the scheme for a
    client version; `Encryption` wraps either a login (lobby) or a game
    connection, and `GameEncryption` is the game-connection part.
  - `yewoh.lobby_pass`: `LobbyPass`, the login-server keystream.
  - `yewoh.blowfish_pass` and `yewoh.twofish_pass`: `BlowfishPass` and
    `TwofishPass`, the game-connection keystreams.
  - `yewoh.blowfish` and `yewoh.twofish`: the `Blowfish` and `Twofish` block
    ciphers underneath.
- **Assets**:
  - `yewoh.uop`: `UopBuffer` reads UOP containers and `uop_hash()` computes the
    hash their entries are stored under; malformed data raises `UopFormatError`.
  - `yewoh.mul`: `MulReader.open()` reads `<name>LegacyMUL.uop` when present,
    otherwise `<name>.mul`.
  - `yewoh.tiles`: `load_tile_data()` returns a `TileData` of `LandInfo` and
    `ItemInfo` records with `TileFlags`.
  - `yewoh.map`: `load_map()` yields `(block x, block y, MapChunk)` and
    `load_statics()` yields `Static` objects.
  - `yewoh.multi`: `load_multi_data()` reads `MultiCollection.uop` into a
    `MultiData` of `MultiPrefab` components.

## Installation

```
pip install .
```

## Examples

Parse a client version and choose the encryption it uses:

```python
from yewoh.client_version import ExtendedClientVersion
from yewoh.encryption import EncryptionKind

version = ExtendedClientVersion.parse("7.0.15.1")
kind = EncryptionKind.for_version(version.client_version)  # EncryptionKind.TWOFISH
```

Compress a packet and decode it again:

```python
from yewoh.compression import HuffmanDecoder, huffman_compress

compressed = huffman_compress(b"\x1b hello")
consumed, packet = HuffmanDecoder().write(compressed)
assert packet == b"\x1b hello"
```

Read tile data and map chunks from a client installation:

```python
from yewoh.map import load_map
from yewoh.tiles import load_tile_data

tiles = load_tile_data("/path/to/client")
print(tiles.items[0x0eed].name)

for block_x, block_y, chunk in load_map("/path/to/client", 0, 7168, 4096):
    tile_id, height = chunk.get(0, 0)
```

## What it does not do

The package does not define the game's packet messages or packet framing, and it
has no network client, server or command-line program. It supplies the
encryption, compression, version handling and data-file readers such software
would be built on.

## Running the tests

```
pip install .[test]
pytest
```