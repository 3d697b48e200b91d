"""Twofish-derived keystream used on game server connections."""

from __future__ import annotations

import hashlib
import struct

from yewoh.twofish import Twofish

BLOCK_SIZE = 256
_CHUNK = 16


class TwofishPass:
    """Keystream state keyed by the connection seed.

    Both directions share one position counter, as the protocol does.
    """

    def __init__(self, seed: int) -> None:
        if not 0 <= seed <= 0xFFFFFFFF:
            raise ValueError(f"seed must be a 32-bit unsigned value: {seed}")
        self._twofish = Twofish()
        self._twofish.key_schedule(struct.pack(">4I", seed, seed, seed, seed))
        self._block = self._rotate(bytes(range(BLOCK_SIZE)))
        self._offset = 0
        self._response_block = hashlib.md5(self._block).digest()

    def _rotate(self, block: bytes) -> bytes:
        return b"".join(
            self._twofish.encrypt(block[start:start + _CHUNK])
            for start in range(0, BLOCK_SIZE, _CHUNK)
        )

    def crypt_server_to_client(self, data: bytes) -> bytes:
        response = self._response_block
        start = self._offset
        out = bytes(byte ^ response[(start + i) & 0xF] for i, byte in enumerate(data))
        self._offset += len(out)
        return out

    def crypt_client_to_server(self, data: bytes) -> bytes:
        out = bytearray()
        for byte in data:
            if self._offset >= BLOCK_SIZE:
                self._block = self._rotate(self._block)
                self._offset = 0
            out.append(byte ^ self._block[self._offset])
            self._offset += 1
        return bytes(out)