"""Stream cipher applied to client traffic on the login server."""

from __future__ import annotations

from enum import Enum

from yewoh.client_version import ClientVersion

_MASK = 0xFFFFFFFF


class LobbyEncryptionKind(Enum):
    V1 = 1
    V2 = 2
    V3 = 3


class LobbyPass:
    """Keystream keyed from the client version and the connection seed."""

    def __init__(self, kind: LobbyEncryptionKind, client_version: ClientVersion, seed: int) -> None:
        a = client_version.major
        b = client_version.minor
        c = client_version.patch
        seed &= _MASK
        inverted = ~seed & _MASK

        first = (((((a << 9) | b) << 10) | c) ^ ((c * c) << 5)) & _MASK
        key_2 = ((first << 4) ^ (b * b) ^ (b * 0x0B000000) ^ (c * 0x380000) ^ 0x2C13A5FD) & _MASK
        second = ((((((a << 9) | c) << 10) | b) * 8) ^ (c * c * 0x0C00)) & _MASK
        key_3 = (second ^ (b * b) ^ (b * 0x6800000) ^ (c * 0x1C0000) ^ 0xA31D527F) & _MASK
        key_1 = (key_2 - 1) & _MASK

        self.kind = kind
        self._keys = (key_1, key_2, key_3)
        self._state = (
            (((inverted ^ 0x1357) << 16) | ((seed ^ 0xAAAA) & 0xFFFF)) & _MASK,
            ((seed >> 16) ^ 0x4321) | ((inverted ^ 0xABCD0000) & 0xFFFF0000),
        )

    def _advance(self) -> None:
        s0, s1 = self._state
        k0, k1, k2 = self._keys

        if self.kind is LobbyEncryptionKind.V1:
            self._state = (
                (((s0 >> 1) | (s1 << 31)) & _MASK) ^ k1,
                (((s1 >> 1) | (s0 << 31)) & _MASK) ^ k0,
            )
        elif self.kind is LobbyEncryptionKind.V2:
            shift = (5 * s1 * s1) & _MASK & 31
            second = ((k0 >> shift) + s1 * k0 + s0 * s0 * 0x35CE9581 + 0x07AFCC37) & _MASK
            shift = (3 * s0 * s0) & _MASK & 31
            first = ((k1 >> shift) + s0 * k1 + second * second * 0x4C3A1353 + 0x16EF783F) & _MASK
            self._state = (first, second)
        else:
            inner = (((s1 >> 1) | (s0 << 31)) & _MASK) ^ k0
            self._state = (
                (((s0 >> 1) | (s1 << 31)) & _MASK) ^ k2,
                (((inner >> 1) | (s0 << 31)) & _MASK) ^ k1,
            )

    def encrypt_one(self, byte: int) -> int:
        result = (byte ^ self._state[0]) & 0xFF
        self._advance()
        return result

    def encrypt(self, data: bytes) -> bytes:
        return bytes(self.encrypt_one(byte) for byte in data)