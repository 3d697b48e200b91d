"""Choosing and applying connection encryption for a client version."""

from __future__ import annotations

from enum import Enum

from yewoh.blowfish_pass import BlowfishPass
from yewoh.client_version import ClientVersion
from yewoh.lobby_pass import LobbyEncryptionKind, LobbyPass
from yewoh.twofish_pass import TwofishPass


class EncryptionKind(Enum):
    BLOWFISH_V1 = 1
    BLOWFISH_V2 = 2
    BLOWFISH_V3 = 3
    BLOWFISH_V4 = 4
    TWOFISH = 5

    @classmethod
    def for_version(cls, client_version: ClientVersion) -> "EncryptionKind":
        if client_version > ClientVersion(2, 0, 3, 0):
            return cls.TWOFISH
        if client_version > ClientVersion(2, 0, 0, 0):
            return cls.BLOWFISH_V4
        if client_version == ClientVersion(1, 25, 36, 0):
            return cls.BLOWFISH_V2
        if client_version >= ClientVersion(1, 25, 35, 0):
            return cls.BLOWFISH_V3
        return cls.BLOWFISH_V1

    def lobby_kind(self) -> LobbyEncryptionKind:
        """The login-server cipher variant used alongside this kind."""
        if self is EncryptionKind.BLOWFISH_V1:
            return LobbyEncryptionKind.V1
        if self is EncryptionKind.BLOWFISH_V2:
            return LobbyEncryptionKind.V2
        return LobbyEncryptionKind.V3


class GameEncryption:
    """Encryption for a game server connection."""

    def __init__(self, kind: EncryptionKind, seed: int) -> None:
        self.kind = kind
        self._blowfish = BlowfishPass()
        self._twofish = TwofishPass(seed)

    def crypt_client_to_server(self, data: bytes) -> bytes:
        data = bytes(data)
        if self.kind is not EncryptionKind.TWOFISH:
            data = self._blowfish.crypt(data)
        if self.kind in (EncryptionKind.BLOWFISH_V4, EncryptionKind.TWOFISH):
            data = self._twofish.crypt_client_to_server(data)
        return data

    def crypt_server_to_client(self, data: bytes) -> bytes:
        if self.kind is EncryptionKind.TWOFISH:
            return self._twofish.crypt_server_to_client(data)
        return bytes(data)


class Encryption:
    """Encryption for either a login (lobby) or game connection."""

    def __init__(self, client_version: ClientVersion, seed: int, is_lobby: bool) -> None:
        self.kind = EncryptionKind.for_version(client_version)
        self.is_lobby = is_lobby
        self.inner: LobbyPass | GameEncryption
        if is_lobby:
            self.inner = LobbyPass(self.kind.lobby_kind(), client_version, seed)
        else:
            self.inner = GameEncryption(self.kind, seed)

    def crypt_client_to_server(self, data: bytes) -> bytes:
        if isinstance(self.inner, LobbyPass):
            return self.inner.encrypt(data)
        return self.inner.crypt_client_to_server(data)

    def crypt_server_to_client(self, data: bytes) -> bytes:
        if isinstance(self.inner, LobbyPass):
            return bytes(data)
        return self.inner.crypt_server_to_client(data)