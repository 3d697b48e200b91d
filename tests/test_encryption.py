import pytest

from yewoh.blowfish_pass import BlowfishPass
from yewoh.client_version import ClientVersion
from yewoh.encryption import Encryption, EncryptionKind, GameEncryption
from yewoh.lobby_pass import LobbyEncryptionKind, LobbyPass
from yewoh.twofish_pass import TwofishPass

SEED = 0x0A0B0C0D
DATA = b"\x80user\x00\x00\x00placeholder" * 3


@pytest.mark.parametrize("version, kind", [
    (ClientVersion(7, 0, 9, 0), EncryptionKind.TWOFISH),
    (ClientVersion(2, 0, 3, 1), EncryptionKind.TWOFISH),
    (ClientVersion(2, 0, 3, 0), EncryptionKind.BLOWFISH_V4),
    (ClientVersion(2, 0, 0, 0), EncryptionKind.BLOWFISH_V3),
    (ClientVersion(1, 25, 36, 0), EncryptionKind.BLOWFISH_V2),
    (ClientVersion(1, 25, 37, 0), EncryptionKind.BLOWFISH_V3),
    (ClientVersion(1, 25, 35, 0), EncryptionKind.BLOWFISH_V3),
    (ClientVersion(1, 25, 34, 0), EncryptionKind.BLOWFISH_V1),
])
def test_kind_for_version(version, kind):
    assert EncryptionKind.for_version(version) is kind


@pytest.mark.parametrize("kind, lobby", [
    (EncryptionKind.BLOWFISH_V1, LobbyEncryptionKind.V1),
    (EncryptionKind.BLOWFISH_V2, LobbyEncryptionKind.V2),
    (EncryptionKind.BLOWFISH_V3, LobbyEncryptionKind.V3),
    (EncryptionKind.BLOWFISH_V4, LobbyEncryptionKind.V3),
    (EncryptionKind.TWOFISH, LobbyEncryptionKind.V3),
])
def test_lobby_kind(kind, lobby):
    assert kind.lobby_kind() is lobby


def test_twofish_game_uses_twofish_only():
    game = GameEncryption(EncryptionKind.TWOFISH, SEED)
    assert game.crypt_client_to_server(DATA) == TwofishPass(SEED).crypt_client_to_server(DATA)
    fresh = GameEncryption(EncryptionKind.TWOFISH, SEED)
    assert fresh.crypt_server_to_client(DATA) == TwofishPass(SEED).crypt_server_to_client(DATA)


def test_blowfish_v1_game_uses_blowfish_only():
    game = GameEncryption(EncryptionKind.BLOWFISH_V1, SEED)
    assert game.crypt_client_to_server(DATA) == BlowfishPass().crypt(DATA)
    assert game.crypt_server_to_client(DATA) == DATA


def test_blowfish_v4_game_chains_both_passes():
    game = GameEncryption(EncryptionKind.BLOWFISH_V4, SEED)
    expected = TwofishPass(SEED).crypt_client_to_server(BlowfishPass().crypt(DATA))
    assert game.crypt_client_to_server(DATA) == expected
    assert game.crypt_server_to_client(DATA) == DATA


def test_lobby_encryption_matches_lobby_pass():
    version = ClientVersion(7, 0, 9, 0)
    encryption = Encryption(version, SEED, is_lobby=True)
    expected = LobbyPass(LobbyEncryptionKind.V3, version, SEED).encrypt(DATA)
    assert encryption.crypt_client_to_server(DATA) == expected
    assert encryption.crypt_server_to_client(DATA) == DATA


def test_game_encryption_through_wrapper():
    version = ClientVersion(7, 0, 9, 0)
    encryption = Encryption(version, SEED, is_lobby=False)
    assert encryption.kind is EncryptionKind.TWOFISH
    assert encryption.crypt_client_to_server(DATA) == TwofishPass(SEED).crypt_client_to_server(DATA)


def test_game_stream_round_trips_through_fresh_instance():
    version = ClientVersion(7, 0, 9, 0)
    encrypted = Encryption(version, SEED, is_lobby=False).crypt_server_to_client(DATA)
    assert encrypted != DATA
    assert Encryption(version, SEED, is_lobby=False).crypt_server_to_client(encrypted) == DATA