import pytest

from yewoh.client_version import (
    VERSION_GRID_INVENTORY,
    VERSION_HIGH_SEAS,
    ClientFlags,
    ClientVersion,
    ExtendedClientVersion,
)


def test_display():
    assert str(ClientVersion(7, 0, 9, 0)) == "7.0.9.0"
    assert str(ClientVersion(6, 0, 1, 7)) == "6.0.1.7"


def test_ordering_is_lexicographic():
    assert VERSION_GRID_INVENTORY < VERSION_HIGH_SEAS
    assert ClientVersion(7, 0, 9, 1) > VERSION_HIGH_SEAS
    assert ClientVersion(7, 0, 10, 0) > ClientVersion(7, 0, 9, 255)


def test_is_valid():
    assert not ClientVersion().is_valid()
    assert ClientVersion(0, 0, 0, 1).is_valid()


def test_part_out_of_range():
    with pytest.raises(ValueError):
        ClientVersion(256, 0, 0, 0)


def test_parse_four_parts():
    version = ExtendedClientVersion.parse("7.0.9.0")
    assert version.client_version == VERSION_HIGH_SEAS
    assert version.suffix == ""


def test_parse_round_trips_display():
    version = ClientVersion(6, 0, 1, 7)
    assert ExtendedClientVersion.parse(str(version)).client_version == version


def test_parse_keeps_suffix_after_separator():
    version = ExtendedClientVersion.parse("7.0.9.0 extra")
    assert version.client_version == VERSION_HIGH_SEAS
    assert version.suffix == "extra"


def test_parse_letter_build():
    version = ExtendedClientVersion.parse("5.0.8 b")
    assert version.client_version == ClientVersion(5, 0, 8, 1)
    assert version.suffix == ""


def test_parse_three_parts_other_suffix():
    version = ExtendedClientVersion.parse("5.0.8 xy")
    assert version.client_version == ClientVersion(5, 0, 8, 0)
    assert version.suffix == "xy"


def test_extended_delegates_parts():
    version = ExtendedClientVersion.parse("6.0.1.7")
    assert (version.major, version.minor, version.patch, version.build) == (6, 0, 1, 7)
    assert version.is_valid()


@pytest.mark.parametrize("text", ["7", "7.0", "7.0.15", "300.0.0.0", "7.x.0.0", "7.0.9.y"])
def test_parse_errors(text):
    with pytest.raises(ValueError):
        ExtendedClientVersion.parse(text)


def test_client_flags_from_bits():
    flags = ClientFlags(0x1 | 0x8)
    assert flags == ClientFlags.RE | ClientFlags.AOS
    assert ClientFlags.AOS in flags
    assert ClientFlags.SE not in flags
    assert ClientFlags(0x100) == ClientFlags.THREE_D