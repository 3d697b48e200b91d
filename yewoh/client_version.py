"""Client version numbers and client feature flags."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag

_DIGITS = frozenset("0123456789")


@dataclass(frozen=True, order=True)
class ClientVersion:
    """A four-part client version; each part is one byte."""

    major: int = 0
    minor: int = 0
    patch: int = 0
    build: int = 0

    def __post_init__(self) -> None:
        for name in ("major", "minor", "patch", "build"):
            part = getattr(self, name)
            if not 0 <= part <= 0xFF:
                raise ValueError(f"version {name} out of range: {part}")

    def is_valid(self) -> bool:
        return any((self.major, self.minor, self.patch, self.build))

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}.{self.build}"


VERSION_HIGH_SEAS = ClientVersion(7, 0, 9, 0)
VERSION_GRID_INVENTORY = ClientVersion(6, 0, 1, 7)


def _parse_u8(text: str) -> int:
    digits = text[1:] if text.startswith("+") else text
    if not digits or not set(digits) <= _DIGITS:
        raise ValueError(f"invalid version number: {text!r}")
    value = int(digits)
    if value > 0xFF:
        raise ValueError(f"version number too large: {text!r}")
    return value


def _split_at_non_digit(text: str) -> tuple[str, str] | None:
    """Split around the first non-digit character, dropping that character."""
    for position, char in enumerate(text):
        if char not in _DIGITS:
            return text[:position], text[position + 1:]
    return None


@dataclass(frozen=True, order=True)
class ExtendedClientVersion:
    """A client version together with any trailing text the client reported."""

    client_version: ClientVersion
    suffix: str = ""

    @property
    def major(self) -> int:
        return self.client_version.major

    @property
    def minor(self) -> int:
        return self.client_version.minor

    @property
    def patch(self) -> int:
        return self.client_version.patch

    @property
    def build(self) -> int:
        return self.client_version.build

    def is_valid(self) -> bool:
        return self.client_version.is_valid()

    @classmethod
    def parse(cls, text: str) -> "ExtendedClientVersion":
        """Parse a version string such as "7.0.9.0" or "5.0.8 b"."""
        major_str, sep, rest = text.partition(".")
        if not sep:
            raise ValueError("Missing major . in version")
        major = _parse_u8(major_str)

        minor_str, sep, rest = rest.partition(".")
        if not sep:
            raise ValueError("Missing minor . in version")
        minor = _parse_u8(minor_str)

        if "." in rest:
            patch_str, _, rest = rest.partition(".")
            patch = _parse_u8(patch_str)
            split = _split_at_non_digit(rest)
            build_str, suffix = split if split is not None else (rest, "")
            build = _parse_u8(build_str)
        else:
            split = _split_at_non_digit(rest)
            if split is None:
                raise ValueError("Missing patch number")
            patch_str, rest = split
            patch = _parse_u8(patch_str)
            if len(rest) == 1 and "a" <= rest <= "z":
                build, suffix = ord(rest) - ord("a"), ""
            else:
                build, suffix = 0, rest

        return cls(ClientVersion(major, minor, patch, build), suffix)


class ClientFlags(IntFlag):
    RE = 0x1
    TD = 0x2
    LBR = 0x4
    AOS = 0x8
    SE = 0x10
    SA = 0x20
    UO3D = 0x40
    THREE_D = 0x100