"""Reading legacy MUL data, either from a loose file or packed inside a UOP."""

from __future__ import annotations

import os
from pathlib import Path

from yewoh.uop import UopBuffer


class MulReader:
    """A byte stream over MUL content, stitched across UOP blocks if needed."""

    def __init__(self, source: bytes | UopBuffer, name: str = "") -> None:
        self.name = name
        self._next_block = 0
        self._position = 0
        if isinstance(source, UopBuffer):
            self._uop: UopBuffer | None = source
            self._block = b""
        else:
            self._uop = None
            self._block = bytes(source)

    @classmethod
    def open(cls, data_path: str | os.PathLike, name: str) -> "MulReader":
        """Open ``<name>LegacyMUL.uop`` if present, otherwise ``<name>.mul``."""
        directory = Path(data_path)
        try:
            contents = (directory / f"{name}LegacyMUL.uop").read_bytes()
        except OSError:
            return cls((directory / f"{name}.mul").read_bytes(), name)
        return cls(UopBuffer(contents), name)

    def _load_next_block(self) -> bool:
        if self._uop is None:
            return False
        path = f"build/{self.name}legacymul/{self._next_block:08}.dat"
        entry = self._uop.get(path)
        if entry is None:
            return False
        self._next_block += 1
        self._block = entry.read()
        self._position = 0
        return True

    def read(self, size: int = -1) -> bytes:
        """Read up to ``size`` bytes (all remaining if negative); short only at the end."""
        parts = []
        remaining = size
        while size < 0 or remaining > 0:
            if self._position >= len(self._block) and not self._load_next_block():
                break
            end = len(self._block) if size < 0 else min(len(self._block), self._position + remaining)
            chunk = self._block[self._position:end]
            self._position = end
            parts.append(chunk)
            remaining -= len(chunk)
        return b"".join(parts)