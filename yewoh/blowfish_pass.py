"""Blowfish feedback keystream used by older game clients."""

from __future__ import annotations

import struct
from functools import lru_cache

from yewoh.blowfish import Blowfish

BLOCK_SIZE = 8
SUPER_BLOCK_SIZE = 21036

_WORDS = struct.Struct(">II")

BLOWFISH_KEYS = tuple(bytes.fromhex(key) for key in (
    "913c2b0f44c6", "0c96d2409321", "f212a5aadae9", "9ad4f71497d0", "fcc9c7d6a8a3",
    "7b67369b0b1a", "03acf902ae2d", "0177796b0c67", "a4b41ed7aa51", "d6e1bc271525",
    "17174765408b", "b819db4e1774", "aa63ac37a08f", "77cd5d23efb7", "132b83bf0f8c",
    "b10bc86f394d", "a1a5fa2bc6e2", "9c29cc26e92d", "cd6fd2cabe47", "9b21ae3e3169",
    "e70be66fcf91", "8859af90c52d", "aed252b52898", "3b7f65ed5e93", "30bf0a34db3d",
))


def _ivs(pairs: tuple[tuple[str, str], ...]) -> tuple[tuple[bytes, bytes], ...]:
    return tuple((bytes.fromhex(a), bytes.fromhex(b)) for a, b in pairs)


IVS = (
    _ivs((
        ("9eec5b3c8fa88c55", "b6217198a4472258"), ("f8c4d87254fcf9de", "2d53db3203105a18"),
        ("899f5c53067f4438", "32ceacdb91444e1e"), ("29785af0ab007f91", "e6b6d2e7a005c2f2"),
        ("8d46a9bb521b41df", "f04ac91427a96b4a"), ("914b8a80f5cfbb3c", "bcf4c9d5427afab7"),
        ("d58c01c0fd1eaa57", "c1207a382cb7cd14"), ("559fd15bfb70c077", "a415b39f6bbb105a"),
        ("809d16546b7c5fad", "35cb92240811d961"), ("24a775bf4d7e700c", "90cf9c04ac5389ef"),
        ("9922f68910e67223", "0a5ca5ff9c78da7f"), ("dfffbb116b75f029", "a586d05377e7b10d"),
        ("4c06da554e501b7a", "1c90ce64d61752fb"), ("00267525cd95150f", "13d8ab30f1c5c5fa"),
        ("0c8e861e3fcb8bd1", "eccea9969111b497"), ("1e655fa455ebeccf", "19d99fe05e574573"),
        ("0e2d18e1550504bf", "5e811fddff5cc3f4"), ("f20656544dfb9654", "339707434f39c4a8"),
        ("5e0237177b64e6a2", "2e241307fea188b7"), ("60dd4ce0a1dcba6c", "815c3f937a1f2a1c"),
        ("ae5cbe9d846fcb51", "4d13c68128c30334"), ("b05dcb8d691cde29", "31f122c31c828a57"),
        ("08328ba21e12c9b9", "cda8e61c59ac0cf6"), ("a53be4642f4533a2", "4ada39e20e94f2aa"),
        ("b082b733d26fc000", "d78d1f8e79853e2a"),
    )),
    _ivs((
        ("d2b7f69ccf06e8c1", "aeeb7fe987281c9b"), ("e88c2a97d1d2a676", "ad2369a0ef1f8cba"),
        ("2462400b21c60789", "ba609e269818af01"), ("df2b56c9b372358d", "1d4f61af53126e49"),
        ("1c876cb1d41ba2b2", "d4a12ce22fe9a462"), ("17831c68b3d6652d", "815b4d9b156f0bdf"),
        ("ce91b98a6120b1f9", "ca0ac4765b4bab16"), ("5bd24afd44b7df1f", "8b6fab0cab3d0c7a"),
        ("356cbdff62537744", "f2445f8c59255f6b"), ("b5270dd223be40b3", "3e8b92b17857cbb0"),
        ("b3b4b6d5b6a7666e", "fba73293ee796145"), ("49d79334901aad2c", "843ee90b2cc6b3b1"),
        ("82fb86eca8765598", "7ee3a247b6720561"), ("0ba57217cb18ae03", "8c6132d92b42eff2"),
        ("3f0a068209c976f2", "3d5450fd25a22f2e"), ("f1346494dc90585d", "1e6fb4ef73e8b0ed"),
        ("c0d2e142ec0469a8", "279c7c79879ab248"), ("5073ec1e4dd08051", "4621c9f893cce841"),
        ("70c9e4788f6b2c27", "4c7e2c5a156964dd"), ("00c709cdf62d2d31", "6f01013ecd6016b4"),
        ("e7e876c4504f085b", "622824427d9a1926"), ("2fd467b9240cbb14", "7d19c87379a770cf"),
        ("2d53dc9183f20c12", "3baf1b6b02998b61"), ("e32ca254cd51afe5", "1858117ff0509c15"),
        ("6e2601e9db5013ea", "2259303be45f431e"),
    )),
)


@lru_cache(maxsize=1)
def _keyed_cipher() -> Blowfish:
    cipher = Blowfish()
    for key in BLOWFISH_KEYS:
        cipher.expand_key(key)
    return cipher


class BlowfishPass:
    """Ciphertext-feedback stream over a fixed-key Blowfish cipher."""

    def __init__(self) -> None:
        self._cipher = _keyed_cipher().copy()
        self._total_written = 0
        self._iv_index = 1
        self._block = bytearray(IVS[0][self._iv_index][0])
        self._block_offset = BLOCK_SIZE

    def crypt(self, data: bytes) -> bytes:
        out = bytearray()
        for byte in data:
            if self._total_written >= SUPER_BLOCK_SIZE:
                self._iv_index = (self._iv_index + 3) % 11
                self._block = bytearray(IVS[1][self._iv_index][0])
                self._block_offset = 0
                self._total_written = 0
            elif self._block_offset >= BLOCK_SIZE:
                words = self._cipher.encrypt(_WORDS.unpack(self._block))
                self._block = bytearray(_WORDS.pack(*words))
                self._block_offset = 0

            value = self._block[self._block_offset] ^ byte
            self._block[self._block_offset] = value
            out.append(value)
            self._block_offset += 1
            self._total_written += 1
        return bytes(out)