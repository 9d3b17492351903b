"""Account addresses and their bech32 text form."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass

from .errors import InvalidAddressError

BECH32_PREFIX = "cosmos"
MAX_ADDR_LEN = 255
_MAX_BECH32_LEN = 1023
_CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
_GENERATOR = (0x3B6A57B2, 0x26508E6D, 0x1EA119FA, 0x3D4233DD, 0x2A1462B3)


def _polymod(values: list[int]) -> int:
    chk = 1
    for value in values:
        top = chk >> 25
        chk = ((chk & 0x1FFFFFF) << 5) ^ value
        for i, gen in enumerate(_GENERATOR):
            if (top >> i) & 1:
                chk ^= gen
    return chk


def _hrp_expand(hrp: str) -> list[int]:
    return [ord(c) >> 5 for c in hrp] + [0] + [ord(c) & 31 for c in hrp]


def _convert_bits(data, from_bits: int, to_bits: int, pad: bool) -> list[int]:
    acc = 0
    bits = 0
    out: list[int] = []
    maxv = (1 << to_bits) - 1
    max_acc = (1 << (from_bits + to_bits - 1)) - 1
    for value in data:
        if value < 0 or value >> from_bits:
            raise InvalidAddressError(f"invalid data range: {value}")
        acc = ((acc << from_bits) | value) & max_acc
        bits += from_bits
        while bits >= to_bits:
            bits -= to_bits
            out.append((acc >> bits) & maxv)
    if pad:
        if bits:
            out.append((acc << (to_bits - bits)) & maxv)
    elif bits >= from_bits or (acc << (to_bits - bits)) & maxv:
        raise InvalidAddressError("invalid incomplete group")
    return out


def bech32_encode(hrp: str, data: bytes) -> str:
    """Encode raw bytes under the human-readable part ``hrp``."""
    hrp = hrp.lower()
    five_bit = _convert_bits(data, 8, 5, True)
    checksum_value = _polymod(_hrp_expand(hrp) + five_bit + [0] * 6) ^ 1
    checksum = [(checksum_value >> 5 * (5 - i)) & 31 for i in range(6)]
    return hrp + "1" + "".join(_CHARSET[d] for d in five_bit + checksum)


def bech32_decode(text: str) -> tuple[str, bytes]:
    """Decode a bech32 string into its human-readable part and raw bytes."""
    if len(text) < 8 or len(text) > _MAX_BECH32_LEN:
        raise InvalidAddressError(f"invalid bech32 string length {len(text)}")
    if any(ord(c) < 33 or ord(c) > 126 for c in text):
        raise InvalidAddressError("invalid character in bech32 string")
    if text.lower() != text and text.upper() != text:
        raise InvalidAddressError("string not all lowercase or all uppercase")
    text = text.lower()
    sep = text.rfind("1")
    if sep < 1 or sep + 7 > len(text):
        raise InvalidAddressError("invalid separator index")
    hrp = text[:sep]
    try:
        values = [_CHARSET.index(c) for c in text[sep + 1 :]]
    except ValueError:
        raise InvalidAddressError("invalid character in bech32 data") from None
    if _polymod(_hrp_expand(hrp) + values) != 1:
        raise InvalidAddressError("invalid bech32 checksum")
    return hrp, bytes(_convert_bits(values[:-6], 5, 8, False))


@dataclass(frozen=True)
class AccAddress:
    """An account address given by its raw bytes."""

    raw: bytes = b""

    def __bytes__(self) -> bytes:
        return self.raw

    def __bool__(self) -> bool:
        return bool(self.raw)

    def __len__(self) -> int:
        return len(self.raw)

    def __str__(self) -> str:
        if not self.raw:
            return ""
        return bech32_encode(BECH32_PREFIX, self.raw)


def acc_address_from_bech32(text: str) -> AccAddress:
    """Parse an account address, checking prefix and length."""
    if not text.strip():
        raise InvalidAddressError("empty address string is not allowed")
    hrp, raw = bech32_decode(text)
    if hrp != BECH32_PREFIX:
        raise InvalidAddressError(
            f"invalid Bech32 prefix; expected {BECH32_PREFIX}, got {hrp}"
        )
    if not raw:
        raise InvalidAddressError(
            "decoding Bech32 address failed: must provide a non empty address"
        )
    if len(raw) > MAX_ADDR_LEN:
        raise InvalidAddressError(f"address max length is {MAX_ADDR_LEN}, got {len(raw)}")
    return AccAddress(raw)


def new_module_address(name: str) -> AccAddress:
    """Address of a module account: the first 20 bytes of SHA-256 of its name."""
    return AccAddress(hashlib.sha256(name.encode()).digest()[:20])