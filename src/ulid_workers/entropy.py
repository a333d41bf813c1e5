"""Random Base32 characters backed by an injectable byte source."""

from __future__ import annotations

import secrets
from collections.abc import Callable

from ulid_workers.base32 import ENCODING, ENCODING_LEN
from ulid_workers.errors import ULIDLengthError, ULIDRangeError

# Returns ``n`` cryptographically strong bytes.
RandomSource = Callable[[int], bytes]


def crypto_random_bytes(n: int) -> bytes:
    return secrets.token_bytes(n)


def _char_for_byte(byte: int) -> str:
    # Scale [0, 255] onto [0, 32); only 0xFF lands on 32 and is clamped.
    index = byte * ENCODING_LEN // 0xFF
    if index == ENCODING_LEN:
        index = ENCODING_LEN - 1
    return ENCODING[index]


def random_char(source: RandomSource = crypto_random_bytes) -> str:
    """Return one Base32 symbol drawn from a single random byte."""
    return _char_for_byte(source(1)[0])


def encode_random(length: int, source: RandomSource = crypto_random_bytes) -> str:
    """Return ``length`` independent random Base32 characters.

    Args:
        length: Number of characters to produce
        source: Byte source; defaults to the OS CSPRNG via ``secrets``
    """
    if length < 0:
        raise ULIDRangeError(f"length must be non-negative: {length}")
    data = source(length)
    if len(data) != length:
        raise ULIDLengthError(f"random source returned {len(data)} bytes, expected {length}")
    # Characters are produced least-significant first.
    chars = [_char_for_byte(b) for b in data]
    chars.reverse()
    return "".join(chars)
