"""Crockford Base32 codec for ULID fields.

Values are fixed-width, most-significant digit first. The alphabet excludes
I, L, O and U and must never change, since every encoded ID depends on it.
"""

from __future__ import annotations

from numbers import Integral
from typing import Final

from ulid_workers.errors import (
    ULIDDecodeError,
    ULIDLengthError,
    ULIDOverflowError,
    ULIDRangeError,
)

ENCODING: Final[str] = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"
ENCODING_LEN: Final[int] = len(ENCODING)
TIME_LEN: Final[int] = 10
RANDOM_LEN: Final[int] = 16
ULID_LEN: Final[int] = TIME_LEN + RANDOM_LEN

_DECODE: Final[dict[str, int]] = {ch: i for i, ch in enumerate(ENCODING)}


def encode_integer(value: int, width: int) -> str:
    """Encode ``value`` as a ``width``-character Base32 string.

    The result is zero-padded on the left. If ``value`` needs more than
    ``width`` digits the high digits are dropped, so callers must check the
    magnitude first (``encode_time`` does).

    Raises:
        ULIDRangeError: If value is negative or not an integer
    """
    if isinstance(value, bool) or not isinstance(value, Integral) or value < 0:
        raise ULIDRangeError(f"value must be a non-negative integer: {value!r}")
    value = int(value)
    chars: list[str] = []
    for _ in range(width):
        value, rem = divmod(value, ENCODING_LEN)
        chars.append(ENCODING[rem])
    chars.reverse()
    return "".join(chars)


def _digit(char: str) -> int:
    try:
        return _DECODE[char]
    except KeyError:
        raise ULIDDecodeError(char) from None


def decode_integer(text: str) -> int:
    """Decode a Base32 string, most-significant digit first."""
    total = 0
    for char in text:
        total = total * ENCODING_LEN + _digit(char)
    return total


def increment_base32(text: str) -> str:
    """Add one to a fixed-width Base32 string, carrying right to left.

    Raises:
        ULIDLengthError: If text is longer than the random field
        ULIDDecodeError: If text contains a character outside the alphabet
        ULIDOverflowError: If text is already the largest value for its width
    """
    if len(text) > RANDOM_LEN:
        raise ULIDLengthError(
            f"cannot increment a value longer than {RANDOM_LEN} characters: {len(text)}"
        )
    digits = [_digit(char) for char in text]
    for index in range(len(digits) - 1, -1, -1):
        if digits[index] < ENCODING_LEN - 1:
            digits[index] += 1
            return "".join(ENCODING[d] for d in digits)
        digits[index] = 0
    raise ULIDOverflowError(f"cannot increment {text!r}: random component exhausted")
