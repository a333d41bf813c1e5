"""Timestamp validation, encoding and decoding for the ULID time field."""

from __future__ import annotations

import time
from datetime import datetime, timedelta, timezone
from numbers import Real
from typing import Any, Final

from ulid_workers.base32 import ENCODING, TIME_LEN, ULID_LEN, decode_integer, encode_integer
from ulid_workers.errors import (
    ULIDFormatError,
    ULIDRangeError,
    ULIDTypeError,
    ULIDValueError,
)

TIME_MAX: Final[int] = (1 << 48) - 1
_EPOCH: Final[datetime] = datetime(1970, 1, 1, tzinfo=timezone.utc)


def current_millis() -> int:
    """Wall-clock time in integer milliseconds since the Unix epoch."""
    return time.time_ns() // 1_000_000


def validate_timestamp(timestamp: Any) -> None:
    """Check that ``timestamp`` is an integer in ``[0, TIME_MAX]``.

    Returns nothing on success; each failure has its own exception type.

    Raises:
        ULIDTypeError: If timestamp is not a real number (bool and NaN included)
        ULIDRangeError: If timestamp is negative or larger than TIME_MAX
        ULIDValueError: If timestamp has a fractional part
    """
    if isinstance(timestamp, bool) or not isinstance(timestamp, Real) or timestamp != timestamp:
        raise ULIDTypeError(f"timestamp must be a number: {timestamp!r}")
    if timestamp > TIME_MAX:
        raise ULIDRangeError(f"cannot encode a timestamp larger than {TIME_MAX}: {timestamp}")
    if timestamp < 0:
        raise ULIDRangeError(f"timestamp must be positive: {timestamp}")
    if int(timestamp) != timestamp:
        raise ULIDValueError(f"timestamp must be an integer: {timestamp}")


def encode_time(timestamp: Any, width: int = TIME_LEN) -> str:
    """Validate ``timestamp`` and encode it as ``width`` Base32 characters.

    A width below 10 keeps only the low-order digits.
    """
    validate_timestamp(timestamp)
    return encode_integer(int(timestamp), width)


def decode_time(ulid: str) -> int:
    """Return the millisecond timestamp stored in a ULID.

    Raises:
        ULIDTypeError: If ulid is not a string
        ULIDFormatError: If ulid is not 26 characters long
        ULIDDecodeError: If the time field has a character outside the alphabet
        ULIDRangeError: If the time field decodes above TIME_MAX
    """
    if not isinstance(ulid, str):
        raise ULIDTypeError(f"ULID must be a string: {ulid!r}")
    if len(ulid) != ULID_LEN:
        raise ULIDFormatError("Malformed ULID")
    value = decode_integer(ulid[:TIME_LEN])
    if value > TIME_MAX:
        raise ULIDRangeError(f"Malformed ULID: timestamp too large: {value}")
    return value


def decode_datetime(ulid: str) -> datetime:
    """Like ``decode_time`` but returns an aware UTC datetime."""
    return _EPOCH + timedelta(milliseconds=decode_time(ulid))


def is_ulid(value: Any) -> bool:
    if not isinstance(value, str) or len(value) != ULID_LEN:
        return False
    for ch in value:
        if ch not in ENCODING:
            return False
    # First symbol above "7" means the timestamp overflows 48 bits.
    return value[0] <= "7"
