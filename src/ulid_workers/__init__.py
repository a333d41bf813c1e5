"""Monotonic ULID generation and decoding."""

from .base32 import ENCODING, decode_integer, encode_integer, increment_base32
from .entropy import RandomSource, crypto_random_bytes, encode_random, random_char
from .errors import (
    ULIDDecodeError,
    ULIDError,
    ULIDFormatError,
    ULIDLengthError,
    ULIDOverflowError,
    ULIDRangeError,
    ULIDTypeError,
    ULIDValueError,
)
from .generator import (
    FactoryOptions,
    MonotonicULIDGenerator,
    NonMonotonicULIDGenerator,
    ULIDGenerator,
    ulid,
    ulid_factory,
    ulid_factory_from_settings,
)
from .logging import setup_logging
from .timestamp import (
    TIME_MAX,
    current_millis,
    decode_datetime,
    decode_time,
    encode_time,
    is_ulid,
    validate_timestamp,
)

__all__ = [
    "ENCODING",
    "TIME_MAX",
    "FactoryOptions",
    "MonotonicULIDGenerator",
    "NonMonotonicULIDGenerator",
    "RandomSource",
    "ULIDDecodeError",
    "ULIDError",
    "ULIDFormatError",
    "ULIDGenerator",
    "ULIDLengthError",
    "ULIDOverflowError",
    "ULIDRangeError",
    "ULIDTypeError",
    "ULIDValueError",
    "crypto_random_bytes",
    "current_millis",
    "decode_datetime",
    "decode_integer",
    "decode_time",
    "encode_integer",
    "encode_random",
    "encode_time",
    "increment_base32",
    "is_ulid",
    "random_char",
    "setup_logging",
    "ulid",
    "ulid_factory",
    "ulid_factory_from_settings",
    "validate_timestamp",
]
