"""Exception types raised by ulid_workers.

Every error derives from ``ULIDError`` and from the closest builtin, so callers
may catch either the package base or e.g. ``ValueError``.
"""

from __future__ import annotations


class ULIDError(Exception):
    """Base class for all ULID errors."""

    pass


class ULIDTypeError(ULIDError, TypeError):
    """Raised when a value is not a number where a number was required."""

    pass


class ULIDRangeError(ULIDError, ValueError):
    """Raised when a number falls outside the representable range."""

    pass


class ULIDValueError(ULIDError, ValueError):
    """Raised when a number has a fractional part where an integer was required."""

    pass


class ULIDFormatError(ULIDError, ValueError):
    """Raised when a ULID string has the wrong shape."""

    pass


class ULIDDecodeError(ULIDError, ValueError):
    """Raised when a string contains a character outside the Base32 alphabet."""

    def __init__(self, char: str, message: str | None = None):
        self.char = char
        super().__init__(message or f"Invalid character: {char}")


class ULIDLengthError(ULIDError, ValueError):
    """Raised when a fixed-width field has the wrong length."""

    pass


class ULIDOverflowError(ULIDError, OverflowError):
    """Raised when incrementing a field that is already at its maximum."""

    pass
