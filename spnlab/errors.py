"""Exception types raised by spnlab.

All of them derive from ValueError so callers that only care about
"bad input" can keep catching that.
"""
from __future__ import annotations


class SPNError(ValueError):
    """Base class for every error raised by the cipher core."""


class ConfigurationError(SPNError):
    """Non-bijective table, unknown component or a master key that is too short."""


class LengthMismatch(SPNError):
    """Bit string width does not fit the block/symbol geometry, or XOR operands differ."""


class RangeError(SPNError):
    """A symbol value lies outside [0, 2^n)."""


class EncodingError(SPNError):
    """Text or bit string contains characters the codec cannot represent."""
