"""spnlab: a small Substitution-Permutation Network with a CTR stream mode.

Research / education only. Do NOT use in production.
"""

from .errors import ConfigurationError, EncodingError, LengthMismatch, RangeError, SPNError

__version__ = "0.3.0"

__all__ = [
    "ConfigurationError",
    "EncodingError",
    "LengthMismatch",
    "RangeError",
    "SPNError",
    "__version__",
]
