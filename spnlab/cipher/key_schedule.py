"""Round-key derivations.

Every schedule takes the master key as a bit string and returns
``rounds + 1`` round keys, each an ``n * m``-bit integer.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

from typing import List, Sequence

from ..errors import ConfigurationError
from .codec import bits_to_int, bits_to_symbols, check_bits, symbols_to_bits


def required_key_bits(*, rounds: int, n: int, m: int) -> int:
    return n * (rounds + m)


def key_from_symbols(symbols: Sequence[int], n: int = 4) -> str:
    """Build a master-key bit string from its symbols, e.g. ``[3, 10, 9, 4, 13, 6, 3, 15]``."""
    return symbols_to_bits(symbols, n)


def _check_key(master_key: str, *, rounds: int, n: int, m: int) -> None:
    check_bits(master_key)
    need = required_key_bits(rounds=rounds, n=n, m=m)
    if len(master_key) < need:
        raise ConfigurationError(
            f"master key has {len(master_key)} bits, {need} needed for rounds={rounds}, n={n}, m={m}"
        )


def ks_sliding_window(master_key: str, *, rounds: int, n: int, m: int) -> List[int]:
    """Round key i is the m consecutive key symbols starting at symbol i."""
    _check_key(master_key, rounds=rounds, n=n, m=m)
    symbols = bits_to_symbols(master_key, n)
    keys: List[int] = []
    for r in range(rounds + 1):
        value = 0
        for s in symbols[r:r + m]:
            value = (value << n) | s
        keys.append(value)
    return keys


def ks_wide_shift(master_key: str, *, rounds: int, n: int, m: int) -> List[int]:
    """Round key i is the low n*m bits of the key integer shifted right by n*i."""
    _check_key(master_key, rounds=rounds, n=n, m=m)
    key = bits_to_int(master_key)
    mask = (1 << (n * m)) - 1
    return [(key >> (n * r)) & mask for r in range(rounds + 1)]
