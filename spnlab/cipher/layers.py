"""Substitution and bit-permutation layers of the SPN.

Both layers hold their own validated copy of the table and derive the
inverse eagerly at construction. Blocks are handled as integers; bit
position 0 is the most significant bit of the block.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from ..errors import ConfigurationError, LengthMismatch, RangeError
from .block import Block


def invert_table(table: Sequence[int]) -> Tuple[int, ...]:
    """Return the inverse of a bijection on ``range(len(table))``.

    Raises ConfigurationError if ``table`` is not a total bijection.
    """
    size = len(table)
    inv: List[int] = [-1] * size
    for i, v in enumerate(table):
        if not isinstance(v, int) or v < 0 or v >= size:
            raise ConfigurationError(f"table entry {i} -> {v!r} is outside [0, {size})")
        if inv[v] != -1:
            raise ConfigurationError(f"table is not a bijection: {v} is hit by {inv[v]} and {i}")
        inv[v] = i
    return tuple(inv)


@dataclass(frozen=True)
class SubstitutionLayer:
    """Applies an n-bit S-box to each of the m symbols of a block."""
    table: Tuple[int, ...]
    n: int
    inverse_table: Tuple[int, ...] = field(init=False, repr=False)

    def __post_init__(self):
        table = tuple(self.table)
        if len(table) != 1 << self.n:
            raise ConfigurationError(
                f"S-box for n={self.n} needs {1 << self.n} entries, got {len(table)}"
            )
        object.__setattr__(self, "table", table)
        object.__setattr__(self, "inverse_table", invert_table(table))

    def lookup(self, x: int) -> int:
        if x < 0 or x >= len(self.table):
            raise RangeError(f"symbol {x} outside [0, {len(self.table)})")
        return self.table[x]

    def inverse_lookup(self, y: int) -> int:
        if y < 0 or y >= len(self.inverse_table):
            raise RangeError(f"symbol {y} outside [0, {len(self.inverse_table)})")
        return self.inverse_table[y]

    def _apply(self, value: int, m: int, tbl: Tuple[int, ...]) -> int:
        if value < 0 or value >> (self.n * m):
            raise RangeError(f"{value} does not fit in {m} symbols of {self.n} bits")
        mask = (1 << self.n) - 1
        out = 0
        for i in range(m):
            shift = self.n * (m - 1 - i)
            out |= tbl[(value >> shift) & mask] << shift
        return out

    def substitute(self, value: int, m: int) -> int:
        return self._apply(value, m, self.table)

    def inverse_substitute(self, value: int, m: int) -> int:
        return self._apply(value, m, self.inverse_table)

    def substitute_symbols(self, symbols: Sequence[int]) -> List[int]:
        return [self.lookup(s) for s in symbols]

    def inverse_substitute_symbols(self, symbols: Sequence[int]) -> List[int]:
        return [self.inverse_lookup(s) for s in symbols]

    def substitute_block(self, block: Block) -> Block:
        return Block(self.substitute(block.value, block.m), block.n, block.m)

    def inverse_substitute_block(self, block: Block) -> Block:
        return Block(self.inverse_substitute(block.value, block.m), block.n, block.m)


@dataclass(frozen=True)
class PermutationLayer:
    """Bit permutation over a ``width``-bit block.

    Input bit i is written to output position ``table[i]`` (a scatter).
    """
    table: Tuple[int, ...]
    inverse_table: Tuple[int, ...] = field(init=False, repr=False)

    def __post_init__(self):
        table = tuple(self.table)
        if not table:
            raise ConfigurationError("bit permutation must not be empty")
        object.__setattr__(self, "table", table)
        object.__setattr__(self, "inverse_table", invert_table(table))

    @property
    def width(self) -> int:
        return len(self.table)

    def _scatter(self, value: int, tbl: Tuple[int, ...]) -> int:
        w = len(tbl)
        if value < 0 or value >> w:
            raise RangeError(f"{value} does not fit in {w} bits")
        out = 0
        for i, dest in enumerate(tbl):
            if (value >> (w - 1 - i)) & 1:
                out |= 1 << (w - 1 - dest)
        return out

    def permute(self, value: int) -> int:
        return self._scatter(value, self.table)

    def inverse_permute(self, value: int) -> int:
        return self._scatter(value, self.inverse_table)

    def _scatter_bits(self, bits: Sequence[int], tbl: Tuple[int, ...]) -> List[int]:
        if len(bits) != self.width:
            raise LengthMismatch(f"expected {self.width} bits, got {len(bits)}")
        out = [0] * self.width
        for i, dest in enumerate(tbl):
            out[dest] = bits[i]
        return out

    def permute_bits(self, bits: Sequence[int]) -> List[int]:
        """Bit-array form of :meth:`permute` (one 0/1 entry per position)."""
        return self._scatter_bits(bits, self.table)

    def inverse_permute_bits(self, bits: Sequence[int]) -> List[int]:
        return self._scatter_bits(bits, self.inverse_table)

    def permute_block(self, block: Block) -> Block:
        return Block(self.permute(block.value), block.n, block.m)

    def inverse_permute_block(self, block: Block) -> Block:
        return Block(self.inverse_permute(block.value), block.n, block.m)
