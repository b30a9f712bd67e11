from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from ..errors import LengthMismatch, RangeError
from .codec import bits_to_int, int_to_bits


@dataclass(frozen=True)
class Block:
    """One cipher block of ``m`` symbols of ``n`` bits.

    The integer is the only stored state; the symbol tuple and the bit string
    are derived views, so the three can never disagree.
    """
    value: int
    n: int
    m: int

    def __post_init__(self):
        if self.n < 1 or self.m < 1:
            raise LengthMismatch("block geometry must be positive")
        if self.value < 0 or self.value >> self.width:
            raise RangeError(f"{self.value} does not fit in a {self.width}-bit block")

    @property
    def width(self) -> int:
        return self.n * self.m

    @property
    def symbols(self) -> Tuple[int, ...]:
        mask = (1 << self.n) - 1
        return tuple(
            (self.value >> (self.n * (self.m - 1 - i))) & mask
            for i in range(self.m)
        )

    @property
    def bits(self) -> str:
        return int_to_bits(self.value, self.width)

    @classmethod
    def from_int(cls, value: int, n: int, m: int) -> "Block":
        return cls(value=value, n=n, m=m)

    @classmethod
    def from_bits(cls, bits: str, n: int, m: int) -> "Block":
        if len(bits) != n * m:
            raise LengthMismatch(f"block must be {n * m} bits, got {len(bits)}")
        return cls(value=bits_to_int(bits), n=n, m=m)

    @classmethod
    def from_symbols(cls, symbols: Sequence[int], n: int) -> "Block":
        if not symbols:
            raise LengthMismatch("a block needs at least one symbol")
        value = 0
        for s in symbols:
            if s < 0 or s >> n:
                raise RangeError(f"symbol {s} outside [0, {1 << n})")
            value = (value << n) | s
        return cls(value=value, n=n, m=len(symbols))

    def __int__(self) -> int:
        return self.value

    def __xor__(self, other: "Block") -> "Block":
        if not isinstance(other, Block):
            return NotImplemented
        if (self.n, self.m) != (other.n, other.m):
            raise LengthMismatch("cannot XOR blocks of different geometry")
        return Block(self.value ^ other.value, self.n, self.m)

    def __str__(self) -> str:
        return self.bits
