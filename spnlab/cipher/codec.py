"""Bit-string codec: conversions between '0'/'1' strings, symbols, integers and text.

Bit strings are plain ``str`` objects made of '0' and '1', most significant
bit first. This is the wire format of the cipher: ciphertexts produced by
other implementations of the scheme are exchanged as such strings.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import logging
from typing import Iterable, List

from ..errors import EncodingError, LengthMismatch, RangeError

logger = logging.getLogger(__name__)

PADDING_MARKER = "1"
_BITS = frozenset("01")


def check_bits(bits: str) -> str:
    """Return ``bits`` unchanged, or raise if it holds anything but 0/1."""
    if not isinstance(bits, str):
        raise EncodingError(f"bit string must be str, got {type(bits).__name__}")
    if not _BITS.issuperset(bits):
        raise EncodingError("bit string may only contain '0' and '1'")
    return bits


def bits_to_int(bits: str) -> int:
    check_bits(bits)
    if not bits:
        raise LengthMismatch("empty bit string has no integer value")
    return int(bits, 2)


def int_to_bits(value: int, width: int) -> str:
    """Render ``value`` as exactly ``width`` bits (MSB first)."""
    if value < 0 or value >> width:
        raise RangeError(f"{value} does not fit in {width} bits")
    return format(value, f"0{width}b")


def bits_to_symbols(bits: str, n: int) -> List[int]:
    """Split ``bits`` into n-bit symbols.

    A short trailing chunk is right-padded with zeros, so ``"101"`` with
    ``n=4`` becomes ``[0b1010]``.
    """
    check_bits(bits)
    if n < 1:
        raise LengthMismatch("symbol width must be positive")
    out: List[int] = []
    for i in range(0, len(bits), n):
        chunk = bits[i:i + n]
        if len(chunk) < n:
            chunk = chunk.ljust(n, "0")
        out.append(int(chunk, 2))
    return out


def symbols_to_bits(symbols: Iterable[int], n: int) -> str:
    return "".join(int_to_bits(s, n) for s in symbols)


def xor_bits(a: str, b: str) -> str:
    """XOR two bit strings of equal length."""
    check_bits(a)
    check_bits(b)
    if len(a) != len(b):
        raise LengthMismatch(f"xor_bits length mismatch ({len(a)} != {len(b)})")
    return "".join("0" if x == y else "1" for x, y in zip(a, b))


def add_to_bits(bits: str, number: int) -> str:
    """Add ``number`` to ``bits`` modulo 2^len(bits), keeping the width."""
    width = len(bits)
    value = (bits_to_int(bits) + number) % (1 << width)
    return int_to_bits(value, width)


def text_to_bits(text: str) -> str:
    """Encode each character as its 8-bit code point."""
    out = []
    for pos, ch in enumerate(text):
        code = ord(ch)
        if code > 0xFF:
            raise EncodingError(f"character {ch!r} at position {pos} is wider than 8 bits")
        out.append(format(code, "08b"))
    return "".join(out)


def bits_to_text(bits: str, padding_marker: str = PADDING_MARKER) -> str:
    """Strip padding (last marker bit and everything after it) and decode 8-bit groups.

    When no marker is present there is nothing to recover and an empty
    string is returned. Trailing bits that do not fill a byte are ignored.
    """
    check_bits(bits)
    cut = bits.rfind(padding_marker)
    if cut == -1:
        logger.warning("no padding marker in %d-bit input, returning empty text", len(bits))
        return ""
    payload = bits[:cut]
    return "".join(chr(int(payload[i:i + 8], 2)) for i in range(0, len(payload) - 7, 8))


def pad_for_blocks(bits: str, block_width: int) -> str:
    """Append the marker bit, then zeros until the length is a multiple of ``block_width``."""
    check_bits(bits)
    if block_width < 1:
        raise LengthMismatch("block width must be positive")
    padded = bits + PADDING_MARKER
    remainder = len(padded) % block_width
    if remainder:
        padded += "0" * (block_width - remainder)
    return padded


def split_into_blocks(bits: str, block_width: int) -> List[str]:
    """Cut ``bits`` into ``block_width``-bit chunks; a short last chunk is zero-filled on the right."""
    check_bits(bits)
    if block_width < 1:
        raise LengthMismatch("block width must be positive")
    return [bits[i:i + block_width].ljust(block_width, "0") for i in range(0, len(bits), block_width)]


def split_exact(bits: str, block_width: int) -> List[str]:
    """Like :func:`split_into_blocks` but refuses input that is not block aligned."""
    check_bits(bits)
    if block_width < 1 or len(bits) % block_width:
        raise LengthMismatch(f"{len(bits)} bits is not a multiple of the {block_width}-bit block width")
    return [bits[i:i + block_width] for i in range(0, len(bits), block_width)]
