"""Counter (CTR) mode on top of the SPN block cipher.

A ciphertext stream is a list of block-width bit strings whose first entry
is the IV. Payload block i (1-based) is XORed with
``E(IV + (i - 1) mod 2^w)``. The same operation encrypts and decrypts, and
only the cipher's encrypt direction is ever used.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import logging
import secrets
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

from ..config import load_settings
from ..errors import LengthMismatch
from .builder import SPNCipher
from .codec import (
    bits_to_int,
    bits_to_text,
    int_to_bits,
    pad_for_blocks,
    split_exact,
    text_to_bits,
)

logger = logging.getLogger(__name__)


def random_iv(width: int) -> str:
    return int_to_bits(secrets.randbits(width), width)


def counter_values(iv: str, count: int) -> List[int]:
    """Counters for payload blocks 1..count: IV, IV+1, ... modulo 2^len(iv)."""
    base = bits_to_int(iv)
    modulus = 1 << len(iv)
    return [(base + i) % modulus for i in range(count)]


def keystream(cipher: SPNCipher, iv: str, count: int, *, workers: int = 1) -> List[int]:
    """Encrypt ``count`` consecutive counters starting at ``iv``."""
    if len(iv) != cipher.block_size_bits:
        raise LengthMismatch(f"IV must be {cipher.block_size_bits} bits, got {len(iv)}")
    counters = counter_values(iv, count)
    if workers > 1 and count > 1:
        # map() keeps input order, so results line up with block indices
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(cipher.encrypt_int, counters))
    return [cipher.encrypt_int(c) for c in counters]


def ctr_apply(cipher: SPNCipher, blocks: Sequence[str], *, workers: int = 1) -> str:
    """XOR payload blocks ``blocks[1:]`` with the keystream seeded by ``blocks[0]``.

    Returns the concatenated payload bits (the IV is not included).
    """
    if not blocks:
        raise LengthMismatch("CTR stream needs at least the IV block")
    width = cipher.block_size_bits
    for i, b in enumerate(blocks):
        if len(b) != width:
            raise LengthMismatch(f"block {i} has {len(b)} bits, expected {width}")

    iv, payload = blocks[0], blocks[1:]
    stream = keystream(cipher, iv, len(payload), workers=workers)
    logger.debug("ctr: %d payload blocks, iv=%s", len(payload), iv)
    return "".join(
        int_to_bits(bits_to_int(block) ^ ks, width)
        for block, ks in zip(payload, stream)
    )


def ctr_encrypt_bits(
    cipher: SPNCipher,
    bits: str,
    iv: Optional[str] = None,
    *,
    workers: Optional[int] = None,
) -> str:
    """Pad ``bits``, encrypt in CTR mode and return IV + ciphertext as one bit string."""
    settings = load_settings()
    iv = settings.ctr_iv if iv is None else iv
    workers = settings.ctr_workers if workers is None else workers

    width = cipher.block_size_bits
    blocks = split_exact(pad_for_blocks(bits, width), width)
    return iv + ctr_apply(cipher, [iv, *blocks], workers=workers)


def ctr_decrypt_bits(cipher: SPNCipher, ciphertext: str, *, workers: Optional[int] = None) -> str:
    """Inverse of :func:`ctr_encrypt_bits`; padding is left in place."""
    if workers is None:
        workers = load_settings().ctr_workers
    blocks = split_exact(ciphertext, cipher.block_size_bits)
    return ctr_apply(cipher, blocks, workers=workers)


def ctr_encrypt_text(
    cipher: SPNCipher,
    text: str,
    iv: Optional[str] = None,
    *,
    workers: Optional[int] = None,
) -> str:
    return ctr_encrypt_bits(cipher, text_to_bits(text), iv, workers=workers)


def ctr_decrypt_text(cipher: SPNCipher, ciphertext: str, *, workers: Optional[int] = None) -> str:
    return bits_to_text(ctr_decrypt_bits(cipher, ciphertext, workers=workers))
