from __future__ import annotations

import random
from typing import Dict, Sequence

import numpy as np

from .builder import SPNCipher, build_cipher
from .spec import SPNSpec


def hamming_distance(a: int, b: int) -> int:
    return (a ^ b).bit_count()


def flip_bit(bits: str, bit_index: int) -> str:
    """Flip position ``bit_index`` (0 = leftmost) of a bit string."""
    if bit_index < 0 or bit_index >= len(bits):
        raise IndexError("bit_index out of range")
    flipped = "1" if bits[bit_index] == "0" else "0"
    return bits[:bit_index] + flipped + bits[bit_index + 1:]


def _rand_bits(rng: random.Random, n: int) -> str:
    return format(rng.getrandbits(n), f"0{n}b")


def avalanche_plaintext(
    cipher: SPNCipher,
    *,
    trials: int = 200,
    flips_per_trial: int = 1,
    seed: int = 1337,
) -> Dict[str, float]:
    rng = random.Random(seed)
    w = cipher.block_size_bits
    total_frac = 0.0
    for _ in range(trials):
        pt = rng.getrandbits(w)
        ct = cipher.encrypt_int(pt)
        for _ in range(flips_per_trial):
            pt2 = pt ^ (1 << rng.randrange(0, w))
            total_frac += hamming_distance(ct, cipher.encrypt_int(pt2)) / w
    denom = trials * flips_per_trial
    return {
        "mean": total_frac / denom if denom else 0.0,
    }


def avalanche_key(
    spec: SPNSpec,
    *,
    trials: int = 200,
    flips_per_trial: int = 1,
    seed: int = 1337,
) -> Dict[str, float]:
    """Flip one master-key bit and measure the change of the ciphertext.

    Each flipped key needs its own schedule, so this rebuilds the cipher.
    """
    rng = random.Random(seed + 1)
    w = spec.block_size_bits
    key_bits = spec.key_size_bits
    total_frac = 0.0
    for _ in range(trials):
        key = _rand_bits(rng, key_bits)
        pt = rng.getrandbits(w)
        ct = build_cipher(spec.model_copy(update={"master_key": key})).encrypt_int(pt)
        for _ in range(flips_per_trial):
            key2 = flip_bit(key, rng.randrange(0, key_bits))
            ct2 = build_cipher(spec.model_copy(update={"master_key": key2})).encrypt_int(pt)
            total_frac += hamming_distance(ct, ct2) / w
    denom = trials * flips_per_trial
    return {
        "mean": total_frac / denom if denom else 0.0,
    }


def sbox_ddt(sbox: Sequence[int]) -> np.ndarray:
    """Difference distribution table: ddt[dx, dy] = #{x : S(x) ^ S(x ^ dx) == dy}."""
    size = len(sbox)
    table = np.asarray(sbox, dtype=np.int64)
    xs = np.arange(size)
    ddt = np.zeros((size, size), dtype=np.int64)
    for dx in range(size):
        dy = table ^ table[xs ^ dx]
        ddt[dx] = np.bincount(dy, minlength=size)
    return ddt


def sbox_ddt_max(sbox: Sequence[int]) -> int:
    """Return max entry in DDT excluding dx=0."""
    if len(sbox) < 2:
        return 0
    return int(sbox_ddt(sbox)[1:].max())


def sbox_lat(sbox: Sequence[int]) -> np.ndarray:
    """Walsh-style linear approximation table: sum over x of (-1)^(a.x ^ b.S(x))."""
    size = len(sbox)
    table = np.asarray(sbox, dtype=np.int64)
    xs = np.arange(size)

    def parity(v: np.ndarray) -> np.ndarray:
        bits = np.zeros_like(v)
        work = v.copy()
        while work.any():
            bits ^= work & 1
            work >>= 1
        return bits

    lat = np.zeros((size, size), dtype=np.int64)
    for a in range(size):
        ax = parity(xs & a)
        for b in range(size):
            bx = parity(table & b)
            lat[a, b] = int(np.sum(1 - 2 * (ax ^ bx)))
    return lat


def sbox_lat_max_abs(sbox: Sequence[int]) -> int:
    """Return max absolute Walsh value for non-trivial masks."""
    if len(sbox) < 2:
        return 0
    return int(np.abs(sbox_lat(sbox)[1:, 1:]).max())


def evaluate_cipher(spec: SPNSpec, *, trials: int = 200) -> Dict[str, object]:
    cipher = build_cipher(spec)
    pt = avalanche_plaintext(cipher, trials=trials, flips_per_trial=1, seed=spec.seed)
    kk = avalanche_key(spec, trials=trials, flips_per_trial=1, seed=spec.seed)
    return {
        "block_size_bits": spec.block_size_bits,
        "key_size_bits": spec.key_size_bits,
        "rounds": spec.rounds,
        "plaintext_avalanche": pt,
        "key_avalanche": kk,
    }
