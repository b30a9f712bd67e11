from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from ..errors import ConfigurationError, LengthMismatch, RangeError
from .block import Block
from .codec import bits_to_int, int_to_bits
from .layers import PermutationLayer, SubstitutionLayer
from .registry import ComponentRegistry
from .spec import SPNSpec
from .validator import validate_spec

logger = logging.getLogger(__name__)


class BlockCipher:
    def encrypt_block(self, plaintext_block: str) -> str:  # pragma: no cover
        raise NotImplementedError

    def decrypt_block(self, ciphertext_block: str) -> str:  # pragma: no cover
        raise NotImplementedError


@dataclass(frozen=True)
class SPNCipher(BlockCipher):
    """Substitution-Permutation Network on ``n * m``-bit blocks.

    Encryption:
    1. Whitening: XOR with round key 0
    2. Rounds 1 .. r-1: substitute, permute, XOR round key i
    3. Final round: substitute, XOR round key r (no permutation)

    Decryption runs the same steps mirrored with the inverse layers.
    All state is fixed at construction; one instance can serve any number
    of callers.
    """
    spec: SPNSpec
    round_keys: Tuple[int, ...]
    sbox: SubstitutionLayer
    perm: PermutationLayer

    @property
    def n(self) -> int:
        return self.spec.symbol_bits

    @property
    def m(self) -> int:
        return self.spec.symbols_per_block

    @property
    def rounds(self) -> int:
        return self.spec.rounds

    @property
    def block_size_bits(self) -> int:
        return self.spec.block_size_bits

    def __post_init__(self):
        n, w = self.n, self.block_size_bits
        if len(self.round_keys) != self.rounds + 1:
            raise ConfigurationError(
                f"{self.rounds} rounds need {self.rounds + 1} round keys, got {len(self.round_keys)}"
            )
        if self.sbox.n != n:
            raise ConfigurationError(f"S-box works on {self.sbox.n}-bit symbols, block uses n={n}")
        if self.perm.width != w:
            raise ConfigurationError(f"permutation covers {self.perm.width} bits, block is {w} bits")
        for i, k in enumerate(self.round_keys):
            if k < 0 or k >> w:
                raise ConfigurationError(f"round key {i} does not fit in {w} bits")

    def round_key_blocks(self) -> Tuple[Block, ...]:
        return tuple(Block(k, self.n, self.m) for k in self.round_keys)

    def _check_int(self, value: int) -> None:
        if value < 0 or value >> self.block_size_bits:
            raise RangeError(f"{value} does not fit in a {self.block_size_bits}-bit block")

    def _check_bits(self, bits: str) -> int:
        if len(bits) != self.block_size_bits:
            raise LengthMismatch(f"Block must be {self.block_size_bits} bits, got {len(bits)}")
        return bits_to_int(bits)

    def encrypt_int(self, x: int) -> int:
        self._check_int(x)
        keys = self.round_keys
        x ^= keys[0]
        for r in range(1, self.rounds):
            x = self.sbox.substitute(x, self.m)
            x = self.perm.permute(x)
            x ^= keys[r]
        x = self.sbox.substitute(x, self.m)
        return x ^ keys[self.rounds]

    def decrypt_int(self, y: int) -> int:
        self._check_int(y)
        keys = self.round_keys
        y ^= keys[self.rounds]
        y = self.sbox.inverse_substitute(y, self.m)
        for r in range(self.rounds - 1, 0, -1):
            y ^= keys[r]
            y = self.perm.inverse_permute(y)
            y = self.sbox.inverse_substitute(y, self.m)
        return y ^ keys[0]

    def encrypt_block(self, plaintext_block: str) -> str:
        return int_to_bits(self.encrypt_int(self._check_bits(plaintext_block)), self.block_size_bits)

    def decrypt_block(self, ciphertext_block: str) -> str:
        return int_to_bits(self.decrypt_int(self._check_bits(ciphertext_block)), self.block_size_bits)

    def encrypt(self, block: Block) -> Block:
        if (block.n, block.m) != (self.n, self.m):
            raise LengthMismatch("block geometry does not match the cipher")
        return Block(self.encrypt_int(block.value), self.n, self.m)

    def decrypt(self, block: Block) -> Block:
        if (block.n, block.m) != (self.n, self.m):
            raise LengthMismatch("block geometry does not match the cipher")
        return Block(self.decrypt_int(block.value), self.n, self.m)


def build_cipher(spec: SPNSpec, registry: Optional[ComponentRegistry] = None) -> SPNCipher:
    reg = registry or ComponentRegistry()

    ok, errs = validate_spec(spec, reg)
    if not ok:
        raise ConfigurationError("; ".join(errs))

    n, m = spec.symbol_bits, spec.symbols_per_block

    if spec.sbox_table is not None:
        sbox_table = tuple(spec.sbox_table)
    else:
        sbox_table = tuple(reg.get(spec.components["sbox"]).build(n))

    if spec.perm_table is not None:
        perm_table = tuple(spec.perm_table)
    else:
        perm_table = tuple(reg.get(spec.components["perm"]).build(n, m))

    ks = reg.get(spec.components["key_schedule"]).build
    round_keys = tuple(ks(spec.master_key, rounds=spec.rounds, n=n, m=m))

    cipher = SPNCipher(
        spec=spec,
        round_keys=round_keys,
        sbox=SubstitutionLayer(sbox_table, n),
        perm=PermutationLayer(perm_table),
    )
    logger.debug(
        "built %s: n=%d m=%d rounds=%d sbox=%s perm=%s ks=%s",
        spec.name, n, m, spec.rounds,
        "custom" if spec.sbox_table is not None else spec.components["sbox"],
        "custom" if spec.perm_table is not None else spec.components["perm"],
        spec.components["key_schedule"],
    )
    return cipher
