"""Published test vectors for the 4-round, 16-bit reference instance.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Callable, Dict, List, Optional

from spnlab.cipher.builder import build_cipher
from spnlab.cipher.codec import bits_to_text, split_exact
from spnlab.cipher.ctr import ctr_apply
from spnlab.cipher.key_schedule import key_from_symbols
from spnlab.cipher.registry import ComponentRegistry
from spnlab.cipher.spec import SPNSpec
from spnlab.errors import SPNError


REFERENCE_BLOCK_VECTOR: Dict[str, Any] = {
    "key_symbols": [1, 1, 2, 8, 8, 12, 0, 0],
    "plaintext": "0001001010001111",
    "ciphertext": "1010111010110100",
}

REFERENCE_CTR_VECTOR: Dict[str, Any] = {
    "key_symbols": [3, 10, 9, 4, 13, 6, 3, 15],
    "ciphertext": (
        "0000010011010010"  # IV
        "0000101110111000"
        "0000001010001111"
        "1000111001111111"
        "0110000001010001"
        "0100001110100000"
        "0001001101100111"
        "0010101110110000"
    ),
    "plaintext": "Gut gemacht!",
}


@dataclass
class VectorCheck:
    name: str
    expected: str
    actual: Optional[str]
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.expected == self.actual

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["ok"] = self.ok
        return d

    def summary(self) -> str:
        status = "PASS" if self.ok else "FAIL"
        detail = self.error or f"expected={self.expected!r} actual={self.actual!r}"
        return f"[{status}] {self.name}: {detail}"


def reference_spec(key_symbols: List[int], **overrides) -> SPNSpec:
    fields = dict(
        name="SPN-16-reference",
        rounds=4,
        symbol_bits=4,
        symbols_per_block=4,
        master_key=key_from_symbols(key_symbols, 4),
    )
    fields.update(overrides)
    return SPNSpec(**fields)


def _run(name: str, expected: str, fn: Callable[[], str]) -> VectorCheck:
    try:
        return VectorCheck(name, expected, fn())
    except SPNError as exc:
        return VectorCheck(name, expected, None, error=str(exc))


def check_vectors(registry: Optional[ComponentRegistry] = None) -> List[VectorCheck]:
    """Run every reference vector; failures are reported, not raised."""
    reg = registry or ComponentRegistry()

    bv = REFERENCE_BLOCK_VECTOR
    block_cipher = build_cipher(reference_spec(bv["key_symbols"]), reg)

    cv = REFERENCE_CTR_VECTOR
    ctr_cipher = build_cipher(reference_spec(cv["key_symbols"]), reg)

    def ctr_decrypt() -> str:
        blocks = split_exact(cv["ciphertext"], ctr_cipher.block_size_bits)
        return bits_to_text(ctr_apply(ctr_cipher, blocks))

    return [
        _run("block encrypt", bv["ciphertext"], lambda: block_cipher.encrypt_block(bv["plaintext"])),
        _run("block decrypt", bv["plaintext"], lambda: block_cipher.decrypt_block(bv["ciphertext"])),
        _run("ctr decrypt", cv["plaintext"], ctr_decrypt),
    ]
