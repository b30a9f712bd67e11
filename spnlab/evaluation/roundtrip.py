"""Algebraic unit testing: roundtrip verification P = D(E(P)).

Checks random blocks, or every block of the width in exhaustive mode,
and records the vectors where decryption fails to invert encryption.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Iterable, List, Optional

from spnlab.cipher.builder import build_cipher
from spnlab.cipher.codec import int_to_bits
from spnlab.cipher.registry import ComponentRegistry
from spnlab.cipher.spec import SPNSpec
from spnlab.errors import SPNError

logger = logging.getLogger(__name__)


@dataclass
class RoundtripFailure:
    """Details of a single failed roundtrip test vector."""
    vector_index: int
    plaintext_bits: str
    ciphertext_bits: str
    decrypted_bits: str      # What decrypt returned (should equal plaintext)
    error: Optional[str]     # Exception message if decrypt/encrypt threw


@dataclass
class RoundtripResult:
    """Aggregate result of roundtrip testing for one cipher spec."""
    name: str
    block_size_bits: int
    rounds: int
    key_schedule: str
    total_vectors: int
    passed: int
    failed: int
    exhaustive: bool = False
    failures: List[RoundtripFailure] = field(default_factory=list)
    elapsed_seconds: float = 0.0
    seed: int = 1337

    @property
    def success_rate(self) -> float:
        return self.passed / self.total_vectors if self.total_vectors > 0 else 0.0

    @property
    def is_perfect(self) -> bool:
        return self.failed == 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def summary(self) -> str:
        status = "PASS" if self.is_perfect else "FAIL"
        mode = "exhaustive" if self.exhaustive else "random"
        return (
            f"[{status}] {self.name} ({mode}): "
            f"{self.passed}/{self.total_vectors} vectors passed "
            f"({self.elapsed_seconds:.2f}s)"
        )


def run_roundtrip_tests(
    spec: SPNSpec,
    *,
    num_vectors: int = 1000,
    seed: int = 1337,
    exhaustive: bool = False,
    max_failures_recorded: int = 10,
    registry: Optional[ComponentRegistry] = None,
) -> RoundtripResult:
    """Run roundtrip verification P = D(E(P)).

    Args:
        spec: Cipher specification to test.
        num_vectors: Number of random blocks (ignored when exhaustive).
        seed: Random seed for deterministic reproducibility.
        exhaustive: Test all 2^(n*m) blocks instead of random ones.
        max_failures_recorded: Maximum number of failure details to keep.
        registry: Optional component registry; uses default if not provided.

    Returns:
        RoundtripResult with pass/fail counts and failure details.
    """
    cipher = build_cipher(spec, registry or ComponentRegistry())
    width = spec.block_size_bits

    if exhaustive:
        total = 1 << width
        vectors: Iterable[int] = range(total)
    else:
        total = num_vectors
        rng = random.Random(seed)
        vectors = (rng.getrandbits(width) for _ in range(num_vectors))

    passed = 0
    failed = 0
    failures: List[RoundtripFailure] = []

    start = time.perf_counter()

    for i, pt in enumerate(vectors):
        try:
            ct = cipher.encrypt_int(pt)
            pt2 = cipher.decrypt_int(ct)
        except SPNError as exc:
            failed += 1
            if len(failures) < max_failures_recorded:
                failures.append(RoundtripFailure(
                    vector_index=i,
                    plaintext_bits=int_to_bits(pt, width),
                    ciphertext_bits="<error>",
                    decrypted_bits="<error>",
                    error=str(exc),
                ))
            continue

        if pt == pt2:
            passed += 1
        else:
            failed += 1
            if len(failures) < max_failures_recorded:
                failures.append(RoundtripFailure(
                    vector_index=i,
                    plaintext_bits=int_to_bits(pt, width),
                    ciphertext_bits=int_to_bits(ct, width),
                    decrypted_bits=int_to_bits(pt2, width),
                    error=None,
                ))

    elapsed = time.perf_counter() - start
    if failed:
        logger.warning("%s: %d/%d roundtrip vectors failed", spec.name, failed, total)

    return RoundtripResult(
        name=spec.name,
        block_size_bits=width,
        rounds=spec.rounds,
        key_schedule=spec.components["key_schedule"],
        total_vectors=total,
        passed=passed,
        failed=failed,
        exhaustive=exhaustive,
        failures=failures,
        elapsed_seconds=round(elapsed, 4),
        seed=seed,
    )
