"""Structured evaluation report builder.

Aggregates reference-vector checks, roundtrip tests, avalanche metrics and
S-box analysis into a single serializable report.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .roundtrip import RoundtripResult
from .sbox_analysis import SBoxAnalysisResult
from .vectors import VectorCheck


@dataclass
class EvaluationReport:
    """Complete evaluation report aggregating all analysis results."""
    timestamp: str = ""
    vector_checks: List[VectorCheck] = field(default_factory=list)
    roundtrip_results: List[RoundtripResult] = field(default_factory=list)
    sbox_results: List[SBoxAnalysisResult] = field(default_factory=list)
    avalanche: Optional[Dict[str, Any]] = None

    def __post_init__(self):
        if not self.timestamp:
            self.timestamp = datetime.now(timezone.utc).isoformat()

    @property
    def all_pass(self) -> bool:
        return (
            all(v.ok for v in self.vector_checks)
            and all(r.is_perfect for r in self.roundtrip_results)
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize full report for JSON export."""
        return {
            "timestamp": self.timestamp,
            "vectors": [v.to_dict() for v in self.vector_checks],
            "roundtrip": [r.to_dict() for r in self.roundtrip_results],
            "sbox": [s.to_dict() for s in self.sbox_results],
            "avalanche": self.avalanche,
            "summary": {
                "vectors_all_pass": all(v.ok for v in self.vector_checks),
                "roundtrip_all_pass": all(r.is_perfect for r in self.roundtrip_results),
                "all_pass": self.all_pass,
            },
        }

    def to_summary(self) -> str:
        lines = [f"Evaluation Report - {self.timestamp}", "=" * 50]

        if self.vector_checks:
            ok = sum(1 for v in self.vector_checks if v.ok)
            lines.append(f"\nReference vectors: {ok}/{len(self.vector_checks)} pass")
            for v in self.vector_checks:
                lines.append(f"  {v.summary()}")

        if self.roundtrip_results:
            lines.append("\nRoundtrip Tests:")
            for r in self.roundtrip_results:
                lines.append(f"  {r.summary()}")

        if self.avalanche:
            pt = self.avalanche["plaintext_avalanche"]["mean"]
            kk = self.avalanche["key_avalanche"]["mean"]
            lines.append(f"\nAvalanche: plaintext={pt:.4f}, key={kk:.4f} (ideal 0.5)")

        if self.sbox_results:
            lines.append("\nS-box analysis:")
            for s in self.sbox_results:
                lines.append(f"  {s.summary()}")

        return "\n".join(lines)
