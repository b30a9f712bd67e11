"""S-box differential and linear analysis.

Wraps sbox_ddt_max and sbox_lat_max_abs from spnlab.cipher.cryptanalysis
with structured result output and bijectivity checking.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional, Sequence

from spnlab.cipher.cryptanalysis import sbox_ddt_max, sbox_lat_max_abs
from spnlab.cipher.layers import invert_table
from spnlab.cipher.registry import ComponentRegistry
from spnlab.errors import ConfigurationError


@dataclass
class SBoxAnalysisResult:
    """Structured result of S-box differential/linear analysis."""
    component_id: str
    sbox_size: int              # 16 for a 4-bit S-box
    ddt_max: int                # Max DDT entry (ideal: 4 for 4-bit)
    lat_max_abs: int            # Max LAT absolute value (lower = better)
    is_bijective: bool          # InvS[S[x]] == x for every x
    differential_uniformity: str  # "good" / "fair" / "poor"
    linearity: str              # "good" / "fair" / "poor"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def summary(self) -> str:
        bij = "bijective" if self.is_bijective else "NOT bijective"
        return (
            f"{self.component_id} ({self.sbox_size}-entry): "
            f"DDT_max={self.ddt_max} ({self.differential_uniformity}), "
            f"LAT_max={self.lat_max_abs} ({self.linearity}), {bij}"
        )


def _check_bijectivity(table: Sequence[int]) -> bool:
    try:
        inv = invert_table(table)
    except ConfigurationError:
        return False
    return all(inv[table[x]] == x for x in range(len(table)))


def _rate(value: int, size: int, good: float, fair: float) -> str:
    # thresholds are given for 16-entry tables and scaled linearly
    scale = size / 16
    if value <= good * scale:
        return "good"
    if value <= fair * scale:
        return "fair"
    return "poor"


def analyze_table(component_id: str, table: Sequence[int]) -> SBoxAnalysisResult:
    table = list(table)
    size = len(table)
    ddt = sbox_ddt_max(table)
    lat = sbox_lat_max_abs(table)
    return SBoxAnalysisResult(
        component_id=component_id,
        sbox_size=size,
        ddt_max=ddt,
        lat_max_abs=lat,
        is_bijective=_check_bijectivity(table),
        differential_uniformity=_rate(ddt, size, 4, 6),
        linearity=_rate(lat, size, 8, 12),
    )


def analyze_sbox(
    component_id: str,
    registry: Optional[ComponentRegistry] = None,
    *,
    symbol_bits: int = 4,
) -> SBoxAnalysisResult:
    """Analyze a single S-box component for differential/linear properties.

    Args:
        component_id: Registry ID of the S-box component.
        registry: Optional component registry; uses default if not provided.
        symbol_bits: n used to build S-boxes that are not fixed-width.

    Returns:
        SBoxAnalysisResult with DDT max, LAT max, bijectivity, and ratings.
    """
    reg = registry or ComponentRegistry()

    if not reg.exists(component_id):
        raise ValueError(f"Unknown component: {component_id}")

    comp = reg.get(component_id)
    if comp.kind != "SBOX":
        raise ValueError(f"{component_id} is not an S-box")
    table = comp.build(comp.symbol_bits or symbol_bits)
    return analyze_table(component_id, table)


def analyze_all_sboxes(
    registry: Optional[ComponentRegistry] = None,
) -> List[SBoxAnalysisResult]:
    """Analyze all S-box components in the registry except the identity."""
    reg = registry or ComponentRegistry()
    results: List[SBoxAnalysisResult] = []
    for comp in reg.list_by_kind("SBOX"):
        if comp.component_id == "sbox.identity":
            continue
        results.append(analyze_sbox(comp.component_id, reg))
    return sorted(results, key=lambda r: r.component_id)
