"""Built-in SPN components: S-boxes, bit permutations and key schedules.

Each component carries a ``build`` callable:
- SBOX:          build(n) -> table of 2^n entries
- PERM:          build(n, m) -> table of n*m bit positions
- KEY_SCHEDULE:  build(master_key, rounds=, n=, m=) -> list of round keys

Research / education only. Do NOT use in production.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from ..errors import ConfigurationError
from .key_schedule import ks_sliding_window, ks_wide_shift


# ============================================================================
# 4-BIT S-BOXES
# ============================================================================

# Heys' tutorial S-box (first row of DES S1)
HEYS_SBOX: Tuple[int, ...] = (0xE, 0x4, 0xD, 0x1, 0x2, 0xF, 0xB, 0x8,
                              0x3, 0xA, 0x6, 0xC, 0x5, 0x9, 0x0, 0x7)

PRESENT_SBOX: Tuple[int, ...] = (0xC, 0x5, 0x6, 0xB, 0x9, 0x0, 0xA, 0xD,
                                 0x3, 0xE, 0xF, 0x8, 0x4, 0x7, 0x1, 0x2)

GIFT_SBOX: Tuple[int, ...] = (0x1, 0xA, 0x4, 0xC, 0x6, 0xF, 0x3, 0x9,
                              0x2, 0xD, 0xB, 0x7, 0x5, 0x0, 0x8, 0xE)

SERPENT_S0: Tuple[int, ...] = (3, 8, 15, 1, 10, 6, 5, 11, 14, 13, 4, 2, 7, 0, 9, 12)


def _fixed_sbox(name: str, table: Tuple[int, ...], width: int) -> Callable[[int], Tuple[int, ...]]:
    def build(n: int) -> Tuple[int, ...]:
        if n != width:
            raise ConfigurationError(f"{name} is a {width}-bit S-box, cipher uses n={n}")
        return table
    build.__name__ = f"sbox_{name}"
    build.__doc__ = f"{name} {width}-bit S-box."
    return build


sbox_heys = _fixed_sbox("heys", HEYS_SBOX, 4)
sbox_present = _fixed_sbox("present", PRESENT_SBOX, 4)
sbox_gift = _fixed_sbox("gift", GIFT_SBOX, 4)
sbox_serpent = _fixed_sbox("serpent", SERPENT_S0, 4)


def sbox_identity(n: int) -> Tuple[int, ...]:
    """Identity S-box (no substitution)."""
    return tuple(range(1 << n))


# ============================================================================
# BIT PERMUTATIONS
# ============================================================================

def perm_heys(n: int, m: int) -> Tuple[int, ...]:
    """Transpose: bit b of symbol s goes to bit s of symbol b.

    For n = m = 4 this is (0, 4, 8, 12, 1, 5, 9, 13, 2, 6, 10, 14, 3, 7, 11, 15).
    """
    if n != m:
        raise ConfigurationError(f"perm.heys needs a square block (n == m), got n={n}, m={m}")
    return tuple((i % n) * m + i // n for i in range(n * m))


def perm_present(n: int, m: int) -> Tuple[int, ...]:
    """PRESENT-style stride: P(i) = i*m mod (n*m - 1), last bit fixed.

    gcd(m, n*m - 1) == 1, so this is a bijection for every geometry.
    """
    w = n * m
    if w == 1:
        return (0,)
    return tuple((i * m) % (w - 1) if i < w - 1 else w - 1 for i in range(w))


def perm_identity(n: int, m: int) -> Tuple[int, ...]:
    """Identity permutation (no change)."""
    return tuple(range(n * m))


# ============================================================================
# COMPONENT REGISTRY
# ============================================================================

@dataclass(frozen=True)
class Component:
    """A reusable SPN component."""
    component_id: str
    kind: str  # SBOX, PERM, KEY_SCHEDULE
    description: str
    build: Callable
    symbol_bits: Optional[int] = None  # fixed n for table S-boxes


def builtin_components() -> Dict[str, Component]:
    """Return all built-in cipher components."""
    comps: Dict[str, Component] = {}

    # ========== KEY SCHEDULES ==========
    comps["ks.sliding_window"] = Component(
        component_id="ks.sliding_window",
        kind="KEY_SCHEDULE",
        description="Round key i = master-key symbols [i, i+m)",
        build=ks_sliding_window,
    )
    comps["ks.wide_shift"] = Component(
        component_id="ks.wide_shift",
        kind="KEY_SCHEDULE",
        description="Round key i = low n*m bits of (key >> n*i)",
        build=ks_wide_shift,
    )

    # ========== S-BOXES ==========
    comps["sbox.heys"] = Component(
        component_id="sbox.heys",
        kind="SBOX",
        description="Heys tutorial 4-bit S-box",
        build=sbox_heys,
        symbol_bits=4,
    )
    comps["sbox.present"] = Component(
        component_id="sbox.present",
        kind="SBOX",
        description="PRESENT 4-bit S-box",
        build=sbox_present,
        symbol_bits=4,
    )
    comps["sbox.gift"] = Component(
        component_id="sbox.gift",
        kind="SBOX",
        description="GIFT 4-bit S-box",
        build=sbox_gift,
        symbol_bits=4,
    )
    comps["sbox.serpent"] = Component(
        component_id="sbox.serpent",
        kind="SBOX",
        description="Serpent S0 4-bit S-box",
        build=sbox_serpent,
        symbol_bits=4,
    )
    comps["sbox.identity"] = Component(
        component_id="sbox.identity",
        kind="SBOX",
        description="Identity S-box (no substitution)",
        build=sbox_identity,
    )

    # ========== PERMUTATIONS ==========
    comps["perm.heys"] = Component(
        component_id="perm.heys",
        kind="PERM",
        description="Heys transpose permutation (requires n == m)",
        build=perm_heys,
    )
    comps["perm.present"] = Component(
        component_id="perm.present",
        kind="PERM",
        description="PRESENT-style stride permutation, any geometry",
        build=perm_present,
    )
    comps["perm.identity"] = Component(
        component_id="perm.identity",
        kind="PERM",
        description="Identity permutation (no change)",
        build=perm_identity,
    )

    return comps
