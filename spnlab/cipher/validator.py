from __future__ import annotations

from typing import List, Optional, Tuple

from ..errors import ConfigurationError
from .layers import invert_table
from .registry import ComponentRegistry
from .spec import SPNSpec


def _check_bijection(label: str, table: List[int], size: int, errs: List[str]) -> None:
    if len(table) != size:
        errs.append(f"{label} needs {size} entries, got {len(table)}")
        return
    try:
        invert_table(table)
    except ConfigurationError as exc:
        errs.append(f"{label}: {exc}")


def validate_spec(spec: SPNSpec, registry: Optional[ComponentRegistry] = None) -> Tuple[bool, List[str]]:
    reg = registry or ComponentRegistry()
    errs: List[str] = []
    n, m = spec.symbol_bits, spec.symbols_per_block

    if spec.key_size_bits < spec.required_key_bits:
        errs.append(
            f"master_key has {spec.key_size_bits} bits, "
            f"{spec.required_key_bits} required (n*(rounds+m))"
        )

    ks_id = spec.components["key_schedule"]
    if not reg.exists(ks_id):
        errs.append(f"Unknown key_schedule component: {ks_id}")
    elif reg.get(ks_id).kind != "KEY_SCHEDULE":
        errs.append(f"{ks_id} is not a key schedule")

    if spec.sbox_table is not None:
        _check_bijection("sbox_table", spec.sbox_table, 1 << n, errs)
    else:
        cid = spec.components["sbox"]
        if not reg.exists(cid):
            errs.append(f"Unknown component sbox: {cid}")
        else:
            comp = reg.get(cid)
            if comp.kind != "SBOX":
                errs.append(f"{cid} is not an S-box")
            elif comp.symbol_bits is not None and comp.symbol_bits != n:
                errs.append(f"{cid} is a {comp.symbol_bits}-bit S-box, spec uses symbol_bits={n}")

    if spec.perm_table is not None:
        _check_bijection("perm_table", spec.perm_table, n * m, errs)
    else:
        cid = spec.components["perm"]
        if not reg.exists(cid):
            errs.append(f"Unknown component perm: {cid}")
        elif reg.get(cid).kind != "PERM":
            errs.append(f"{cid} is not a bit permutation")
        else:
            try:
                _check_bijection(cid, list(reg.get(cid).build(n, m)), n * m, errs)
            except ConfigurationError as exc:
                errs.append(str(exc))

    return (len(errs) == 0), errs
