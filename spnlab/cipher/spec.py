from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from ..config import Settings, load_settings


DEFAULT_COMPONENTS: Dict[str, str] = {
    "sbox": "sbox.heys",
    "perm": "perm.heys",
    "key_schedule": "ks.sliding_window",
}


class SPNSpec(BaseModel):
    """Parameters of one SPN instance.

    ``components`` maps a stage (sbox, perm, key_schedule) to a registered
    component id. ``sbox_table`` / ``perm_table`` override the registry with
    explicit tables; they are validated for bijectivity when the cipher is
    built, not here.
    """

    name: str = Field(default="SPN-16", min_length=1, max_length=80)
    rounds: int = Field(default=4, ge=1, le=64)
    symbol_bits: int = Field(default=4, ge=1, le=16, description="n")
    symbols_per_block: int = Field(default=4, ge=1, le=64, description="m")
    master_key: str = Field(..., min_length=1, description="Master key as a 0/1 string")

    components: Dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_COMPONENTS))
    sbox_table: Optional[List[int]] = None
    perm_table: Optional[List[int]] = None

    notes: str = Field(default="")
    seed: int = Field(default=1337, description="Used for reproducible evaluation vectors")

    model_config = {"frozen": True}

    @field_validator("master_key")
    @classmethod
    def _key_is_bits(cls, v: str) -> str:
        v = v.strip()
        if set(v) - {"0", "1"}:
            raise ValueError("master_key must contain only '0' and '1'")
        return v

    @field_validator("components")
    @classmethod
    def _fill_components(cls, v: Dict[str, str]) -> Dict[str, str]:
        merged = dict(DEFAULT_COMPONENTS)
        merged.update(v)
        return merged

    @property
    def block_size_bits(self) -> int:
        return self.symbol_bits * self.symbols_per_block

    @property
    def key_size_bits(self) -> int:
        return len(self.master_key)

    @property
    def required_key_bits(self) -> int:
        return self.symbol_bits * (self.rounds + self.symbols_per_block)


def default_spec(settings: Optional[Settings] = None, **overrides) -> SPNSpec:
    """Build the spec described by the environment / .env settings."""
    s = settings or load_settings()
    fields = dict(
        rounds=s.rounds,
        symbol_bits=s.symbol_bits,
        symbols_per_block=s.symbols_per_block,
        master_key=s.master_key,
        components={
            "sbox": s.sbox_id,
            "perm": s.perm_id,
            "key_schedule": s.key_schedule_id,
        },
        seed=s.global_seed,
    )
    fields.update(overrides)
    return SPNSpec(**fields)
