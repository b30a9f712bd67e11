from __future__ import annotations

import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, Field, model_validator


# Key nibbles 3,10,9,4,13,6,3,15
DEFAULT_MASTER_KEY = "00111010100101001101011000111111"
DEFAULT_CTR_IV = "0000010011010010"


class Settings(BaseModel):
    # Cipher geometry
    rounds: int = Field(default=4, ge=1, le=64)
    symbol_bits: int = Field(default=4, ge=1, le=16, description="n: bits per S-box symbol")
    symbols_per_block: int = Field(default=4, ge=1, le=64, description="m: S-boxes per block")

    # Key material and components
    master_key: str = Field(default=DEFAULT_MASTER_KEY, description="Master key as a 0/1 string")
    sbox_id: str = Field(default="sbox.heys")
    perm_id: str = Field(default="perm.heys")
    key_schedule_id: str = Field(default="ks.sliding_window")

    # CTR mode
    ctr_iv: str = Field(default=DEFAULT_CTR_IV)
    ctr_workers: int = Field(default=1, ge=1, le=64)

    # Reproducibility
    global_seed: int = Field(default=1337)

    # Paths
    project_root: str = Field(default=os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir)))
    runs_dir: str = Field(default="runs")

    @model_validator(mode="after")
    def _check_key_and_iv(self) -> "Settings":
        block_bits = self.symbol_bits * self.symbols_per_block
        key_bits = self.symbol_bits * (self.rounds + self.symbols_per_block)
        for name in ("master_key", "ctr_iv"):
            if set(getattr(self, name)) - {"0", "1"}:
                raise ValueError(f"{name} must contain only '0' and '1'")
        if len(self.ctr_iv) != block_bits:
            raise ValueError(f"ctr_iv has {len(self.ctr_iv)} bits, block width is {block_bits}")
        if len(self.master_key) < key_bits:
            raise ValueError(f"master_key has {len(self.master_key)} bits, {key_bits} required")
        return self


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    # Load .env if present
    load_dotenv()

    return Settings(
        rounds=int(os.getenv("SPN_ROUNDS", "4")),
        symbol_bits=int(os.getenv("SPN_SYMBOL_BITS", "4")),
        symbols_per_block=int(os.getenv("SPN_SYMBOLS_PER_BLOCK", "4")),
        master_key=os.getenv("SPN_MASTER_KEY", DEFAULT_MASTER_KEY).strip(),
        sbox_id=os.getenv("SPN_SBOX", "sbox.heys"),
        perm_id=os.getenv("SPN_PERM", "perm.heys"),
        key_schedule_id=os.getenv("SPN_KEY_SCHEDULE", "ks.sliding_window"),
        ctr_iv=os.getenv("SPN_CTR_IV", DEFAULT_CTR_IV).strip(),
        ctr_workers=int(os.getenv("SPN_CTR_WORKERS", "1")),
        global_seed=int(os.getenv("GLOBAL_SEED", "1337")),
        runs_dir=os.getenv("SPN_RUNS_DIR", "runs"),
    )
