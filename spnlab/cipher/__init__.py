"""Block cipher core: codec, layers, key schedules, round engine and CTR mode."""

from .block import Block
from .builder import BlockCipher, SPNCipher, build_cipher
from .codec import (
    add_to_bits,
    bits_to_int,
    bits_to_symbols,
    bits_to_text,
    int_to_bits,
    pad_for_blocks,
    split_into_blocks,
    symbols_to_bits,
    text_to_bits,
    xor_bits,
)
from .ctr import ctr_apply, ctr_decrypt_text, ctr_encrypt_text, keystream, random_iv
from .key_schedule import key_from_symbols, ks_sliding_window, ks_wide_shift
from .layers import PermutationLayer, SubstitutionLayer
from .registry import ComponentRegistry
from .spec import SPNSpec, default_spec
from .validator import validate_spec

__all__ = [
    "Block",
    "BlockCipher",
    "SPNCipher",
    "build_cipher",
    "add_to_bits",
    "bits_to_int",
    "bits_to_symbols",
    "bits_to_text",
    "int_to_bits",
    "pad_for_blocks",
    "split_into_blocks",
    "symbols_to_bits",
    "text_to_bits",
    "xor_bits",
    "ctr_apply",
    "ctr_decrypt_text",
    "ctr_encrypt_text",
    "keystream",
    "random_iv",
    "key_from_symbols",
    "ks_sliding_window",
    "ks_wide_shift",
    "PermutationLayer",
    "SubstitutionLayer",
    "ComponentRegistry",
    "SPNSpec",
    "default_spec",
    "validate_spec",
]
