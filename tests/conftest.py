import sys
from pathlib import Path

import pytest

# Ensure project root is on path for spnlab imports
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from spnlab.cipher.builder import build_cipher
from spnlab.config import load_settings
from spnlab.evaluation.vectors import REFERENCE_BLOCK_VECTOR, REFERENCE_CTR_VECTOR, reference_spec


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    for name in ("SPN_ROUNDS", "SPN_SYMBOL_BITS", "SPN_SYMBOLS_PER_BLOCK", "SPN_MASTER_KEY",
                 "SPN_SBOX", "SPN_PERM", "SPN_KEY_SCHEDULE", "SPN_CTR_IV", "SPN_CTR_WORKERS"):
        monkeypatch.delenv(name, raising=False)
    load_settings.cache_clear()
    yield
    load_settings.cache_clear()


@pytest.fixture
def test_key_cipher():
    """Cipher keyed with the block test-vector key 1,1,2,8,8,12,0,0."""
    return build_cipher(reference_spec(REFERENCE_BLOCK_VECTOR["key_symbols"]))


@pytest.fixture
def default_key_cipher():
    """Cipher keyed with the default key 3,10,9,4,13,6,3,15."""
    return build_cipher(reference_spec(REFERENCE_CTR_VECTOR["key_symbols"]))
