import pytest
from pydantic import ValidationError

from spnlab.cipher.builder import build_cipher
from spnlab.cipher.spec import SPNSpec, default_spec
from spnlab.cipher.validator import validate_spec
from spnlab.config import DEFAULT_MASTER_KEY, Settings, load_settings


def test_settings_defaults():
    s = load_settings()
    assert s.rounds == 4
    assert s.symbol_bits == 4
    assert s.symbols_per_block == 4
    assert s.master_key == DEFAULT_MASTER_KEY
    assert s.key_schedule_id == "ks.sliding_window"


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("SPN_ROUNDS", "6")
    monkeypatch.setenv("SPN_SBOX", "sbox.present")
    monkeypatch.setenv("SPN_MASTER_KEY", "1" * 40)
    load_settings.cache_clear()

    spec = default_spec()
    assert spec.rounds == 6
    assert spec.components["sbox"] == "sbox.present"
    assert spec.key_size_bits == 40
    build_cipher(spec)


def test_settings_field_constraints():
    with pytest.raises(ValidationError):
        Settings(rounds=0)
    with pytest.raises(ValidationError):
        Settings(ctr_workers=0)


def test_default_spec_overrides():
    spec = default_spec(Settings(), rounds=2, name="short")
    assert spec.rounds == 2
    assert spec.name == "short"
    assert spec.block_size_bits == 16
    assert spec.required_key_bits == 24


def test_spec_rejects_non_binary_key():
    with pytest.raises(ValidationError):
        SPNSpec(master_key="0011abc")


def test_spec_fills_missing_components():
    spec = SPNSpec(master_key="0" * 32, components={"sbox": "sbox.gift"})
    assert spec.components == {
        "sbox": "sbox.gift",
        "perm": "perm.heys",
        "key_schedule": "ks.sliding_window",
    }


def test_spec_is_immutable():
    spec = SPNSpec(master_key="0" * 32)
    with pytest.raises(ValidationError):
        spec.rounds = 5


def test_validate_spec_collects_every_error():
    spec = SPNSpec(
        master_key="0" * 8,
        components={"sbox": "sbox.nope", "key_schedule": "ks.nope"},
        perm_table=[0] * 16,
    )
    ok, errs = validate_spec(spec)
    assert not ok
    assert len(errs) == 4


def test_validate_spec_ok_for_defaults():
    ok, errs = validate_spec(default_spec(Settings()))
    assert ok
    assert errs == []


def test_settings_reject_iv_of_wrong_width():
    with pytest.raises(ValidationError, match="ctr_iv"):
        Settings(symbols_per_block=8, master_key="0" * 48)
    with pytest.raises(ValidationError, match="ctr_iv"):
        Settings(ctr_iv="0000010011010")
    Settings(symbols_per_block=8, master_key="0" * 48, ctr_iv="0" * 32)


def test_settings_reject_non_binary_iv_and_key():
    with pytest.raises(ValidationError, match="ctr_iv"):
        Settings(ctr_iv="000001001101001x")
    with pytest.raises(ValidationError, match="master_key"):
        Settings(master_key="2" * 32)


def test_settings_reject_short_master_key():
    with pytest.raises(ValidationError, match="40 required"):
        Settings(rounds=6)
    Settings(rounds=6, master_key="0" * 40)


def test_wider_block_from_environment(monkeypatch):
    from spnlab.cipher.ctr import ctr_decrypt_text, ctr_encrypt_text

    monkeypatch.setenv("SPN_SYMBOLS_PER_BLOCK", "8")
    monkeypatch.setenv("SPN_PERM", "perm.present")
    monkeypatch.setenv("SPN_MASTER_KEY", "01" * 24)
    load_settings.cache_clear()
    with pytest.raises(ValidationError, match="ctr_iv"):
        load_settings()

    monkeypatch.setenv("SPN_CTR_IV", "0" * 16 + "0000010011010010")
    load_settings.cache_clear()
    cipher = build_cipher(default_spec())
    ct = ctr_encrypt_text(cipher, "hi")
    assert len(ct) % 32 == 0
    assert ctr_decrypt_text(cipher, ct) == "hi"
