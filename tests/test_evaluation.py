import json

import numpy as np
import pytest

from spnlab.cipher.builder import build_cipher
from spnlab.cipher.components_builtin import HEYS_SBOX, PRESENT_SBOX
from spnlab.cipher.cryptanalysis import (
    avalanche_plaintext,
    evaluate_cipher,
    flip_bit,
    hamming_distance,
    sbox_ddt,
    sbox_ddt_max,
    sbox_lat_max_abs,
)
from spnlab.cipher.spec import SPNSpec
from spnlab.evaluation import (
    EvaluationReport,
    analyze_all_sboxes,
    analyze_sbox,
    analyze_table,
    check_vectors,
    reference_spec,
    run_roundtrip_tests,
)
from spnlab.utils.repro import make_run_dir, read_json


def test_reference_vectors_pass():
    checks = check_vectors()
    assert [c.name for c in checks] == ["block encrypt", "block decrypt", "ctr decrypt"]
    assert all(c.ok for c in checks), [c.summary() for c in checks]


def test_roundtrip_random():
    result = run_roundtrip_tests(reference_spec([3, 10, 9, 4, 13, 6, 3, 15]), num_vectors=500)
    assert result.is_perfect
    assert result.total_vectors == 500
    assert result.success_rate == 1.0
    assert result.summary().startswith("[PASS]")


def test_roundtrip_exhaustive_small_block():
    spec = SPNSpec(master_key="101100111000", rounds=1, symbols_per_block=2, components={"perm": "perm.present"})
    result = run_roundtrip_tests(spec, exhaustive=True)
    assert result.total_vectors == 256
    assert result.passed == 256


def test_hamming_and_flip():
    assert hamming_distance(0b1010, 0b0110) == 2
    assert flip_bit("0000", 0) == "1000"
    with pytest.raises(IndexError):
        flip_bit("0000", 4)


def test_ddt_rows_sum_to_table_size():
    ddt = sbox_ddt(HEYS_SBOX)
    assert ddt.shape == (16, 16)
    assert np.all(ddt.sum(axis=1) == 16)
    assert ddt[0, 0] == 16


def test_known_sbox_properties():
    # the classic tutorial differential 0xB -> 0x2 holds for 8 of 16 inputs
    assert sbox_ddt(HEYS_SBOX)[0xB, 0x2] == 8
    assert sbox_ddt_max(PRESENT_SBOX) == 4
    assert sbox_lat_max_abs(PRESENT_SBOX) == 8


def test_analyze_sbox():
    res = analyze_sbox("sbox.present")
    assert res.is_bijective
    assert res.differential_uniformity == "good"
    assert res.linearity == "good"
    assert "bijective" in res.summary()


def test_analyze_table_flags_non_bijection():
    res = analyze_table("custom", [0] * 16)
    assert not res.is_bijective


def test_analyze_all_sboxes_skips_identity():
    ids = [r.component_id for r in analyze_all_sboxes()]
    assert "sbox.identity" not in ids
    assert "sbox.heys" in ids


def test_avalanche_is_reasonable():
    cipher = build_cipher(reference_spec([3, 10, 9, 4, 13, 6, 3, 15]))
    mean = avalanche_plaintext(cipher, trials=200)["mean"]
    assert 0.2 < mean < 0.8


def test_evaluate_cipher_keys():
    metrics = evaluate_cipher(reference_spec([3, 10, 9, 4, 13, 6, 3, 15]), trials=20)
    assert set(metrics) == {"block_size_bits", "key_size_bits", "rounds", "plaintext_avalanche", "key_avalanche"}
    assert 0.0 <= metrics["key_avalanche"]["mean"] <= 1.0


def test_report_serializes(tmp_path):
    report = EvaluationReport(
        vector_checks=check_vectors(),
        roundtrip_results=[run_roundtrip_tests(reference_spec([1, 1, 2, 8, 8, 12, 0, 0]), num_vectors=50)],
        sbox_results=analyze_all_sboxes(),
    )
    assert report.all_pass
    paths = make_run_dir(tmp_path, "selftest run")
    paths.save({"name": "selftest run"}, report.to_dict(), report.to_summary())
    data = read_json(paths.report_json)
    assert read_json(paths.spec_json) == {"name": "selftest run"}
    assert paths.summary_txt.read_text(encoding="utf-8") == report.to_summary()
    assert data["summary"]["all_pass"] is True
    assert "Reference vectors: 3/3 pass" in report.to_summary()
    assert paths.run_dir.name.endswith("selftest_run")
    json.dumps(report.to_dict())
