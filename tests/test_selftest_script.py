import importlib.util
from pathlib import Path

import pytest

_SCRIPT = Path(__file__).parent.parent / "scripts" / "run_selftest.py"


@pytest.fixture(scope="module")
def selftest():
    spec = importlib.util.spec_from_file_location("run_selftest", _SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_default_run_passes(selftest, capsys):
    assert selftest.main(["--vectors", "50"]) == 0
    assert "Reference vectors: 3/3 pass" in capsys.readouterr().out


def test_help_examples_pass(selftest):
    assert selftest.main(["--rounds", "2", "--sbox", "sbox.present", "--no-vectors", "--vectors", "50"]) == 0
    key = "0011101010010100110101100011111100111010"
    assert selftest.main(["--rounds", "6", "--master-key", key, "--no-vectors", "--vectors", "50"]) == 0


def test_key_too_short_for_rounds(selftest):
    assert selftest.main(["--rounds", "6", "--no-vectors", "--vectors", "10"]) == 2


def test_out_of_range_rounds(selftest):
    assert selftest.main(["--rounds", "0", "--no-vectors", "--vectors", "10"]) == 2


def test_bad_environment(selftest, monkeypatch):
    monkeypatch.setenv("SPN_CTR_IV", "0101")
    assert selftest.main(["--no-vectors", "--vectors", "10"]) == 2


def test_output_dir(selftest, tmp_path):
    assert selftest.main(["--no-vectors", "--vectors", "10", "--output-dir", str(tmp_path)]) == 0
    (run_dir,) = list(tmp_path.iterdir())
    assert (run_dir / "report.json").exists()
    assert (run_dir / "summary.txt").exists()
    assert (run_dir / "spn_spec.json").exists()
